"""
idf-tools: Read and write IDF 3.0 board, panel and library files.

IDF (Intermediate Data Format) 3.0 carries board outlines, component
placements and component geometry between ECAD and MCAD tools.

Modules:
    idf30: Tokenizer, decoder, encoder and document model
    idf_file: Load/save helpers
    operations: Document transformations (test points, part numbers, dedupe)
    geometry: Outline metrics and similar-package search
    units: MM/THOU conversion
    config: TOML configuration
    log: Logging setup

Quick Start::

    from idf_tools import load_board, save_idf
    from idf_tools.operations import remove_test_points

    doc = load_board("board.emn")
    print(doc.header.board_name, len(doc.placements))
    remove_test_points(doc)
    save_idf(doc, "out.emn")
"""

__version__ = "0.1.0"

from idf_tools.idf30 import (
    BoardFile,
    BoardSide,
    ComponentDefinition,
    ComponentPlacement,
    Header,
    IdfDocument,
    LibraryFile,
    LoopLabel,
    PanelFile,
    PlacementStatus,
    Point,
    ReferenceDesignator,
    Section,
    Unit,
    decode,
    encode,
)
from idf_tools.idf_file import load_board, load_idf, load_library, save_idf
from idf_tools.log import disable_verbose, enable_verbose
from idf_tools.exceptions import (
    GrammarError,
    IdfToolsError,
    NumericError,
    StructuralError,
)

__all__ = [
    # Version
    "__version__",
    # Codec
    "decode",
    "encode",
    # Files
    "load_idf",
    "load_board",
    "load_library",
    "save_idf",
    # Logging
    "enable_verbose",
    "disable_verbose",
    # Model
    "IdfDocument",
    "Header",
    "BoardFile",
    "PanelFile",
    "LibraryFile",
    "Unit",
    "ComponentPlacement",
    "ReferenceDesignator",
    "BoardSide",
    "PlacementStatus",
    "ComponentDefinition",
    "Point",
    "LoopLabel",
    "Section",
    # Errors
    "IdfToolsError",
    "GrammarError",
    "StructuralError",
    "NumericError",
]
