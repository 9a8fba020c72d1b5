"""
IDF 3.0 decoder and encoder.

Text in, model out (:func:`decode`), or model in, text out (:func:`encode`).
Nothing here touches files or keeps state between calls.

Usage:
    from idf_tools.idf30 import decode, encode

    doc = decode(text)
    doc.header.source = "idf_tools_" + doc.header.source
    doc.placements = [p for p in doc.placements if not p.designator.is_test_point()]
    text = encode(doc)
"""

from .decoder import decode
from .encoder import encode
from .grammar import ParseTree, RawRecord, RawSection, Token, TokenKind, parse
from .model import (
    BoardFile,
    BoardSide,
    ComponentDefinition,
    ComponentPlacement,
    DesignatorKind,
    FileType,
    Header,
    IdfDocument,
    IdfValue,
    LibraryFile,
    LoopLabel,
    PanelFile,
    PlacementStatus,
    Point,
    ReferenceDesignator,
    Section,
    Unit,
)

__all__ = [
    # Codec
    "decode",
    "encode",
    # Grammar
    "parse",
    "ParseTree",
    "RawSection",
    "RawRecord",
    "Token",
    "TokenKind",
    # Model
    "IdfDocument",
    "Header",
    "FileType",
    "BoardFile",
    "PanelFile",
    "LibraryFile",
    "Unit",
    "ComponentPlacement",
    "ReferenceDesignator",
    "DesignatorKind",
    "BoardSide",
    "PlacementStatus",
    "ComponentDefinition",
    "Point",
    "LoopLabel",
    "Section",
    "IdfValue",
]
