"""
File I/O helpers for IDF 3.0 files.

The decoder and encoder only work on text; these helpers read and write
UTF-8 files around them. A leading byte order mark is ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import FileFormatError
from .exceptions import FileNotFoundError as IdfFileNotFoundError
from .idf30 import IdfDocument, LibraryFile, decode, encode

logger = logging.getLogger(__name__)


def load_idf(path: str | Path) -> IdfDocument:
    """
    Load any IDF 3.0 file (board, panel or library).

    Args:
        path: Path to the .emn/.emp/.idf file

    Returns:
        Decoded document

    Raises:
        FileNotFoundError: If file doesn't exist
        FileFormatError: If the file is not UTF-8 text
        GrammarError, StructuralError, NumericError: If the file is not valid IDF 3.0
    """
    path = Path(path)
    if not path.exists():
        raise IdfFileNotFoundError(
            "IDF file not found",
            context={"file": str(path)},
            suggestions=["Check that the file path is correct"],
        )

    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileFormatError(
            "IDF file is not valid UTF-8",
            context={"file": str(path), "byte": e.start},
            suggestions=["Re-save the file as UTF-8"],
        ) from e

    doc = decode(text)
    logger.debug("Loaded %s from %s", doc.header.file_type_token, path)
    return doc


def load_board(path: str | Path) -> IdfDocument:
    """Load a board or panel file (usually .emn)."""
    doc = load_idf(path)
    if isinstance(doc.header.file_type, LibraryFile):
        raise FileFormatError(
            "Not an IDF board file",
            context={"file": str(path), "expected": "BOARD_FILE", "got": "LIBRARY_FILE"},
            suggestions=["This looks like a library (.emp) file; use load_library()"],
        )
    return doc


def load_library(path: str | Path) -> IdfDocument:
    """Load a library file (usually .emp)."""
    doc = load_idf(path)
    if not isinstance(doc.header.file_type, LibraryFile):
        raise FileFormatError(
            "Not an IDF library file",
            context={
                "file": str(path),
                "expected": "LIBRARY_FILE",
                "got": doc.header.file_type_token,
            },
            suggestions=["This looks like a board (.emn) file; use load_board()"],
        )
    return doc


def save_idf(doc: IdfDocument, path: str | Path) -> None:
    """
    Save a document as canonical IDF 3.0 text.

    Args:
        doc: Document to write
        path: Path to save to
    """
    path = Path(path)
    path.write_text(encode(doc), encoding="utf-8")
    logger.debug("Saved %s to %s", doc.header.file_type_token, path)
