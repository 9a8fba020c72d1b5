"""
Component definition operations for library files.
"""

from __future__ import annotations

import logging

from ..idf30.model import IdfDocument, LibraryFile

logger = logging.getLogger(__name__)


def part_numbers_from_geometry(doc: IdfDocument) -> None:
    """Set each definition's part number to its geometry name."""
    for definition in doc.components:
        definition.part_number = definition.geometry_name
    logger.info("Replaced part numbers of %d definitions", len(doc.components))


def dedupe_definitions(doc: IdfDocument) -> int:
    """
    Keep only the first definition for each geometry name.

    Does nothing for board and panel files.

    Returns:
        Number of definitions removed
    """
    if not isinstance(doc.header.file_type, LibraryFile):
        return 0

    seen: set[str] = set()
    kept = []
    for definition in doc.header.file_type.components:
        if definition.geometry_name in seen:
            continue
        seen.add(definition.geometry_name)
        kept.append(definition)

    removed = len(doc.header.file_type.components) - len(kept)
    doc.header.file_type.components = kept
    logger.info("Removed %d duplicate definitions, %d left", removed, len(kept))
    return removed
