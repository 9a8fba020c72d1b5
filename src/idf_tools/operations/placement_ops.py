"""
Placement operations for board files.

These work through the public model only and change the document in place.
"""

from __future__ import annotations

import logging

from ..idf30.model import IdfDocument

logger = logging.getLogger(__name__)


def remove_test_points(doc: IdfDocument) -> int:
    """
    Drop every placement whose designator is a test point.

    Returns:
        Number of placements removed
    """
    before = len(doc.placements)
    doc.placements = [p for p in doc.placements if not p.designator.is_test_point()]
    removed = before - len(doc.placements)
    logger.info("Removed %d test points, %d placements left", removed, len(doc.placements))
    return removed


def part_numbers_from_packages(doc: IdfDocument) -> None:
    """Set each placement's part number to its package name."""
    for placement in doc.placements:
        placement.part_number = placement.package_name
    logger.info("Replaced part numbers of %d placements", len(doc.placements))
