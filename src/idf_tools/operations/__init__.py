"""IDF document operations."""

from .library_ops import dedupe_definitions, part_numbers_from_geometry
from .placement_ops import part_numbers_from_packages, remove_test_points
from .rewrite import apply_rewrite, tag_source

__all__ = [
    # placement_ops
    "remove_test_points",
    "part_numbers_from_packages",
    # library_ops
    "part_numbers_from_geometry",
    "dedupe_definitions",
    # rewrite
    "tag_source",
    "apply_rewrite",
]
