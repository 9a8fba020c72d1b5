"""
Unit conversion between the two IDF measurement systems.

IDF files measure in millimeters (``MM``) or thousandths of an inch
(``THOU``, a.k.a. mils). Conversion is exact: 1 thou = 0.0254 mm.

Every function accepts a single length or a NumPy array of lengths.
"""

from __future__ import annotations

from typing import Any, Union

from numpy.typing import NDArray

from .idf30.model import Unit

__all__ = [
    "MM_PER_THOU",
    "Length",
    "to_mm",
    "from_mm",
    "convert",
]

# Conversion constant
MM_PER_THOU = 0.0254

# A scalar length or an array of lengths
Length = Union[float, NDArray[Any]]


def to_mm(value: Length, unit: Unit) -> Length:
    """Convert a length in ``unit`` to millimeters."""
    if unit is Unit.THOU:
        return value * MM_PER_THOU
    return value


def from_mm(value: Length, unit: Unit) -> Length:
    """Convert a length in millimeters to ``unit``."""
    if unit is Unit.THOU:
        return value / MM_PER_THOU
    return value


def convert(value: Length, source: Unit, target: Unit) -> Length:
    """Convert a length between units."""
    if source is target:
        return value
    return from_mm(to_mm(value, source), target)
