"""
Outline geometry of library component definitions.

Works on the points of :class:`~idf_tools.idf30.model.ComponentDefinition`
with NumPy. Arc segments are measured by their chords.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .idf30.model import ComponentDefinition, Unit
from .units import convert, to_mm


def outline_array(definition: ComponentDefinition, unit: Optional[Unit] = None) -> NDArray[Any]:
    """Return the outline points as an ``(n, 2)`` float array.

    Args:
        definition: Component definition
        unit: Unit of the result; defaults to the definition's own unit
    """
    points = np.array([(p.x, p.y) for p in definition.points], dtype=np.float64).reshape(-1, 2)
    if unit is not None:
        points = convert(points, definition.units, unit)
    return points


def bounding_box(
    definition: ComponentDefinition, unit: Optional[Unit] = None
) -> Optional[tuple[float, float, float, float]]:
    """Return ``(min_x, min_y, max_x, max_y)``, or None for an empty outline."""
    points = outline_array(definition, unit)
    if not len(points):
        return None
    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)
    return float(min_x), float(min_y), float(max_x), float(max_y)


def outline_area(definition: ComponentDefinition, unit: Optional[Unit] = None) -> float:
    """Area enclosed by the outline (shoelace formula), in square ``unit``."""
    points = outline_array(definition, unit)
    if len(points) < 3:
        return 0.0
    x, y = points[:, 0], points[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)


def outlines_match(
    a: ComponentDefinition, b: ComponentDefinition, tolerance_mm: float = 1e-4
) -> bool:
    """True if two definitions have the same height and outline within tolerance."""
    if len(a.points) != len(b.points):
        return False
    if abs(to_mm(a.height, a.units) - to_mm(b.height, b.units)) > tolerance_mm:
        return False
    if any(p.loop_label is not q.loop_label for p, q in zip(a.points, b.points)):
        return False

    angles_a = np.array([p.start_angle for p in a.points], dtype=np.float64)
    angles_b = np.array([p.start_angle for p in b.points], dtype=np.float64)
    if not np.allclose(angles_a, angles_b, rtol=0.0, atol=1e-6):
        return False

    return bool(
        np.allclose(
            outline_array(a, Unit.MM), outline_array(b, Unit.MM), rtol=0.0, atol=tolerance_mm
        )
    )


def find_similar_definitions(
    definitions: Sequence[ComponentDefinition], tolerance_mm: float = 1e-4
) -> list[list[ComponentDefinition]]:
    """
    Group definitions that describe the same physical package.

    Definitions match when their heights and outlines agree within
    ``tolerance_mm`` after conversion to millimeters, whatever their names.
    Only groups with two or more members are returned, in document order.
    """
    groups: list[list[ComponentDefinition]] = []
    for definition in definitions:
        for group in groups:
            if outlines_match(group[0], definition, tolerance_mm):
                group.append(definition)
                break
        else:
            groups.append([definition])
    return [group for group in groups if len(group) > 1]
