"""
IDF 3.0 encoder.

Renders an :class:`~idf_tools.idf30.model.IdfDocument` as canonical IDF 3.0
text. The layout is fixed and does not depend on how the document was
originally written:

- floats use 4 decimal places, placement rotation uses 3;
- generic section records are indented by two spaces;
- strings are written as-is and wrapped in quotes only when they would not
  read back as the same single token (``""`` for the empty string);
- number-like text in generic records is quoted so it stays a string.
"""

from __future__ import annotations

from .decoder import ELECTRICAL, HEADER, PLACEMENT
from .grammar import SECTION_PREFIX, TERMINATOR_PREFIX, TokenKind, classify
from .model import (
    FORMAT_VERSION,
    BoardFile,
    ComponentDefinition,
    ComponentPlacement,
    Header,
    IdfDocument,
    IdfValue,
    LibraryFile,
    Section,
)

RECORD_INDENT = "  "


def format_string(value: str) -> str:
    """Format a text field, quoting it only when it would not read back as one token."""
    if not value:
        return '""'
    if any(c.isspace() for c in value) or value[0] in "#.":
        return f'"{value}"'
    return value


def format_float(value: float, precision: int = 4) -> str:
    return f"{value:.{precision}f}"


def format_value(value: IdfValue) -> str:
    """Format a generic section value."""
    if isinstance(value, str):
        # Generic values are typed by token kind, so number-like text needs quotes
        if classify(value) is not TokenKind.BARE_STRING:
            return f'"{value}"'
        return format_string(value)
    if isinstance(value, float):
        return format_float(value)
    return str(value)


def _block(name: str, args: list[str], lines: list[str]) -> str:
    opener = " ".join([f"{SECTION_PREFIX}{name}", *args])
    return "".join(f"{line}\n" for line in [opener, *lines, f"{TERMINATOR_PREFIX}{name}"])


def encode_header(header: Header) -> str:
    lines = [
        " ".join(
            [
                header.file_type_token,
                FORMAT_VERSION,
                format_string(header.source),
                format_string(header.date),
                str(header.version),
            ]
        )
    ]
    if not isinstance(header.file_type, LibraryFile):
        lines.append(f"{format_string(header.file_type.board_name)} {header.file_type.units}")
    return _block(HEADER, [], lines)


def encode_section(section: Section) -> str:
    lines = [
        RECORD_INDENT + " ".join(format_value(v) for v in record) for record in section.records
    ]
    return _block(section.name, [format_string(a) for a in section.args], lines)


def encode_placement(placement: ComponentPlacement) -> list[str]:
    """Return the identity and geometry lines of a placement."""
    identity = " ".join(
        [
            format_string(placement.package_name),
            format_string(placement.part_number),
            format_string(str(placement.designator)),
        ]
    )
    geometry = " ".join(
        [
            format_float(placement.x),
            format_float(placement.y),
            format_float(placement.z),
            format_float(placement.rotation, 3),
            str(placement.board_side),
            str(placement.placement_status),
        ]
    )
    return [identity, RECORD_INDENT + geometry]


def encode_component_definition(definition: ComponentDefinition) -> str:
    lines = [
        " ".join(
            [
                format_string(definition.geometry_name),
                format_string(definition.part_number),
                str(definition.units),
                format_float(definition.height),
            ]
        )
    ]
    for point in definition.points:
        lines.append(
            " ".join(
                [
                    str(point.loop_label.value),
                    format_float(point.x),
                    format_float(point.y),
                    format_float(point.start_angle),
                ]
            )
        )
    return _block(ELECTRICAL, [], lines)


def encode(document: IdfDocument) -> str:
    """
    Encode a document as canonical IDF 3.0 text.

    Board files end with a single PLACEMENT section holding every placement,
    library files with one ELECTRICAL section per definition. Panel files
    carry no PLACEMENT section.
    """
    parts = [encode_header(document.header)]
    parts.extend(encode_section(s) for s in document.sections)

    file_type = document.header.file_type
    if isinstance(file_type, BoardFile):
        lines: list[str] = []
        for placement in document.placements:
            lines.extend(encode_placement(placement))
        parts.append(_block(PLACEMENT, [], lines))
    elif isinstance(file_type, LibraryFile):
        parts.extend(encode_component_definition(d) for d in file_type.components)

    return "".join(parts)
