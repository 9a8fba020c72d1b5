"""
IDF 3.0 decoder.

Builds an :class:`~idf_tools.idf30.model.IdfDocument` from the parse tree:

- the first section is decoded as the HEADER;
- PLACEMENT sections are read two records per component;
- each ELECTRICAL section becomes one component definition;
- every other section is kept as a generic :class:`Section`.

Any violation raises; a failed decode never returns a partial document.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from ..exceptions import (
    MalformedPlacementSectionError,
    MalformedRecordError,
    MissingHeaderError,
    NumericError,
    UnsupportedVersionError,
    WrongFileTypeError,
    WrongSideError,
    WrongStatusError,
    WrongUnitError,
)
from .grammar import RawRecord, RawSection, Token, TokenKind, parse
from .model import (
    FORMAT_VERSION,
    BoardFile,
    BoardSide,
    ComponentDefinition,
    ComponentPlacement,
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

logger = logging.getLogger(__name__)

HEADER = "HEADER"
PLACEMENT = "PLACEMENT"
ELECTRICAL = "ELECTRICAL"

# Outline records starting with this token annotate the definition
PROPERTY_TOKEN = "PROP"

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U32_MAX = 2**32 - 1

_HEADER_FIELDS = ("file type", "format version", "source", "date", "board file version")
_BOARD_FIELDS = ("board name", "units")
_PLACEMENT_ID_FIELDS = ("package name", "part number", "reference designator")
_PLACEMENT_GEOMETRY_FIELDS = ("x", "y", "z", "rotation", "board side", "placement status")
_DEFINITION_FIELDS = ("geometry name", "part number", "units", "height")
_OUTLINE_FIELDS = ("loop label", "x", "y", "angle")


def to_integer(token: Token, low: int = _I64_MIN, high: int = _I64_MAX) -> int:
    """Convert a token to an int within ``[low, high]``."""
    try:
        value = int(token.text)
        if not low <= value <= high:
            raise OverflowError(f"{token.text} is outside [{low}, {high}]")
    except (ValueError, OverflowError) as e:
        raise NumericError(
            f"Cannot convert '{token.text}' to an integer",
            token=token.text,
            line=token.line,
        ) from e
    return value


def to_float(token: Token) -> float:
    try:
        return float(token.text)
    except ValueError as e:
        raise NumericError(
            f"Cannot convert '{token.text}' to a float",
            token=token.text,
            line=token.line,
        ) from e


class _Fields:
    """Cursor over the tokens of a record with a fixed layout."""

    def __init__(self, record: RawRecord, section: str, names: Sequence[str]):
        if len(record) != len(names):
            raise MalformedRecordError(
                f"{section} record needs {len(names)} fields, got {len(record)}",
                context={"section": section, "expected": " ".join(f"<{n}>" for n in names)},
                line=record.line,
            )
        self.section = section
        self._tokens: Iterator[Token] = iter(record.tokens)
        self._names = iter(names)

    def token(self) -> Token:
        next(self._names)
        return next(self._tokens)

    def text(self) -> str:
        return self.token().text

    def number(self) -> float:
        name = next(self._names)
        token = next(self._tokens)
        if not token.is_numeric:
            raise MalformedRecordError(
                f"Expected a number for {name}, got '{token.text}'",
                context={"section": self.section},
                line=token.line,
            )
        return to_float(token)

    def integer(self) -> int:
        name = next(self._names)
        token = next(self._tokens)
        if token.kind is not TokenKind.INTEGER:
            raise MalformedRecordError(
                f"Expected an integer for {name}, got '{token.text}'",
                context={"section": self.section},
                line=token.line,
            )
        return to_integer(token)


def _unit(token: Token) -> Unit:
    try:
        return Unit(token.text)
    except ValueError:
        raise WrongUnitError(context={"unit": token.text}, line=token.line) from None


def decode_header(section: RawSection) -> Header:
    """Decode the HEADER section."""
    if section.name != HEADER:
        raise MissingHeaderError(context={"first_section": section.name}, line=section.line)
    if not section.records:
        raise MalformedRecordError("HEADER section is empty", line=section.line)

    fields = _Fields(section.records[0], HEADER, _HEADER_FIELDS)
    file_type_token = fields.text()
    version_token = fields.token()
    source = fields.text()
    date = fields.text()
    board_file_version_token = fields.token()

    if version_token.text != FORMAT_VERSION:
        raise UnsupportedVersionError(
            context={"version": version_token.text},
            suggestions=["Only IDF 3.0 files are supported"],
            line=version_token.line,
        )

    file_type: FileType
    if file_type_token in ("BOARD_FILE", "PANEL_FILE"):
        if len(section.records) != 2:
            raise MalformedRecordError(
                f"{file_type_token} header needs 2 records, got {len(section.records)}",
                line=section.line,
            )
        board = _Fields(section.records[1], HEADER, _BOARD_FIELDS)
        board_name = board.text()
        units = _unit(board.token())
        if file_type_token == "BOARD_FILE":
            file_type = BoardFile(board_name=board_name, units=units)
        else:
            file_type = PanelFile(board_name=board_name, units=units)
    elif file_type_token == "LIBRARY_FILE":
        if len(section.records) != 1:
            raise MalformedRecordError(
                f"LIBRARY_FILE header needs 1 record, got {len(section.records)}",
                line=section.line,
            )
        file_type = LibraryFile()
    else:
        raise WrongFileTypeError(
            context={"file_type": file_type_token}, line=section.records[0].line
        )

    board_file_version = to_integer(board_file_version_token, 0, _U32_MAX)

    return Header(
        file_type=file_type,
        source=source,
        date=date,
        version=board_file_version,
    )


def decode_placement(identity: RawRecord, geometry: RawRecord) -> ComponentPlacement:
    """Decode one component from its identity and geometry records."""
    ident = _Fields(identity, PLACEMENT, _PLACEMENT_ID_FIELDS)
    package_name = ident.text()
    part_number = ident.text()
    designator = ReferenceDesignator.from_token(ident.text())

    geom = _Fields(geometry, PLACEMENT, _PLACEMENT_GEOMETRY_FIELDS)
    x = geom.number()
    y = geom.number()
    z = geom.number()
    rotation = geom.number()

    side = geom.token()
    try:
        board_side = BoardSide(side.text)
    except ValueError:
        raise WrongSideError(context={"side": side.text}, line=side.line) from None

    status = geom.token()
    try:
        placement_status = PlacementStatus(status.text)
    except ValueError:
        raise WrongStatusError(context={"status": status.text}, line=status.line) from None

    return ComponentPlacement(
        package_name=package_name,
        part_number=part_number,
        designator=designator,
        x=x,
        y=y,
        z=z,
        rotation=rotation,
        board_side=board_side,
        placement_status=placement_status,
    )


def decode_placement_section(section: RawSection) -> list[ComponentPlacement]:
    """Decode a PLACEMENT section, two records per component."""
    records = section.records
    if len(records) % 2:
        last = records[-1]
        raise MalformedPlacementSectionError(
            context={"record": " ".join(t.text for t in last)},
            suggestions=["Each component needs an identity line and a geometry line"],
            line=last.line,
        )
    return [
        decode_placement(records[i], records[i + 1]) for i in range(0, len(records), 2)
    ]


def decode_component_definition(section: RawSection) -> ComponentDefinition:
    """Decode an ELECTRICAL section into one component definition."""
    if not section.records:
        raise MalformedRecordError(
            "ELECTRICAL section has no header record", line=section.line
        )

    fields = _Fields(section.records[0], ELECTRICAL, _DEFINITION_FIELDS)
    geometry_name = fields.text()
    part_number = fields.text()
    units = _unit(fields.token())
    height = fields.number()

    points = []
    for record in section.records[1:]:
        if record.first.text == PROPERTY_TOKEN:
            continue
        outline = _Fields(record, ELECTRICAL, _OUTLINE_FIELDS)
        label = outline.integer()
        points.append(
            Point(
                loop_label=LoopLabel.from_label(label),
                x=outline.number(),
                y=outline.number(),
                start_angle=outline.number(),
            )
        )

    return ComponentDefinition(
        geometry_name=geometry_name,
        part_number=part_number,
        units=units,
        height=height,
        points=points,
    )


def _value(token: Token) -> IdfValue:
    if token.kind is TokenKind.INTEGER:
        return to_integer(token)
    if token.kind is TokenKind.FLOAT:
        return to_float(token)
    return token.text


def decode_section(section: RawSection) -> Section:
    """Keep a section the decoder does not interpret, values typed by token kind."""
    return Section(
        name=section.name,
        args=[arg.text for arg in section.args],
        records=[[_value(token) for token in record] for record in section.records],
    )


def decode(text: str) -> IdfDocument:
    """
    Decode an IDF 3.0 document.

    Args:
        text: Full document text

    Returns:
        The decoded document

    Raises:
        GrammarError: The text does not follow the token grammar
        StructuralError: A section or record has the wrong layout
        NumericError: A numeric token cannot be converted
    """
    tree = parse(text)
    if not tree.sections:
        raise MissingHeaderError()

    header = decode_header(tree.sections[0])
    placements: list[ComponentPlacement] = []
    sections: list[Section] = []
    components: list[ComponentDefinition] = []

    for raw in tree.sections[1:]:
        if raw.name == PLACEMENT:
            placements.extend(decode_placement_section(raw))
        elif raw.name == ELECTRICAL:
            components.append(decode_component_definition(raw))
        else:
            sections.append(decode_section(raw))
        logger.debug("Decoded .%s (%d records)", raw.name, len(raw.records))

    if isinstance(header.file_type, LibraryFile):
        header.file_type.components = components
    elif components:
        logger.debug(
            "Ignoring %d ELECTRICAL definitions in a %s",
            len(components),
            header.file_type_token,
        )

    logger.debug(
        "Decoded %s: %d placements, %d definitions, %d other sections",
        header.file_type_token,
        len(placements),
        len(header.file_type.components) if isinstance(header.file_type, LibraryFile) else 0,
        len(sections),
    )
    return IdfDocument(header=header, placements=placements, sections=sections)
