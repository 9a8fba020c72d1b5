"""
In-memory model of an IDF 3.0 document.

All types are plain dataclasses with structural equality. A decoded
document belongs to the caller, who may change any field before encoding
it again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

FORMAT_VERSION = "3.0"

# Prefix that marks a test point designator (TP1, TP23, ...)
TEST_POINT_PREFIX = "TP"


class Unit(Enum):
    """Measurement unit of a board, panel or component definition."""

    MM = "MM"
    THOU = "THOU"  # thousandths of an inch

    def __str__(self) -> str:
        return self.value


class BoardSide(Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"

    def __str__(self) -> str:
        return self.value


class PlacementStatus(Enum):
    """Who owns a component's position."""

    PLACED = "PLACED"
    UNPLACED = "UNPLACED"
    MCAD = "MCAD"
    ECAD = "ECAD"

    def __str__(self) -> str:
        return self.value


class LoopLabel(Enum):
    """Winding direction of an outline loop. Values are the IDF labels."""

    COUNTER_CLOCKWISE = 0
    CLOCKWISE = 1

    @classmethod
    def from_label(cls, label: int) -> LoopLabel:
        return cls.COUNTER_CLOCKWISE if label == 0 else cls.CLOCKWISE


class DesignatorKind(Enum):
    NAMED = "named"
    NOREFDES = "NOREFDES"
    BOARD = "BOARD"


@dataclass(frozen=True)
class ReferenceDesignator:
    """
    Reference designator of a placed component.

    Either a name such as ``U3``, or one of the reserved designators
    ``NOREFDES`` (no designator) and ``BOARD`` (belongs to the board).
    """

    kind: DesignatorKind
    name: str = ""

    @classmethod
    def named(cls, name: str) -> ReferenceDesignator:
        return cls(DesignatorKind.NAMED, name)

    @classmethod
    def no_refdes(cls) -> ReferenceDesignator:
        return cls(DesignatorKind.NOREFDES)

    @classmethod
    def board(cls) -> ReferenceDesignator:
        return cls(DesignatorKind.BOARD)

    @classmethod
    def from_token(cls, token: str) -> ReferenceDesignator:
        """Classify a designator token; reserved words take precedence."""
        if token == DesignatorKind.NOREFDES.value:
            return cls.no_refdes()
        if token == DesignatorKind.BOARD.value:
            return cls.board()
        return cls.named(token)

    def is_test_point(self) -> bool:
        """True for named designators starting with ``TP``."""
        return self.kind is DesignatorKind.NAMED and self.name.startswith(TEST_POINT_PREFIX)

    def __str__(self) -> str:
        if self.kind is DesignatorKind.NAMED:
            return self.name
        return self.kind.value


@dataclass
class ComponentPlacement:
    """One entry of a PLACEMENT section."""

    package_name: str
    part_number: str
    designator: ReferenceDesignator
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation: float = 0.0  # degrees
    board_side: BoardSide = BoardSide.TOP
    placement_status: PlacementStatus = PlacementStatus.PLACED


@dataclass
class Point:
    """A vertex of a component outline."""

    loop_label: LoopLabel
    x: float
    y: float
    start_angle: float = 0.0  # degrees, 0 for a straight segment


@dataclass
class ComponentDefinition:
    """An ELECTRICAL component geometry from a library file."""

    geometry_name: str
    part_number: str
    units: Unit
    height: float
    points: list[Point] = field(default_factory=list)


@dataclass
class BoardFile:
    board_name: str
    units: Unit


@dataclass
class PanelFile:
    board_name: str
    units: Unit


@dataclass
class LibraryFile:
    components: list[ComponentDefinition] = field(default_factory=list)


FileType = Union[BoardFile, PanelFile, LibraryFile]

# Header literal for each file type
FILE_TYPE_TOKENS: dict[type, str] = {
    BoardFile: "BOARD_FILE",
    PanelFile: "PANEL_FILE",
    LibraryFile: "LIBRARY_FILE",
}


@dataclass
class Header:
    """Contents of the HEADER section."""

    file_type: FileType
    source: str
    date: str
    version: int

    @property
    def file_type_token(self) -> str:
        return FILE_TYPE_TOKENS[type(self.file_type)]

    @property
    def board_name(self) -> Optional[str]:
        if isinstance(self.file_type, (BoardFile, PanelFile)):
            return self.file_type.board_name
        return None

    @property
    def units(self) -> Optional[Unit]:
        if isinstance(self.file_type, (BoardFile, PanelFile)):
            return self.file_type.units
        return None


# Integer, Float or String value of a generic section
IdfValue = Union[int, float, str]


@dataclass
class Section:
    """
    A section the decoder does not interpret, e.g. BOARD_OUTLINE.

    ``args`` holds the header tokens after the name (``ECAD`` in
    ``.BOARD_OUTLINE ECAD``). Each record keeps its values in order.
    """

    name: str
    args: list[str] = field(default_factory=list)
    records: list[list[IdfValue]] = field(default_factory=list)


@dataclass
class IdfDocument:
    """A decoded IDF 3.0 document."""

    header: Header
    placements: list[ComponentPlacement] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)

    @property
    def components(self) -> list[ComponentDefinition]:
        """Component definitions of a library file; empty for boards and panels."""
        if isinstance(self.header.file_type, LibraryFile):
            return self.header.file_type.components
        return []

    @classmethod
    def parse(cls, text: str) -> IdfDocument:
        """Decode IDF 3.0 text."""
        from .decoder import decode

        return decode(text)

    def to_string(self) -> str:
        """Encode to canonical IDF 3.0 text."""
        from .encoder import encode

        return encode(self)
