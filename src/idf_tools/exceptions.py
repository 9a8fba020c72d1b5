"""
Exception hierarchy for idf-tools.

Every error carries a message, optional context (line, column, section,
token) and optional suggestions, rendered together by ``str()``.

Decoding failures fall into three families:

- :class:`GrammarError` - the text does not follow the IDF 3.0 token grammar.
- :class:`StructuralError` - the tokens are fine but a section or record does
  not have the shape IDF 3.0 requires (missing header, bad unit, ...).
- :class:`NumericError` - a numeric token cannot be converted to a native
  number.

Example::

    from idf_tools.exceptions import GrammarError

    raise GrammarError(
        "Unterminated quoted string",
        offset=120,
        line=7,
        column=14,
        suggestions=["Close the string with a double quote on the same line"],
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class IdfToolsError(Exception):
    """
    Base exception for all idf-tools errors.

    Attributes:
        context: Dictionary of contextual information (line, section, ...)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class GrammarError(IdfToolsError):
    """
    The input violates the IDF 3.0 token grammar.

    Carries the exact source position of the offending character.

    Example::

        raise GrammarError("Missing .END_PLACEMENT", offset=512, line=30, column=1)
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.offset = offset
        self.line = line
        self.column = column

        ctx = context or {}
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        if column is not None and "column" not in ctx:
            ctx["column"] = column
        if offset is not None and "offset" not in ctx:
            ctx["offset"] = offset

        super().__init__(message, ctx, suggestions)


class StructuralError(IdfToolsError):
    """
    A section or record does not have the layout IDF 3.0 requires.

    Subclasses name the specific violation; catch this class to handle all
    of them at once.
    """

    default_message = "Malformed IDF document"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
    ):
        ctx = context or {}
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        super().__init__(message or self.default_message, ctx, suggestions)


class MissingHeaderError(StructuralError):
    """The document is empty or does not start with a HEADER section."""

    default_message = "File does not contain header section or is empty"


class WrongFileTypeError(StructuralError):
    """The header names a file type other than BOARD_FILE, PANEL_FILE or LIBRARY_FILE."""

    default_message = "Expected BOARD_FILE, PANEL_FILE or LIBRARY_FILE"


class UnsupportedVersionError(StructuralError):
    """The header's format version token is not 3.0."""

    default_message = "Expected version 3.0"


class WrongUnitError(StructuralError):
    """A unit token is neither MM nor THOU."""

    default_message = "MM or THOU expected"


class MalformedPlacementSectionError(StructuralError):
    """A PLACEMENT section ends with a record that has no geometry line."""

    default_message = "Expected 2 records per component, got 1"


class WrongSideError(StructuralError):
    """A placement's board side is neither TOP nor BOTTOM."""

    default_message = "Expected TOP or BOTTOM for side of board"


class WrongStatusError(StructuralError):
    """A placement status is not PLACED, UNPLACED, MCAD or ECAD."""

    default_message = "Wrong placement status"


class MalformedRecordError(StructuralError):
    """A record has the wrong number or kind of fields for its section."""

    default_message = "Malformed record"


class NumericError(IdfToolsError):
    """
    A numeric token failed native conversion.

    The underlying conversion error is chained as ``__cause__``.

    Attributes:
        token: Text of the token that failed to convert
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
    ):
        self.token = token
        ctx = context or {}
        if token is not None and "token" not in ctx:
            ctx["token"] = token
        if line is not None and "line" not in ctx:
            ctx["line"] = line
        super().__init__(message, ctx, suggestions)


class FileFormatError(IdfToolsError):
    """
    File is a valid IDF document of the wrong kind.

    Example::

        raise FileFormatError(
            "Not an IDF library file",
            context={"file": "board.emn", "expected": "LIBRARY_FILE", "got": "BOARD_FILE"},
        )
    """

    pass


class FileNotFoundError(IdfToolsError):
    """
    Required file was not found.
    """

    pass


class ConfigurationError(IdfToolsError):
    """
    Configuration or settings error.

    Raised when a config file cannot be read, is not valid TOML, or holds a
    value of the wrong type.
    """

    pass


__all__ = [
    "IdfToolsError",
    "GrammarError",
    "StructuralError",
    "MissingHeaderError",
    "WrongFileTypeError",
    "UnsupportedVersionError",
    "WrongUnitError",
    "MalformedPlacementSectionError",
    "WrongSideError",
    "WrongStatusError",
    "MalformedRecordError",
    "NumericError",
    "FileFormatError",
    "FileNotFoundError",
    "ConfigurationError",
]
