"""Exception hierarchy for iReal chart decoding.

Every failure in the decode pipeline is raised as a subclass of
:class:`IRealError`, which itself derives from ``ValueError`` so callers that
already guard chord parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class IRealError(ValueError):
    """Base class for all decoding errors."""


class FormatError(IRealError):
    """The input text does not have the expected lexical shape."""


class MissingMarkerError(FormatError):
    """A music blob does not start with the protocol marker."""

    def __init__(self, marker: str) -> None:
        self.marker = marker
        msg = f"Music doesn't start with {marker!r}"
        super().__init__(msg)


class InvalidHexDigitError(FormatError):
    """A percent escape contains a character that is not a hex digit."""

    def __init__(self, char: str) -> None:
        self.char = char
        msg = f"Invalid hex digit: {char!r}"
        super().__init__(msg)


class TruncatedEscapeError(FormatError):
    """The input ends in the middle of a percent escape."""

    def __init__(self, position: int) -> None:
        self.position = position
        msg = f"Truncated percent escape at position {position}"
        super().__init__(msg)


class UnrecognizedInputError(FormatError):
    """No tokenizer rule matches at a position in the chart text."""

    def __init__(self, position: int, snippet: str) -> None:
        self.position = position
        self.snippet = snippet
        msg = f"Unrecognized input at position {position}: {snippet!r}"
        super().__init__(msg)


class MalformedRecordError(FormatError):
    """A URL or song record does not split into the expected fields."""


class SemanticError(IRealError):
    """A well-formed token stream describes an impossible bar structure."""

    def __init__(self, msg: str, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            msg = f"{msg} (at position {position})"
        super().__init__(msg)


class NoPriorBarError(SemanticError):
    """Repeat shorthand refers to a bar before the first one."""

    def __init__(self, position: int | None = None) -> None:
        super().__init__("Repeat measure at beginning of song", position)


class InsufficientHistoryError(SemanticError):
    """Two-bar repeat shorthand appears before two bars exist."""

    def __init__(self, position: int | None = None) -> None:
        super().__init__("Repeat 2 measures needs two previous bars", position)


class SlotOverflowError(SemanticError):
    """A chord would be placed past the last beat slot of its bar."""

    def __init__(self, slot: int, size: int, position: int | None = None) -> None:
        self.slot = slot
        self.size = size
        super().__init__(f"Beat slot {slot} is outside a bar of {size} slots", position)
