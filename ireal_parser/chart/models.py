"""Data models for tokenized and parsed chord charts.

This module defines tokens produced by the tokenizer, and the bars and
music values produced by the bar parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ireal_parser.models import ChordSymbol

TokenKind = Literal[
    "chord",
    "alternate_chord",
    "bar",
    "double_bar_start",
    "double_bar_end",
    "final_bar",
    "repeat_start",
    "repeat_end",
    "bar_and_repeat",
    "repeat_measure",
    "repeat_two_measures",
    "squeeze",
    "unsqueeze",
    "space",
    "comma",
    "blank",
    "vertical_space",
    "section_marker",
    "numbered_ending",
    "comment",
    "coda",
    "segno",
    "fermata",
    "pause_slash",
    "ending_measure",
    "time_signature",
]

Width = Literal["wide", "narrow"]

Shorthand = Literal["measure", "two_measures_first", "two_measures_second"]

GlyphName = Literal["coda", "segno", "fermata"]

# Display symbols for the navigation glyphs
GLYPH_SYMBOLS: dict[str, str] = {
    "coda": "\U0001d10c",
    "segno": "\U0001d10b",
    "fermata": "\U0001d110",
}


@dataclass(frozen=True)
class TimeSignature:
    """A time signature such as 4/4.

    Examples
    --------
    >>> str(TimeSignature(3, 4))
    '3/4'
    >>> TimeSignature(12, 8).to_ireal()
    'T128'
    """

    top: int
    bottom: int

    def to_ireal(self) -> str:
        return f"T{self.top}{self.bottom}"

    def __str__(self) -> str:
        return f"{self.top}/{self.bottom}"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source span.

    Parameters
    ----------
    kind : TokenKind
        The token classification.
    text : str
        The exact source text matched.
    start : int
        Inclusive start offset (0-indexed, in characters).
    end : int
        Exclusive end offset.
    chord : ChordSymbol | None
        The chord for "chord" and "alternate_chord" tokens.
    value : str | None
        The label of a section marker or numbered ending, or comment text.
    signature : TimeSignature | None
        The signature for "time_signature" tokens.

    Examples
    --------
    >>> token = Token(kind="bar", text="|", start=4, end=5)
    >>> token.end - token.start
    1
    """

    kind: TokenKind
    text: str
    start: int
    end: int
    chord: ChordSymbol | None = None
    value: str | None = None
    signature: TimeSignature | None = None


@dataclass(frozen=True)
class SectionMarker:
    """A rehearsal mark such as [A]."""

    label: str

    def __str__(self) -> str:
        return f"[{self.label}]"


@dataclass(frozen=True)
class NumberedEnding:
    """A first/second ending bracket such as N1."""

    number: str

    def __str__(self) -> str:
        return f"N{self.number}"


@dataclass(frozen=True)
class Glyph:
    """A navigation glyph: coda, segno or fermata."""

    name: GlyphName

    def __str__(self) -> str:
        return GLYPH_SYMBOLS[self.name]


BarAnnotation = SectionMarker | NumberedEnding | TimeSignature | Glyph


@dataclass(frozen=True)
class BeatElement:
    """A chord placed in a beat slot.

    Parameters
    ----------
    chord : ChordSymbol
        The chord.
    width : Width
        "wide" if placed while unsqueezed (spans two slots), "narrow" if
        placed while squeezed (spans one).
    alternate : bool
        True for an alternate chord shown above the primary one.
    """

    chord: ChordSymbol
    width: Width = "wide"
    alternate: bool = False


Slot = tuple[BeatElement, ...]


@dataclass(frozen=True)
class Bar:
    """A sealed bar: beat slots plus bar-line and annotation metadata.

    Parameters
    ----------
    slots : tuple[Slot, ...]
        One entry per beat slot; the count is fixed when the bar opens.
    prefix : tuple[BarAnnotation, ...]
        Annotations shown before the bar content, in source order.
    suffix : tuple[BarAnnotation, ...]
        Annotations shown after the bar content.
    comments : tuple[str, ...]
        Free-text comments attached to the bar.
    repeat_start, double_bar_start : bool
        Opening bar-line decorations.
    repeat_end, double_bar_end, final_bar : bool
        Closing bar-line decorations.
    shorthand : Shorthand | None
        Set when the bar was produced by repeat shorthand.
    """

    slots: tuple[Slot, ...]
    prefix: tuple[BarAnnotation, ...] = ()
    suffix: tuple[BarAnnotation, ...] = ()
    comments: tuple[str, ...] = ()
    repeat_start: bool = False
    double_bar_start: bool = False
    repeat_end: bool = False
    double_bar_end: bool = False
    final_bar: bool = False
    shorthand: Shorthand | None = None

    @property
    def size(self) -> int:
        """Number of beat slots."""
        return len(self.slots)

    @property
    def chords(self) -> tuple[ChordSymbol, ...]:
        """Primary chords in beat order."""
        return tuple(e.chord for slot in self.slots for e in slot if not e.alternate)

    @property
    def alternate_chords(self) -> tuple[ChordSymbol, ...]:
        """Alternate chords in beat order."""
        return tuple(e.chord for slot in self.slots for e in slot if e.alternate)

    def is_empty(self) -> bool:
        """True if the bar holds no chords and is not a repeat clone."""
        return self.shorthand is None and not any(self.slots)


@dataclass(frozen=True)
class Music:
    """A parsed chart.

    Parameters
    ----------
    bars : tuple[Bar, ...]
        Bars in order, with repeat shorthand expanded.
    raw : str
        The descrambled chart text the bars were parsed from.
    repeat_start : int | None
        Index of the first bar that opens a repeat, if any.
    """

    bars: tuple[Bar, ...]
    raw: str
    repeat_start: int | None = None

    @property
    def chords(self) -> tuple[ChordSymbol, ...]:
        """Every primary chord in chart order."""
        return tuple(chord for bar in self.bars for chord in bar.chords)

    def __str__(self) -> str:
        """Return the rendered chart."""
        from ireal_parser.chart.renderer import render

        return render(self)
