"""Bar parser: folds a token stream into bars of beat slots.

The parser carries a small state through a reduction over the tokens: the
sealed bars so far, the open bar (if any), the beat-slot cursor, the active
time signature and the slot increment (2 while unsqueezed, 1 while
squeezed). Repeat shorthand is expanded by cloning sealed bars.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from functools import reduce

from ireal_parser.chart.models import (
    Bar,
    BarAnnotation,
    BeatElement,
    Glyph,
    Music,
    NumberedEnding,
    SectionMarker,
    Shorthand,
    TimeSignature,
    Token,
)
from ireal_parser.chart.tokenizer import tokenize
from ireal_parser.codec import descramble, strip_marker
from ireal_parser.errors import InsufficientHistoryError, NoPriorBarError, SlotOverflowError
from ireal_parser.models import ChordSymbol

logger = logging.getLogger(__name__)

DEFAULT_TIME_SIGNATURE = TimeSignature(4, 4)

# Slots consumed by each placed chord
WIDE_INCREMENT = 2
NARROW_INCREMENT = 1

# Closing bar-line tokens and the flag each one sets on the sealed bar
CLOSING_FLAGS: dict[str, str | None] = {
    "bar": None,
    "final_bar": "final_bar",
    "double_bar_end": "double_bar_end",
    "repeat_end": "repeat_end",
}


@dataclass
class OpenBar:
    """A bar under construction; sealed into an immutable :class:`Bar`."""

    slots: list[list[BeatElement]]
    prefix: list[BarAnnotation] = field(default_factory=list)
    suffix: list[BarAnnotation] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)
    repeat_start: bool = False
    double_bar_start: bool = False
    shorthand: Shorthand | None = None
    last_slot: int | None = None

    @classmethod
    def sized(cls, signature: TimeSignature) -> OpenBar:
        return cls(slots=[[] for _ in range(signature.top)])

    @classmethod
    def clone(cls, bar: Bar, shorthand: Shorthand) -> OpenBar:
        """Copy the beat slots of a sealed bar; its annotations stay behind."""
        return cls(slots=[list(slot) for slot in bar.slots], shorthand=shorthand)

    def is_empty(self) -> bool:
        """True if the bar holds no chords and is not a repeat clone."""
        return self.shorthand is None and not any(self.slots)

    def seal(self, flag: str | None = None) -> Bar:
        return Bar(
            slots=tuple(tuple(slot) for slot in self.slots),
            prefix=tuple(self.prefix),
            suffix=tuple(self.suffix),
            comments=tuple(self.comments),
            repeat_start=self.repeat_start,
            double_bar_start=self.double_bar_start,
            repeat_end=flag == "repeat_end",
            double_bar_end=flag == "double_bar_end",
            final_bar=flag == "final_bar",
            shorthand=self.shorthand,
        )


@dataclass
class ParserState:
    """Everything the reduction carries from one token to the next."""

    bars: list[Bar] = field(default_factory=list)
    current: OpenBar | None = None
    cursor: int = 0
    signature: TimeSignature = DEFAULT_TIME_SIGNATURE
    increment: int = WIDE_INCREMENT
    pending_prefix: list[BarAnnotation] = field(default_factory=list)
    pending_comments: list[str] = field(default_factory=list)
    pending_repeat_start: bool = False
    pending_double_bar_start: bool = False

    def seal(self, flag: str | None = None) -> None:
        """Push the open bar, if any, and reset the cursor."""
        if self.current is None:
            return
        self.bars.append(self.current.seal(flag))
        self.current = None
        self.cursor = 0

    def discard(self) -> None:
        """Drop the open bar, if any; its annotations move to the next bar."""
        if self.current is None:
            return
        bar = self.current
        self.pending_prefix[:0] = bar.prefix + bar.suffix
        self.pending_comments[:0] = bar.comments
        self.pending_repeat_start = self.pending_repeat_start or bar.repeat_start
        self.pending_double_bar_start = self.pending_double_bar_start or bar.double_bar_start
        self.current = None
        self.cursor = 0

    def take_pending(self, bar: OpenBar) -> OpenBar:
        """Move annotations collected since the last seal onto a new bar."""
        bar.prefix[:0] = self.pending_prefix
        bar.comments[:0] = self.pending_comments
        bar.repeat_start = bar.repeat_start or self.pending_repeat_start
        bar.double_bar_start = bar.double_bar_start or self.pending_double_bar_start
        self.pending_prefix = []
        self.pending_comments = []
        self.pending_repeat_start = False
        self.pending_double_bar_start = False
        return bar

    def open(self, bar: OpenBar) -> OpenBar:
        self.current = self.take_pending(bar)
        self.cursor = 0
        return self.current

    def ensure_open(self) -> OpenBar:
        if self.current is None:
            return self.open(OpenBar.sized(self.signature))
        return self.current

    def annotate(self, annotation: BarAnnotation) -> None:
        """Attach a prefix annotation to the open bar, or to the next one."""
        if self.current is not None:
            self.current.prefix.append(annotation)
        else:
            self.pending_prefix.append(annotation)


def _width(state: ParserState) -> str:
    return "wide" if state.increment == WIDE_INCREMENT else "narrow"


def _place_chord(state: ParserState, token: Token) -> None:
    bar = state.ensure_open()
    if state.cursor >= len(bar.slots):
        raise SlotOverflowError(state.cursor, len(bar.slots), token.start)
    bar.slots[state.cursor].append(BeatElement(chord=_chord(token), width=_width(state)))
    bar.last_slot = state.cursor
    state.cursor += state.increment


def _place_alternate(state: ParserState, token: Token) -> None:
    bar = state.ensure_open()
    slot = bar.last_slot if bar.last_slot is not None else state.cursor
    if slot >= len(bar.slots):
        raise SlotOverflowError(slot, len(bar.slots), token.start)
    bar.slots[slot].append(BeatElement(chord=_chord(token), width=_width(state), alternate=True))


def _chord(token: Token) -> ChordSymbol:
    if token.chord is None:
        msg = f"{token.kind} token at {token.start} carries no chord"
        raise ValueError(msg)
    return token.chord


def _repeat_measure(state: ParserState, token: Token) -> None:
    if not state.bars:
        raise NoPriorBarError(token.start)
    state.discard()
    state.open(OpenBar.clone(state.bars[-1], "measure"))


def _repeat_two_measures(state: ParserState, token: Token) -> None:
    if len(state.bars) < 2:
        raise InsufficientHistoryError(token.start)
    state.discard()
    first, second = state.bars[-2], state.bars[-1]
    state.bars.append(state.take_pending(OpenBar.clone(first, "two_measures_first")).seal())
    state.open(OpenBar.clone(second, "two_measures_second"))


def _bar_and_repeat(state: ParserState, token: Token) -> None:
    state.seal()
    if not state.bars:
        raise NoPriorBarError(token.start)
    state.open(OpenBar.clone(state.bars[-1], "measure"))


def _time_signature(state: ParserState, token: Token) -> None:
    if token.signature is None:
        msg = f"time_signature token at {token.start} carries no signature"
        raise ValueError(msg)
    state.signature = token.signature
    state.pending_prefix.append(token.signature)


def _glyph(state: ParserState, token: Token) -> None:
    glyph = Glyph(token.kind)
    if state.current is not None:
        state.current.suffix.append(glyph)
    else:
        state.pending_prefix.append(glyph)


def _comment(state: ParserState, token: Token) -> None:
    text = token.value or ""
    if state.current is not None:
        state.current.comments.append(text)
    else:
        state.pending_comments.append(text)


def _squeeze(state: ParserState, token: Token) -> None:
    state.increment = NARROW_INCREMENT


def _unsqueeze(state: ParserState, token: Token) -> None:
    state.increment = WIDE_INCREMENT


def _section_marker(state: ParserState, token: Token) -> None:
    state.annotate(SectionMarker(token.value or ""))


def _numbered_ending(state: ParserState, token: Token) -> None:
    state.annotate(NumberedEnding(token.value or ""))


def _double_bar_start(state: ParserState, token: Token) -> None:
    state.seal()
    state.pending_double_bar_start = True


def _repeat_start(state: ParserState, token: Token) -> None:
    state.seal()
    state.pending_repeat_start = True


HANDLERS: dict[str, Callable[[ParserState, Token], None]] = {
    "chord": _place_chord,
    "alternate_chord": _place_alternate,
    "repeat_measure": _repeat_measure,
    "repeat_two_measures": _repeat_two_measures,
    "bar_and_repeat": _bar_and_repeat,
    "double_bar_start": _double_bar_start,
    "repeat_start": _repeat_start,
    "time_signature": _time_signature,
    "section_marker": _section_marker,
    "numbered_ending": _numbered_ending,
    "comment": _comment,
    "coda": _glyph,
    "segno": _glyph,
    "fermata": _glyph,
    "squeeze": _squeeze,
    "unsqueeze": _unsqueeze,
}


def step(state: ParserState, token: Token) -> ParserState:
    """Apply one token to the parser state.

    Parameters
    ----------
    state : ParserState
        The state after the previous token. Updated in place.
    token : Token
        The next token.

    Returns
    -------
    ParserState
        The same state object, for use with :func:`functools.reduce`.

    Raises
    ------
    SemanticError
        If repeat shorthand has nothing to repeat, or a chord falls outside
        its bar.
    """
    if token.kind in CLOSING_FLAGS:
        state.seal(CLOSING_FLAGS[token.kind])
    elif token.kind in HANDLERS:
        HANDLERS[token.kind](state, token)
    else:
        # Spacing, blanks, pause slashes and ending measures
        logger.debug("Ignoring token %s at %d", token.kind, token.start)
    return state


def parse_tokens(tokens: Iterable[Token], raw: str = "") -> Music:
    """Fold tokens into a :class:`Music` value.

    Parameters
    ----------
    tokens : Iterable[Token]
        Tokens from :func:`ireal_parser.chart.tokenizer.tokenize`.
    raw : str
        The chart text the tokens came from, kept on the result.

    Returns
    -------
    Music
        The parsed bars.
    """
    state = reduce(step, tokens, ParserState())

    if state.current is not None and not state.current.is_empty():
        state.seal()

    bars = tuple(state.bars)
    repeat_start = next((i for i, bar in enumerate(bars) if bar.repeat_start), None)
    return Music(bars=bars, raw=raw, repeat_start=repeat_start)


def parse(text: str) -> Music:
    """Tokenize and parse descrambled chart text.

    Examples
    --------
    >>> music = parse("T44C^7XyQ|D-7 G7Z")
    >>> [str(chord) for chord in music.chords]
    ['C^7', 'D-7', 'G7']
    """
    return parse_tokens(tokenize(text), raw=text)


def decode_music(blob: str) -> Music:
    """Decode a song's music field: check the marker, descramble, parse.

    Parameters
    ----------
    blob : str
        The music field exactly as it appears in the (percent-decoded) URL.

    Returns
    -------
    Music
        The parsed chart; ``raw`` holds the descrambled text.

    Raises
    ------
    MissingMarkerError
        If the blob does not start with the protocol marker.
    """
    return parse(descramble(strip_marker(blob)))
