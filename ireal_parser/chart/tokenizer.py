"""Longest-match tokenizer for descrambled iReal chart text.

At each position the rule classes are tried in a fixed order: chord, bar
lines and control glyphs, comment, alternate chord, section marker,
numbered ending, time signature. Inside each class longer spellings are
tried before their prefixes (``Ab`` before ``A``, ``-^`` before ``-``,
``LZ|`` before ``LZ``). The whole input must be consumed.
"""

from __future__ import annotations

import re

from ireal_parser.chart.models import TimeSignature, Token, TokenKind
from ireal_parser.errors import UnrecognizedInputError
from ireal_parser.models import (
    NO_CHORD,
    AlteredNote,
    AlterationKind,
    Chord,
    ChordSymbol,
    Flavor,
    Note,
    Number,
    Quality,
)

# Spellings tried longest first so "Ab" wins over "A"
NOTES: tuple[Note, ...] = tuple(sorted(Note, key=lambda note: len(note.value), reverse=True))

NUMBERS: tuple[Number, ...] = tuple(sorted(Number, key=lambda n: len(n.value), reverse=True))

# Quality symbols, longest first; the dominant fallback has no symbol
QUALITY_TAGS: tuple[Quality, ...] = tuple(
    sorted(
        (q for q in Quality if q is not Quality.DOMINANT),
        key=lambda q: len(q.value),
        reverse=True,
    )
)

NUMBERED_ALTERATION_TAGS: tuple[tuple[str, AlterationKind], ...] = (
    ("b", "flat"),
    ("#", "sharp"),
    ("add", "add"),
)

BARE_ALTERATION_TAGS: tuple[tuple[str, AlterationKind], ...] = (
    ("sus", "sus"),
    ("alt", "alt"),
)

# Bar lines and control glyphs, in match order
LITERAL_TOKENS: tuple[tuple[str, TokenKind], ...] = (
    ("||", "bar"),
    ("|", "bar"),
    ("[", "double_bar_start"),
    ("]", "double_bar_end"),
    ("Z", "final_bar"),
    ("Kcl", "bar_and_repeat"),
    ("LZ|", "bar"),
    ("LZ", "bar"),
    ("{", "repeat_start"),
    ("}|", "repeat_end"),
    ("}", "repeat_end"),
    (",", "comma"),
    ("XyQ", "blank"),
    ("r|", "repeat_two_measures"),
    ("x", "repeat_measure"),
    ("s", "squeeze"),
    ("Q", "coda"),
    ("S", "segno"),
    ("Y", "vertical_space"),
    ("p", "pause_slash"),
    ("U", "ending_measure"),
    ("l", "unsqueeze"),
    ("f", "fermata"),
    (" ", "space"),
)

NO_CHORD_TAG = "n"
SECTION_MARKER_TAG = "*"
NUMBERED_ENDING_TAG = "N"

# Top may have several digits; the bottom is always the last single digit
TIME_SIGNATURE_RE = re.compile(r"T([0-9]+)([0-9])")

# Characters shown in error messages
SNIPPET_LENGTH = 12


def _match_note(text: str, pos: int) -> tuple[Note, int] | None:
    for note in NOTES:
        if text.startswith(note.value, pos):
            return note, pos + len(note.value)
    return None


def _match_number(text: str, pos: int) -> tuple[Number, int] | None:
    for number in NUMBERS:
        if text.startswith(number.value, pos):
            return number, pos + len(number.value)
    return None


def _match_flavor(text: str, pos: int) -> tuple[Flavor, int]:
    """Match a chord quality; always succeeds via the dominant fallback."""
    quality = Quality.DOMINANT
    for candidate in QUALITY_TAGS:
        if text.startswith(candidate.value, pos):
            quality = candidate
            pos += len(candidate.value)
            break

    if quality in (Quality.SIXTH_NINTH, Quality.MINOR_SIXTH_NINTH):
        return Flavor(quality), pos

    matched = _match_number(text, pos)
    if matched is None:
        return Flavor(quality), pos
    number, pos = matched
    return Flavor(quality, number), pos


def _match_alteration(text: str, pos: int) -> tuple[AlteredNote, int] | None:
    for tag, kind in NUMBERED_ALTERATION_TAGS:
        if text.startswith(tag, pos):
            matched = _match_number(text, pos + len(tag))
            if matched is not None:
                number, end = matched
                return AlteredNote(kind, number), end

    for tag, kind in BARE_ALTERATION_TAGS:
        if text.startswith(tag, pos):
            return AlteredNote(kind), pos + len(tag)

    return None


def match_chord(text: str, pos: int = 0) -> tuple[ChordSymbol, int] | None:
    """Match a chord symbol at a position.

    Parameters
    ----------
    text : str
        The text to scan.
    pos : int
        Where the chord should start.

    Returns
    -------
    tuple[ChordSymbol, int] | None
        The chord and the offset just past it, or None if no chord starts
        at ``pos``.

    Examples
    --------
    >>> chord, end = match_chord("D7susXyQ")
    >>> str(chord), end
    ('D7sus', 5)
    >>> match_chord("XyQ") is None
    True
    """
    if text.startswith(NO_CHORD_TAG, pos):
        return NO_CHORD, pos + len(NO_CHORD_TAG)

    matched_root = _match_note(text, pos)
    if matched_root is None:
        return None
    root, pos = matched_root

    flavor, pos = _match_flavor(text, pos)

    altered: list[AlteredNote] = []
    while True:
        matched_alteration = _match_alteration(text, pos)
        if matched_alteration is None:
            break
        alteration, pos = matched_alteration
        altered.append(alteration)

    bass = None
    if text.startswith("/", pos):
        matched_bass = _match_note(text, pos + 1)
        if matched_bass is not None:
            bass, pos = matched_bass

    return Chord(root=root, flavor=flavor, altered_notes=tuple(altered), bass_note=bass), pos


def _match_literal(text: str, pos: int) -> tuple[TokenKind, int] | None:
    for literal, kind in LITERAL_TOKENS:
        if text.startswith(literal, pos):
            return kind, pos + len(literal)
    return None


def _match_token(text: str, pos: int) -> Token | None:
    """Try every rule class at ``pos`` in priority order."""
    matched_chord = match_chord(text, pos)
    if matched_chord is not None:
        chord, end = matched_chord
        return Token(kind="chord", text=text[pos:end], start=pos, end=end, chord=chord)

    matched_literal = _match_literal(text, pos)
    if matched_literal is not None:
        kind, end = matched_literal
        return Token(kind=kind, text=text[pos:end], start=pos, end=end)

    if text.startswith("<", pos):
        close = text.find(">", pos + 1)
        if close != -1:
            end = close + 1
            return Token(kind="comment", text=text[pos:end], start=pos, end=end, value=text[pos + 1 : close])

    if text.startswith("(", pos):
        inner = match_chord(text, pos + 1)
        if inner is not None and text.startswith(")", inner[1]):
            end = inner[1] + 1
            return Token(kind="alternate_chord", text=text[pos:end], start=pos, end=end, chord=inner[0])

    for tag, kind in ((SECTION_MARKER_TAG, "section_marker"), (NUMBERED_ENDING_TAG, "numbered_ending")):
        if text.startswith(tag, pos) and pos + len(tag) < len(text):
            end = pos + len(tag) + 1
            return Token(kind=kind, text=text[pos:end], start=pos, end=end, value=text[end - 1])

    signature_match = TIME_SIGNATURE_RE.match(text, pos)
    if signature_match is not None:
        signature = TimeSignature(int(signature_match.group(1)), int(signature_match.group(2)))
        end = signature_match.end()
        return Token(kind="time_signature", text=text[pos:end], start=pos, end=end, signature=signature)

    return None


def tokenize(text: str) -> list[Token]:
    """Split descrambled chart text into tokens.

    Parameters
    ----------
    text : str
        Descrambled chart text (marker already removed).

    Returns
    -------
    list[Token]
        Tokens in source order. Their ``text`` fields concatenate back to
        the input.

    Raises
    ------
    UnrecognizedInputError
        If no rule matches at some position.

    Examples
    --------
    >>> [t.kind for t in tokenize("{*AT44Db7XyQ|")]
    ['repeat_start', 'section_marker', 'time_signature', 'chord', 'blank', 'bar']
    """
    tokens: list[Token] = []
    pos = 0
    n = len(text)

    while pos < n:
        token = _match_token(text, pos)
        if token is None:
            raise UnrecognizedInputError(pos, text[pos : pos + SNIPPET_LENGTH])
        tokens.append(token)
        pos = token.end

    return tokens


def detokenize(tokens: list[Token]) -> str:
    """Join tokens back into chart text."""
    return "".join(token.text for token in tokens)
