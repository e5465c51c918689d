"""Chord data models for iReal chord charts.

This module provides the algebraic chord representation used by the
tokenizer and parser: notes, extension numbers, chord qualities, alterations
and the chord itself. Every value serializes back to the protocol's own
symbols via ``to_ireal()``; ``str()`` gives the text a musician reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal


class Note(Enum):
    """A chord root or bass note, valued by its protocol spelling.

    ``W`` is the protocol's "no root" placeholder, only seen before a slash
    bass (``W/C`` displays as ``/C``).

    Examples
    --------
    >>> Note("Bb")
    <Note.B_FLAT: 'Bb'>
    >>> str(Note.W)
    ''
    """

    A_FLAT = "Ab"
    A = "A"
    A_SHARP = "A#"
    B_FLAT = "Bb"
    B = "B"
    C_FLAT = "Cb"
    C = "C"
    C_SHARP = "C#"
    D_FLAT = "Db"
    D = "D"
    D_SHARP = "D#"
    E_FLAT = "Eb"
    E = "E"
    F = "F"
    F_SHARP = "F#"
    G_FLAT = "Gb"
    G = "G"
    G_SHARP = "G#"
    W = "W"

    def __str__(self) -> str:
        return "" if self is Note.W else self.value


class Number(Enum):
    """Scale degrees that appear in chord symbols."""

    TWO = "2"
    THREE = "3"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    NINE = "9"
    ELEVEN = "11"
    THIRTEEN = "13"

    def __str__(self) -> str:
        return self.value


class Quality(Enum):
    """Chord quality, valued by its protocol symbol.

    Dominant chords have no symbol: ``C7`` is a dominant seventh and ``C`` a
    plain triad.
    """

    MAJOR = "^"
    MINOR = "-"
    DOMINANT = ""
    AUGMENTED = "+"
    DIMINISHED = "o"
    HALF_DIMINISHED = "h"
    DIMINISHED_MAJOR = "o^"
    MINOR_MAJOR = "-^"
    SIXTH_NINTH = "69"
    MINOR_SIXTH_NINTH = "-69"


# Qualities whose symbol already spells out the extension
FIXED_QUALITIES: frozenset[Quality] = frozenset({Quality.SIXTH_NINTH, Quality.MINOR_SIXTH_NINTH})


@dataclass(frozen=True)
class Flavor:
    """Chord quality plus its optional primary extension.

    Parameters
    ----------
    quality : Quality
        The chord quality.
    extension : Number | None
        The extension number, e.g. ``Number.SEVEN`` for a seventh chord.
        Must be None for the sixth/ninth qualities.

    Examples
    --------
    >>> str(Flavor(Quality.MINOR, Number.SEVEN))
    '-7'
    >>> str(Flavor(Quality.DOMINANT))
    ''
    """

    quality: Quality = Quality.DOMINANT
    extension: Number | None = None

    def __post_init__(self) -> None:
        if self.quality in FIXED_QUALITIES and self.extension is not None:
            msg = f"{self.quality.name} does not take an extension"
            raise ValueError(msg)

    def __str__(self) -> str:
        if self.extension is None:
            return self.quality.value
        return f"{self.quality.value}{self.extension}"


AlterationKind = Literal["flat", "sharp", "add", "sus", "alt"]

# Protocol prefix written before the number of each alteration kind
ALTERATION_SYMBOLS: dict[str, str] = {
    "flat": "b",
    "sharp": "#",
    "add": "add",
    "sus": "sus",
    "alt": "alt",
}

NUMBERED_ALTERATIONS = frozenset({"flat", "sharp", "add"})


@dataclass(frozen=True)
class AlteredNote:
    """A single alteration written after the chord quality.

    Parameters
    ----------
    kind : AlterationKind
        One of "flat", "sharp", "add", "sus" or "alt".
    number : Number | None
        The altered degree. Required for flat, sharp and add; must be None
        for sus and alt.

    Examples
    --------
    >>> str(AlteredNote("flat", Number.NINE))
    'b9'
    >>> str(AlteredNote("sus"))
    'sus'
    """

    kind: AlterationKind
    number: Number | None = None

    def __post_init__(self) -> None:
        if self.kind not in ALTERATION_SYMBOLS:
            msg = f"Unknown alteration kind: {self.kind}"
            raise ValueError(msg)
        if (self.kind in NUMBERED_ALTERATIONS) != (self.number is not None):
            msg = f"Alteration {self.kind!r} does not match number {self.number}"
            raise ValueError(msg)

    def __str__(self) -> str:
        symbol = ALTERATION_SYMBOLS[self.kind]
        if self.number is None:
            return symbol
        return f"{symbol}{self.number}"


@dataclass(frozen=True)
class Chord:
    """A chord symbol with root, quality, alterations and optional bass.

    Parameters
    ----------
    root : Note
        The root note.
    flavor : Flavor
        Quality and primary extension. Defaults to a plain triad.
    altered_notes : tuple[AlteredNote, ...]
        Alterations in display order.
    bass_note : Note | None
        The slash bass note, if any.

    Examples
    --------
    >>> chord = Chord(Note.A_FLAT, Flavor(Quality.DOMINANT, Number.SEVEN),
    ...               (AlteredNote("flat", Number.NINE), AlteredNote("sharp", Number.FIVE)))
    >>> str(chord)
    'Ab7b9#5'
    >>> str(Chord(Note.W, bass_note=Note.C))
    '/C'
    """

    root: Note
    flavor: Flavor = Flavor()
    altered_notes: tuple[AlteredNote, ...] = ()
    bass_note: Note | None = None

    def _spell(self, root: str, bass: str | None) -> str:
        alterations = "".join(str(a) for a in self.altered_notes)
        result = f"{root}{self.flavor}{alterations}"
        if bass is not None:
            result = f"{result}/{bass}"
        return result

    def to_ireal(self) -> str:
        """Return the chord in protocol notation (e.g., "W/C", "C-7b5")."""
        bass = self.bass_note.value if self.bass_note is not None else None
        return self._spell(self.root.value, bass)

    def __str__(self) -> str:
        bass = str(self.bass_note) if self.bass_note is not None else None
        return self._spell(str(self.root), bass)


@dataclass(frozen=True)
class NoChord:
    """The explicit "no chord" marker (N.C.)."""

    def to_ireal(self) -> str:
        return "n"

    def __str__(self) -> str:
        return "N.C."


NO_CHORD = NoChord()

ChordSymbol = Chord | NoChord
