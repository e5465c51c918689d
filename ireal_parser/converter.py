"""Chord notation export from iReal chords to Harte and pychord notation.

This module maps the protocol's chord qualities (e.g., "-7", "h7", "^")
onto Harte shorthands (e.g., "min7", "hdim7", "maj7") and pychord quality
names (e.g., "m7", "m7-5", "maj7").
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ireal_parser.models import AlteredNote, Chord, ChordSymbol, NoChord, Note, Number, Quality

if TYPE_CHECKING:
    from pychord import Chord as PyChord

# Harte shorthand for each quality and extension the protocol can spell
FLAVOR_TO_HARTE: dict[tuple[Quality, Number | None], str] = {
    (Quality.DOMINANT, None): "maj",
    (Quality.DOMINANT, Number.FIVE): "5",
    (Quality.DOMINANT, Number.SIX): "maj6",
    (Quality.DOMINANT, Number.SEVEN): "7",
    (Quality.DOMINANT, Number.NINE): "9",
    (Quality.DOMINANT, Number.ELEVEN): "11",
    (Quality.DOMINANT, Number.THIRTEEN): "13",
    (Quality.MAJOR, None): "maj7",
    (Quality.MAJOR, Number.SEVEN): "maj7",
    (Quality.MAJOR, Number.NINE): "maj9",
    (Quality.MAJOR, Number.THIRTEEN): "maj13",
    (Quality.MINOR, None): "min",
    (Quality.MINOR, Number.SIX): "min6",
    (Quality.MINOR, Number.SEVEN): "min7",
    (Quality.MINOR, Number.NINE): "min9",
    (Quality.MINOR, Number.ELEVEN): "min11",
    (Quality.MINOR, Number.THIRTEEN): "min13",
    (Quality.MINOR_MAJOR, None): "minmaj7",
    (Quality.MINOR_MAJOR, Number.SEVEN): "minmaj7",
    (Quality.DIMINISHED, None): "dim",
    (Quality.DIMINISHED, Number.SEVEN): "dim7",
    (Quality.HALF_DIMINISHED, None): "hdim7",
    (Quality.HALF_DIMINISHED, Number.SEVEN): "hdim7",
    (Quality.AUGMENTED, None): "aug",
    (Quality.AUGMENTED, Number.SEVEN): "aug7",
    (Quality.SIXTH_NINTH, None): "maj6(9)",
    (Quality.MINOR_SIXTH_NINTH, None): "min6(9)",
}

# pychord quality for each Harte shorthand above
HARTE_TO_PYCHORD_QUALITY: dict[str, str] = {
    "maj": "",
    "5": "5",
    "maj6": "6",
    "7": "7",
    "9": "9",
    "11": "11",
    "13": "13",
    "maj7": "maj7",
    "maj9": "maj9",
    "maj13": "maj13",
    "min": "m",
    "min6": "m6",
    "min7": "m7",
    "min9": "m9",
    "min11": "m11",
    "min13": "m13",
    "minmaj7": "mmaj7",
    "dim": "dim",
    "dim7": "dim7",
    "hdim7": "m7-5",
    "aug": "aug",
    "aug7": "aug7",
    "maj6(9)": "69",
    "min6(9)": "m69",
}

# Harte degrees added by the bare alterations
BARE_ALTERATION_DEGREES: dict[str, tuple[str, ...]] = {
    "sus": ("*3", "4"),
    "alt": ("b9", "#9", "b13"),
}


def flavor_to_harte(chord: Chord) -> str:
    """Return the Harte shorthand for a chord's flavor.

    Raises
    ------
    ValueError
        If the quality/extension pair has no Harte shorthand.

    Examples
    --------
    >>> from ireal_parser.models import Flavor
    >>> flavor_to_harte(Chord(Note.C, Flavor(Quality.HALF_DIMINISHED, Number.SEVEN)))
    'hdim7'
    """
    key = (chord.flavor.quality, chord.flavor.extension)
    if key in FLAVOR_TO_HARTE:
        return FLAVOR_TO_HARTE[key]
    msg = f"Unsupported flavor for Harte notation: {chord.flavor.quality.name} {chord.flavor.extension}"
    raise ValueError(msg)


def alteration_to_harte(alteration: AlteredNote) -> tuple[str, ...]:
    """Return the Harte degree list for one alteration."""
    if alteration.kind in BARE_ALTERATION_DEGREES:
        return BARE_ALTERATION_DEGREES[alteration.kind]
    prefix = {"flat": "b", "sharp": "#", "add": ""}[alteration.kind]
    return (f"{prefix}{alteration.number}",)


def _require_root(chord: ChordSymbol) -> Chord:
    if isinstance(chord, NoChord):
        msg = "No chord has no root"
        raise ValueError(msg)
    if chord.root is Note.W:
        msg = f"Chord {chord} has no root"
        raise ValueError(msg)
    return chord


def to_harte(chord: ChordSymbol) -> str:
    """Convert a chord to Harte notation.

    Parameters
    ----------
    chord : ChordSymbol
        The chord. No-chord converts to Harte's ``N``.

    Returns
    -------
    str
        Chord in Harte notation (e.g., "G:min7", "Ab:7(b9,#5)").

    Raises
    ------
    ValueError
        If the chord has no root or an unsupported flavor.

    Examples
    --------
    >>> from ireal_parser.models import Flavor
    >>> to_harte(Chord(Note.G, Flavor(Quality.MINOR, Number.SEVEN)))
    'G:min7'
    """
    if isinstance(chord, NoChord):
        return "N"
    chord = _require_root(chord)

    shorthand = flavor_to_harte(chord)
    degrees = [d for alteration in chord.altered_notes for d in alteration_to_harte(alteration)]

    result = f"{chord.root.value}:{shorthand}"
    if degrees:
        if result.endswith(")"):
            result = f"{result[:-1]},{','.join(degrees)})"
        else:
            result = f"{result}({','.join(degrees)})"
    if chord.bass_note is not None:
        result = f"{result}/{chord.bass_note.value}"
    return result


def to_pychord(chord: ChordSymbol) -> str:
    """Convert a chord to pychord notation.

    Alterations are appended in protocol order (``sus`` as ``sus4``).

    Raises
    ------
    ValueError
        If the chord is no-chord, has no root, or has an unsupported flavor.

    Examples
    --------
    >>> from ireal_parser.models import Flavor
    >>> to_pychord(Chord(Note.C, Flavor(Quality.HALF_DIMINISHED, Number.SEVEN)))
    'Cm7-5'
    """
    chord = _require_root(chord)

    quality = HARTE_TO_PYCHORD_QUALITY[flavor_to_harte(chord)]
    suffix = "".join("sus4" if a.kind == "sus" else str(a) for a in chord.altered_notes)

    result = f"{chord.root.value}{quality}{suffix}"
    if chord.bass_note is not None and chord.bass_note is not Note.W:
        result = f"{result}/{chord.bass_note.value}"
    return result


def as_pychord(chord: ChordSymbol) -> PyChord:
    """Build a ``pychord.Chord`` for a chord.

    Raises
    ------
    ValueError
        If the chord cannot be spelled for pychord, or pychord rejects the
        spelling.
    """
    from pychord import Chord as PyChord

    return PyChord(to_pychord(chord))
