"""Decoder for iReal chord chart URLs.

This library decodes the chord-chart format embedded in ``irealb://`` URLs
into bars of chords, and renders parsed charts back into a fixed-width
text layout.

Examples
--------
>>> from ireal_parser import parse_url

>>> collection = parse_url(url)  # doctest: +SKIP
>>> song = collection.songs[0]  # doctest: +SKIP
>>> [str(chord) for chord in song.music.bars[0].chords]  # doctest: +SKIP
['Db7']

>>> # Work directly on descrambled chart text
>>> from ireal_parser import parse, render
>>> music = parse("*AT44C^7XyQ|D-7 G7Z")
>>> len(music.bars)
2
"""

from ireal_parser.chart import decode_music, parse, parse_tokens, render, tokenize
from ireal_parser.codec import descramble, escape, scramble, unescape
from ireal_parser.converter import to_harte, to_pychord
from ireal_parser.errors import (
    FormatError,
    InsufficientHistoryError,
    InvalidHexDigitError,
    IRealError,
    MalformedRecordError,
    MissingMarkerError,
    NoPriorBarError,
    SemanticError,
    SlotOverflowError,
    TruncatedEscapeError,
    UnrecognizedInputError,
)
from ireal_parser.models import NO_CHORD, AlteredNote, Chord, Flavor, NoChord, Note, Number, Quality
from ireal_parser.url import Collection, Song, parse_url, to_url

__all__ = [
    "NO_CHORD",
    "AlteredNote",
    "Chord",
    "Collection",
    "Flavor",
    "FormatError",
    "IRealError",
    "InsufficientHistoryError",
    "InvalidHexDigitError",
    "MalformedRecordError",
    "MissingMarkerError",
    "NoChord",
    "NoPriorBarError",
    "Note",
    "Number",
    "Quality",
    "SemanticError",
    "SlotOverflowError",
    "Song",
    "TruncatedEscapeError",
    "UnrecognizedInputError",
    "decode_music",
    "descramble",
    "escape",
    "parse",
    "parse_tokens",
    "parse_url",
    "render",
    "scramble",
    "tokenize",
    "to_harte",
    "to_pychord",
    "to_url",
]
