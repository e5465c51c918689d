"""Splitting of ``irealb://`` URLs into songs.

A URL holds one or more songs separated by ``===``; when there is more
than one part, the last one is the collection title. Each song is a run of
``=``-separated positional fields, one of which is the scrambled music.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ireal_parser.chart.models import Music
from ireal_parser.chart.parser import decode_music
from ireal_parser.codec import encode_music, escape, unescape
from ireal_parser.errors import MalformedRecordError

logger = logging.getLogger(__name__)

URL_SCHEME = "irealb://"
SONG_SEPARATOR = "==="
FIELD_SEPARATOR = "="
DEFAULT_COLLECTION_TITLE = "No Title"

# Title, composer, (unused), style, key, transpose, music, comp style, bpm, repeats
SONG_FIELD_COUNT = 10


@dataclass(frozen=True)
class Song:
    """One song of a collection.

    Parameters
    ----------
    title : str
        Song title.
    composer : str
        Composer, usually "Last First".
    style : str
        Style label shown on the chart (e.g., "Medium Swing").
    key : str
        Key signature (e.g., "Db", "C-").
    transpose : str
        Transposition setting, often empty.
    music : Music
        The parsed chart.
    comp_style : str
        Playback style override.
    bpm : int
        Playback tempo; 0 means the style default.
    repeats : str
        Playback repeat count.
    """

    title: str
    composer: str
    style: str
    key: str
    transpose: str
    music: Music
    comp_style: str = ""
    bpm: int = 0
    repeats: str = ""

    def to_text(self) -> str:
        """Return the song's ``=``-separated record (not percent-escaped)."""
        fields = [
            self.title,
            self.composer,
            "",
            self.style,
            self.key,
            self.transpose,
            encode_music(self.music.raw),
            self.comp_style,
            str(self.bpm),
            self.repeats,
        ]
        return FIELD_SEPARATOR.join(fields)


@dataclass(frozen=True)
class Collection:
    """A titled list of songs decoded from one URL."""

    title: str
    songs: tuple[Song, ...]


def parse_song(text: str) -> Song:
    """Parse one percent-decoded song record.

    Raises
    ------
    MalformedRecordError
        If the record has too few fields or a non-numeric tempo.
    FormatError
        If the music field cannot be decoded.
    SemanticError
        If the chart's repeat shorthand cannot be expanded.
    """
    parts = text.split(FIELD_SEPARATOR)
    if len(parts) < SONG_FIELD_COUNT:
        msg = f"Song record has {len(parts)} fields, expected {SONG_FIELD_COUNT}: {text[:40]!r}"
        raise MalformedRecordError(msg)

    bpm_text = parts[8]
    if bpm_text and not bpm_text.isdecimal():
        msg = f"Tempo is not a number: {bpm_text!r}"
        raise MalformedRecordError(msg)

    song = Song(
        title=parts[0],
        composer=parts[1],
        style=parts[3],
        key=parts[4],
        transpose=parts[5],
        music=decode_music(parts[6]),
        comp_style=parts[7],
        bpm=int(bpm_text) if bpm_text else 0,
        repeats=parts[9],
    )
    logger.debug("Decoded %r with %d bars", song.title, len(song.music.bars))
    return song


def parse_url(text: str) -> Collection:
    """Decode an ``irealb://`` URL into a collection of songs.

    Parameters
    ----------
    text : str
        The URL, surrounding whitespace allowed.

    Returns
    -------
    Collection
        The collection title and its songs in order.

    Raises
    ------
    MalformedRecordError
        If the scheme is missing or a song record is malformed.
    IRealError
        For any other decoding failure; the first failing song stops the
        whole collection.
    """
    text = text.strip()
    if not text.startswith(URL_SCHEME):
        msg = f"Expected URL to start with {URL_SCHEME!r}"
        raise MalformedRecordError(msg)

    parts = unescape(text[len(URL_SCHEME) :]).split(SONG_SEPARATOR)
    title = parts.pop() if len(parts) > 1 else DEFAULT_COLLECTION_TITLE

    songs = tuple(parse_song(part) for part in parts)
    return Collection(title=title, songs=songs)


def to_url(collection: Collection) -> str:
    """Encode a collection back into an ``irealb://`` URL."""
    records = [song.to_text() for song in collection.songs]
    records.append(collection.title)
    return URL_SCHEME + escape(SONG_SEPARATOR.join(records))
