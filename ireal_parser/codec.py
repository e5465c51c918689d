"""Transport encoding of iReal chart payloads.

A chart travels inside a URL: the whole URL is percent-escaped, and each
song's music field starts with a fixed marker followed by text scrambled in
50-character blocks. This module undoes (and redoes) both layers.

Examples
--------
>>> unescape("Medium%20Swing")
'Medium Swing'
>>> descramble(descramble("any text at all")) == "any text at all"
True
"""

from __future__ import annotations

import string

from ireal_parser.errors import InvalidHexDigitError, MissingMarkerError, TruncatedEscapeError

# Every music field starts with this marker
MUSIC_PREFIX = "1r34LbKcu7"

# Scrambling works on blocks of this many characters
BLOCK_SIZE = 50

# Mirror-swapped index ranges inside one block
_SWAPPED_RANGES = (range(0, 5), range(10, 24))

# Characters left as-is by escape()
SAFE_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-_.~=")


def obfuscate_block(block: str) -> str:
    """Apply the fixed block permutation to exactly one block.

    Characters ``i`` and ``49 - i`` are swapped for ``i`` in ``0..4`` and
    ``10..23``. The permutation is made of disjoint swaps, so it is its own
    inverse.

    Parameters
    ----------
    block : str
        A block of exactly :data:`BLOCK_SIZE` characters.

    Returns
    -------
    str
        The permuted block.

    Raises
    ------
    ValueError
        If the block has the wrong length.

    Examples
    --------
    >>> block = "".join(chr(ord("0") + i) for i in range(50))
    >>> obfuscate_block(obfuscate_block(block)) == block
    True
    """
    if len(block) != BLOCK_SIZE:
        msg = f"Block must be {BLOCK_SIZE} characters, got {len(block)}"
        raise ValueError(msg)

    chars = list(block)
    last = BLOCK_SIZE - 1
    for indices in _SWAPPED_RANGES:
        for i in indices:
            chars[i], chars[last - i] = chars[last - i], chars[i]
    return "".join(chars)


def descramble(text: str) -> str:
    """Reverse the block scrambling of a music field (marker already removed).

    The text is consumed in 50-character blocks while more than 50
    characters remain. A block is permuted only if at least two characters
    follow it; the final block in that position and the short remainder are
    copied through. Block boundaries depend only on the length, so the same
    function scrambles and descrambles.

    Parameters
    ----------
    text : str
        Scrambled text. Works on characters, not bytes.

    Returns
    -------
    str
        The unscrambled text.
    """
    parts: list[str] = []
    remainder = text

    while len(remainder) > BLOCK_SIZE:
        block = remainder[:BLOCK_SIZE]
        remainder = remainder[BLOCK_SIZE:]

        if len(remainder) < 2:
            parts.append(block)
        else:
            parts.append(obfuscate_block(block))

    parts.append(remainder)
    return "".join(parts)


# The transform is an involution
scramble = descramble


def strip_marker(blob: str) -> str:
    """Verify and remove the :data:`MUSIC_PREFIX` marker.

    Raises
    ------
    MissingMarkerError
        If the blob does not start with the marker.
    """
    if not blob.startswith(MUSIC_PREFIX):
        raise MissingMarkerError(MUSIC_PREFIX)
    return blob[len(MUSIC_PREFIX) :]


def encode_music(raw: str) -> str:
    """Build a music field from plain chart text (inverse of marker + descramble)."""
    return MUSIC_PREFIX + scramble(raw)


def hex_digit_value(char: str) -> int:
    """Return the value of one hexadecimal digit.

    Parameters
    ----------
    char : str
        A single character, ``0-9``, ``a-f`` or ``A-F``.

    Returns
    -------
    int
        The digit value, 0 to 15.

    Raises
    ------
    InvalidHexDigitError
        For any other character.

    Examples
    --------
    >>> hex_digit_value("b")
    11
    >>> hex_digit_value("F")
    15
    """
    if len(char) != 1 or char not in string.hexdigits:
        raise InvalidHexDigitError(char)
    return int(char, 16)


def unescape(text: str) -> str:
    """Decode ``%XX`` escapes; everything else passes through.

    Each escape becomes the single character with code point ``0xXX``.

    Parameters
    ----------
    text : str
        Percent-escaped text.

    Returns
    -------
    str
        The decoded text.

    Raises
    ------
    InvalidHexDigitError
        If a character after ``%`` is not a hex digit.
    TruncatedEscapeError
        If the text ends inside an escape.
    """
    result: list[str] = []
    state = "plain"
    value = 0
    escape_start = 0

    for i, char in enumerate(text):
        if state == "plain":
            if char == "%":
                state = "percent"
                escape_start = i
            else:
                result.append(char)
        elif state == "percent":
            value = 16 * hex_digit_value(char)
            state = "first_digit"
        else:
            value += hex_digit_value(char)
            result.append(chr(value))
            state = "plain"

    if state != "plain":
        raise TruncatedEscapeError(escape_start)

    return "".join(result)


def escape(text: str) -> str:
    """Percent-escape text so that :func:`unescape` restores it.

    Letters, digits and ``-_.~=`` are kept. Characters above U+00FF cannot be
    written as a two-digit escape and are kept as well.
    """
    return "".join(
        char if char in SAFE_CHARACTERS or ord(char) > 0xFF else f"%{ord(char):02X}"
        for char in text
    )
