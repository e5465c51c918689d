"""Tests for percent-decoding and block descrambling."""

import string

import pytest

from ireal_parser.codec import (
    BLOCK_SIZE,
    MUSIC_PREFIX,
    descramble,
    encode_music,
    escape,
    hex_digit_value,
    obfuscate_block,
    scramble,
    strip_marker,
    unescape,
)
from ireal_parser.errors import InvalidHexDigitError, MissingMarkerError, TruncatedEscapeError

# 50 distinct characters so every swap is visible
DISTINCT_BLOCK = (string.ascii_letters + string.digits)[:BLOCK_SIZE]


class TestObfuscateBlock:
    """Block permutation tests."""

    def test_involution(self) -> None:
        """Applying the permutation twice is the identity."""
        assert obfuscate_block(obfuscate_block(DISTINCT_BLOCK)) == DISTINCT_BLOCK

    def test_involution_non_ascii(self) -> None:
        """The permutation works on characters, not bytes."""
        block = "é♯𝄌" * 16 + "ab"
        assert len(block) == BLOCK_SIZE
        assert obfuscate_block(obfuscate_block(block)) == block

    def test_swapped_positions(self) -> None:
        """Positions 0-4 and 10-23 are mirror-swapped; the rest stay."""
        result = obfuscate_block(DISTINCT_BLOCK)
        for i in range(BLOCK_SIZE):
            mirrored = BLOCK_SIZE - 1 - i
            if i < 5 or i >= 45 or 10 <= i < 24 or 26 <= i < 40:
                assert result[i] == DISTINCT_BLOCK[mirrored]
            else:
                assert result[i] == DISTINCT_BLOCK[i]

    def test_middle_untouched(self) -> None:
        """Characters 24 and 25 never move."""
        result = obfuscate_block(DISTINCT_BLOCK)
        assert result[24:26] == DISTINCT_BLOCK[24:26]
        assert result[5:10] == DISTINCT_BLOCK[5:10]

    @pytest.mark.parametrize("length", [0, 49, 51])
    def test_wrong_length(self, length: int) -> None:
        """Only exact blocks are accepted."""
        with pytest.raises(ValueError, match="Block must be"):
            obfuscate_block("x" * length)


class TestDescramble:
    """Whole-text descrambling tests."""

    def test_short_text_unchanged(self) -> None:
        """Text of one block or less passes through."""
        assert descramble("abc") == "abc"
        assert descramble(DISTINCT_BLOCK) == DISTINCT_BLOCK

    def test_block_followed_by_one_char_unchanged(self) -> None:
        """A block with fewer than two trailing characters is not permuted."""
        text = DISTINCT_BLOCK + "!"
        assert descramble(text) == text

    def test_block_followed_by_two_chars_permuted(self) -> None:
        """A block with two or more characters after it is permuted."""
        text = DISTINCT_BLOCK + "!?"
        assert descramble(text) == obfuscate_block(DISTINCT_BLOCK) + "!?"

    def test_multiple_blocks(self) -> None:
        """Each full block is permuted independently."""
        text = DISTINCT_BLOCK * 3 + "tail"
        expected = obfuscate_block(DISTINCT_BLOCK) * 3 + "tail"
        assert descramble(text) == expected

    @pytest.mark.parametrize("length", [0, 1, 50, 51, 52, 99, 100, 101, 102, 184])
    def test_involution(self, length: int) -> None:
        """Descrambling twice restores any text."""
        text = (DISTINCT_BLOCK * 4)[:length]
        assert descramble(descramble(text)) == text

    def test_scramble_is_descramble(self) -> None:
        """One function serves both directions."""
        assert scramble is descramble


class TestMarker:
    """Music marker handling."""

    def test_strip(self) -> None:
        """The marker is removed."""
        assert strip_marker(MUSIC_PREFIX + "C7") == "C7"

    def test_missing(self) -> None:
        """A blob without the marker is rejected."""
        with pytest.raises(MissingMarkerError) as excinfo:
            strip_marker("1r34LbKcu8C7")
        assert excinfo.value.marker == MUSIC_PREFIX

    def test_encode_music_roundtrip(self) -> None:
        """Encoding then stripping and descrambling restores the text."""
        raw = "{*AT44" + "C^7XyQ|" * 20 + "Z"
        assert descramble(strip_marker(encode_music(raw))) == raw


class TestHexDigitValue:
    """Hex digit tests."""

    @pytest.mark.parametrize(
        ("char", "value"),
        [("0", 0), ("9", 9), ("a", 10), ("f", 15), ("A", 10), ("F", 15), ("c", 12), ("D", 13)],
    )
    def test_valid(self, char: str, value: int) -> None:
        """Digits and both letter cases are accepted."""
        assert hex_digit_value(char) == value

    @pytest.mark.parametrize("char", ["g", "G", "z", " ", "%", "-", "é", ""])
    def test_invalid(self, char: str) -> None:
        """Anything else is rejected."""
        with pytest.raises(InvalidHexDigitError) as excinfo:
            hex_digit_value(char)
        assert excinfo.value.char == char


class TestUnescape:
    """Percent-decoding tests."""

    def test_passthrough(self) -> None:
        """Text without escapes is unchanged."""
        text = "Work=Monk Thelonious==Medium Swing"
        assert unescape(text) == text

    def test_escapes(self) -> None:
        """Escapes decode to single characters."""
        assert unescape("Medium%20Swing%7C%5b%2A") == "Medium Swing|[*"

    def test_invalid_digit(self) -> None:
        """A bad digit after % fails."""
        with pytest.raises(InvalidHexDigitError):
            unescape("abc%2Gdef")

    @pytest.mark.parametrize(("text", "position"), [("abc%", 3), ("abc%2", 3), ("%", 0)])
    def test_truncated(self, text: str, position: int) -> None:
        """An escape cut off by the end of input fails."""
        with pytest.raises(TruncatedEscapeError) as excinfo:
            unescape(text)
        assert excinfo.value.position == position


class TestEscape:
    """Percent-encoding tests."""

    def test_safe_characters_kept(self) -> None:
        """Letters, digits and = are not escaped."""
        assert escape("Work=Monk") == "Work=Monk"

    def test_reserved_characters(self) -> None:
        """Spaces, bar lines and percent signs are escaped."""
        assert escape("a b|%") == "a%20b%7C%25"

    def test_roundtrip(self) -> None:
        """unescape() restores escaped text."""
        text = "{*AT44Db7 XyQ|<D.C. al Coda>Z é"
        assert unescape(escape(text)) == text
