"""Tests for the chord data models."""

import pytest

from ireal_parser.models import NO_CHORD, AlteredNote, Chord, Flavor, NoChord, Note, Number, Quality


class TestNote:
    """Note spelling tests."""

    @pytest.mark.parametrize("spelling", ["Ab", "A", "A#", "Bb", "Cb", "C#", "Gb", "G#"])
    def test_lookup_by_spelling(self, spelling: str) -> None:
        """Notes are valued by their protocol spelling."""
        assert Note(spelling).value == spelling
        assert str(Note(spelling)) == spelling

    def test_no_root_displays_empty(self) -> None:
        """The W placeholder shows as nothing."""
        assert str(Note.W) == ""
        assert Note.W.value == "W"


class TestFlavor:
    """Flavor serialization tests."""

    @pytest.mark.parametrize(
        ("flavor", "expected"),
        [
            (Flavor(Quality.MAJOR, Number.SEVEN), "^7"),
            (Flavor(Quality.MAJOR), "^"),
            (Flavor(Quality.MINOR, Number.SEVEN), "-7"),
            (Flavor(Quality.MINOR), "-"),
            (Flavor(Quality.DOMINANT, Number.SEVEN), "7"),
            (Flavor(Quality.DOMINANT, Number.THIRTEEN), "13"),
            (Flavor(Quality.DOMINANT), ""),
            (Flavor(Quality.AUGMENTED), "+"),
            (Flavor(Quality.DIMINISHED, Number.SEVEN), "o7"),
            (Flavor(Quality.HALF_DIMINISHED, Number.SEVEN), "h7"),
            (Flavor(Quality.DIMINISHED_MAJOR, Number.SEVEN), "o^7"),
            (Flavor(Quality.MINOR_MAJOR, Number.SEVEN), "-^7"),
            (Flavor(Quality.SIXTH_NINTH), "69"),
            (Flavor(Quality.MINOR_SIXTH_NINTH), "-69"),
        ],
    )
    def test_symbols(self, flavor: Flavor, expected: str) -> None:
        """Each quality uses the protocol symbol."""
        assert str(flavor) == expected

    def test_default_is_plain_triad(self) -> None:
        """The default flavor is a dominant without extension."""
        assert Flavor() == Flavor(Quality.DOMINANT, None)

    def test_sixth_ninth_rejects_extension(self) -> None:
        """Sixth/ninth qualities cannot carry an extension."""
        with pytest.raises(ValueError, match="does not take an extension"):
            Flavor(Quality.SIXTH_NINTH, Number.SEVEN)


class TestAlteredNote:
    """Alteration tests."""

    @pytest.mark.parametrize(
        ("alteration", "expected"),
        [
            (AlteredNote("flat", Number.NINE), "b9"),
            (AlteredNote("sharp", Number.ELEVEN), "#11"),
            (AlteredNote("add", Number.NINE), "add9"),
            (AlteredNote("sus"), "sus"),
            (AlteredNote("alt"), "alt"),
        ],
    )
    def test_symbols(self, alteration: AlteredNote, expected: str) -> None:
        """Alterations serialize to protocol text."""
        assert str(alteration) == expected

    def test_flat_requires_number(self) -> None:
        """Numbered alterations need a number."""
        with pytest.raises(ValueError):
            AlteredNote("flat")

    def test_sus_rejects_number(self) -> None:
        """Bare alterations take no number."""
        with pytest.raises(ValueError):
            AlteredNote("sus", Number.TWO)

    def test_unknown_kind(self) -> None:
        """Unknown kinds are rejected."""
        with pytest.raises(ValueError, match="Unknown alteration kind"):
            AlteredNote("double-flat", Number.FIVE)  # type: ignore[arg-type]


class TestChord:
    """Chord serialization and equality tests."""

    def test_altered_dominant(self) -> None:
        """Alterations display in insertion order."""
        chord = Chord(
            Note.A_FLAT,
            Flavor(Quality.DOMINANT, Number.SEVEN),
            (AlteredNote("flat", Number.NINE), AlteredNote("sharp", Number.FIVE)),
        )
        assert str(chord) == "Ab7b9#5"
        assert chord.to_ireal() == "Ab7b9#5"

    def test_alteration_order_is_significant(self) -> None:
        """Reordered alterations make a different chord."""
        a = Chord(Note.C, Flavor(Quality.DOMINANT, Number.SEVEN), (AlteredNote("flat", Number.NINE), AlteredNote("sharp", Number.FIVE)))
        b = Chord(Note.C, Flavor(Quality.DOMINANT, Number.SEVEN), (AlteredNote("sharp", Number.FIVE), AlteredNote("flat", Number.NINE)))
        assert a != b
        assert str(a) == "C7b9#5"
        assert str(b) == "C7#5b9"

    def test_slash_chord(self) -> None:
        """Bass notes follow a slash."""
        chord = Chord(Note.C, Flavor(Quality.MINOR, Number.SEVEN), bass_note=Note.B_FLAT)
        assert str(chord) == "C-7/Bb"

    def test_no_root_slash(self) -> None:
        """A W root displays as a bare slash bass but encodes as W."""
        chord = Chord(Note.W, bass_note=Note.C)
        assert str(chord) == "/C"
        assert chord.to_ireal() == "W/C"

    def test_plain_triad(self) -> None:
        """A chord with defaults is just its root."""
        assert str(Chord(Note.G)) == "G"

    def test_structural_equality(self) -> None:
        """Equal fields mean equal, hashable chords."""
        a = Chord(Note.D, Flavor(Quality.DOMINANT, Number.SEVEN), (AlteredNote("sus"),))
        b = Chord(Note.D, Flavor(Quality.DOMINANT, Number.SEVEN), (AlteredNote("sus"),))
        assert a == b
        assert len({a, b}) == 1

    def test_no_chord(self) -> None:
        """No-chord displays as N.C. and encodes as n."""
        assert str(NO_CHORD) == "N.C."
        assert NO_CHORD.to_ireal() == "n"
        assert NoChord() == NO_CHORD
        assert NO_CHORD != Chord(Note.C)
