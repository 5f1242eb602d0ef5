"""Tests for voicing_engine.voicing."""

import pytest

from voicing_engine.chord import Chord
from voicing_engine.difficulty import Difficulty
from voicing_engine.pitch import PitchClass as P
from voicing_engine.voicing import (
    MUTED,
    OPEN,
    Barre,
    Fretted,
    Muted,
    Open,
    Voicing,
    detect_barre,
    position_for_fret,
)


# ---------------------------------------------------------------------------
# String positions
# ---------------------------------------------------------------------------


class TestStringPosition:
    def test_variants(self):
        assert MUTED.is_muted and not MUTED.is_played
        assert OPEN.is_open and OPEN.is_played
        assert Fretted(3).is_fretted and Fretted(3).is_played

    def test_fret_values(self):
        assert MUTED.fret is None
        assert OPEN.fret == 0
        assert Fretted(7).fret == 7

    def test_variants_are_distinct(self):
        assert Muted() != Open()
        assert Fretted(2) == Fretted(2)
        assert Fretted(2) != Fretted(2, finger=1)

    def test_fretted_needs_positive_fret(self):
        with pytest.raises(ValueError):
            Fretted(0)

    def test_finger_range(self):
        with pytest.raises(ValueError):
            Fretted(3, finger=5)

    def test_position_for_fret(self):
        assert position_for_fret(None) == MUTED
        assert position_for_fret(-1) == MUTED
        assert position_for_fret(0) == OPEN
        assert position_for_fret(4) == Fretted(4)


class TestBarre:
    def test_string_count(self):
        assert Barre(fret=1, from_string=0, to_string=5).string_count == 6

    def test_invalid_fret(self):
        with pytest.raises(ValueError):
            Barre(fret=0, from_string=0, to_string=1)

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            Barre(fret=2, from_string=3, to_string=2)

    def test_barre_beyond_voicing(self):
        with pytest.raises(ValueError, match="Barre reaches"):
            Voicing.from_frets([1, 1, 1, 1], barre=Barre(fret=1, from_string=0, to_string=5))


# ---------------------------------------------------------------------------
# Parsing and formatting
# ---------------------------------------------------------------------------


class TestParse:
    def test_compact(self, am_open):
        assert am_open.positions == (MUTED, OPEN, Fretted(2), Fretted(2), Fretted(1), OPEN)

    def test_parenthesised_high_frets(self):
        voicing = Voicing.parse("X0(10)(10)90")
        assert [p.fret for p in voicing.positions] == [None, 0, 10, 10, 9, 0]

    def test_delimited(self):
        assert Voicing.parse("x-0-10-10-9-0").to_compact_string() == "X0(10)(10)90"

    def test_round_trip(self):
        for text in ("X02210", "133211", "XX0232", "X0(12)(12)(12)X"):
            assert Voicing.parse(text).to_compact_string() == text

    def test_invalid(self):
        with pytest.raises(ValueError):
            Voicing.parse("X0Z210")
        with pytest.raises(ValueError):
            Voicing.parse("")


# ---------------------------------------------------------------------------
# Derived properties
# ---------------------------------------------------------------------------


class TestGeometry:
    def test_counts(self, am_open):
        assert am_open.string_count == 6
        assert am_open.played_string_count == 5
        assert am_open.muted_string_count == 1
        assert am_open.fretted_string_count == 3
        assert am_open.open_string_count == 2

    def test_frets_and_span(self, c_open):
        assert c_open.lowest_fret == 1
        assert c_open.highest_fret == 3
        assert c_open.fret_span == 2

    def test_all_open(self):
        voicing = Voicing.parse("000000")
        assert voicing.lowest_fret is None
        assert voicing.fret_span == 0
        assert voicing.is_all_open

    def test_fretted_shape_ignores_open_and_muted(self, am_open):
        assert am_open.fretted_shape == frozenset({(2, 2), (3, 2), (4, 1)})
        assert Voicing.parse("X0221X").fretted_shape == am_open.fretted_shape

    def test_interior_mutes(self):
        assert Voicing.parse("3X0003").interior_muted_strings == (1,)
        assert Voicing.parse("X3X0X3").interior_muted_strings == (2, 4)
        assert not Voicing.parse("XX0232").has_interior_mutes


class TestFingers:
    @pytest.mark.parametrize(
        "text, fingers",
        [
            ("X02210", 3),
            ("X32010", 3),
            ("320003", 3),
            ("133211", 6),  # higher frets inside the range: no barre
            ("XX0232", 3),
            ("X02220", 1),
            ("202XXX", 1),  # open string inside the range keeps the barre
            ("X2323X", 4),
            ("X23231", 5),
            ("555X7X", 2),
            ("2233XX", 3),
            ("X00000", 0),
        ],
    )
    def test_fingers_required(self, text, fingers):
        assert Voicing.parse(text).fingers_required == fingers

    def test_zero_iff_nothing_fretted(self):
        for text in ("X02210", "000000", "XXX000", "X3X0X3"):
            voicing = Voicing.parse(text)
            assert (voicing.fingers_required == 0) == (voicing.fretted_string_count == 0)


class TestDifficulty:
    def test_am_open_is_beginner(self, am_open):
        assert am_open.difficulty_score == 19
        assert am_open.difficulty == Difficulty.BEGINNER

    def test_c_open_is_intermediate(self, c_open):
        assert c_open.difficulty_score == 29
        assert c_open.difficulty == Difficulty.INTERMEDIATE

    def test_other_open_shapes(self):
        assert Voicing.parse("022100").difficulty_score == 16
        assert Voicing.parse("320003").difficulty_score == 25

    def test_full_barre_is_advanced(self, f_barre):
        assert f_barre.difficulty_score == 80
        assert f_barre.difficulty == Difficulty.ADVANCED

    def test_interior_mute_penalty(self):
        assert Voicing.parse("3X0003").difficulty_score == 25

    def test_score_is_floored_at_zero(self):
        assert Voicing.parse("000000").difficulty_score == 0

    def test_implied_barre(self):
        implied = Voicing.parse("X02220").with_implied_barre()
        assert implied.barre == Barre(fret=2, from_string=2, to_string=4)
        assert implied.requires_barre

    def test_no_implied_barre_over_higher_frets(self):
        full_f = Voicing.parse("133211")
        assert full_f.with_implied_barre() is full_f

    def test_no_implied_barre_on_open_shape(self, am_open):
        assert am_open.with_implied_barre() is am_open

    def test_detect_barre(self, am_open):
        assert detect_barre(Voicing.parse("202XXX")) == Barre(fret=2, from_string=0, to_string=2)
        assert detect_barre(Voicing.parse("XX3211")) == Barre(fret=1, from_string=4, to_string=5)
        assert detect_barre(Voicing.parse("XX0232")) is None
        assert detect_barre(Voicing.parse("X2323X")) is None
        assert detect_barre(am_open) is None


# ---------------------------------------------------------------------------
# Sounding notes
# ---------------------------------------------------------------------------


class TestSounding:
    def test_pitch_classes(self, am_open, guitar):
        assert am_open.pitch_classes_on(guitar) == [P.A, P.E, P.A, P.C, P.E]
        assert am_open.bass_pitch_on(guitar) == P.A

    def test_midi_notes(self, am_open, guitar):
        assert am_open.midi_notes_on(guitar) == [45, 52, 57, 60, 64]

    def test_capo_raises_pitch(self, am_open, guitar):
        assert am_open.bass_pitch_on(guitar.with_capo(2)) == P.B

    def test_all_muted_has_no_bass(self, guitar):
        assert Voicing.parse("XXXXXX").bass_pitch_on(guitar) is None

    def test_string_count_mismatch(self, guitar):
        with pytest.raises(ValueError, match="positions"):
            Voicing.parse("0003").pitch_classes_on(guitar)

    def test_plays_chord(self, am_open, c_open, guitar):
        assert am_open.plays_chord(Chord.parse("Am"), guitar)
        assert c_open.plays_chord(Chord.parse("C"), guitar)
        assert not am_open.plays_chord(Chord.parse("C"), guitar)
