"""Tests for voicing_engine.instrument and voicing_engine.presets."""

import pytest

from voicing_engine.instrument import Instrument, StringConfig, Tuning
from voicing_engine.pitch import PitchClass as P
from voicing_engine.presets import (
    GUITAR,
    INSTRUMENTS,
    TUNINGS,
    UKULELE,
    get_instrument,
    get_tuning,
)


def test_guitar_standard_tuning() -> None:
    assert GUITAR.string_count == 6
    assert [s.open_note for s in GUITAR.strings] == [P.E, P.A, P.D, P.G, P.B, P.E]
    assert str(GUITAR) == "Guitar (E2 A2 D3 G3 B3 E4)"


def test_open_string_midi_numbers() -> None:
    assert GUITAR.strings[0].midi_number == 40
    assert GUITAR.sounding_midi_number(5, 0) == 64
    assert UKULELE.strings[1].midi_number == 60


def test_sounding_pitch_class() -> None:
    assert GUITAR.sounding_pitch_class(0, 5) == P.A
    assert GUITAR.sounding_pitch_class(4, 1) == P.C


def test_capo_shifts_every_string() -> None:
    capo2 = GUITAR.with_capo(2)
    assert capo2.sounding_pitch_class(0, 0) == P.F_SHARP
    assert capo2.sounding_midi_number(0, 0) == 42
    assert capo2.fret_limit(0) == 20
    assert str(capo2).endswith("capo 2)")


def test_capo_validation() -> None:
    with pytest.raises(ValueError, match="Capo must be >= 0"):
        GUITAR.with_capo(-1)
    with pytest.raises(ValueError, match="beyond"):
        UKULELE.with_capo(16)


def test_note_at_fret_range() -> None:
    low_e = StringConfig.parse("E2")
    assert low_e.note_at_fret(12) == P.E
    with pytest.raises(ValueError, match="out of range"):
        low_e.note_at_fret(23)
    with pytest.raises(ValueError):
        low_e.note_at_fret(-1)


def test_tuning_apply() -> None:
    drop_d = get_tuning("guitar", "drop_d").apply_to(GUITAR)
    assert drop_d.strings[0].open_note == P.D
    assert drop_d.name == "Guitar"


def test_tuning_apply_string_count_mismatch() -> None:
    with pytest.raises(ValueError, match="strings"):
        TUNINGS["bass"]["standard"].apply_to(GUITAR)


def test_with_tuning_from_string_keeps_fret_counts() -> None:
    tuned = UKULELE.with_tuning_from_string("G3 C4 E4 A4")
    assert tuned.strings[0].octave == 3
    assert all(s.fret_count == 15 for s in tuned.strings)
    with pytest.raises(ValueError):
        GUITAR.with_tuning_from_string("E2 A2 D3")


def test_tuning_parse_and_str() -> None:
    tuning = Tuning.parse("Open G", "D2 G2 D3 G3 B3 D4")
    assert tuning.string_count == 6
    assert str(tuning) == "Open G (D2 G2 D3 G3 B3 D4)"


def test_every_preset_tuning_fits_its_instrument() -> None:
    for key, tunings in TUNINGS.items():
        instrument = INSTRUMENTS[key]
        for tuning in tunings.values():
            assert tuning.apply_to(instrument).string_count == instrument.string_count


def test_unknown_preset_keys() -> None:
    with pytest.raises(KeyError, match="guitar"):
        get_instrument("kazoo")
    with pytest.raises(KeyError, match="drop_d"):
        get_tuning("guitar", "open_x")
    with pytest.raises(KeyError):
        get_tuning("kazoo", "standard")


def test_empty_instrument_is_allowed() -> None:
    assert Instrument("Empty", ()).string_count == 0
