"""Preset instruments and tunings.

Plain module-level constants; build custom instruments with
:class:`~voicing_engine.instrument.Instrument` / :meth:`Tuning.parse`.
"""

from __future__ import annotations

from .instrument import Instrument, Tuning


# ── Instruments (standard tuning) ─────────────────────────────
GUITAR = Instrument("Guitar", Tuning.parse("Standard", "E2 A2 D3 G3 B3 E4").strings)
BASS = Instrument("Bass", Tuning.parse("Standard", "E1 A1 D2 G2", fret_count=20).strings)
UKULELE = Instrument("Ukulele", Tuning.parse("Standard", "G4 C4 E4 A4", fret_count=15).strings)
CAVAQUINHO = Instrument("Cavaquinho", Tuning.parse("Standard", "D4 G4 B4 D5", fret_count=17).strings)
BANJO = Instrument("Banjo", Tuning.parse("Open G", "G2 D3 G3 B3 D4").strings)
GUITAR_7_STRING = Instrument(
    "7-String Guitar", Tuning.parse("Standard", "B1 E2 A2 D3 G3 B3 E4").strings
)

INSTRUMENTS: dict[str, Instrument] = {
    "guitar": GUITAR,
    "bass": BASS,
    "ukulele": UKULELE,
    "cavaquinho": CAVAQUINHO,
    "banjo": BANJO,
    "guitar7": GUITAR_7_STRING,
}

# ── Tunings, keyed by instrument ──────────────────────────────
TUNINGS: dict[str, dict[str, Tuning]] = {
    "guitar": {
        "standard": Tuning.parse("Standard", "E2 A2 D3 G3 B3 E4"),
        "drop_d": Tuning.parse("Drop D", "D2 A2 D3 G3 B3 E4"),
        "drop_c": Tuning.parse("Drop C", "C2 G2 C3 F3 A3 D4"),
        "open_g": Tuning.parse("Open G", "D2 G2 D3 G3 B3 D4"),
        "open_d": Tuning.parse("Open D", "D2 A2 D3 F#3 A3 D4"),
        "open_e": Tuning.parse("Open E", "E2 B2 E3 G#3 B3 E4"),
        "open_a": Tuning.parse("Open A", "E2 A2 E3 A3 C#4 E4"),
        "dadgad": Tuning.parse("DADGAD", "D2 A2 D3 G3 A3 D4"),
        "half_step_down": Tuning.parse("Half Step Down", "Eb2 Ab2 Db3 Gb3 Bb3 Eb4"),
        "whole_step_down": Tuning.parse("Whole Step Down", "D2 G2 C3 F3 A3 D4"),
        "double_drop_d": Tuning.parse("Double Drop D", "D2 A2 D3 G3 B3 D4"),
        "all_fourths": Tuning.parse("All Fourths", "E2 A2 D3 G3 C4 F4"),
        "new_standard": Tuning.parse("New Standard", "C2 G2 D3 A3 E4 G4"),
    },
    "bass": {
        "standard": Tuning.parse("Standard", "E1 A1 D2 G2", fret_count=20),
        "drop_d": Tuning.parse("Drop D", "D1 A1 D2 G2", fret_count=20),
        "half_step_down": Tuning.parse("Half Step Down", "Eb1 Ab1 Db2 Gb2", fret_count=20),
    },
    "ukulele": {
        "standard": Tuning.parse("Standard", "G4 C4 E4 A4", fret_count=15),
        "low_g": Tuning.parse("Low G", "G3 C4 E4 A4", fret_count=15),
        "d_tuning": Tuning.parse("D Tuning", "A4 D4 F#4 B4", fret_count=15),
        "baritone": Tuning.parse("Baritone", "D3 G3 B3 E4", fret_count=15),
    },
    "cavaquinho": {
        "standard": Tuning.parse("Standard", "D4 G4 B4 D5", fret_count=17),
        "natural": Tuning.parse("Natural", "D4 G4 B4 E5", fret_count=17),
    },
    "banjo": {
        "open_g": Tuning.parse("Open G", "G2 D3 G3 B3 D4"),
        "double_c": Tuning.parse("Double C", "G2 C3 G3 C4 D4"),
        "open_d": Tuning.parse("Open D", "F#2 D3 F#3 A3 D4"),
    },
    "guitar7": {
        "standard": Tuning.parse("Standard", "B1 E2 A2 D3 G3 B3 E4"),
        "drop_a": Tuning.parse("Drop A", "A1 E2 A2 D3 G3 B3 E4"),
    },
}


def get_instrument(key: str) -> Instrument:
    """Look up a preset instrument by key (``"guitar"``, ``"ukulele"`` ...).

    Raises:
        KeyError: If *key* is unknown; the message lists the valid keys.
    """
    try:
        return INSTRUMENTS[key]
    except KeyError:
        raise KeyError(
            f"Unknown instrument '{key}'. Expected one of: {', '.join(INSTRUMENTS)}"
        ) from None


def get_tuning(instrument_key: str, tuning_key: str) -> Tuning:
    """Look up a preset tuning, e.g. ``get_tuning("guitar", "drop_d")``."""
    tunings = TUNINGS.get(instrument_key)
    if tunings is None:
        raise KeyError(
            f"Unknown instrument '{instrument_key}'. Expected one of: {', '.join(TUNINGS)}"
        )
    try:
        return tunings[tuning_key]
    except KeyError:
        raise KeyError(
            f"Unknown tuning '{tuning_key}' for {instrument_key}. "
            f"Expected one of: {', '.join(tunings)}"
        ) from None
