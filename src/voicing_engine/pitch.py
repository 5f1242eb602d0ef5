"""Pitch classes — the 12 chromatic note names, without octave.

Provides:
    PitchClass   – IntEnum C..B with modular transposition
    parse_note   – octave-qualified note names ("E2", "Eb4") via *pretty_midi*
"""

from __future__ import annotations

from enum import IntEnum

import pretty_midi


SEMITONES_PER_OCTAVE: int = 12

# Display names, sharp spelling (index 0 = C)
_SYMBOLS: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Every accepted spelling, lower-cased
_ALIASES: dict[str, int] = {
    "c": 0, "b#": 0,
    "c#": 1, "db": 1,
    "d": 2,
    "d#": 3, "eb": 3,
    "e": 4, "fb": 4,
    "f": 5, "e#": 5,
    "f#": 6, "gb": 6,
    "g": 7,
    "g#": 8, "ab": 8,
    "a": 9,
    "a#": 10, "bb": 10,
    "b": 11, "cb": 11,
}


class PitchClass(IntEnum):
    """One of the 12 pitch classes. Integer value 0 = C, 11 = B."""

    C = 0
    C_SHARP = 1
    D = 2
    D_SHARP = 3
    E = 4
    F = 5
    F_SHARP = 6
    G = 7
    G_SHARP = 8
    A = 9
    A_SHARP = 10
    B = 11

    @property
    def symbol(self) -> str:
        """Display name, e.g. ``"C#"``."""
        return _SYMBOLS[self.value]

    def transpose(self, semitones: int) -> PitchClass:
        """Return the pitch class *semitones* above this one (negative = down)."""
        return PitchClass((self.value + semitones) % SEMITONES_PER_OCTAVE)

    @classmethod
    def parse(cls, text: str) -> PitchClass:
        """Parse ``"C"``, ``"c#"``, ``"Bb"`` ... (case-insensitive).

        Raises:
            ValueError: If *text* is not a pitch-class name.
        """
        key = text.strip().lower()
        if key not in _ALIASES:
            raise ValueError(f"Invalid pitch class: '{text}'")
        return cls(_ALIASES[key])

    def __str__(self) -> str:
        return self.symbol


def parse_note(text: str) -> tuple[PitchClass, int]:
    """Parse an octave-qualified note name into ``(pitch_class, octave)``.

    Scientific pitch notation: C4 is middle C (MIDI 60).

    Args:
        text: Note name such as ``"E2"``, ``"G#3"`` or ``"Eb4"``.

    Returns:
        The pitch class and octave number.

    Raises:
        ValueError: If *text* is not a valid note name.
    """
    try:
        midi_number = int(pretty_midi.note_name_to_number(text.strip()))
    except (ValueError, KeyError) as exc:
        raise ValueError(
            f"Invalid note format: '{text}'. Expected 'E2', 'G#3', etc."
        ) from exc
    octave, pitch = divmod(midi_number, SEMITONES_PER_OCTAVE)
    return PitchClass(pitch), octave - 1
