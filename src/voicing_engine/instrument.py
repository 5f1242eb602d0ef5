"""Instrument model — strings, tuning and capo.

Strings are ordered from lowest to highest pitch (index 0 = lowest).
Fret numbers are always counted from the capo: with a capo on fret 2,
"fret 0" is the capo itself and sounds two semitones above the open string.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from .pitch import SEMITONES_PER_OCTAVE, PitchClass, parse_note


DEFAULT_FRET_COUNT: int = 22


@dataclass(frozen=True)
class StringConfig:
    """A single string: open pitch class, octave and number of frets."""

    open_note: PitchClass
    octave: int
    fret_count: int = DEFAULT_FRET_COUNT

    @classmethod
    def parse(cls, note: str, fret_count: int = DEFAULT_FRET_COUNT) -> StringConfig:
        """Build a string from a note name such as ``"E2"`` or ``"G#3"``."""
        open_note, octave = parse_note(note)
        return cls(open_note=open_note, octave=octave, fret_count=fret_count)

    @property
    def midi_number(self) -> int:
        """MIDI note number of the open string (C4 = 60)."""
        return (self.octave + 1) * SEMITONES_PER_OCTAVE + int(self.open_note)

    def note_at_fret(self, fret: int) -> PitchClass:
        """Pitch class at *fret* (no capo).

        Raises:
            ValueError: If *fret* is outside ``[0, fret_count]``.
        """
        if fret < 0 or fret > self.fret_count:
            raise ValueError(f"Fret {fret} is out of range [0, {self.fret_count}]")
        return self.open_note.transpose(fret)

    def __str__(self) -> str:
        return f"{self.open_note.symbol}{self.octave}"


@dataclass(frozen=True)
class Tuning:
    """A named set of open strings, lowest to highest."""

    name: str
    strings: tuple[StringConfig, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "strings", tuple(self.strings))

    @classmethod
    def parse(cls, name: str, notes: str, fret_count: int = DEFAULT_FRET_COUNT) -> Tuning:
        """Parse a space-separated tuning, e.g. ``Tuning.parse("Drop D", "D2 A2 D3 G3 B3 E4")``."""
        strings = tuple(StringConfig.parse(n, fret_count=fret_count) for n in notes.split())
        return cls(name=name, strings=strings)

    @property
    def string_count(self) -> int:
        return len(self.strings)

    def apply_to(self, instrument: Instrument) -> Instrument:
        """Return *instrument* re-strung with this tuning.

        Raises:
            ValueError: If the string counts differ.
        """
        if self.string_count != instrument.string_count:
            raise ValueError(
                f"Tuning has {self.string_count} strings, "
                f"but {instrument.name} has {instrument.string_count}"
            )
        return instrument.with_tuning(self.strings)

    def __str__(self) -> str:
        return f"{self.name} ({' '.join(str(s) for s in self.strings)})"


@dataclass(frozen=True)
class Instrument:
    """A fretted instrument with a specific tuning and an optional capo.

    Attributes:
        name:    Display name.
        strings: Strings from lowest to highest pitch.
        capo:    Capo fret (0 = no capo); shifts every string uniformly.
    """

    name: str
    strings: tuple[StringConfig, ...]
    capo: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "strings", tuple(self.strings))
        if self.capo < 0:
            raise ValueError(f"Capo must be >= 0, got {self.capo}")
        for string in self.strings:
            if self.capo > string.fret_count:
                raise ValueError(
                    f"Capo {self.capo} is beyond the {string.fret_count} frets of string {string}"
                )

    @property
    def string_count(self) -> int:
        return len(self.strings)

    def sounding_pitch_class(self, string_index: int, fret: int) -> PitchClass:
        """Pitch class heard when *string_index* is stopped at *fret* (capo-relative)."""
        return self.strings[string_index].open_note.transpose(fret + self.capo)

    def sounding_midi_number(self, string_index: int, fret: int) -> int:
        """Absolute MIDI note heard at *fret* (capo-relative)."""
        return self.strings[string_index].midi_number + fret + self.capo

    def fret_limit(self, string_index: int) -> int:
        """Highest capo-relative fret available on *string_index*."""
        return self.strings[string_index].fret_count - self.capo

    def with_capo(self, capo: int) -> Instrument:
        return replace(self, capo=capo)

    def with_tuning(self, strings: Sequence[StringConfig] | Tuning) -> Instrument:
        """Return a copy with new open strings (same string count).

        Raises:
            ValueError: If the number of strings differs.
        """
        if isinstance(strings, Tuning):
            strings = strings.strings
        if len(strings) != self.string_count:
            raise ValueError(
                f"Tuning must have {self.string_count} strings, got {len(strings)}"
            )
        return replace(self, strings=tuple(strings))

    def with_tuning_from_string(self, tuning: str) -> Instrument:
        """Apply a tuning like ``"D2 A2 D3 G3 B3 E4"``, keeping each string's fret count."""
        notes = tuning.split()
        if len(notes) != self.string_count:
            raise ValueError(
                f"Tuning must have {self.string_count} notes, got {len(notes)}"
            )
        return self.with_tuning(
            [
                StringConfig.parse(note, fret_count=string.fret_count)
                for note, string in zip(notes, self.strings)
            ]
        )

    def __str__(self) -> str:
        tuning = " ".join(str(s) for s in self.strings)
        capo = f", capo {self.capo}" if self.capo else ""
        return f"{self.name} ({tuning}{capo})"
