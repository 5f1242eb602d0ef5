"""Voicing — one concrete fingering of a chord on a fretted instrument.

A voicing holds one :class:`StringPosition` per string, lowest string first,
and at most one :class:`Barre`. Per-string state is a closed variant:

    Muted()            – string not played ("X")
    Open()             – played unfretted ("0")
    Fretted(fret, f)   – stopped at fret >= 1, optional finger 1–4

Everything else (span, finger count, difficulty …) is derived on demand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from .chord import Chord
from .difficulty import Difficulty, barre_group, categorize_score, difficulty_score, fingers_required
from .instrument import Instrument
from .pitch import PitchClass


# ── String positions ──────────────────────────────────────────


@dataclass(frozen=True)
class StringPosition:
    """Base of the Muted / Open / Fretted variant; not used directly.

    Every variant exposes ``fret``: ``None`` when muted, ``0`` when open.
    """

    @property
    def is_muted(self) -> bool:
        return False

    @property
    def is_open(self) -> bool:
        return False

    @property
    def is_fretted(self) -> bool:
        return False

    @property
    def is_played(self) -> bool:
        return not self.is_muted


@dataclass(frozen=True)
class Muted(StringPosition):
    """String is not played."""

    @property
    def fret(self) -> None:
        return None

    @property
    def is_muted(self) -> bool:
        return True

    def __str__(self) -> str:
        return "X"


@dataclass(frozen=True)
class Open(StringPosition):
    """String is played without fretting."""

    @property
    def fret(self) -> int:
        return 0

    @property
    def is_open(self) -> bool:
        return True

    def __str__(self) -> str:
        return "0"


@dataclass(frozen=True)
class Fretted(StringPosition):
    """String stopped at *fret* (>= 1), optionally with a finger (1 = index … 4 = pinky)."""

    fret: int
    finger: Optional[int] = None

    def __post_init__(self) -> None:
        if self.fret < 1:
            raise ValueError(f"Fretted position needs fret >= 1, got {self.fret}")
        if self.finger is not None and not 1 <= self.finger <= 4:
            raise ValueError(f"Finger must be 1–4, got {self.finger}")

    @property
    def is_fretted(self) -> bool:
        return True

    def __str__(self) -> str:
        return str(self.fret) if self.fret < 10 else f"({self.fret})"


MUTED = Muted()
OPEN = Open()


def position_for_fret(fret: Optional[int]) -> StringPosition:
    """``None`` or negative → muted, ``0`` → open, otherwise fretted."""
    if fret is None or fret < 0:
        return MUTED
    if fret == 0:
        return OPEN
    return Fretted(fret)


# ── Barre ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Barre:
    """One finger across strings *from_string*..*to_string* (inclusive) at *fret*."""

    fret: int
    from_string: int
    to_string: int
    finger: int = 1

    def __post_init__(self) -> None:
        if self.fret < 1:
            raise ValueError(f"Barre needs fret >= 1, got {self.fret}")
        if not 0 <= self.from_string <= self.to_string:
            raise ValueError(
                f"Invalid barre range: strings {self.from_string}-{self.to_string}"
            )

    @property
    def string_count(self) -> int:
        return self.to_string - self.from_string + 1

    def __str__(self) -> str:
        return f"Barre(fret: {self.fret}, strings: {self.from_string}-{self.to_string})"


# ── Voicing ───────────────────────────────────────────────────

_DELIMITED = re.compile(r"[-\s]+")


def _parse_fret(part: str) -> Optional[int]:
    token = part.strip().lower()
    if token == "x":
        return None
    if token == "o":
        return 0
    try:
        return int(token.strip("()"))
    except ValueError:
        raise ValueError(f"Invalid fret '{part}'") from None


@dataclass(frozen=True)
class Voicing:
    """Fret positions for every string, lowest string first, plus an optional barre."""

    positions: tuple[StringPosition, ...]
    barre: Optional[Barre] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", tuple(self.positions))
        if self.barre is not None and self.barre.to_string >= len(self.positions):
            raise ValueError(
                f"Barre reaches string {self.barre.to_string} "
                f"but the voicing has {len(self.positions)} strings"
            )

    # ── Constructors ──────────────────────────────────────────

    @classmethod
    def from_frets(cls, frets: Sequence[Optional[int]], barre: Optional[Barre] = None) -> Voicing:
        """Build from fret numbers; ``None`` or ``-1`` = muted, ``0`` = open."""
        return cls(positions=tuple(position_for_fret(f) for f in frets), barre=barre)

    @classmethod
    def parse(cls, text: str) -> Voicing:
        """Parse ``"X02210"``, ``"X0(10)(10)90"`` or ``"x-0-10-10-9-0"``.

        Raises:
            ValueError: If *text* is empty or contains an invalid fret.
        """
        stripped = text.strip()
        if not stripped:
            raise ValueError("Empty voicing string")

        if _DELIMITED.search(stripped):
            parts = [p for p in _DELIMITED.split(stripped) if p]
        else:
            parts = re.findall(r"\(\d+\)|.", stripped)
        return cls.from_frets([_parse_fret(p) for p in parts])

    # ── Counts ────────────────────────────────────────────────

    @property
    def string_count(self) -> int:
        return len(self.positions)

    @property
    def played_string_count(self) -> int:
        return sum(1 for p in self.positions if p.is_played)

    @property
    def muted_string_count(self) -> int:
        return sum(1 for p in self.positions if p.is_muted)

    @property
    def fretted_string_count(self) -> int:
        return sum(1 for p in self.positions if p.is_fretted)

    @property
    def open_string_count(self) -> int:
        return sum(1 for p in self.positions if p.is_open)

    # ── Fret geometry ─────────────────────────────────────────

    @property
    def lowest_fret(self) -> Optional[int]:
        """Lowest fretted fret (open strings excluded), or ``None``."""
        frets = [p.fret for p in self.positions if p.is_fretted]
        return min(frets) if frets else None

    @property
    def highest_fret(self) -> Optional[int]:
        frets = [p.fret for p in self.positions if p.is_fretted]
        return max(frets) if frets else None

    @property
    def fret_span(self) -> int:
        """Highest minus lowest fretted fret; 0 with fewer than two fretted notes."""
        if self.lowest_fret is None:
            return 0
        return self.highest_fret - self.lowest_fret

    @property
    def fretted_shape(self) -> frozenset[tuple[int, int]]:
        """``(string_index, fret)`` of every fretted string — the hand shape."""
        return frozenset((i, p.fret) for i, p in enumerate(self.positions) if p.is_fretted)

    @property
    def interior_muted_strings(self) -> tuple[int, ...]:
        """Indices of muted strings with a played string on both sides."""
        played = [i for i, p in enumerate(self.positions) if p.is_played]
        if not played:
            return ()
        return tuple(
            i
            for i in range(played[0] + 1, played[-1])
            if self.positions[i].is_muted
        )

    @property
    def has_interior_mutes(self) -> bool:
        return bool(self.interior_muted_strings)

    @property
    def requires_barre(self) -> bool:
        return self.barre is not None

    @property
    def is_all_open(self) -> bool:
        return self.fretted_string_count == 0

    # ── Difficulty ────────────────────────────────────────────

    @property
    def fingers_required(self) -> int:
        return fingers_required(self)

    @property
    def difficulty_score(self) -> int:
        return difficulty_score(self)

    @property
    def difficulty(self) -> Difficulty:
        return categorize_score(self.difficulty_score)

    def with_implied_barre(self) -> Voicing:
        """Copy with the barre implied by the lowest-fret group (unchanged if none)."""
        barre = detect_barre(self)
        if barre is None or self.barre is not None:
            return self
        return Voicing(positions=self.positions, barre=barre)

    # ── Sounding notes ────────────────────────────────────────

    def _check_instrument(self, instrument: Instrument) -> None:
        if self.string_count != instrument.string_count:
            raise ValueError(
                f"Voicing has {self.string_count} positions "
                f"but instrument has {instrument.string_count} strings"
            )

    def pitch_classes_on(self, instrument: Instrument) -> list[PitchClass]:
        """Sounding pitch classes, lowest string first (muted strings skipped).

        Raises:
            ValueError: If the string counts differ.
        """
        self._check_instrument(instrument)
        return [
            instrument.sounding_pitch_class(i, p.fret)
            for i, p in enumerate(self.positions)
            if p.is_played
        ]

    def midi_notes_on(self, instrument: Instrument) -> list[int]:
        """Sounding MIDI note numbers, lowest string first (capo included)."""
        self._check_instrument(instrument)
        return [
            instrument.sounding_midi_number(i, p.fret)
            for i, p in enumerate(self.positions)
            if p.is_played
        ]

    def bass_pitch_on(self, instrument: Instrument) -> Optional[PitchClass]:
        """Pitch class of the lowest played string, or ``None`` if all are muted."""
        pitches = self.pitch_classes_on(instrument)
        return pitches[0] if pitches else None

    def plays_chord(self, chord: Chord, instrument: Instrument) -> bool:
        """True when every note is a chord tone (or the bass) and every chord tone sounds."""
        sounding = set(self.pitch_classes_on(instrument))
        allowed = set(chord.pitch_classes)
        if chord.bass is not None:
            allowed.add(chord.bass)
        return (
            sounding <= allowed
            and set(chord.pitch_classes) <= sounding
            and chord.root in sounding
        )

    # ── Formatting ────────────────────────────────────────────

    def to_compact_string(self) -> str:
        """E.g. ``"X02210"``; frets >= 10 are parenthesised: ``"X0(10)(10)90"``."""
        return "".join(str(p) for p in self.positions)

    def __str__(self) -> str:
        return self.to_compact_string()


def detect_barre(voicing: Voicing) -> Optional[Barre]:
    """The barre implied by *voicing*'s lowest-fret group, or ``None``."""
    group = barre_group(voicing)
    if group is None:
        return None
    fret, first, last = group
    return Barre(fret=fret, from_string=first, to_string=last)
