"""Chord — root + chord type + optional slash bass.

Provides:
    ChordType    – named interval formula (semitones from the root)
    CHORD_TYPES  – every supported type, in display order
    Chord        – immutable chord value with parsing and transposition

Chord symbols are parsed leniently: common suffix aliases (``min``, ``-``,
``°``, ``ø``, ``Δ``), parenthesised alterations (``Cm7(b5)``), Brazilian
shorthand (``(5-)``, ``7M``) and slash basses (``C/G``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .pitch import PitchClass


@dataclass(frozen=True)
class ChordType:
    """A chord quality defined by its intervals from the root.

    Attributes:
        name:      Full name, e.g. ``"minor 7th"``.
        symbol:    Suffix used in chord symbols, e.g. ``"m7"``.
        intervals: Semitone offsets from the root; ``intervals[0] == 0``.
    """

    name: str
    symbol: str
    intervals: tuple[int, ...]

    @property
    def note_count(self) -> int:
        return len(self.intervals)

    @property
    def is_triad(self) -> bool:
        return self.note_count == 3

    def __str__(self) -> str:
        return self.name


# ── Chord type table ──────────────────────────────────────────
MAJOR = ChordType("major", "", (0, 4, 7))
MINOR = ChordType("minor", "m", (0, 3, 7))
DIMINISHED = ChordType("diminished", "dim", (0, 3, 6))
AUGMENTED = ChordType("augmented", "aug", (0, 4, 8))
SUS2 = ChordType("suspended 2nd", "sus2", (0, 2, 7))
SUS4 = ChordType("suspended 4th", "sus4", (0, 5, 7))
DOMINANT7 = ChordType("dominant 7th", "7", (0, 4, 7, 10))
MAJOR7 = ChordType("major 7th", "maj7", (0, 4, 7, 11))
MINOR7 = ChordType("minor 7th", "m7", (0, 3, 7, 10))
MINOR_MAJOR7 = ChordType("minor major 7th", "m(maj7)", (0, 3, 7, 11))
DIMINISHED7 = ChordType("diminished 7th", "dim7", (0, 3, 6, 9))
HALF_DIMINISHED7 = ChordType("half-diminished 7th", "m7b5", (0, 3, 6, 10))
AUGMENTED7 = ChordType("augmented 7th", "aug7", (0, 4, 8, 10))
ADD9 = ChordType("add 9", "add9", (0, 4, 7, 14))
MINOR_ADD9 = ChordType("minor add 9", "madd9", (0, 3, 7, 14))
DOMINANT9 = ChordType("dominant 9th", "9", (0, 4, 7, 10, 14))
MAJOR9 = ChordType("major 9th", "maj9", (0, 4, 7, 11, 14))
MINOR9 = ChordType("minor 9th", "m9", (0, 3, 7, 10, 14))
DOMINANT7_FLAT9 = ChordType("dominant 7 flat 9", "7b9", (0, 4, 7, 10, 13))
DOMINANT7_SHARP9 = ChordType("dominant 7 sharp 9", "7#9", (0, 4, 7, 10, 15))
DOMINANT7_FLAT13 = ChordType("dominant 7 flat 13", "7b13", (0, 4, 7, 10, 20))
DOMINANT7_SHARP11 = ChordType("dominant 7 sharp 11", "7#11", (0, 4, 7, 10, 18))
DOMINANT11 = ChordType("dominant 11th", "11", (0, 4, 7, 10, 14, 17))
DOMINANT13 = ChordType("dominant 13th", "13", (0, 4, 7, 10, 14, 21))
MAJOR6 = ChordType("major 6th", "6", (0, 4, 7, 9))
MINOR6 = ChordType("minor 6th", "m6", (0, 3, 7, 9))
SIX_NINE = ChordType("major 6/9", "6/9", (0, 4, 7, 9, 14))
POWER = ChordType("power chord", "5", (0, 7))

CHORD_TYPES: tuple[ChordType, ...] = (
    MAJOR, MINOR, DIMINISHED, AUGMENTED, SUS2, SUS4,
    DOMINANT7, MAJOR7, MINOR7, MINOR_MAJOR7, DIMINISHED7, HALF_DIMINISHED7,
    AUGMENTED7, ADD9, MINOR_ADD9, DOMINANT9, MAJOR9, MINOR9,
    DOMINANT7_FLAT9, DOMINANT7_SHARP9, DOMINANT7_FLAT13, DOMINANT7_SHARP11,
    DOMINANT11, DOMINANT13, MAJOR6, MINOR6, SIX_NINE, POWER,
)

# Suffix spellings accepted by Chord.parse (after parentheses are stripped)
_SUFFIXES: dict[str, ChordType] = {}
for _chord_type, _aliases in (
    (MAJOR, ("", "M", "maj", "Maj", "MAJ")),
    (MINOR, ("m", "min", "Min", "MIN", "-")),
    (DIMINISHED, ("dim", "Dim", "DIM", "°", "˚", "º")),
    (AUGMENTED, ("aug", "Aug", "AUG", "+")),
    (SUS2, ("sus2", "Sus2", "SUS2")),
    (SUS4, ("sus4", "Sus4", "SUS4", "sus", "Sus", "SUS")),
    (DOMINANT7, ("7",)),
    (MAJOR7, ("M7", "maj7", "Maj7", "MAJ7", "Δ", "Δ7")),
    (MINOR7, ("m7", "min7", "Min7", "MIN7", "-7")),
    (MINOR_MAJOR7, ("mM7", "mMaj7", "mmaj7", "minMaj7", "minM7")),
    (DIMINISHED7, ("dim7", "Dim7", "DIM7", "°7", "˚7", "º7")),
    (HALF_DIMINISHED7, ("m7b5", "min7b5", "ø", "ø7")),
    (AUGMENTED7, ("aug7", "Aug7", "AUG7", "+7")),
    (ADD9, ("add9", "Add9", "ADD9")),
    (MINOR_ADD9, ("madd9", "mAdd9", "minadd9", "minAdd9")),
    (DOMINANT9, ("9",)),
    (MAJOR9, ("M9", "maj9", "Maj9", "MAJ9")),
    (MINOR9, ("m9", "min9", "Min9", "MIN9")),
    (DOMINANT7_FLAT9, ("7b9",)),
    (DOMINANT7_SHARP9, ("7#9",)),
    (DOMINANT7_FLAT13, ("7b13",)),
    (DOMINANT7_SHARP11, ("7#11",)),
    (DOMINANT11, ("11",)),
    (DOMINANT13, ("13",)),
    (MAJOR6, ("6",)),
    (MINOR6, ("m6", "min6", "Min6", "MIN6")),
    (SIX_NINE, ("69", "6/9")),
    (POWER, ("5",)),
):
    for _alias in _aliases:
        _SUFFIXES[_alias] = _chord_type

_FLAT_ALTERATION = re.compile(r"\((\d+)-\)")
_SHARP_ALTERATION = re.compile(r"\((\d+)\+\)")


def _split_slash(text: str) -> tuple[str, Optional[PitchClass]]:
    """Split off a slash bass, ignoring ``/`` inside parentheses (``C(6/9)``)."""
    depth = 0
    for index in range(len(text) - 1, 0, -1):
        char = text[index]
        if char == ")":
            depth += 1
        elif char == "(":
            depth -= 1
        elif char == "/" and depth == 0:
            try:
                return text[:index], PitchClass.parse(text[index + 1:])
            except ValueError:
                # "C6/9": the slash belongs to the chord type
                return text, None
    return text, None


@dataclass(frozen=True)
class Chord:
    """A chord: root pitch class, chord type, and optional slash-chord bass.

    Attributes:
        root:  Root pitch class.
        type:  Chord quality / interval formula.
        bass:  Explicit bass note (``G`` in ``C/G``), or ``None``.
    """

    root: PitchClass
    type: ChordType = MAJOR
    bass: Optional[PitchClass] = None

    @property
    def pitch_classes(self) -> tuple[PitchClass, ...]:
        """Chord tones, root first, in interval order."""
        return tuple(self.root.transpose(i) for i in self.type.intervals)

    @property
    def intervals(self) -> tuple[int, ...]:
        return self.type.intervals

    @property
    def symbol(self) -> str:
        base = f"{self.root.symbol}{self.type.symbol}"
        return f"{base}/{self.bass.symbol}" if self.bass is not None else base

    @property
    def name(self) -> str:
        base = f"{self.root.symbol} {self.type.name}"
        return f"{base} over {self.bass.symbol}" if self.bass is not None else base

    def transpose(self, semitones: int) -> Chord:
        """Move root and bass by *semitones* (negative = down)."""
        return Chord(
            root=self.root.transpose(semitones),
            type=self.type,
            bass=self.bass.transpose(semitones) if self.bass is not None else None,
        )

    @classmethod
    def parse(cls, text: str) -> Chord:
        """Parse a chord symbol such as ``"Am"``, ``"F#m7b5"`` or ``"C/G"``.

        Raises:
            ValueError: If the root or the chord type is not recognised.
        """
        symbol = text.strip()
        if not symbol:
            raise ValueError("Empty chord string")

        body, bass = _split_slash(symbol)

        root_length = 2 if len(body) > 1 and body[1] in "#b" else 1
        root = PitchClass.parse(body[:root_length])
        suffix = body[root_length:]

        suffix = _FLAT_ALTERATION.sub(r"(b\1)", suffix)
        suffix = _SHARP_ALTERATION.sub(r"(#\1)", suffix)
        if "7M" in suffix and "maj" not in suffix:
            suffix = suffix.replace("7M", "M7", 1)
        suffix = suffix.replace("(", "").replace(")", "")

        chord_type = _SUFFIXES.get(suffix)
        if chord_type is None:
            raise ValueError(f"Unknown chord type: '{suffix}' in '{text}'")
        return cls(root=root, type=chord_type, bass=bass)

    def __str__(self) -> str:
        return self.symbol
