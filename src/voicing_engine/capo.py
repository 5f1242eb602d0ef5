"""Capo suggestions — find a capo fret that turns hard shapes into easy ones.

For every capo fret ``c`` the chords are transposed down by ``c`` semitones
to give the shapes actually fingered; each shape is scored with a coarse
lookup (open "cowboy" chords are easiest) and the per-chord scores summed.

The lookup does not run a full voicing search per shape: it is a fixed
table, fast and instrument-independent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from . import chord as chord_types
from .chord import Chord, ChordType
from .instrument import Instrument
from .pitch import PitchClass

logger = logging.getLogger(__name__)

P = PitchClass

# ── Shape difficulty tables ───────────────────────────────────
EASY_SHAPE_SCORE: float = 1.0
MODERATE_SHAPE_SCORE: float = 2.0
BARRE_SHAPE_SCORE: float = 3.0
HARD_SHAPE_SCORE: float = 4.0

_EASY_SHAPES: dict[ChordType, frozenset[PitchClass]] = {
    chord_types.MAJOR: frozenset({P.C, P.G, P.D, P.E, P.A}),
    chord_types.MINOR: frozenset({P.A, P.E, P.D}),
    chord_types.DOMINANT7: frozenset({P.G, P.C, P.D, P.E, P.A}),
    chord_types.MINOR7: frozenset({P.A, P.E, P.D}),
}

_MODERATE_SHAPES: dict[ChordType, frozenset[PitchClass]] = {
    chord_types.MAJOR: frozenset({P.F}),
    chord_types.DOMINANT7: frozenset({P.B}),
    chord_types.MAJOR7: frozenset({P.F, P.C, P.D, P.A}),
}

# Major/minor triads can always fall back to an E- or A-shape barre
_BARRE_SHAPE_TYPES: frozenset[ChordType] = frozenset({chord_types.MAJOR, chord_types.MINOR})


def shape_difficulty(chord: Chord) -> float:
    """Score one fingered shape: 1 easy open, 2 moderate open, 3 barre triad, 4 other."""
    if chord.root in _EASY_SHAPES.get(chord.type, frozenset()):
        return EASY_SHAPE_SCORE
    if chord.root in _MODERATE_SHAPES.get(chord.type, frozenset()):
        return MODERATE_SHAPE_SCORE
    if chord.type in _BARRE_SHAPE_TYPES:
        return BARRE_SHAPE_SCORE
    return HARD_SHAPE_SCORE


@dataclass(frozen=True)
class CapoSuggestion:
    """One capo position and the shapes it implies.

    Attributes:
        capo_fret:        Fret to clamp (0 = no capo).
        shapes:           Chords to finger, one per original chord.
        original_chords:  The chords as they should sound.
        difficulty_score: Sum of shape scores (lower = easier).
    """

    capo_fret: int
    shapes: tuple[Chord, ...]
    original_chords: tuple[Chord, ...]
    difficulty_score: float

    @property
    def shape_symbols(self) -> list[str]:
        return [shape.symbol for shape in self.shapes]

    @property
    def description(self) -> str:
        if self.capo_fret == 0:
            return "No capo needed"
        return f"Capo fret {self.capo_fret}: play {', '.join(self.shape_symbols)}"

    def __str__(self) -> str:
        return self.description


class CapoSuggester:
    """Ranks capo positions for a chord progression.

    Args:
        instrument: Instrument the progression is played on.
        max_capo_fret: Highest capo fret to consider (inclusive).

    Raises:
        ValueError: If *max_capo_fret* is negative or beyond the shortest string.
    """

    def __init__(self, instrument: Instrument, max_capo_fret: int = 12) -> None:
        if max_capo_fret < 0:
            raise ValueError(f"max_capo_fret must be >= 0, got {max_capo_fret}")
        shortest = min((s.fret_count for s in instrument.strings), default=max_capo_fret)
        if max_capo_fret > shortest:
            raise ValueError(
                f"max_capo_fret {max_capo_fret} exceeds the {shortest} frets of {instrument.name}"
            )
        self.instrument = instrument
        self.max_capo_fret = max_capo_fret

    def suggest(self, chords: Sequence[Chord]) -> list[CapoSuggestion]:
        """One suggestion per capo fret ``0..max_capo_fret``, easiest first (stable).

        Returns an empty list for an empty progression.
        """
        if not chords:
            return []

        originals = tuple(chords)
        suggestions: list[CapoSuggestion] = []
        for capo in range(self.max_capo_fret + 1):
            shapes = tuple(c.transpose(-capo) for c in originals)
            suggestions.append(
                CapoSuggestion(
                    capo_fret=capo,
                    shapes=shapes,
                    original_chords=originals,
                    difficulty_score=sum(shape_difficulty(s) for s in shapes),
                )
            )

        suggestions.sort(key=lambda s: s.difficulty_score)
        logger.debug(
            "Capo for %s on %s: best fret %d (score %.1f)",
            " ".join(c.symbol for c in originals),
            self.instrument.name,
            suggestions[0].capo_fret,
            suggestions[0].difficulty_score,
        )
        return suggestions

    def suggest_best(self, chords: Sequence[Chord]) -> Optional[CapoSuggestion]:
        """The easiest suggestion, or ``None`` for an empty progression."""
        suggestions = self.suggest(chords)
        return suggestions[0] if suggestions else None


# ── Common capo positions ─────────────────────────────────────

# {hard major root: {easy shape root: capo fret}}
COMMON_CAPO_POSITIONS: dict[PitchClass, dict[PitchClass, int]] = {
    P.F: {P.E: 1, P.D: 3, P.C: 5},
    P.A_SHARP: {P.A: 1, P.G: 3},
    P.D_SHARP: {P.D: 1, P.C: 3},
    P.G_SHARP: {P.G: 1},
    P.C_SHARP: {P.C: 1},
    P.F_SHARP: {P.E: 2},
    P.B: {P.A: 2},
}

_EASY_MINOR_ROOTS: tuple[PitchClass, ...] = (P.A, P.E, P.D)
_EASY_OTHER_ROOTS: tuple[PitchClass, ...] = (P.C, P.G, P.D, P.E, P.A)


def capo_positions_for(chord: Chord) -> list[int]:
    """Capo frets that let *chord* be fingered as an easy open shape.

    Major chords use :data:`COMMON_CAPO_POSITIONS` (``[0]`` when the chord is
    already an easy shape). Other types use the forward semitone distance
    from each easy root to the chord root.
    """
    if chord.type == chord_types.MAJOR:
        table = COMMON_CAPO_POSITIONS.get(chord.root)
        if table is None:
            return [0]
        return sorted(table.values())

    easy_roots = _EASY_MINOR_ROOTS if chord.type == chord_types.MINOR else _EASY_OTHER_ROOTS
    positions = [(chord.root - easy_root) % 12 for easy_root in easy_roots]
    return sorted(p for p in positions if p > 0)
