"""Voicing search — enumerate every playable voicing of a chord.

Algorithm:
    1. For each string, list the candidate frets inside the search window
       whose sounding pitch is a chord tone (or the slash bass). Muted is
       always the first candidate, then frets in ascending order.
    2. Walk the cartesian product depth-first, string 0 → N-1.
    3. Keep the assignments that pass every playability and harmony check.
    4. Deduplicate by fretted hand shape, keeping the fullest voicing.
    5. Stable-sort by difficulty score (ties keep generation order).

Design choices:
    - No randomness; the traversal order is the tie-breaker.
    - Presets are plain constants passed explicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import product
from typing import Iterable, Iterator, Optional, Sequence

from .chord import Chord
from .difficulty import Difficulty
from .instrument import Instrument
from .pitch import PitchClass
from .voicing import Voicing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOptions:
    """Constraints applied while searching voicings.

    Attributes:
        max_fret_span:        Widest allowed stretch between fretted notes.
        min_fret, max_fret:   Fret window searched on every string.
        root_in_bass:         Lowest played string must sound the root.
        allow_interior_mutes: Allow muted strings between played strings.
        min_strings_played:   Fewest strings that must sound.
        max_muted_strings:    Most strings that may be muted.
        max_fingers:          Most fretting fingers (see ``fingers_required``).
        max_difficulty:       Hardest accepted category, or ``None``.
        detect_barres:        Attach the implied barre to accepted voicings.
    """

    max_fret_span: int = 4
    min_fret: int = 0
    max_fret: int = 12
    root_in_bass: bool = True
    allow_interior_mutes: bool = True
    min_strings_played: int = 3
    max_muted_strings: int = 2
    max_fingers: int = 4
    max_difficulty: Optional[Difficulty] = None
    detect_barres: bool = False

    def __post_init__(self) -> None:
        if self.min_fret < 0 or self.max_fret < self.min_fret:
            raise ValueError(
                f"Invalid fret window [{self.min_fret}, {self.max_fret}]"
            )
        if self.max_fret_span < 0:
            raise ValueError(f"max_fret_span must be >= 0, got {self.max_fret_span}")


# ── Presets ───────────────────────────────────────────────────
BEGINNER_OPTIONS = SearchOptions(
    max_fret_span=3,
    max_fret=5,
    allow_interior_mutes=False,
    min_strings_played=4,
    max_muted_strings=1,
    max_difficulty=Difficulty.BEGINNER,
)
INTERMEDIATE_OPTIONS = SearchOptions(
    max_fret=9,
    min_strings_played=4,
    max_difficulty=Difficulty.INTERMEDIATE,
)
ADVANCED_OPTIONS = SearchOptions(
    max_fret_span=5,
    root_in_bass=False,
    max_muted_strings=3,
)

PRESETS: dict[str, SearchOptions] = {
    "beginner": BEGINNER_OPTIONS,
    "intermediate": INTERMEDIATE_OPTIONS,
    "advanced": ADVANCED_OPTIONS,
}


def deduplicate(voicings: Iterable[Voicing]) -> list[Voicing]:
    """Collapse voicings sharing a fretted shape, keeping the fullest one.

    Groups keep the position of their first member; within a group the
    voicing with the most played strings wins (earliest on ties).
    Idempotent.
    """
    best: dict[frozenset[tuple[int, int]], Voicing] = {}
    for voicing in voicings:
        shape = voicing.fretted_shape
        current = best.get(shape)
        if current is None or voicing.played_string_count > current.played_string_count:
            best[shape] = voicing
    return list(best.values())


class VoicingSearch:
    """Finds valid voicings of a chord on one instrument.

    Args:
        instrument: Instrument (tuning + capo) to search on.
        options: Search constraints. Defaults to :class:`SearchOptions()`.

    Raises:
        ValueError: If the instrument has no strings.
    """

    def __init__(self, instrument: Instrument, options: SearchOptions | None = None) -> None:
        if instrument.string_count == 0:
            raise ValueError(f"Instrument '{instrument.name}' has no strings")
        self.instrument = instrument
        self.options = options if options is not None else SearchOptions()

    # ── Public API ────────────────────────────────────────────

    def find_voicings(self, chord: Chord) -> list[Voicing]:
        """All valid voicings of *chord*, easiest first. Empty when none qualify."""
        targets = set(chord.pitch_classes)
        if chord.bass is not None:
            targets.add(chord.bass)

        fret_options = [
            self._fret_options(string_index, targets)
            for string_index in range(self.instrument.string_count)
        ]

        accepted: list[Voicing] = []
        generated = 0
        for frets in self._combinations(fret_options):
            generated += 1
            voicing = Voicing.from_frets(frets)
            if self.options.detect_barres:
                voicing = voicing.with_implied_barre()
            if self._is_valid(voicing, chord):
                accepted.append(voicing)

        unique = deduplicate(accepted)
        unique.sort(key=lambda v: v.difficulty_score)

        logger.debug(
            "%s on %s: %d combinations, %d accepted, %d after dedup",
            chord.symbol, self.instrument.name, generated, len(accepted), len(unique),
        )
        return unique

    def find_easiest(self, chord: Chord, limit: int = 5) -> list[Voicing]:
        """The *limit* easiest voicings of *chord*."""
        return self.find_voicings(chord)[:limit]

    def find_grouped_by_position(self, chord: Chord) -> dict[int, list[Voicing]]:
        """Voicings keyed by lowest fretted fret (0 for shapes with no fretted note)."""
        grouped: dict[int, list[Voicing]] = {}
        for voicing in self.find_voicings(chord):
            position = voicing.lowest_fret or 0
            grouped.setdefault(position, []).append(voicing)
        return grouped

    # ── Enumeration ───────────────────────────────────────────

    def _fret_options(self, string_index: int, targets: set[PitchClass]) -> list[Optional[int]]:
        """Muted first, then every in-window fret sounding one of *targets*."""
        options: list[Optional[int]] = [None]
        max_fret = min(self.options.max_fret, self.instrument.fret_limit(string_index))
        for fret in range(self.options.min_fret, max_fret + 1):
            if self.instrument.sounding_pitch_class(string_index, fret) in targets:
                options.append(fret)
        return options

    @staticmethod
    def _combinations(fret_options: Sequence[list[Optional[int]]]) -> Iterator[tuple[Optional[int], ...]]:
        # product() varies the last string fastest: depth-first from string 0
        return product(*fret_options)

    # ── Validation ────────────────────────────────────────────

    def _is_valid(self, voicing: Voicing, chord: Chord) -> bool:
        opts = self.options

        if voicing.played_string_count < opts.min_strings_played:
            return False
        if voicing.muted_string_count > opts.max_muted_strings:
            return False
        if voicing.fret_span > opts.max_fret_span:
            return False
        if voicing.fingers_required > opts.max_fingers:
            return False
        if not opts.allow_interior_mutes and voicing.has_interior_mutes:
            return False

        sounding = voicing.pitch_classes_on(self.instrument)
        if not sounding or chord.root not in sounding:
            return False

        if opts.root_in_bass or chord.bass is not None:
            required_bass = chord.bass if chord.bass is not None else chord.root
            if sounding[0] != required_bass:
                return False

        chord_tones = set(chord.pitch_classes)
        allowed = chord_tones | ({chord.bass} if chord.bass is not None else set())
        sounding_set = set(sounding)
        if not sounding_set <= allowed:
            return False
        if not chord_tones <= sounding_set:
            return False
        if len(sounding_set) < 2:
            return False

        if opts.max_difficulty is not None and voicing.difficulty.rank > opts.max_difficulty.rank:
            return False

        return True


# ── Convenience ───────────────────────────────────────────────


def voicings_for(
    chord: Chord,
    instrument: Instrument,
    options: SearchOptions | None = None,
) -> list[Voicing]:
    """Shortcut for ``VoicingSearch(instrument, options).find_voicings(chord)``."""
    return VoicingSearch(instrument, options).find_voicings(chord)


def easy_voicings_for(chord: Chord, instrument: Instrument, limit: int = 5) -> list[Voicing]:
    """Easiest voicings under the intermediate preset.

    Intermediate rather than beginner so that everyday shapes such as
    C major ``X32010`` (score 29) are included.
    """
    return VoicingSearch(instrument, INTERMEDIATE_OPTIONS).find_easiest(chord, limit=limit)
