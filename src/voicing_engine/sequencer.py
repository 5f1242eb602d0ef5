"""Voicing sequencer — rank candidate voicings by hand movement.

The pairwise transition cost estimates how hard it is to move the fretting
hand from one voicing to the next. Ranking weighs the move *from* the
previous chord (known, 60 %) against the move *to* the next chord (40 %),
plus an open/barre preference and a small difficulty term.

All weights are loaded from the ``transition`` section of
``configs/voicing_costs.yaml``.

Ranking only looks at immediate neighbours; it is not a whole-progression
optimum.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from .config import load_section
from .voicing import Voicing

logger = logging.getLogger(__name__)


class VoicingPreference(str, Enum):
    """User preference between open and barre shapes."""

    PREFER_OPEN = "prefer_open"
    PREFER_BARRE = "prefer_barre"
    BALANCED = "balanced"


class TransitionDifficulty(str, Enum):
    """Difficulty category of a chord change, for UI colouring."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class RankedVoicing:
    """A candidate voicing with its ranking score.

    Attributes:
        voicing:         The candidate.
        original_index:  Its index in the candidate list.
        transition_cost: Ranking score (lower = smoother).
        is_suggested:    True only for the best-ranked candidate.
    """

    voicing: Voicing
    original_index: int
    transition_cost: int
    is_suggested: bool


_REQUIRED_KEYS: list[str] = [
    "position_weight",
    "fret_distance_weight",
    "finger_state_change",
    "barre_change_penalty",
    "similar_shape_bonus",
    "similar_span_tolerance",
    "similar_finger_tolerance",
    "previous_weight",
    "next_weight",
    "difficulty_divisor",
    "easy_below",
    "medium_max",
    "preference",
]


class TransitionCostModel:
    """Rule-based cost model for moving between voicings.

    Args:
        config_path: Path to the YAML cost file. Defaults to the packaged one.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        cfg = load_section("transition", _REQUIRED_KEYS, config_path)

        self.position_weight: int = int(cfg["position_weight"])
        self.fret_distance_weight: int = int(cfg["fret_distance_weight"])
        self.finger_state_change: int = int(cfg["finger_state_change"])
        self.barre_change_penalty: int = int(cfg["barre_change_penalty"])
        self.similar_shape_bonus: int = int(cfg["similar_shape_bonus"])
        self.similar_span_tolerance: int = int(cfg["similar_span_tolerance"])
        self.similar_finger_tolerance: int = int(cfg["similar_finger_tolerance"])
        self.previous_weight: float = float(cfg["previous_weight"])
        self.next_weight: float = float(cfg["next_weight"])
        self.difficulty_divisor: int = int(cfg["difficulty_divisor"])
        self.easy_below: int = int(cfg["easy_below"])
        self.medium_max: int = int(cfg["medium_max"])

        self.preference: dict[VoicingPreference, tuple[int, int]] = {}
        for pref in VoicingPreference:
            entry = cfg["preference"].get(pref.value)
            if entry is None or "barre" not in entry or "other" not in entry:
                raise ValueError(
                    f"Missing 'transition.preference.{pref.value}' barre/other weights"
                )
            self.preference[pref] = (int(entry["barre"]), int(entry["other"]))

    # ── Pairwise cost ─────────────────────────────────────────

    def pairwise_cost(self, source: Optional[Voicing], target: Optional[Voicing]) -> int:
        """Cost of moving from *source* to *target*; 0 at a sequence boundary.

        Components:
            - hand movement along the neck (lowest fretted fret, 0 if none)
            - per shared string: fret distance when fretted on both sides,
              a flat cost when fretted on one side only
            - barre put on or taken off
            - bonus for similar span and finger count

        Returns:
            Non-negative integer; symmetric in its arguments.
        """
        if source is None or target is None:
            return 0

        cost = abs((source.lowest_fret or 0) - (target.lowest_fret or 0)) * self.position_weight

        for before, after in zip(source.positions, target.positions):
            if before.is_fretted and after.is_fretted:
                cost += abs(before.fret - after.fret) * self.fret_distance_weight
            elif before.is_fretted != after.is_fretted:
                cost += self.finger_state_change

        if source.requires_barre != target.requires_barre:
            cost += self.barre_change_penalty

        if self.has_similar_shape(source, target):
            cost -= self.similar_shape_bonus

        return max(cost, 0)

    def has_similar_shape(self, source: Voicing, target: Voicing) -> bool:
        span_delta = abs(source.fret_span - target.fret_span)
        finger_delta = abs(source.fingers_required - target.fingers_required)
        return (
            span_delta <= self.similar_span_tolerance
            and finger_delta <= self.similar_finger_tolerance
        )

    def preference_adjustment(self, voicing: Voicing, preference: VoicingPreference) -> int:
        barre, other = self.preference[preference]
        return barre if voicing.requires_barre else other

    # ── Ranking ───────────────────────────────────────────────

    def rank(
        self,
        previous: Optional[Voicing],
        following: Optional[Voicing],
        candidates: Sequence[Voicing],
        preference: VoicingPreference = VoicingPreference.BALANCED,
    ) -> list[RankedVoicing]:
        """Rank *candidates* between the *previous* and *following* voicings.

        Args:
            previous: Voicing played before (``None`` for the first chord).
            following: Voicing played after (``None`` for the last chord).
            candidates: Voicings to choose from.
            preference: Open / barre preference.

        Returns:
            Candidates sorted by score (stable); the first is suggested.
            Empty when *candidates* is empty.
        """
        scored: list[tuple[int, int, Voicing]] = []
        for index, voicing in enumerate(candidates):
            weighted = (
                self.pairwise_cost(previous, voicing) * self.previous_weight
                + self.pairwise_cost(voicing, following) * self.next_weight
            )
            score = round(weighted)
            score += self.preference_adjustment(voicing, preference)
            score += voicing.difficulty_score // self.difficulty_divisor
            scored.append((score, index, voicing))

        scored.sort(key=lambda item: item[0])
        return [
            RankedVoicing(
                voicing=voicing,
                original_index=index,
                transition_cost=score,
                is_suggested=position == 0,
            )
            for position, (score, index, voicing) in enumerate(scored)
        ]

    def suggested_index(
        self,
        previous: Optional[Voicing],
        following: Optional[Voicing],
        candidates: Sequence[Voicing],
        preference: VoicingPreference = VoicingPreference.BALANCED,
    ) -> int:
        """Index (in *candidates*) of the suggested voicing; 0 when empty."""
        ranked = self.rank(previous, following, candidates, preference)
        return ranked[0].original_index if ranked else 0

    def categorize_cost(self, cost: int) -> TransitionDifficulty:
        if cost < self.easy_below:
            return TransitionDifficulty.EASY
        if cost <= self.medium_max:
            return TransitionDifficulty.MEDIUM
        return TransitionDifficulty.HARD

    # ── Progressions ──────────────────────────────────────────

    def sequence_progression(
        self,
        candidate_lists: Sequence[Sequence[Voicing]],
        preference: VoicingPreference = VoicingPreference.BALANCED,
    ) -> list[list[RankedVoicing]]:
        """Rank every chord's candidates left to right.

        Each chord is ranked against the voicing already chosen for the
        previous chord and the first (easiest) candidate of the next chord.
        Chords without candidates get an empty ranking and break the chain.
        """
        rankings: list[list[RankedVoicing]] = []
        chosen: Optional[Voicing] = None
        for index, candidates in enumerate(candidate_lists):
            following = None
            if index + 1 < len(candidate_lists) and candidate_lists[index + 1]:
                following = candidate_lists[index + 1][0]
            ranked = self.rank(chosen, following, candidates, preference)
            rankings.append(ranked)
            chosen = ranked[0].voicing if ranked else None
        logger.debug(
            "Sequenced %d chords (%s preference), %d without candidates",
            len(candidate_lists), preference.value, sum(1 for r in rankings if not r),
        )
        return rankings

    def progression_cost(self, voicings: Sequence[Optional[Voicing]]) -> int:
        """Sum of pairwise costs between consecutive voicings."""
        return sum(
            self.pairwise_cost(source, target)
            for source, target in zip(voicings, voicings[1:])
        )


@lru_cache(maxsize=None)
def default_model() -> TransitionCostModel:
    """The model built from the packaged cost file (loaded once)."""
    return TransitionCostModel()


def pairwise_cost(source: Optional[Voicing], target: Optional[Voicing]) -> int:
    return default_model().pairwise_cost(source, target)


def rank_voicings(
    previous: Optional[Voicing],
    following: Optional[Voicing],
    candidates: Sequence[Voicing],
    preference: VoicingPreference = VoicingPreference.BALANCED,
) -> list[RankedVoicing]:
    return default_model().rank(previous, following, candidates, preference)


def suggested_index(
    previous: Optional[Voicing],
    following: Optional[Voicing],
    candidates: Sequence[Voicing],
    preference: VoicingPreference = VoicingPreference.BALANCED,
) -> int:
    return default_model().suggested_index(previous, following, candidates, preference)


def categorize_cost(cost: int) -> TransitionDifficulty:
    return default_model().categorize_cost(cost)
