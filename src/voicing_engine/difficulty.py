"""Difficulty model — how hard a voicing is to fret.

All weights are loaded from the ``difficulty`` section of
``configs/voicing_costs.yaml`` (see :mod:`voicing_engine.config`).

Functions:
    barre_group        – (fret, first, last) strings a single finger can bar
    fingers_required   – coarse finger-count estimate
    difficulty_score   – integer score, lower = easier, floored at 0
    categorize_score   – score → beginner / intermediate / advanced
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .config import load_section

if TYPE_CHECKING:
    from .voicing import Voicing


class Difficulty(str, Enum):
    """Difficulty category of a voicing, easiest first."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        """0 for beginner, 1 for intermediate, 2 for advanced."""
        return list(Difficulty).index(self)


_REQUIRED_KEYS: list[str] = [
    "fret_span_weight",
    "fretted_string_weight",
    "barre_penalty",
    "full_barre_penalty",
    "full_barre_strings",
    "high_position_fret",
    "high_position_weight",
    "interior_mute_penalty",
    "open_string_bonus",
    "open_position_max_fret",
    "beginner_max_score",
    "intermediate_max_score",
]


class DifficultyModel:
    """Hand-crafted difficulty heuristic for a single voicing.

    Args:
        config_path: Path to the YAML cost file. Defaults to the packaged one.
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        cfg = load_section("difficulty", _REQUIRED_KEYS, config_path)

        self.fret_span_weight: int = int(cfg["fret_span_weight"])
        self.fretted_string_weight: int = int(cfg["fretted_string_weight"])
        self.barre_penalty: int = int(cfg["barre_penalty"])
        self.full_barre_penalty: int = int(cfg["full_barre_penalty"])
        self.full_barre_strings: int = int(cfg["full_barre_strings"])
        self.high_position_fret: int = int(cfg["high_position_fret"])
        self.high_position_weight: int = int(cfg["high_position_weight"])
        self.interior_mute_penalty: int = int(cfg["interior_mute_penalty"])
        self.open_string_bonus: int = int(cfg["open_string_bonus"])
        self.open_position_max_fret: int = int(cfg["open_position_max_fret"])
        self.beginner_max_score: int = int(cfg["beginner_max_score"])
        self.intermediate_max_score: int = int(cfg["intermediate_max_score"])

    def score(self, voicing: Voicing) -> int:
        """Difficulty score of *voicing*; lower is easier, never negative.

        Components:
            - fret span (wider stretch = harder)
            - number of fretted strings
            - barre, with an extra penalty for a full barre
            - neck position above ``high_position_fret``
            - muted strings between played strings
            - bonus for open strings in open-position shapes
        """
        score = self.fret_span_weight * voicing.fret_span
        score += self.fretted_string_weight * voicing.fretted_string_count

        if voicing.barre is not None:
            score += self.barre_penalty
            if voicing.barre.string_count > self.full_barre_strings:
                score += self.full_barre_penalty

        lowest = voicing.lowest_fret
        if lowest is not None and lowest > self.high_position_fret:
            score += (lowest - self.high_position_fret) * self.high_position_weight

        score += self.interior_mute_penalty * len(voicing.interior_muted_strings)

        if lowest is None or lowest <= self.open_position_max_fret:
            score -= self.open_string_bonus * voicing.open_string_count

        return max(score, 0)

    def categorize(self, score: int) -> Difficulty:
        if score <= self.beginner_max_score:
            return Difficulty.BEGINNER
        if score <= self.intermediate_max_score:
            return Difficulty.INTERMEDIATE
        return Difficulty.ADVANCED


def barre_group(voicing: Voicing) -> Optional[tuple[int, int, int]]:
    """Return ``(fret, first_string, last_string)`` if the lowest fret can be barred.

    A barre needs at least two strings fretted at the lowest fret, and no
    string from the first to the last of them may be fretted higher. Open
    and muted strings inside the range do not break it.
    """
    fretted = [(i, p.fret) for i, p in enumerate(voicing.positions) if p.is_fretted]
    if not fretted:
        return None

    lowest = min(fret for _, fret in fretted)
    at_lowest = [i for i, fret in fretted if fret == lowest]
    if len(at_lowest) < 2:
        return None

    first, last = at_lowest[0], at_lowest[-1]
    if any(p.is_fretted and p.fret > lowest for p in voicing.positions[first:last + 1]):
        return None
    return lowest, first, last


def fingers_required(voicing: Voicing) -> int:
    """Estimate how many fretting fingers *voicing* needs.

    Strings at the lowest fret collapse to one finger when they can be
    barred; every string at a higher fret needs its own finger.
    Returns 0 when nothing is fretted.
    """
    strings_by_fret: dict[int, int] = {}
    for position in voicing.positions:
        if position.is_fretted:
            strings_by_fret[position.fret] = strings_by_fret.get(position.fret, 0) + 1

    if not strings_by_fret:
        return 0

    lowest = min(strings_by_fret)
    fingers = 1 if barre_group(voicing) is not None else strings_by_fret[lowest]
    fingers += sum(count for fret, count in strings_by_fret.items() if fret != lowest)
    return fingers


@lru_cache(maxsize=None)
def default_model() -> DifficultyModel:
    """The model built from the packaged cost file (loaded once)."""
    return DifficultyModel()


def difficulty_score(voicing: Voicing) -> int:
    return default_model().score(voicing)


def categorize_score(score: int) -> Difficulty:
    return default_model().categorize(score)
