"""Arranger — orchestrate the full voicing pipeline for a chord progression.

Responsibilities:
    1. Parse the chord symbols.
    2. Search voicings for every chord and keep the easiest candidates.
    3. Rank the candidates against their neighbours (sequencer).
    4. Return one record per chord for programmatic use.
    5. Serialise records to JSON bytes or pandas DataFrames for display.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence

import pandas as pd

from .capo import CapoSuggestion
from .chord import Chord
from .instrument import Instrument
from .search import SearchOptions, VoicingSearch
from .sequencer import TransitionCostModel, VoicingPreference, default_model
from .voicing import Voicing

logger = logging.getLogger(__name__)


def arrange(
    symbols: Sequence[str],
    instrument: Instrument,
    options: SearchOptions | None = None,
    preference: VoicingPreference = VoicingPreference.BALANCED,
    max_candidates: int = 5,
    cost_model: TransitionCostModel | None = None,
) -> list[dict[str, Any]]:
    """Choose a voicing for every chord of a progression.

    Args:
        symbols: Chord symbols, e.g. ``["C", "Am", "F", "G"]``.
        instrument: Instrument (tuning + capo) to play on.
        options: Search constraints. Defaults to :class:`SearchOptions()`.
        preference: Open / barre preference used when ranking.
        max_candidates: How many of the easiest voicings to consider per chord.
        cost_model: Transition model. Defaults to the packaged weights.

    Returns:
        A list of dicts (same length as *symbols*), each containing:
            - ``chord``                 (str)
            - ``voicing``               (str | None) — None if unplayable
            - ``difficulty``            (str | None)
            - ``difficulty_score``      (int | None)
            - ``fingers``               (int | None)
            - ``transition_cost``       (int)  — from the previous chosen voicing
            - ``transition_difficulty`` (str)
            - ``alternatives``          (list[str]) — other ranked candidates

    Raises:
        ValueError: If a chord symbol cannot be parsed.
    """
    if max_candidates < 1:
        raise ValueError(f"max_candidates must be >= 1, got {max_candidates}")

    model = cost_model if cost_model is not None else default_model()
    search = VoicingSearch(instrument, options)

    chords = [Chord.parse(symbol) for symbol in symbols]
    candidate_lists = [search.find_easiest(chord, limit=max_candidates) for chord in chords]
    rankings = model.sequence_progression(candidate_lists, preference)

    records: list[dict[str, Any]] = []
    previous: Optional[Voicing] = None
    for chord, ranked in zip(chords, rankings):
        if not ranked:
            logger.warning("No voicing found for %s on %s", chord.symbol, instrument)
            records.append(
                {
                    "chord": chord.symbol,
                    "voicing": None,
                    "difficulty": None,
                    "difficulty_score": None,
                    "fingers": None,
                    "transition_cost": 0,
                    "transition_difficulty": model.categorize_cost(0).value,
                    "alternatives": [],
                }
            )
            previous = None
            continue

        chosen = ranked[0].voicing
        cost = model.pairwise_cost(previous, chosen)
        records.append(
            {
                "chord": chord.symbol,
                "voicing": chosen.to_compact_string(),
                "difficulty": chosen.difficulty.value,
                "difficulty_score": chosen.difficulty_score,
                "fingers": chosen.fingers_required,
                "transition_cost": cost,
                "transition_difficulty": model.categorize_cost(cost).value,
                "alternatives": [r.voicing.to_compact_string() for r in ranked[1:]],
            }
        )
        previous = chosen

    return records


def arrangement_to_json_bytes(records: list[dict[str, Any]]) -> bytes:
    """Serialise arrangement records to UTF-8 JSON bytes (for download buttons)."""
    return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")


def arrangement_to_frame(records: list[dict[str, Any]]) -> pd.DataFrame:
    """Arrangement records as a table, alternatives joined into one column."""
    df = pd.DataFrame(records)
    if not df.empty:
        df["alternatives"] = df["alternatives"].apply(" ".join)
    return df


def voicings_to_frame(voicings: Sequence[Voicing]) -> pd.DataFrame:
    """Voicings as a table: shape, difficulty, score, fingers, span, lowest fret."""
    return pd.DataFrame(
        [
            {
                "voicing": v.to_compact_string(),
                "difficulty": v.difficulty.value,
                "score": v.difficulty_score,
                "fingers": v.fingers_required,
                "span": v.fret_span,
                "lowest_fret": v.lowest_fret or 0,
                "barre": v.requires_barre,
            }
            for v in voicings
        ],
        columns=["voicing", "difficulty", "score", "fingers", "span", "lowest_fret", "barre"],
    )


def capo_suggestions_to_frame(suggestions: Sequence[CapoSuggestion]) -> pd.DataFrame:
    """Capo suggestions as a table, easiest first."""
    return pd.DataFrame(
        [
            {
                "capo": s.capo_fret,
                "shapes": " ".join(s.shape_symbols),
                "score": s.difficulty_score,
                "description": s.description,
            }
            for s in suggestions
        ],
        columns=["capo", "shapes", "score", "description"],
    )
