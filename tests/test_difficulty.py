"""Tests for voicing_engine.difficulty and the YAML cost config."""

import pytest
import yaml

from voicing_engine.config import DEFAULT_CONFIG_PATH, load_section
from voicing_engine.difficulty import Difficulty, DifficultyModel, categorize_score
from voicing_engine.sequencer import TransitionCostModel
from voicing_engine.voicing import Voicing


def _write_config(tmp_path, mutate):
    cfg = yaml.safe_load(DEFAULT_CONFIG_PATH.read_text(encoding="utf-8"))
    mutate(cfg)
    path = tmp_path / "costs.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


class TestConfig:
    def test_packaged_config_loads(self):
        section = load_section("difficulty", ["fret_span_weight"])
        assert section["fret_span_weight"] == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Cost config not found"):
            DifficultyModel(tmp_path / "nope.yaml")

    def test_missing_section(self, tmp_path):
        path = _write_config(tmp_path, lambda cfg: cfg.pop("difficulty"))
        with pytest.raises(ValueError, match="Missing section 'difficulty'"):
            DifficultyModel(path)

    def test_missing_key(self, tmp_path):
        path = _write_config(tmp_path, lambda cfg: cfg["difficulty"].pop("fret_span_weight"))
        with pytest.raises(ValueError, match="difficulty.fret_span_weight"):
            DifficultyModel(path)

    def test_missing_preference(self, tmp_path):
        path = _write_config(
            tmp_path, lambda cfg: cfg["transition"]["preference"].pop("prefer_barre")
        )
        with pytest.raises(ValueError, match="prefer_barre"):
            TransitionCostModel(path)

    def test_custom_weights(self, tmp_path):
        path = _write_config(tmp_path, lambda cfg: cfg["difficulty"].update(fret_span_weight=0))
        model = DifficultyModel(path)
        # 3 fretted * 5 - 2 open * 3
        assert model.score(Voicing.parse("X02210")) == 9


# ---------------------------------------------------------------------------
# Scoring properties
# ---------------------------------------------------------------------------


class TestScore:
    def test_categories(self):
        assert categorize_score(0) == Difficulty.BEGINNER
        assert categorize_score(25) == Difficulty.BEGINNER
        assert categorize_score(26) == Difficulty.INTERMEDIATE
        assert categorize_score(50) == Difficulty.INTERMEDIATE
        assert categorize_score(51) == Difficulty.ADVANCED

    def test_rank_order(self):
        assert Difficulty.BEGINNER.rank < Difficulty.INTERMEDIATE.rank < Difficulty.ADVANCED.rank

    def test_wider_span_is_harder(self):
        scores = [
            Voicing.from_frets([None, 5, 5 + stretch, None, None, None]).difficulty_score
            for stretch in range(4)
        ]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_higher_position_is_harder(self):
        low = Voicing.from_frets([None, 7, 9, 9, None, None])
        high = Voicing.from_frets([None, 8, 10, 10, None, None])
        assert low.difficulty_score == 41
        assert high.difficulty_score - low.difficulty_score == 3

    def test_more_fretted_strings_is_harder(self):
        fewer = Voicing.parse("XX0232")
        more = Voicing.parse("XX4232")
        assert more.difficulty_score > fewer.difficulty_score

    def test_never_negative(self):
        for text in ("000000", "X00000", "0000", "XXXXXX"):
            assert Voicing.parse(text).difficulty_score >= 0
