"""Tests for the scoring engine.

Tests:
- Dimension score is the 2dp mean of non-NA answers of active questions
- Coverage = answered / active questions, 0 without active questions
- Overall score normalizes weights by their own sum
- Stage pack fallbacks for weights and targets
- Deep dive dimension collection
- Idempotence
"""

from __future__ import annotations

from darwin.models.config import BoundedTarget, ConfigurationSnapshot, FixedTarget
from darwin.scoring.engine import (
    compute_assessment_result,
    compute_dimension_scores,
    compute_overall_score,
)
from darwin.scoring.gaps import to_100
from darwin.scoring.numeric import clamp, round_half_up, round_int
from darwin.scoring.stage_packs import (
    DEFAULT_TARGET,
    get_stage_pack,
    potential_value,
    target_value,
)
from tests.fixtures.builders import answer, dims, make_config, questions


class TestNumeric:
    """Rounding halves away from zero, never to even."""

    def test_round_int_half_up(self) -> None:
        assert round_int(62.5) == 63
        assert round_int(0.5) == 1
        assert round_int(2.5) == 3
        assert round_int(-25.0) == -25

    def test_round_half_up_digits(self) -> None:
        assert round_half_up(10 / 3, 2) == 3.33
        assert round_half_up(3.125, 2) == 3.13

    def test_clamp(self) -> None:
        assert clamp(120, 0, 100) == 100
        assert clamp(-5, 0, 100) == 0
        assert clamp(42, 0, 100) == 42


class TestStagePack:
    """Weight and target lookup with fallbacks."""

    def test_missing_stage_uses_defaults(self, sample_config: ConfigurationSnapshot) -> None:
        pack = get_stage_pack(sample_config, "series_b")
        assert pack.weight("MN") == 1.0
        assert pack.target("MN") == DEFAULT_TARGET

    def test_configured_weight_and_default(self, sample_config: ConfigurationSnapshot) -> None:
        pack = get_stage_pack(sample_config, "seed")
        assert pack.weight("MN") == 2.0
        assert pack.weight("IC") == 1.0

    def test_explicit_zero_weight_kept(self) -> None:
        config = make_config(weights_by_stage={"seed": {"MN": 0}})
        assert get_stage_pack(config, "seed").weight("MN") == 0.0

    def test_target_variants(self) -> None:
        assert target_value(FixedTarget(value=4.0)) == 4.0
        assert target_value(BoundedTarget(benchmark=3.0, potential=4.5)) == 3.0
        assert target_value(BoundedTarget(potential=4.5)) == DEFAULT_TARGET
        assert target_value(None) == DEFAULT_TARGET

    def test_potential_falls_back_to_target(self) -> None:
        assert potential_value(BoundedTarget(benchmark=3.0, potential=4.5)) == 4.5
        assert potential_value(BoundedTarget(benchmark=3.0)) == 3.0
        assert potential_value(FixedTarget(value=4.0)) == 4.0
        assert potential_value(None) == DEFAULT_TARGET


class TestDimensionScores:
    """Per-dimension mean and coverage."""

    def test_mean_and_full_coverage(self) -> None:
        config = make_config(dimensions=dims("MN"), questions=questions({"MN": 3}))
        answers = [answer("MN1", 4), answer("MN2", 5), answer("MN3", 3)]

        [ds] = compute_dimension_scores(config, answers, "seed")

        assert ds.score == 4.0
        assert ds.coverage == 1.0
        assert ds.answered == 3
        assert ds.total == 3
        assert to_100(ds.score) == 75

    def test_na_answers_excluded(self) -> None:
        config = make_config(dimensions=dims("MN"), questions=questions({"MN": 3}))
        answers = [answer("MN1", 4), answer("MN2", None, is_na=True), answer("MN3", 2)]

        [ds] = compute_dimension_scores(config, answers, "seed")

        assert ds.score == 3.0
        assert ds.answered == 2
        assert round_half_up(ds.coverage, 4) == 0.6667

    def test_inactive_questions_excluded(self, sample_config: ConfigurationSnapshot) -> None:
        answers = [answer("PM1", 4), answer("PM2", 1)]
        scores = {
            ds.dimension_id: ds for ds in compute_dimension_scores(sample_config, answers, "seed")
        }

        assert scores["PM"].score == 4.0
        assert scores["PM"].total == 1
        assert scores["PM"].coverage == 1.0

    def test_unanswered_dimension_scores_zero(self) -> None:
        config = make_config(dimensions=dims("MN"), questions=questions({"MN": 2}))
        [ds] = compute_dimension_scores(config, [], "seed")
        assert ds.score == 0.0
        assert ds.coverage == 0.0

    def test_dimension_without_questions(self) -> None:
        config = make_config(dimensions=dims("MN"))
        [ds] = compute_dimension_scores(config, [answer("X1", 5)], "seed")
        assert ds.coverage == 0.0
        assert ds.total == 0

    def test_answers_for_unknown_questions_ignored(self) -> None:
        config = make_config(dimensions=dims("MN"), questions=questions({"MN": 1}))
        [ds] = compute_dimension_scores(config, [answer("MN1", 2), answer("ZZ9", 5)], "seed")
        assert ds.score == 2.0

    def test_repeated_answer_last_one_wins(self) -> None:
        config = make_config(dimensions=dims("A"), questions=questions({"A": 1}))

        [ds] = compute_dimension_scores(config, [answer("A1", 4), answer("A1", 2)], "seed")

        assert ds.score == 2.0
        assert ds.answered == 1
        assert ds.coverage == 1.0

    def test_repeated_answer_replaced_by_na(self) -> None:
        config = make_config(dimensions=dims("A"), questions=questions({"A": 2}))
        answers = [answer("A1", 4), answer("A2", 3), answer("A1", None, is_na=True)]

        [ds] = compute_dimension_scores(config, answers, "seed")

        assert ds.score == 3.0
        assert ds.answered == 1
        assert ds.coverage == 0.5

    def test_score_rounded_to_two_decimals(self) -> None:
        config = make_config(dimensions=dims("MN"), questions=questions({"MN": 3}))
        answers = [answer("MN1", 3), answer("MN2", 3), answer("MN3", 4)]
        [ds] = compute_dimension_scores(config, answers, "seed")
        assert ds.score == 3.33

    def test_dimension_order_follows_config(self, sample_config: ConfigurationSnapshot) -> None:
        scores = compute_dimension_scores(sample_config, [], "seed")
        assert [ds.dimension_id for ds in scores] == [d.id for d in sample_config.dimensions]

    def test_target_from_stage(self, sample_config: ConfigurationSnapshot) -> None:
        scores = {ds.dimension_id: ds for ds in compute_dimension_scores(sample_config, [], "seed")}
        assert scores["GT"].target == 4.0
        assert scores["FS"].target == 3.5
        assert scores["IC"].target == DEFAULT_TARGET


class TestOverallScore:
    """Weighted mean normalized by the weight sum."""

    def _config(self, weights: dict[str, float]) -> ConfigurationSnapshot:
        return make_config(
            dimensions=dims("A", "B"),
            questions=questions({"A": 1, "B": 1}),
            weights_by_stage={"seed": weights},
        )

    def test_weighted_mean(self) -> None:
        config = self._config({"A": 2, "B": 1})
        result = compute_assessment_result(config, [answer("A1", 4), answer("B1", 2)], "seed")
        assert result.overall_weighted == 10 / 3
        assert result.overall_score == 3.33

    def test_default_weights_give_plain_mean(self) -> None:
        config = self._config({})
        result = compute_assessment_result(config, [answer("A1", 4), answer("B1", 2)], "seed")
        assert result.overall_score == 3.0

    def test_all_zero_weights_give_zero(self) -> None:
        config = self._config({"A": 0, "B": 0})
        scores = compute_dimension_scores(config, [answer("A1", 4), answer("B1", 2)], "seed")
        assert compute_overall_score(scores, config, "seed") == 0.0

    def test_zero_weight_excludes_dimension(self) -> None:
        config = self._config({"A": 1, "B": 0})
        result = compute_assessment_result(config, [answer("A1", 4), answer("B1", 2)], "seed")
        assert result.overall_score == 4.0

    def test_unanswered_dimension_counts_as_zero(self) -> None:
        config = self._config({})
        result = compute_assessment_result(config, [answer("A1", 4)], "seed")
        assert result.overall_score == 2.0


class TestAssessmentResult:
    """Full pipeline: red flags, deep dive, idempotence."""

    def test_idempotent(self, sample_config: ConfigurationSnapshot, sample_answers: list) -> None:
        context = {"runway_months": 4}
        first = compute_assessment_result(sample_config, sample_answers, "seed", context)
        second = compute_assessment_result(sample_config, sample_answers, "seed", context)
        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_deep_dive_low_scores_then_flag_dimensions(
        self, sample_config: ConfigurationSnapshot, sample_answers: list
    ) -> None:
        result = compute_assessment_result(
            sample_config, sample_answers, "seed", {"burn_monthly": 50000}
        )
        # MN = 2.5 and FS = 2.0 are below 3; unanswered dimensions are not
        assert result.deep_dive_dimension_ids == ("MN", "FS")
        assert [rf.code for rf in result.red_flags] == ["RF_FS_LOW"]

    def test_flag_dimension_appended_once(self) -> None:
        config = make_config(
            dimensions=dims("A", "B"),
            questions=questions({"A": 1, "B": 1}),
            red_flags=[
                {
                    "code": "RF_B",
                    "severity": "medium",
                    "triggers": [{"type": "score_threshold", "dimension_id": "B", "threshold": 4}],
                },
                {
                    "code": "RF_A",
                    "severity": "medium",
                    "triggers": [{"type": "score_threshold", "dimension_id": "A", "threshold": 3}],
                },
            ],
        )
        result = compute_assessment_result(config, [answer("A1", 2), answer("B1", 3.5)], "seed")
        assert result.deep_dive_dimension_ids == ("A", "B")

    def test_result_is_fresh_per_call(self, sample_config: ConfigurationSnapshot) -> None:
        empty = compute_assessment_result(sample_config, [], "seed")
        scored = compute_assessment_result(sample_config, [answer("MN1", 5)], "seed")
        assert empty.overall_score == 0.0
        assert scored.overall_score > 0.0
