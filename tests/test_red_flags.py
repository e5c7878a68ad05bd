"""Tests for red-flag evaluation.

Tests:
- Trigger semantics: score threshold, numeric threshold, numeric missing, question score
- OR semantics across triggers of one flag
- Unknown trigger types and unknown references never match
- Output preserves configuration order
"""

from __future__ import annotations

from typing import Any

from darwin.models.answers import Answer
from darwin.models.config import ConfigurationSnapshot, RedFlagTrigger
from darwin.models.results import DimensionScore
from darwin.scoring.engine import compute_dimension_scores
from darwin.scoring.red_flags import TRIGGER_DISPATCH, evaluate_red_flags
from tests.fixtures.builders import answer, dims, make_config, questions


def _flag(code: str, *triggers: dict[str, Any], severity: str = "high") -> dict[str, Any]:
    return {"code": code, "label": code.title(), "severity": severity, "triggers": list(triggers)}


def _evaluate(
    red_flags: list[dict[str, Any]],
    answers: list[Answer] | None = None,
    context: dict[str, float] | None = None,
) -> list[str]:
    config = make_config(
        dimensions=dims("FS", "MN"),
        questions=questions({"FS": 1, "MN": 1}),
        red_flags=red_flags,
    )
    answers = answers or []
    scores = compute_dimension_scores(config, answers, "seed")
    return [rf.code for rf in evaluate_red_flags(config, scores, answers, context or {})]


RUNWAY = {"type": "numeric_threshold", "field": "runway_months", "threshold": 6}


class TestNumericThreshold:
    """numeric_threshold matches only defined values below the threshold."""

    def test_below_threshold_matches(self) -> None:
        assert _evaluate([_flag("RF_RUNWAY", RUNWAY)], context={"runway_months": 4}) == [
            "RF_RUNWAY"
        ]

    def test_at_threshold_does_not_match(self) -> None:
        assert _evaluate([_flag("RF_RUNWAY", RUNWAY)], context={"runway_months": 6}) == []

    def test_missing_field_does_not_match(self) -> None:
        assert _evaluate([_flag("RF_RUNWAY", RUNWAY)], context={}) == []

    def test_default_threshold_is_zero(self) -> None:
        trigger = {"type": "numeric_threshold", "field": "cash"}
        assert _evaluate([_flag("RF_CASH", trigger)], context={"cash": -1}) == ["RF_CASH"]
        assert _evaluate([_flag("RF_CASH", trigger)], context={"cash": 0}) == []


class TestNumericMissing:
    def test_absent_field_matches(self) -> None:
        trigger = {"type": "numeric_missing", "field": "burn_monthly"}
        assert _evaluate([_flag("RF_NO_BURN", trigger)], context={}) == ["RF_NO_BURN"]

    def test_present_field_does_not_match(self) -> None:
        trigger = {"type": "numeric_missing", "field": "burn_monthly"}
        assert _evaluate([_flag("RF_NO_BURN", trigger)], context={"burn_monthly": 0}) == []


class TestScoreThreshold:
    """score_threshold compares the dimension score strictly."""

    def test_low_score_matches(self) -> None:
        trigger = {"type": "score_threshold", "dimension_id": "FS", "threshold": 2.5}
        assert _evaluate([_flag("RF_FS", trigger)], [answer("FS1", 2)]) == ["RF_FS"]

    def test_equal_score_does_not_match(self) -> None:
        trigger = {"type": "score_threshold", "dimension_id": "FS", "threshold": 2}
        assert _evaluate([_flag("RF_FS", trigger)], [answer("FS1", 2)]) == []

    def test_default_threshold_is_two(self) -> None:
        trigger = {"type": "score_threshold", "dimension_id": "FS"}
        assert _evaluate([_flag("RF_FS", trigger)], [answer("FS1", 1)]) == ["RF_FS"]
        assert _evaluate([_flag("RF_FS", trigger)], [answer("FS1", 3)]) == []

    def test_unknown_dimension_never_matches(self) -> None:
        trigger = {"type": "score_threshold", "dimension_id": "ZZ", "threshold": 5}
        assert _evaluate([_flag("RF_ZZ", trigger)], [answer("FS1", 1)]) == []


class TestQuestionScoreBelow:
    def test_low_answer_matches(self) -> None:
        trigger = {"type": "question_score_below", "question_id": "MN1", "threshold": 3}
        assert _evaluate([_flag("RF_Q", trigger)], [answer("MN1", 2)]) == ["RF_Q"]

    def test_na_answer_never_matches(self) -> None:
        trigger = {"type": "question_score_below", "question_id": "MN1", "threshold": 3}
        assert _evaluate([_flag("RF_Q", trigger)], [answer("MN1", None, is_na=True)]) == []

    def test_unanswered_question_never_matches(self) -> None:
        trigger = {"type": "question_score_below", "question_id": "MN1", "threshold": 3}
        assert _evaluate([_flag("RF_Q", trigger)], []) == []


class TestEvaluation:
    """Flag-level semantics."""

    def test_any_trigger_suffices(self) -> None:
        flag = _flag(
            "RF_CASH",
            {"type": "numeric_missing", "field": "burn_monthly"},
            RUNWAY,
        )
        assert _evaluate([flag], context={"runway_months": 3, "burn_monthly": 1000}) == [
            "RF_CASH"
        ]

    def test_unknown_trigger_type_never_matches(self) -> None:
        flag = _flag("RF_FUTURE", {"type": "sentiment_below", "field": "nps"})
        assert _evaluate([flag], context={"nps": -100}) == []

    def test_flag_without_triggers_never_matches(self) -> None:
        assert _evaluate([_flag("RF_EMPTY")]) == []

    def test_configuration_order_preserved(self) -> None:
        flags = [
            _flag("RF_LOW", {"type": "numeric_missing", "field": "a"}, severity="low"),
            _flag("RF_CRIT", {"type": "numeric_missing", "field": "b"}, severity="critical"),
            _flag("RF_MED", {"type": "numeric_missing", "field": "c"}, severity="medium"),
        ]
        assert _evaluate(flags) == ["RF_LOW", "RF_CRIT", "RF_MED"]

    def test_projection_carries_definition_fields(
        self, sample_config: ConfigurationSnapshot
    ) -> None:
        scores: list[DimensionScore] = compute_dimension_scores(sample_config, [], "seed")
        [runway, *_] = evaluate_red_flags(sample_config, scores, [], {"runway_months": 2})
        assert runway.code == "RF_RUNWAY"
        assert runway.label == "Short runway"
        assert runway.severity == "high"
        assert runway.actions[0] == "Raise a bridge round"

    def test_legacy_trigger_aliases(self) -> None:
        for alias, canonical in (
            ("dimension_score_below", "score_threshold"),
            ("context_field_below", "numeric_threshold"),
            ("context_field_missing", "numeric_missing"),
        ):
            assert TRIGGER_DISPATCH[alias] is TRIGGER_DISPATCH[canonical]

        trigger = RedFlagTrigger(type="context_field_below", field="runway_months", threshold=6)
        flag = _flag("RF_ALIAS", trigger.model_dump())
        assert _evaluate([flag], context={"runway_months": 1}) == ["RF_ALIAS"]
