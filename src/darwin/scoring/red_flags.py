"""Red-flag evaluator.

A red flag is included iff any one of its triggers matches. Trigger types:

- score_threshold: dimension score < threshold (default 2)
- numeric_threshold: numeric_context[field] present and < threshold (default 0)
- numeric_missing: numeric_context[field] absent
- question_score_below: non-NA answer to question_id with value < threshold

Legacy aliases dimension_score_below, context_field_below and
context_field_missing map onto the first three. Unknown trigger types and
references to unknown dimensions/fields never match.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence

from darwin.models.answers import Answer
from darwin.models.config import ConfigurationSnapshot, RedFlagTrigger
from darwin.models.results import DimensionScore, EvaluatedRedFlag

logger = logging.getLogger(__name__)

DEFAULT_SCORE_THRESHOLD = 2.0
DEFAULT_NUMERIC_THRESHOLD = 0.0


class TriggerInputs:
    """Read-only view of everything a trigger may inspect."""

    __slots__ = ("scores_by_dimension", "answers_by_question", "numeric_context")

    def __init__(
        self,
        dimension_scores: Sequence[DimensionScore],
        answers: Sequence[Answer],
        numeric_context: Mapping[str, float],
    ) -> None:
        self.scores_by_dimension = {ds.dimension_id: ds for ds in dimension_scores}
        self.answers_by_question = {a.question_id: a for a in answers}
        self.numeric_context = numeric_context


def _score_threshold(trigger: RedFlagTrigger, inputs: TriggerInputs) -> bool:
    ds = inputs.scores_by_dimension.get(trigger.dimension_id or "")
    if ds is None:
        return False
    threshold = trigger.threshold if trigger.threshold is not None else DEFAULT_SCORE_THRESHOLD
    return ds.score < threshold


def _numeric_threshold(trigger: RedFlagTrigger, inputs: TriggerInputs) -> bool:
    value = inputs.numeric_context.get(trigger.field or "")
    if value is None:
        return False
    threshold = (
        trigger.threshold if trigger.threshold is not None else DEFAULT_NUMERIC_THRESHOLD
    )
    return value < threshold


def _numeric_missing(trigger: RedFlagTrigger, inputs: TriggerInputs) -> bool:
    return inputs.numeric_context.get(trigger.field or "") is None


def _question_score_below(trigger: RedFlagTrigger, inputs: TriggerInputs) -> bool:
    answer = inputs.answers_by_question.get(trigger.question_id or "")
    if answer is None or answer.is_na or answer.value is None:
        return False
    threshold = trigger.threshold if trigger.threshold is not None else DEFAULT_SCORE_THRESHOLD
    return answer.value < threshold


TriggerFn = Callable[[RedFlagTrigger, TriggerInputs], bool]

TRIGGER_DISPATCH: dict[str, TriggerFn] = {
    "score_threshold": _score_threshold,
    "dimension_score_below": _score_threshold,
    "numeric_threshold": _numeric_threshold,
    "context_field_below": _numeric_threshold,
    "numeric_missing": _numeric_missing,
    "context_field_missing": _numeric_missing,
    "question_score_below": _question_score_below,
}


def trigger_matches(trigger: RedFlagTrigger, inputs: TriggerInputs) -> bool:
    """Evaluate one trigger. Unknown trigger types never match."""
    fn = TRIGGER_DISPATCH.get(trigger.type)
    if fn is None:
        logger.debug("Ignoring unknown red-flag trigger type %r", trigger.type)
        return False
    return fn(trigger, inputs)


def evaluate_red_flags(
    config: ConfigurationSnapshot,
    dimension_scores: Sequence[DimensionScore],
    answers: Sequence[Answer],
    numeric_context: Mapping[str, float],
) -> list[EvaluatedRedFlag]:
    """Evaluate every configured red flag.

    Args:
        config: Configuration holding red-flag definitions.
        dimension_scores: Computed dimension scores.
        answers: Raw answers (for question-level triggers).
        numeric_context: Externally supplied business metrics.

    Returns:
        Triggered flags in configuration order.
    """
    inputs = TriggerInputs(dimension_scores, answers, numeric_context)
    triggered: list[EvaluatedRedFlag] = []

    for rf in config.red_flags:
        if any(trigger_matches(t, inputs) for t in rf.triggers):
            logger.debug("Red flag %s triggered (severity=%s)", rf.code, rf.severity)
            triggered.append(
                EvaluatedRedFlag(
                    code=rf.code,
                    label=rf.label,
                    severity=rf.severity,
                    actions=rf.actions,
                )
            )

    return triggered
