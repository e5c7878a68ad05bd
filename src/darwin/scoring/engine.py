"""Scoring engine.

Deterministic aggregator that:
1. Averages non-NA answers of active questions per dimension
2. Computes coverage = answered / active questions
3. Computes overall = sum(score_d * w_d) / sum(w_d) with stage weights
4. Evaluates red flags and collects deep-dive dimensions

Every function is pure: identical inputs give identical results.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from darwin.models.answers import Answer
from darwin.models.config import ConfigurationSnapshot
from darwin.models.results import AssessmentResult, DimensionScore, EvaluatedRedFlag
from darwin.scoring.numeric import round_half_up
from darwin.scoring.red_flags import evaluate_red_flags
from darwin.scoring.stage_packs import get_stage_pack

logger = logging.getLogger(__name__)

DEEP_DIVE_SCORE_CEILING = 3.0


def compute_dimension_scores(
    config: ConfigurationSnapshot,
    answers: Sequence[Answer],
    stage: str,
) -> list[DimensionScore]:
    """Score every configured dimension, in configuration order.

    Args:
        config: Questionnaire configuration.
        answers: Answers of one assessment.
        stage: Stage key for target lookup.

    Returns:
        One DimensionScore per dimension. Dimensions without qualifying
        answers score 0 with coverage 0. When a question is answered more
        than once only the last answer counts.
    """
    pack = get_stage_pack(config, stage)
    latest = {a.question_id: a for a in answers}
    scores: list[DimensionScore] = []

    for dim in config.dimensions:
        question_ids = {
            q.id for q in config.questions if q.dimension_id == dim.id and q.is_active
        }
        values = [
            a.value
            for a in latest.values()
            if a.question_id in question_ids and not a.is_na and a.value is not None
        ]
        total = len(question_ids)
        mean = sum(values) / len(values) if values else 0.0

        scores.append(
            DimensionScore(
                dimension_id=dim.id,
                label=dim.label,
                score=round_half_up(mean, 2),
                target=pack.target(dim.id),
                coverage=len(values) / total if total > 0 else 0.0,
                answered=len(values),
                total=total,
            )
        )

    return scores


def compute_overall_score(
    dimension_scores: Sequence[DimensionScore],
    config: ConfigurationSnapshot,
    stage: str,
) -> float:
    """Compute the stage-weighted mean of dimension scores.

    overall = sum(score_d * w_d) / sum(w_d), weights defaulting to 1.
    The denominator falls back to 1 when every weight is 0.
    """
    pack = get_stage_pack(config, stage)
    weighted = 0.0
    total_weight = 0.0
    for ds in dimension_scores:
        w = pack.weight(ds.dimension_id)
        weighted += ds.score * w
        total_weight += w
    if total_weight == 0:
        logger.debug("All weights are zero for stage %r; using denominator 1", stage)
        total_weight = 1.0
    return weighted / total_weight


def _collect_deep_dive_dimensions(
    config: ConfigurationSnapshot,
    dimension_scores: Sequence[DimensionScore],
    red_flags: Sequence[EvaluatedRedFlag],
) -> list[str]:
    """Low-scoring dimensions first, then dimensions named by triggered flags."""
    deep_dive = [
        ds.dimension_id
        for ds in dimension_scores
        if 0 < ds.score < DEEP_DIVE_SCORE_CEILING
    ]
    for rf in red_flags:
        definition = config.find_red_flag(rf.code)
        if definition is None:
            continue
        for trigger in definition.triggers:
            if trigger.dimension_id and trigger.dimension_id not in deep_dive:
                deep_dive.append(trigger.dimension_id)
    return deep_dive


def compute_assessment_result(
    config: ConfigurationSnapshot,
    answers: Sequence[Answer],
    stage: str,
    numeric_context: Mapping[str, float] | None = None,
) -> AssessmentResult:
    """Run the scoring pipeline and return a fresh AssessmentResult.

    Args:
        config: Questionnaire configuration.
        answers: Answers of one assessment.
        stage: Stage key for weight/target lookup.
        numeric_context: Business metrics used by numeric red-flag triggers.

    Returns:
        AssessmentResult with overall score, dimension scores, red flags
        and deep-dive dimension ids.
    """
    context = dict(numeric_context or {})
    dimension_scores = compute_dimension_scores(config, answers, stage)
    overall = compute_overall_score(dimension_scores, config, stage)
    red_flags = evaluate_red_flags(config, dimension_scores, answers, context)
    deep_dive = _collect_deep_dive_dimensions(config, dimension_scores, red_flags)

    logger.debug(
        "Scored %d dimensions for stage %r: overall=%.2f, red_flags=%d",
        len(dimension_scores),
        stage,
        overall,
        len(red_flags),
    )

    return AssessmentResult(
        overall_score=round_half_up(overall, 2),
        overall_weighted=overall,
        dimension_scores=tuple(dimension_scores),
        red_flags=tuple(red_flags),
        deep_dive_dimension_ids=tuple(deep_dive),
    )
