"""Assessment report builder.

Runs the scoring pipeline once and bundles every derived view a report page
or export needs. Deterministic: no timestamps, no randomness.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from darwin.models.actions import AgendaItem, MatrixPoint, ScoredAction
from darwin.models.answers import Answer
from darwin.models.config import ConfigurationSnapshot
from darwin.models.results import AssessmentResult, PrioritizedGap
from darwin.pareto.agenda import generate_meeting_agenda
from darwin.pareto.engine import compute_pareto_actions, select_top5
from darwin.pareto.matrix import compute_2x2_matrix
from darwin.report.blocks import BlockResult, compute_blocks, get_blocks
from darwin.report.narrative import (
    CompletenessInfo,
    Level,
    generate_dimension_narrative,
    generate_overall_narrative,
    get_completeness,
    get_level,
)
from darwin.report.risk import compute_council_risk
from darwin.report.roadmap import RoadmapAction, generate_roadmap
from darwin.scoring.engine import compute_assessment_result
from darwin.scoring.gaps import compute_gaps, to_100

logger = logging.getLogger(__name__)


class AssessmentReport(BaseModel):
    """Everything derived from one (config, answers, stage, context) tuple."""

    model_config = ConfigDict(frozen=True)

    stage: str
    result: AssessmentResult
    overall_score100: int
    overall_level: Level
    completeness: CompletenessInfo
    gaps: tuple[PrioritizedGap, ...] = ()
    blocks: tuple[BlockResult, ...] = ()
    council_risk: float
    overall_narrative: str
    dimension_narratives: dict[str, str]
    roadmap: tuple[RoadmapAction, ...] = ()
    pareto_actions: tuple[ScoredAction, ...] = ()
    top_actions: tuple[ScoredAction, ...] = ()
    agenda: tuple[AgendaItem, ...] = ()
    matrix: tuple[MatrixPoint, ...] = ()


def build_report_from_result(
    config: ConfigurationSnapshot,
    result: AssessmentResult,
    stage: str,
) -> AssessmentReport:
    """Derive every report view from an already computed result."""
    gaps = compute_gaps(result.dimension_scores, config, stage)
    pareto_actions = compute_pareto_actions(config, result, stage)
    overall100 = to_100(result.overall_score)

    return AssessmentReport(
        stage=stage,
        result=result,
        overall_score100=overall100,
        overall_level=get_level(overall100),
        completeness=get_completeness(result),
        gaps=tuple(gaps),
        blocks=tuple(compute_blocks(get_blocks(config), result.dimension_scores, config, stage)),
        council_risk=compute_council_risk(result.red_flags, config),
        overall_narrative=generate_overall_narrative(result, config, stage),
        dimension_narratives={
            ds.dimension_id: generate_dimension_narrative(ds) for ds in result.dimension_scores
        },
        roadmap=tuple(generate_roadmap(gaps, result.red_flags)),
        pareto_actions=tuple(pareto_actions),
        top_actions=tuple(select_top5(pareto_actions, result, config)),
        agenda=tuple(generate_meeting_agenda(config, result, stage)),
        matrix=tuple(compute_2x2_matrix(config, result, stage)),
    )


def build_report(
    config: ConfigurationSnapshot,
    answers: Sequence[Answer],
    stage: str,
    numeric_context: Mapping[str, float] | None = None,
) -> AssessmentReport:
    """Score an assessment and derive its full report.

    Args:
        config: Questionnaire configuration.
        answers: Answers of one assessment.
        stage: Stage key.
        numeric_context: Business metrics for numeric red-flag triggers.

    Returns:
        AssessmentReport bundling result, gaps, blocks, risk, narratives,
        roadmap, actions, agenda and matrix.
    """
    result = compute_assessment_result(config, answers, stage, numeric_context)
    report = build_report_from_result(config, result, stage)
    logger.info(
        "Built report for stage %r: overall=%d/100, red_flags=%d, gaps=%d",
        stage,
        report.overall_score100,
        len(result.red_flags),
        len(report.gaps),
    )
    return report
