"""Risk x impact 2x2 matrix.

Dimension points:
    impact = priority / max_priority * 100
    risk   = max(0, 60 - score100) + 15 if structural + 10 * red-flag severity points
Red-flag points use fixed severity lookup tables. Both axes are capped at 100
and split into quadrants at 50 (>= 50 is "high").
"""

from __future__ import annotations

from darwin.models.actions import MatrixPoint, PointType, Quadrant
from darwin.models.config import ConfigurationSnapshot, Severity
from darwin.models.results import AssessmentResult
from darwin.scoring.gaps import compute_gaps, to_100
from darwin.scoring.numeric import round_int

DEFAULT_STRUCTURAL_DIMENSIONS: frozenset[str] = frozenset({"FS", "GR", "PT"})

QUADRANT_THRESHOLD = 50
LOW_SCORE_CEILING = 60
STRUCTURAL_BONUS = 15
RISK_PER_SEVERITY_POINT = 10

SEVERITY_POINTS: dict[str, float] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM_HIGH: 2,
    Severity.MEDIUM: 1,
    Severity.LOW: 0.5,
}
DEFAULT_SEVERITY_POINTS = 1.0

RED_FLAG_IMPACT: dict[str, float] = {
    Severity.CRITICAL: 90,
    Severity.HIGH: 75,
    Severity.MEDIUM_HIGH: 55,
    Severity.MEDIUM: 40,
    Severity.LOW: 20,
}
RED_FLAG_RISK: dict[str, float] = {
    Severity.CRITICAL: 95,
    Severity.HIGH: 80,
    Severity.MEDIUM_HIGH: 60,
    Severity.MEDIUM: 45,
    Severity.LOW: 25,
}
DEFAULT_RED_FLAG_AXIS = 50.0


def quadrant_for(impact: float, risk: float) -> Quadrant:
    high_impact = impact >= QUADRANT_THRESHOLD
    high_risk = risk >= QUADRANT_THRESHOLD
    if high_impact:
        return Quadrant.HIGH_RISK_HIGH_IMPACT if high_risk else Quadrant.LOW_RISK_HIGH_IMPACT
    return Quadrant.HIGH_RISK_LOW_IMPACT if high_risk else Quadrant.LOW_RISK_LOW_IMPACT


def _red_flag_points_by_dimension(
    config: ConfigurationSnapshot,
    result: AssessmentResult,
) -> dict[str, float]:
    """Sum severity points of triggered flags onto the dimensions their triggers name."""
    points: dict[str, float] = {}
    for rf in result.red_flags:
        definition = config.find_red_flag(rf.code)
        if definition is None:
            continue
        sp = SEVERITY_POINTS.get(rf.severity, DEFAULT_SEVERITY_POINTS)
        for trigger in definition.triggers:
            if trigger.dimension_id:
                points[trigger.dimension_id] = points.get(trigger.dimension_id, 0.0) + sp
    return points


def compute_2x2_matrix(
    config: ConfigurationSnapshot,
    result: AssessmentResult,
    stage: str,
) -> list[MatrixPoint]:
    """Place gapped dimensions and triggered red flags on the impact/risk plane.

    Args:
        config: Configuration (red-flag triggers, weights, targets).
        result: Computed assessment result.
        stage: Stage key.

    Returns:
        Dimension points in gap-priority order, followed by red-flag points.
    """
    gaps = compute_gaps(result.dimension_scores, config, stage)
    max_priority = max([g.priority_score for g in gaps] + [1.0])
    structural = (
        frozenset(config.structural_dimensions)
        if config.structural_dimensions is not None
        else DEFAULT_STRUCTURAL_DIMENSIONS
    )
    rf_points = _red_flag_points_by_dimension(config, result)
    scores = {ds.dimension_id: ds for ds in result.dimension_scores}

    points: list[MatrixPoint] = []
    for gap in gaps:
        impact = min(100, round_int(gap.priority_score / max_priority * 100))
        ds = scores.get(gap.dimension_id)
        low_score = max(0, LOW_SCORE_CEILING - to_100(ds.score)) if ds is not None else 0
        structural_bonus = STRUCTURAL_BONUS if gap.dimension_id in structural else 0
        rf_risk = rf_points.get(gap.dimension_id, 0.0) * RISK_PER_SEVERITY_POINT
        risk = min(100, low_score + structural_bonus + rf_risk)
        points.append(
            MatrixPoint(
                id=gap.dimension_id,
                label=gap.label,
                impact=impact,
                risk=risk,
                type=PointType.DIMENSION,
                quadrant=quadrant_for(impact, risk),
            )
        )

    for rf in result.red_flags:
        impact = RED_FLAG_IMPACT.get(rf.severity, DEFAULT_RED_FLAG_AXIS)
        risk = RED_FLAG_RISK.get(rf.severity, DEFAULT_RED_FLAG_AXIS)
        points.append(
            MatrixPoint(
                id=rf.code,
                label=rf.label,
                impact=impact,
                risk=risk,
                type=PointType.RED_FLAG,
                quadrant=quadrant_for(impact, risk),
            )
        )

    return points
