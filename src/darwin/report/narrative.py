"""Narrative derivation: maturity levels, completeness and report sentences.

Pure formatting over computed results. Wording is presentation text; the
contract is only that output is a deterministic function of the inputs.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from darwin.models.config import HIGH_SEVERITIES, ConfigurationSnapshot, Severity
from darwin.models.results import AssessmentResult, DimensionScore
from darwin.scoring.gaps import compute_gaps, to_100
from darwin.scoring.numeric import round_int


class Level(StrEnum):
    """Maturity band of a 0-100 score."""

    ADVANCED = "Advanced"
    STRUCTURED = "Structured"
    EVOLVING = "Evolving"
    INITIAL = "Initial"


class SeverityCategory(StrEnum):
    CRITICAL = "Critical"
    ATTENTION = "Attention"
    MONITOR = "Monitor"


class Confidence(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


_LEVEL_BANDS: tuple[tuple[int, Level], ...] = (
    (75, Level.ADVANCED),
    (55, Level.STRUCTURED),
    (35, Level.EVOLVING),
)


def get_level(score100: float) -> Level:
    """Band a 0-100 score; each band includes its lower bound."""
    for floor, level in _LEVEL_BANDS:
        if score100 >= floor:
            return level
    return Level.INITIAL


def get_severity_category(severity: str) -> SeverityCategory:
    if severity in HIGH_SEVERITIES:
        return SeverityCategory.CRITICAL
    if severity in (Severity.MEDIUM_HIGH, Severity.MEDIUM):
        return SeverityCategory.ATTENTION
    return SeverityCategory.MONITOR


class CompletenessInfo(BaseModel):
    """How much of the questionnaire was answered."""

    model_config = ConfigDict(frozen=True)

    answered: int
    total: int
    pct: int
    confidence: Confidence


def get_completeness(result: AssessmentResult) -> CompletenessInfo:
    """Aggregate answered/total across dimensions into a confidence grade."""
    answered = sum(ds.answered for ds in result.dimension_scores)
    total = sum(ds.total for ds in result.dimension_scores)
    pct = round_int(answered / total * 100) if total > 0 else 0
    if pct >= 80:
        confidence = Confidence.HIGH
    elif pct >= 50:
        confidence = Confidence.MEDIUM
    else:
        confidence = Confidence.LOW
    return CompletenessInfo(answered=answered, total=total, pct=pct, confidence=confidence)


def top_strengths(result: AssessmentResult, limit: int = 2) -> list[DimensionScore]:
    """Highest-scoring answered dimensions; ties keep dimension order."""
    answered = [ds for ds in result.dimension_scores if ds.coverage > 0]
    return sorted(answered, key=lambda ds: ds.score, reverse=True)[:limit]


def generate_overall_narrative(
    result: AssessmentResult,
    config: ConfigurationSnapshot,
    stage: str,
) -> str:
    """Summarize level, strengths, top gaps and high-severity flags in prose."""
    score100 = to_100(result.overall_score)
    level = get_level(score100)
    gaps = compute_gaps(result.dimension_scores, config, stage)
    top_gaps = [g.label for g in gaps[:2]]
    strengths = [ds.label for ds in top_strengths(result)]

    parts = [
        f'The startup shows "{level.value}" maturity with an overall score of {score100}/100.'
    ]
    if strengths:
        parts.append(f"Strongest areas: {' and '.join(strengths)}.")
    if top_gaps:
        parts.append(f"The largest improvement opportunities are in {' and '.join(top_gaps)}.")
    high_count = sum(1 for rf in result.red_flags if rf.severity in HIGH_SEVERITIES)
    if high_count > 0:
        parts.append(
            f"Warning: {high_count} high-severity red flag(s) require immediate action."
        )
    return " ".join(parts)


def generate_dimension_narrative(ds: DimensionScore) -> str:
    """One-paragraph description of a single dimension's standing."""
    s100 = to_100(ds.score)
    level = get_level(s100)
    coverage_pct = round_int(ds.coverage * 100)
    if s100 < 55:
        outlook = "This dimension needs priority attention to strengthen readiness."
    elif s100 < 75:
        outlook = "Developing dimension; there is room to consolidate practices and processes."
    else:
        outlook = "Well-structured dimension; maintain and optimize current practices."
    return (
        f"{level.value} ({s100}/100). {coverage_pct}% of questions answered "
        f"({ds.answered}/{ds.total}). {outlook}"
    )
