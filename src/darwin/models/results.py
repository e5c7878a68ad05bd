"""Derived scoring results.

All result models are frozen and rebuilt from scratch on every computation;
nothing here is patched in place.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DimensionScore(BaseModel):
    """Mean answer score for one dimension.

    score is 0 when no qualifying answers exist; use coverage to tell
    "no data" apart from a genuinely low score.
    """

    model_config = ConfigDict(frozen=True)

    dimension_id: str
    label: str
    score: float = Field(..., ge=0.0, le=5.0, description="Mean of answers, 2dp, 0 if none")
    target: float = Field(..., description="Stage target on the 1-5 scale")
    coverage: float = Field(..., ge=0.0, le=1.0, description="answered / total")
    answered: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class EvaluatedRedFlag(BaseModel):
    """Projection of a red-flag definition whose triggers matched."""

    model_config = ConfigDict(frozen=True)

    code: str
    label: str
    severity: str
    actions: tuple[str, ...] = ()


class AssessmentResult(BaseModel):
    """Scores, triggered flags and deep-dive candidates for one assessment."""

    model_config = ConfigDict(frozen=True)

    overall_score: float = Field(..., description="Weighted overall score, 2dp")
    overall_weighted: float = Field(..., description="Weighted overall score, unrounded")
    dimension_scores: tuple[DimensionScore, ...] = ()
    red_flags: tuple[EvaluatedRedFlag, ...] = ()
    deep_dive_dimension_ids: tuple[str, ...] = ()


class PrioritizedGap(BaseModel):
    """Headroom between a dimension's score and its potential, weighted by stage."""

    model_config = ConfigDict(frozen=True)

    dimension_id: str
    label: str
    score: float
    score100: int = Field(..., ge=0, le=100)
    target: float
    target100: int
    potential100: int
    gap_potential: int = Field(..., gt=0)
    priority_score: float
