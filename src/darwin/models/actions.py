"""Pareto engine output models: scored actions, agenda items, matrix points."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from darwin.models.config import ParetoAction
from darwin.models.results import EvaluatedRedFlag


class ScoredAction(ParetoAction):
    """Action library entry ranked by impact, priority and effort."""

    pareto_score: float = Field(..., ge=0.0, description="Rounded to 1dp")
    reason: str
    impacted_dimensions: tuple[str, ...] = ()


class AgendaItem(BaseModel):
    """One topic of the recurring meeting agenda."""

    model_config = ConfigDict(frozen=True)

    topic: str
    dimension: str | None = None
    deep_dive_prompts: tuple[str, ...] = ()
    expected_decision: str
    context_checks: tuple[str, ...] | None = None
    red_flag: EvaluatedRedFlag | None = None


class PointType(StrEnum):
    DIMENSION = "dimension"
    RED_FLAG = "red_flag"


class Quadrant(StrEnum):
    """Quadrant of the risk x impact plane (both axes split at 50)."""

    HIGH_RISK_HIGH_IMPACT = "high_risk_high_impact"
    HIGH_RISK_LOW_IMPACT = "high_risk_low_impact"
    LOW_RISK_HIGH_IMPACT = "low_risk_high_impact"
    LOW_RISK_LOW_IMPACT = "low_risk_low_impact"


class MatrixPoint(BaseModel):
    """A dimension or red flag placed on the 0-100 impact/risk plane."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    impact: float = Field(..., ge=0.0, le=100.0)
    risk: float = Field(..., ge=0.0, le=100.0)
    type: PointType
    quadrant: Quadrant
