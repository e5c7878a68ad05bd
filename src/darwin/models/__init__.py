"""Darwin domain models: configuration, answers and derived results."""

from darwin.models.actions import AgendaItem, MatrixPoint, PointType, Quadrant, ScoredAction
from darwin.models.answers import Answer, AnswerSetError, load_answers
from darwin.models.config import (
    HIGH_SEVERITIES,
    BlockDef,
    BoundedTarget,
    ConfigurationError,
    ConfigurationSnapshot,
    DimensionDef,
    FixedTarget,
    ParetoAction,
    QuestionDef,
    RedFlagDefinition,
    RedFlagTrigger,
    Severity,
    SimulatorPreset,
    Stage,
    Target,
    load_configuration,
)
from darwin.models.results import (
    AssessmentResult,
    DimensionScore,
    EvaluatedRedFlag,
    PrioritizedGap,
)

__all__ = [
    "HIGH_SEVERITIES",
    "AgendaItem",
    "Answer",
    "AnswerSetError",
    "AssessmentResult",
    "BlockDef",
    "BoundedTarget",
    "ConfigurationError",
    "ConfigurationSnapshot",
    "DimensionDef",
    "DimensionScore",
    "EvaluatedRedFlag",
    "FixedTarget",
    "MatrixPoint",
    "ParetoAction",
    "PointType",
    "PrioritizedGap",
    "Quadrant",
    "QuestionDef",
    "RedFlagDefinition",
    "RedFlagTrigger",
    "ScoredAction",
    "Severity",
    "SimulatorPreset",
    "Stage",
    "Target",
    "load_answers",
    "load_configuration",
]
