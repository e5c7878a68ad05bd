"""Darwin - startup readiness diagnostics engine.

Turns a versioned questionnaire configuration plus an answer set into
dimension scores, red flags, prioritized gaps, report narratives and a
Pareto-ranked action plan. All computations are pure functions of their
explicit inputs.
"""

from darwin.models import (
    Answer,
    AssessmentResult,
    ConfigurationError,
    ConfigurationSnapshot,
    Stage,
    load_answers,
    load_configuration,
)
from darwin.report.builder import AssessmentReport, build_report
from darwin.scoring import compute_assessment_result

__all__ = [
    "Answer",
    "AssessmentReport",
    "AssessmentResult",
    "ConfigurationError",
    "ConfigurationSnapshot",
    "Stage",
    "build_report",
    "compute_assessment_result",
    "load_answers",
    "load_configuration",
]
