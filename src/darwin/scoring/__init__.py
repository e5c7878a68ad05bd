"""Darwin scoring: dimension scores, overall score, red flags and gaps.

Deterministic, stateless functions over an explicit configuration, answer set,
stage key and numeric context.
"""

from darwin.scoring.engine import (
    compute_assessment_result,
    compute_dimension_scores,
    compute_overall_score,
)
from darwin.scoring.gaps import compute_gaps, to_100
from darwin.scoring.red_flags import evaluate_red_flags
from darwin.scoring.stage_packs import (
    DEFAULT_TARGET,
    DEFAULT_WEIGHT,
    StagePack,
    get_stage_pack,
    potential_value,
    target_value,
)

__all__ = [
    "DEFAULT_TARGET",
    "DEFAULT_WEIGHT",
    "StagePack",
    "compute_assessment_result",
    "compute_dimension_scores",
    "compute_gaps",
    "compute_overall_score",
    "evaluate_red_flags",
    "get_stage_pack",
    "potential_value",
    "target_value",
    "to_100",
]
