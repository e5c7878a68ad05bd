"""Report derivations: levels, blocks, council risk, narratives and roadmap.

The full report bundle lives in darwin.report.builder.
"""

from darwin.report.blocks import DEFAULT_BLOCKS, BlockResult, compute_blocks, get_blocks
from darwin.report.narrative import (
    CompletenessInfo,
    Confidence,
    Level,
    SeverityCategory,
    generate_dimension_narrative,
    generate_overall_narrative,
    get_completeness,
    get_level,
    get_severity_category,
)
from darwin.report.risk import DEFAULT_PENALTY, compute_council_risk, get_penalty
from darwin.report.roadmap import RoadmapAction, generate_roadmap

__all__ = [
    "DEFAULT_BLOCKS",
    "DEFAULT_PENALTY",
    "BlockResult",
    "CompletenessInfo",
    "Confidence",
    "Level",
    "RoadmapAction",
    "SeverityCategory",
    "compute_blocks",
    "compute_council_risk",
    "generate_dimension_narrative",
    "generate_overall_narrative",
    "generate_roadmap",
    "get_blocks",
    "get_completeness",
    "get_level",
    "get_penalty",
    "get_severity_category",
]
