"""Block rollups: weighted scores of named dimension groups."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from darwin.models.config import BlockDef, ConfigurationSnapshot
from darwin.models.results import DimensionScore
from darwin.report.narrative import Level, get_level
from darwin.scoring.gaps import to_100
from darwin.scoring.stage_packs import get_stage_pack

GROWTH_BLOCK = BlockDef(id="growth", label="Growth", dimensions=("MN", "GT", "EE"))
FOUNDATIONS_BLOCK = BlockDef(id="foundations", label="Foundations", dimensions=("FS", "PM", "GR"))
EXECUTION_BLOCK = BlockDef(id="execution", label="Execution", dimensions=("PT", "PL", "IC"))

DEFAULT_BLOCKS: tuple[BlockDef, ...] = (GROWTH_BLOCK, FOUNDATIONS_BLOCK, EXECUTION_BLOCK)


class BlockResult(BaseModel):
    """Rollup of one block; focus_label names its lowest-scoring dimension."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    score100: int
    level: Level
    focus_label: str
    dimensions: tuple[DimensionScore, ...] = ()


def get_blocks(config: ConfigurationSnapshot) -> tuple[BlockDef, ...]:
    """Configured blocks, or DEFAULT_BLOCKS when none are configured."""
    return config.blocks or DEFAULT_BLOCKS


def compute_blocks(
    blocks: Sequence[BlockDef],
    dimension_scores: Sequence[DimensionScore],
    config: ConfigurationSnapshot,
    stage: str,
) -> list[BlockResult]:
    """Weighted-average each block's member dimensions onto the 0-100 scale.

    A block with no matching dimensions reports score 0 and an empty focus label.
    """
    pack = get_stage_pack(config, stage)
    results: list[BlockResult] = []

    for block in blocks:
        members = tuple(ds for ds in dimension_scores if ds.dimension_id in block.dimensions)
        if not members:
            results.append(
                BlockResult(
                    id=block.id,
                    label=block.label,
                    score100=0,
                    level=get_level(0),
                    focus_label="",
                    dimensions=(),
                )
            )
            continue

        total_weight = sum(pack.weight(ds.dimension_id) for ds in members) or 1.0
        weighted = sum(ds.score * pack.weight(ds.dimension_id) for ds in members)
        score100 = to_100(weighted / total_weight)
        lowest = min(members, key=lambda ds: ds.score)
        results.append(
            BlockResult(
                id=block.id,
                label=block.label,
                score100=score100,
                level=get_level(score100),
                focus_label=lowest.label,
                dimensions=members,
            )
        )

    return results
