"""Gap / priority engine.

Compares each answered dimension's score with its potential on a 0-100
scale and ranks the headroom by stage weight.
"""

from __future__ import annotations

from collections.abc import Sequence

from darwin.models.config import ConfigurationSnapshot
from darwin.models.results import DimensionScore, PrioritizedGap
from darwin.scoring.numeric import round_int
from darwin.scoring.stage_packs import get_stage_pack


def to_100(score: float) -> int:
    """Rescale a 1-5 score linearly onto 0-100 (1 -> 0, 5 -> 100)."""
    return round_int((score - 1) / 4 * 100)


def compute_gaps(
    dimension_scores: Sequence[DimensionScore],
    config: ConfigurationSnapshot,
    stage: str,
) -> list[PrioritizedGap]:
    """Rank dimensions by weighted gap to potential.

    Args:
        dimension_scores: Computed dimension scores.
        config: Configuration with stage weights and targets.
        stage: Stage key.

    Returns:
        Gaps with gap_potential > 0, sorted by priority_score descending.
        Dimensions without coverage are skipped. Ties keep dimension order.
    """
    pack = get_stage_pack(config, stage)
    gaps: list[PrioritizedGap] = []

    for ds in dimension_scores:
        if ds.coverage <= 0:
            continue
        score100 = to_100(ds.score)
        potential100 = to_100(pack.potential(ds.dimension_id))
        gap_potential = max(0, potential100 - score100)
        if gap_potential == 0:
            continue
        gaps.append(
            PrioritizedGap(
                dimension_id=ds.dimension_id,
                label=ds.label,
                score=ds.score,
                score100=score100,
                target=ds.target,
                target100=to_100(ds.target),
                potential100=potential100,
                gap_potential=gap_potential,
                priority_score=gap_potential * pack.weight(ds.dimension_id),
            )
        )

    # list.sort is stable
    gaps.sort(key=lambda g: g.priority_score, reverse=True)
    return gaps
