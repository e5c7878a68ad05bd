"""Pareto action engine.

Scores every action of the action library:

    pareto_score = impact_weight * (dimension priority or 1) / effort_factor

with effort factors S=1, M=2, L=3, and a x1.5 boost for actions that address
a triggered high/critical red flag. select_top5 then builds a diversified
five-item recommendation set.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from darwin.models.actions import ScoredAction
from darwin.models.config import HIGH_SEVERITIES, BlockDef, ConfigurationSnapshot
from darwin.models.results import AssessmentResult
from darwin.pareto.library import get_action_library
from darwin.report.blocks import DEFAULT_BLOCKS
from darwin.scoring.gaps import compute_gaps
from darwin.scoring.numeric import round_half_up

logger = logging.getLogger(__name__)

EFFORT_FACTOR: dict[str, float] = {"S": 1, "M": 2, "L": 3}
DEFAULT_EFFORT_FACTOR = 2.0
RED_FLAG_BOOST = 1.5
TOP_N = 5


def triggered_high_severity_codes(result: AssessmentResult) -> set[str]:
    """Codes of triggered flags with high or critical severity."""
    return {rf.code for rf in result.red_flags if rf.severity in HIGH_SEVERITIES}


def compute_pareto_actions(
    config: ConfigurationSnapshot,
    result: AssessmentResult,
    stage: str,
) -> list[ScoredAction]:
    """Score and rank every action in the action library.

    Dimensions without a gap still contribute actions, with priority 1.

    Args:
        config: Configuration (action library, weights, targets).
        result: Computed assessment result.
        stage: Stage key.

    Returns:
        Scored actions sorted by pareto_score descending; ties keep library order.
    """
    library = get_action_library(config)
    gap_by_dimension = {
        g.dimension_id: g for g in compute_gaps(result.dimension_scores, config, stage)
    }
    labels = {ds.dimension_id: ds.label for ds in result.dimension_scores}
    high_codes = triggered_high_severity_codes(result)

    scored: list[ScoredAction] = []
    for dim_id, actions in library.items():
        gap = gap_by_dimension.get(dim_id)
        priority = gap.priority_score if gap is not None else 0.0
        dim_label = labels.get(dim_id, dim_id)

        for action in actions:
            effort_factor = EFFORT_FACTOR.get(action.effort, DEFAULT_EFFORT_FACTOR)
            score = action.impact_weight * (priority or 1) / effort_factor

            addresses_high = bool(high_codes.intersection(action.addresses_red_flags))
            if addresses_high:
                score *= RED_FLAG_BOOST

            reasons: list[str] = []
            if gap is not None and gap.gap_potential > 0:
                reasons.append(f"Gap {gap.gap_potential}pts in {dim_label}")
            if addresses_high:
                reasons.append("Addresses critical red flag")
            if action.effort == "S":
                reasons.append("Low effort")

            scored.append(
                ScoredAction(
                    **action.model_dump(),
                    pareto_score=round_half_up(score, 1),
                    reason=" · ".join(reasons) or "General impact",
                    impacted_dimensions=(dim_label,),
                )
            )

    scored.sort(key=lambda a: a.pareto_score, reverse=True)
    return scored


def _covers(action: ScoredAction, block: BlockDef) -> bool:
    return action.dimension_id in block.dimensions


def select_top5(
    scored: Sequence[ScoredAction],
    result: AssessmentResult,
    config: ConfigurationSnapshot,
) -> list[ScoredAction]:
    """Pick five diversified actions from a ranked list.

    1. If a high/critical red flag is active, force in the best action addressing one.
    2. Fill greedily from the ranking, skipping duplicate ids.
    3. Each of the three predefined blocks missing from the selection gets its
       best unused candidate. At five items the last selected item is evicted.

    Known limitation: eviction is greedy. The evicted item may be the only
    representative of a block covered earlier, which leaves that block
    uncovered again (e.g. six top-ranked growth actions yield four growth
    actions plus one execution action). Configured blocks are not consulted;
    ``config`` is accepted for signature parity with the other pareto views.

    Args:
        scored: Output of compute_pareto_actions.
        result: Assessment result (for triggered red flags).
        config: Configuration snapshot (unused).

    Returns:
        At most five actions, in selection order.
    """
    high_codes = triggered_high_severity_codes(result)

    selected: list[ScoredAction] = []
    used: set[str] = set()

    def pick(action: ScoredAction) -> None:
        if action.id not in used:
            selected.append(action)
            used.add(action.id)

    if high_codes:
        rf_action = next(
            (a for a in scored if high_codes.intersection(a.addresses_red_flags)), None
        )
        if rf_action is not None:
            pick(rf_action)

    for action in scored:
        if len(selected) >= TOP_N:
            break
        pick(action)

    # coverage is checked once, before any swap
    missing = [
        block for block in DEFAULT_BLOCKS if not any(_covers(a, block) for a in selected)
    ]
    for block in missing:
        candidate = next((a for a in scored if _covers(a, block) and a.id not in used), None)
        if candidate is None:
            continue
        if len(selected) >= TOP_N:
            evicted = selected.pop()
            logger.debug(
                "Evicting %s to cover block %s with %s", evicted.id, block.id, candidate.id
            )
        pick(candidate)

    return selected[:TOP_N]
