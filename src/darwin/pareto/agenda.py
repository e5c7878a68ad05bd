"""Meeting agenda generator.

Always yields at most three items: the top two gaps, then either the most
severe triggered red flag or, when no flag is triggered, the third gap.
"""

from __future__ import annotations

from darwin.models.actions import AgendaItem
from darwin.models.config import ConfigurationSnapshot, Severity
from darwin.models.results import AssessmentResult, PrioritizedGap
from darwin.scoring.gaps import compute_gaps

SEVERITY_RANK: dict[str, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM_HIGH: 2,
    Severity.MEDIUM: 1,
    Severity.LOW: 0,
}

RED_FLAG_CONTEXT_CHECKS = ("runway_months", "burn_monthly", "revenue_concentration_top1_pct")
PROMPTS_PER_ITEM = 2


def _prompts_for(gap: PrioritizedGap, config: ConfigurationSnapshot) -> tuple[str, ...]:
    prompts = config.deep_dive_prompts.get(gap.dimension_id, [])[:PROMPTS_PER_ITEM]
    if prompts:
        return tuple(prompts)
    return (f"How do we raise {gap.label} from {gap.score100} to {gap.target100}?",)


def generate_meeting_agenda(
    config: ConfigurationSnapshot,
    result: AssessmentResult,
    stage: str,
) -> list[AgendaItem]:
    """Build a fixed-length (max 3) agenda from gaps and red flags.

    Every gap item, the third-gap item included, uses at most two configured
    deep dive prompts for its dimension. A dimension without configured
    prompts gets one generic "How do we raise ..." prompt, so no gap item
    is emitted with an empty prompt list.

    Args:
        config: Configuration (deep dive prompts, weights, targets).
        result: Computed assessment result.
        stage: Stage key.

    Returns:
        Up to three agenda items.
    """
    gaps = compute_gaps(result.dimension_scores, config, stage)
    items: list[AgendaItem] = []

    for i, gap in enumerate(gaps[:2]):
        if i == 0:
            decision = (
                f"Commit to one priority action for {gap.label} with an owner and a deadline."
            )
        else:
            decision = f"Approve an improvement plan for {gap.label}."
        items.append(
            AgendaItem(
                topic=f"Strengthen {gap.label} (gap of {gap.gap_potential}pts)",
                dimension=gap.label,
                deep_dive_prompts=_prompts_for(gap, config),
                expected_decision=decision,
            )
        )

    # sorted() is stable: the first flag of the highest severity wins
    ranked_flags = sorted(
        result.red_flags, key=lambda rf: SEVERITY_RANK.get(rf.severity, 0), reverse=True
    )
    if ranked_flags:
        top = ranked_flags[0]
        items.append(
            AgendaItem(
                topic=f"Red flag: {top.label}",
                red_flag=top,
                deep_dive_prompts=top.actions[:PROMPTS_PER_ITEM],
                expected_decision=(
                    f'Resolve or mitigate "{top.label}" with a concrete action and deadline.'
                ),
                context_checks=RED_FLAG_CONTEXT_CHECKS,
            )
        )
    elif len(gaps) > 2:
        third = gaps[2]
        items.append(
            AgendaItem(
                topic=f"Develop {third.label}",
                dimension=third.label,
                deep_dive_prompts=_prompts_for(third, config),
                expected_decision=f"Plan an initiative for {third.label}.",
            )
        )

    return items
