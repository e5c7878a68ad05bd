"""Three-wave improvement roadmap.

Wave 1 (0-30 days) opens with up to three severe red flags and is topped up
to three items from the gap ranking; waves 2 (31-90 days) and 3 (3-6 months)
take up to three further gaps each.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from darwin.models.config import Severity
from darwin.models.results import EvaluatedRedFlag, PrioritizedGap
from darwin.scoring.numeric import round_int

ROADMAP_SEVERITIES = frozenset({Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM_HIGH})
ITEMS_PER_WAVE = 3

WAVE_LABELS: dict[int, str] = {
    1: "0-30 days",
    2: "31-90 days",
    3: "3-6 months",
}


class RoadmapAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    rationale: str
    wave: int
    wave_label: str


def generate_roadmap(
    gaps: Sequence[PrioritizedGap],
    red_flags: Sequence[EvaluatedRedFlag],
) -> list[RoadmapAction]:
    """Lay out red flags and gaps across three time-boxed waves.

    Gaps whose label already appears in a red-flag rationale are skipped.
    """
    actions: list[RoadmapAction] = []

    severe = [rf for rf in red_flags if rf.severity in ROADMAP_SEVERITIES]
    for rf in severe[:ITEMS_PER_WAVE]:
        actions.append(
            RoadmapAction(
                title=rf.actions[0] if rf.actions else rf.label,
                rationale=f"Red flag: {rf.label} ({rf.severity})",
                wave=1,
                wave_label=WAVE_LABELS[1],
            )
        )

    remaining = [g for g in gaps if not any(g.label in a.rationale for a in actions)]
    idx = 0

    wave_one = len(actions)
    while wave_one < ITEMS_PER_WAVE and idx < len(remaining):
        g = remaining[idx]
        idx += 1
        actions.append(
            RoadmapAction(
                title=f"Strengthen {g.label}",
                rationale=(
                    f"Gap of {g.gap_potential}pts (priority {round_int(g.priority_score)})"
                ),
                wave=1,
                wave_label=WAVE_LABELS[1],
            )
        )
        wave_one += 1

    for wave, verb in ((2, "Develop"), (3, "Consolidate")):
        count = 0
        while count < ITEMS_PER_WAVE and idx < len(remaining):
            g = remaining[idx]
            idx += 1
            actions.append(
                RoadmapAction(
                    title=f"{verb} {g.label}",
                    rationale=f"Gap of {g.gap_potential}pts",
                    wave=wave,
                    wave_label=WAVE_LABELS[wave],
                )
            )
            count += 1

    return actions
