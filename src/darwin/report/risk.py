"""Council risk: 100 minus the summed red-flag penalties, clamped to [0, 100]."""

from __future__ import annotations

from collections.abc import Sequence

from darwin.models.config import ConfigurationSnapshot, Severity
from darwin.models.results import EvaluatedRedFlag
from darwin.scoring.numeric import clamp

DEFAULT_PENALTY: dict[str, float] = {
    Severity.HIGH: 15,
    Severity.MEDIUM_HIGH: 10,
    Severity.MEDIUM: 6,
    Severity.LOW: 3,
}
FALLBACK_PENALTY = 6.0


def get_penalty(rf: EvaluatedRedFlag, config: ConfigurationSnapshot) -> float:
    """Configured penalty_points, else the severity default, else FALLBACK_PENALTY."""
    definition = config.find_red_flag(rf.code)
    if definition is not None and definition.penalty_points is not None:
        return definition.penalty_points
    return DEFAULT_PENALTY.get(rf.severity, FALLBACK_PENALTY)


def compute_council_risk(
    red_flags: Sequence[EvaluatedRedFlag],
    config: ConfigurationSnapshot,
) -> float:
    total_penalty = sum(get_penalty(rf, config) for rf in red_flags)
    return clamp(100 - total_penalty, 0, 100)
