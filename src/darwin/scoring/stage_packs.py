"""Stage-specific weight and target lookup.

Weights and targets live in the configuration, keyed by an opaque stage
string. Lookups never fail: a missing stage, dimension or entry falls back to
DEFAULT_WEIGHT / DEFAULT_TARGET.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from darwin.models.config import BoundedTarget, ConfigurationSnapshot, FixedTarget, Target

DEFAULT_WEIGHT = 1.0
DEFAULT_TARGET = 3.5


class StagePack(BaseModel):
    """Weights and targets of one stage, resolved from a configuration.

    All fields are immutable after construction.
    """

    model_config = ConfigDict(frozen=True)

    stage: str = Field(..., description="Stage key this pack was resolved for")
    weights: dict[str, float] = Field(default_factory=dict)
    targets: dict[str, Target] = Field(default_factory=dict)

    def weight(self, dimension_id: str) -> float:
        """Weight for a dimension; DEFAULT_WEIGHT when not configured."""
        w = self.weights.get(dimension_id)
        return DEFAULT_WEIGHT if w is None else w

    def target(self, dimension_id: str) -> float:
        """Target score for a dimension; DEFAULT_TARGET when not configured."""
        return target_value(self.targets.get(dimension_id))

    def potential(self, dimension_id: str) -> float:
        """Potential ceiling for a dimension, falling back to its target."""
        return potential_value(self.targets.get(dimension_id))


def target_value(entry: Target | None) -> float:
    """Resolve the ordinary target of a Target variant.

    Args:
        entry: Configured target, or None if absent.

    Returns:
        FixedTarget value, BoundedTarget benchmark, or DEFAULT_TARGET.
    """
    if isinstance(entry, FixedTarget):
        return entry.value
    if isinstance(entry, BoundedTarget) and entry.benchmark is not None:
        return entry.benchmark
    return DEFAULT_TARGET


def potential_value(entry: Target | None) -> float:
    """Resolve the gap ceiling of a Target variant.

    BoundedTarget.potential wins when present; otherwise the ordinary target.
    """
    if isinstance(entry, BoundedTarget) and entry.potential is not None:
        return entry.potential
    return target_value(entry)


def get_stage_pack(config: ConfigurationSnapshot, stage: str) -> StagePack:
    """Resolve the stage pack for a stage key. Unknown stages yield an empty pack."""
    return StagePack(
        stage=stage,
        weights=dict(config.weights_by_stage.get(stage) or {}),
        targets=dict(config.targets_by_stage.get(stage) or {}),
    )
