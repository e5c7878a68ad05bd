"""Questionnaire configuration models.

Defines the versioned configuration snapshot consumed by the engine:
- Stage: common stage keys (the engine treats stage as an opaque string)
- Severity: red-flag severity keys
- DimensionDef / QuestionDef: questionnaire structure
- FixedTarget / BoundedTarget: per-stage target variants
- RedFlagTrigger / RedFlagDefinition: red-flag rules
- ParetoAction: action library entries
- BlockDef: named rollup of dimensions
- ConfigurationSnapshot: immutable aggregate of all of the above

Alternate JSON shapes (plain-number targets, list-shaped deep dive prompts and
glossary) are normalized here, at ingestion, so the engine only ever sees the
canonical shape.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator


class ConfigurationError(Exception):
    """Raised when a configuration document cannot be loaded."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class Stage(StrEnum):
    """Common company stage keys used in weights_by_stage / targets_by_stage."""

    PRE_SEED = "pre_seed"
    SEED = "seed"
    SERIES_A = "series_a"


class Severity(StrEnum):
    """Red-flag severity keys, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM_HIGH = "medium_high"
    MEDIUM = "medium"
    LOW = "low"


HIGH_SEVERITIES: frozenset[str] = frozenset({Severity.CRITICAL, Severity.HIGH})


class DimensionDef(BaseModel):
    """A scored questionnaire dimension."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    label: str = Field(..., description="Human-readable dimension name")
    sort_order: int = 0


StageWeight = Annotated[float, Field(ge=0)]


class QuestionDef(BaseModel):
    """A single Likert-scale question belonging to one dimension."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    dimension_id: str
    text: str = ""
    is_active: bool = True
    sort_order: int = 0
    tooltip: dict[str, Any] | None = None

    @field_validator("is_active", mode="before")
    @classmethod
    def _null_means_active(cls, v: Any) -> Any:
        return True if v is None else v


class FixedTarget(BaseModel):
    """Target expressed as a single 1-5 score."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    value: float


class BoundedTarget(BaseModel):
    """Target expressed as a benchmark plus an optional potential ceiling."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["bounded"] = "bounded"
    benchmark: float | None = None
    potential: float | None = None


Target = FixedTarget | BoundedTarget


def parse_target(raw: Any) -> Any:
    """Convert a raw target entry into a Target variant.

    Numbers become FixedTarget, objects become BoundedTarget. Anything else is
    returned untouched so pydantic reports it.
    """
    if isinstance(raw, (FixedTarget, BoundedTarget)):
        return raw
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return FixedTarget(value=float(raw))
    if isinstance(raw, dict):
        if raw.get("kind") == "fixed":
            return FixedTarget.model_validate(raw)
        return BoundedTarget.model_validate(raw)
    return raw


class RedFlagTrigger(BaseModel):
    """One predicate of a red-flag rule."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    dimension_id: str | None = None
    question_id: str | None = None
    field: str | None = None
    threshold: float | None = None


class RedFlagDefinition(BaseModel):
    """A red-flag rule: included when any trigger matches."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = Field(..., min_length=1)
    label: str = ""
    severity: str = Severity.MEDIUM
    triggers: tuple[RedFlagTrigger, ...] = ()
    actions: tuple[str, ...] = ()
    penalty_points: float | None = None


class ParetoAction(BaseModel):
    """Candidate improvement action from the action library."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    first_step: str = ""
    done_definition: str = ""
    effort: str = "M"
    time_to_impact_days: int = 0
    impact_weight: float = Field(default=1.0, ge=0)
    stage_tags: tuple[str, ...] = ()
    business_model_tags: tuple[str, ...] = ()
    addresses_red_flags: tuple[str, ...] = ()
    kpi_hint: str | None = None
    dimension_id: str = ""


class BlockDef(BaseModel):
    """Named rollup category of dimensions."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    label: str
    dimensions: tuple[str, ...] = ()


class SimulatorPreset(BaseModel):
    """Canned slider scores and numeric context for the simulator."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    label: str = ""
    dimension_scores: dict[str, float] = Field(default_factory=dict)
    numeric_context_defaults: dict[str, float] = Field(default_factory=dict)
    expected_red_flags: tuple[str, ...] = ()


class SimulatorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    presets: tuple[SimulatorPreset, ...] = ()


def _normalize_deep_dive_prompts(raw: Any) -> dict[str, list[str]]:
    if raw is None:
        return {}
    result: dict[str, list[str]] = {}
    if isinstance(raw, list):
        for item in raw:
            if isinstance(item, dict) and item.get("dimension_id"):
                prompts = item.get("prompts")
                result[item["dimension_id"]] = list(prompts) if isinstance(prompts, list) else []
        return result
    if isinstance(raw, dict):
        for dim_id, prompts in raw.items():
            result[dim_id] = list(prompts) if isinstance(prompts, list) else []
        return result
    return result


def _normalize_glossary(raw: Any) -> dict[str, str]:
    if raw is None:
        return {}
    result: dict[str, str] = {}
    if isinstance(raw, list):
        for item in raw:
            if isinstance(item, dict) and item.get("term"):
                result[str(item["term"])] = str(item.get("definition", ""))
        return result
    if isinstance(raw, dict):
        for term, value in raw.items():
            if isinstance(value, str):
                result[term] = value
            elif isinstance(value, dict) and "definition" in value:
                result[term] = str(value["definition"])
            else:
                result[term] = str(value)
    return result


class ConfigurationSnapshot(BaseModel):
    """Immutable questionnaire configuration for one computation.

    Unknown top-level keys are ignored; every optional section has an empty
    default so a sparse configuration is still scorable.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    dimensions: tuple[DimensionDef, ...] = ()
    questions: tuple[QuestionDef, ...] = ()
    weights_by_stage: dict[str, dict[str, StageWeight]] = Field(default_factory=dict)
    targets_by_stage: dict[str, dict[str, Target]] = Field(default_factory=dict)
    red_flags: tuple[RedFlagDefinition, ...] = ()
    action_library: dict[str, tuple[ParetoAction, ...]] = Field(default_factory=dict)
    blocks: tuple[BlockDef, ...] = ()
    deep_dive_prompts: dict[str, list[str]] = Field(default_factory=dict)
    glossary: dict[str, str] = Field(default_factory=dict)
    methodology: str | dict[str, Any] | None = None
    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    structural_dimensions: tuple[str, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def _fill_action_dimension_ids(cls, data: Any) -> Any:
        """Actions listed under a dimension key inherit that key as dimension_id."""
        if not isinstance(data, dict):
            return data
        library = data.get("action_library")
        if not isinstance(library, dict):
            return data
        filled: dict[str, Any] = {}
        for dim_id, actions in library.items():
            if not isinstance(actions, list):
                filled[dim_id] = actions
                continue
            filled[dim_id] = [
                {**a, "dimension_id": dim_id}
                if isinstance(a, dict) and not a.get("dimension_id")
                else a
                for a in actions
            ]
        return {**data, "action_library": filled}

    @field_validator("weights_by_stage", "targets_by_stage", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("targets_by_stage", mode="before")
    @classmethod
    def _parse_targets(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {
            stage: (
                {dim_id: parse_target(raw) for dim_id, raw in entries.items()}
                if isinstance(entries, dict)
                else entries
            )
            for stage, entries in v.items()
        }

    @field_validator("deep_dive_prompts", mode="before")
    @classmethod
    def _parse_deep_dive_prompts(cls, v: Any) -> dict[str, list[str]]:
        return _normalize_deep_dive_prompts(v)

    @field_validator("glossary", mode="before")
    @classmethod
    def _parse_glossary(cls, v: Any) -> dict[str, str]:
        return _normalize_glossary(v)

    def find_red_flag(self, code: str) -> RedFlagDefinition | None:
        """Return the red-flag definition with the given code, if any."""
        for rf in self.red_flags:
            if rf.code == code:
                return rf
        return None


def load_configuration(data: Any) -> ConfigurationSnapshot:
    """Build a ConfigurationSnapshot from a parsed JSON document.

    Args:
        data: Parsed configuration JSON (a mapping).

    Returns:
        Validated, normalized ConfigurationSnapshot.

    Raises:
        ConfigurationError: If the document is not a mapping or fails model validation.
    """
    if isinstance(data, ConfigurationSnapshot):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a JSON object, got {type(data).__name__}"
        )
    try:
        return ConfigurationSnapshot.model_validate(data)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        raise ConfigurationError("Invalid configuration", errors) from exc
