"""What-if simulator.

Turns per-dimension slider scores into synthetic answers so a hypothetical
profile can be pushed through the regular scoring pipeline. Answers spread
around the slider value with deltas [-0.4, -0.2, 0, 0.2, 0.4] so that block
and question-level views are not perfectly flat.
"""

from __future__ import annotations

from collections.abc import Mapping

from darwin.models.answers import Answer
from darwin.models.config import ConfigurationSnapshot, SimulatorPreset
from darwin.models.results import AssessmentResult
from darwin.scoring.engine import compute_assessment_result
from darwin.scoring.numeric import clamp, round_int

ANSWER_DELTAS: tuple[float, ...] = (-0.4, -0.2, 0.0, 0.2, 0.4)
DEFAULT_SLIDER_SCORE = 3.0


def build_synthetic_answers(
    config: ConfigurationSnapshot,
    slider_scores: Mapping[str, float],
) -> list[Answer]:
    """Generate one answer per active question from dimension slider scores.

    Args:
        config: Questionnaire configuration.
        slider_scores: dimension_id -> 1-5 slider value (default 3).

    Returns:
        Answers with integer values clamped to 1..5.
    """
    answers: list[Answer] = []
    for dim in config.dimensions:
        base = slider_scores.get(dim.id) or DEFAULT_SLIDER_SCORE
        questions = [q for q in config.questions if q.dimension_id == dim.id and q.is_active]
        for i, q in enumerate(questions):
            delta = ANSWER_DELTAS[i % len(ANSWER_DELTAS)]
            value = clamp(round_int(base + delta), 1, 5)
            answers.append(Answer(question_id=q.id, value=value, is_na=False))
    return answers


def find_preset(config: ConfigurationSnapshot, preset_id: str) -> SimulatorPreset | None:
    for preset in config.simulator.presets:
        if preset.id == preset_id:
            return preset
    return None


def apply_preset(
    preset: SimulatorPreset,
    numeric_context: Mapping[str, float] | None = None,
) -> tuple[dict[str, float], dict[str, float]]:
    """Return the preset's slider scores and numeric context merged over the given one."""
    merged = dict(numeric_context or {})
    merged.update(preset.numeric_context_defaults)
    return dict(preset.dimension_scores), merged


def simulate(
    config: ConfigurationSnapshot,
    slider_scores: Mapping[str, float],
    stage: str,
    numeric_context: Mapping[str, float] | None = None,
) -> AssessmentResult:
    """Score a hypothetical profile given as slider scores."""
    answers = build_synthetic_answers(config, slider_scores)
    return compute_assessment_result(config, answers, stage, numeric_context)
