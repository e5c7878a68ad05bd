"""Pareto action engine: ranked actions, Top-5, meeting agenda, 2x2 matrix."""

from darwin.pareto.agenda import generate_meeting_agenda
from darwin.pareto.engine import compute_pareto_actions, select_top5
from darwin.pareto.library import DEFAULT_ACTION_LIBRARY, get_action_library
from darwin.pareto.matrix import compute_2x2_matrix

__all__ = [
    "DEFAULT_ACTION_LIBRARY",
    "compute_2x2_matrix",
    "compute_pareto_actions",
    "generate_meeting_agenda",
    "get_action_library",
    "select_top5",
]
