"""Pytest configuration and fixtures for Darwin tests."""

from __future__ import annotations

import json
from typing import Any

import pytest

from darwin.models.answers import Answer
from darwin.models.config import ConfigurationSnapshot, load_configuration
from tests.fixtures.builders import SAMPLE_CONFIG_PATH, answer


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Raw fixture configuration document."""
    with SAMPLE_CONFIG_PATH.open(encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)
    return data


@pytest.fixture
def sample_config(sample_config_data: dict[str, Any]) -> ConfigurationSnapshot:
    return load_configuration(sample_config_data)


@pytest.fixture
def sample_answers() -> list[Answer]:
    """Answers covering most of the fixture questionnaire (IC left blank, GR marked NA)."""
    return [
        answer("MN1", 2),
        answer("MN2", 3),
        answer("GT1", 4),
        answer("GT2", 4),
        answer("EE1", 5),
        answer("FS1", 2),
        answer("FS2", 2),
        answer("PM1", 3),
        answer("GR1", None, is_na=True),
        answer("PT1", 3),
        answer("PL1", 4),
    ]
