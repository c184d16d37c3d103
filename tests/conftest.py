"""
Shared pytest fixtures for the Regulatory Experiment Picker test suite.

Provides:
  - ``make_answers``: factory building an ``Answers`` snapshot from keyword
    string values.
  - ``store``: a fresh ``AnswerStore`` with default result steps.
"""

from __future__ import annotations

from typing import Callable

import pytest

from experiment_picker.engine.recommender import get_recommendation
from experiment_picker.models.answers import Answers
from experiment_picker.store import AnswerStore


@pytest.fixture(autouse=True)
def _clear_engine_cache():
    """Each test starts from a cold recommendation cache."""
    get_recommendation.cache_clear()
    yield
    get_recommendation.cache_clear()


@pytest.fixture
def make_answers() -> Callable[..., Answers]:
    """Return a factory: ``make_answers(need_legal_flex="yes", ...)``."""

    def _make(**fields: str) -> Answers:
        return Answers(**fields)

    return _make


@pytest.fixture
def store() -> AnswerStore:
    """A fresh ``AnswerStore`` with default ``QuestionnaireConfig``."""
    return AnswerStore()
