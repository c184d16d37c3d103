"""
Answer store: the single mutable session object owned by a presentation layer.

Holds the selected ``Role``, the current immutable ``Answers`` snapshot, and
the questionnaire ``step``. Every mutation replaces the snapshot wholesale,
so ``snapshot()`` always hands the engine a complete, consistent view.

Usage::

    store = AnswerStore()
    store.select_role(Role.REGULATOR)
    store.set_answer("regulator_primary", "tech_feasibility")
    store.set_answer("regulator_real_users", "lab_only")
    store.recommendation      # → Recommendation(primary=Instrument.TESTBED, ...)
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from experiment_picker.config import QuestionnaireConfig
from experiment_picker.engine.recommender import get_recommendation
from experiment_picker.models.answers import Answers, Recommendation
from experiment_picker.questionnaire import flow
from experiment_picker.taxonomy.answer_taxonomy import AnswerField, Role

logger = logging.getLogger(__name__)


class AnswerStore:
    """Role, answers and step for one questionnaire session.

    Args:
        config: Result-step thresholds; defaults to ``QuestionnaireConfig()``.
    """

    def __init__(self, config: Optional[QuestionnaireConfig] = None) -> None:
        self._config = config or QuestionnaireConfig()
        self._role: Optional[Role] = None
        self._answers = Answers()
        self._step = 0

    # ── Read access ───────────────────────────────────────────────────────────

    @property
    def role(self) -> Optional[Role]:
        return self._role

    @property
    def answers(self) -> Answers:
        return self._answers

    @property
    def step(self) -> int:
        return self._step

    def snapshot(self) -> tuple[Optional[Role], Answers]:
        """Current ``(role, answers)`` pair, as passed to the engine."""
        return self._role, self._answers

    @property
    def recommendation(self) -> Optional[Recommendation]:
        return get_recommendation(*self.snapshot())

    @property
    def result_visible(self) -> bool:
        """True once a recommendation exists and the role's result step is reached."""
        if self._role is None:
            return False
        if self._step < flow.result_step(self._role, self._config):
            return False
        return self.recommendation is not None

    # ── Mutations ─────────────────────────────────────────────────────────────

    def select_role(self, role: Role | str) -> None:
        """Set the role and clear every answer; the session restarts at step 1.

        Raises:
            ValueError: If ``role`` is not a known role.
        """
        self._role = Role(role)
        self._answers = Answers()
        self._step = 1
        logger.debug("Role selected: %s", self._role)

    def set_answer(self, field: AnswerField | str, value: Any) -> None:
        """Set one answer field, keeping all others, and apply the step transition.

        Fields outside the active role's flow are accepted and stored; the
        engine ignores them for that role. Clearing a field (``value=None``)
        leaves the step unchanged.

        Raises:
            ValueError: If ``field`` is not an answer field.
            pydantic.ValidationError: If ``value`` is outside the field's options.
        """
        field = AnswerField(field)
        self._answers = self._answers.with_answer(field, value)
        if self._role is not None and value is not None:
            self._step = flow.next_step(self._role, field, self._step)
        logger.debug("Answer set: %s=%s (step %d)", field, value, self._step)

    def advance(self) -> None:
        """Follow the regulator shortcut card's Next action.

        No-op unless the shortcut card is on screen at its own step.
        """
        if self._role is None or self._step != flow.SHORTCUT_STEP:
            return
        if flow.shortcut_hint(self._role, self._step, self._answers) is None:
            return
        self._step = flow.SHORTCUT_NEXT_STEP

    def reset(self) -> None:
        """Clear role, answers and step ("Start over")."""
        self._role = None
        self._answers = Answers()
        self._step = 0
        logger.debug("Session reset")
