"""
Question catalogue and step-reveal rules for both questionnaire flows.

Each ``Question`` belongs to one role, appears once the session step reaches
``Question.step`` (and its ``condition`` holds), and moves the session to
``Question.advances_to`` when answered. ``advances_to`` is an absolute step,
so re-answering an early question hides the later ones again while their
answers are kept.

Regulator flow::

    1 regulator_primary    → 2
    2 regulator_real_users → 3      (only when primary == tech_feasibility)
      shortcut hint + Next → 3      (any other primary)
    3 need_legal_flex      → 4
    4 sensitive_data

Participant flow::

    1 participant_blocker → 2
    2 need_legal_flex     → 3
    3 testing_location    → 4
    4 sensitive_data      → 5
    5 desired_outcome

The engine never depends on this ordering; it evaluates whatever fields are
set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from experiment_picker.models.answers import Answers
from experiment_picker.taxonomy.answer_taxonomy import (
    AnswerField,
    Instrument,
    RegulatorPrimary,
    Role,
)

if TYPE_CHECKING:
    from experiment_picker.config import QuestionnaireConfig


@dataclass(frozen=True)
class QuestionOption:
    """One selectable answer: stored ``value``, display ``label``, optional ``help``."""

    value: str
    label: str
    help: str = ""


@dataclass(frozen=True)
class Question:
    """A single questionnaire card.

    Attributes:
        field:       Answer field the question fills.
        title:       Heading shown to the user.
        options:     Closed option set, in display order.
        step:        Session step at which the question becomes visible.
        advances_to: Step the session moves to once answered; ``None`` keeps
                     the current step.
        subtitle:    Optional guidance line under the title.
        condition:   Extra visibility predicate over the current answers.
    """

    field: AnswerField
    title: str
    options: tuple[QuestionOption, ...]
    step: int
    advances_to: Optional[int] = None
    subtitle: str = ""
    condition: Optional[Callable[[Answers], bool]] = None

    def is_visible(self, step: int, answers: Answers) -> bool:
        if step < self.step:
            return False
        return self.condition is None or self.condition(answers)

    def option(self, value: str) -> QuestionOption:
        """Look up an option by its stored value.

        Raises:
            KeyError: If ``value`` is not one of this question's options.
        """
        for opt in self.options:
            if opt.value == value:
                return opt
        raise KeyError(f"{value!r} is not an option of {self.field.value}.")


def _needs_feasibility_follow_up(answers: Answers) -> bool:
    return answers.regulator_primary == RegulatorPrimary.TECH_FEASIBILITY


# ── Regulator catalogue ───────────────────────────────────────────────────────

REGULATOR_QUESTIONS: tuple[Question, ...] = (
    Question(
        field=AnswerField.REGULATOR_PRIMARY,
        title="1) What is the primary learning objective?",
        subtitle="Choose the closest match.",
        step=1,
        advances_to=2,
        options=(
            QuestionOption(
                "tech_feasibility",
                "Can the technology work reliably/safely? (technical feasibility)",
                "Leans toward Testbed unless other constraints apply.",
            ),
            QuestionOption(
                "social_uptake",
                "Will people accept/use it in the wild? (socio-technical uptake)",
                "Leans toward Living Lab.",
            ),
            QuestionOption(
                "policy_design",
                "How should policy/rules be designed? (iterate policy options)",
                "Leans toward Policy Lab.",
            ),
            QuestionOption(
                "legal_flex",
                "Test fit with existing law or adjust obligations temporarily "
                "(legal flex needed)",
                "Leans toward Regulatory Sandbox.",
            ),
            QuestionOption(
                "sensitive_analytics",
                "We need to analyse sensitive datasets to generate evidence",
                "Leans toward TRE.",
            ),
        ),
    ),
    Question(
        field=AnswerField.REGULATOR_REAL_USERS,
        title="2) For feasibility, do you need real users or controlled conditions?",
        step=2,
        advances_to=3,
        condition=_needs_feasibility_follow_up,
        options=(
            QuestionOption(
                "lab_only",
                "Controlled lab/simulated conditions are fine",
                "Favors Testbed.",
            ),
            QuestionOption(
                "need_real_users_later",
                "We'll need some real-user exposure later",
                "Favors Testbed → Living Lab sequence.",
            ),
        ),
    ),
    Question(
        field=AnswerField.NEED_LEGAL_FLEX,
        title=(
            "3) Do you need temporary legal derogations (waivers/comfort letters) "
            "under supervision?"
        ),
        subtitle="If yes, you are in sandbox territory.",
        step=3,
        advances_to=4,
        options=(
            QuestionOption("yes", "Yes — we need specific rules tweaked/relaxed temporarily"),
            QuestionOption("no", "No — we can operate under existing rules"),
        ),
    ),
    Question(
        field=AnswerField.SENSITIVE_DATA,
        title="4) Will personal or sensitive data be processed during trials?",
        step=4,
        options=(
            QuestionOption("none", "No"),
            QuestionOption("non_sensitive", "Yes, but non-sensitive / de-identified only"),
            QuestionOption(
                "personal_or_sensitive",
                "Yes — personal/special-category or commercially sensitive data",
            ),
        ),
    ),
)

# ── Participant catalogue ─────────────────────────────────────────────────────

PARTICIPANT_QUESTIONS: tuple[Question, ...] = (
    Question(
        field=AnswerField.PARTICIPANT_BLOCKER,
        title="1) What's your main blocker right now?",
        step=1,
        advances_to=2,
        options=(
            QuestionOption("tech_perf", "Technical performance / interoperability"),
            QuestionOption("user_acceptance", "User acceptance / behavioural fit"),
            QuestionOption("policy_design", "Policy/service design uncertainty"),
            QuestionOption(
                "reg_obligations", "Regulatory obligations / need temporary relief"
            ),
            QuestionOption("data_access", "Access to sensitive data for analysis"),
        ),
    ),
    Question(
        field=AnswerField.NEED_LEGAL_FLEX,
        title="2) Do you need any rule to be tweaked or switched off temporarily?",
        subtitle="If yes, you likely need a sandbox.",
        step=2,
        advances_to=3,
        options=(
            QuestionOption("yes", "Yes — some requirements block testing"),
            QuestionOption("no", "No — we can test under current rules"),
        ),
    ),
    Question(
        field=AnswerField.TESTING_LOCATION,
        title="3) Where must testing occur?",
        step=3,
        advances_to=4,
        options=(
            QuestionOption("lab", "Lab/simulated/controlled environment"),
            QuestionOption("real_world", "Real-world setting with users/citizens"),
            QuestionOption("policy_space", "Policy/service design workshops or trials"),
        ),
    ),
    Question(
        field=AnswerField.SENSITIVE_DATA,
        title="4) What kind of data will you use?",
        step=4,
        advances_to=5,
        options=(
            QuestionOption("none", "None"),
            QuestionOption(
                "non_sensitive", "Public/synthetic or non-sensitive internal data"
            ),
            QuestionOption(
                "personal_or_sensitive",
                "Personal/special-category or commercially sensitive data",
            ),
        ),
    ),
    Question(
        field=AnswerField.DESIRED_OUTCOME,
        title="5) What outcome do you want on exit?",
        step=5,
        options=(
            QuestionOption("tech_benchmarks", "Technical certification / benchmarks"),
            QuestionOption("societal_fit", "Evidence of societal fit / impact"),
            QuestionOption("policy_prototypes", "Policy recommendations / prototypes"),
            QuestionOption(
                "regulatory_clarity",
                "Regulatory comfort/guidance and clearer compliance path",
            ),
            QuestionOption("data_insights", "Peer-reviewed insights from safeguarded data"),
        ),
    ),
)

_CATALOGUE: dict[Role, tuple[Question, ...]] = {
    Role.REGULATOR: REGULATOR_QUESTIONS,
    Role.PARTICIPANT: PARTICIPANT_QUESTIONS,
}

# Likely instrument hinted on the regulator shortcut card.
_SHORTCUT_LIKELY: dict[RegulatorPrimary, Instrument] = {
    RegulatorPrimary.SOCIAL_UPTAKE: Instrument.LIVING_LAB,
    RegulatorPrimary.POLICY_DESIGN: Instrument.POLICY_LAB,
    RegulatorPrimary.LEGAL_FLEX: Instrument.REGULATORY_SANDBOX,
    RegulatorPrimary.SENSITIVE_ANALYTICS: Instrument.TRE,
}

SHORTCUT_STEP = 2
SHORTCUT_NEXT_STEP = 3


# ── Flow operations ───────────────────────────────────────────────────────────


def questions_for(role: Role) -> tuple[Question, ...]:
    """Full question catalogue for ``role`` in display order."""
    return _CATALOGUE[role]


def question_for(role: Role, field: AnswerField) -> Optional[Question]:
    """The question that fills ``field`` in ``role``'s flow, if it asks one."""
    for question in _CATALOGUE[role]:
        if question.field == field:
            return question
    return None


def visible_questions(role: Role, step: int, answers: Answers) -> list[Question]:
    """Questions currently on screen for ``role`` at ``step``."""
    return [q for q in _CATALOGUE[role] if q.is_visible(step, answers)]


def next_question(role: Role, step: int, answers: Answers) -> Optional[Question]:
    """First visible question whose field is still unanswered."""
    answered = answers.answered()
    for question in visible_questions(role, step, answers):
        if question.field not in answered:
            return question
    return None


def next_step(role: Role, field: AnswerField, step: int) -> int:
    """Step after answering ``field``; unchanged if the question keeps the step."""
    question = question_for(role, field)
    if question is None or question.advances_to is None:
        return step
    return question.advances_to


def shortcut_hint(role: Role, step: int, answers: Answers) -> Optional[Instrument]:
    """Likely instrument shown on the regulator shortcut card, if it is on screen.

    The card replaces the feasibility follow-up whenever the regulator picked
    a non-feasibility objective. Returns ``None`` when the card is hidden.
    """
    if role != Role.REGULATOR or step < SHORTCUT_STEP:
        return None
    return _SHORTCUT_LIKELY.get(answers.regulator_primary)


def result_step(role: Role, config: "QuestionnaireConfig") -> int:
    """Step at which the recommendation panel is revealed for ``role``."""
    if role == Role.REGULATOR:
        return config.regulator_result_step
    return config.participant_result_step
