"""
ASCII terminal formatters for CLI output.

All formatters accept domain objects and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from typing import Optional

from experiment_picker.models.answers import Answers, Recommendation
from experiment_picker.questionnaire.flow import Question
from experiment_picker.taxonomy.answer_taxonomy import Instrument, Role

_RULE = "-" * 60


# ── Recommendation ────────────────────────────────────────────────────────────


def format_recommendation(rec: Optional[Recommendation]) -> str:
    """Format a recommendation block, or the pending message when ``None``.

    Example::

        Recommendation
        ------------------------------------------------------------
          Primary instrument:   Testbed
          Secondary/Sequencing: Living Lab
          - Technical feasibility in controlled conditions points to a Testbed.
    """
    if rec is None:
        return format_pending()

    lines = ["Recommendation", _RULE, f"  Primary instrument:   {rec.primary.label}"]
    if rec.secondary:
        lines.append(f"  Secondary/Sequencing: {format_instruments(rec.secondary)}")
    for note in rec.notes:
        lines.append(f"  - {note}")
    return "\n".join(lines)


def format_pending() -> str:
    return "[PENDING] Not enough answers for a recommendation yet."


def format_instruments(instruments: tuple[Instrument, ...]) -> str:
    return ", ".join(i.label for i in instruments)


# ── Questionnaire ─────────────────────────────────────────────────────────────


def format_question(question: Question) -> str:
    """Question card with 1-based option numbers for prompting."""
    lines = [question.title]
    if question.subtitle:
        lines.append(f"  {question.subtitle}")
    for idx, opt in enumerate(question.options, start=1):
        lines.append(f"  [{idx}] {opt.label}")
        if opt.help:
            lines.append(f"      {opt.help}")
    return "\n".join(lines)


def format_role_choices() -> str:
    lines = ["First, who are you?"]
    for idx, role in enumerate(Role, start=1):
        lines.append(f"  [{idx}] {role.label}")
        lines.append(f"      {role.description}")
    return "\n".join(lines)


def format_shortcut(likely: Instrument) -> str:
    return (
        "Shortcut: based on your primary objective, you may already have a "
        "likely instrument. Continue to confirm cross-cutting constraints.\n"
        f"  Likely: {likely.label}"
    )


def format_question_catalogue(role: Role, questions: tuple[Question, ...]) -> str:
    """All questions for ``role`` with their field names and option values."""
    lines = [f"{role.label} — {len(questions)} question(s)", _RULE]
    for question in questions:
        lines.append(f"{question.title}  [{question.field.value}]")
        for opt in question.options:
            lines.append(f"  {opt.value:<24} {opt.label}")
        lines.append("")
    return "\n".join(lines).rstrip()


def format_answers(answers: Answers) -> str:
    answered = answers.answered()
    if not answered:
        return "  (no answers)"
    return "\n".join(f"  {field.value:<22} {value}" for field, value in answered.items())
