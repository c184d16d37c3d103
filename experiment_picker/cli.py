"""
Regulatory Experiment Picker — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Evaluate answers / run the questionnaire.
  5. Report result to stdout.

Install and run::

    pip install -e .
    experiment-picker --help
    experiment-picker validate-config
    experiment-picker questions --role participant
    experiment-picker recommend --role regulator \\
        -a regulator_primary=tech_feasibility -a regulator_real_users=lab_only
    experiment-picker questionnaire
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="experiment-picker",
    help="Find the right regulatory experimentation instrument: Sandbox, Testbed, "
    "Living Lab, Policy Lab or TRE.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from experiment_picker.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from experiment_picker.utils.logging import configure_logging
    configure_logging(config.logging)


def _parse_role_or_exit(role: str):
    from experiment_picker.taxonomy.answer_taxonomy import Role

    try:
        return Role(role.lower())
    except ValueError:
        valid = ", ".join(r.value for r in Role)
        typer.echo(f"[ERROR] Unknown role '{role}'. Must be one of: {valid}.", err=True)
        raise typer.Exit(code=1)


def _prompt_choice(count: int) -> int:
    """Prompt for a 1-based option number until one in range is given."""
    while True:
        choice = typer.prompt("Choose", type=int)
        if 1 <= choice <= count:
            return choice
        typer.echo(f"  Enter a number between 1 and {count}.")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Log level:               {config.logging.level}")
    typer.echo(f"  Log file:                {config.logging.log_file or '(none)'}")
    typer.echo(f"  Regulator result step:   {config.questionnaire.regulator_result_step}")
    typer.echo(f"  Participant result step: {config.questionnaire.participant_result_step}")
    typer.echo(f"  Debug mode:              {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("questions")
def questions(
    role: str = typer.Option(..., "--role", "-r", help="regulator or participant."),
) -> None:
    """List the questions asked of a role, with field names and option values."""
    from experiment_picker.questionnaire.flow import questions_for
    from experiment_picker.reporting.formatters import format_question_catalogue

    parsed = _parse_role_or_exit(role)
    typer.echo(format_question_catalogue(parsed, questions_for(parsed)))


@app.command("recommend")
def recommend(
    role: str = typer.Option(..., "--role", "-r", help="regulator or participant."),
    answers: Optional[list[str]] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Answer as field=value; repeat for each field "
        "(e.g. -a need_legal_flex=yes -a sensitive_data=none).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the recommendation as JSON (null when pending).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Evaluate one set of answers and print the recommendation.

    \b
    Answers are applied in the order given; later values for the same field
    win. Use ``experiment-picker questions --role ROLE`` to list fields.
    """
    from pydantic import ValidationError

    from experiment_picker.reporting.formatters import format_answers, format_recommendation
    from experiment_picker.store import AnswerStore
    from experiment_picker.taxonomy.answer_taxonomy import FIELD_OPTIONS, FIELD_ROLES, AnswerField

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    store = AnswerStore(config.questionnaire)
    store.select_role(_parse_role_or_exit(role))

    for raw in answers or []:
        name, sep, value = raw.partition("=")
        if not sep:
            typer.echo(f"[ERROR] Answer '{raw}' must be in field=value form.", err=True)
            raise typer.Exit(code=1)
        try:
            field = AnswerField(name.strip())
        except ValueError:
            valid = ", ".join(f.value for f in AnswerField)
            typer.echo(f"[ERROR] Unknown field '{name}'. Must be one of: {valid}.", err=True)
            raise typer.Exit(code=1)
        try:
            store.set_answer(field, value.strip())
        except ValidationError:
            valid = ", ".join(o.value for o in FIELD_OPTIONS[field])
            typer.echo(
                f"[ERROR] Invalid value '{value}' for {field.value}. Must be one of: {valid}.",
                err=True,
            )
            raise typer.Exit(code=1)
        if store.role not in FIELD_ROLES[field]:
            typer.echo(
                f"[WARN] {field.value} is not asked of {store.role.value}; it will be ignored.",
                err=True,
            )

    rec = store.recommendation

    if as_json:
        payload = rec.model_dump(mode="json") if rec is not None else None
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Role: {store.role.label}")
    typer.echo(format_answers(store.answers))
    typer.echo("")
    typer.echo(format_recommendation(rec))


@app.command("questionnaire")
def questionnaire(
    role: Optional[str] = typer.Option(
        None,
        "--role",
        "-r",
        help="Skip the role question (regulator or participant).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Run the questionnaire interactively and print the recommendation.

    Questions are revealed step by step exactly as in the dashboard; answer
    each by its option number.
    """
    from experiment_picker.questionnaire import flow
    from experiment_picker.reporting.formatters import (
        format_question,
        format_recommendation,
        format_role_choices,
        format_shortcut,
    )
    from experiment_picker.store import AnswerStore
    from experiment_picker.taxonomy.answer_taxonomy import Role

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    store = AnswerStore(config.questionnaire)
    if role is not None:
        store.select_role(_parse_role_or_exit(role))
    else:
        typer.echo(format_role_choices())
        roles = list(Role)
        store.select_role(roles[_prompt_choice(len(roles)) - 1])

    typer.echo("")
    typer.echo(f"{store.role.label}")

    while True:
        question = flow.next_question(store.role, store.step, store.answers)
        if question is not None:
            typer.echo("")
            typer.echo(format_question(question))
            choice = _prompt_choice(len(question.options))
            store.set_answer(question.field, question.options[choice - 1].value)
            continue

        likely = flow.shortcut_hint(store.role, store.step, store.answers)
        if likely is not None and store.step == flow.SHORTCUT_STEP:
            typer.echo("")
            typer.echo(format_shortcut(likely))
            store.advance()
            continue

        break

    typer.echo("")
    typer.echo(format_recommendation(store.recommendation if store.result_visible else None))


if __name__ == "__main__":
    app()
