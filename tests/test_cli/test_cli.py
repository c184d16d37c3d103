"""
Tests for experiment_picker/cli.py using typer's CliRunner.

What we test
------------
recommend:
  - Prints the formatted recommendation for complete answers.
  - Prints the pending message for incomplete answers.
  - --json emits the recommendation dict, or null when pending.
  - Bad role / field / value / form exit with code 1 and an [ERROR] line.
  - Warns when a field is not asked of the role.

questionnaire:
  - Regulator feasibility path with numbered answers.
  - Regulator shortcut path skips the feasibility follow-up.
  - Participant full path, with role chosen interactively.
  - Out-of-range choices are re-prompted.

questions / validate-config:
  - List the catalogue; report parsed config.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from experiment_picker.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestRecommendCommand:
    def test_complete_answers(self, runner):
        result = runner.invoke(
            app,
            [
                "recommend", "--role", "regulator",
                "-a", "regulator_primary=tech_feasibility",
                "-a", "regulator_real_users=lab_only",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Primary instrument:   Testbed" in result.output
        assert "Secondary/Sequencing: Living Lab" in result.output

    def test_pending(self, runner):
        result = runner.invoke(
            app, ["recommend", "--role", "regulator", "-a", "regulator_primary=tech_feasibility"]
        )
        assert result.exit_code == 0
        assert "[PENDING]" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(
            app,
            [
                "recommend", "--role", "participant", "--json",
                "-a", "need_legal_flex=yes",
                "-a", "sensitive_data=personal_or_sensitive",
                "-a", "participant_blocker=data_access",
            ],
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["primary"] == "regulatory_sandbox"
        assert payload["secondary"] == ["testbed", "living_lab", "tre"]
        assert len(payload["notes"]) == 2

    def test_json_pending_is_null(self, runner):
        result = runner.invoke(app, ["recommend", "--role", "participant", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) is None

    def test_unknown_role(self, runner):
        result = runner.invoke(app, ["recommend", "--role", "auditor"])
        assert result.exit_code == 1
        assert "[ERROR] Unknown role" in result.output

    def test_unknown_field(self, runner):
        result = runner.invoke(app, ["recommend", "--role", "regulator", "-a", "colour=red"])
        assert result.exit_code == 1
        assert "[ERROR] Unknown field" in result.output

    def test_invalid_value(self, runner):
        result = runner.invoke(
            app, ["recommend", "--role", "regulator", "-a", "need_legal_flex=maybe"]
        )
        assert result.exit_code == 1
        assert "Must be one of: yes, no" in result.output

    def test_missing_equals(self, runner):
        result = runner.invoke(app, ["recommend", "--role", "regulator", "-a", "need_legal_flex"])
        assert result.exit_code == 1
        assert "field=value" in result.output

    def test_field_not_asked_of_role_warns(self, runner):
        result = runner.invoke(
            app,
            [
                "recommend", "--role", "regulator",
                "-a", "participant_blocker=data_access",
            ],
        )
        assert result.exit_code == 0
        assert "[WARN] participant_blocker is not asked of regulator" in result.output
        assert "[PENDING]" in result.output


class TestQuestionnaireCommand:
    def test_regulator_feasibility_path(self, runner):
        # tech_feasibility, lab_only, no legal flex, no data
        result = runner.invoke(
            app, ["questionnaire", "--role", "regulator"], input="1\n1\n2\n1\n"
        )
        assert result.exit_code == 0, result.output
        assert "2) For feasibility" in result.output
        assert "Primary instrument:   Testbed" in result.output

    def test_regulator_shortcut_path(self, runner):
        # policy_design, shortcut, no legal flex, no data
        result = runner.invoke(
            app, ["questionnaire", "--role", "regulator"], input="3\n2\n1\n"
        )
        assert result.exit_code == 0, result.output
        assert "Likely: Policy Lab" in result.output
        assert "2) For feasibility" not in result.output
        assert "Primary instrument:   Policy Lab" in result.output

    def test_participant_interactive_role(self, runner):
        # participant, reg_obligations, no, real_world, personal, regulatory_clarity
        result = runner.invoke(app, ["questionnaire"], input="2\n4\n2\n2\n3\n4\n")
        assert result.exit_code == 0, result.output
        assert "First, who are you?" in result.output
        assert "Primary instrument:   Regulatory Sandbox" in result.output
        assert "Testbed, Living Lab, Trusted Research Environment (TRE)" in result.output

    def test_out_of_range_choice_reprompts(self, runner):
        result = runner.invoke(
            app, ["questionnaire", "--role", "participant"], input="9\n1\n2\n1\n1\n1\n"
        )
        assert result.exit_code == 0, result.output
        assert "Enter a number between 1 and 5." in result.output
        assert "Primary instrument:   Testbed" in result.output


class TestOtherCommands:
    def test_questions(self, runner):
        result = runner.invoke(app, ["questions", "--role", "participant"])
        assert result.exit_code == 0
        assert "[desired_outcome]" in result.output

    def test_validate_config(self, runner):
        result = runner.invoke(app, ["validate-config", "--full"])
        assert result.exit_code == 0, result.output
        assert "[OK] Config valid." in result.output
        assert '"questionnaire"' in result.output

    def test_validate_config_missing_file(self, runner, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "x.toml")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output
