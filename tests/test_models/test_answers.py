"""
Tests for experiment_picker/models/answers.py.

What we test
------------
Answers:
  - All fields default to None.
  - String values coerce to their option enums; values outside a field's
    option set and unknown fields are rejected.
  - Frozen and hashable (usable as a cache key).
  - with_answer() sets one field, keeps the rest, validates the value, and
    returns a new snapshot.
  - answered() lists only set fields.

Recommendation:
  - secondary=None is allowed; an empty tuple is rejected.
  - notes must be non-empty.
  - JSON dump uses option slugs.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from experiment_picker.models.answers import Answers, Recommendation
from experiment_picker.taxonomy.answer_taxonomy import (
    AnswerField,
    Instrument,
    NeedLegalFlex,
    SensitiveData,
)


class TestAnswers:
    def test_defaults_all_none(self):
        answers = Answers()
        assert all(value is None for value in answers.model_dump().values())
        assert len(answers.model_dump()) == len(AnswerField)

    def test_string_values_coerce_to_enums(self):
        answers = Answers(need_legal_flex="yes", sensitive_data="non_sensitive")
        assert answers.need_legal_flex is NeedLegalFlex.YES
        assert answers.sensitive_data is SensitiveData.NON_SENSITIVE

    def test_value_outside_options_rejected(self):
        with pytest.raises(ValidationError):
            Answers(need_legal_flex="maybe")

    def test_value_from_other_field_rejected(self):
        # "lab_only" belongs to regulator_real_users, not testing_location.
        with pytest.raises(ValidationError):
            Answers(testing_location="lab_only")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            Answers(favourite_colour="blue")

    def test_frozen(self):
        answers = Answers()
        with pytest.raises(ValidationError):
            answers.need_legal_flex = NeedLegalFlex.YES

    def test_hashable_and_equal_by_value(self):
        a = Answers(need_legal_flex="no")
        b = Answers(need_legal_flex=NeedLegalFlex.NO)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1


class TestWithAnswer:
    def test_sets_one_field_and_keeps_others(self):
        before = Answers(need_legal_flex="no", participant_blocker="tech_perf")
        after = before.with_answer("sensitive_data", "none")
        assert after.sensitive_data is SensitiveData.NONE
        assert after.need_legal_flex is NeedLegalFlex.NO
        assert after.participant_blocker == "tech_perf"

    def test_returns_new_snapshot(self):
        before = Answers()
        after = before.with_answer(AnswerField.NEED_LEGAL_FLEX, "yes")
        assert before.need_legal_flex is None
        assert after is not before

    def test_overwrites_existing_value(self):
        answers = Answers(need_legal_flex="yes").with_answer("need_legal_flex", "no")
        assert answers.need_legal_flex is NeedLegalFlex.NO

    def test_none_clears_field(self):
        answers = Answers(need_legal_flex="yes").with_answer("need_legal_flex", None)
        assert answers.need_legal_flex is None

    def test_invalid_value_rejected(self):
        with pytest.raises(ValidationError):
            Answers().with_answer("sensitive_data", "secret")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            Answers().with_answer("not_a_field", "yes")


class TestAnswered:
    def test_empty(self):
        assert Answers().answered() == {}

    def test_only_set_fields(self):
        answers = Answers(need_legal_flex="yes", desired_outcome="data_insights")
        assert answers.answered() == {
            AnswerField.NEED_LEGAL_FLEX: "yes",
            AnswerField.DESIRED_OUTCOME: "data_insights",
        }


class TestRecommendation:
    def test_secondary_defaults_to_none(self):
        rec = Recommendation(primary=Instrument.TESTBED, notes=("n",))
        assert rec.secondary is None

    def test_empty_secondary_rejected(self):
        with pytest.raises(ValidationError, match="secondary"):
            Recommendation(primary=Instrument.TESTBED, secondary=(), notes=("n",))

    def test_empty_notes_rejected(self):
        with pytest.raises(ValidationError, match="notes"):
            Recommendation(primary=Instrument.TESTBED, notes=())

    def test_list_inputs_become_tuples(self):
        rec = Recommendation(
            primary="living_lab", secondary=["testbed"], notes=["a", "b"]
        )
        assert rec.secondary == (Instrument.TESTBED,)
        assert rec.notes == ("a", "b")

    def test_json_dump_uses_slugs(self):
        rec = Recommendation(
            primary=Instrument.TRE, secondary=(Instrument.TRE,), notes=("n",)
        )
        assert rec.model_dump(mode="json") == {
            "primary": "tre",
            "secondary": ["tre"],
            "notes": ["n"],
        }
