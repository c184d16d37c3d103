"""
Questionnaire answers and the recommendation derived from them.

``Answers`` is an immutable snapshot of the seven optional answer fields.
Stores replace it wholesale via ``with_answer()`` rather than mutating it, so
every snapshot is hashable and safe to pass by value into the engine.

``Recommendation`` is the engine's output record. It is recomputed from
scratch on every answer change; no identity persists across recomputation.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from experiment_picker.taxonomy.answer_taxonomy import (
    AnswerField,
    DesiredOutcome,
    Instrument,
    NeedLegalFlex,
    ParticipantBlocker,
    RegulatorPrimary,
    RegulatorRealUsers,
    SensitiveData,
    TestingLocation,
)


class Answers(BaseModel):
    """Current answers; every field is independently optional.

    Attributes:
        need_legal_flex: Temporary legal derogations needed (both roles).
        sensitive_data: Kind of data processed (both roles).
        testing_location: Where testing must occur (participant only).
        desired_outcome: Outcome wanted on exit (participant only).
        regulator_primary: Primary learning objective (regulator only).
        regulator_real_users: Feasibility follow-up (regulator only, asked
            when ``regulator_primary`` is ``tech_feasibility``).
        participant_blocker: Main blocker right now (participant only).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    need_legal_flex: Optional[NeedLegalFlex] = None
    sensitive_data: Optional[SensitiveData] = None
    testing_location: Optional[TestingLocation] = None
    desired_outcome: Optional[DesiredOutcome] = None
    regulator_primary: Optional[RegulatorPrimary] = None
    regulator_real_users: Optional[RegulatorRealUsers] = None
    participant_blocker: Optional[ParticipantBlocker] = None

    def with_answer(self, field: AnswerField | str, value: Any) -> "Answers":
        """Return a new snapshot with ``field`` set to ``value``.

        ``value`` is validated against the field's option set; ``None`` clears
        the field. All other fields are preserved.

        Raises:
            ValueError: If ``field`` is not an answer field.
            pydantic.ValidationError: If ``value`` is outside the option set.
        """
        field = AnswerField(field)
        data = self.model_dump()
        data[field.value] = value
        return Answers.model_validate(data)

    def answered(self) -> dict[AnswerField, str]:
        """Map of the fields that are currently set to their values."""
        return {
            AnswerField(name): value
            for name, value in self.model_dump().items()
            if value is not None
        }


class Recommendation(BaseModel):
    """Recommended instrument plus optional sequencing and explanatory notes.

    Attributes:
        primary: The instrument to start with.
        secondary: Ordered secondary/sequencing instruments, or ``None`` when
            there are none. Never an empty tuple.
        notes: Ordered explanatory notes; at least one.
    """

    model_config = ConfigDict(frozen=True)

    primary: Instrument
    secondary: Optional[tuple[Instrument, ...]] = None
    notes: tuple[str, ...]

    @field_validator("secondary")
    @classmethod
    def validate_secondary_not_empty(
        cls, v: Optional[tuple[Instrument, ...]]
    ) -> Optional[tuple[Instrument, ...]]:
        if v is not None and len(v) == 0:
            raise ValueError("secondary must be None or non-empty, got an empty tuple.")
        return v

    @field_validator("notes")
    @classmethod
    def validate_notes_not_empty(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("notes must contain at least one entry.")
        return v
