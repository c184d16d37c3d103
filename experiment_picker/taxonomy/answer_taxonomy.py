"""
Answer taxonomy for the regulatory experimentation questionnaire.

Every closed option set the questionnaire offers is a ``StrEnum`` here:

  - ``Role``        — who is answering (regulator or participant).
  - ``Instrument``  — the experimentation instruments that can be recommended.
  - One enum per answer field (``NeedLegalFlex`` … ``ParticipantBlocker``).

``AnswerField`` names the seven answer fields; ``FIELD_OPTIONS`` maps each
field to its enum so stores and CLIs can validate ``field=value`` input.

Option values are snake_case slugs. Questionnaire keys written in camelCase
map one-to-one by case conversion, e.g. ``personalOrSensitive`` →
``personal_or_sensitive``, ``needRealUsersLater`` → ``need_real_users_later``,
``regObligations`` → ``reg_obligations``. Field names follow the same rule
(``needLegalFlex`` → ``need_legal_flex``).

This module has NO imports from any other ``experiment_picker`` package.
"""

from enum import StrEnum


class Role(StrEnum):
    """Who is filling in the questionnaire. Chosen once per session."""

    REGULATOR = "regulator"
    """Public authority seeking the right instrument for supervised trials or policy design."""

    PARTICIPANT = "participant"
    """Organisation looking to test a solution, access data, or navigate rules."""

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    @property
    def description(self) -> str:
        return _ROLE_DESCRIPTIONS[self]


_ROLE_LABELS: dict[Role, str] = {
    Role.REGULATOR: "Regulator / State Actor",
    Role.PARTICIPANT: "Participant (Company / Consortium / Public Body)",
}

_ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.REGULATOR: (
        "Public authority seeking the right instrument for supervised trials "
        "or policy design."
    ),
    Role.PARTICIPANT: (
        "Organisation looking to test a solution, access data, or navigate rules."
    ),
}


class Instrument(StrEnum):
    """Regulatory experimentation instruments."""

    REGULATORY_SANDBOX = "regulatory_sandbox"
    """Supervised scheme granting temporary relief from specific legal obligations."""

    TESTBED = "testbed"
    """Controlled or simulated environment for technical feasibility validation."""

    LIVING_LAB = "living_lab"
    """Real-world setting for observing user and societal uptake."""

    POLICY_LAB = "policy_lab"
    """Structured environment for co-designing and prototyping policy options."""

    TRE = "tre"
    """Trusted Research Environment: audited, disclosure-controlled data analysis."""

    @property
    def label(self) -> str:
        return _INSTRUMENT_LABELS[self]


_INSTRUMENT_LABELS: dict[Instrument, str] = {
    Instrument.REGULATORY_SANDBOX: "Regulatory Sandbox",
    Instrument.TESTBED: "Testbed",
    Instrument.LIVING_LAB: "Living Lab",
    Instrument.POLICY_LAB: "Policy Lab",
    Instrument.TRE: "Trusted Research Environment (TRE)",
}


# ── Answer option sets ────────────────────────────────────────────────────────


class NeedLegalFlex(StrEnum):
    """Whether temporary legal derogations are needed. Asked of both roles."""

    YES = "yes"
    NO = "no"


class SensitiveData(StrEnum):
    """What kind of data the trial processes. Asked of both roles."""

    NONE = "none"
    NON_SENSITIVE = "non_sensitive"
    PERSONAL_OR_SENSITIVE = "personal_or_sensitive"


class TestingLocation(StrEnum):
    """Where participant testing must occur."""

    __test__ = False  # keep pytest from collecting this as a test class

    LAB = "lab"
    REAL_WORLD = "real_world"
    POLICY_SPACE = "policy_space"


class DesiredOutcome(StrEnum):
    """Outcome a participant wants on exit."""

    TECH_BENCHMARKS = "tech_benchmarks"
    SOCIETAL_FIT = "societal_fit"
    POLICY_PROTOTYPES = "policy_prototypes"
    REGULATORY_CLARITY = "regulatory_clarity"
    DATA_INSIGHTS = "data_insights"


class RegulatorPrimary(StrEnum):
    """A regulator's primary learning objective."""

    TECH_FEASIBILITY = "tech_feasibility"
    SOCIAL_UPTAKE = "social_uptake"
    POLICY_DESIGN = "policy_design"
    LEGAL_FLEX = "legal_flex"
    SENSITIVE_ANALYTICS = "sensitive_analytics"


class RegulatorRealUsers(StrEnum):
    """Feasibility follow-up: controlled conditions or real users later."""

    LAB_ONLY = "lab_only"
    NEED_REAL_USERS_LATER = "need_real_users_later"


class ParticipantBlocker(StrEnum):
    """A participant's main blocker right now."""

    TECH_PERF = "tech_perf"
    USER_ACCEPTANCE = "user_acceptance"
    POLICY_DESIGN = "policy_design"
    REG_OBLIGATIONS = "reg_obligations"
    DATA_ACCESS = "data_access"


class AnswerField(StrEnum):
    """Names of the seven optional answer fields."""

    NEED_LEGAL_FLEX = "need_legal_flex"
    SENSITIVE_DATA = "sensitive_data"
    TESTING_LOCATION = "testing_location"
    DESIRED_OUTCOME = "desired_outcome"
    REGULATOR_PRIMARY = "regulator_primary"
    REGULATOR_REAL_USERS = "regulator_real_users"
    PARTICIPANT_BLOCKER = "participant_blocker"


FIELD_OPTIONS: dict[AnswerField, type[StrEnum]] = {
    AnswerField.NEED_LEGAL_FLEX: NeedLegalFlex,
    AnswerField.SENSITIVE_DATA: SensitiveData,
    AnswerField.TESTING_LOCATION: TestingLocation,
    AnswerField.DESIRED_OUTCOME: DesiredOutcome,
    AnswerField.REGULATOR_PRIMARY: RegulatorPrimary,
    AnswerField.REGULATOR_REAL_USERS: RegulatorRealUsers,
    AnswerField.PARTICIPANT_BLOCKER: ParticipantBlocker,
}

# Which roles are asked each field.
FIELD_ROLES: dict[AnswerField, frozenset[Role]] = {
    AnswerField.NEED_LEGAL_FLEX: frozenset({Role.REGULATOR, Role.PARTICIPANT}),
    AnswerField.SENSITIVE_DATA: frozenset({Role.REGULATOR, Role.PARTICIPANT}),
    AnswerField.TESTING_LOCATION: frozenset({Role.PARTICIPANT}),
    AnswerField.DESIRED_OUTCOME: frozenset({Role.PARTICIPANT}),
    AnswerField.REGULATOR_PRIMARY: frozenset({Role.REGULATOR}),
    AnswerField.REGULATOR_REAL_USERS: frozenset({Role.REGULATOR}),
    AnswerField.PARTICIPANT_BLOCKER: frozenset({Role.PARTICIPANT}),
}
