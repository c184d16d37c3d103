"""
Recommendation engine: converts a role + answer snapshot into a recommended
experimentation instrument with sequencing and explanatory notes.

Rule precedence (evaluated in order — first match wins)
--------------------------------------------------------
    1. SANDBOX : need_legal_flex == yes               (any role, any answers)
    2. TRE     : sensitive_data == personal_or_sensitive
                 AND the role's data blocker is set
                   regulator   → regulator_primary   == sensitive_analytics
                   participant → participant_blocker == data_access
    3. DISPATCH on the role's primary field
                   regulator   → regulator_primary   (+ regulator_real_users)
                   participant → participant_blocker
    4. None    : role unset, primary field unset, or feasibility follow-up unset

The rule-3 ``legal_flex`` / ``sensitive_analytics`` / ``reg_obligations`` /
``data_access`` leaves overlap rules 1–2 on purpose: they fire while the
global flag is still unanswered, so they stay separate branches.

Secondary instruments
---------------------
Rules 1, 2 and the Sandbox/TRE leaves of rule 3 derive their sequencing list
from ``derive_secondary()``:

    legal flex wanted (role flag OR need_legal_flex == yes) → Testbed, Living Lab
    sensitive_data == personal_or_sensitive                 → TRE

An empty derivation yields ``None``, never an empty tuple.

Role gating
-----------
Role-specific fields are only read behind a role check. Stale values left
from a previous role never influence the result.

All functions are pure: no I/O, no mutation of inputs.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from experiment_picker.engine import notes
from experiment_picker.models.answers import Answers, Recommendation
from experiment_picker.taxonomy.answer_taxonomy import (
    Instrument,
    NeedLegalFlex,
    ParticipantBlocker,
    RegulatorPrimary,
    RegulatorRealUsers,
    Role,
    SensitiveData,
)

logger = logging.getLogger(__name__)

# Fixed primary → (instrument, secondary, notes) leaves of the rule-3 dispatch.
_REGULATOR_FIXED: dict[RegulatorPrimary, tuple[Instrument, tuple[Instrument, ...], tuple[str, ...]]] = {
    RegulatorPrimary.SOCIAL_UPTAKE: (
        Instrument.LIVING_LAB, (Instrument.TESTBED,), notes.REGULATOR_SOCIAL_UPTAKE,
    ),
    RegulatorPrimary.POLICY_DESIGN: (
        Instrument.POLICY_LAB, (Instrument.LIVING_LAB,), notes.REGULATOR_POLICY_DESIGN,
    ),
}

_PARTICIPANT_FIXED: dict[ParticipantBlocker, tuple[Instrument, tuple[Instrument, ...], tuple[str, ...]]] = {
    ParticipantBlocker.TECH_PERF: (
        Instrument.TESTBED, (Instrument.LIVING_LAB,), notes.PARTICIPANT_TECH_PERF,
    ),
    ParticipantBlocker.USER_ACCEPTANCE: (
        Instrument.LIVING_LAB, (Instrument.TESTBED,), notes.PARTICIPANT_USER_ACCEPTANCE,
    ),
    ParticipantBlocker.POLICY_DESIGN: (
        Instrument.POLICY_LAB, (Instrument.LIVING_LAB,), notes.PARTICIPANT_POLICY_DESIGN,
    ),
}


@lru_cache(maxsize=256)
def get_recommendation(role: Optional[Role], answers: Answers) -> Optional[Recommendation]:
    """Compute the recommendation for a role and answer snapshot.

    Results are cached on the ``(role, answers)`` pair; both are immutable,
    so a cache hit is indistinguishable from a fresh evaluation.

    Args:
        role:    Active role, or ``None`` before one is chosen.
        answers: Full current answer snapshot.

    Returns:
        A ``Recommendation``, or ``None`` when the answers do not yet (or do
        not) match any rule.
    """
    if role is None:
        return None

    if answers.need_legal_flex == NeedLegalFlex.YES:
        rule_notes = [notes.LEGAL_DEROGATION]
        if answers.sensitive_data == SensitiveData.PERSONAL_OR_SENSITIVE:
            rule_notes.append(notes.LEGAL_DEROGATION_TRE_CONTROLS)
        logger.debug(
            "Legal-flex override fired for role=%s", role,
            extra={"rule": "legal_flex_override", "role": role.value},
        )
        return Recommendation(
            primary=Instrument.REGULATORY_SANDBOX,
            secondary=derive_secondary(role, answers),
            notes=tuple(rule_notes),
        )

    if answers.sensitive_data == SensitiveData.PERSONAL_OR_SENSITIVE and _has_data_blocker(
        role, answers
    ):
        logger.debug(
            "Sensitive-data override fired for role=%s", role,
            extra={"rule": "sensitive_data_override", "role": role.value},
        )
        return Recommendation(
            primary=Instrument.TRE,
            secondary=derive_secondary(role, answers),
            notes=(notes.SENSITIVE_DATA_BLOCKER,),
        )

    if role == Role.REGULATOR:
        rec = _dispatch_regulator(answers)
    else:
        rec = _dispatch_participant(answers)
    if rec is not None:
        logger.debug(
            "Role dispatch matched %s for role=%s", rec.primary, role,
            extra={"rule": "role_dispatch", "role": role.value, "primary": rec.primary.value},
        )
    return rec


def derive_secondary(role: Role, answers: Answers) -> Optional[tuple[Instrument, ...]]:
    """Derive the ordered secondary/sequencing instruments.

    Returns:
        A non-empty tuple, or ``None`` when no condition applies.
    """
    if role == Role.REGULATOR:
        wants_legal_flex = answers.regulator_primary == RegulatorPrimary.LEGAL_FLEX
    else:
        wants_legal_flex = answers.participant_blocker == ParticipantBlocker.REG_OBLIGATIONS

    secondary: list[Instrument] = []
    if wants_legal_flex or answers.need_legal_flex == NeedLegalFlex.YES:
        secondary.extend((Instrument.TESTBED, Instrument.LIVING_LAB))
    if answers.sensitive_data == SensitiveData.PERSONAL_OR_SENSITIVE:
        secondary.append(Instrument.TRE)
    return tuple(secondary) if secondary else None


def _has_data_blocker(role: Role, answers: Answers) -> bool:
    if role == Role.REGULATOR:
        return answers.regulator_primary == RegulatorPrimary.SENSITIVE_ANALYTICS
    return answers.participant_blocker == ParticipantBlocker.DATA_ACCESS


def _dispatch_regulator(answers: Answers) -> Optional[Recommendation]:
    primary = answers.regulator_primary

    if primary == RegulatorPrimary.TECH_FEASIBILITY:
        if answers.regulator_real_users == RegulatorRealUsers.LAB_ONLY:
            rule_notes = notes.REGULATOR_LAB_ONLY
        elif answers.regulator_real_users == RegulatorRealUsers.NEED_REAL_USERS_LATER:
            rule_notes = notes.REGULATOR_REAL_USERS_LATER
        else:
            # Feasibility follow-up still unanswered.
            return None
        return Recommendation(
            primary=Instrument.TESTBED,
            secondary=(Instrument.LIVING_LAB,),
            notes=rule_notes,
        )

    if primary in _REGULATOR_FIXED:
        instrument, secondary, rule_notes = _REGULATOR_FIXED[primary]
        return Recommendation(primary=instrument, secondary=secondary, notes=rule_notes)

    if primary == RegulatorPrimary.LEGAL_FLEX:
        return Recommendation(
            primary=Instrument.REGULATORY_SANDBOX,
            secondary=derive_secondary(Role.REGULATOR, answers),
            notes=notes.REGULATOR_LEGAL_FLEX,
        )

    if primary == RegulatorPrimary.SENSITIVE_ANALYTICS:
        return Recommendation(
            primary=Instrument.TRE,
            secondary=derive_secondary(Role.REGULATOR, answers),
            notes=notes.REGULATOR_SENSITIVE_ANALYTICS,
        )

    return None


def _dispatch_participant(answers: Answers) -> Optional[Recommendation]:
    blocker = answers.participant_blocker

    if blocker in _PARTICIPANT_FIXED:
        instrument, secondary, rule_notes = _PARTICIPANT_FIXED[blocker]
        return Recommendation(primary=instrument, secondary=secondary, notes=rule_notes)

    if blocker == ParticipantBlocker.REG_OBLIGATIONS:
        return Recommendation(
            primary=Instrument.REGULATORY_SANDBOX,
            secondary=derive_secondary(Role.PARTICIPANT, answers),
            notes=notes.PARTICIPANT_REG_OBLIGATIONS,
        )

    if blocker == ParticipantBlocker.DATA_ACCESS:
        return Recommendation(
            primary=Instrument.TRE,
            secondary=derive_secondary(Role.PARTICIPANT, answers),
            notes=notes.PARTICIPANT_DATA_ACCESS,
        )

    return None
