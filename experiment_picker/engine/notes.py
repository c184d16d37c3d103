"""Explanatory note texts attached to recommendations, keyed by the rule that emits them."""

# ── Global overrides ──────────────────────────────────────────────────────────

LEGAL_DEROGATION = (
    "You indicated a need for supervised, time-limited legal derogations — "
    "this is the defining feature of a Regulatory Sandbox."
)
LEGAL_DEROGATION_TRE_CONTROLS = (
    "Because sensitive data are involved, run data work inside a TRE or with "
    "TRE-like controls (e.g., Five Safes)."
)
SENSITIVE_DATA_BLOCKER = (
    "Your main blocker is access to sensitive data: a TRE provides controlled, "
    "audited analysis with safe people/projects/settings/data/outputs."
)

# ── Regulator dispatch ────────────────────────────────────────────────────────

REGULATOR_LAB_ONLY = (
    "Technical feasibility in controlled conditions points to a Testbed.",
    "Once KPIs are met, consider a Living Lab to validate societal uptake.",
)
REGULATOR_REAL_USERS_LATER = (
    "Start in a Testbed to de-risk performance; plan for a Living Lab phase "
    "to observe real-world use.",
)
REGULATOR_SOCIAL_UPTAKE = (
    "Your focus is socio-technical acceptance in real settings — that's a "
    "Living Lab's core purpose.",
    "You can precede it with Testbed validation if technical risks remain high.",
)
REGULATOR_POLICY_DESIGN = (
    "You're iterating policy/service options — a Policy Lab fits (co-design, "
    "prototypes, trials).",
    "If needed, validate in a Living Lab with users before formal rulemaking.",
)
REGULATOR_LEGAL_FLEX = (
    "Testing under modified rules requires a Regulatory Sandbox with "
    "supervision, time limits, and exit criteria.",
)
REGULATOR_SENSITIVE_ANALYTICS = (
    "You need safeguarded access to sensitive data — a TRE is designed for "
    "that (Five Safes).",
)

# ── Participant dispatch ──────────────────────────────────────────────────────

PARTICIPANT_TECH_PERF = (
    "Resolve performance/interoperability in a Testbed first.",
    "Then move to a Living Lab for real-world behaviour and uptake.",
)
PARTICIPANT_USER_ACCEPTANCE = (
    "User acceptance and societal fit point to a Living Lab in real settings.",
    "If technical risk remains, run a short Testbed phase first.",
)
PARTICIPANT_POLICY_DESIGN = (
    "Unclear policy/service design calls for a Policy Lab (co-design, "
    "prototyping, evaluation).",
    "You can validate outcomes in a Living Lab before scaling.",
)
PARTICIPANT_REG_OBLIGATIONS = (
    "Temporary, supervised legal flex to test in the wild is what a "
    "Regulatory Sandbox provides.",
)
PARTICIPANT_DATA_ACCESS = (
    "Your blocker is sensitive data access — use a TRE with audited outputs "
    "and disclosure control.",
)
