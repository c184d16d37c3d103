"""
Regulatory Experiment Picker.

Maps a questionnaire role and answers to a recommended regulatory
experimentation instrument: Regulatory Sandbox, Testbed, Living Lab,
Policy Lab or Trusted Research Environment (TRE).

Packages
--------
taxonomy      : closed option sets (roles, instruments, answer enums).
models        : ``Answers`` snapshot and ``Recommendation`` output.
engine        : ``get_recommendation()`` — the pure decision function.
questionnaire : question catalogue and step-reveal flow.
reporting     : ASCII formatters for the CLI.
store         : ``AnswerStore`` session object used by the CLI and dashboard.
"""

__version__ = "0.1.0"
