"""
Questionnaire flow: per-role question catalogue, option labels and help text,
and the step-reveal rules the CLI and dashboard share.
"""
