"""
Reporting: plain-text formatters for CLI output.

Modules
-------
formatters : format_recommendation(), format_question(), format_answers() …
"""
