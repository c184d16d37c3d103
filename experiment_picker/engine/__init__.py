"""
Recommendation engine.

Modules
-------
recommender : get_recommendation() + derive_secondary() — pure functions,
              no I/O; results cached on the (role, answers) pair.
notes       : explanatory note texts attached by each rule.
"""

from experiment_picker.engine.recommender import derive_secondary, get_recommendation

__all__ = ["derive_secondary", "get_recommendation"]
