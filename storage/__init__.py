"""
Storage — named vote-override scenarios per case.
"""

from .scenario_store import SCENARIO_KINDS, SavedScenario, ScenarioStore

__all__ = [
    "SCENARIO_KINDS",
    "SavedScenario",
    "ScenarioStore",
]
