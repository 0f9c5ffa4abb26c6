"""
Voting simulator — per-class quorum, plan approval, cram-down and pivotal creditors.
"""

from .models import (
    ClassQuorumResult,
    CramDownAnalysis,
    Creditor,
    PivotalCreditor,
    Requirement,
    VoteOverride,
    VotingResult,
)
from .quorum import calculate_class_quorum
from .progress import QuorumProgress, quorum_progress
from .simulator import apply_overrides, run_what_if, simulate_voting

__all__ = [
    "ClassQuorumResult",
    "CramDownAnalysis",
    "Creditor",
    "PivotalCreditor",
    "Requirement",
    "VoteOverride",
    "VotingResult",
    "calculate_class_quorum",
    "QuorumProgress",
    "quorum_progress",
    "apply_overrides",
    "run_what_if",
    "simulate_voting",
]
