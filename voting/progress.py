"""
Quorum progress — how far a class is from approving, for the voting dashboard.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.schema import QUORUM_BASIS, QuorumBasis

from .models import ClassQuorumResult


@dataclass(frozen=True)
class QuorumProgress:
    heads_needed: int     # favorable heads for a strict majority of voters
    heads_missing: int
    value_needed: int     # favorable cents for a strict majority of voting value
    value_missing: int
    progress_pct: float   # toward the class's own rule, capped at 100


def quorum_progress(result: ClassQuorumResult) -> QuorumProgress:
    heads_needed = result.voting_count // 2 + 1
    value_needed = result.voting_value // 2 + 1 if result.voting_value > 0 else 0

    if QUORUM_BASIS[result.creditor_class] is QuorumBasis.HEAD:
        progress = result.quorum_by_head
    else:
        progress = min(result.quorum_by_head, result.quorum_by_value)

    return QuorumProgress(
        heads_needed=heads_needed,
        heads_missing=max(0, heads_needed - result.favor_count),
        value_needed=value_needed,
        value_missing=max(0, value_needed - result.favor_value),
        progress_pct=min(100.0, progress),
    )
