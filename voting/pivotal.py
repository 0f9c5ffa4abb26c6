"""
Pivotal creditors — those whose single vote flip changes their class outcome.

Each class is tallied once; every candidate flip is then decided from the
running totals, so the whole pass is O(n) rather than re-tallying per creditor.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from core.schema import CLASS_LABELS, CLASS_ORDER, CreditorClass, Vote

from .models import Creditor, PivotalCreditor
from .quorum import ClassTally

WOULD_APPROVE = "WOULD_APPROVE"
WOULD_REJECT = "WOULD_REJECT"


def identify_pivotal_creditors(
    creditors: Sequence[Creditor],
    tallies: Optional[Dict[CreditorClass, ClassTally]] = None,
) -> List[PivotalCreditor]:
    """
    Parameters
    ----------
    creditors : effective creditor view (overrides already applied)
    tallies : per-class tallies over the same view; built here if omitted
    """
    if tallies is None:
        tallies = {cls: ClassTally.from_creditors(cls, creditors) for cls in CLASS_ORDER}
    current = {cls: t.approved() for cls, t in tallies.items()}

    pivotal: List[PivotalCreditor] = []
    for c in creditors:
        if not c.casts_vote:
            continue
        tally = tallies[c.creditor_class]
        if tally.approved_if_flipped(c) == current[c.creditor_class]:
            continue
        label = CLASS_LABELS[c.creditor_class]
        if c.vote is Vote.FAVOR:
            impact, reason = WOULD_REJECT, f"Voting against would make {label} reject the plan"
        else:
            impact, reason = WOULD_APPROVE, f"Voting in favor would make {label} approve the plan"
        pivotal.append(PivotalCreditor(
            id=c.id,
            name=c.name,
            creditor_class=c.creditor_class,
            value=c.value,
            impact=impact,
            reason=reason,
        ))

    pivotal.sort(key=lambda p: (-p.value, p.id))
    return pivotal
