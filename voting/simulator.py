"""
Creditors' assembly simulation.

Stateless per call: the caller hands in a ledger snapshot and an optional
override map (a what-if scenario); overrides are overlaid onto copies of the
creditors and the ledger itself is never touched. Saving/listing named
override sets is storage's job (storage/scenario_store.py), not this module's.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from core.errors import InputInconsistency, ValidationError
from core.schema import CLASS_ORDER, CreditorClass, Vote

from .cramdown import analyze_cram_down
from .models import Creditor, OverrideMap, VoteOverride, VotingResult, VotingSummary
from .pivotal import identify_pivotal_creditors
from .quorum import ClassTally

logger = logging.getLogger(__name__)


def apply_overrides(
    creditors: Sequence[Creditor],
    overrides: Optional[OverrideMap] = None,
) -> Tuple[List[Creditor], List[InputInconsistency]]:
    """
    Build the effective creditor view.

    Returns (effective creditors, inconsistencies). An override for an id not in
    the ledger is reported and skipped; everything else proceeds.
    """
    overrides = overrides or {}
    effective = [
        overrides[c.id].apply(c) if c.id in overrides else c
        for c in creditors
    ]

    known = {c.id for c in creditors}
    inconsistencies = [
        InputInconsistency(creditor_id=cid, message=f"override references unknown creditor {cid!r}")
        for cid in overrides
        if cid not in known
    ]
    for inc in inconsistencies:
        logger.warning(inc.message)
    return effective, inconsistencies


def _check_ledger(creditors: Sequence[Creditor]) -> None:
    if not creditors:
        raise ValidationError("creditor set is empty; nothing to put to a vote")
    seen = set()
    dup = []
    for c in creditors:
        if c.id in seen:
            dup.append(c.id)
        seen.add(c.id)
    if dup:
        raise ValidationError(
            f"duplicate creditor ids in ledger: {sorted(set(dup))}",
            errors=[f"duplicate creditor id {cid!r}" for cid in sorted(set(dup))],
        )


def simulate_voting(
    creditors: Sequence[Creditor],
    overrides: Optional[OverrideMap] = None,
    *,
    no_worse_than_liquidation: bool = True,
) -> VotingResult:
    """
    Simulate the assembly vote on the reorganization plan.

    Parameters
    ----------
    creditors : Sequence[Creditor]
        Ledger snapshot for one case
    overrides : Mapping[str, VoteOverride], optional
        What-if overlay keyed by creditor id; missing ids keep their ledger vote
    no_worse_than_liquidation : bool
        Caller's assertion for cram-down requirement 3

    Raises
    ------
    ValidationError
        Empty ledger or duplicate creditor ids.
    """
    _check_ledger(creditors)
    effective, inconsistencies = apply_overrides(creditors, overrides)

    tallies: Dict[CreditorClass, ClassTally] = {
        cls: ClassTally.from_creditors(cls, effective) for cls in CLASS_ORDER
    }
    by_class = {cls: tallies[cls].to_result() for cls in CLASS_ORDER}

    voted = [r for r in by_class.values() if r.approved is not None]
    approved_count = sum(1 for r in voted if r.approved)
    rejected_count = len(voted) - approved_count
    plan_approved = rejected_count == 0

    cram_down = analyze_cram_down(
        by_class,
        plan_approved=plan_approved,
        no_worse_than_liquidation=no_worse_than_liquidation,
    )
    pivotal = identify_pivotal_creditors(effective, tallies)

    summary = VotingSummary(
        total_creditors=len(effective),
        total_present=sum(r.present_count for r in by_class.values()),
        total_present_value=sum(r.present_value for r in by_class.values()),
    )
    logger.debug(
        "voting simulated: %d creditors, %d present, approved=%s (%d/%d classes), pivotal=%d",
        summary.total_creditors, summary.total_present, plan_approved,
        approved_count, len(voted), len(pivotal),
    )
    return VotingResult(
        by_class=by_class,
        plan_approved=plan_approved,
        approved_class_count=approved_count,
        rejected_class_count=rejected_count,
        cram_down=cram_down,
        pivotal_creditors=pivotal,
        summary=summary,
        inconsistencies=inconsistencies,
    )


def run_what_if(
    creditors: Sequence[Creditor],
    base_overrides: Optional[OverrideMap],
    creditor_id: str,
    vote: Optional[Vote],
    present: bool,
    *,
    no_worse_than_liquidation: bool = True,
) -> VotingResult:
    """Re-simulate with one creditor's override replaced by (vote, present)."""
    modified = dict(base_overrides or {})
    modified[creditor_id] = VoteOverride(vote=vote, present_at_assembly=present)
    return simulate_voting(
        creditors,
        modified,
        no_worse_than_liquidation=no_worse_than_liquidation,
    )
