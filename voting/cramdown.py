"""
Cram-down eligibility (Lei 11.101/2005, art. 58, §1º).

Evaluated only when the plan was not approved outright. Three gating
requirements:
  1. At least one class with presentes approved the plan.
  2. Every rejecting class gave the plan at least 1/3 of its votes, counted on
     the class's own quorum metric (value for II/III, heads for I/IV).
  3. The dissenting class is not materially worse off than in liquidation.
     This cannot be derived from the ledger; the caller asserts it.

Two further checks from the statute (Class I payment term, Class IV parity)
need the plan's terms and are surfaced as warnings only.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Dict, List

from core.schema import CLASS_LABELS, QUORUM_BASIS, CreditorClass, QuorumBasis
from core.utils import at_least_fraction, ratio_pct

from .models import ClassQuorumResult, CramDownAnalysis, Requirement

logger = logging.getLogger(__name__)

ONE_THIRD = Fraction(1, 3)


def _favor_share(result: ClassQuorumResult):
    """(favor, voting total, metric name) on the class's own quorum metric."""
    if QUORUM_BASIS[result.creditor_class] is QuorumBasis.HEAD:
        return result.favor_count, result.voting_count, "heads"
    return result.favor_value, result.voting_value, "value"


def analyze_cram_down(
    by_class: Dict[CreditorClass, ClassQuorumResult],
    *,
    plan_approved: bool,
    no_worse_than_liquidation: bool = True,
) -> CramDownAnalysis:
    if plan_approved:
        return CramDownAnalysis(eligible=False, applicable=False)

    voted = [r for r in by_class.values() if r.approved is not None]
    approved = [r for r in voted if r.approved]
    rejected = [r for r in voted if not r.approved]

    requirements: List[Requirement] = []
    blockers: List[str] = []
    warnings: List[str] = []

    # 1. at least one approving class
    req1 = len(approved) >= 1
    requirements.append(Requirement(
        id="1",
        description="At least one class with present creditors approved the plan",
        satisfied=req1,
        detail=f"{len(approved)} class(es) approved" if req1 else "No class approved the plan",
    ))
    if not req1:
        blockers.append("No class approved the plan")

    # 2. >= 1/3 favorable in every rejecting class
    req2 = True
    for r in rejected:
        favor, total, metric = _favor_share(r)
        if not at_least_fraction(favor, total, ONE_THIRD):
            req2 = False
            blockers.append(
                f"{CLASS_LABELS[r.creditor_class]}: only {ratio_pct(favor, total):.1f}% "
                f"of voting {metric} in favor (minimum 33.3%)"
            )
    requirements.append(Requirement(
        id="2",
        description="Each rejecting class gave at least 1/3 of its votes in favor",
        satisfied=req2,
        detail=(
            "1/3 threshold met in every rejecting class"
            if req2 else "One or more rejecting classes fell below 1/3"
        ),
    ))

    # 3. liquidation comparison, asserted by the caller
    requirements.append(Requirement(
        id="3",
        description="Dissenting class not materially worse off than in liquidation",
        satisfied=no_worse_than_liquidation,
        detail=(
            "Asserted by caller; not derived from ledger data"
            if no_worse_than_liquidation
            else "Caller reports treatment worse than liquidation"
        ),
    ))
    if not no_worse_than_liquidation:
        blockers.append("Plan treats the dissenting class worse than liquidation")

    labor = by_class.get(CreditorClass.I_LABOR)
    if labor is not None and labor.approved is False:
        warnings.append("Class I rejected: verify art. 54 (labor claims paid within one year)")
    small = by_class.get(CreditorClass.IV_SMALL_BUSINESS)
    if small is not None and small.approved is not None:
        warnings.append("Class IV: confirm its terms are not superior to other classes")

    eligible = all(r.satisfied for r in requirements)
    logger.debug("cram-down eligible=%s blockers=%d", eligible, len(blockers))
    return CramDownAnalysis(
        eligible=eligible,
        applicable=True,
        requirements=requirements,
        blockers=blockers,
        warnings=warnings,
    )
