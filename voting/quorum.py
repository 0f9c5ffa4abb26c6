"""
Per-class quorum (Lei 11.101/2005, art. 45).

Quorum is decided from running totals only, so the outcome with one vote
flipped is recomputed in O(1) (see ClassTally.approved_if_flipped), which is
what keeps pivotal-creditor detection linear per class.

Percentages are taken over present creditors who voted FAVOR or AGAINST;
abstentions count as present but stay out of the denominator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from core.schema import QUORUM_BASIS, QUORUM_RULE_TEXT, CreditorClass, QuorumBasis, Vote
from core.utils import ratio_pct, strict_majority

from .models import ClassQuorumResult, Creditor


def decide_class(
    creditor_class: CreditorClass,
    *,
    present: int,
    favor: int,
    against: int,
    favor_value: int,
    against_value: int,
) -> Optional[bool]:
    """Statutory outcome for one class. None when nobody is present."""
    if present == 0:
        return None
    by_head = strict_majority(favor, favor + against)
    if QUORUM_BASIS[creditor_class] is QuorumBasis.HEAD:
        return by_head
    return by_head and strict_majority(favor_value, favor_value + against_value)


@dataclass
class ClassTally:
    creditor_class: CreditorClass
    total: int = 0
    present: int = 0
    favor: int = 0
    against: int = 0
    favor_value: int = 0
    against_value: int = 0
    present_value: int = 0

    @classmethod
    def from_creditors(cls, creditor_class: CreditorClass, creditors: Iterable[Creditor]) -> "ClassTally":
        tally = cls(creditor_class)
        for c in creditors:
            if c.creditor_class is creditor_class:
                tally.add(c)
        return tally

    def add(self, c: Creditor) -> None:
        self.total += 1
        if not c.present_at_assembly:
            return
        self.present += 1
        self.present_value += c.value
        if c.vote is Vote.FAVOR:
            self.favor += 1
            self.favor_value += c.value
        elif c.vote is Vote.AGAINST:
            self.against += 1
            self.against_value += c.value

    @property
    def abstain(self) -> int:
        return self.present - self.favor - self.against

    def approved(self) -> Optional[bool]:
        return decide_class(
            self.creditor_class,
            present=self.present,
            favor=self.favor,
            against=self.against,
            favor_value=self.favor_value,
            against_value=self.against_value,
        )

    def approved_if_flipped(self, c: Creditor) -> Optional[bool]:
        """Outcome if `c` (present, FAVOR/AGAINST, already tallied) voted the other way."""
        if c.vote is Vote.FAVOR:
            d_heads, d_value = -1, -c.value
        elif c.vote is Vote.AGAINST:
            d_heads, d_value = 1, c.value
        else:
            raise ValueError(f"creditor {c.id} did not cast a FAVOR/AGAINST vote")
        return decide_class(
            self.creditor_class,
            present=self.present,
            favor=self.favor + d_heads,
            against=self.against - d_heads,
            favor_value=self.favor_value + d_value,
            against_value=self.against_value - d_value,
        )

    def to_result(self) -> ClassQuorumResult:
        return ClassQuorumResult(
            creditor_class=self.creditor_class,
            total_creditors=self.total,
            present_count=self.present,
            favor_count=self.favor,
            against_count=self.against,
            abstain_count=self.abstain,
            favor_value=self.favor_value,
            against_value=self.against_value,
            present_value=self.present_value,
            quorum_by_head=ratio_pct(self.favor, self.favor + self.against),
            quorum_by_value=ratio_pct(self.favor_value, self.favor_value + self.against_value),
            approved=self.approved(),
            rule=QUORUM_RULE_TEXT[QUORUM_BASIS[self.creditor_class]],
        )


def calculate_class_quorum(creditor_class: CreditorClass, creditors: Iterable[Creditor]) -> ClassQuorumResult:
    """Quorum for one class over an already-effective creditor view."""
    return ClassTally.from_creditors(creditor_class, creditors).to_result()
