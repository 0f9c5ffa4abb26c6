"""
Voting data model — creditor snapshot (input) and simulation results (output).

Creditors and overrides are frozen pydantic models: the ledger snapshot is
validated once at the boundary and never mutated. Results are plain
dataclasses, like the rest of the engine's outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.errors import InputInconsistency
from core.schema import CLASS_ORDER, CreditorClass, Vote
from core.utils import coerce_cents


class Creditor(BaseModel):
    """One row of the creditor ledger (quadro geral de credores)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = ""
    creditor_class: CreditorClass = Field(alias="class")
    value: int = Field(ge=0, description="Updated claim value in integer cents")
    vote: Optional[Vote] = None
    present_at_assembly: bool = False
    subclass_id: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def _value_is_cents(cls, v):
        return coerce_cents(v)

    @property
    def casts_vote(self) -> bool:
        """Present and voted FAVOR or AGAINST."""
        return self.present_at_assembly and self.vote in (Vote.FAVOR, Vote.AGAINST)


class VoteOverride(BaseModel):
    """
    Partial what-if overlay for one creditor.

    Fields left unset keep the ledger value. `vote=None` given explicitly clears
    the vote (the creditor then counts as abstaining if present).
    """

    model_config = ConfigDict(frozen=True)

    vote: Optional[Vote] = None
    present_at_assembly: Optional[bool] = None

    def apply(self, creditor: Creditor) -> Creditor:
        update = {}
        if "vote" in self.model_fields_set:
            update["vote"] = self.vote
        if self.present_at_assembly is not None:
            update["present_at_assembly"] = self.present_at_assembly
        if not update:
            return creditor
        return creditor.model_copy(update=update)


OverrideMap = Mapping[str, VoteOverride]


@dataclass(frozen=True)
class ClassQuorumResult:
    creditor_class: CreditorClass
    total_creditors: int
    present_count: int
    favor_count: int
    against_count: int
    abstain_count: int
    favor_value: int
    against_value: int
    present_value: int
    quorum_by_head: float   # % of voting present heads in favor
    quorum_by_value: float  # % of voting present value in favor
    approved: Optional[bool]  # None when nobody from the class is present
    rule: str

    @property
    def voting_count(self) -> int:
        return self.favor_count + self.against_count

    @property
    def voting_value(self) -> int:
        return self.favor_value + self.against_value


@dataclass(frozen=True)
class Requirement:
    id: str
    description: str
    satisfied: bool
    detail: str


@dataclass
class CramDownAnalysis:
    eligible: bool
    applicable: bool
    requirements: List[Requirement] = field(default_factory=list)
    blockers: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PivotalCreditor:
    id: str
    name: str
    creditor_class: CreditorClass
    value: int
    impact: str  # WOULD_APPROVE | WOULD_REJECT
    reason: str


@dataclass(frozen=True)
class VotingSummary:
    total_creditors: int
    total_present: int
    total_present_value: int


@dataclass
class VotingResult:
    by_class: Dict[CreditorClass, ClassQuorumResult]
    plan_approved: bool
    approved_class_count: int
    rejected_class_count: int
    cram_down: CramDownAnalysis
    pivotal_creditors: List[PivotalCreditor]
    summary: VotingSummary
    inconsistencies: List[InputInconsistency] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per class, in assembly order."""
        rows = []
        for cls in CLASS_ORDER:
            r = self.by_class[cls]
            rows.append({
                "class": cls.value,
                "total": r.total_creditors,
                "present": r.present_count,
                "favor": r.favor_count,
                "against": r.against_count,
                "abstain": r.abstain_count,
                "quorum_by_head_pct": r.quorum_by_head,
                "quorum_by_value_pct": r.quorum_by_value,
                "approved": r.approved,
            })
        return pd.DataFrame(rows)
