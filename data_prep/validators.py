"""
Data quality validation for creditor ledgers before they go to a vote.

Catches problems early:
- Duplicate creditor ids (blocking: overrides would be ambiguous)
- Negative or non-integer claim values
- Unknown classes / votes in raw rows
- Votes recorded for absent creditors, present creditors with no vote
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from core.schema import Vote
from voting.models import Creditor


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a ledger."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    creditors: List[Creditor] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_ledger(rows: Sequence[Union[Creditor, Mapping[str, Any]]]) -> ValidationResult:
    """
    Run all validation checks on a creditor ledger.
    Rows may be Creditor models or raw mappings (e.g. straight from the ledger API).
    Returns a ValidationResult with errors (blocking) and warnings (informational);
    rows that parse are collected in result.creditors.
    """
    result = ValidationResult()

    if len(rows) == 0:
        result.errors.append("Ledger is empty (0 creditors).")
        return result

    # --- Schema ---
    for i, row in enumerate(rows):
        if isinstance(row, Creditor):
            result.creditors.append(row)
            continue
        try:
            result.creditors.append(Creditor.model_validate(row))
        except PydanticValidationError as exc:
            ident = row.get("id", f"row {i}") if isinstance(row, Mapping) else f"row {i}"
            for err in exc.errors():
                loc = ".".join(str(p) for p in err["loc"])
                result.errors.append(f"{ident}: {loc}: {err['msg']}")

    creditors = result.creditors

    # --- Ids ---
    seen, dup = set(), set()
    for c in creditors:
        if c.id in seen:
            dup.add(c.id)
        seen.add(c.id)
    if dup:
        result.errors.append(f"{len(dup)} duplicate creditor ids: {sorted(dup)}")

    # --- Values ---
    n_zero = sum(1 for c in creditors if c.value == 0)
    if n_zero > 0:
        result.warnings.append(f"{n_zero} creditors have a zero claim value.")

    # --- Votes vs presence ---
    n_absent_voted = sum(1 for c in creditors if not c.present_at_assembly and c.vote is not None)
    if n_absent_voted > 0:
        result.warnings.append(
            f"{n_absent_voted} absent creditors have a recorded vote — it will be ignored."
        )
    n_present_silent = sum(1 for c in creditors if c.present_at_assembly and c.vote is None)
    if n_present_silent > 0:
        result.warnings.append(
            f"{n_present_silent} present creditors have no vote — counted as abstaining."
        )
    n_abstain = sum(1 for c in creditors if c.present_at_assembly and c.vote is Vote.ABSTAIN)
    if n_abstain > 0:
        result.warnings.append(f"{n_abstain} present creditors abstained.")

    return result
