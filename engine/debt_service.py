"""
Yearly debt-service schedule estimated from the plan's payment terms per creditor.

Each claim is reduced by its haircut (deságio), split into equal monthly
installments that start after the grace period (carência), and every payment
is bucketed into its projection year. Payments past the horizon are dropped.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.errors import ValidationError
from core.utils import coerce_cents, pct, to_cents

logger = logging.getLogger(__name__)


class PaymentTerm(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0)          # claim, cents
    haircut_pct: Decimal = Field(default=Decimal(0), ge=0, le=100)
    installments: int = Field(default=1, ge=1)
    grace_months: int = Field(default=0, ge=0)

    @field_validator("value", mode="before")
    @classmethod
    def _value_cents(cls, v):
        return coerce_cents(v)

    @field_validator("haircut_pct", "installments", "grace_months", mode="before")
    @classmethod
    def _none_is_default(cls, v, info):
        # ledger rows carry nulls for "not negotiated"
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


def estimate_debt_service(terms: Iterable[PaymentTerm], years: int) -> List[int]:
    """
    Debt service per projection year, in cents.

    Month m (1-based, counted from plan approval) falls in year (m - 1) // 12 + 1.
    """
    if years < 1:
        raise ValidationError(f"years must be positive, got {years}")

    schedule = [0] * years
    dropped = 0
    for term in terms:
        total = to_cents(Decimal(term.value) * (1 - pct(term.haircut_pct)))
        installment, remainder = divmod(total, term.installments)
        for i in range(term.installments):
            month = term.grace_months + i + 1
            amount = installment + (remainder if i == term.installments - 1 else 0)
            year_index = (month - 1) // 12
            if year_index < years:
                schedule[year_index] += amount
            else:
                dropped += amount

    if dropped:
        logger.debug("debt service beyond %d-year horizon dropped: %d cents", years, dropped)
    return schedule
