"""
Projection parameters.

Rates are percentages held as Decimal so a perturbation of 0% reproduces the
base case bit-for-bit. Money is integer cents. Range checks are done by
validate_params() so every caller gets the engine's ValidationError.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, field_validator

from core.errors import ValidationError
from core.utils import coerce_cents, to_decimal

logger = logging.getLogger(__name__)

MIN_YEARS = 1
MAX_YEARS = 20

# growth and EBITDA margin cannot fall below -100%
MIN_RATE_PCT = Decimal(-100)

RATE_FIELDS = (
    "growth_rate_pct",
    "ebitda_margin_pct",
    "capex_pct",
    "working_capital_pct",
    "discount_rate_pct",
    "tax_rate_pct",
)


class ProjectionParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    years: int
    base_revenue: int  # cents
    growth_rate_pct: Decimal = Decimal(0)
    ebitda_margin_pct: Decimal = Decimal(0)
    capex_pct: Decimal = Decimal(0)
    working_capital_pct: Decimal = Decimal(0)
    discount_rate_pct: Decimal = Decimal(0)
    tax_rate_pct: Decimal = Decimal(0)
    debt_service_schedule: List[int] = []  # cents per projected year

    @field_validator("base_revenue", mode="before")
    @classmethod
    def _revenue_cents(cls, v):
        return coerce_cents(v)

    @field_validator("debt_service_schedule", mode="before")
    @classmethod
    def _schedule_cents(cls, v):
        if not isinstance(v, (list, tuple)):
            raise ValueError(f"debt_service_schedule must be a list of cents, got {type(v).__name__}")
        return [coerce_cents(x) for x in v]

    @field_validator(*RATE_FIELDS, mode="before")
    @classmethod
    def _rate_decimal(cls, v):
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return to_decimal(v)
        return v

    def with_changes(self, **changes: Any) -> "ProjectionParams":
        """Perturbed copy, re-validated through the model."""
        data: Dict[str, Any] = self.model_dump()
        data.update(changes)
        return ProjectionParams.model_validate(data)


def validate_params(params: ProjectionParams) -> None:
    """Raise ValidationError listing every problem found."""
    errors: List[str] = []

    if not MIN_YEARS <= params.years <= MAX_YEARS:
        errors.append(f"years must be within [{MIN_YEARS}, {MAX_YEARS}], got {params.years}")
    if params.base_revenue < 0:
        errors.append(f"base_revenue must be non-negative, got {params.base_revenue}")
    if params.growth_rate_pct < MIN_RATE_PCT:
        errors.append(
            f"growth_rate_pct of {params.growth_rate_pct}% would make revenue negative"
        )
    if params.ebitda_margin_pct < MIN_RATE_PCT:
        errors.append(f"ebitda_margin_pct below -100% ({params.ebitda_margin_pct})")
    for name in ("capex_pct", "working_capital_pct", "discount_rate_pct", "tax_rate_pct"):
        value = getattr(params, name)
        if value < 0:
            errors.append(f"{name} must be non-negative, got {value}")

    schedule = params.debt_service_schedule
    if MIN_YEARS <= params.years <= MAX_YEARS and len(schedule) < params.years:
        errors.append(
            f"debt_service_schedule has {len(schedule)} entries for {params.years} years"
        )
    negative = [i + 1 for i, x in enumerate(schedule) if x < 0]
    if negative:
        errors.append(f"debt_service_schedule has negative entries in years {negative}")

    if errors:
        logger.debug("projection params rejected: %s", errors)
        raise ValidationError("; ".join(errors), errors=errors)
