"""
Projection engine — yearly DRE (income statement) → free cash flow → DSCR.

The recurrence is carried in Decimal and every reported amount is quantized
to integer cents (half away from zero). Year 1 uses base_revenue; the base
year (t = 0) supplies prior revenue and prior capex:

  revenue[t]      = revenue[t-1] * (1 + growth)            t >= 2
  ebitda[t]       = revenue[t] * margin
  depreciation[t] = capex[t-1] / useful_life               capex[0] = revenue[0] * capex%
  ebit[t]         = ebitda[t] - depreciation[t]
  taxes[t]        = max(0, ebit[t]) * tax_rate
  capex[t]        = revenue[t] * capex%
  wc_delta[t]     = (revenue[t] - revenue[t-1]) * wc%
  fcf[t]          = ebitda[t] - taxes[t] - capex[t] - wc_delta[t]
  dscr[t]         = fcf[t] / debt_service[t]               capped when debt_service[t] == 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

import numpy as np
import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig
from core.schema import DscrStatus
from core.utils import pct, ratio_pct, to_cents, to_decimal

from .params import ProjectionParams, validate_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearlyDRE:
    year: int
    revenue: int
    costs_and_expenses: int
    ebitda: int
    depreciation: int
    ebit: int
    taxes: int
    net_income: int
    ebitda_margin_pct: float
    net_margin_pct: float


@dataclass(frozen=True)
class YearlyCashFlow:
    year: int
    ebitda: int
    taxes: int
    capex: int
    working_capital_delta: int
    free_cash_flow: int
    accumulated_free_cash_flow: int
    debt_service: int
    cash_flow_after_debt: int


@dataclass(frozen=True)
class YearlyDSCR:
    year: int
    free_cash_flow: int
    debt_service: int
    dscr: float
    capped: bool  # no debt service (or ratio above the cap): dscr holds the cap
    status: DscrStatus
    label: str


def dscr_status(dscr: float, config: EngineConfig = DEFAULT_CONFIG) -> DscrStatus:
    if dscr < config.dscr_alert:
        return DscrStatus.CRITICAL
    if dscr < config.dscr_healthy:
        return DscrStatus.ALERT
    return DscrStatus.HEALTHY


def coverage(free_cash_flow: int, debt_service: int, year: int,
             config: EngineConfig = DEFAULT_CONFIG) -> YearlyDSCR:
    if debt_service == 0 or free_cash_flow / debt_service > config.dscr_cap:
        value, capped, label = config.dscr_cap, True, config.dscr_cap_label
    else:
        value = free_cash_flow / debt_service
        capped, label = False, f"{value:.2f}x"
    return YearlyDSCR(
        year=year,
        free_cash_flow=free_cash_flow,
        debt_service=debt_service,
        dscr=value,
        capped=capped,
        status=dscr_status(value, config),
        label=label,
    )


@dataclass
class Projection:
    params: ProjectionParams
    dre: List[YearlyDRE] = field(default_factory=list)
    cash_flow: List[YearlyCashFlow] = field(default_factory=list)
    dscr: List[YearlyDSCR] = field(default_factory=list)

    @property
    def dscr_values(self) -> np.ndarray:
        return np.array([d.dscr for d in self.dscr], dtype=float)

    @property
    def min_dscr(self) -> float:
        return float(self.dscr_values.min())

    @property
    def avg_dscr(self) -> float:
        return float(self.dscr_values.mean())

    @property
    def min_free_cash_flow(self) -> int:
        return min(c.free_cash_flow for c in self.cash_flow)

    @property
    def years_negative(self) -> int:
        """Years with negative free cash flow."""
        return sum(1 for c in self.cash_flow if c.free_cash_flow < 0)

    def npv(self, discount_rate_pct: Optional[Decimal] = None) -> int:
        """Σ FCF_t / (1 + r)^t for t = 1..years, in cents."""
        rate = pct(self.params.discount_rate_pct if discount_rate_pct is None else discount_rate_pct)
        factor = Decimal(1) + rate
        total = Decimal(0)
        for c in self.cash_flow:
            total += Decimal(c.free_cash_flow) / factor ** c.year
        return to_cents(total)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per year: DRE, cash flow and DSCR side by side."""
        dre = pd.DataFrame([vars(d) for d in self.dre])
        cf = pd.DataFrame([vars(c) for c in self.cash_flow]).drop(columns=["ebitda", "taxes"])
        cov = pd.DataFrame([
            {"year": d.year, "dscr": d.dscr, "dscr_label": d.label, "dscr_status": d.status.value}
            for d in self.dscr
        ])
        return dre.merge(cf, on="year").merge(cov, on="year")


def run_projection(
    params: ProjectionParams,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Projection:
    """
    Project DRE, cash flow and DSCR for params.years years.

    Raises
    ------
    ValidationError
        Out-of-range years, negative money, impossible rates, short/negative
        debt-service schedule.
    """
    validate_params(params)

    growth = pct(params.growth_rate_pct)
    margin = pct(params.ebitda_margin_pct)
    capex_rate = pct(params.capex_pct)
    wc_rate = pct(params.working_capital_pct)
    tax_rate = pct(params.tax_rate_pct)
    useful_life = Decimal(config.useful_life_years)

    base = to_decimal(params.base_revenue)
    prev_revenue = base
    prev_capex = base * capex_rate
    accumulated = 0

    projection = Projection(params=params)
    for year in range(1, params.years + 1):
        revenue = base if year == 1 else prev_revenue * (1 + growth)
        ebitda = revenue * margin
        depreciation = prev_capex / useful_life
        ebit = ebitda - depreciation
        taxes = max(Decimal(0), ebit) * tax_rate
        net_income = ebit - taxes
        capex = revenue * capex_rate
        wc_delta = (revenue - prev_revenue) * wc_rate
        fcf = ebitda - taxes - capex - wc_delta

        revenue_c = to_cents(revenue)
        ebitda_c = to_cents(ebitda)
        taxes_c = to_cents(taxes)
        net_income_c = to_cents(net_income)
        fcf_c = to_cents(fcf)
        debt_service = params.debt_service_schedule[year - 1]
        accumulated += fcf_c

        projection.dre.append(YearlyDRE(
            year=year,
            revenue=revenue_c,
            costs_and_expenses=revenue_c - ebitda_c,
            ebitda=ebitda_c,
            depreciation=to_cents(depreciation),
            ebit=to_cents(ebit),
            taxes=taxes_c,
            net_income=net_income_c,
            ebitda_margin_pct=float(params.ebitda_margin_pct) if revenue > 0 else 0.0,
            net_margin_pct=ratio_pct(net_income_c, revenue_c) if revenue_c > 0 else 0.0,
        ))
        projection.cash_flow.append(YearlyCashFlow(
            year=year,
            ebitda=ebitda_c,
            taxes=taxes_c,
            capex=to_cents(capex),
            working_capital_delta=to_cents(wc_delta),
            free_cash_flow=fcf_c,
            accumulated_free_cash_flow=accumulated,
            debt_service=debt_service,
            cash_flow_after_debt=fcf_c - debt_service,
        ))
        projection.dscr.append(coverage(fcf_c, debt_service, year, config))

        prev_revenue = revenue
        prev_capex = capex

    logger.debug(
        "projection: %d years, min DSCR %.3f, avg DSCR %.3f",
        params.years, projection.min_dscr, projection.avg_dscr,
    )
    return projection
