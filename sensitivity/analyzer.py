"""
Sensitivity sweep: one driver at a time, symmetric % variations around the base.

Each point is an independent projection; the rows of a sweep are ordered by
variation and feed tornado/line charts directly. The 0% point is the base
case itself (params passed through untouched), so it matches run_projection
on the base parameters exactly. Perturbed drivers are clamped to the range
validate_params accepts (revenue at 0, margin and growth at -100%).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig
from core.utils import pct, to_cents, to_decimal
from engine.params import MIN_RATE_PCT, ProjectionParams, validate_params
from engine.projection import run_projection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensitivityVariable:
    """
    key:   report attribute ("revenue", "margin", "growth")
    label: chart label
    apply: params, variation % -> perturbed params
    """
    key: str
    label: str
    apply: Callable[[ProjectionParams, Decimal], ProjectionParams]


def _vary_revenue(p: ProjectionParams, v: Decimal) -> ProjectionParams:
    return p.with_changes(base_revenue=max(0, to_cents(to_decimal(p.base_revenue) * (1 + pct(v)))))


def _vary_margin(p: ProjectionParams, v: Decimal) -> ProjectionParams:
    return p.with_changes(ebitda_margin_pct=max(MIN_RATE_PCT, p.ebitda_margin_pct * (1 + pct(v))))


def _vary_growth(p: ProjectionParams, v: Decimal) -> ProjectionParams:
    # growth moves in percentage points: +10% variation = +1pp
    return p.with_changes(growth_rate_pct=max(MIN_RATE_PCT, p.growth_rate_pct + v / 10))


SENSITIVITY_VARIABLES: Tuple[SensitivityVariable, ...] = (
    SensitivityVariable("revenue", "Revenue", _vary_revenue),
    SensitivityVariable("margin", "EBITDA margin", _vary_margin),
    SensitivityVariable("growth", "Growth rate", _vary_growth),
)


@dataclass(frozen=True)
class SensitivityPoint:
    variable: str
    variation_pct: float
    avg_dscr: float
    npv: int  # cents
    approved: bool


@dataclass
class SensitivityReport:
    revenue: List[SensitivityPoint] = field(default_factory=list)
    margin: List[SensitivityPoint] = field(default_factory=list)
    growth: List[SensitivityPoint] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [vars(p) for p in self.revenue + self.margin + self.growth]
        return pd.DataFrame(rows, columns=["variable", "variation_pct", "avg_dscr", "npv", "approved"])


def sweep(
    params: ProjectionParams,
    variable: SensitivityVariable,
    variations: Sequence[float],
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[SensitivityPoint]:
    points = []
    for v in sorted(variations):
        dv = to_decimal(v)
        varied = params if dv == 0 else variable.apply(params, dv)
        projection = run_projection(varied, config)
        avg = projection.avg_dscr
        points.append(SensitivityPoint(
            variable=variable.key,
            variation_pct=float(v),
            avg_dscr=avg,
            npv=projection.npv(),
            approved=avg >= config.dscr_alert,
        ))
    return points


def run_sensitivity(
    params: ProjectionParams,
    variations: Optional[Sequence[float]] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> SensitivityReport:
    """Sweep revenue, EBITDA margin and growth; one ordered series per driver."""
    validate_params(params)
    if variations is None:
        variations = config.sensitivity_variations

    report = SensitivityReport()
    for variable in SENSITIVITY_VARIABLES:
        setattr(report, variable.key, sweep(params, variable, variations, config))
    logger.debug("sensitivity: %d variables x %d points", len(SENSITIVITY_VARIABLES), len(variations))
    return report
