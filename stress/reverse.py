"""
Reverse stress test — how far can one driver fall before coverage breaks?

For each driver we bisect over [base - span, base], span = max(|base|, floor),
for the value at which the minimum DSCR across all years crosses 1.0 from
above. The bracket keeps min DSCR >= 1.0 at its upper end and < 1.0 at its
lower end. The search is deterministic and bounded: it stops after
reverse_max_iterations halvings, when the midpoint's min DSCR is within
reverse_dscr_tolerance of 1.0, or when the bracket is narrower than
reverse_bracket_tolerance of the driver's unit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from core.config import DEFAULT_CONFIG, EngineConfig
from core.utils import to_cents, to_decimal
from engine.params import ProjectionParams
from engine.projection import run_projection

logger = logging.getLogger(__name__)

BRACKETED = "BRACKETED"
ALREADY_BREACHED = "ALREADY_BREACHED"
NOT_BREACHED = "NOT_BREACHED"


@dataclass(frozen=True)
class ReverseVariable:
    key: str
    label: str
    unit: str
    get: Callable[[ProjectionParams], float]
    set: Callable[[ProjectionParams, float], ProjectionParams]
    # absolute floor for the search span (driver units); 0 = pure -100% of base
    min_span: Callable[[EngineConfig], float]
    # one "unit" of the driver, for the bracket tolerance
    unit_size: Callable[[float], float]


REVERSE_VARIABLES: Tuple[ReverseVariable, ...] = (
    ReverseVariable(
        key="revenue",
        label="Revenue",
        unit="cents",
        get=lambda p: float(p.base_revenue),
        set=lambda p, x: p.with_changes(base_revenue=to_cents(x)),
        min_span=lambda cfg: 0.0,
        unit_size=lambda base: abs(base) / 100.0,  # 1% of base revenue
    ),
    ReverseVariable(
        key="margin",
        label="EBITDA margin",
        unit="pp",
        get=lambda p: float(p.ebitda_margin_pct),
        set=lambda p, x: p.with_changes(ebitda_margin_pct=to_decimal(x)),
        min_span=lambda cfg: cfg.reverse_min_span_margin_pp,
        unit_size=lambda base: 1.0,
    ),
    ReverseVariable(
        key="growth",
        label="Growth rate",
        unit="pp",
        get=lambda p: float(p.growth_rate_pct),
        set=lambda p, x: p.with_changes(growth_rate_pct=to_decimal(x)),
        min_span=lambda cfg: cfg.reverse_min_span_growth_pp,
        unit_size=lambda base: 1.0,
    ),
)


@dataclass(frozen=True)
class ReverseStressResult:
    variable: str
    label: str
    unit: str
    base_value: float
    breakpoint: Optional[float]
    distance: Optional[float]        # breakpoint - base, driver units
    safety_margin: Optional[float]   # |breakpoint - base| / |base| * 100
    min_dscr_at_breakpoint: Optional[float]
    iterations: int
    status: str


def _safety_margin(breakpoint: float, base: float) -> Optional[float]:
    if base == 0:
        return None
    return abs(breakpoint - base) / abs(base) * 100.0


def find_breakpoint(
    params: ProjectionParams,
    variable: ReverseVariable,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ReverseStressResult:
    target = config.dscr_alert
    base = variable.get(params)
    cache: Dict[float, float] = {}

    def min_dscr(x: float) -> float:
        if x not in cache:
            cache[x] = run_projection(variable.set(params, x), config).min_dscr
        return cache[x]

    def result(bp: Optional[float], dscr: Optional[float], iterations: int, status: str):
        return ReverseStressResult(
            variable=variable.key,
            label=variable.label,
            unit=variable.unit,
            base_value=base,
            breakpoint=bp,
            distance=None if bp is None else bp - base,
            safety_margin=None if bp is None else _safety_margin(bp, base),
            min_dscr_at_breakpoint=dscr,
            iterations=iterations,
            status=status,
        )

    cache[base] = run_projection(params, config).min_dscr
    base_dscr = cache[base]
    if base_dscr < target:
        logger.warning("%s: base case already below DSCR %.2f (%.3f)", variable.label, target, base_dscr)
        return result(base, base_dscr, 0, ALREADY_BREACHED)

    span = max(abs(base), variable.min_span(config))
    lo, hi = base - span, base
    # revenue cannot go below zero, rates not below -100%
    lo = max(lo, 0.0 if variable.key == "revenue" else -100.0)
    if min_dscr(lo) >= target:
        return result(None, None, 0, NOT_BREACHED)

    bracket_tol = config.reverse_bracket_tolerance * variable.unit_size(base)
    breakpoint, iterations = None, 0
    while iterations < config.reverse_max_iterations:
        iterations += 1
        mid = (lo + hi) / 2.0
        d = min_dscr(mid)
        if d >= target:
            hi = mid
        else:
            lo = mid
        if abs(d - target) <= config.reverse_dscr_tolerance:
            breakpoint = mid
            break
        if hi - lo <= bracket_tol:
            break

    if breakpoint is None:
        breakpoint = hi
    logger.debug(
        "%s breakpoint %.4f after %d iterations (base %.4f)",
        variable.label, breakpoint, iterations, base,
    )
    return result(breakpoint, min_dscr(breakpoint), iterations, BRACKETED)


def run_reverse_stress(
    params: ProjectionParams,
    variables: Tuple[ReverseVariable, ...] = REVERSE_VARIABLES,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[ReverseStressResult]:
    return [find_breakpoint(params, v, config) for v in variables]
