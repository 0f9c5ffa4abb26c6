"""
Named adverse scenarios — fixed parameter deltas applied to the base case.

Each scenario is one independent projection run; a scenario is viable when
the minimum DSCR across all projected years stays at or above 1.0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from core.config import DEFAULT_CONFIG, EngineConfig
from core.utils import to_cents, to_decimal
from engine.params import ProjectionParams
from engine.projection import run_projection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioDelta:
    """
    Parameter shock. Applied in order: revenue factor, margin delta (floored at
    0%), growth override or growth delta (optionally floored).
    """

    name: str
    description: str
    revenue_factor: Decimal = Decimal(1)
    margin_delta_pp: Decimal = Decimal(0)
    growth_delta_pp: Decimal = Decimal(0)
    growth_override_pct: Optional[Decimal] = None
    growth_floor_pct: Optional[Decimal] = None

    def apply(self, params: ProjectionParams) -> ProjectionParams:
        margin = params.ebitda_margin_pct
        if self.margin_delta_pp:
            margin = max(Decimal(0), margin + self.margin_delta_pp)

        if self.growth_override_pct is not None:
            growth = self.growth_override_pct
        else:
            growth = params.growth_rate_pct + self.growth_delta_pp
            if self.growth_floor_pct is not None:
                growth = max(self.growth_floor_pct, growth)

        return params.with_changes(
            base_revenue=to_cents(to_decimal(params.base_revenue) * self.revenue_factor),
            ebitda_margin_pct=margin,
            growth_rate_pct=growth,
        )


ADVERSE_SCENARIOS: Tuple[ScenarioDelta, ...] = (
    ScenarioDelta(
        name="Revenue -20%",
        description="Revenue falls 20% against the base case",
        revenue_factor=Decimal("0.8"),
    ),
    ScenarioDelta(
        name="Margin -5pp",
        description="EBITDA margin compresses by 5 percentage points",
        margin_delta_pp=Decimal(-5),
    ),
    ScenarioDelta(
        name="Stagnation (0% growth)",
        description="Revenue does not grow over the plan horizon",
        growth_override_pct=Decimal(0),
    ),
    ScenarioDelta(
        name="Recession (-10% revenue, -3pp margin)",
        description="Combined revenue drop, margin compression and slower growth",
        revenue_factor=Decimal("0.9"),
        margin_delta_pp=Decimal(-3),
        growth_delta_pp=Decimal(-3),
        growth_floor_pct=Decimal(-5),
    ),
    ScenarioDelta(
        name="Extreme (-30% revenue, -8pp margin)",
        description="Severe prolonged downturn",
        revenue_factor=Decimal("0.7"),
        margin_delta_pp=Decimal(-8),
        growth_override_pct=Decimal(-5),
    ),
)


@dataclass(frozen=True)
class StressScenario:
    name: str
    description: str
    params: ProjectionParams
    viable: bool
    min_dscr: float
    min_free_cash_flow: int
    years_negative: int


def run_scenario(
    delta: ScenarioDelta,
    base: ProjectionParams,
    config: EngineConfig = DEFAULT_CONFIG,
) -> StressScenario:
    stressed = delta.apply(base)
    projection = run_projection(stressed, config)
    min_dscr = projection.min_dscr
    return StressScenario(
        name=delta.name,
        description=delta.description,
        params=stressed,
        viable=min_dscr >= config.dscr_alert,
        min_dscr=min_dscr,
        min_free_cash_flow=projection.min_free_cash_flow,
        years_negative=projection.years_negative,
    )


def run_stress_scenarios(
    base: ProjectionParams,
    scenarios: Sequence[ScenarioDelta] = ADVERSE_SCENARIOS,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[StressScenario]:
    results = [run_scenario(s, base, config) for s in scenarios]
    logger.debug(
        "stress scenarios: %d run, %d viable",
        len(results), sum(1 for r in results if r.viable),
    )
    return results
