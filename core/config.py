"""
Engine configuration.
Thresholds and search bounds shared by projection, stress and sensitivity.
Statutory quorum rules are NOT configurable and live in core/schema.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EngineConfig:
    # DSCR status bands
    dscr_healthy: float = 1.2
    dscr_alert: float = 1.0

    # reported in place of FCF / 0 when a year has no debt service
    dscr_cap: float = 100.0

    # straight-line depreciation of prior-year capex
    useful_life_years: int = 10

    # sensitivity sweep, in % of the base parameter
    sensitivity_variations: Tuple[int, ...] = (-30, -20, -10, 0, 10, 20, 30)

    # reverse stress (bisection)
    reverse_max_iterations: int = 40
    reverse_dscr_tolerance: float = 0.01
    reverse_bracket_tolerance: float = 0.01
    # widen the search below a near-zero base (percentage points)
    reverse_min_span_margin_pp: float = 20.0
    reverse_min_span_growth_pp: float = 15.0

    @property
    def dscr_cap_label(self) -> str:
        return f"> {self.dscr_cap:.0f}x"


DEFAULT_CONFIG = EngineConfig()
