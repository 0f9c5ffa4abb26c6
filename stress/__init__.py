"""
Stress testing — named adverse scenarios and reverse stress (breakpoint search),
both built on repeated runs of the projection engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig
from engine.params import ProjectionParams, validate_params

from .scenarios import ADVERSE_SCENARIOS, ScenarioDelta, StressScenario, run_stress_scenarios
from .reverse import (
    ALREADY_BREACHED,
    BRACKETED,
    NOT_BREACHED,
    REVERSE_VARIABLES,
    ReverseStressResult,
    find_breakpoint,
    run_reverse_stress,
)


@dataclass
class StressTestReport:
    stress_tests: List[StressScenario] = field(default_factory=list)
    reverse_stress: List[ReverseStressResult] = field(default_factory=list)

    @property
    def all_viable(self) -> bool:
        return all(s.viable for s in self.stress_tests)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([
            {
                "scenario": s.name,
                "min_dscr": s.min_dscr,
                "min_free_cash_flow": s.min_free_cash_flow,
                "years_negative": s.years_negative,
                "viable": s.viable,
            }
            for s in self.stress_tests
        ])

    def reverse_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([vars(r) for r in self.reverse_stress])


def run_stress_test(
    params: ProjectionParams,
    config: EngineConfig = DEFAULT_CONFIG,
) -> StressTestReport:
    """Adverse scenarios + reverse stress for revenue, margin and growth."""
    validate_params(params)
    return StressTestReport(
        stress_tests=run_stress_scenarios(params, config=config),
        reverse_stress=run_reverse_stress(params, config=config),
    )


__all__ = [
    "ADVERSE_SCENARIOS",
    "ScenarioDelta",
    "StressScenario",
    "run_stress_scenarios",
    "ALREADY_BREACHED",
    "BRACKETED",
    "NOT_BREACHED",
    "REVERSE_VARIABLES",
    "ReverseStressResult",
    "find_breakpoint",
    "run_reverse_stress",
    "StressTestReport",
    "run_stress_test",
]
