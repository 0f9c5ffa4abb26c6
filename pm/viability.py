"""
Plan viability decision support — the one place the voting and financial
halves of the engine meet.

Translates simulation outputs into answers the case team can act on:
  Q1: "Does the plan pass the assembly?"      → plan approval / cram-down
  Q2: "Who decides it?"                       → pivotal creditors
  Q3: "Can the company pay what it promises?" → base-case DSCR
  Q4: "What breaks it?"                       → stress scenarios and breakpoints
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from core.config import DEFAULT_CONFIG, EngineConfig
from core.utils import format_cents
from engine.projection import Projection
from stress import BRACKETED, StressTestReport
from voting.models import VotingResult


@dataclass
class ViabilityReport:
    """Structured viability output for one case."""
    case_name: str

    # Assembly
    plan_approved: bool
    cram_down_eligible: bool
    approved_classes: int
    rejected_classes: int
    pivotal_count: int

    # Base case
    min_dscr: float
    avg_dscr: float
    npv: int  # cents
    years_critical: int

    # Stress
    viable_scenarios: int
    total_scenarios: int
    tightest_breakpoint: Optional[str]
    tightest_safety_margin: Optional[float]

    # Flags
    flags: List[str] = field(default_factory=list)

    @property
    def legally_viable(self) -> bool:
        return self.plan_approved or self.cram_down_eligible

    @property
    def financially_viable(self) -> bool:
        return self.min_dscr >= 1.0

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        rows = [
            {"Metric": "Case", "Value": self.case_name, "Unit": ""},
            {"Metric": "Plan Approved", "Value": "Yes" if self.plan_approved else "No", "Unit": ""},
            {"Metric": "Cram-Down Eligible", "Value": "Yes" if self.cram_down_eligible else "No", "Unit": ""},
            {"Metric": "Classes Approving", "Value": f"{self.approved_classes}", "Unit": "classes"},
            {"Metric": "Classes Rejecting", "Value": f"{self.rejected_classes}", "Unit": "classes"},
            {"Metric": "Pivotal Creditors", "Value": f"{self.pivotal_count}", "Unit": "creditors"},
            {"Metric": "Min DSCR", "Value": f"{self.min_dscr:.2f}", "Unit": "x"},
            {"Metric": "Avg DSCR", "Value": f"{self.avg_dscr:.2f}", "Unit": "x"},
            {"Metric": "NPV of Free Cash Flow", "Value": format_cents(self.npv), "Unit": "BRL"},
            {"Metric": "Years Below 1.0x", "Value": f"{self.years_critical}", "Unit": "years"},
            {"Metric": "Viable Stress Scenarios", "Value": f"{self.viable_scenarios}/{self.total_scenarios}", "Unit": ""},
        ]
        if self.tightest_breakpoint is not None:
            rows.append({
                "Metric": "Tightest Driver",
                "Value": self.tightest_breakpoint,
                "Unit": "",
            })
            rows.append({
                "Metric": "Safety Margin",
                "Value": f"{self.tightest_safety_margin:.1f}" if self.tightest_safety_margin is not None else "N/A",
                "Unit": "%",
            })
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)


def generate_viability_report(
    voting: VotingResult,
    projection: Projection,
    stress: Optional[StressTestReport] = None,
    *,
    case_name: str = "Unknown Case",
    config: EngineConfig = DEFAULT_CONFIG,
) -> ViabilityReport:
    """
    Combine an assembly simulation with the financial analysis of the same plan.

    Parameters
    ----------
    voting : VotingResult
        Output of simulate_voting()
    projection : Projection
        Base-case output of run_projection()
    stress : StressTestReport, optional
        Output of run_stress_test(); stress fields are empty when omitted
    """
    stress = stress or StressTestReport()
    min_dscr = projection.min_dscr
    years_critical = sum(1 for d in projection.dscr if d.dscr < config.dscr_alert)

    bracketed = [
        r for r in stress.reverse_stress
        if r.status == BRACKETED and r.safety_margin is not None
    ]
    tightest = min(bracketed, key=lambda r: r.safety_margin) if bracketed else None
    viable = sum(1 for s in stress.stress_tests if s.viable)

    # Flags
    flags = []
    if not voting.plan_approved and not voting.cram_down.eligible:
        flags.append("PLAN_REJECTED: not approved and cram-down requirements unmet")
    elif not voting.plan_approved:
        flags.append("CRAM_DOWN_ONLY: approval depends on judicial cram-down")
    if voting.pivotal_creditors:
        flags.append(f"PIVOTAL_VOTES: {len(voting.pivotal_creditors)} creditor(s) can flip a class")
    if voting.inconsistencies:
        flags.append(f"LEDGER_MISMATCH: {len(voting.inconsistencies)} override(s) name unknown creditors")
    if min_dscr < config.dscr_alert:
        flags.append(f"DSCR_BREACH: base-case min DSCR {min_dscr:.2f}x below {config.dscr_alert:.1f}x")
    elif min_dscr < config.dscr_healthy:
        flags.append(f"THIN_COVERAGE: base-case min DSCR {min_dscr:.2f}x below {config.dscr_healthy:.1f}x")
    if stress.stress_tests and viable < len(stress.stress_tests):
        flags.append(f"STRESS_FAILURES: {len(stress.stress_tests) - viable} adverse scenario(s) break coverage")
    if tightest is not None and tightest.safety_margin < 10.0:
        flags.append(f"LOW_HEADROOM: {tightest.label} breaks within {tightest.safety_margin:.1f}% of base")

    return ViabilityReport(
        case_name=case_name,
        plan_approved=voting.plan_approved,
        cram_down_eligible=voting.cram_down.eligible,
        approved_classes=voting.approved_class_count,
        rejected_classes=voting.rejected_class_count,
        pivotal_count=len(voting.pivotal_creditors),
        min_dscr=min_dscr,
        avg_dscr=projection.avg_dscr,
        npv=projection.npv(),
        years_critical=years_critical,
        viable_scenarios=viable,
        total_scenarios=len(stress.stress_tests),
        tightest_breakpoint=tightest.label if tightest is not None else None,
        tightest_safety_margin=tightest.safety_margin if tightest is not None else None,
        flags=flags,
    )
