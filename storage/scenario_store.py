"""
Named what-if scenarios (vote-override sets) per case.

A thin in-memory store: plain CRUD, independent of the simulator. Callers
load a scenario's overrides and pass them to simulate_voting themselves.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

from core.errors import ScenarioNotFound, ValidationError
from voting.models import VoteOverride, VotingResult

logger = logging.getLogger(__name__)

SCENARIO_KINDS = ("BASE", "OPTIMISTIC", "PESSIMISTIC", "CUSTOM")


@dataclass
class SavedScenario:
    id: str
    case_id: str
    name: str
    kind: str
    overrides: Dict[str, VoteOverride]
    description: Optional[str] = None
    plan_approved: Optional[bool] = None
    cram_down_eligible: Optional[bool] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    active: bool = True


class ScenarioStore:
    """
    Usage:
        store = ScenarioStore()
        s = store.save("case-1", "Bank B flips", {"c7": VoteOverride(vote=Vote.FAVOR)})
        simulate_voting(creditors, store.get(s.id).overrides)
    """

    def __init__(self):
        self._scenarios: Dict[str, SavedScenario] = {}
        self._order: Dict[str, int] = {}
        self._seq = 0

    def save(
        self,
        case_id: str,
        name: str,
        overrides: Optional[Mapping[str, VoteOverride]] = None,
        *,
        kind: str = "BASE",
        description: Optional[str] = None,
        result: Optional[VotingResult] = None,
    ) -> SavedScenario:
        if not name or not name.strip():
            raise ValidationError("scenario name must not be empty")
        if kind not in SCENARIO_KINDS:
            raise ValidationError(f"unknown scenario kind {kind!r}; expected one of {SCENARIO_KINDS}")

        scenario = SavedScenario(
            id=uuid.uuid4().hex,
            case_id=case_id,
            name=name.strip(),
            kind=kind,
            overrides=dict(overrides or {}),
            description=description,
            plan_approved=result.plan_approved if result is not None else None,
            cram_down_eligible=result.cram_down.eligible if result is not None else None,
        )
        self._seq += 1
        self._scenarios[scenario.id] = scenario
        self._order[scenario.id] = self._seq
        logger.debug("scenario %s saved for case %s (%d overrides)", scenario.id, case_id, len(scenario.overrides))
        return scenario

    def get(self, scenario_id: str) -> SavedScenario:
        try:
            return self._scenarios[scenario_id]
        except KeyError:
            raise ScenarioNotFound(scenario_id) from None

    def list(self, case_id: str) -> List[SavedScenario]:
        """Active scenarios for a case, newest first."""
        found = [s for s in self._scenarios.values() if s.case_id == case_id and s.active]
        return sorted(found, key=lambda s: self._order[s.id], reverse=True)

    def delete(self, scenario_id: str) -> SavedScenario:
        """Soft delete: the scenario stops being listed but can still be fetched by id."""
        scenario = self.get(scenario_id)
        scenario.active = False
        return scenario
