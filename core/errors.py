"""
Error taxonomy for the viability engine.

ValidationError       — malformed or out-of-range input, raised at the boundary.
InputInconsistency    — NOT raised; reported alongside a result when an override
                        names a creditor the ledger does not contain.
ScenarioNotFound      — lookup miss in the named-scenario store.

Zero denominators are not errors: see ClassQuorumResult.approved (None) and
YearlyDSCR.capped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


class ValidationError(ValueError):
    """Input rejected before any computation ran."""

    def __init__(self, message: str, errors: Iterable[str] = ()):
        self.errors: List[str] = list(errors) or [message]
        super().__init__(message)


class ScenarioNotFound(KeyError):
    pass


@dataclass(frozen=True)
class InputInconsistency:
    creditor_id: str
    message: str
