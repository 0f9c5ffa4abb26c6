"""
Core package — enums, statutory tables, configuration, errors and shared helpers.
No business logic lives here.
"""

from .schema import (
    CLASS_ORDER,
    QUORUM_BASIS,
    CreditorClass,
    DscrStatus,
    QuorumBasis,
    Vote,
)
from .config import DEFAULT_CONFIG, EngineConfig
from .errors import InputInconsistency, ScenarioNotFound, ValidationError
from .utils import format_cents, to_cents

__all__ = [
    "CLASS_ORDER",
    "QUORUM_BASIS",
    "CreditorClass",
    "DscrStatus",
    "QuorumBasis",
    "Vote",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "InputInconsistency",
    "ScenarioNotFound",
    "ValidationError",
    "format_cents",
    "to_cents",
]
