"""
Data preparation — creditor-ledger validation before simulation.
"""

from .validators import ValidationResult, validate_ledger

__all__ = [
    "ValidationResult",
    "validate_ledger",
]
