"""
Projection engine — deterministic yearly DRE, free cash flow and DSCR.
"""

from .params import ProjectionParams, validate_params
from .projection import (
    Projection,
    YearlyCashFlow,
    YearlyDRE,
    YearlyDSCR,
    dscr_status,
    run_projection,
)
from .debt_service import PaymentTerm, estimate_debt_service

__all__ = [
    "ProjectionParams",
    "validate_params",
    "Projection",
    "YearlyCashFlow",
    "YearlyDRE",
    "YearlyDSCR",
    "dscr_status",
    "run_projection",
    "PaymentTerm",
    "estimate_debt_service",
]
