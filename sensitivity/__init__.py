"""
Sensitivity analysis — parameter sweeps of average DSCR and NPV.
"""

from .analyzer import (
    SENSITIVITY_VARIABLES,
    SensitivityPoint,
    SensitivityReport,
    SensitivityVariable,
    run_sensitivity,
    sweep,
)

__all__ = [
    "SENSITIVITY_VARIABLES",
    "SensitivityPoint",
    "SensitivityReport",
    "SensitivityVariable",
    "run_sensitivity",
    "sweep",
]
