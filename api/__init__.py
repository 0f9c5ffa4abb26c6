"""
Public operations: simulate_voting, run_projection, run_stress_test, run_sensitivity.
"""

from .operations import run_projection, run_sensitivity, run_stress_test, simulate_voting

__all__ = [
    "run_projection",
    "run_sensitivity",
    "run_stress_test",
    "simulate_voting",
]
