"""
PM (plan viability) outputs — composes voting and financial results into a decision report.
"""

from .viability import ViabilityReport, generate_viability_report

__all__ = [
    "ViabilityReport",
    "generate_viability_report",
]
