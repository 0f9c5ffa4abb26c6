# tests/conftest.py
"""
Shared fixtures: small creditor ledgers and projection parameter sets with
hand-checkable numbers.
"""

import os
import sys

# helpers.py lives beside this file; the project root is added by the root conftest
tests_dir = os.path.dirname(os.path.abspath(__file__))
if tests_dir not in sys.path:
    sys.path.insert(0, tests_dir)

import pytest

from core.schema import Vote
from engine.params import ProjectionParams

from helpers import I, II, III, IV, make_creditor


@pytest.fixture
def class_iii_example():
    """10 Class III creditors: 6 present (4 favor = 600, 2 against = 400), 4 absent."""
    return [
        make_creditor("f1", III, 150, Vote.FAVOR),
        make_creditor("f2", III, 150, Vote.FAVOR),
        make_creditor("f3", III, 150, Vote.FAVOR),
        make_creditor("f4", III, 150, Vote.FAVOR),
        make_creditor("a1", III, 200, Vote.AGAINST),
        make_creditor("a2", III, 200, Vote.AGAINST),
        make_creditor("x1", III, 500, Vote.AGAINST, present=False),
        make_creditor("x2", III, 500, None, present=False),
        make_creditor("x3", III, 500, Vote.FAVOR, present=False),
        make_creditor("x4", III, 500, None, present=False),
    ]


@pytest.fixture
def mixed_ledger():
    """
    Class I:   2 favor, 1 against            -> approved (66.7% heads)
    Class II:  1 favor (700), 2 against (300) -> rejected by head (33.3%), 70% by value
    Class III: 2 favor (600), 1 against (900), 1 abstain -> rejected
    Class IV:  nobody present                -> approved None
    """
    return [
        make_creditor("l1", I, 1_000, Vote.FAVOR),
        make_creditor("l2", I, 2_000, Vote.FAVOR),
        make_creditor("l3", I, 5_000, Vote.AGAINST),
        make_creditor("s1", II, 700, Vote.FAVOR),
        make_creditor("s2", II, 150, Vote.AGAINST),
        make_creditor("s3", II, 150, Vote.AGAINST),
        make_creditor("u1", III, 300, Vote.FAVOR),
        make_creditor("u2", III, 300, Vote.FAVOR),
        make_creditor("u3", III, 900, Vote.AGAINST),
        make_creditor("u4", III, 10_000, Vote.ABSTAIN),
        make_creditor("m1", IV, 50, Vote.FAVOR, present=False),
    ]


@pytest.fixture
def simple_params():
    """No taxes, capex or working capital: FCF == EBITDA, DSCR == margin% / 10."""
    return ProjectionParams(
        years=5,
        base_revenue=10_000_000,
        growth_rate_pct=0,
        ebitda_margin_pct=30,
        discount_rate_pct=10,
        debt_service_schedule=[1_000_000] * 5,
    )


@pytest.fixture
def taxed_params():
    return ProjectionParams(
        years=2,
        base_revenue=1_000_000,
        growth_rate_pct=0,
        ebitda_margin_pct=30,
        capex_pct=10,
        working_capital_pct=10,
        tax_rate_pct=34,
        debt_service_schedule=[100_000, 100_000],
    )
