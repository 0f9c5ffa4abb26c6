"""Debt-service schedule estimated from payment terms."""

import pytest

from core.errors import ValidationError
from engine import PaymentTerm, estimate_debt_service


def test_haircut_and_installments_in_first_year():
    terms = [PaymentTerm(value=1_200_000, haircut_pct=50, installments=12)]
    assert estimate_debt_service(terms, 2) == [600_000, 0]


def test_grace_period_pushes_payments_into_next_year():
    terms = [PaymentTerm(value=1_200_000, haircut_pct=50, installments=12, grace_months=6)]
    assert estimate_debt_service(terms, 2) == [300_000, 300_000]


def test_month_twelve_stays_in_year_one():
    terms = [PaymentTerm(value=1_000, installments=1, grace_months=11)]
    assert estimate_debt_service(terms, 2) == [1_000, 0]


def test_remainder_goes_on_last_installment():
    # months 11, 12, 13 -> 33 + 33 in year 1, 34 in year 2
    terms = [PaymentTerm(value=100, installments=3, grace_months=10)]
    assert estimate_debt_service(terms, 2) == [66, 34]


def test_payments_past_horizon_are_dropped():
    terms = [PaymentTerm(value=2_400, installments=24)]
    assert estimate_debt_service(terms, 1) == [1_200]


def test_terms_accumulate():
    terms = [
        PaymentTerm(value=1_000),
        PaymentTerm(value=5_000, haircut_pct=20, installments=2),
    ]
    assert estimate_debt_service(terms, 1) == [5_000]


def test_null_fields_take_defaults():
    term = PaymentTerm.model_validate(
        {"value": 500, "haircut_pct": None, "installments": None, "grace_months": None}
    )
    assert term.installments == 1
    assert term.grace_months == 0
    assert estimate_debt_service([term], 1) == [500]


def test_full_haircut_pays_nothing():
    assert estimate_debt_service([PaymentTerm(value=9_999, haircut_pct=100)], 1) == [0]


def test_no_terms_gives_zero_schedule():
    assert estimate_debt_service([], 3) == [0, 0, 0]


def test_horizon_must_be_positive():
    with pytest.raises(ValidationError):
        estimate_debt_service([PaymentTerm(value=1)], 0)


@pytest.mark.parametrize(
    "data",
    [
        {"value": -1},
        {"value": 10, "haircut_pct": 101},
        {"value": 10, "installments": 0},
        {"value": 10, "grace_months": -1},
    ],
)
def test_invalid_terms_rejected(data):
    with pytest.raises(ValueError):
        PaymentTerm.model_validate(data)
