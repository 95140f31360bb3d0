"""Unit tests for loan sizing and terms"""

import pytest
from agrilend_gateway.domain.models import ScoringInput
from agrilend_gateway.domain.sizing import (
    PLATFORM_LOAN_CEILING,
    SELF_ASSESSMENT_LOAN_FLOOR,
    round_half_up,
    self_assessment_max_loan,
    self_assessment_recommended_amount,
    suggest_term_months,
    underwriting_max_loan,
    underwriting_recommended_amount,
)


def test_self_assessment_max_loan_with_collateral():
    """6000 × 18 × (790/400) × 1.2 = 255 960"""
    scoring_input = ScoringInput(monthly_income=6000, has_collateral=True)
    assert self_assessment_max_loan(scoring_input, 790) == 255960


def test_self_assessment_max_loan_without_collateral():
    """2000 × 18 × (500/400) × 0.8 = 36 000"""
    scoring_input = ScoringInput(monthly_income=2000, has_collateral=False)
    assert self_assessment_max_loan(scoring_input, 500) == 36000


def test_self_assessment_max_loan_score_multiplier_bounds():
    scoring_input = ScoringInput(monthly_income=1000, has_collateral=False)
    # score 100 would give 0.25; floor is 0.3 → 1000 × 18 × 0.3 × 0.8 = 4320 → raised to 5000
    assert self_assessment_max_loan(scoring_input, 100) == SELF_ASSESSMENT_LOAN_FLOOR
    # 2.5 cap: 5000 × 18 × 2.5 × 0.8 = 180 000 even for score 1200
    assert self_assessment_max_loan(ScoringInput(monthly_income=5000), 1200) == 180000


def test_self_assessment_max_loan_ceiling():
    scoring_input = ScoringInput(monthly_income=50000, has_collateral=True)
    assert self_assessment_max_loan(scoring_input, 850) == PLATFORM_LOAN_CEILING


def test_self_assessment_zero_income_short_circuits_to_floor():
    assert self_assessment_max_loan(ScoringInput(), 300) == SELF_ASSESSMENT_LOAN_FLOOR


@pytest.mark.parametrize(
    "requested, max_loan, expected",
    [
        (0, 100000, 60000),  # no request: 60% of max
        (10000, 100000, 10000),
        (95000, 100000, 80000),  # capped at 80% of max
    ],
)
def test_self_assessment_recommended_amount(requested, max_loan, expected):
    scoring_input = ScoringInput(requested_amount=requested)
    assert self_assessment_recommended_amount(scoring_input, max_loan) == expected


def test_underwriting_max_loan():
    """10000 × (750/100) × (1 - 150/1000) = 63 750"""
    scoring_input = ScoringInput(stored_credit_score=750)
    assert underwriting_max_loan(scoring_input, 150) == 63750


def test_underwriting_max_loan_without_credit_score_is_zero():
    assert underwriting_max_loan(ScoringInput(), 500) == 0


def test_underwriting_recommended_amount_capped_at_max():
    assert underwriting_recommended_amount(ScoringInput(requested_amount=60000), 63750) == 60000
    assert underwriting_recommended_amount(ScoringInput(requested_amount=90000), 63750) == 63750
    assert underwriting_recommended_amount(ScoringInput(requested_amount=90000), 0) == 0


@pytest.mark.parametrize(
    "amount, months",
    [(0, 12), (50000, 12), (50001, 24), (100000, 24), (100001, 36)],
)
def test_term_months(amount, months):
    assert suggest_term_months(amount) == months


@pytest.mark.parametrize("value, expected", [(500.5, 501), (2.5, 3), (3.5, 4), (153575.6, 153576), (0.49, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_recommended_amounts_round_half_up():
    assert self_assessment_recommended_amount(ScoringInput(requested_amount=2500.5), 100000) == 2501
    assert underwriting_recommended_amount(ScoringInput(requested_amount=60000.5), 63750) == 60001
