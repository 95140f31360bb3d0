"""Unit tests for the score calculator"""

import pytest
from agrilend_gateway.domain.models import PaymentRecord, ScoringInput
from agrilend_gateway.domain.profiles import SELF_ASSESSMENT, UNDERWRITING
from agrilend_gateway.domain.scoring import calculate_score


def _deltas(breakdown) -> dict:
    return {c.name: c.delta for c in breakdown.contributions}


def _payments(completed: int, other: int) -> tuple:
    return tuple(PaymentRecord(100, "completed") for _ in range(completed)) + tuple(
        PaymentRecord(100, "failed") for _ in range(other)
    )


def test_self_assessment_concrete_scenario():
    """300 + 150 + 100 + 100 + 80 + 60 = 790"""
    scoring_input = ScoringInput(
        monthly_income=6000,
        farm_size_ha=2,
        years_farming=6,
        has_collateral=True,
        existing_monthly_obligations=0,
    )

    breakdown = calculate_score(scoring_input, SELF_ASSESSMENT)

    assert breakdown.score == 790
    assert _deltas(breakdown) == {
        "monthly_income": 150,
        "farm_size": 100,
        "farming_experience": 100,
        "collateral": 80,
        "existing_loan_burden": 60,
    }


def test_underwriting_concrete_scenario():
    """300 + 100 - 100 - 50 - 100 + 0 = 150"""
    scoring_input = ScoringInput(
        requested_amount=60000,
        payments=_payments(completed=19, other=1),
        verification_status="verified",
        stored_credit_score=750,
        purpose="seeds",
    )

    breakdown = calculate_score(scoring_input, UNDERWRITING)

    assert breakdown.score == 150
    assert _deltas(breakdown) == {
        "requested_amount": 100,
        "payment_history": -100,
        "verification_status": -50,
        "stored_credit_score": -100,
        "loan_purpose": 0,
    }


@pytest.mark.parametrize(
    "income, expected_delta",
    [
        (0, -50),
        (999, -50),
        (1000, 50),
        (2999.99, 50),
        (3000, 100),
        (5000, 150),
        (7999, 150),
        (8000, 200),
    ],
)
def test_income_bands(income, expected_delta):
    breakdown = calculate_score(ScoringInput(monthly_income=income), SELF_ASSESSMENT)
    assert _deltas(breakdown)["monthly_income"] == expected_delta


def test_income_discontinuity_lands_at_1000():
    below = calculate_score(ScoringInput(monthly_income=999), SELF_ASSESSMENT)
    at = calculate_score(ScoringInput(monthly_income=1000), SELF_ASSESSMENT)

    assert _deltas(below)["monthly_income"] == -50
    assert _deltas(at)["monthly_income"] == 50
    assert at.raw_score - below.raw_score == 100


@pytest.mark.parametrize(
    "farm_size, years, expected_farm, expected_years",
    [
        (0, 0, -30, -50),
        (0.5, 1, 50, 30),
        (1, 2, 70, 60),
        (2, 5, 100, 100),
        (5, 10, 120, 120),
    ],
)
def test_farm_size_and_experience_bands(farm_size, years, expected_farm, expected_years):
    breakdown = calculate_score(
        ScoringInput(farm_size_ha=farm_size, years_farming=years), SELF_ASSESSMENT
    )
    deltas = _deltas(breakdown)
    assert deltas["farm_size"] == expected_farm
    assert deltas["farming_experience"] == expected_years


@pytest.mark.parametrize(
    "income, obligations, expected_delta",
    [
        (5000, 0, 60),
        (5000, 1000, 40),  # ratio 0.2
        (5000, 2000, 20),  # ratio 0.4
        (5000, 2001, -80),
        (0, 0, 60),
        (0, 100, -80),  # obligations with no income
    ],
)
def test_existing_loan_burden_bands(income, obligations, expected_delta):
    breakdown = calculate_score(
        ScoringInput(monthly_income=income, existing_monthly_obligations=obligations),
        SELF_ASSESSMENT,
    )
    assert _deltas(breakdown)["existing_loan_burden"] == expected_delta


def test_collateral_factor():
    with_collateral = calculate_score(ScoringInput(has_collateral=True), SELF_ASSESSMENT)
    without = calculate_score(ScoringInput(has_collateral=False), SELF_ASSESSMENT)

    assert _deltas(with_collateral)["collateral"] == 80
    assert _deltas(without)["collateral"] == -20


def test_monotonic_in_income():
    """Raising income with everything else fixed never lowers the score"""
    incomes = [0, 500, 999, 1000, 1500, 2999, 3000, 4999, 5000, 7999, 8000, 20000]
    scores = [
        calculate_score(
            ScoringInput(monthly_income=income, existing_monthly_obligations=800, farm_size_ha=1),
            SELF_ASSESSMENT,
        ).score
        for income in incomes
    ]
    assert scores == sorted(scores)


def test_self_assessment_score_clamped():
    worst = ScoringInput(existing_monthly_obligations=100)
    best = ScoringInput(
        monthly_income=10000, farm_size_ha=10, years_farming=20, has_collateral=True
    )

    worst_breakdown = calculate_score(worst, SELF_ASSESSMENT)
    best_breakdown = calculate_score(best, SELF_ASSESSMENT)

    assert worst_breakdown.raw_score == 70
    assert worst_breakdown.score == 300
    assert best_breakdown.raw_score == 880
    assert best_breakdown.score == 850


def test_underwriting_score_clamped():
    worst = ScoringInput(
        requested_amount=200000,
        verification_status="rejected",
        stored_credit_score=0,
        purpose="business_expansion",
    )
    best = ScoringInput(
        requested_amount=5000,
        payments=_payments(completed=10, other=0),
        verification_status="verified",
        stored_credit_score=800,
    )

    assert calculate_score(worst, UNDERWRITING).raw_score == 1050
    assert calculate_score(worst, UNDERWRITING).score == 900
    assert calculate_score(best, UNDERWRITING).raw_score == 50
    assert calculate_score(best, UNDERWRITING).score == 100


@pytest.mark.parametrize(
    "completed, other, expected_delta",
    [
        (0, 0, 150),  # no history is treated as risk
        (9, 1, -100),
        (7, 3, -50),
        (6, 4, 0),
        (5, 5, 0),
        (4, 6, 150),
    ],
)
def test_payment_history_bands(completed, other, expected_delta):
    scoring_input = ScoringInput(payments=_payments(completed, other))
    assert _deltas(calculate_score(scoring_input, UNDERWRITING))["payment_history"] == expected_delta


@pytest.mark.parametrize(
    "amount, expected_delta",
    [(10000, 0), (10001, 50), (50000, 50), (50001, 100), (100000, 100), (100001, 200)],
)
def test_requested_amount_bands(amount, expected_delta):
    scoring_input = ScoringInput(requested_amount=amount)
    assert _deltas(calculate_score(scoring_input, UNDERWRITING))["requested_amount"] == expected_delta


@pytest.mark.parametrize(
    "credit, expected_delta",
    [(0, 150), (299, 150), (300, 0), (499, 0), (500, -50), (700, -100)],
)
def test_stored_credit_bands(credit, expected_delta):
    scoring_input = ScoringInput(stored_credit_score=credit)
    assert _deltas(calculate_score(scoring_input, UNDERWRITING))["stored_credit_score"] == expected_delta


@pytest.mark.parametrize(
    "status, purpose, expected_verification, expected_purpose",
    [
        ("verified", "debt_consolidation", -50, 50),
        ("rejected", "business_expansion", 200, 50),
        ("pending", "fertilizer", 0, 0),
    ],
)
def test_verification_and_purpose(status, purpose, expected_verification, expected_purpose):
    scoring_input = ScoringInput(verification_status=status, purpose=purpose)
    deltas = _deltas(calculate_score(scoring_input, UNDERWRITING))
    assert deltas["verification_status"] == expected_verification
    assert deltas["loan_purpose"] == expected_purpose
