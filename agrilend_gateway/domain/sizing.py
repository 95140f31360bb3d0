"""Loan sizing and terms suggestion"""

from decimal import Decimal, ROUND_HALF_UP

from agrilend_gateway.domain.models import ScoringInput
from agrilend_gateway.domain.tiers import table

PLATFORM_LOAN_CEILING = 300_000  # ETB, hard cap for any amount the engine returns
SELF_ASSESSMENT_LOAN_FLOOR = 5_000  # ETB

# Self-assessment: up to 18 months of income, scaled by score and collateral
INCOME_MULTIPLE = 18
SCORE_DIVISOR = 400
SCORE_MULTIPLIER_RANGE = (0.3, 2.5)
COLLATERAL_MULTIPLIER = 1.2
NO_COLLATERAL_MULTIPLIER = 0.8

# Underwriting: 10k ETB per 100 stored credit points, shrunk by risk score
UNDERWRITING_BASE_AMOUNT = 10_000

TERM_MONTHS = table(">", (100_000, 36), (50_000, 24), otherwise=12)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to whole ETB with halves going up (500.5 → 501), not to even"""
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def self_assessment_max_loan(scoring_input: ScoringInput, score: int) -> int:
    """
    Maximum loan from self-reported data.

    max = clamp(income × 18 × scoreMultiplier × collateralMultiplier, 5 000, 300 000)
    where scoreMultiplier = clamp(score / 400, 0.3, 2.5).

    Example:
        income 6 000, score 790, collateral → 6000 × 18 × 1.975 × 1.2 = 255 960
    """
    if scoring_input.monthly_income <= 0:
        return SELF_ASSESSMENT_LOAN_FLOOR

    score_multiplier = clamp(score / SCORE_DIVISOR, *SCORE_MULTIPLIER_RANGE)
    collateral_multiplier = (
        COLLATERAL_MULTIPLIER if scoring_input.has_collateral else NO_COLLATERAL_MULTIPLIER
    )
    amount = scoring_input.monthly_income * INCOME_MULTIPLE * score_multiplier * collateral_multiplier

    amount = max(0.0, amount)
    return round_half_up(clamp(amount, SELF_ASSESSMENT_LOAN_FLOOR, PLATFORM_LOAN_CEILING))


def underwriting_max_loan(scoring_input: ScoringInput, score: int) -> int:
    """Maximum loan from the stored credit score, shrunk as the risk score rises"""
    credit_multiplier = scoring_input.stored_credit_score / 100
    risk_multiplier = 1 - (score / 1000)
    amount = UNDERWRITING_BASE_AMOUNT * credit_multiplier * risk_multiplier

    amount = max(0.0, amount)
    return round_half_up(min(amount, PLATFORM_LOAN_CEILING))


def self_assessment_recommended_amount(scoring_input: ScoringInput, max_loan: int) -> int:
    """Requested amount (or 60% of max when none given), capped at 80% of max"""
    wanted = scoring_input.requested_amount or max_loan * 0.6
    return round_half_up(max(0.0, min(wanted, max_loan * 0.8)))


def underwriting_recommended_amount(scoring_input: ScoringInput, max_loan: int) -> int:
    return round_half_up(max(0.0, min(scoring_input.requested_amount, max_loan)))


def suggest_term_months(amount: float) -> int:
    return TERM_MONTHS.lookup(amount)
