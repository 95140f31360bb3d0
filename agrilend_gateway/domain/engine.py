"""Decision engine entry points - pure, synchronous, no I/O"""

from typing import Iterable, Optional, Union

from agrilend_gateway.domain.classification import classify_risk, decide, interest_rate_for
from agrilend_gateway.domain.models import ScoreResult, ScoringInput, ScoringProfile
from agrilend_gateway.domain.narrator import narrate
from agrilend_gateway.domain.normalizer import RawApplicant, RawLoan, RawPayment, normalize
from agrilend_gateway.domain.profiles import ProfileDefinition, get_profile
from agrilend_gateway.domain.scoring import calculate_score
from agrilend_gateway.domain.sizing import suggest_term_months


def select_profile(payments: Optional[Iterable[RawPayment]]) -> ScoringProfile:
    """Stored payment history means an underwriting run; without it, self-assessment"""
    return ScoringProfile.SELF_ASSESSMENT if payments is None else ScoringProfile.UNDERWRITING


def assess(
    scoring_input: ScoringInput,
    profile: Union[ScoringProfile, ProfileDefinition, str],
) -> ScoreResult:
    """
    Run the full pipeline for one normalized input.

    Flow:
    1. Score (base + factor deltas, clamped to the profile range)
    2. Risk tier and verdict from the profile tables
    3. Max loan and recommended amount
    4. Term and interest rate
    5. Reasons, recommendations and risk flags from the same contributions
    """
    definition = profile if isinstance(profile, ProfileDefinition) else get_profile(profile)

    breakdown = calculate_score(scoring_input, definition)
    score = breakdown.score

    risk_tier = classify_risk(score, definition)
    verdict = decide(score, scoring_input.monthly_income, definition)

    max_loan = definition.size_loan(scoring_input, score)
    recommended = min(definition.recommend_amount(scoring_input, max_loan), max_loan)

    narration = narrate(breakdown.contributions, scoring_input, score, definition)

    return ScoreResult(
        profile=definition.profile,
        score=score,
        score_range=definition.score_range,
        risk_tier=risk_tier,
        max_loan_amount=max_loan,
        recommended_amount=recommended,
        term_months=suggest_term_months(recommended),
        interest_rate=interest_rate_for(score, definition),
        eligible=verdict.eligible,
        recommendation=verdict.recommendation,
        reasons=narration.reasons,
        recommendations=narration.recommendations,
        risk_factors=narration.risk_factors,
        contributions=breakdown.contributions,
    )


def evaluate(
    applicant: RawApplicant,
    loan: RawLoan = None,
    payments: Optional[Iterable[RawPayment]] = None,
    profile: Optional[Union[ScoringProfile, str]] = None,
) -> ScoreResult:
    """
    Normalize raw inputs and assess them.

    The profile is chosen from the inputs available unless given explicitly:
    a payment history (even an empty one) selects underwriting.
    """
    if payments is not None and not isinstance(payments, (list, tuple)):
        payments = list(payments)
    selected = ScoringProfile(profile) if profile is not None else select_profile(payments)
    return assess(normalize(applicant, loan, payments), selected)
