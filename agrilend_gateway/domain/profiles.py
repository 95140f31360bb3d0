"""
Scoring profiles.

Both profiles run through the same calculator, classifier, sizing and narrator.
What differs lives here as data: base score, range, factor weights and their
narration, tier tables and loan sizing.

- Self-assessment: 300-850, higher is better, inputs are self-reported.
- Underwriting: 100-900, higher is riskier, inputs are stored records.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union

from agrilend_gateway.domain.models import ScoringInput, ScoringProfile
from agrilend_gateway.domain.sizing import (
    self_assessment_max_loan,
    self_assessment_recommended_amount,
    underwriting_max_loan,
    underwriting_recommended_amount,
)
from agrilend_gateway.domain.tiers import (
    NEUTRAL,
    CategoricalFactor,
    Effect,
    ThresholdFactor,
    ThresholdTable,
    table,
)

Factor = Union[ThresholdFactor, CategoricalFactor]

MIN_MONTHLY_INCOME = 1_000  # ETB
HIGH_RISK_PURPOSES = frozenset({"business_expansion", "debt_consolidation"})


@dataclass(frozen=True)
class Advisory:
    """Profile-level recommendation not tied to a single factor band"""

    applies: Callable[[ScoringInput, int], bool]
    text: str


@dataclass(frozen=True)
class ProfileDefinition:
    profile: ScoringProfile
    base_score: int
    score_range: Tuple[int, int]
    factors: Tuple[Factor, ...]
    risk_tiers: ThresholdTable[str]
    interest_rates: ThresholdTable[float]
    verdicts: ThresholdTable[str]
    passing_verdict: str
    income_gate_verdict: str  # verdict when the score passes but income does not
    min_monthly_income: float
    size_loan: Callable[[ScoringInput, int], int]
    recommend_amount: Callable[[ScoringInput, int], int]
    advisories: Tuple[Advisory, ...] = ()
    higher_is_better: bool = True


# Self-assessment factors

SELF_ASSESSMENT_FACTORS: Tuple[Factor, ...] = (
    ThresholdFactor(
        name="monthly_income",
        measure=lambda s: s.monthly_income,
        bands=table(
            ">=",
            (8000, Effect(200, "Excellent monthly income")),
            (5000, Effect(150, "Good monthly income")),
            (3000, Effect(100, "Adequate monthly income")),
            (1000, Effect(50, "Basic monthly income")),
            otherwise=Effect(
                -50,
                "Focus on increasing your monthly income through diversified farming "
                "or additional income sources",
            ),
        ),
    ),
    ThresholdFactor(
        name="farm_size",
        measure=lambda s: s.farm_size_ha,
        bands=table(
            ">=",
            (5, Effect(120, "Large farm operation")),
            (2, Effect(100, "Substantial farm size")),
            (1, Effect(70, "Moderate farm size")),
            (0.5, Effect(50, "Small farm size")),
            otherwise=Effect(
                -30,
                "Consider expanding your farm operations or improving productivity "
                "on existing land",
            ),
        ),
    ),
    ThresholdFactor(
        name="farming_experience",
        measure=lambda s: s.years_farming,
        bands=table(
            ">=",
            (10, Effect(120, "Extensive farming experience")),
            (5, Effect(100, "Significant farming experience")),
            (2, Effect(60, "Some farming experience")),
            (1, Effect(30, "Basic farming experience")),
            otherwise=Effect(
                -50,
                "Gain more farming experience through mentorship, training programs, "
                "or working with experienced farmers",
            ),
        ),
    ),
    CategoricalFactor(
        name="collateral",
        measure=lambda s: s.has_collateral,
        effects={
            True: Effect(80, "Has collateral for loan security"),
            False: Effect(
                -20,
                "Consider providing collateral (land, equipment, livestock) to improve "
                "loan terms and approval chances",
            ),
        },
    ),
    ThresholdFactor(
        name="existing_loan_burden",
        measure=lambda s: s.obligation_ratio,
        bands=table(
            "<=",
            (0, Effect(60, "No existing loan obligations")),
            (0.2, Effect(40, "Manageable existing loan burden")),
            (0.4, Effect(20, "Moderate existing loan burden")),
            otherwise=Effect(
                -80,
                "Focus on reducing your existing loan burden before applying for new loans",
            ),
        ),
    ),
)

SELF_ASSESSMENT_ADVISORIES = (
    Advisory(
        applies=lambda s, score: score < 450,
        text="Work on improving your overall credit profile before applying",
    ),
    Advisory(
        applies=lambda s, score: 450 <= score < 550,
        text="Consider smaller loan amounts initially to build credit history",
    ),
    Advisory(
        applies=lambda s, score: s.farm_size_ha < 1 and s.monthly_income < 3000,
        text="Consider value-added farming activities to increase income per hectare",
    ),
    Advisory(
        applies=lambda s, score: s.years_farming < 2,
        text="Join farming cooperatives or associations for support and guidance",
    ),
)


# Underwriting factors (positive deltas add risk)

UNDERWRITING_FACTORS: Tuple[Factor, ...] = (
    ThresholdFactor(
        name="requested_amount",
        measure=lambda s: s.requested_amount,
        bands=table(
            ">",
            (100_000, Effect(
                200,
                "Reduce the requested amount or split it into smaller disbursements",
                flag="High loan amount",
            )),
            (50_000, Effect(100, "Consider a smaller loan amount to limit exposure")),
            (10_000, Effect(50, "Confirm repayment capacity for the requested amount")),
            otherwise=NEUTRAL,
        ),
    ),
    ThresholdFactor(
        name="payment_history",
        measure=lambda s: s.payment_completion_ratio,
        bands=table(
            ">=",
            (0.9, Effect(-100, "Excellent repayment history")),
            (0.7, Effect(-50, "Good repayment history")),
            (0.5, NEUTRAL),
            otherwise=Effect(
                150,
                "Review repayment history before approval; fewer than half of known "
                "payments completed",
                flag="Poor payment history",
            ),
        ),
    ),
    CategoricalFactor(
        name="verification_status",
        measure=lambda s: s.verification_status,
        effects={
            "verified": Effect(-50, "Farmer verified by a field data collector"),
            "rejected": Effect(
                200,
                "Resolve the rejected farmer verification before proceeding",
                flag="Farmer verification rejected",
            ),
        },
    ),
    ThresholdFactor(
        name="stored_credit_score",
        measure=lambda s: s.stored_credit_score,
        bands=table(
            ">=",
            (700, Effect(-100, "Strong credit score on record")),
            (500, Effect(-50, "Fair credit score on record")),
            (300, NEUTRAL),
            otherwise=Effect(
                150,
                "Obtain an updated credit history; stored credit score is below 300",
                flag="Low credit score",
            ),
        ),
    ),
    CategoricalFactor(
        name="loan_purpose",
        measure=lambda s: s.purpose in HIGH_RISK_PURPOSES,
        effects={
            True: Effect(
                50,
                "Request a business plan supporting the loan purpose",
                flag="High-risk loan purpose",
            ),
        },
    ),
)

UNDERWRITING_ADVISORIES = (
    Advisory(
        applies=lambda s, score: s.monthly_income < MIN_MONTHLY_INCOME,
        text="Confirm a monthly income of at least 1,000 ETB before approval",
    ),
)


SELF_ASSESSMENT = ProfileDefinition(
    profile=ScoringProfile.SELF_ASSESSMENT,
    base_score=300,
    score_range=(300, 850),
    factors=SELF_ASSESSMENT_FACTORS,
    risk_tiers=table(">=", (700, "low"), (450, "medium"), otherwise="high"),
    interest_rates=table(">=", (700, 8.0), (550, 12.0), (450, 15.0), otherwise=18.0),
    verdicts=table(">=", (450, "eligible"), otherwise="not_eligible"),
    passing_verdict="eligible",
    income_gate_verdict="not_eligible",
    min_monthly_income=MIN_MONTHLY_INCOME,
    size_loan=self_assessment_max_loan,
    recommend_amount=self_assessment_recommended_amount,
    advisories=SELF_ASSESSMENT_ADVISORIES,
    higher_is_better=True,
)

# Scores are integers, so ">= 701" is "above 700"
UNDERWRITING = ProfileDefinition(
    profile=ScoringProfile.UNDERWRITING,
    base_score=300,
    score_range=(100, 900),
    factors=UNDERWRITING_FACTORS,
    risk_tiers=table("<", (400, "low"), (600, "medium"), otherwise="high"),
    interest_rates=table(">", (700, 22.0), (600, 17.0), otherwise=12.0),
    verdicts=table(">=", (701, "reject"), (400, "review"), otherwise="approve"),
    passing_verdict="approve",
    income_gate_verdict="review",
    min_monthly_income=MIN_MONTHLY_INCOME,
    size_loan=underwriting_max_loan,
    recommend_amount=underwriting_recommended_amount,
    advisories=UNDERWRITING_ADVISORIES,
    higher_is_better=False,
)

PROFILES: Dict[ScoringProfile, ProfileDefinition] = {
    ScoringProfile.SELF_ASSESSMENT: SELF_ASSESSMENT,
    ScoringProfile.UNDERWRITING: UNDERWRITING,
}


def get_profile(profile: Union[ScoringProfile, str]) -> ProfileDefinition:
    return PROFILES[ScoringProfile(profile)]
