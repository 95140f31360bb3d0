"""Risk classifier and eligibility decision - table lookups, no inline thresholds"""

from dataclasses import dataclass
from typing import Optional

from agrilend_gateway.domain.models import ScoringProfile
from agrilend_gateway.domain.profiles import ProfileDefinition


@dataclass(frozen=True)
class Verdict:
    """Eligibility (self-assessment) or recommendation (underwriting)"""

    eligible: Optional[bool] = None
    recommendation: Optional[str] = None


def classify_risk(score: int, profile: ProfileDefinition) -> str:
    return profile.risk_tiers.lookup(score)


def interest_rate_for(score: int, profile: ProfileDefinition) -> float:
    return profile.interest_rates.lookup(score)


def decide(score: int, monthly_income: float, profile: ProfileDefinition) -> Verdict:
    """
    Map score and income to a verdict.

    A passing score is never sufficient on its own: when income is below the
    profile minimum the verdict falls back to the profile's income-gate value
    (not eligible / review).
    """
    verdict = profile.verdicts.lookup(score)
    if verdict == profile.passing_verdict and monthly_income < profile.min_monthly_income:
        verdict = profile.income_gate_verdict

    if profile.profile is ScoringProfile.SELF_ASSESSMENT:
        return Verdict(eligible=verdict == profile.passing_verdict)
    return Verdict(recommendation=verdict)
