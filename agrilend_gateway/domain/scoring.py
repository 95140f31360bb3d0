"""Score calculator - core business logic for credit decisions"""

from dataclasses import dataclass
from typing import Tuple

from agrilend_gateway.domain.models import FactorContribution, ScoringInput
from agrilend_gateway.domain.profiles import ProfileDefinition


@dataclass(frozen=True)
class ScoreBreakdown:
    """Clamped score plus the per-factor contributions that produced it"""

    raw_score: int
    score: int
    contributions: Tuple[FactorContribution, ...]


def clamp_score(raw_score: int, profile: ProfileDefinition) -> int:
    lower, upper = profile.score_range
    return max(lower, min(upper, raw_score))


def calculate_score(scoring_input: ScoringInput, profile: ProfileDefinition) -> ScoreBreakdown:
    """
    Sum the profile's base score and every factor's delta, then clamp to range.

    Scoring weights live in the profile's factor tables. Contributions are
    returned in factor order so the narrator can explain exactly what was
    weighted.

    Example (self-assessment):
        income 6000 (+150), 2 ha (+100), 6 years (+100), collateral (+80),
        no existing loans (+60) → 300 + 490 = 790
    """
    contributions = tuple(factor.evaluate(scoring_input) for factor in profile.factors)
    raw_score = profile.base_score + sum(c.delta for c in contributions)

    return ScoreBreakdown(
        raw_score=raw_score,
        score=clamp_score(raw_score, profile),
        contributions=contributions,
    )
