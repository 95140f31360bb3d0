"""Factor narrator - turns score contributions into reasons and recommendations"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from agrilend_gateway.domain.models import FactorContribution, ScoringInput
from agrilend_gateway.domain.profiles import ProfileDefinition


@dataclass(frozen=True)
class Narration:
    reasons: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    risk_factors: Tuple[str, ...]


def is_favorable(delta: int, profile: ProfileDefinition) -> bool:
    return delta > 0 if profile.higher_is_better else delta < 0


def narrate(
    contributions: Sequence[FactorContribution],
    scoring_input: ScoringInput,
    score: int,
    profile: ProfileDefinition,
) -> Narration:
    """
    Build ordered narration from the contributions the calculator produced.

    Favorable non-zero contributions become reasons, adverse ones become
    recommendations, band flags become risk factors. Profile advisories are
    appended after factor recommendations.
    """
    reasons: List[str] = []
    recommendations: List[str] = []
    risk_factors: List[str] = []

    for contribution in contributions:
        if contribution.flag:
            risk_factors.append(contribution.flag)
        if contribution.delta == 0 or not contribution.narration:
            continue
        if is_favorable(contribution.delta, profile):
            reasons.append(contribution.narration)
        else:
            recommendations.append(contribution.narration)

    for advisory in profile.advisories:
        if advisory.applies(scoring_input, score):
            recommendations.append(advisory.text)

    return Narration(
        reasons=tuple(reasons),
        recommendations=tuple(recommendations),
        risk_factors=tuple(risk_factors),
    )
