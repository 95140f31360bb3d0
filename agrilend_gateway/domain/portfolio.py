"""Portfolio risk summary over stored underwriting scores"""

from collections import Counter
from typing import Any, Iterable, List, Tuple

from agrilend_gateway.domain.classification import classify_risk
from agrilend_gateway.domain.models import PortfolioRiskSummary
from agrilend_gateway.domain.profiles import UNDERWRITING

UNSCORED_RISK_SCORE = 500  # applications never assessed count as mid-range
HIGH_RISK_ALERT_SCORE = 700
HIGH_RISK_FACTOR_SCORE = 600
HIGH_LOAN_AMOUNT = 100_000


def summarize_portfolio(applications: Iterable[Any]) -> PortfolioRiskSummary:
    """
    Aggregate underwriting risk over applications.

    Each application needs farmer_id, amount, status and risk_score (None
    when never assessed). Tiers come from the underwriting risk table.
    """
    applications = list(applications)
    scores = [_risk_score(app) for app in applications]
    tiers = Counter(classify_risk(score, UNDERWRITING) for score in scores)

    high_risk_pending = sum(
        1
        for app, score in zip(applications, scores)
        if app.status == "pending" and score > HIGH_RISK_ALERT_SCORE
    )

    return PortfolioRiskSummary(
        total_applications=len(applications),
        low_risk_count=tiers["low"],
        medium_risk_count=tiers["medium"],
        high_risk_count=tiers["high"],
        average_risk_score=round(sum(scores) / len(scores), 1) if scores else float(UNSCORED_RISK_SCORE),
        high_risk_pending=high_risk_pending,
        risk_factors=portfolio_risk_factors(applications),
    )


def portfolio_risk_factors(applications: List[Any]) -> Tuple[Tuple[str, int], ...]:
    """Named risk factors with the number of applications showing each; zero counts dropped"""
    per_farmer = Counter(app.farmer_id for app in applications)

    factors = (
        ("High loan amount", sum(1 for app in applications if (app.amount or 0) > HIGH_LOAN_AMOUNT)),
        ("Multiple applications", sum(1 for app in applications if per_farmer[app.farmer_id] > 1)),
        (
            "High risk score",
            sum(1 for app in applications if _risk_score(app) > HIGH_RISK_FACTOR_SCORE),
        ),
    )
    return tuple((name, count) for name, count in factors if count > 0)


def _risk_score(application: Any) -> int:
    score = application.risk_score
    return UNSCORED_RISK_SCORE if score is None else int(score)
