"""GET /v1/portfolio/risk - Risk distribution across loan applications"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agrilend_gateway.api.v1.schemas import PortfolioRiskResponse, RiskFactorCount
from agrilend_gateway.domain.portfolio import summarize_portfolio
from agrilend_gateway.infrastructure.database.session import get_db
from agrilend_gateway.infrastructure.database.repositories import LoanApplicationRepository

router = APIRouter()


@router.get("/portfolio/risk", response_model=PortfolioRiskResponse)
def get_portfolio_risk(
    status: str | None = Query(None, description="Only include applications with this status"),
    db: Session = Depends(get_db),
):
    """
    Summarize underwriting risk over stored applications.

    Tiers use the underwriting scale (lower is safer); applications never
    assessed count as 500.
    """
    applications = LoanApplicationRepository(db).list_applications(status=status, limit=None)
    summary = summarize_portfolio(applications)

    return PortfolioRiskResponse(
        total_applications=summary.total_applications,
        low_risk_count=summary.low_risk_count,
        medium_risk_count=summary.medium_risk_count,
        high_risk_count=summary.high_risk_count,
        average_risk_score=summary.average_risk_score,
        high_risk_pending=summary.high_risk_pending,
        risk_factors=[RiskFactorCount(factor=name, count=count) for name, count in summary.risk_factors],
    )
