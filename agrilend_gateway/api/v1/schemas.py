"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Literal, Optional

from agrilend_gateway.domain.models import ScoreResult


class EligibilityRequest(BaseModel):
    """Request body for POST /v1/eligibility (all fields optional; missing counts as 0)"""

    farmer_id: Optional[str] = Field(None, description="Prefill empty fields from this farmer's record")
    monthly_income: Optional[float] = Field(None, description="Monthly income in ETB")
    farm_size_ha: Optional[float] = Field(None, description="Farm size in hectares")
    years_farming: Optional[float] = None
    has_collateral: Optional[bool] = None
    existing_monthly_obligations: Optional[float] = Field(None, description="Existing loan payments per month in ETB")
    primary_crop: Optional[str] = None
    region: Optional[str] = None
    requested_amount: Optional[float] = Field(None, description="Requested loan amount in ETB")
    purpose: Optional[str] = None


class ScoreResultResponse(BaseModel):
    """Assessment result; score meaning depends on profile and score range"""

    profile: str
    score: int
    score_min: int
    score_max: int
    risk_level: str
    eligible: Optional[bool] = None
    recommendation: Optional[str] = None
    max_loan_amount: int
    recommended_amount: int
    term_months: int
    interest_rate: float
    reasons: List[str]
    recommendations: List[str]
    risk_factors: List[str]

    @classmethod
    def from_result(cls, result: ScoreResult) -> "ScoreResultResponse":
        return cls(
            profile=result.profile.value,
            score=result.score,
            score_min=result.score_range[0],
            score_max=result.score_range[1],
            risk_level=result.risk_tier,
            eligible=result.eligible,
            recommendation=result.recommendation,
            max_loan_amount=result.max_loan_amount,
            recommended_amount=result.recommended_amount,
            term_months=result.term_months,
            interest_rate=result.interest_rate,
            reasons=list(result.reasons),
            recommendations=list(result.recommendations),
            risk_factors=list(result.risk_factors),
        )


class ApplicationCreateRequest(BaseModel):
    """Request body for POST /v1/applications"""

    farmer_id: str = Field(..., min_length=1, description="Farmer identifier")
    amount: float = Field(..., gt=0, description="Requested amount in ETB")
    purpose: Optional[str] = None


class ApplicationResponse(BaseModel):
    """Loan application record"""

    application_id: str
    farmer_id: str
    amount: float
    purpose: Optional[str] = None
    status: str
    notes: str
    risk_score: Optional[int] = None
    decided_at: Optional[datetime] = None


class RiskAssessmentResponse(BaseModel):
    """Response for POST /v1/applications/{application_id}/assessment"""

    application_id: str
    assessment: ScoreResultResponse


class DecisionRequest(BaseModel):
    """Request body for POST /v1/applications/{application_id}/decision"""

    action: Literal["approve", "reject"]
    notes: str = Field("", max_length=4000)
    officer_id: Optional[str] = None


class AssessmentHistoryItem(BaseModel):
    """Single stored underwriting assessment"""

    assessment_id: str
    score: int
    risk_level: str
    recommendation: Optional[str] = None
    max_loan_amount: int
    suggested_amount: int
    created_at: str


class AssessmentHistoryResponse(BaseModel):
    """Response for GET /v1/applications/{application_id}/assessments"""

    application_id: str
    assessments: List[AssessmentHistoryItem]


class RiskFactorCount(BaseModel):
    factor: str
    count: int


class PortfolioRiskResponse(BaseModel):
    """Response for GET /v1/portfolio/risk"""

    total_applications: int
    low_risk_count: int
    medium_risk_count: int
    high_risk_count: int
    average_risk_score: float
    high_risk_pending: int
    risk_factors: List[RiskFactorCount]
