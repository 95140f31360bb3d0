"""GET /v1/applications/{application_id}/assessments - Stored underwriting history"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from agrilend_gateway.api.v1.schemas import AssessmentHistoryResponse, AssessmentHistoryItem
from agrilend_gateway.api.dependencies import parse_application_id
from agrilend_gateway.infrastructure.database.session import get_db
from agrilend_gateway.infrastructure.database.repositories import AssessmentRepository, LoanApplicationRepository

router = APIRouter()


@router.get("/applications/{application_id}/assessments", response_model=AssessmentHistoryResponse)
def get_assessment_history(
    application_id: str,
    limit: int = Query(20, ge=1, le=100, description="Maximum records to return"),
    db: Session = Depends(get_db),
):
    """
    Retrieve underwriting assessments previously shown to staff for an application.

    Returns:
        Most recent assessments first
    """
    application_uuid = parse_application_id(application_id)
    if not LoanApplicationRepository(db).get_application(application_uuid):
        raise HTTPException(status_code=404, detail="Application not found")

    records = AssessmentRepository(db).get_assessments(application_uuid, limit=limit)

    history_items = [
        AssessmentHistoryItem(
            assessment_id=str(r.id),
            score=r.score,
            risk_level=r.risk_tier,
            recommendation=r.recommendation,
            max_loan_amount=r.max_loan_amount,
            suggested_amount=r.suggested_amount,
            created_at=r.created_at.isoformat(),
        )
        for r in records
    ]

    return AssessmentHistoryResponse(application_id=application_id, assessments=history_items)
