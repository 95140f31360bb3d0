"""Loan applications - intake, lookup, and underwriting risk assessment"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from agrilend_gateway.api.v1.schemas import (
    ApplicationCreateRequest,
    ApplicationResponse,
    RiskAssessmentResponse,
    ScoreResultResponse,
)
from agrilend_gateway.api.dependencies import get_records_client, get_request_id, parse_application_id
from agrilend_gateway.assessment import run_risk_assessment
from agrilend_gateway.domain.exceptions import AssessmentUnavailable, InvalidScoringInputError
from agrilend_gateway.domain.models import LoanRequest
from agrilend_gateway.infrastructure.clients.records import RecordsClient
from agrilend_gateway.infrastructure.database.models import LoanApplication
from agrilend_gateway.infrastructure.database.session import get_db
from agrilend_gateway.infrastructure.database.repositories import AssessmentRepository, LoanApplicationRepository
from agrilend_gateway.infrastructure.observability.metrics import record_assessment, records_fetch_failures_counter
from agrilend_gateway.infrastructure.observability.logging import log_assessment

router = APIRouter()


def to_application_response(application: LoanApplication) -> ApplicationResponse:
    return ApplicationResponse(
        application_id=str(application.id),
        farmer_id=application.farmer_id,
        amount=application.amount,
        purpose=application.purpose,
        status=application.status,
        notes=application.notes or "",
        risk_score=application.risk_score,
        decided_at=application.decided_at,
    )


@router.post("/applications", response_model=ApplicationResponse, status_code=201)
def create_application(request_body: ApplicationCreateRequest, db: Session = Depends(get_db)):
    """Submit a pending loan application"""
    application = LoanApplicationRepository(db).create_application(
        farmer_id=request_body.farmer_id,
        amount=request_body.amount,
        purpose=request_body.purpose,
    )
    db.commit()
    db.refresh(application)
    return to_application_response(application)


@router.get("/applications/{application_id}", response_model=ApplicationResponse)
def get_application(application_id: str, db: Session = Depends(get_db)):
    application = LoanApplicationRepository(db).get_application(parse_application_id(application_id))
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return to_application_response(application)


@router.post("/applications/{application_id}/assessment", response_model=RiskAssessmentResponse)
async def assess_application(
    application_id: str,
    request: Request,
    db: Session = Depends(get_db),
    records_client: RecordsClient = Depends(get_records_client),
):
    """
    Run the underwriting profile (score 100-900, higher is riskier) for an application.

    Flow:
    1. Load the stored application
    2. Fetch farmer profile and payment history from the records API
    3. Score, classify, size and narrate
    4. Store the score on the application plus an audit record
    """
    start_time = time.time()
    request_id = get_request_id(request)
    application_uuid = parse_application_id(application_id)

    application_repo = LoanApplicationRepository(db)
    application = application_repo.get_application(application_uuid)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")

    try:
        result = await run_risk_assessment(
            records_client,
            application.farmer_id,
            LoanRequest(requested_amount=application.amount, purpose=application.purpose),
        )

        application_repo.update_risk_score(application, result.score)
        AssessmentRepository(db).create_assessment(application.id, result)
        db.commit()

    except AssessmentUnavailable as e:
        records_fetch_failures_counter.inc()
        db.rollback()
        logging.error(f"Risk assessment unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Farmer records unavailable; risk not assessed")

    except InvalidScoringInputError as e:
        db.rollback()
        logging.warning(f"Invalid scoring input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_assessment(result.profile.value, result.risk_tier, result.eligible, result.recommendation)
    log_assessment(
        request_id,
        result.profile.value,
        application_id,
        result.score,
        result.risk_tier,
        result.recommendation,
        (time.time() - start_time) * 1000,
    )

    return RiskAssessmentResponse(
        application_id=application_id,
        assessment=ScoreResultResponse.from_result(result),
    )
