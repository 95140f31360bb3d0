"""POST /v1/eligibility - Self-service eligibility check"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from agrilend_gateway.api.v1.schemas import EligibilityRequest, ScoreResultResponse
from agrilend_gateway.api.dependencies import get_records_client, get_request_id
from agrilend_gateway.assessment import run_eligibility_check
from agrilend_gateway.domain.exceptions import AssessmentUnavailable, InvalidScoringInputError
from agrilend_gateway.domain.recorder import DecisionRecorder
from agrilend_gateway.infrastructure.clients.records import RecordsClient
from agrilend_gateway.infrastructure.observability.metrics import record_assessment, records_fetch_failures_counter
from agrilend_gateway.infrastructure.observability.logging import log_assessment

router = APIRouter()


@router.post("/eligibility", response_model=ScoreResultResponse)
async def check_eligibility(
    request_body: EligibilityRequest,
    request: Request,
    records_client: RecordsClient = Depends(get_records_client),
):
    """
    Estimate whether an applicant would qualify, before any application exists.

    Uses the self-assessment profile (score 300-850). Nothing is persisted.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    form = request_body.model_dump(exclude={"farmer_id"})

    try:
        result = await run_eligibility_check(records_client, form, farmer_id=request_body.farmer_id)
    except AssessmentUnavailable as e:
        records_fetch_failures_counter.inc()
        logging.error(f"Eligibility check unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Farmer records unavailable; eligibility not assessed")
    except InvalidScoringInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    result = DecisionRecorder().present(result)

    record_assessment(result.profile.value, result.risk_tier, result.eligible, result.recommendation)
    log_assessment(
        request_id,
        result.profile.value,
        request_body.farmer_id,
        result.score,
        result.risk_tier,
        "eligible" if result.eligible else "not_eligible",
        (time.time() - start_time) * 1000,
    )

    return ScoreResultResponse.from_result(result)
