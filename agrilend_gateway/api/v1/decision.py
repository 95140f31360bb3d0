"""POST /v1/applications/{application_id}/decision - Officer approve/reject"""

import logging
from fastapi import APIRouter, Depends, HTTPException, BackgroundTasks, Request
from sqlalchemy.orm import Session

from agrilend_gateway.api.v1.schemas import ApplicationResponse, DecisionRequest
from agrilend_gateway.api.v1.applications import to_application_response
from agrilend_gateway.api.dependencies import get_request_id, get_webhook_client, parse_application_id
from agrilend_gateway.infrastructure.database.session import get_db
from agrilend_gateway.infrastructure.database.repositories import LoanApplicationRepository
from agrilend_gateway.infrastructure.clients.webhook import DecisionWebhookClient
from agrilend_gateway.domain.recorder import DecisionRecorder
from agrilend_gateway.domain.exceptions import (
    ApplicationNotFoundError,
    DecisionAlreadyRecordedError,
    InvalidDecisionError,
)
from agrilend_gateway.infrastructure.observability.metrics import decision_commit_counter
from agrilend_gateway.infrastructure.observability.logging import log_decision_commit

router = APIRouter()


@router.post("/applications/{application_id}/decision", response_model=ApplicationResponse)
async def commit_decision(
    application_id: str,
    request_body: DecisionRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    webhook_client: DecisionWebhookClient = Depends(get_webhook_client),
):
    """
    Record an officer's decision on a pending application.

    Flow:
    1. Write status + notes onto the application (once; later attempts get 409)
    2. Commit
    3. Queue a LOAN_DECISION_COMMITTED webhook event
    4. Return the updated application
    """
    request_id = get_request_id(request)
    application_uuid = parse_application_id(application_id)
    recorder = DecisionRecorder(LoanApplicationRepository(db))

    try:
        application = recorder.commit(application_uuid, request_body.action, request_body.notes)
        db.commit()
        db.refresh(application)

    except ApplicationNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    except DecisionAlreadyRecordedError as e:
        db.rollback()
        raise HTTPException(status_code=409, detail=str(e))

    except InvalidDecisionError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error committing decision: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Decision was not recorded")

    decision_commit_counter.labels(status=application.status).inc()
    log_decision_commit(request_id, str(application.id), application.status, request_body.officer_id)

    background_tasks.add_task(
        webhook_client.send_decision_event,
        {
            "event": "LOAN_DECISION_COMMITTED",
            "application_id": str(application.id),
            "farmer_id": application.farmer_id,
            "status": application.status,
            "notes": application.notes,
            "officer_id": request_body.officer_id,
        },
    )

    return to_application_response(application)
