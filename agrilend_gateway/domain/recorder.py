"""Decision recorder - the only place an assessment outcome becomes durable state"""

import logging
import uuid
from typing import Any, Optional, Protocol

from agrilend_gateway.domain.exceptions import InvalidDecisionError
from agrilend_gateway.domain.models import ScoreResult

logger = logging.getLogger(__name__)

ACTION_TO_STATUS = {
    "approve": "approved",
    "reject": "rejected",
}


class DecisionStore(Protocol):
    def commit_decision(self, application_id: uuid.UUID, status: str, notes: str) -> Any:
        ...


class DecisionRecorder:
    """Hands results back to applicants and writes officer decisions"""

    def __init__(self, store: Optional[DecisionStore] = None):
        self.store = store

    def present(self, result: ScoreResult) -> ScoreResult:
        """Self-assessment results are displayed, never persisted"""
        return result

    def commit(self, application_id: uuid.UUID, action: str, notes: str = "") -> Any:
        """
        Write an officer's approve/reject action and notes onto the application.

        Returns the updated application record from the store.

        Raises:
            InvalidDecisionError: action is not approve or reject
        """
        status = ACTION_TO_STATUS.get((action or "").strip().lower())
        if status is None:
            raise InvalidDecisionError(f"Unsupported decision action: {action!r}")
        if self.store is None:
            raise RuntimeError("DecisionRecorder.commit requires a decision store")

        record = self.store.commit_decision(application_id, status, (notes or "").strip())
        logger.info(
            "Decision recorded",
            extra={"application_id": str(application_id), "status": status},
        )
        return record
