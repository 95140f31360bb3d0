"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding timestamp, level and service name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "agrilend-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging on the root logger"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_assessment(
    request_id: str,
    profile: str,
    subject_id: str | None,
    score: int,
    risk_tier: str,
    verdict: str,
    duration_ms: float,
) -> None:
    """Log structured assessment outcome for analysis"""
    logging.info(
        "Assessment completed",
        extra={
            "request_id": request_id,
            "step": "assessment_complete",
            "profile": profile,
            "subject_id": subject_id,
            "score": score,
            "risk_tier": risk_tier,
            "verdict": verdict,
            "duration_ms": duration_ms,
        },
    )


def log_decision_commit(request_id: str, application_id: str, status: str, officer_id: str | None) -> None:
    """Log an officer decision written to a loan application"""
    logging.info(
        "Decision committed",
        extra={
            "request_id": request_id,
            "step": "decision_commit",
            "application_id": application_id,
            "status": status,
            "officer_id": officer_id,
        },
    )
