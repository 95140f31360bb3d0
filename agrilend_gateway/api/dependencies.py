"""Dependency injection for FastAPI endpoints"""

import uuid
from fastapi import HTTPException, Request
from agrilend_gateway.infrastructure.clients.records import RecordsClient
from agrilend_gateway.infrastructure.clients.webhook import DecisionWebhookClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_records_client() -> RecordsClient:
    """Provide records API client instance"""
    return RecordsClient()


def get_webhook_client() -> DecisionWebhookClient:
    """Provide decision webhook client instance"""
    return DecisionWebhookClient()


def parse_application_id(application_id: str) -> uuid.UUID:
    """Path parameter to UUID; 400 on malformed IDs"""
    try:
        return uuid.UUID(application_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid application ID format")
