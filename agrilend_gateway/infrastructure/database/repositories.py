"""Data access layer for loan applications and assessments"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.orm import Session
from agrilend_gateway.infrastructure.database.models import LoanApplication, RiskAssessmentRecord
from agrilend_gateway.domain.exceptions import ApplicationNotFoundError, DecisionAlreadyRecordedError
from agrilend_gateway.domain.models import ScoreResult


class LoanApplicationRepository:
    """Repository for loan applications"""

    def __init__(self, db: Session):
        self.db = db

    def create_application(self, farmer_id: str, amount: float, purpose: str | None) -> LoanApplication:
        """Store a new pending application"""
        application = LoanApplication(
            farmer_id=farmer_id,
            amount=amount,
            purpose=purpose,
            status="pending",
            notes="",
        )
        self.db.add(application)
        self.db.flush()
        return application

    def get_application(self, application_id: uuid.UUID) -> Optional[LoanApplication]:
        return (
            self.db.query(LoanApplication)
            .filter(LoanApplication.id == application_id)
            .first()
        )

    def list_applications(self, status: str | None = None, limit: int | None = 500) -> List[LoanApplication]:
        """Most recent applications first, optionally filtered by status; limit=None returns all"""
        query = self.db.query(LoanApplication)
        if status:
            query = query.filter(LoanApplication.status == status)
        query = query.order_by(LoanApplication.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def update_risk_score(self, application: LoanApplication, score: int) -> LoanApplication:
        application.risk_score = score
        self.db.flush()
        return application

    def commit_decision(self, application_id: uuid.UUID, status: str, notes: str) -> LoanApplication:
        """
        Write an officer's decision onto a pending application.

        Raises:
            ApplicationNotFoundError: No application with this ID
            DecisionAlreadyRecordedError: Application is no longer pending
        """
        application = self.get_application(application_id)
        if application is None:
            raise ApplicationNotFoundError(f"Loan application {application_id} not found")
        if application.status != "pending":
            raise DecisionAlreadyRecordedError(
                f"Loan application {application_id} is already {application.status}"
            )

        application.status = status
        application.notes = notes
        application.decided_at = datetime.now(timezone.utc)
        self.db.flush()
        return application


class AssessmentRepository:
    """Repository for underwriting assessment audit records"""

    def __init__(self, db: Session):
        self.db = db

    def create_assessment(self, application_id: uuid.UUID, result: ScoreResult) -> RiskAssessmentRecord:
        """Persist an underwriting result shown to staff"""
        record = RiskAssessmentRecord(
            application_id=application_id,
            profile=result.profile.value,
            score=result.score,
            risk_tier=result.risk_tier,
            recommendation=result.recommendation,
            max_loan_amount=result.max_loan_amount,
            suggested_amount=result.recommended_amount,
            term_months=result.term_months,
            interest_rate=result.interest_rate,
            reasons=list(result.reasons),
            recommendations=list(result.recommendations),
            risk_factors=list(result.risk_factors),
        )
        self.db.add(record)
        self.db.flush()
        return record

    def get_assessments(self, application_id: uuid.UUID, limit: int = 20) -> List[RiskAssessmentRecord]:
        """Fetch recent assessments for an application"""
        return (
            self.db.query(RiskAssessmentRecord)
            .filter(RiskAssessmentRecord.application_id == application_id)
            .order_by(RiskAssessmentRecord.created_at.desc())
            .limit(limit)
            .all()
        )
