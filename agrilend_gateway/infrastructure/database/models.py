"""SQLAlchemy ORM models for loan applications and their assessments"""

import uuid
from sqlalchemy import Column, Float, DateTime, Integer, ForeignKey, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class LoanApplication(Base):
    """Loan application; status and notes are set once by an officer decision"""

    __tablename__ = "loan_application"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    farmer_id = Column(Text, nullable=False, index=True)
    amount = Column(Float, nullable=False)  # ETB
    purpose = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default="pending")  # pending | approved | rejected
    notes = Column(Text, nullable=False, default="")
    risk_score = Column(Integer, nullable=True)  # latest underwriting score
    decided_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    assessments = relationship(
        "RiskAssessmentRecord",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="RiskAssessmentRecord.created_at",
    )


class RiskAssessmentRecord(Base):
    """Audit trail of underwriting results shown to institution staff"""

    __tablename__ = "risk_assessment"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    application_id = Column(
        UUID(as_uuid=True), ForeignKey("loan_application.id", ondelete="CASCADE"), nullable=False, index=True
    )
    profile = Column(Text, nullable=False)
    score = Column(Integer, nullable=False)
    risk_tier = Column(Text, nullable=False)
    recommendation = Column(Text, nullable=True)
    max_loan_amount = Column(Integer, nullable=False)
    suggested_amount = Column(Integer, nullable=False)
    term_months = Column(Integer, nullable=False)
    interest_rate = Column(Float, nullable=False)
    reasons = Column(JSON, nullable=False, default=list)
    recommendations = Column(JSON, nullable=False, default=list)
    risk_factors = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    application = relationship("LoanApplication", back_populates="assessments")
