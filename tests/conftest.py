"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from agrilend_gateway.api.main import create_app
from agrilend_gateway.infrastructure.database.models import Base
from agrilend_gateway.infrastructure.database.session import get_db
from agrilend_gateway.domain.models import ApplicantProfile, PaymentRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def verified_farmer() -> ApplicantProfile:
    """Verified farmer with a strong stored credit score"""
    return ApplicantProfile(
        monthly_income=4000,
        farm_size_ha=3,
        years_farming=8,
        has_collateral=True,
        existing_monthly_obligations=0,
        primary_crop="teff",
        region="Oromia",
        stored_credit_score=750,
        verification_status="verified",
    )


@pytest.fixture
def reliable_payments() -> list[PaymentRecord]:
    """20 monthly repayments, 19 completed (95% completion)"""
    start = date.today() - timedelta(days=600)
    return [
        PaymentRecord(
            amount=2500,
            status="failed" if month == 7 else "completed",
            paid_on=start + timedelta(days=month * 30),
        )
        for month in range(20)
    ]
