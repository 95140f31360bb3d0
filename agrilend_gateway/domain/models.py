"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class ScoringProfile(str, Enum):
    """Which scoring profile produced a score (ranges are not interchangeable)"""

    SELF_ASSESSMENT = "self_assessment"
    UNDERWRITING = "underwriting"

    @classmethod
    def _missing_(cls, value):
        # Also accept "self-assessment" / "Self Assessment"
        if isinstance(value, str):
            key = "_".join(value.strip().lower().replace("-", " ").split())
            for member in cls:
                if member.value == key:
                    return member
        return None


@dataclass
class ApplicantProfile:
    """Farmer attributes as supplied by the applicant or the records store"""

    monthly_income: Optional[float] = None  # ETB
    farm_size_ha: Optional[float] = None
    years_farming: Optional[float] = None
    has_collateral: Optional[bool] = None
    existing_monthly_obligations: Optional[float] = None  # ETB
    primary_crop: Optional[str] = None
    region: Optional[str] = None
    stored_credit_score: Optional[float] = None
    verification_status: Optional[str] = None  # "verified" | "pending" | "rejected"


@dataclass
class LoanRequest:
    """Requested loan amount and purpose"""

    requested_amount: Optional[float] = None  # ETB
    purpose: Optional[str] = None


@dataclass
class PaymentRecord:
    """Single repayment made by a farmer"""

    amount: float
    status: str  # "completed" | "pending" | "failed"
    paid_on: Optional[date] = None


@dataclass(frozen=True)
class ScoringInput:
    """Canonical, fully-defaulted scoring input produced by the normalizer"""

    monthly_income: float = 0.0
    farm_size_ha: float = 0.0
    years_farming: float = 0.0
    has_collateral: bool = False
    existing_monthly_obligations: float = 0.0
    primary_crop: str = ""
    region: str = ""
    stored_credit_score: float = 0.0
    verification_status: str = "pending"
    requested_amount: float = 0.0
    purpose: str = ""
    payments: Tuple[PaymentRecord, ...] = ()

    @property
    def payment_completion_ratio(self) -> float:
        """Share of known payments that completed; 0.0 with no history"""
        if not self.payments:
            return 0.0
        completed = sum(1 for p in self.payments if p.status == "completed")
        return completed / len(self.payments)

    @property
    def obligation_ratio(self) -> float:
        """Existing monthly obligations as a share of monthly income"""
        if self.existing_monthly_obligations <= 0:
            return 0.0
        if self.monthly_income <= 0:
            return math.inf
        return self.existing_monthly_obligations / self.monthly_income


@dataclass(frozen=True)
class FactorContribution:
    """What one scoring factor measured and added to the score"""

    name: str
    value: object
    delta: int
    narration: Optional[str] = None
    flag: Optional[str] = None


@dataclass(frozen=True)
class ScoreResult:
    """Output of one engine run. Never mutated; recompute instead."""

    profile: ScoringProfile
    score: int
    score_range: Tuple[int, int]
    risk_tier: str  # "low" | "medium" | "high"
    max_loan_amount: int
    recommended_amount: int
    term_months: int
    interest_rate: float
    eligible: Optional[bool] = None  # self-assessment only
    recommendation: Optional[str] = None  # underwriting only: approve | reject | review
    reasons: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    risk_factors: Tuple[str, ...] = ()
    contributions: Tuple[FactorContribution, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class PortfolioRiskSummary:
    """Aggregate risk view over a set of loan applications"""

    total_applications: int
    low_risk_count: int
    medium_risk_count: int
    high_risk_count: int
    average_risk_score: float
    high_risk_pending: int
    risk_factors: Tuple[Tuple[str, int], ...] = ()
