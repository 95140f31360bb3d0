"""
Assessment boundary - fetch records, then run the pure engine.

All I/O happens here, before the engine is called. A failed fetch raises
AssessmentUnavailable and nothing is scored; results are never synthesized
from partial or made-up data.
"""

import asyncio
import dataclasses
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, List

from agrilend_gateway.domain.engine import assess
from agrilend_gateway.domain.exceptions import AssessmentUnavailable, RecordsAPIError
from agrilend_gateway.domain.models import (
    ApplicantProfile,
    LoanRequest,
    PaymentRecord,
    ScoreResult,
    ScoringInput,
    ScoringProfile,
)
from agrilend_gateway.domain.normalizer import normalize

logger = logging.getLogger(__name__)

LOAN_FIELDS = ("requested_amount", "purpose")


class RecordsSource(Protocol):
    async def fetch_applicant_profile(self, farmer_id: str) -> ApplicantProfile:
        ...

    async def fetch_payment_history(self, farmer_or_loan_id: str) -> List[PaymentRecord]:
        ...


async def load_underwriting_input(
    records: RecordsSource,
    farmer_id: str,
    loan: LoanRequest,
) -> ScoringInput:
    """
    Fetch profile and payment history concurrently and normalize them.

    Raises:
        AssessmentUnavailable: Either fetch failed
    """
    try:
        profile, payments = await asyncio.gather(
            records.fetch_applicant_profile(farmer_id),
            records.fetch_payment_history(farmer_id),
        )
    except RecordsAPIError as e:
        logger.warning(f"Underwriting input unavailable for farmer {farmer_id}: {e}")
        raise AssessmentUnavailable(f"Records for farmer {farmer_id} could not be retrieved") from e

    return normalize(profile, loan, payments)


async def run_risk_assessment(
    records: RecordsSource,
    farmer_id: str,
    loan: LoanRequest,
) -> ScoreResult:
    """Underwriting assessment for a stored application"""
    scoring_input = await load_underwriting_input(records, farmer_id, loan)
    return assess(scoring_input, ScoringProfile.UNDERWRITING)


async def run_eligibility_check(
    records: RecordsSource,
    form: Mapping[str, Any],
    farmer_id: Optional[str] = None,
) -> ScoreResult:
    """
    Self-assessment from the eligibility form.

    When a farmer_id is given, fields left empty on the form are prefilled
    from the farmer's stored profile.

    Raises:
        AssessmentUnavailable: farmer_id given but the profile could not be fetched
    """
    applicant: Dict[str, Any] = {k: v for k, v in form.items() if k not in LOAN_FIELDS}
    loan = {k: form.get(k) for k in LOAN_FIELDS}

    if farmer_id:
        try:
            stored = await records.fetch_applicant_profile(farmer_id)
        except RecordsAPIError as e:
            logger.warning(f"Eligibility prefill unavailable for farmer {farmer_id}: {e}")
            raise AssessmentUnavailable(f"Profile for farmer {farmer_id} could not be retrieved") from e

        prefill = {k: v for k, v in dataclasses.asdict(stored).items() if v is not None}
        applicant = {**prefill, **{k: v for k, v in applicant.items() if v is not None}}

    return assess(normalize(applicant, loan), ScoringProfile.SELF_ASSESSMENT)
