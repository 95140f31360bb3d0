"""Records store HTTP client for farmer profiles and payment history"""

import httpx
from typing import Any, Dict, List
from agrilend_gateway.domain.models import ApplicantProfile, PaymentRecord
from agrilend_gateway.domain.exceptions import RecordsAPIError
from agrilend_gateway.domain.sizing import round_half_up
from agrilend_gateway.utils.date_utils import chronological_key, parse_date
from agrilend_gateway.config import settings


class RecordsClient:
    """Client for the hosted farmer/payment records API"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.records_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def fetch_applicant_profile(self, farmer_id: str) -> ApplicantProfile:
        """
        Fetch a farmer's profile.

        Raises:
            RecordsAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(f"/farmers/{farmer_id}", params=None, what="farmer profile")
        try:
            return parse_applicant_profile(data)
        except (KeyError, ValueError, TypeError) as e:
            raise RecordsAPIError(f"Invalid farmer profile from records API: {e}") from e

    async def fetch_payment_history(self, farmer_or_loan_id: str) -> List[PaymentRecord]:
        """
        Fetch every known payment for a farmer or loan, oldest first.

        Raises:
            RecordsAPIError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(
            "/payments",
            params={"owner_id": farmer_or_loan_id},
            what="payment history",
        )
        try:
            payments = [
                PaymentRecord(
                    amount=float(p["amount"]),
                    status=p["status"],
                    paid_on=parse_date(p.get("payment_date")),
                )
                for p in data.get("payments", [])
            ]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise RecordsAPIError(f"Invalid payment data from records API: {e}") from e

        return sorted(payments, key=lambda p: chronological_key(p.paid_on))

    async def _get_json(self, path: str, params: Dict[str, Any] | None, what: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                raise RecordsAPIError(f"Records API timeout after {self.timeout}s fetching {what}") from e
            except httpx.HTTPStatusError as e:
                raise RecordsAPIError(f"Records API error {e.response.status_code} fetching {what}") from e
            except httpx.RequestError as e:
                raise RecordsAPIError(f"Records API unreachable fetching {what}: {e}") from e
            except ValueError as e:
                raise RecordsAPIError(f"Records API returned invalid JSON for {what}") from e

        if not isinstance(data, dict):
            raise RecordsAPIError(f"Unexpected {what} payload from records API")
        return data


def parse_applicant_profile(data: Dict[str, Any]) -> ApplicantProfile:
    """Map a records-store farmer row onto ApplicantProfile; absent fields stay None"""
    monthly_income = data.get("monthly_income")
    if monthly_income is None and data.get("annual_income") is not None:
        monthly_income = round_half_up(float(data["annual_income"]) / 12)

    return ApplicantProfile(
        monthly_income=monthly_income,
        farm_size_ha=_first_present(data, "farm_size_hectares", "farm_size"),
        years_farming=data.get("farming_experience"),
        has_collateral=data.get("has_collateral"),
        existing_monthly_obligations=data.get("existing_loans"),
        primary_crop=data.get("primary_crop"),
        region=data.get("region"),
        stored_credit_score=data.get("credit_score"),
        verification_status=data.get("verification_status"),
    )


def _first_present(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None
