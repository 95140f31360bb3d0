"""Attribute normalizer - raw applicant, loan and payment data to ScoringInput"""

import dataclasses
import math
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from agrilend_gateway.domain.exceptions import InvalidScoringInputError
from agrilend_gateway.domain.models import (
    ApplicantProfile,
    LoanRequest,
    PaymentRecord,
    ScoringInput,
)
from agrilend_gateway.domain.sizing import round_half_up
from agrilend_gateway.utils.date_utils import chronological_key, parse_date

RawApplicant = Union[ApplicantProfile, Mapping[str, Any], None]
RawLoan = Union[LoanRequest, Mapping[str, Any], None]
RawPayment = Union[PaymentRecord, Mapping[str, Any]]

VERIFICATION_STATUSES = frozenset({"verified", "pending", "rejected"})
DEFAULT_VERIFICATION_STATUS = "pending"

# Canonical field -> accepted keys (snake_case first, then form / records-store aliases)
APPLICANT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "monthly_income": ("monthly_income", "monthlyIncome"),
    "farm_size_ha": ("farm_size_ha", "farm_size", "farmSize", "farm_size_hectares"),
    "years_farming": ("years_farming", "yearsOfFarming", "years_of_farming", "farming_experience"),
    "has_collateral": ("has_collateral", "hasCollateral"),
    "existing_monthly_obligations": (
        "existing_monthly_obligations",
        "existing_loans",
        "existingLoans",
    ),
    "primary_crop": ("primary_crop", "primaryCrop"),
    "region": ("region", "location"),
    "stored_credit_score": ("stored_credit_score", "credit_score", "creditScore"),
    "verification_status": ("verification_status", "verificationStatus"),
}
ANNUAL_INCOME_KEYS = ("annual_income", "annualIncome")

LOAN_ALIASES: Dict[str, Tuple[str, ...]] = {
    "requested_amount": ("requested_amount", "requestedAmount", "amount"),
    "purpose": ("purpose",),
}

PAYMENT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "amount": ("amount",),
    "status": ("status",),
    "paid_on": ("paid_on", "payment_date", "paymentDate", "date"),
}


def normalize(
    applicant: RawApplicant = None,
    loan: RawLoan = None,
    payments: Optional[Iterable[RawPayment]] = None,
) -> ScoringInput:
    """
    Validate and default raw inputs into a canonical ScoringInput.

    Missing values are not errors: numbers default to 0, flags to False,
    verification to "pending" and purpose to "". Unknown enum values are kept
    neutral. Only malformed input (wrong container type, non-numeric text,
    NaN, infinities) raises InvalidScoringInputError.
    """
    applicant_data = _as_mapping(applicant, ApplicantProfile, "applicant")
    loan_data = _as_mapping(loan, LoanRequest, "loan")

    raw_income = _pick(applicant_data, APPLICANT_ALIASES["monthly_income"])
    if raw_income is None:
        # Records store keeps annual income; the eligibility form works monthly
        annual_income = _number(_pick(applicant_data, ANNUAL_INCOME_KEYS), "annual_income")
        monthly_income = float(round_half_up(annual_income / 12))
    else:
        monthly_income = _number(raw_income, "monthly_income")

    return ScoringInput(
        monthly_income=monthly_income,
        farm_size_ha=_number(_pick(applicant_data, APPLICANT_ALIASES["farm_size_ha"]), "farm_size_ha"),
        years_farming=_number(_pick(applicant_data, APPLICANT_ALIASES["years_farming"]), "years_farming"),
        has_collateral=_flag(_pick(applicant_data, APPLICANT_ALIASES["has_collateral"]), "has_collateral"),
        existing_monthly_obligations=_number(
            _pick(applicant_data, APPLICANT_ALIASES["existing_monthly_obligations"]),
            "existing_monthly_obligations",
        ),
        primary_crop=_text(_pick(applicant_data, APPLICANT_ALIASES["primary_crop"])),
        region=_text(_pick(applicant_data, APPLICANT_ALIASES["region"])),
        stored_credit_score=_number(
            _pick(applicant_data, APPLICANT_ALIASES["stored_credit_score"]),
            "stored_credit_score",
        ),
        verification_status=normalize_verification_status(
            _pick(applicant_data, APPLICANT_ALIASES["verification_status"])
        ),
        requested_amount=_number(_pick(loan_data, LOAN_ALIASES["requested_amount"]), "requested_amount"),
        purpose=normalize_purpose(_pick(loan_data, LOAN_ALIASES["purpose"])),
        payments=normalize_payments(payments),
    )


def normalize_payments(payments: Optional[Iterable[RawPayment]]) -> Tuple[PaymentRecord, ...]:
    """Canonical payment records ordered by date, undated records last"""
    if payments is None:
        return ()
    if isinstance(payments, (str, bytes, Mapping)):
        raise InvalidScoringInputError("payments must be a sequence of payment records")

    records = []
    for raw in payments:
        data = _as_mapping(raw, PaymentRecord, "payment")
        try:
            paid_on = parse_date(_pick(data, PAYMENT_ALIASES["paid_on"]))
        except ValueError as e:
            raise InvalidScoringInputError(f"Invalid payment date: {e}") from e

        records.append(
            PaymentRecord(
                amount=_number(_pick(data, PAYMENT_ALIASES["amount"]), "payment.amount"),
                status=_text(_pick(data, PAYMENT_ALIASES["status"])).lower(),
                paid_on=paid_on,
            )
        )

    return tuple(sorted(records, key=lambda p: chronological_key(p.paid_on)))


def normalize_verification_status(value: Any) -> str:
    status = _text(value).lower()
    return status if status in VERIFICATION_STATUSES else DEFAULT_VERIFICATION_STATUS


def normalize_purpose(value: Any) -> str:
    """Lower-case purpose key with spaces and hyphens as underscores"""
    return "_".join(_text(value).lower().replace("-", " ").split())


def _as_mapping(value: Any, expected: type, label: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, expected):
        return dataclasses.asdict(value)
    if isinstance(value, Mapping):
        return value
    raise InvalidScoringInputError(
        f"{label} must be a mapping or {expected.__name__}, got {type(value).__name__}"
    )


def _pick(data: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _number(value: Any, field_name: str) -> float:
    """Coerce to a non-negative float; None and blank text count as 0"""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise InvalidScoringInputError(f"{field_name} must be numeric, got a boolean")
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError as e:
            raise InvalidScoringInputError(f"{field_name} must be numeric, got {value!r}") from e
    else:
        raise InvalidScoringInputError(
            f"{field_name} must be numeric, got {type(value).__name__}"
        )

    if math.isnan(number) or math.isinf(number):
        raise InvalidScoringInputError(f"{field_name} must be a finite number")
    return max(0.0, number)


def _flag(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "y", "1"):
            return True
        if text in ("false", "no", "n", "0", ""):
            return False
    raise InvalidScoringInputError(f"{field_name} must be a boolean, got {value!r}")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
