"""Finance application validator - fail-fast structural and range checks"""

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Union

from car_finance_gateway.domain.exceptions import ValidationError
from car_finance_gateway.domain.models import ApplicationOutcome, FinanceApplication, VEHICLE_CONDITIONS

ISO_DATE_PREFIX = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}")

MIN_CREDIT_SCORE = 300
MAX_CREDIT_SCORE = 850
MIN_VEHICLE_YEAR = 1900
MAX_VEHICLE_YEAR_AHEAD = 2


@dataclass(frozen=True)
class Valid:
    """Candidate satisfies every rule"""

    application: FinanceApplication
    ok = True


@dataclass(frozen=True)
class Invalid:
    """Candidate violates a rule; reason names the first one hit"""

    reason: str
    ok = False


ValidationResult = Union[Valid, Invalid]


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # ints are always finite; isfinite would overflow on huge ones
    return not isinstance(value, float) or math.isfinite(value)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _in_range(value: Any, low: float, high: Optional[float] = None) -> bool:
    if not _is_number(value) or value < low:
        return False
    return high is None or value <= high


def _check_header(candidate: Mapping[str, Any]) -> Optional[str]:
    application_id = candidate.get("applicationId")
    if not isinstance(application_id, str) or not application_id:
        return "Invalid or missing applicationId"

    submission_date = candidate.get("submissionDate")
    if not isinstance(submission_date, str) or not submission_date:
        return "Invalid or missing submissionDate"
    if not ISO_DATE_PREFIX.match(submission_date):
        return "submissionDate must be in ISO 8601 format (YYYY-MM-DD)"

    outcome = candidate.get("outcome")
    if outcome not in [o.value for o in ApplicationOutcome]:
        return "Invalid or missing outcome"
    return None


def _check_customer(customer: Any) -> Optional[str]:
    if not isinstance(customer, Mapping):
        return "Invalid or missing customer profile"

    if not _in_range(customer.get("creditScore"), MIN_CREDIT_SCORE, MAX_CREDIT_SCORE):
        return f"Invalid creditScore (must be between {MIN_CREDIT_SCORE} and {MAX_CREDIT_SCORE})"
    for field in ("annualIncomeZar", "downPaymentZar", "tradeInValueZar"):
        if not _in_range(customer.get(field), 0):
            return f"Invalid {field} (must be non-negative)"
    if not _in_range(customer.get("debtToIncomeRatio"), 0, 1):
        return "Invalid debtToIncomeRatio (must be between 0 and 1)"
    if not _is_text(customer.get("applicantLocation")):
        return "Invalid or missing applicantLocation"
    return None


def _check_vehicle(vehicle: Any, today: date) -> Optional[str]:
    if not isinstance(vehicle, Mapping):
        return "Invalid or missing vehicle data"

    if not _is_text(vehicle.get("make")):
        return "Invalid or missing vehicle make"
    if not _is_text(vehicle.get("model")):
        return "Invalid or missing vehicle model"
    if not _in_range(vehicle.get("year"), MIN_VEHICLE_YEAR, today.year + MAX_VEHICLE_YEAR_AHEAD):
        return "Invalid vehicle year"
    for field in ("msrpZar", "salePriceZar", "mileage"):
        if not _in_range(vehicle.get(field), 0):
            return f"Invalid {field} (must be non-negative)"
    if vehicle.get("condition") not in VEHICLE_CONDITIONS:
        return 'Invalid vehicle condition (must be "New" or "Used")'
    return None


def _check_financing(financing: Any) -> Optional[str]:
    if not isinstance(financing, Mapping):
        return "Invalid or missing financing data"

    if not _in_range(financing.get("loanAmountRequestedZar"), 0):
        return "Invalid loanAmountRequestedZar (must be non-negative)"
    if not _in_range(financing.get("termLengthMonths"), 1):
        return "Invalid termLengthMonths (must be positive)"
    if not _in_range(financing.get("annualPercentageRate"), 0, 1):
        return "Invalid annualPercentageRate (must be between 0 and 1)"
    if not _is_text(financing.get("lenderId")):
        return "Invalid or missing lenderId"
    return None


def _check_rejection(candidate: Mapping[str, Any]) -> Optional[str]:
    if candidate.get("outcome") != ApplicationOutcome.REJECTED.value:
        return None

    details = candidate.get("rejectionDetails")
    if not isinstance(details, Mapping):
        return "rejectionDetails required when outcome is REJECTED"
    if not _is_text(details.get("reason")):
        return "Invalid or missing rejection reason"
    notes = details.get("internalNotes")
    if notes is not None and not isinstance(notes, str):
        return "Invalid internalNotes (must be a string)"
    return None


def validate_application(candidate: Any, today: Optional[date] = None) -> ValidationResult:
    """
    Validate an untyped candidate record against the finance application schema.

    Checks run in a fixed order: top-level fields, then customer, vehicle,
    financing and finally rejectionDetails. Only the first violation is
    reported.

    Args:
        candidate: Arbitrary decoded JSON value
        today: Reference date for the vehicle year ceiling (defaults to today)

    Returns:
        Valid with the typed application, or Invalid with a single reason
    """
    if not isinstance(candidate, Mapping):
        return Invalid("Application must be an object")

    today = today or date.today()
    reason = (
        _check_header(candidate)
        or _check_customer(candidate.get("customer"))
        or _check_vehicle(candidate.get("vehicle"), today)
        or _check_financing(candidate.get("financing"))
        or _check_rejection(candidate)
    )
    if reason:
        return Invalid(reason)

    return Valid(FinanceApplication.from_document(dict(candidate)))


def ensure_valid(candidate: Any, today: Optional[date] = None) -> FinanceApplication:
    """Validate and return the typed application, raising ValidationError on the first violation"""
    result = validate_application(candidate, today)
    if isinstance(result, Invalid):
        raise ValidationError(result.reason)
    return result.application
