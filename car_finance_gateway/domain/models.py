"""Domain models - pure Python dataclasses representing finance application records"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ApplicationOutcome(str, Enum):
    """Final disposition of a finance application"""

    SUCCESS = "SUCCESS"
    REJECTED = "REJECTED"


VEHICLE_CONDITIONS = ("New", "Used")


@dataclass
class CustomerProfile:
    """Financial profile of the applicant"""

    credit_score: float
    annual_income_zar: float
    down_payment_zar: float
    trade_in_value_zar: float
    debt_to_income_ratio: float  # decimal, e.g. 0.45 for 45%
    applicant_location: str

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "CustomerProfile":
        return cls(
            credit_score=doc["creditScore"],
            annual_income_zar=doc["annualIncomeZar"],
            down_payment_zar=doc["downPaymentZar"],
            trade_in_value_zar=doc["tradeInValueZar"],
            debt_to_income_ratio=doc["debtToIncomeRatio"],
            applicant_location=doc["applicantLocation"],
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "creditScore": self.credit_score,
            "annualIncomeZar": self.annual_income_zar,
            "downPaymentZar": self.down_payment_zar,
            "tradeInValueZar": self.trade_in_value_zar,
            "debtToIncomeRatio": self.debt_to_income_ratio,
            "applicantLocation": self.applicant_location,
        }


@dataclass
class VehicleData:
    """Vehicle being financed"""

    make: str
    model: str
    year: int
    msrp_zar: float
    sale_price_zar: float
    mileage: float
    condition: str  # "New" or "Used"

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "VehicleData":
        return cls(
            make=doc["make"],
            model=doc["model"],
            year=doc["year"],
            msrp_zar=doc["msrpZar"],
            sale_price_zar=doc["salePriceZar"],
            mileage=doc["mileage"],
            condition=doc["condition"],
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "msrpZar": self.msrp_zar,
            "salePriceZar": self.sale_price_zar,
            "mileage": self.mileage,
            "condition": self.condition,
        }


@dataclass
class FinancingData:
    """Requested financing terms"""

    loan_amount_requested_zar: float
    term_length_months: int
    annual_percentage_rate: float  # decimal, e.g. 0.059 for 5.9%
    lender_id: str

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "FinancingData":
        return cls(
            loan_amount_requested_zar=doc["loanAmountRequestedZar"],
            term_length_months=doc["termLengthMonths"],
            annual_percentage_rate=doc["annualPercentageRate"],
            lender_id=doc["lenderId"],
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "loanAmountRequestedZar": self.loan_amount_requested_zar,
            "termLengthMonths": self.term_length_months,
            "annualPercentageRate": self.annual_percentage_rate,
            "lenderId": self.lender_id,
        }


@dataclass
class RejectionDetails:
    """Lender feedback for a rejected application"""

    reason: str
    internal_notes: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "RejectionDetails":
        return cls(reason=doc["reason"], internal_notes=doc.get("internalNotes"))

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {"reason": self.reason}
        if self.internal_notes is not None:
            doc["internalNotes"] = self.internal_notes
        return doc


@dataclass
class FinanceApplication:
    """One car-financing case with its final outcome"""

    application_id: str
    submission_date: str  # ISO 8601 date prefix, e.g. "2025-01-01"
    outcome: ApplicationOutcome
    customer: CustomerProfile
    vehicle: VehicleData
    financing: FinancingData
    rejection_details: Optional[RejectionDetails] = None  # only for REJECTED

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "FinanceApplication":
        """Build from the camelCase document shape used on the wire and on disk"""
        outcome = ApplicationOutcome(doc["outcome"])
        rejection = doc.get("rejectionDetails")
        return cls(
            application_id=doc["applicationId"],
            submission_date=doc["submissionDate"],
            outcome=outcome,
            customer=CustomerProfile.from_document(doc["customer"]),
            vehicle=VehicleData.from_document(doc["vehicle"]),
            financing=FinancingData.from_document(doc["financing"]),
            rejection_details=(
                RejectionDetails.from_document(rejection)
                if outcome is ApplicationOutcome.REJECTED and rejection is not None
                else None
            ),
        )

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "applicationId": self.application_id,
            "submissionDate": self.submission_date,
            "outcome": self.outcome.value,
            "customer": self.customer.to_document(),
            "vehicle": self.vehicle.to_document(),
            "financing": self.financing.to_document(),
        }
        if self.rejection_details is not None:
            doc["rejectionDetails"] = self.rejection_details.to_document()
        return doc
