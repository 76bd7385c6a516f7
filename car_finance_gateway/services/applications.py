"""Read and write services over the application store"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from car_finance_gateway.domain.exceptions import ValidationError
from car_finance_gateway.domain.models import ApplicationOutcome, FinanceApplication
from car_finance_gateway.domain.validation import ensure_valid
from car_finance_gateway.infrastructure.storage.store import ApplicationStore


@dataclass(frozen=True)
class ApplicationFilter:
    """Optional exact-match predicates, combined with AND"""

    application_id: Optional[str] = None
    outcome: Optional[str] = None


class QueryService:
    """Read-only filtering over the full dataset"""

    def __init__(self, store: ApplicationStore):
        self.store = store

    def query(self, filters: Optional[ApplicationFilter] = None) -> List[FinanceApplication]:
        """
        Return stored applications matching every present filter, in stored order.

        Empty filter values impose no constraint. No match yields an empty list.
        """
        filters = filters or ApplicationFilter()
        applications = self.store.load()

        if filters.application_id:
            applications = [a for a in applications if a.application_id == filters.application_id]

        if filters.outcome:
            applications = [a for a in applications if a.outcome.value == filters.outcome]

        return applications


class ApplicationService:
    """Validates candidate records and appends them to the store"""

    def __init__(self, store: ApplicationStore):
        self.store = store

    def submit(self, candidate: Any) -> FinanceApplication:
        """
        Validate then append a candidate record.

        Raises:
            ValidationError: candidate is missing or violates a schema rule
            DuplicateIdError: applicationId already stored
            StorageUnavailableError: store could not be read or written
        """
        if candidate is None:
            raise ValidationError("Application data is required")

        application = ensure_valid(candidate)
        self.store.append(application)

        if application.outcome is ApplicationOutcome.REJECTED:
            logging.info(
                "Rejected application recorded",
                extra={
                    "application_id": application.application_id,
                    "lender_id": application.financing.lender_id,
                },
            )
        return application
