"""Application store - exclusive owner of persisted finance applications"""

import logging
import threading
from typing import List

from car_finance_gateway.domain.exceptions import DuplicateIdError, StorageUnavailableError
from car_finance_gateway.domain.models import FinanceApplication
from car_finance_gateway.infrastructure.storage.media import BackingMedium

logger = logging.getLogger(__name__)


class ApplicationStore:
    """
    Insertion-ordered collection of finance applications keyed by applicationId.

    Every operation re-reads the medium; nothing is cached between calls.
    Appends are serialized by a per-store lock so concurrent writers in one
    process cannot overwrite each other's records. Writers in separate
    processes sharing one medium are not coordinated.
    """

    def __init__(self, medium: BackingMedium):
        self.medium = medium
        self._write_lock = threading.Lock()

    def load(self) -> List[FinanceApplication]:
        """Read the full dataset; an uninitialized medium is an empty dataset"""
        documents = self.medium.read()
        if documents is None:
            return []
        try:
            return [FinanceApplication.from_document(doc) for doc in documents]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageUnavailableError(f"Stored car financing data is malformed: {e}") from e

    def save(self, applications: List[FinanceApplication]) -> None:
        """Replace the whole dataset in one write"""
        self.medium.write([app.to_document() for app in applications])

    def append(self, application: FinanceApplication) -> FinanceApplication:
        """
        Add one application, rejecting duplicate identifiers.

        Raises:
            DuplicateIdError: applicationId is already stored
            StorageUnavailableError: the dataset could not be read or written
        """
        with self._write_lock:
            applications = self.load()
            if any(app.application_id == application.application_id for app in applications):
                raise DuplicateIdError(application.application_id)

            applications.append(application)
            self.save(applications)

        logger.info(
            "Application stored",
            extra={
                "application_id": application.application_id,
                "outcome": application.outcome.value,
                "dataset_size": len(applications),
                "medium": self.medium.name,
            },
        )
        return application
