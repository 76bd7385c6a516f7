"""Backing media for the application store

A medium reads and writes the whole dataset as a list of camelCase documents.
``read`` returns None when the medium has never been initialized.
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from car_finance_gateway.domain.exceptions import StorageUnavailableError
from car_finance_gateway.infrastructure.database.models import FinanceApplicationRecord

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class BackingMedium(Protocol):
    """Physical storage behind an ApplicationStore"""

    name: str

    def read(self) -> Optional[List[Document]]:
        ...

    def write(self, documents: List[Document]) -> None:
        ...


class JsonFileMedium:
    """Pretty-printed JSON array on the local filesystem, replaced atomically on write"""

    name = "file"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> Optional[List[Document]]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                documents = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading car financing data: {e}", extra={"path": str(self.path)})
            raise StorageUnavailableError("Failed to read car financing data") from e

        if not isinstance(documents, list):
            raise StorageUnavailableError("Failed to read car financing data: dataset is not a JSON array")
        return documents

    def write(self, documents: List[Document]) -> None:
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
            ) as fh:
                tmp_name = fh.name
                json.dump(documents, fh, indent=2, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(f"Error writing car financing data: {e}", extra={"path": str(self.path)})
            raise StorageUnavailableError("Failed to write car financing data") from e


class DatabaseMedium:
    """One row per application; the whole table is rewritten in a single transaction"""

    name = "database"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def read(self) -> Optional[List[Document]]:
        try:
            with self.session_factory() as db:
                rows = (
                    db.query(FinanceApplicationRecord)
                    .order_by(FinanceApplicationRecord.position)
                    .all()
                )
                return [row.payload for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Error reading car financing data: {e}")
            raise StorageUnavailableError("Failed to read car financing data") from e

    def write(self, documents: List[Document]) -> None:
        try:
            with self.session_factory() as db, db.begin():
                # Bulk delete runs immediately, so re-inserted ids never collide
                db.query(FinanceApplicationRecord).delete()
                db.add_all(
                    FinanceApplicationRecord(
                        position=position,
                        application_id=doc["applicationId"],
                        outcome=doc["outcome"],
                        payload=doc,
                    )
                    for position, doc in enumerate(documents)
                )
        except SQLAlchemyError as e:
            logger.error(f"Error writing car financing data: {e}")
            raise StorageUnavailableError("Failed to write car financing data") from e


class InMemoryMedium:
    """Process-local medium for tests and throwaway runs"""

    name = "memory"

    def __init__(self, documents: Optional[List[Document]] = None):
        self._documents = copy.deepcopy(documents)

    def read(self) -> Optional[List[Document]]:
        return copy.deepcopy(self._documents)

    def write(self, documents: List[Document]) -> None:
        self._documents = copy.deepcopy(documents)
