"""Builds the process-wide application store from settings"""

from functools import lru_cache

from car_finance_gateway.config import Settings, settings
from car_finance_gateway.infrastructure.database.session import create_session_factory
from car_finance_gateway.infrastructure.storage.media import (
    BackingMedium,
    DatabaseMedium,
    InMemoryMedium,
    JsonFileMedium,
)
from car_finance_gateway.infrastructure.storage.store import ApplicationStore


def build_medium(config: Settings) -> BackingMedium:
    """Select the backing medium named by storage_backend"""
    if config.storage_backend == "database":
        return DatabaseMedium(create_session_factory(config.database_url))
    if config.storage_backend == "memory":
        return InMemoryMedium()
    return JsonFileMedium(config.data_file_path)


@lru_cache(maxsize=1)
def get_store() -> ApplicationStore:
    """Single store per process so every writer shares one lock"""
    return ApplicationStore(build_medium(settings))
