"""Pytest fixtures for testing"""

import copy
import pytest
from typing import Any, Dict
from fastapi.testclient import TestClient
from car_finance_gateway.api.main import create_app
from car_finance_gateway.infrastructure.storage.factory import get_store
from car_finance_gateway.infrastructure.storage.media import InMemoryMedium, JsonFileMedium
from car_finance_gateway.infrastructure.storage.store import ApplicationStore


@pytest.fixture
def valid_application() -> Dict[str, Any]:
    """Approved Corolla application from the Cape Town branch"""
    return {
        "applicationId": "A1",
        "submissionDate": "2025-01-01",
        "outcome": "SUCCESS",
        "customer": {
            "creditScore": 700,
            "annualIncomeZar": 500000,
            "downPaymentZar": 50000,
            "tradeInValueZar": 0,
            "debtToIncomeRatio": 0.3,
            "applicantLocation": "Cape Town",
        },
        "vehicle": {
            "make": "Toyota",
            "model": "Corolla",
            "year": 2023,
            "msrpZar": 350000,
            "salePriceZar": 340000,
            "mileage": 5000,
            "condition": "New",
        },
        "financing": {
            "loanAmountRequestedZar": 290000,
            "termLengthMonths": 60,
            "annualPercentageRate": 0.1,
            "lenderId": "BankX",
        },
    }


@pytest.fixture
def rejected_application(valid_application: Dict[str, Any]) -> Dict[str, Any]:
    """Same deal declined by the lender"""
    application = copy.deepcopy(valid_application)
    application["applicationId"] = "R1"
    application["outcome"] = "REJECTED"
    application["rejectionDetails"] = {
        "reason": "Insufficient affordability",
        "internalNotes": "Deposit too low for requested term",
    }
    return application


@pytest.fixture
def memory_store() -> ApplicationStore:
    """Store over an uninitialized in-memory medium"""
    return ApplicationStore(InMemoryMedium())


@pytest.fixture
def file_store(tmp_path) -> ApplicationStore:
    """Store over a JSON file in a temp directory"""
    return ApplicationStore(JsonFileMedium(tmp_path / "data" / "car-financing-data.json"))


@pytest.fixture
def tool_store(monkeypatch, memory_store: ApplicationStore) -> ApplicationStore:
    """Point the tool layer at the in-memory store"""
    monkeypatch.setattr("car_finance_gateway.tools.financing.get_store", lambda: memory_store)
    return memory_store


@pytest.fixture
def client(memory_store: ApplicationStore) -> TestClient:
    """Create FastAPI test client backed by the in-memory store"""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: memory_store
    return TestClient(app)
