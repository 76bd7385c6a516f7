"""Unit tests for the query and submission services"""

import pytest
from unittest.mock import patch
from car_finance_gateway.domain.exceptions import DuplicateIdError, StorageUnavailableError, ValidationError
from car_finance_gateway.infrastructure.storage.media import InMemoryMedium
from car_finance_gateway.services.applications import ApplicationFilter, ApplicationService, QueryService


@pytest.fixture
def seeded_store(memory_store, valid_application):
    """Store holding S1, R1, S2, R2 in that order"""
    service = ApplicationService(memory_store)
    for application_id, outcome in [("S1", "SUCCESS"), ("R1", "REJECTED"), ("S2", "SUCCESS"), ("R2", "REJECTED")]:
        doc = dict(valid_application, applicationId=application_id, outcome=outcome)
        if outcome == "REJECTED":
            doc["rejectionDetails"] = {"reason": "Affordability"}
        service.submit(doc)
    return memory_store


def _ids(applications):
    return [a.application_id for a in applications]


def test_query_without_filter_returns_everything(seeded_store):
    """Test empty filter returns the full dataset in stored order"""
    assert _ids(QueryService(seeded_store).query()) == ["S1", "R1", "S2", "R2"]
    assert _ids(QueryService(seeded_store).query(ApplicationFilter())) == ["S1", "R1", "S2", "R2"]


def test_query_by_outcome_keeps_stored_order(seeded_store):
    """Test outcome filter returns exactly the matching subset"""
    assert _ids(QueryService(seeded_store).query(ApplicationFilter(outcome="SUCCESS"))) == ["S1", "S2"]
    assert _ids(QueryService(seeded_store).query(ApplicationFilter(outcome="REJECTED"))) == ["R1", "R2"]


def test_query_by_id(seeded_store):
    """Test id filter is an exact match"""
    assert _ids(QueryService(seeded_store).query(ApplicationFilter(application_id="R1"))) == ["R1"]
    assert QueryService(seeded_store).query(ApplicationFilter(application_id="r1")) == []


def test_query_unknown_id_returns_empty(seeded_store):
    """Test no match is an empty result, not an error"""
    assert QueryService(seeded_store).query(ApplicationFilter(application_id="X")) == []


def test_query_filters_combine_with_and(seeded_store):
    """Test both predicates must hold"""
    query = QueryService(seeded_store).query

    assert _ids(query(ApplicationFilter(application_id="S2", outcome="SUCCESS"))) == ["S2"]
    assert query(ApplicationFilter(application_id="S2", outcome="REJECTED")) == []


def test_query_empty_string_imposes_no_constraint(seeded_store):
    """Test blank filter values are treated as absent"""
    assert len(QueryService(seeded_store).query(ApplicationFilter(application_id="", outcome=""))) == 4


def test_query_propagates_storage_failure(seeded_store):
    """Test read failures are not swallowed"""
    with patch.object(InMemoryMedium, "read", side_effect=StorageUnavailableError("Failed to read car financing data")):
        with pytest.raises(StorageUnavailableError):
            QueryService(seeded_store).query()


def test_submit_requires_application(memory_store):
    """Test a missing application is rejected before validation"""
    with pytest.raises(ValidationError, match="Application data is required"):
        ApplicationService(memory_store).submit(None)


def test_submit_invalid_does_not_touch_store(memory_store, valid_application):
    """Test validation failures leave the dataset unchanged"""
    candidate = dict(valid_application, outcome="REJECTED")

    with pytest.raises(ValidationError):
        ApplicationService(memory_store).submit(candidate)

    assert memory_store.load() == []


def test_submit_duplicate(seeded_store, valid_application):
    """Test resubmitting an existing id fails and count stays the same"""
    with pytest.raises(DuplicateIdError):
        ApplicationService(seeded_store).submit(dict(valid_application, applicationId="S1"))

    assert len(seeded_store.load()) == 4


def test_submit_empty_object_reports_first_rule(memory_store):
    """Test an empty object is validated rather than treated as missing"""
    with pytest.raises(ValidationError, match="Invalid or missing applicationId"):
        ApplicationService(memory_store).submit({})
