"""/v1/applications - REST mirror of the car financing tools"""

import logging
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status

from car_finance_gateway.api.dependencies import get_request_id
from car_finance_gateway.api.v1.schemas import ApplicationAddedResponse, ApplicationListResponse
from car_finance_gateway.domain.exceptions import DuplicateIdError, StorageUnavailableError, ValidationError
from car_finance_gateway.infrastructure.observability.metrics import record_application_added
from car_finance_gateway.infrastructure.storage.factory import get_store
from car_finance_gateway.infrastructure.storage.store import ApplicationStore
from car_finance_gateway.services.applications import ApplicationFilter, ApplicationService, QueryService

router = APIRouter()


@router.get("/applications", response_model=ApplicationListResponse)
def list_applications(
    request: Request,
    application_id: Optional[str] = Query(None, alias="applicationId", description="Exact application identifier"),
    outcome: Optional[Literal["SUCCESS", "REJECTED"]] = Query(None, description="Final disposition"),
    store: ApplicationStore = Depends(get_store),
):
    """
    List stored applications, optionally filtered by id and/or outcome.

    Returns:
        Matching applications in stored order
    """
    try:
        applications = QueryService(store).query(
            ApplicationFilter(application_id=application_id, outcome=outcome)
        )
    except StorageUnavailableError as e:
        logging.error(f"Storage error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail=str(e))

    return ApplicationListResponse(
        count=len(applications),
        data=[app.to_document() for app in applications],
    )


@router.post(
    "/applications",
    response_model=ApplicationAddedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_application(
    request: Request,
    application: Dict[str, Any] = Body(...),
    store: ApplicationStore = Depends(get_store),
):
    """
    Validate and store a new finance application.

    Errors:
    - 422: candidate violates a schema rule (first violation only)
    - 409: applicationId already stored
    - 503: backing store unavailable
    """
    request_id = get_request_id(request)

    try:
        stored = ApplicationService(store).submit(application)

    except ValidationError as e:
        logging.warning(f"Invalid application: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=e.reason)

    except DuplicateIdError as e:
        logging.warning(f"Duplicate application: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except StorageUnavailableError as e:
        logging.error(f"Storage error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail=str(e))

    record_application_added(stored.outcome.value)
    return ApplicationAddedResponse(applicationId=stored.application_id)
