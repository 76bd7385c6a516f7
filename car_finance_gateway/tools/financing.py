"""
Car financing tools exposed to the finance agent.

Each tool is a thin wrapper around the application services: it logs the
call, maps domain failures to ToolError so the agent sees the specific
message, and returns a plain dict for JSON transport. Nothing is retried.
"""

import time
from typing import Any, Dict, Literal, Optional

from fastmcp.exceptions import ToolError

from car_finance_gateway.domain.exceptions import (
    DomainException,
    DuplicateIdError,
    StorageUnavailableError,
    ValidationError,
)
from car_finance_gateway.infrastructure.observability.logging import log_tool_call, log_tool_result
from car_finance_gateway.infrastructure.observability.metrics import record_application_added, record_tool_call
from car_finance_gateway.infrastructure.storage.factory import get_store
from car_finance_gateway.services.applications import ApplicationFilter, ApplicationService, QueryService


def failure_status(error: DomainException) -> str:
    """Metric/log label for a domain failure"""
    if isinstance(error, ValidationError):
        return "invalid"
    if isinstance(error, DuplicateIdError):
        return "duplicate"
    if isinstance(error, StorageUnavailableError):
        return "storage_error"
    return "error"


# Parameter names follow the camelCase wire contract the agent already uses.
def get_car_financing_data(
    applicationId: Optional[str] = None,
    outcome: Optional[Literal["SUCCESS", "REJECTED"]] = None,
) -> Dict[str, Any]:
    """Retrieve stored car financing applications.

    Call with no arguments to list every application, or narrow the result
    with an exact applicationId and/or outcome (SUCCESS or REJECTED).

    Returns:
        {"success": true, "count": N, "data": [application, ...]}
    """
    tool = "get_car_financing_data"
    start_time = time.time()
    log_tool_call(tool, application_id=applicationId, outcome=outcome)

    try:
        applications = QueryService(get_store()).query(
            ApplicationFilter(application_id=applicationId, outcome=outcome)
        )
    except DomainException as e:
        status = failure_status(e)
        record_tool_call(tool, status)
        log_tool_result(tool, status, (time.time() - start_time) * 1000, error=str(e))
        raise ToolError(str(e)) from e

    record_tool_call(tool, "success")
    log_tool_result(tool, "success", (time.time() - start_time) * 1000, count=len(applications))
    return {
        "success": True,
        "count": len(applications),
        "data": [app.to_document() for app in applications],
    }


def add_car_financing_data(application: Any = None) -> Dict[str, Any]:
    """Submit a new car financing application.

    The application must carry applicationId, submissionDate (YYYY-MM-DD),
    outcome (SUCCESS or REJECTED), customer, vehicle and financing objects,
    plus rejectionDetails with a reason when the outcome is REJECTED.
    Fails with the first violated rule, or when the applicationId exists.

    Returns:
        {"success": true, "message": "...", "applicationId": "..."}
    """
    tool = "add_car_financing_data"
    start_time = time.time()
    application_id = application.get("applicationId") if isinstance(application, dict) else None
    log_tool_call(tool, application_id=application_id)

    try:
        stored = ApplicationService(get_store()).submit(application)
    except DomainException as e:
        status = failure_status(e)
        record_tool_call(tool, status)
        log_tool_result(tool, status, (time.time() - start_time) * 1000, error=str(e))
        raise ToolError(str(e)) from e

    record_tool_call(tool, "success")
    record_application_added(stored.outcome.value)
    log_tool_result(
        tool, "success", (time.time() - start_time) * 1000, application_id=stored.application_id
    )
    return {
        "success": True,
        "message": "Application added successfully",
        "applicationId": stored.application_id,
    }
