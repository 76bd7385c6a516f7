"""Pydantic schemas for API responses

Request bodies are deliberately untyped: candidate applications go through
the domain validator so REST and tool callers see identical rule messages.
"""

from pydantic import BaseModel
from typing import Any, Dict, List


class ApplicationListResponse(BaseModel):
    """Response for GET /v1/applications"""

    success: bool = True
    count: int
    data: List[Dict[str, Any]]


class ApplicationAddedResponse(BaseModel):
    """Response for POST /v1/applications"""

    success: bool = True
    message: str = "Application added successfully"
    applicationId: str


class HealthResponse(BaseModel):
    """Response for GET /health"""

    status: str
    service: str
    storage: str
    applications: int
