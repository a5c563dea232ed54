"""
Shared response shapes.
"""

from pydantic import BaseModel
from typing import Any, Dict, Generic, Optional, TypeVar

DataType = TypeVar("DataType")


class ApiResponse(BaseModel, Generic[DataType]):
    """Envelope wrapping every successful FX deal response."""
    success: bool
    message: str
    data: Optional[DataType] = None
    metadata: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Process health; checks maps each dependency to "ok" or an error string."""
    status: str
    uptime: str
    checks: Dict[str, str]
