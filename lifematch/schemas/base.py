"""Base Pydantic models for API schemas."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configurations."""

    model_config = ConfigDict(
        from_attributes=True,  # Allow ORM model -> Pydantic conversion
    )


class StatusResponse(BaseSchema):
    """Acknowledgement for operations without a payload."""

    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseSchema):
    """Error payload returned by the exception handlers."""

    success: bool = False
    error_code: str
    error: str
    details: Dict[str, Any] = {}
