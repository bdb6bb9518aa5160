"""Vigil Maintenance — Response Schemas.

Error/message envelopes and a high-performance ORJSONResponse class used
as the application's default response class.

Error Format:
    {
        "error": "ResourceNotFound",
        "message": "Equipment with id 'abc' not found",
        "details": {"resource_type": "Equipment", "resource_id": "abc"}
    }
"""

from __future__ import annotations

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""
    message: str


class ErrorResponse(BaseModel):
    """Standard error body for 4xx/5xx status codes."""
    error: str = Field(..., description="Error class name")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional context")


# =============================================================================
# High-Performance ORJSON Response
# =============================================================================

def _orjson_serializer(obj: Any) -> bytes:
    """Serialize object to JSON bytes using orjson."""
    return orjson.dumps(
        obj,
        option=(
            orjson.OPT_UTC_Z |                 # Use Z suffix for UTC
            orjson.OPT_NAIVE_UTC |             # Treat naive datetimes as UTC
            orjson.OPT_NON_STR_KEYS            # Allow non-string dict keys
        ),
    )


class ORJSONResponse(JSONResponse):
    """JSON response rendered with orjson.

    orjson natively handles datetime and UUID values.

    Usage:
        app = FastAPI(default_response_class=ORJSONResponse)
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")
        return _orjson_serializer(content)
