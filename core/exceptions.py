"""Vigil Maintenance — Core Exceptions.

Domain-specific exceptions for the service layer.
These exceptions are raised by services and the predictor and are
converted to HTTP responses by the handlers registered in api_server.

Usage:
    from core.exceptions import NoDataError, ResourceNotFound

    class EquipmentService:
        async def get_or_404(self, equipment_id: str):
            equipment = await self.get(equipment_id)
            if not equipment:
                raise ResourceNotFound("Equipment", equipment_id)
            return equipment
"""

from __future__ import annotations

from typing import Any


class VigilError(Exception):
    """Base exception for all Vigil Maintenance domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ResourceNotFound(VigilError):
    """Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.

    Attributes:
        resource_type: Type of resource (e.g., "Equipment").
        resource_id: Identifier of the missing resource.
    """

    def __init__(self, resource_type: str, resource_id: Any):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} with id '{resource_id}' not found"
        super().__init__(message, {"resource_type": resource_type, "resource_id": str(resource_id)})


class NoDataError(VigilError):
    """Raised when there are no sensor readings to estimate risk from.

    Expected and recoverable: no prediction is produced and nothing is
    persisted. Maps to HTTP 422 Unprocessable Entity.
    """

    def __init__(self, equipment_id: str | None = None):
        self.equipment_id = equipment_id
        if equipment_id is None:
            message = "No sensor data available"
            details: dict[str, Any] = {}
        else:
            message = f"No sensor data available for equipment {equipment_id}"
            details = {"equipment_id": str(equipment_id)}
        super().__init__(message, details)


class StoreError(VigilError):
    """Raised when a repository operation fails.

    Wraps connectivity failures, constraint violations and any other
    database error. Never retried by the service layer. Maps to HTTP 500.

    Attributes:
        operation: The repository operation that failed.
        original_error: The underlying error message.
    """

    def __init__(self, operation: str, original_error: str):
        self.operation = operation
        self.original_error = original_error
        super().__init__(
            f"Store operation '{operation}' failed",
            {"operation": operation},
        )


class ValidationError(VigilError):
    """Raised when input validation fails beyond Pydantic's scope.

    Maps to HTTP 400 Bad Request.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}", {"field": field})


class InvalidReadingError(ValidationError):
    """Raised when a sensor value is not a finite number."""

    def __init__(self, value: Any, position: int):
        self.value = value
        self.position = position
        super().__init__("readings", f"value {value!r} at position {position} is not a finite number")
