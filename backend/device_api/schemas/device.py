"""Device Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - DeviceCreateRequest / DeviceUpdateRequest: name, brand non-blank; state required
    - DevicePatchRequest: every field optional; a provided name/brand must be non-blank
    - DeviceResponse serializes creation_time as `creationTime`
    - Values are validated, never rewritten (no stripping): stored text equals request text

Design Decisions:
    - field_validator runs before the route handler, so a malformed body never
      reaches DeviceService (surfaces as RequestValidationError → 400)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from device_api.core.domain_types import DeviceState


def _require_not_blank(value: str | None, field_name: str) -> str | None:
    if value is not None and not value.strip():
        raise ValueError(f"{field_name} must not be blank")
    return value


class DeviceCreateRequest(BaseModel):
    """Device creation - all fields required."""
    name: str = Field(max_length=255)
    brand: str = Field(max_length=255)
    state: DeviceState

    @field_validator("name", "brand")
    @classmethod
    def not_blank(cls, v: str, info) -> str:
        return _require_not_blank(v, info.field_name)


class DeviceUpdateRequest(DeviceCreateRequest):
    """Full replace - same shape and rules as creation."""


class DevicePatchRequest(BaseModel):
    """Partial update - None (or absent) leaves the stored value unchanged."""
    name: str | None = Field(None, max_length=255)
    brand: str | None = Field(None, max_length=255)
    state: DeviceState | None = None

    @field_validator("name", "brand")
    @classmethod
    def not_blank_when_present(cls, v: str | None, info) -> str | None:
        return _require_not_blank(v, info.field_name)


class DeviceResponse(BaseModel):
    """Device response - public-facing device data."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    brand: str
    state: DeviceState | None = None
    creation_time: datetime | None = Field(None, alias="creationTime")


class ErrorResponse(BaseModel):
    """Error envelope - documents the body produced by api/error_handlers.py."""
    timestamp: datetime
    status: int
    error: str
    message: str
