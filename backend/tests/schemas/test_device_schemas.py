"""Device Schemas - request validation at the API boundary.

Tests cover:
    - Create/update require non-blank name and brand and a valid state
    - Patch accepts missing/null fields but rejects blank name/brand
    - Response serializes creationTime by alias and allows a null state
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from device_api.core.domain_types import DeviceState
from device_api.schemas.device import (
    DeviceCreateRequest,
    DevicePatchRequest,
    DeviceResponse,
    DeviceUpdateRequest,
)


@pytest.mark.parametrize("schema", [DeviceCreateRequest, DeviceUpdateRequest])
def test_full_request_accepts_valid_payload(schema):
    req = schema(name="Pixel", brand="Google", state="AVAILABLE")
    assert req.state is DeviceState.AVAILABLE


@pytest.mark.parametrize("schema", [DeviceCreateRequest, DeviceUpdateRequest])
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "brand": "Google", "state": "AVAILABLE"},
        {"name": "   ", "brand": "Google", "state": "AVAILABLE"},
        {"name": "Pixel", "brand": " ", "state": "AVAILABLE"},
        {"name": "Pixel", "brand": "Google"},
        {"name": "Pixel", "brand": "Google", "state": None},
        {"name": "Pixel", "brand": "Google", "state": "BROKEN"},
        {"brand": "Google", "state": "AVAILABLE"},
    ],
)
def test_full_request_rejects_invalid_payload(schema, payload):
    with pytest.raises(ValidationError):
        schema(**payload)


def test_create_request_keeps_text_as_given():
    req = DeviceCreateRequest(name=" Pixel ", brand="Google", state="IN_USE")
    assert req.name == " Pixel "


def test_patch_request_all_fields_optional():
    req = DevicePatchRequest()
    assert req.name is None and req.brand is None and req.state is None


def test_patch_request_explicit_nulls_mean_unchanged():
    req = DevicePatchRequest(name=None, brand=None, state=None)
    assert req.model_dump() == {"name": None, "brand": None, "state": None}


@pytest.mark.parametrize("field", ["name", "brand"])
def test_patch_request_rejects_blank_when_present(field):
    with pytest.raises(ValidationError):
        DevicePatchRequest(**{field: "  "})


def test_patch_request_rejects_unknown_state():
    with pytest.raises(ValidationError):
        DevicePatchRequest(state="RETIRED")


def test_response_serializes_creation_time_alias():
    ts = datetime(2026, 3, 1, tzinfo=timezone.utc)
    res = DeviceResponse(
        id=1, name="Pixel", brand="Google",
        state=DeviceState.AVAILABLE, creation_time=ts,
    )
    dumped = res.model_dump(mode="json", by_alias=True)
    assert dumped["creationTime"] == "2026-03-01T00:00:00Z"
    assert dumped["state"] == "AVAILABLE"


def test_response_null_state_is_excluded():
    res = DeviceResponse(id=1, name="Pixel", brand="Google", state=None)
    dumped = res.model_dump(by_alias=True, exclude_none=True)
    assert "state" not in dumped
