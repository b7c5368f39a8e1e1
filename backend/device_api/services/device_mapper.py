"""Device Mapper - converts between request/response schemas and the ORM record.

Invariants:
    - to_record never sets id or creation_time (assigned on insert)
    - to_response copies field-for-field; a missing state stays None
    - None in → None out, in both directions
"""

from device_api.models.device import Device
from device_api.schemas.device import DeviceCreateRequest, DeviceResponse


def to_record(request: DeviceCreateRequest | None) -> Device | None:
    """Build an unsaved Device from a creation payload."""
    if request is None:
        return None
    return Device(name=request.name, brand=request.brand, state=request.state)


def to_response(device: Device | None) -> DeviceResponse | None:
    """Project a stored Device into the outbound response shape."""
    if device is None:
        return None
    return DeviceResponse(
        id=device.id,
        name=device.name,
        brand=device.brand,
        state=device.state,
        creation_time=device.creation_time,
    )
