"""Device Rule Enforcement - state-dependent checks for mutation, deletion and filter arguments.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return an error instance on violation, None on success
    - IN_USE locks name and brand only; state may always change

Design Decisions:
    - Return errors (not raise): DeviceService decides when to raise, so the
      rules are testable without a repository or a session
"""

from typing import Protocol

from device_api.core.domain_types import DeviceState
from device_api.core.errors import (
    ErrorContext,
    InvalidArgumentError,
    InvalidDeviceOperationError,
)

DELETE_IN_USE_MESSAGE = "Cannot delete device that is currently IN_USE"
IDENTITY_LOCKED_MESSAGE = "Name and brand cannot be updated when device is IN_USE"
EMPTY_BRAND_MESSAGE = "Brand cannot be empty"


class DeviceLike(Protocol):
    """Structural contract for anything carrying the rule-relevant fields."""
    id: int | None
    name: str
    brand: str
    state: DeviceState | None


def check_deletable(device: DeviceLike) -> InvalidDeviceOperationError | None:
    """A device may be deleted unless it is IN_USE."""
    if device.state == DeviceState.IN_USE:
        return InvalidDeviceOperationError(
            DELETE_IN_USE_MESSAGE, ErrorContext(device_id=device.id),
        )
    return None


def check_name_brand_lock(
    device: DeviceLike, new_name: str, new_brand: str,
) -> InvalidDeviceOperationError | None:
    """Reject name/brand changes while the stored state is IN_USE."""
    if device.state is None or not device.state.locks_identity:
        return None
    name_changed = device.name != new_name
    brand_changed = device.brand != new_brand
    if name_changed or brand_changed:
        return InvalidDeviceOperationError(
            IDENTITY_LOCKED_MESSAGE,
            ErrorContext(
                device_id=device.id,
                debug_info={
                    "name_changed": name_changed,
                    "brand_changed": brand_changed,
                },
            ),
        )
    return None


def resolve_patch_values(
    device: DeviceLike, name: str | None, brand: str | None,
) -> tuple[str, str]:
    """Effective (name, brand) after a patch - None keeps the stored value."""
    return (
        name if name is not None else device.name,
        brand if brand is not None else device.brand,
    )


def check_brand_filter(brand: str | None) -> InvalidArgumentError | None:
    """Brand lookups require a non-empty brand."""
    if brand is None or brand == "":
        return InvalidArgumentError(EMPTY_BRAND_MESSAGE, "brand")
    return None

