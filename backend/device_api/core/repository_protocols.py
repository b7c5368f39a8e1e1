"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no base class
    - Async in Protocol: implementations do IO; the rule checks that consume
      their results stay synchronous
"""

from typing import Protocol

from device_api.core.domain_types import DeviceId, DeviceState
from device_api.core.enforce_device_rules import DeviceLike


class DeviceRepository(Protocol):
    """Contract for device persistence - implemented by shell."""
    async def save(self, device: DeviceLike) -> DeviceLike: ...
    async def find_by_id(self, device_id: DeviceId) -> DeviceLike | None: ...
    async def find_by_brand(self, brand: str) -> list[DeviceLike]: ...
    async def find_by_brand_and_state(
        self, brand: str, state: DeviceState,
    ) -> list[DeviceLike]: ...
    async def find_by_state(self, state: DeviceState) -> list[DeviceLike]: ...
    async def find_all(self) -> list[DeviceLike]: ...
    async def delete(self, device: DeviceLike) -> None: ...
