"""Device Service - business-rule engine for device CRUD.

Invariants:
    - Every id-based operation resolves the record first (DeviceNotFoundError if absent)
    - IN_USE devices cannot be deleted and cannot change name or brand
    - Mutations follow read → check → apply → save(); nothing relies on auto-flush
    - Rule checks come from core/enforce_device_rules.py; this class only raises them

Design Decisions:
    - Depends on the DeviceRepository protocol, not on SQLAlchemy: tests and
      routes inject the concrete gateway
"""

import logging

from device_api.core.domain_types import DeviceId, DeviceState
from device_api.core.enforce_device_rules import (
    check_brand_filter,
    check_deletable,
    check_name_brand_lock,
    resolve_patch_values,
)
from device_api.core.errors import DeviceNotFoundError
from device_api.core.repository_protocols import DeviceRepository
from device_api.models.device import Device
from device_api.schemas.device import (
    DeviceCreateRequest,
    DevicePatchRequest,
    DeviceResponse,
    DeviceUpdateRequest,
)
from device_api.services import device_mapper

logger = logging.getLogger(__name__)


class DeviceService:
    """Create, read, filter, update, patch and delete devices."""

    def __init__(self, repository: DeviceRepository):
        self.repository = repository

    async def create(self, request: DeviceCreateRequest) -> DeviceResponse:
        logger.info(f"Creating device: {request!r}")
        device = device_mapper.to_record(request)
        saved = await self.repository.save(device)
        logger.info(
            f"Created device {saved.id}", extra={"device_id": saved.id},
        )
        return device_mapper.to_response(saved)

    async def get_by_id(self, device_id: DeviceId) -> DeviceResponse:
        logger.info(
            f"Retrieving device by id: {device_id}", extra={"device_id": device_id},
        )
        device = await self._find_device_or_raise(device_id)
        return device_mapper.to_response(device)

    async def delete(self, device_id: DeviceId) -> None:
        logger.info(
            f"Deleting device by id: {device_id}", extra={"device_id": device_id},
        )
        device = await self._find_device_or_raise(device_id)

        error = check_deletable(device)
        if error:
            logger.warning(error.message, extra={"device_id": device_id})
            raise error

        await self.repository.delete(device)

    async def update(
        self, device_id: DeviceId, request: DeviceUpdateRequest,
    ) -> DeviceResponse:
        """Full replace - every field in the request is authoritative."""
        logger.info(
            f"Updating device by id: {device_id}, request: {request!r}",
            extra={"device_id": device_id},
        )
        device = await self._find_device_or_raise(device_id)

        error = check_name_brand_lock(device, request.name, request.brand)
        if error:
            logger.warning(error.message, extra={"device_id": device_id})
            raise error

        device.name = request.name
        device.brand = request.brand
        device.state = request.state

        saved = await self.repository.save(device)
        return device_mapper.to_response(saved)

    async def patch(
        self, device_id: DeviceId, request: DevicePatchRequest,
    ) -> DeviceResponse:
        """Partial update - None fields keep the stored value."""
        logger.info(
            f"Patching device by id: {device_id}, request: {request!r}",
            extra={"device_id": device_id},
        )
        device = await self._find_device_or_raise(device_id)

        new_name, new_brand = resolve_patch_values(
            device, request.name, request.brand,
        )
        error = check_name_brand_lock(device, new_name, new_brand)
        if error:
            logger.warning(error.message, extra={"device_id": device_id})
            raise error

        if request.name is not None:
            device.name = request.name
        if request.brand is not None:
            device.brand = request.brand
        if request.state is not None:
            device.state = request.state

        saved = await self.repository.save(device)
        return device_mapper.to_response(saved)

    async def get_by_brand(self, brand: str | None) -> list[DeviceResponse]:
        logger.info(f"Retrieving devices by brand: {brand!r}")
        error = check_brand_filter(brand)
        if error:
            logger.warning(error.message)
            raise error

        devices = await self.repository.find_by_brand(brand)
        return [device_mapper.to_response(d) for d in devices]

    async def get_all(
        self, brand: str | None = None, state: DeviceState | None = None,
    ) -> list[DeviceResponse]:
        """List devices, optionally filtered by brand (any case) and/or exact state.

        None means "no filter"; an explicitly empty brand is rejected.
        """
        logger.info(f"Retrieving devices (brand={brand!r}, state={state})")
        if brand is not None:
            error = check_brand_filter(brand)
            if error:
                logger.warning(error.message)
                raise error

        if brand is not None and state is not None:
            devices = await self.repository.find_by_brand_and_state(brand, state)
        elif brand is not None:
            devices = await self.repository.find_by_brand(brand)
        elif state is not None:
            devices = await self.repository.find_by_state(state)
        else:
            devices = await self.repository.find_all()

        return [device_mapper.to_response(d) for d in devices]

    async def _find_device_or_raise(self, device_id: DeviceId) -> Device:
        device = await self.repository.find_by_id(device_id)
        if device is None:
            logger.warning(
                f"Device with ID {device_id} not found",
                extra={"device_id": device_id},
            )
            raise DeviceNotFoundError(device_id)
        return device
