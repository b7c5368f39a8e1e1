"""Device Routes - HTTP surface for device CRUD.

Invariants:
    - Request bodies validated by Pydantic before the service is called
    - Handlers only translate HTTP ↔ DeviceService; all rules live in the service
    - DeviceApiError propagates untouched to api/error_handlers.py
    - `state` omitted from responses when null (response_model_exclude_none)
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from device_api.core.domain_types import DeviceState
from device_api.infrastructure.database import get_db
from device_api.infrastructure.device_repository import SQLAlchemyDeviceRepository
from device_api.schemas.device import (
    DeviceCreateRequest,
    DevicePatchRequest,
    DeviceResponse,
    DeviceUpdateRequest,
    ErrorResponse,
)
from device_api.services.device_service import DeviceService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/devices", tags=["devices"])

_BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation error or rejected operation"}}
_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Device not found"}}
_SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Unexpected server error"}}


async def get_device_service(
    db: AsyncSession = Depends(get_db),
) -> DeviceService:
    """Build a DeviceService bound to the request's DB session."""
    return DeviceService(SQLAlchemyDeviceRepository(db))


@router.post(
    "",
    response_model=DeviceResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new device",
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
)
async def create_device(
    body: DeviceCreateRequest,
    service: DeviceService = Depends(get_device_service),
):
    return await service.create(body)


@router.get(
    "",
    response_model=list[DeviceResponse],
    response_model_exclude_none=True,
    summary="List devices, optionally filtered by brand and/or state",
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
)
async def list_devices(
    brand: str | None = Query(None, description="Brand, compared case-insensitively"),
    state: DeviceState | None = Query(None, description="Exact device state"),
    service: DeviceService = Depends(get_device_service),
):
    if brand is not None and state is None:
        return await service.get_by_brand(brand)
    return await service.get_all(brand=brand, state=state)


@router.get(
    "/{device_id}",
    response_model=DeviceResponse,
    response_model_exclude_none=True,
    summary="Get a device by its ID",
    responses={**_NOT_FOUND, **_SERVER_ERROR},
)
async def get_device(
    device_id: int,
    service: DeviceService = Depends(get_device_service),
):
    return await service.get_by_id(device_id)


@router.put(
    "/{device_id}",
    response_model=DeviceResponse,
    response_model_exclude_none=True,
    summary="Update an existing device; name and brand are locked while IN_USE",
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
async def update_device(
    device_id: int,
    body: DeviceUpdateRequest,
    service: DeviceService = Depends(get_device_service),
):
    return await service.update(device_id, body)


@router.patch(
    "/{device_id}",
    response_model=DeviceResponse,
    response_model_exclude_none=True,
    summary="Patch an existing device; name and brand are locked while IN_USE",
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
async def patch_device(
    device_id: int,
    body: DevicePatchRequest,
    service: DeviceService = Depends(get_device_service),
):
    return await service.patch(device_id, body)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a device unless it is IN_USE",
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
)
async def delete_device(
    device_id: int,
    service: DeviceService = Depends(get_device_service),
):
    await service.delete(device_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
