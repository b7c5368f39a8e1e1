"""Device Repository - SQLAlchemy implementation of the DeviceRepository protocol.

Invariants:
    - save() commits and refreshes: returned instance carries id and creation_time
    - Brand filters compare lower(brand) on both sides (case-insensitive), and
      brand-only and brand+state queries share that comparison
    - Every list query is ordered by id ascending
    - SQLAlchemy failures roll back the session and surface as DatabaseError

Design Decisions:
    - Repository owns commit: DeviceService writes back explicitly via save()
      instead of relying on an ambient unit-of-work flush
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from device_api.core.domain_types import DeviceId, DeviceState
from device_api.core.errors import DatabaseError, ErrorContext
from device_api.models.device import Device

logger = logging.getLogger(__name__)


class SQLAlchemyDeviceRepository:
    """Persistence gateway for device records."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, device: Device) -> Device:
        """Insert a new device or write back mutations of a loaded one."""
        try:
            self.session.add(device)
            await self.session.commit()
            await self.session.refresh(device)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                f"Error saving device: {e}",
                exc_info=True, extra={"device_id": device.id},
            )
            raise DatabaseError(
                "Could not persist device", "save",
                ErrorContext(device_id=device.id),
            ) from e
        logger.debug(f"Saved device {device.id}")
        return device

    async def find_by_id(self, device_id: DeviceId) -> Device | None:
        logger.debug(f"Fetching device with ID: {device_id}")
        result = await self._execute(
            select(Device).where(Device.id == device_id), "find_by_id",
        )
        return result.scalar_one_or_none()

    async def find_by_brand(self, brand: str) -> list[Device]:
        """All devices whose brand equals `brand`, ignoring case."""
        result = await self._execute(
            select(Device)
            .where(func.lower(Device.brand) == brand.lower())
            .order_by(Device.id),
            "find_by_brand",
        )
        return list(result.scalars().all())

    async def find_by_brand_and_state(
        self, brand: str, state: DeviceState,
    ) -> list[Device]:
        """Brand compared exactly as in find_by_brand, state compared exactly."""
        result = await self._execute(
            select(Device)
            .where(func.lower(Device.brand) == brand.lower())
            .where(Device.state == state)
            .order_by(Device.id),
            "find_by_brand_and_state",
        )
        return list(result.scalars().all())

    async def find_by_state(self, state: DeviceState) -> list[Device]:
        result = await self._execute(
            select(Device).where(Device.state == state).order_by(Device.id),
            "find_by_state",
        )
        return list(result.scalars().all())

    async def find_all(self) -> list[Device]:
        result = await self._execute(
            select(Device).order_by(Device.id), "find_all",
        )
        return list(result.scalars().all())

    async def delete(self, device: Device) -> None:
        try:
            await self.session.delete(device)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                f"Error deleting device {device.id}: {e}",
                exc_info=True, extra={"device_id": device.id},
            )
            raise DatabaseError(
                "Could not delete device", "delete",
                ErrorContext(device_id=device.id),
            ) from e
        logger.debug(f"Deleted device {device.id}")

    async def _execute(self, stmt, operation: str):
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error in {operation}: {e}", exc_info=True)
            raise DatabaseError("Query failed", operation) from e
