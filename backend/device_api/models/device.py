"""Device ORM - persists the single device entity.

Invariants:
    - id is an identity primary key, assigned by the database on insert
    - state is stored as its textual enum name (AVAILABLE | IN_USE | INACTIVE)
    - creation_time is set once on insert and never reassigned afterwards

Design Decisions:
    - Non-native Enum column: plain VARCHAR in PostgreSQL and SQLite alike,
      matching the migration in alembic/versions/001_create_devices.py
    - BigInteger id with an Integer variant on SQLite: SQLite only autoincrements
      INTEGER PRIMARY KEY columns
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from device_api.core.domain_types import DeviceState
from device_api.db.base import Base


class Device(Base):
    """Device record - name/brand are frozen while state is IN_USE."""
    __tablename__ = "devices"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[DeviceState] = mapped_column(
        Enum(
            DeviceState, native_enum=False, length=20,
            validate_strings=True,
        ),
        nullable=False,
    )
    creation_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @validates("creation_time")
    def _freeze_creation_time(self, key: str, value: datetime) -> datetime:
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValueError("creation_time cannot be modified after insert")
        return value

    def __repr__(self) -> str:
        return (
            f"Device(id={self.id!r}, name={self.name!r}, "
            f"brand={self.brand!r}, state={self.state!r})"
        )
