"""Domain Types - identity and enum types for the device domain.

Invariants:
    - DeviceId wraps the integer primary key - assigned by the database only
    - DeviceState is a closed set; values equal their names (stored as text)
"""

from enum import Enum
from typing import NewType


DeviceId = NewType("DeviceId", int)


class DeviceState(str, Enum):
    """Device lifecycle states - maps to DB `state` column."""
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    INACTIVE = "INACTIVE"

    @property
    def locks_identity(self) -> bool:
        """True when name and brand are frozen for this state."""
        return self is DeviceState.IN_USE
