"""Domain Types - verifies identity type and device state enum.

Tests:
    - DeviceId wraps int
    - DeviceState has exactly 3 members whose values equal their names
    - Only IN_USE locks name/brand
"""

from device_api.core.domain_types import DeviceId, DeviceState


def test_device_id_wraps_int():
    assert DeviceId(7) == 7


def test_device_state_has_three_states():
    assert set(DeviceState) == {
        DeviceState.AVAILABLE,
        DeviceState.IN_USE,
        DeviceState.INACTIVE,
    }


def test_device_state_values_match_names():
    for state in DeviceState:
        assert state.value == state.name


def test_device_state_parses_from_text():
    assert DeviceState("IN_USE") is DeviceState.IN_USE


def test_only_in_use_locks_identity():
    assert DeviceState.IN_USE.locks_identity
    assert not DeviceState.AVAILABLE.locks_identity
    assert not DeviceState.INACTIVE.locks_identity
