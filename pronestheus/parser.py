"""Decode the Nest device listing into thermostat readings."""

import json
import logging
from typing import Any

from .api import NestApiUnmarshalError
from .const import (
    THERMOSTAT_TYPE,
    TRAIT_HUMIDITY,
    TRAIT_HVAC,
    TRAIT_INFO,
    TRAIT_MODE,
    TRAIT_SETPOINT,
    TRAIT_TEMPERATURE,
)
from .models import ThermostatReading

_LOGGER = logging.getLogger(__name__)


def celsius_to_fahrenheit(celsius: float) -> float:
    """Convert a Celsius temperature to Fahrenheit."""
    return celsius * 9 / 5 + 32


def _trait_field(device: dict[str, Any], trait: str, field: str) -> Any:
    """Return a field of a device trait, or None if any level is missing.

    Trait names contain literal dots, so they are looked up as single keys.
    """
    traits = device.get("traits")
    if not isinstance(traits, dict):
        return None
    values = traits.get(trait)
    if not isinstance(values, dict):
        return None
    return values.get(field)


def _as_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def is_thermostat(device: Any) -> bool:
    """Check if a device entry is a thermostat."""
    return isinstance(device, dict) and device.get("type") == THERMOSTAT_TYPE


def decode_thermostat(device: dict[str, Any]) -> ThermostatReading:
    """Decode one thermostat device entry.

    Missing fields resolve to 0.0 or an empty string. Temperatures are
    converted from Celsius to Fahrenheit.

    Args:
        device: Device entry from the "devices" array.

    Returns:
        ThermostatReading for the device.

    """
    return ThermostatReading(
        id=_as_str(device.get("name")),
        label=_as_str(_trait_field(device, TRAIT_INFO, "customName")),
        ambient_temperature=celsius_to_fahrenheit(
            _as_float(
                _trait_field(device, TRAIT_TEMPERATURE, "ambientTemperatureCelsius")
            )
        ),
        setpoint_heat=celsius_to_fahrenheit(
            _as_float(_trait_field(device, TRAIT_SETPOINT, "heatCelsius"))
        ),
        setpoint_cool=celsius_to_fahrenheit(
            _as_float(_trait_field(device, TRAIT_SETPOINT, "coolCelsius"))
        ),
        humidity=_as_float(
            _trait_field(device, TRAIT_HUMIDITY, "ambientHumidityPercent")
        ),
        hvac_status=_as_str(_trait_field(device, TRAIT_HVAC, "status")),
        mode=_as_str(_trait_field(device, TRAIT_MODE, "mode")),
    )


def _load_devices(raw: bytes | str) -> list[Any]:
    try:
        data = json.loads(raw)
    except ValueError as err:
        error_msg = f"Failed unmarshalling Nest API response body: {err}"
        raise NestApiUnmarshalError(error_msg) from err

    devices = data.get("devices") if isinstance(data, dict) else None
    if not isinstance(devices, list):
        error_msg = "Failed unmarshalling Nest API response body: no devices list"
        raise NestApiUnmarshalError(error_msg)
    return devices


def parse_devices(raw: bytes | str) -> list[ThermostatReading]:
    """Parse the device listing into thermostat readings.

    Non-thermostat devices are skipped. API order is preserved.

    Args:
        raw: Raw JSON body of the device listing.

    Returns:
        One ThermostatReading per thermostat device.

    Raises:
        NestApiUnmarshalError: If the body is not JSON, has no devices list,
            or contains no thermostat.

    """
    devices = _load_devices(raw)
    thermostats = [decode_thermostat(d) for d in devices if is_thermostat(d)]

    if not thermostats:
        error_msg = (
            "Failed unmarshalling Nest API response body: "
            "no valid thermostats in devices list"
        )
        raise NestApiUnmarshalError(error_msg)

    _LOGGER.debug(
        "Decoded %d thermostats out of %d devices", len(thermostats), len(devices)
    )
    return thermostats
