"""Pytest configuration and fixtures for Nest exporter tests."""

from collections.abc import Callable
from typing import Any

import pytest

from pronestheus.api import build_devices_url
from pronestheus.const import THERMOSTAT_TYPE
from pronestheus.models import CollectorConfig, OAuthToken

API_URL = "https://nest.test/v1"
PROJECT_ID = "project-id"
TOKEN_URL = "https://oauth.test/token"  # noqa: S105
DEVICES_URL = build_devices_url(API_URL, PROJECT_ID)


def create_thermostat(  # noqa: PLR0913
    name: str = "enterprises/project-id/devices/thermostat-1",
    custom_name: str = "Living Room",
    ambient_celsius: float = 20.0,
    heat_celsius: float = 21.0,
    cool_celsius: float = 25.0,
    humidity: float = 45.0,
    status: str = "HEATING",
    mode: str = "HEAT",
) -> dict[str, Any]:
    """Create a thermostat device entry as returned by the Nest API.

    Returns:
        A dictionary representing one thermostat in the devices list.

    """
    return {
        "name": name,
        "type": THERMOSTAT_TYPE,
        "traits": {
            "sdm.devices.traits.Info": {"customName": custom_name},
            "sdm.devices.traits.Humidity": {"ambientHumidityPercent": humidity},
            "sdm.devices.traits.Temperature": {
                "ambientTemperatureCelsius": ambient_celsius,
            },
            "sdm.devices.traits.ThermostatTemperatureSetpoint": {
                "heatCelsius": heat_celsius,
                "coolCelsius": cool_celsius,
            },
            "sdm.devices.traits.ThermostatHvac": {"status": status},
            "sdm.devices.traits.ThermostatMode": {
                "mode": mode,
                "availableModes": ["HEAT", "COOL", "HEATCOOL", "OFF"],
            },
        },
    }


def create_camera(name: str = "enterprises/project-id/devices/camera-1") -> dict:
    """Create a non-thermostat device entry."""
    return {
        "name": name,
        "type": "sdm.devices.types.CAMERA",
        "traits": {"sdm.devices.traits.Info": {"customName": "Front Door"}},
    }


@pytest.fixture
def sample_thermostat() -> dict[str, Any]:
    """Fixture providing a heating thermostat in HEAT mode."""
    return create_thermostat()


@pytest.fixture
def sample_devices_response(sample_thermostat: dict[str, Any]) -> dict[str, Any]:
    """Fixture providing a devices response with a thermostat and a camera.

    Args:
        sample_thermostat: Thermostat device fixture.

    Returns:
        A dictionary representing a device listing API response.

    """
    return {"devices": [sample_thermostat, create_camera()]}


@pytest.fixture
def valid_token() -> OAuthToken:
    """Fixture providing an access token that never expires."""
    return OAuthToken(access_token="access-token", refresh_token="refresh-token")


@pytest.fixture
def collector_config(valid_token: OAuthToken) -> CollectorConfig:
    """Fixture providing a configuration with a usable access token."""
    return CollectorConfig(
        api_url=API_URL,
        oauth_client_id="client-id",
        oauth_client_secret="client-secret",  # noqa: S106
        refresh_token="refresh-token",  # noqa: S106
        project_id=PROJECT_ID,
        timeout=2500,
        token=valid_token,
        token_url=TOKEN_URL,
    )


@pytest.fixture
def refresh_config() -> CollectorConfig:
    """Fixture providing a configuration with only a refresh token."""
    return CollectorConfig(
        api_url=API_URL,
        oauth_client_id="client-id",
        oauth_client_secret="client-secret",  # noqa: S106
        refresh_token="refresh-token",  # noqa: S106
        project_id=PROJECT_ID,
        timeout=2500,
        token_url=TOKEN_URL,
    )


@pytest.fixture
def make_thermostat() -> Callable[..., dict[str, Any]]:
    """Fixture providing the thermostat device factory."""
    return create_thermostat


@pytest.fixture
def make_camera() -> Callable[..., dict[str, Any]]:
    """Fixture providing the camera device factory."""
    return create_camera


@pytest.fixture
def devices_url() -> str:
    """Fixture providing the device listing URL of the test project."""
    return DEVICES_URL


@pytest.fixture
def token_url() -> str:
    """Fixture providing the OAuth token endpoint used in tests."""
    return TOKEN_URL
