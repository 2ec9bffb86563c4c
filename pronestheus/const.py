"""Constants for the Nest Prometheus exporter.

This module contains the API endpoints, device trait keys, metric
definitions and mode mapping tables used throughout the exporter.
"""

from typing import NamedTuple

DEFAULT_API_URL = "https://smartdevicemanagement.googleapis.com/v1"
TOKEN_URL = "https://oauth2.googleapis.com/token"  # noqa: S105
TOKEN_TYPE_BEARER = "Bearer"  # noqa: S105
# Refresh a little before the server-side expiry
TOKEN_EXPIRY_DELTA_SECONDS = 10

DEFAULT_LISTEN_ADDR = "0.0.0.0"  # noqa: S104
DEFAULT_LISTEN_PORT = 9777
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TIMEOUT_MS = 5000

ENV_PREFIX = "PRONESTHEUS_"
ENV_FILE_VAR = "PRONESTHEUS_ENV_FILE"
DEFAULT_ENV_FILE = ".env"

THERMOSTAT_TYPE = "sdm.devices.types.THERMOSTAT"

TRAIT_INFO = "sdm.devices.traits.Info"
TRAIT_TEMPERATURE = "sdm.devices.traits.Temperature"
TRAIT_SETPOINT = "sdm.devices.traits.ThermostatTemperatureSetpoint"
TRAIT_HUMIDITY = "sdm.devices.traits.Humidity"
TRAIT_HVAC = "sdm.devices.traits.ThermostatHvac"
TRAIT_MODE = "sdm.devices.traits.ThermostatMode"

HVAC_STATUS_HEATING = "HEATING"
HVAC_STATUS_COOLING = "COOLING"

MODE_OFF = "OFF"
MODE_HEAT = "HEAT"
MODE_COOL = "COOL"
MODE_HEATCOOL = "HEATCOOL"
MODE_ECO = "ECO"

# Modes reported through nest_thermostat_mode; anything else is unknown.
# HEATCOOL only has a boolean gauge, ECO only has an entry here.
MODE_VALUE_MAP = {
    MODE_OFF: 0,
    MODE_HEAT: 1,
    MODE_COOL: 2,
    MODE_ECO: 3,
}

LABEL_SEPARATOR = "-"


class MetricDefinition(NamedTuple):
    """Name, help text and label names of an exported gauge."""

    name: str
    documentation: str
    labels: tuple[str, ...] = ()


DEVICE_LABELS = ("id", "label")

METRIC_UP = MetricDefinition("nest_up", "Was talking to Nest API successful.")
METRIC_AMBIENT_TEMPERATURE = MetricDefinition(
    "nest_ambient_temperature_fahrenheit",
    "Inside temperature in Fahrenheit.",
    DEVICE_LABELS,
)
METRIC_SETPOINT_TEMPERATURE = MetricDefinition(
    "nest_setpoint_temperature_fahrenheit",
    "Setpoint temperature in Fahrenheit.",
    DEVICE_LABELS,
)
METRIC_SETPOINT_TEMPERATURE_HVAC = MetricDefinition(
    "nest_setpoint_temperature_hvac_fahrenheit",
    "Setpoint HVAC temperature in Fahrenheit.",
    DEVICE_LABELS,
)
METRIC_HUMIDITY = MetricDefinition(
    "nest_humidity_percent", "Inside humidity.", DEVICE_LABELS
)
METRIC_HEATING = MetricDefinition(
    "nest_heating", "Is thermostat heating.", DEVICE_LABELS
)
METRIC_COOLING = MetricDefinition(
    "nest_cooling", "Is thermostat cooling.", DEVICE_LABELS
)
METRIC_MODE = MetricDefinition(
    "nest_thermostat_mode", "Current thermostat mode", (*DEVICE_LABELS, "mode")
)
METRIC_MODE_OFF = MetricDefinition(
    "nest_thermostat_mode_off", "Thermostat mode OFF", DEVICE_LABELS
)
METRIC_MODE_HEAT = MetricDefinition(
    "nest_thermostat_mode_heat", "Thermostat mode HEAT", DEVICE_LABELS
)
METRIC_MODE_COOL = MetricDefinition(
    "nest_thermostat_mode_cool", "Thermostat mode COOL", DEVICE_LABELS
)
METRIC_MODE_HEATCOOL = MetricDefinition(
    "nest_thermostat_mode_heatcool", "Thermostat mode HEATCOOL", DEVICE_LABELS
)

ALL_METRICS = (
    METRIC_UP,
    METRIC_AMBIENT_TEMPERATURE,
    METRIC_SETPOINT_TEMPERATURE,
    METRIC_SETPOINT_TEMPERATURE_HVAC,
    METRIC_HUMIDITY,
    METRIC_HEATING,
    METRIC_COOLING,
    METRIC_MODE,
    METRIC_MODE_OFF,
    METRIC_MODE_HEAT,
    METRIC_MODE_COOL,
    METRIC_MODE_HEATCOOL,
)

# Boolean mode gauges and the mode each one matches
MODE_FLAG_METRICS = {
    METRIC_MODE_OFF: MODE_OFF,
    METRIC_MODE_HEAT: MODE_HEAT,
    METRIC_MODE_COOL: MODE_COOL,
    METRIC_MODE_HEATCOOL: MODE_HEATCOOL,
}
