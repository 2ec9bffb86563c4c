"""Prometheus collector exposing Nest thermostat readings."""

import logging
from collections.abc import Iterable

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from . import api
from .api import build_devices_url, create_session_client, validate_api_url
from .const import (
    ALL_METRICS,
    HVAC_STATUS_COOLING,
    HVAC_STATUS_HEATING,
    LABEL_SEPARATOR,
    METRIC_AMBIENT_TEMPERATURE,
    METRIC_COOLING,
    METRIC_HEATING,
    METRIC_HUMIDITY,
    METRIC_MODE,
    METRIC_SETPOINT_TEMPERATURE,
    METRIC_SETPOINT_TEMPERATURE_HVAC,
    METRIC_UP,
    MODE_FLAG_METRICS,
    MODE_VALUE_MAP,
    MetricDefinition,
)
from .models import CollectorConfig, ThermostatReading
from .parser import parse_devices

_LOGGER = logging.getLogger(__name__)


def _gauge(definition: MetricDefinition) -> GaugeMetricFamily:
    return GaugeMetricFamily(
        definition.name, definition.documentation, labels=definition.labels
    )


def b2f(value: bool) -> float:  # noqa: FBT001
    """Convert a boolean to a gauge value."""
    return 1.0 if value else 0.0


def mode_to_value(mode: str) -> int | None:
    """Map a thermostat mode to its numeric value, None if unknown."""
    return MODE_VALUE_MAP.get(mode)


def device_labels(reading: ThermostatReading) -> list[str]:
    """Build the id and label values shared by every device gauge."""
    return [reading.id, reading.label.replace(" ", LABEL_SEPARATOR)]


class NestCollector(Collector):
    """Collect thermostat data from the Nest API on every scrape."""

    def __init__(self, config: CollectorConfig) -> None:
        """Initialize the collector.

        Raises:
            NestApiUrlError: If the configured API URL is malformed.

        """
        validate_api_url(config.api_url)
        self.url = build_devices_url(config.api_url, config.project_id)
        self.session = create_session_client(config)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.session.close()

    def describe(self) -> Iterable[GaugeMetricFamily]:
        """Return the exported metric families without samples."""
        return [_gauge(definition) for definition in ALL_METRICS]

    def get_readings(self) -> list[ThermostatReading]:
        """Fetch and decode the current thermostat readings."""
        body = api.fetch_devices(self.session, self.url)
        return parse_devices(body)

    def collect(self) -> Iterable[GaugeMetricFamily]:
        """Run one collection cycle.

        On any failure only nest_up is reported, with value 0.
        """
        up = GaugeMetricFamily(METRIC_UP.name, METRIC_UP.documentation)
        try:
            thermostats = self.get_readings()
        except api.NestApiClientError as err:
            _LOGGER.error("Failed collecting Nest data: %s", err, exc_info=err)
            up.add_metric([], 0)
            yield up
            return
        except Exception:
            _LOGGER.exception("Unexpected error collecting Nest data")
            up.add_metric([], 0)
            yield up
            return

        _LOGGER.debug("Successfully collected Nest data")
        up.add_metric([], 1)
        yield up

        yield from self._device_metrics(thermostats)

    def _device_metrics(
        self, thermostats: list[ThermostatReading]
    ) -> Iterable[GaugeMetricFamily]:
        ambient = _gauge(METRIC_AMBIENT_TEMPERATURE)
        setpoint = _gauge(METRIC_SETPOINT_TEMPERATURE)
        setpoint_hvac = _gauge(METRIC_SETPOINT_TEMPERATURE_HVAC)
        humidity = _gauge(METRIC_HUMIDITY)
        heating = _gauge(METRIC_HEATING)
        cooling = _gauge(METRIC_COOLING)
        mode = _gauge(METRIC_MODE)
        mode_flags = [
            (_gauge(definition), flag_mode)
            for definition, flag_mode in MODE_FLAG_METRICS.items()
        ]

        for therm in thermostats:
            labels = device_labels(therm)

            ambient.add_metric(labels, therm.ambient_temperature)
            setpoint.add_metric(labels, therm.setpoint_heat)
            setpoint_hvac.add_metric(labels, therm.setpoint_cool)
            humidity.add_metric(labels, therm.humidity)
            heating.add_metric(labels, b2f(therm.hvac_status == HVAC_STATUS_HEATING))
            cooling.add_metric(labels, b2f(therm.hvac_status == HVAC_STATUS_COOLING))

            for family, flag_mode in mode_flags:
                family.add_metric(labels, b2f(therm.mode == flag_mode))

            if mode_to_value(therm.mode) is not None:
                mode.add_metric([*labels, therm.mode], 1)

        yield ambient
        yield setpoint
        yield setpoint_hvac
        yield humidity
        yield heating
        yield cooling
        yield mode
        for family, _ in mode_flags:
            yield family
