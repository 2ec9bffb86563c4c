"""Prometheus exporter for Nest thermostats.

Every scrape fetches the device listing from the Nest Smart Device
Management API and exposes the thermostat readings as gauges.
"""

from .collector import NestCollector
from .models import CollectorConfig, ThermostatReading

__all__ = ["CollectorConfig", "NestCollector", "ThermostatReading"]
