"""Data models for the Nest Prometheus exporter."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .const import TOKEN_EXPIRY_DELTA_SECONDS, TOKEN_TYPE_BEARER, TOKEN_URL


@dataclass
class OAuthToken:
    """Represents an OAuth2 token with its expiration timestamp.

    A token without ``expire_at`` never expires.
    """

    access_token: str = ""
    token_type: str = TOKEN_TYPE_BEARER
    refresh_token: str = ""
    expire_at: datetime | None = None

    def is_valid(self, now: datetime | None = None) -> bool:
        """Return True if the access token can be sent as is."""
        if not self.access_token:
            return False
        if self.expire_at is None:
            return True
        now = now or datetime.now(UTC)
        return now < self.expire_at - timedelta(seconds=TOKEN_EXPIRY_DELTA_SECONDS)


@dataclass(frozen=True, slots=True)
class ThermostatReading:
    """Represents the state of one thermostat reported by the Nest API.

    Temperatures are in Fahrenheit, humidity is a percentage.
    """

    id: str
    label: str
    ambient_temperature: float
    setpoint_heat: float
    setpoint_cool: float
    humidity: float
    hvac_status: str
    mode: str


@dataclass(frozen=True)
class CollectorConfig:
    """Configuration needed to build a NestCollector.

    Attributes:
        api_url: Base URL of the Smart Device Management API.
        oauth_client_id: OAuth client id.
        oauth_client_secret: OAuth client secret.
        refresh_token: Refresh token used to obtain access tokens.
        project_id: Device Access project (enterprise) id.
        timeout: Request timeout in milliseconds.
        token: Optional pre-supplied token, used instead of the refresh token.
        token_url: OAuth token endpoint.

    """

    api_url: str
    oauth_client_id: str
    oauth_client_secret: str
    refresh_token: str
    project_id: str
    timeout: int
    token: OAuthToken | None = None
    token_url: str = TOKEN_URL


@dataclass(frozen=True)
class ExporterSettings:
    """Process level settings for the exporter."""

    listen_addr: str
    listen_port: int
    log_level: str
    collector: CollectorConfig
