"""API client for the Nest Smart Device Management API.

This module provides the OAuth2 refresh token handling, the HTTP client
construction and the single device listing request made on every scrape.
"""

import logging
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from .const import TOKEN_TYPE_BEARER, TOKEN_URL
from .models import CollectorConfig, OAuthToken

_LOGGER = logging.getLogger(__name__)

HTTP_OK = 200


class NestApiClientError(Exception):
    """Base exception for Nest API client errors."""


class NestApiUrlError(NestApiClientError):
    """Exception raised when the configured API URL cannot be parsed."""


class NestApiRequestError(NestApiClientError):
    """Exception raised when the request to the Nest API fails."""


class NestApiAuthError(NestApiRequestError):
    """Exception raised when an access token cannot be obtained."""


class NestApiResponseError(NestApiClientError):
    """Exception raised when the Nest API responds with a non-200 code."""

    def __init__(self, status_code: int) -> None:
        """Initialize the error with the HTTP status code."""
        super().__init__(f"Nest API responded with non-200 code: {status_code}")
        self.status_code = status_code


class NestApiBodyError(NestApiClientError):
    """Exception raised when the response body cannot be read."""


class NestApiUnmarshalError(NestApiClientError):
    """Exception raised when the response body has an unexpected shape."""


def validate_api_url(api_url: str) -> None:
    """Check that the API URL is absolute.

    Args:
        api_url: Base URL of the Nest API.

    Raises:
        NestApiUrlError: If the URL is malformed or not absolute.

    """
    try:
        url = httpx.URL(api_url)
    except httpx.InvalidURL as err:
        error_msg = f"Failed parsing Nest API URL: {err}"
        raise NestApiUrlError(error_msg) from err

    if not url.scheme or not url.host:
        error_msg = f"Failed parsing Nest API URL: {api_url!r} is not absolute"
        raise NestApiUrlError(error_msg)


def build_devices_url(api_url: str, project_id: str) -> str:
    """Build the device listing URL for a Device Access project.

    Args:
        api_url: Base URL of the Nest API, trailing slashes allowed.
        project_id: Device Access project (enterprise) id.

    Returns:
        URL of the devices endpoint.

    """
    return api_url.rstrip("/") + "/enterprises/" + project_id + "/devices/"


def is_http_error(status: int) -> bool:
    """Check if HTTP status code is anything other than 200 OK."""
    return status != HTTP_OK


def extract_refreshed_token(
    response: httpx.Response, current: OAuthToken
) -> OAuthToken:
    """Extract a new access token from a token endpoint response.

    Args:
        response: Response of the refresh token grant.
        current: Token being refreshed, its refresh token is kept unless
            the server rotates it.

    Returns:
        New OAuthToken.

    Raises:
        NestApiAuthError: If the refresh failed or returned no access token.

    """
    if is_http_error(response.status_code):
        error_msg = f"Token refresh failed: {response.status_code}"
        raise NestApiAuthError(error_msg)

    try:
        data: dict[str, Any] = response.json()
    except ValueError as err:
        error_msg = f"Token refresh returned invalid JSON: {err}"
        raise NestApiAuthError(error_msg) from err

    access_token = data.get("access_token") if isinstance(data, dict) else None
    if not access_token:
        error_msg = "Token refresh response missing 'access_token'"
        raise NestApiAuthError(error_msg)

    expire_at = None
    expires_in = data.get("expires_in")
    if expires_in:
        try:
            expire_at = datetime.now(UTC) + timedelta(seconds=int(expires_in))
        except (TypeError, ValueError) as err:
            error_msg = f"Token refresh returned invalid 'expires_in': {err}"
            raise NestApiAuthError(error_msg) from err

    return OAuthToken(
        access_token=access_token,
        token_type=data.get("token_type") or TOKEN_TYPE_BEARER,
        refresh_token=data.get("refresh_token") or current.refresh_token,
        expire_at=expire_at,
    )


class RefreshTokenAuth(httpx.Auth):
    """httpx authentication that renews the access token when needed.

    The refresh token grant is sent through the same client right before
    the request it authenticates, only when the current token is missing
    or expired.
    """

    requires_response_body = True

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token: OAuthToken,
        token_url: str = TOKEN_URL,
    ) -> None:
        """Initialize the auth flow."""
        self.client_id = client_id
        self.client_secret = client_secret
        self.token = token
        self.token_url = token_url

    def build_refresh_request(self) -> httpx.Request:
        """Build the refresh token grant request."""
        return httpx.Request(
            "POST",
            self.token_url,
            data={
                "grant_type": "refresh_token",
                "refresh_token": self.token.refresh_token,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
        )

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        """Refresh the token if needed, then send the authorized request."""
        if not self.token.is_valid():
            _LOGGER.debug("Access token missing or expired, refreshing")
            response = yield self.build_refresh_request()
            self.token = extract_refreshed_token(response, self.token)
            _LOGGER.debug(
                "Refreshed access token, expires at: %s", self.token.expire_at
            )

        request.headers["Authorization"] = (
            f"{self.token.token_type} {self.token.access_token}"
        )
        yield request


def create_session_client(config: CollectorConfig) -> httpx.Client:
    """Create HTTP client with token refresh for the Nest API.

    If no token is supplied one is built from the refresh token. Using it,
    the client gets, and refreshes, a valid access token on its own.

    Args:
        config: Collector configuration.

    Returns:
        Configured httpx Client.

    """
    token = config.token
    if token is None:
        token = OAuthToken(
            token_type=TOKEN_TYPE_BEARER,
            refresh_token=config.refresh_token,
        )

    auth = RefreshTokenAuth(
        config.oauth_client_id,
        config.oauth_client_secret,
        token,
        token_url=config.token_url,
    )
    return httpx.Client(
        auth=auth,
        timeout=config.timeout / 1000,
        headers={"accept": "application/json"},
    )


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    raise NestApiResponseError(response.status_code)


def _read_body(response: httpx.Response) -> bytes:
    try:
        return response.read()
    except (httpx.HTTPError, httpx.StreamError) as err:
        error_msg = f"Failed reading Nest API response body: {err}"
        raise NestApiBodyError(error_msg) from err


def fetch_devices(session: httpx.Client, url: str) -> bytes:
    """Fetch the raw device listing from the Nest API.

    A single GET is made, the response is closed once the body is read
    or the request fails.

    Args:
        session: HTTP client built by create_session_client.
        url: Device listing URL.

    Returns:
        Raw response body.

    Raises:
        NestApiAuthError: If no access token could be obtained.
        NestApiRequestError: If the request fails at the network level.
        NestApiResponseError: If the API responds with a non-200 code.
        NestApiBodyError: If the body cannot be read.

    """
    _LOGGER.debug("Fetching devices from Nest API")
    try:
        with session.stream("GET", url) as response:
            _validate_http_status(response)
            body = _read_body(response)
    except httpx.RequestError as err:
        error_msg = f"Failed Nest API request: {err}"
        raise NestApiRequestError(error_msg) from err

    _LOGGER.debug("Retrieved %d bytes from Nest API", len(body))
    return body
