"""Exporter settings from command line flags and environment variables."""

from __future__ import annotations

import argparse
import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from dotenv import load_dotenv

from .const import (
    DEFAULT_API_URL,
    DEFAULT_ENV_FILE,
    DEFAULT_LISTEN_ADDR,
    DEFAULT_LISTEN_PORT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_MS,
    ENV_FILE_VAR,
    ENV_PREFIX,
)
from .models import CollectorConfig, ExporterSettings

REQUIRED_SETTINGS = (
    "nest_client_id",
    "nest_client_secret",
    "nest_project_id",
    "nest_refresh_token",
)


class ConfigError(Exception):
    """Exception raised when required settings are missing or invalid."""


def env_var(dest: str) -> str:
    """Return the environment variable backing a setting."""
    return ENV_PREFIX + dest.upper()


def load_env_file(environ: Mapping[str, str] | None = None) -> None:
    """Load the .env file, if present, without overriding the environment."""
    environ = os.environ if environ is None else environ
    env_file = environ.get(ENV_FILE_VAR, DEFAULT_ENV_FILE)
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    """Build the argument parser, defaults taken from the environment."""

    def default(dest: str, fallback: str | None = None) -> str | None:
        return environ.get(env_var(dest), fallback)

    p = argparse.ArgumentParser(
        prog="pronestheus",
        description="Prometheus exporter for Nest thermostats",
    )
    p.add_argument(
        "--listen-addr",
        default=default("listen_addr", DEFAULT_LISTEN_ADDR),
        help="address to serve metrics on",
    )
    p.add_argument(
        "--listen-port",
        type=int,
        default=default("listen_port", str(DEFAULT_LISTEN_PORT)),
        help="port to serve metrics on",
    )
    p.add_argument(
        "--log-level",
        default=default("log_level", DEFAULT_LOG_LEVEL),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    p.add_argument(
        "--scrape-timeout",
        type=int,
        default=default("scrape_timeout", str(DEFAULT_TIMEOUT_MS)),
        help="timeout of the Nest API request, in milliseconds",
    )
    p.add_argument(
        "--nest-api-url",
        default=default("nest_api_url", DEFAULT_API_URL),
        help="Nest Smart Device Management API URL",
    )
    p.add_argument("--nest-client-id", default=default("nest_client_id"))
    p.add_argument("--nest-client-secret", default=default("nest_client_secret"))
    p.add_argument(
        "--nest-project-id",
        default=default("nest_project_id"),
        help="Device Access project id",
    )
    p.add_argument("--nest-refresh-token", default=default("nest_refresh_token"))
    return p


def get_settings(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ExporterSettings:
    """Parse flags and environment variables into ExporterSettings.

    Flags take precedence over environment variables.

    Raises:
        ConfigError: If a required setting is missing or the timeout is not
            positive.

    """
    environ = os.environ if environ is None else environ
    args = build_parser(environ).parse_args(argv)

    missing = [dest for dest in REQUIRED_SETTINGS if not getattr(args, dest)]
    if missing:
        names = ", ".join(
            f"--{dest.replace('_', '-')} ({env_var(dest)})" for dest in missing
        )
        error_msg = f"Missing required settings: {names}"
        raise ConfigError(error_msg)

    if args.scrape_timeout <= 0:
        error_msg = f"Scrape timeout must be positive, got {args.scrape_timeout}"
        raise ConfigError(error_msg)

    return ExporterSettings(
        listen_addr=args.listen_addr,
        listen_port=args.listen_port,
        log_level=args.log_level,
        collector=CollectorConfig(
            api_url=args.nest_api_url,
            oauth_client_id=args.nest_client_id,
            oauth_client_secret=args.nest_client_secret,
            refresh_token=args.nest_refresh_token,
            project_id=args.nest_project_id,
            timeout=args.scrape_timeout,
        ),
    )
