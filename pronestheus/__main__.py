"""Command line entry point for the Nest Prometheus exporter."""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Sequence

from prometheus_client import REGISTRY, start_http_server

from .api import NestApiClientError
from .collector import NestCollector
from .config import ConfigError, get_settings, load_env_file

_LOGGER = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    load_env_file()
    try:
        settings = get_settings(argv)
    except ConfigError as err:
        print(f"pronestheus: {err}", file=sys.stderr)  # noqa: T201
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    try:
        collector = NestCollector(settings.collector)
    except NestApiClientError as err:
        _LOGGER.error("Failed creating Nest collector: %s", err)
        return 1

    REGISTRY.register(collector)
    _LOGGER.info(
        "Starting Nest exporter on %s:%d",
        settings.listen_addr,
        settings.listen_port,
    )
    start_http_server(settings.listen_port, addr=settings.listen_addr)

    try:
        while True:
            time.sleep(60)
    except KeyboardInterrupt:
        _LOGGER.info("Shutting down Nest exporter")
    finally:
        REGISTRY.unregister(collector)
        collector.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
