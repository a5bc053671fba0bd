"""Console entry point: validate the driver configuration, then serve."""

from __future__ import annotations

import logging

import uvicorn

from scm_driver.infrastructure.config import get_settings
from scm_driver.infrastructure.driver_factory import DEFAULT_ENDPOINTS, parse_kind

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the uvicorn ASGI server for the configured SCM backend."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    # Unknown drivers fail here, before the server binds its port.
    kind = parse_kind(settings.scm_driver)
    logger.info(
        "Serving %s repositories from %s",
        kind.value,
        settings.scm_url or DEFAULT_ENDPOINTS[kind],
    )
    uvicorn.run(
        "scm_driver.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
