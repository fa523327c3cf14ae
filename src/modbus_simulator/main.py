"""
Application entrypoint.

Uvicorn ASGI server with lifecycle hooks.
"""

import uvicorn

from modbus_simulator.config import settings
from modbus_simulator.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    logger.info(f"Starting Modbus Simulator Config on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        "modbus_simulator.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
