"""
nexus.api.__main__ — Entry point for ``python -m nexus.api``
=============================================================

Wiring:
1. Configure logging (before uvicorn so service loggers share the format).
2. Load .env (secrets, DATABASE_URL).
3. Start uvicorn on ``NEXUS_HOST``/``NEXUS_PORT`` (default 0.0.0.0:8000).

The application itself creates the tables on startup.
"""

from __future__ import annotations

import logging
import os

import uvicorn
from dotenv import load_dotenv

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("nexus")


def main() -> None:
    """Bootstrap and serve the Nexus API."""
    load_dotenv()

    host = os.getenv("NEXUS_HOST", "0.0.0.0")
    port = int(os.getenv("NEXUS_PORT", "8000"))

    logger.info("Starting Nexus API on %s:%d…", host, port)
    uvicorn.run("nexus.api.main:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
