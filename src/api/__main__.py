"""Entry point for running the API server."""

import logging
import os

import uvicorn

from core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.getenv("API_HOST", "0.0.0.0")
    # API_PORT for local dev (.env), PORT for PaaS platforms
    port = int(os.getenv("API_PORT") or os.getenv("PORT") or "8000")
    uvicorn.run("api.main:app", host=host, port=port, log_config=None)
