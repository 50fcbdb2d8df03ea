"""Entry point for running the FastAPI application with Uvicorn."""
from __future__ import annotations

import os

import uvicorn

from today_viral.config import get_settings


def main() -> None:
  settings = get_settings()
  reload = os.getenv("UVICORN_RELOAD", "true").lower() == "true"
  uvicorn.run(
    "today_viral.main:app",
    host="0.0.0.0",
    port=settings.server_port,
    reload=reload,
    log_level=settings.log_level,
  )


if __name__ == "__main__":
  main()
