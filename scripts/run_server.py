"""CLI entrypoint to launch the lock service."""

from __future__ import annotations

import argparse
from pathlib import Path

import uvicorn

from semapi.app.main import create_app
from semapi.core.settings import ServiceSettings
from semapi.utils.logging import get_logger


logger = get_logger("SemapiCLI")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the SEMAPI lock service.")
    parser.add_argument("--config", type=Path, default=Path("config/semapi.example.yml"), help="Path to service YAML")
    parser.add_argument("--host", default=None, help="Bind address (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (overrides config)")
    args = parser.parse_args()

    if not args.config.exists():
        logger.warning("Config %s not found; using defaults and environment", args.config)
    settings = ServiceSettings.load(args.config)
    overrides = {key: value for key, value in (("host", args.host), ("port", args.port)) if value is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    app = create_app(settings)
    logger.info("Serving SEMAPI on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
