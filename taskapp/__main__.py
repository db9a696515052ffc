# taskapp/__main__.py
"""Run the task tracker API under uvicorn: ``python -m taskapp``."""

import uvicorn

from taskapp.config import Settings, configure_logging
from taskapp.main import create_app


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    # uvicorn drives the lifespan, so SIGINT/SIGTERM dispose the engine cleanly.
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
