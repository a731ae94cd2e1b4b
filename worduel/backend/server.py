"""Run the API with uvicorn using environment settings."""

from __future__ import annotations

import logging

from worduel.backend.config import load_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main() -> int:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    import uvicorn

    from worduel.backend.api import create_app

    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
