from __future__ import annotations

import logging

import uvicorn

from mikan_assist.main import app as fastapi_app
from mikan_assist.settings import settings

_log = logging.getLogger(__name__)


def main() -> None:
    _log.info("Serving on %s:%d", settings.backend_host, settings.backend_port)
    uvicorn.run(
        fastapi_app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.backend_log_level,
    )


if __name__ == "__main__":
    main()
