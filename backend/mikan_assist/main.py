from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mikan_assist.db import create_tables
from mikan_assist.routers import conversations, customers
from mikan_assist.settings import settings

_log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    engine = create_tables()
    _log.info("Database ready at %s", engine.url.render_as_string(hide_password=True))
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Mikan Assist API", version="0.1.0", lifespan=lifespan)

    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    app.include_router(customers.router, prefix="/api/v1")
    app.include_router(conversations.router, prefix="/api/v1")

    return app


app = create_app()
