"""
Application factory.

`create_app` builds the FastAPI app (REST API plus the relay state);
`create_asgi_app` mounts the Socket.IO server in front of it for serving.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi_pagination import add_pagination

from app.config import Settings, get_settings
from app.db import Base, engine
from app.infra.logging_config import LoggingConfig
from app.realtime.server import build_relay
from app.routers.activity_router import activity_router
from app.routers.admin_router import admin_router
from app.routers.albums_router import albums_router
from app.routers.presence_router import presence_router
from app.routers.songs_router import songs_router
from app.routers.users_router import users_router

logger = logging.getLogger(__name__)


def create_app(testing: bool = False, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    if not testing:
        LoggingConfig(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not testing:
            # Schema migrations are out of scope; make sure tables exist
            Base.metadata.create_all(bind=engine)
        logger.info("%s started (%s)", settings.app_name, settings.environment)
        yield
        logger.info("%s stopping", settings.app_name)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.relay = build_relay(settings)

    app.include_router(users_router)
    app.include_router(songs_router)
    app.include_router(albums_router)
    app.include_router(activity_router)
    app.include_router(presence_router)
    app.include_router(admin_router)
    add_pagination(app)

    @app.get("/health", tags=["system"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def create_asgi_app(settings: Optional[Settings] = None) -> socketio.ASGIApp:
    settings = settings or get_settings()
    app = create_app(settings=settings)
    return socketio.ASGIApp(
        app.state.relay.sio,
        other_asgi_app=app,
        socketio_path=settings.socketio_path,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:create_asgi_app",
        factory=True,
        host="0.0.0.0",
        port=get_settings().port,
    )
