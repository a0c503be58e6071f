"""FastAPI application and ASGI composition for the quiz server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
import socketio
import uvicorn

from quiz_live.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from quiz_live.core.question_store import QuestionStore
from quiz_live.core.quiz_coordinator import QuizCoordinator
from quiz_live.core.settings import Settings, get_settings
from quiz_live.server.socket_server import (
    SocketIOEmitter,
    create_socket_server,
    register_handlers,
)

logger = logging.getLogger(__name__)


def _get_coordinator_dependency(coordinator: QuizCoordinator):
    def dependency() -> QuizCoordinator:
        return coordinator

    return dependency


def create_api_app(coordinator: QuizCoordinator) -> FastAPI:
    """Create a FastAPI application wired to the provided coordinator."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s server starting", APP_NAME)
        yield
        coordinator.engine.abort()
        logger.info("%s server shutting down", APP_NAME)

    app = FastAPI(
        title=f"{APP_NAME} API",
        version=APP_VERSION,
        description=APP_ABOUT_TEXT,
        license_info={"name": APP_LICENSE},
        lifespan=lifespan,
    )
    coordinator_dep = _get_coordinator_dependency(coordinator)

    @app.get("/")
    def root() -> dict[str, object]:
        return {"name": APP_NAME, "version": APP_VERSION, "health": "/health"}

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/api/quiz")
    def get_quiz(manager: QuizCoordinator = Depends(coordinator_dep)) -> dict[str, object]:
        return manager.get_quiz_document()

    @app.get("/api/session")
    def get_session(manager: QuizCoordinator = Depends(coordinator_dep)) -> dict[str, object]:
        return manager.get_session_snapshot()

    return app


def create_asgi_app(settings: Settings | None = None) -> socketio.ASGIApp:
    """Build the Socket.IO server, the coordinator and the HTTP API as one ASGI app."""
    settings = settings or get_settings()
    origins = settings.cors_allowed_origins
    cors_origins: str | list[str] = origins if origins == "*" else [o.strip() for o in origins.split(",")]

    sio = create_socket_server(cors_origins)
    coordinator = QuizCoordinator(
        emitter=SocketIOEmitter(sio),
        manager_password=settings.manager_password,
        store=QuestionStore(settings.questions_file),
    )
    register_handlers(sio, coordinator)

    app = create_api_app(coordinator)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if isinstance(cors_origins, list) else ["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    return socketio.ASGIApp(sio, other_asgi_app=app)


def run_server(settings: Settings | None = None) -> None:
    """Serve the quiz until interrupted."""
    settings = settings or get_settings()
    config = uvicorn.Config(
        app=create_asgi_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    server.run()
