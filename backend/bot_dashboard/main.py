"""
main.py
Unified backend entrypoint. Creates the FastAPI app and wires everything.
"""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings as default_settings
from .db.postgres import Database
from .routers import bot, dashboard, health
from .ws import ConnectionManager

logger = logging.getLogger("bot_dashboard")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    db: Optional[Database] = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Bot Dashboard Backend", version="1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if db is None:
        db = Database(
            settings.database_url,
            min_size=settings.db_min_pool_size,
            max_size=settings.db_max_pool_size,
        )
    ws_manager = ConnectionManager()

    # include routers
    app.include_router(health.router)
    app.include_router(bot.router)
    app.include_router(dashboard.router)

    # store shared singletons for DI
    app.state.settings = settings
    app.state.db = db
    app.state.ws_manager = ws_manager

    @app.on_event("startup")
    async def startup():
        configure_logging(settings.log_level)
        try:
            await db.connect()
        except Exception as exc:
            # queries open the pool on first use; until then they answer 500
            logger.warning("Postgres not reachable at startup: %s", exc)
        logger.info("Backend running on port %s", settings.port)

    @app.on_event("shutdown")
    async def shutdown():
        await db.close()

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        await ws_manager.connect(ws)
        try:
            while True:
                await ws.receive_text()
        except WebSocketDisconnect:
            ws_manager.disconnect(ws)

    return app


def run() -> None:
    uvicorn.run(
        "bot_dashboard.main:app",
        host=default_settings.host,
        port=default_settings.port,
    )


app = create_app()

__all__ = ["app", "create_app", "run"]
