"""
deps.py
FastAPI dependency helpers for shared app state.
"""

from __future__ import annotations

from fastapi import Request

from .db.postgres import Database
from .ws import ConnectionManager


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_ws_manager(request: Request) -> ConnectionManager:
    return request.app.state.ws_manager
