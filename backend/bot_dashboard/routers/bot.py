"""
bot.py
Event ingestion endpoint for the intake bot.
Always answers 200 unless the write itself fails, so the bot never retries
a payload we chose to drop.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from ..db.postgres import Database
from ..deps import get_db, get_ws_manager
from ..ingest import IngestOutcome, record_bot_event
from ..schemas import BotEventIn
from ..ws import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/bot/event")
async def bot_event(
    request: Request,
    db: Database = Depends(get_db),
    ws_manager: ConnectionManager = Depends(get_ws_manager),
):
    body = None
    event = None
    try:
        body = await request.json()
        event = BotEventIn.model_validate(body)
    except ValueError:
        # unparseable JSON or not an object; handled as an invalid payload
        pass

    try:
        outcome = await record_bot_event(db, ws_manager, event)
    except Exception:
        logger.exception("Bot event error")
        return Response(status_code=500)

    if outcome is IngestOutcome.IGNORED:
        logger.warning("Invalid payload: %r", body)
    return Response(status_code=200)
