"""
ingest.py
Turns one bot event into one case row plus one dashboard signal.

Events missing `status` or `tpa` are dropped (IGNORED) rather than rejected so
the bot never retries them. Storage errors propagate to the caller.
"""

from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .db.postgres import Database
from .repos import cases_repo
from .schemas import BotEventIn
from .ws import BOT_UPDATE, ConnectionManager

logger = logging.getLogger(__name__)


class IngestOutcome(str, enum.Enum):
    ACCEPTED = "accepted"
    IGNORED = "ignored"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def record_bot_event(
    db: Database,
    ws_manager: ConnectionManager,
    event: Optional[BotEventIn],
    clock: Callable[[], datetime] = utc_now,
) -> IngestOutcome:
    if event is None or not event.is_valid():
        return IngestOutcome.IGNORED

    now = clock()
    row = cases_repo.build_case_row(event, now)
    await cases_repo.insert_case(db, row)

    await ws_manager.broadcast(BOT_UPDATE)
    return IngestOutcome.ACCEPTED
