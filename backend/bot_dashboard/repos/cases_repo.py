"""
cases_repo.py
- Builds case rows from bot events (sentinel defaults, status timestamps).
- Writes one row per accepted event to bot_dashboard_cases (append-only).
- Count/list/group queries for the dashboard.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..db.postgres import Database
from ..schemas import BotEventIn

CASES_TABLE = "bot_dashboard_cases"
NOT_AVAILABLE = "N/A"

STATUS_PARSED = "PARSED"
STATUS_SAVED = "SAVED"

INSERT_CASE_SQL = f"""
INSERT INTO {CASES_TABLE}
(patient_name, al_number, policy_number, hospital_group, tpa_name,
 parsed_time, saved_time, status)
VALUES ($1, $2, $3, $4, $5, $6::timestamptz, $7::timestamptz, $8)
"""

COUNTS_SQL = f"""
SELECT
  COUNT(*) FILTER (WHERE status = '{STATUS_PARSED}') AS parsed,
  COUNT(*) FILTER (WHERE status = '{STATUS_SAVED}') AS saved
FROM {CASES_TABLE}
"""

LIST_CASES_SQL = f"""
SELECT *
FROM {CASES_TABLE}
ORDER BY updated_at DESC
"""

SAVED_BY_HOSPITAL_SQL = f"""
SELECT hospital_group, COUNT(*) AS count
FROM {CASES_TABLE}
WHERE status = '{STATUS_SAVED}'
GROUP BY hospital_group
ORDER BY count DESC
"""

SAVED_BY_TPA_SQL = f"""
SELECT tpa_name, COUNT(*) AS count
FROM {CASES_TABLE}
WHERE status = '{STATUS_SAVED}'
GROUP BY tpa_name
ORDER BY count DESC
"""


def coalesce(value: Any, default: str = NOT_AVAILABLE) -> Any:
    return value if value else default


def status_timestamps(
    status: Optional[str], now: datetime
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Map a status to (parsed_time, saved_time). Unknown statuses get neither."""
    if status == STATUS_PARSED:
        return now, None
    if status == STATUS_SAVED:
        return None, now
    return None, None


def build_case_row(event: BotEventIn, now: datetime) -> Dict[str, Any]:
    parsed_time, saved_time = status_timestamps(event.status, now)
    return {
        "patient_name": coalesce(event.patient_name),
        "al_number": coalesce(event.al_number),
        "policy_number": coalesce(event.policy_number),
        "hospital_group": coalesce(event.hospital_group),
        "tpa_name": coalesce(event.tpa),
        "parsed_time": parsed_time,
        "saved_time": saved_time,
        "status": event.status,
    }


async def insert_case(db: Database, row: Dict[str, Any]) -> str:
    return await db.execute(
        INSERT_CASE_SQL,
        row["patient_name"],
        row["al_number"],
        row["policy_number"],
        row["hospital_group"],
        row["tpa_name"],
        row["parsed_time"],
        row["saved_time"],
        row["status"],
    )


async def count_by_status(db: Database) -> Dict[str, int]:
    r = await db.fetchrow(COUNTS_SQL)
    if r is None:
        return {"parsed": 0, "saved": 0}
    return {"parsed": int(r["parsed"] or 0), "saved": int(r["saved"] or 0)}


async def list_cases(db: Database) -> List[dict]:
    rows = await db.fetch(LIST_CASES_SQL)
    return [dict(r) for r in rows]


async def _grouped(db: Database, query: str, key: str) -> List[dict]:
    rows = await db.fetch(query)
    return [{key: r[key], "count": int(r["count"])} for r in rows]


async def saved_by_hospital(db: Database) -> List[dict]:
    return await _grouped(db, SAVED_BY_HOSPITAL_SQL, "hospital_group")


async def saved_by_tpa(db: Database) -> List[dict]:
    return await _grouped(db, SAVED_BY_TPA_SQL, "tpa_name")
