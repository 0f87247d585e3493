"""
dashboard.py
Read-only dashboard endpoints. Every call recomputes from the full table.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from ..db.postgres import Database
from ..deps import get_db
from ..repos import cases_repo
from ..schemas import CountsOut, HospitalCountOut, TpaCountOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard")


@router.get("/counts", response_model=CountsOut)
async def counts(db: Database = Depends(get_db)):
    try:
        return await cases_repo.count_by_status(db)
    except Exception:
        logger.exception("Count error")
        return Response(status_code=500)


@router.get("/cases")
async def cases(db: Database = Depends(get_db)):
    try:
        return await cases_repo.list_cases(db)
    except Exception:
        logger.exception("Cases error")
        return Response(status_code=500)


@router.get("/by-hospital", response_model=List[HospitalCountOut])
async def by_hospital(db: Database = Depends(get_db)):
    try:
        return await cases_repo.saved_by_hospital(db)
    except Exception:
        logger.exception("Hospital stats error")
        return Response(status_code=500)


@router.get("/by-tpa", response_model=List[TpaCountOut])
async def by_tpa(db: Database = Depends(get_db)):
    try:
        return await cases_repo.saved_by_tpa(db)
    except Exception:
        logger.exception("TPA stats error")
        return Response(status_code=500)
