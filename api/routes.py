"""
REST API routes outside the auth flow: health check and the
transaction/category endpoints, which are not implemented yet.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text

from auth.dependencies import require_identity

logger = logging.getLogger(__name__)

router = APIRouter()
protected_router = APIRouter(dependencies=[Depends(require_identity)])


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    database = "Connected"
    try:
        async with request.app.state.db.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        database = "Unavailable"
    return {"status": "OK", "message": "Server is running", "database": database}


# TODO: replace with the ledger once transaction/category storage is designed.
@protected_router.get("/transactions")
async def list_transactions() -> Dict[str, Any]:
    return {"message": "Get transactions - not implemented"}


@protected_router.post("/transactions")
async def create_transaction() -> Dict[str, Any]:
    return {"message": "Create transaction - not implemented"}


@protected_router.get("/categories")
async def list_categories() -> Dict[str, Any]:
    return {"message": "Get categories - not implemented"}
