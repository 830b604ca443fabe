"""Shared endpoint dependencies."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.services.store import SqlAlchemyStore


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyStore:
    """Store bound to the request's DB session (one transaction per request)."""
    return SqlAlchemyStore(db)
