"""Database package: async engine, session factory and request-scoped session."""

from app.db.session import async_session_maker, engine, get_db

__all__ = ["async_session_maker", "engine", "get_db"]
