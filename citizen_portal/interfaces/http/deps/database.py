"""Database session dependency: one session per request, committed or rolled back on exit."""

from citizen_portal.infrastructure.database.session import get_session as get_db_session

__all__ = ["get_db_session"]
