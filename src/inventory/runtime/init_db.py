"""Database initialization script."""

from src.inventory.core.services.database.db_session import DbSessionService
from src.inventory.runtime.context import get_config


def init_db() -> None:
    """Create all database tables."""
    db_service = DbSessionService(config=get_config())
    try:
        db_service.create_all()
    finally:
        db_service.dispose()


if __name__ == "__main__":
    init_db()
