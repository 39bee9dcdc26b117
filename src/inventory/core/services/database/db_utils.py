from loguru import logger
from sqlalchemy import Engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, IntegrityError

# SQLSTATE unique_violation
PG_UNIQUE_VIOLATION = "23505"

# Largest value a signed 64-bit INTEGER column or bind parameter accepts
MAX_SQL_INTEGER = 2**63 - 1


def is_duplicate_key_error(err: BaseException) -> bool:
    """Return True when ``err`` is a store-reported unique constraint violation.

    Works for the PostgreSQL drivers (psycopg2 ``pgcode``, psycopg ``sqlstate``)
    and for SQLite, whose driver only reports the violation in the message.
    """
    if not isinstance(err, IntegrityError):
        return False

    orig = err.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == PG_UNIQUE_VIOLATION

    return "UNIQUE constraint failed" in str(orig)


def redact_database_url(url: str) -> str:
    """Render a database URL with its password masked, for logging."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        logger.warning("Could not parse database URL for logging")
        return "<unparseable database url>"


def _sqlite_disable_implicit_begin(dbapi_connection, connection_record) -> None:
    dbapi_connection.isolation_level = None


def _sqlite_begin_immediate(connection) -> None:
    connection.exec_driver_sql("BEGIN IMMEDIATE")


def enable_sqlite_write_locks(engine: Engine) -> None:
    """Make every SQLite transaction take the database write lock at BEGIN.

    SQLite ignores ``FOR UPDATE`` and pysqlite defers BEGIN until the first
    write, so a locking read would otherwise hold no lock at all. With
    ``BEGIN IMMEDIATE`` a second writer waits (up to the busy timeout) until
    the first commits or rolls back. Installing twice is a no-op.
    """
    if event.contains(engine, "begin", _sqlite_begin_immediate):
        return
    event.listen(engine, "connect", _sqlite_disable_implicit_begin)
    event.listen(engine, "begin", _sqlite_begin_immediate)
