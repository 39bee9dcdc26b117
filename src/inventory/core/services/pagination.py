"""Offset/limit arithmetic for paginated listings."""

from __future__ import annotations

from dataclasses import dataclass

from src.inventory.core.services.database.db_utils import MAX_SQL_INTEGER


def coerce_int(raw: str | int | None, default: int) -> int:
    """Parse a query value, falling back to ``default`` when it is not an integer."""
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class PageRequest:
    """A validated window into an ordered result set.

    ``page`` is at least 1 and ``limit`` lies in ``[1, max_limit]``, so
    ``offset`` is never negative and no call asks for more than ``max_limit``
    rows. ``page`` is also capped so ``offset`` fits a 64-bit SQL integer.
    """

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page: str | int | None,
        limit: str | int | None,
        *,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> PageRequest:
        resolved_page = max(coerce_int(page, 1), 1)
        resolved_limit = coerce_int(limit, default_limit)
        resolved_limit = min(max(resolved_limit, 1), max_limit)
        resolved_page = min(resolved_page, MAX_SQL_INTEGER // resolved_limit + 1)
        return cls(page=resolved_page, limit=resolved_limit)
