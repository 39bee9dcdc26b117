"""Domain errors raised by the product services.

The API layer translates each of these into an HTTP response carrying the
error's ``status_code`` and its public ``message``. Store error text is never
part of that message.
"""

from __future__ import annotations


class InventoryError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(InventoryError):
    """Malformed or out-of-range input."""

    status_code = 400
    message = "Invalid request."


class DuplicateNameError(InventoryError):
    """A product with the same name already exists."""

    status_code = 409
    message = "Product name already exists."


class NotFoundError(InventoryError):
    """The requested product does not exist."""

    status_code = 404
    message = "Product not found."


class StorageError(InventoryError):
    """Any store or connection failure not covered above."""

    status_code = 500
    message = "Database error."
