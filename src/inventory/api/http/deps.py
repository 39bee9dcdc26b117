"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Request

from src.inventory.api.http.app_data import ApplicationDependencies
from src.inventory.core.services import DbSessionService, ProductService


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_product_service(request: Request) -> ProductService:
    """Get the product service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.product_service
