from dataclasses import dataclass

from src.inventory.core.services import DbSessionService, ProductService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    product_service: ProductService
