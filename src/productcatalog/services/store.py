from typing import Any, Dict, List, Optional, Protocol

from productcatalog.config.settings import Settings, settings as default_settings
from productcatalog.core.models import Product


class ProductStoreError(Exception):
    def __init__(self, message: str, code: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ProductStore(Protocol):
    def list_products(self) -> List[Product]:
        ...

    def add_product(self, fields: Dict[str, Any]) -> str:
        ...

    def delete_product(self, product_id: str) -> None:
        ...


def create_product_store(config: Optional[Settings] = None) -> ProductStore:
    config = config or default_settings
    backend = config.catalog_backend

    # Backends import their client libraries on use.
    if backend == "firestore":
        from productcatalog.services.firestore_store import FirestoreProductStore

        return FirestoreProductStore.from_settings(config)
    if backend == "appwrite":
        from productcatalog.services.appwrite_store import AppwriteProductStore

        return AppwriteProductStore.from_settings(config)
    if backend == "sqlite":
        from productcatalog.services.sqlite_store import SqliteProductStore

        return SqliteProductStore(config.sqlite_path)
    raise ProductStoreError(f"Unsupported CATALOG_BACKEND: {backend!r}. Use firestore, appwrite, or sqlite.")
