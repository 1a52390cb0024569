import logging
from typing import Any, Dict, List, Optional

from appwrite.client import Client
from appwrite.exception import AppwriteException
from appwrite.id import ID
from appwrite.query import Query
from appwrite.services.databases import Databases

from productcatalog.config.settings import Settings, settings
from productcatalog.core.models import Product
from productcatalog.services.store import ProductStoreError

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class AppwriteServiceError(ProductStoreError):
    pass


class AppwriteProductStore:
    """Products kept in an Appwrite collection; ``$createdAt`` is the server timestamp."""

    def __init__(self, db: Databases, database_id: str, collection_id: str) -> None:
        self.db = db
        self.database_id = database_id
        self.collection_id = collection_id

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "AppwriteProductStore":
        config = config or settings
        if not config.appwrite_endpoint:
            raise AppwriteServiceError("Missing APPWRITE_ENDPOINT in environment")
        if not config.appwrite_project_id:
            raise AppwriteServiceError("Missing APPWRITE_PROJECT_ID in environment")
        if not config.appwrite_api_key:
            raise AppwriteServiceError("Missing APPWRITE_API_KEY in environment")
        if not config.appwrite_database_id:
            raise AppwriteServiceError("Missing APPWRITE_DATABASE_ID in environment")

        client = Client()
        client.set_endpoint(config.appwrite_endpoint.rstrip("/"))
        client.set_project(config.appwrite_project_id)
        client.set_key(config.appwrite_api_key)

        return cls(Databases(client), config.appwrite_database_id, config.appwrite_products_collection_id)

    @staticmethod
    def _wrap(exc: AppwriteException) -> AppwriteServiceError:
        return AppwriteServiceError(getattr(exc, "message", None) or str(exc), code=getattr(exc, "code", None))

    @staticmethod
    def _to_product(doc: Dict) -> Product:
        data = dict(doc)
        data.setdefault("createdAt", doc.get("$createdAt"))
        return Product.from_document(doc.get("$id", ""), data)

    def _list_page(self, cursor: Optional[str]) -> List[Dict]:
        queries = [Query.order_desc("$createdAt"), Query.limit(PAGE_SIZE)]
        if cursor:
            queries.append(Query.cursor_after(cursor))
        try:
            result = self.db.list_documents(self.database_id, self.collection_id, queries=queries)
        except AppwriteException as exc:
            raise self._wrap(exc) from exc
        return list(result.get("documents", []))

    def list_products(self) -> List[Product]:
        products: List[Product] = []
        cursor: Optional[str] = None
        while True:
            docs = self._list_page(cursor)
            products.extend(self._to_product(doc) for doc in docs)
            if len(docs) < PAGE_SIZE:
                return products
            cursor = docs[-1]["$id"]

    def add_product(self, fields: Dict[str, Any]) -> str:
        try:
            created = self.db.create_document(
                self.database_id,
                self.collection_id,
                ID.unique(),
                dict(fields),
            )
        except AppwriteException as exc:
            raise self._wrap(exc) from exc
        logger.debug("Stored product %s in %s", created["$id"], self.collection_id)
        return str(created["$id"])

    def delete_product(self, product_id: str) -> None:
        try:
            self.db.delete_document(self.database_id, self.collection_id, product_id)
        except AppwriteException as exc:
            if getattr(exc, "code", None) == 404:
                return
            raise self._wrap(exc) from exc
