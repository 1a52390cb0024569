import logging
from typing import Any, Dict, List, Optional

try:
    from google.cloud import firestore
except ModuleNotFoundError as exc:
    raise ModuleNotFoundError(
        "Missing dependency 'google-cloud-firestore'. Install the project with pip install -e ."
    ) from exc
from google.api_core.exceptions import GoogleAPIError

from productcatalog.config.settings import Settings, settings
from productcatalog.core.models import Product
from productcatalog.services.store import ProductStoreError

logger = logging.getLogger(__name__)


class FirestoreServiceError(ProductStoreError):
    pass


class FirestoreProductStore:
    def __init__(self, client: "firestore.Client", collection: str = "products") -> None:
        self.db = client
        self.collection_name = collection

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "FirestoreProductStore":
        config = config or settings
        if not config.firebase_project_id:
            raise FirestoreServiceError("Missing FIREBASE_PROJECT_ID in environment")
        client = firestore.Client(project=config.firebase_project_id)
        return cls(client, config.firestore_products_collection)

    def _collection(self):
        return self.db.collection(self.collection_name)

    @staticmethod
    def _wrap(exc: GoogleAPIError) -> FirestoreServiceError:
        return FirestoreServiceError(getattr(exc, "message", None) or str(exc), code=getattr(exc, "code", None))

    def list_products(self) -> List[Product]:
        query = self._collection().order_by("createdAt", direction=firestore.Query.DESCENDING)
        try:
            return [Product.from_document(doc.id, doc.to_dict() or {}) for doc in query.stream()]
        except GoogleAPIError as exc:
            raise self._wrap(exc) from exc

    def add_product(self, fields: Dict[str, Any]) -> str:
        data = {**fields, "createdAt": firestore.SERVER_TIMESTAMP}
        try:
            _, ref = self._collection().add(data)
        except GoogleAPIError as exc:
            raise self._wrap(exc) from exc
        logger.debug("Stored product %s in %s", ref.id, self.collection_name)
        return ref.id

    def delete_product(self, product_id: str) -> None:
        try:
            self._collection().document(product_id).delete()
        except GoogleAPIError as exc:
            raise self._wrap(exc) from exc
