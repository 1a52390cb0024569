import logging
from typing import Any, List, Mapping, Optional

from productcatalog.config.settings import Settings, settings
from productcatalog.core.forms import validate_product_form
from productcatalog.core.image_urls import fix_image_url
from productcatalog.core.models import (
    CODE_CREATED,
    CODE_DELETED,
    CODE_DUPLICATE_NAME,
    CODE_MISSING_ID,
    CODE_VALIDATION_ERROR,
    ActionResult,
    Product,
)
from productcatalog.services.listing_cache import ListingCache
from productcatalog.services.store import ProductStore, ProductStoreError, create_product_store

logger = logging.getLogger(__name__)


def describe_store_error(base: str, exc: Exception) -> str:
    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)
    if code:
        return f"{base} (Error code: {code})"
    if message:
        return f"{base} ({message})"
    return base


class ProductService:
    def __init__(self, store: ProductStore, cache: Optional[ListingCache] = None) -> None:
        self.store = store
        self.cache = cache or ListingCache()

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ProductService":
        config = config or settings
        return cls(create_product_store(config), ListingCache(config.listing_revalidate_seconds))

    def list_products(self) -> List[Product]:
        try:
            return self.cache.get(self.store.list_products)
        except ProductStoreError:
            logger.exception("Error fetching products")
            return []

    def _find_by_name(self, name: str) -> Optional[Product]:
        # Full scan: no unique index backs this check.
        wanted = name.casefold()
        for product in self.store.list_products():
            if product.name and product.name.casefold() == wanted:
                return product
        return None

    def submit_product(self, form_data: Mapping[str, Any]) -> ActionResult:
        form, errors = validate_product_form(form_data)
        if form is None:
            return ActionResult(
                success=False,
                message="Validation failed. Please check your inputs.",
                code=CODE_VALIDATION_ERROR,
                errors=errors,
            )

        try:
            existing = self._find_by_name(form.name)
        except ProductStoreError as exc:
            logger.exception("Error checking for existing products")
            return ActionResult.form_error(describe_store_error("Failed to check for existing products.", exc))

        if existing is not None:
            message = f'A product named "{form.name}" already exists.'
            return ActionResult(
                success=False,
                message=message,
                code=CODE_DUPLICATE_NAME,
                errors={"name": [message]},
            )

        fields = {
            "name": form.name,
            "description": form.description,
            "price": form.price,
            "imageUrl": fix_image_url(form.image_url),
        }
        try:
            product_id = self.store.add_product(fields)
        except ProductStoreError as exc:
            logger.exception("Error adding product to the store")
            return ActionResult.form_error(
                describe_store_error("Failed to add product to database. Please try again.", exc)
            )

        self.cache.invalidate()
        logger.info("Added product %s (%s)", product_id, form.name)
        return ActionResult(
            success=True,
            message="Product added successfully!",
            code=CODE_CREATED,
            product_id=product_id,
        )

    def delete_product(self, product_id: Optional[str]) -> ActionResult:
        if not product_id or not str(product_id).strip():
            return ActionResult.form_error("Product ID is required.", code=CODE_MISSING_ID)

        product_id = str(product_id).strip()
        try:
            self.store.delete_product(product_id)
        except ProductStoreError as exc:
            logger.exception("Error deleting product %s", product_id)
            return ActionResult.form_error(describe_store_error("Failed to delete product.", exc))

        self.cache.invalidate()
        logger.info("Deleted product %s", product_id)
        return ActionResult(
            success=True,
            message="Product deleted successfully!",
            code=CODE_DELETED,
            product_id=product_id,
        )
