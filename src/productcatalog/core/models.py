from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from productcatalog.core.image_urls import get_placeholder_image_url

FORM_ERROR_KEY = "_form"

CODE_CREATED = "created"
CODE_DELETED = "deleted"
CODE_VALIDATION_ERROR = "validation_error"
CODE_DUPLICATE_NAME = "duplicate_name"
CODE_MISSING_ID = "missing_id"
CODE_STORAGE_ERROR = "storage_error"


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    seconds = getattr(value, "seconds", None)
    if isinstance(value, Mapping):
        seconds = value.get("seconds")
    if isinstance(seconds, (int, float)):
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    return None


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    price: float
    image_url: str
    created_at: Optional[datetime]

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> "Product":
        """Build a product from a stored record, tolerating missing fields."""
        price = data.get("price")
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            price = 0
        created_at = _to_datetime(data.get("createdAt")) or datetime.now(timezone.utc)
        return cls(
            id=str(doc_id),
            name=data.get("name") or "",
            description=data.get("description") or "No description available.",
            price=float(price),
            image_url=data.get("imageUrl") or "",
            created_at=created_at,
        )

    @property
    def display_name(self) -> str:
        return self.name or "Unnamed Product"

    @property
    def display_price(self) -> str:
        return f"{self.price:.2f}"

    @property
    def display_image_url(self) -> str:
        return self.image_url or get_placeholder_image_url()

    @property
    def display_date(self) -> str:
        if self.created_at is None:
            return "Date not available"
        return f"{self.created_at:%b} {self.created_at.day}, {self.created_at.year}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.display_name,
            "description": self.description,
            "price": self.price,
            "imageUrl": self.image_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "displayPrice": self.display_price,
            "displayImageUrl": self.display_image_url,
            "displayDate": self.display_date,
        }


@dataclass
class ActionResult:
    success: bool
    message: str
    code: str
    errors: Optional[Dict[str, List[str]]] = None
    product_id: Optional[str] = None

    @classmethod
    def form_error(cls, message: str, code: str = CODE_STORAGE_ERROR) -> "ActionResult":
        return cls(success=False, message=message, code=code, errors={FORM_ERROR_KEY: [message]})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "errors": self.errors,
            "code": self.code,
            "productId": self.product_id,
        }
