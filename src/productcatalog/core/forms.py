import math
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from productcatalog.core.image_urls import is_valid_image_url

NAME_MIN_LENGTH = 3
DESCRIPTION_MIN_LENGTH = 10

NAME_ERROR = f"Name must be at least {NAME_MIN_LENGTH} characters long."
DESCRIPTION_ERROR = f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters long."
PRICE_ERROR = "Price must be a positive number."
IMAGE_URL_ERROR = "Please enter a valid image URL (a direct link to an image file or a supported image host)."

FORM_FIELDS = ("name", "description", "price", "imageUrl")

FIELD_ERRORS = {
    "name": NAME_ERROR,
    "description": DESCRIPTION_ERROR,
    "price": PRICE_ERROR,
    "imageUrl": IMAGE_URL_ERROR,
}


class ProductForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    price: float = 0.0
    image_url: str = Field(default="", alias="imageUrl")

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if len(value) < NAME_MIN_LENGTH:
            raise PydanticCustomError("name_too_short", NAME_ERROR)
        return value

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        if len(value) < DESCRIPTION_MIN_LENGTH:
            raise PydanticCustomError("description_too_short", DESCRIPTION_ERROR)
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _check_price(cls, value: Any) -> float:
        if isinstance(value, bool):
            raise PydanticCustomError("price_not_positive", PRICE_ERROR)
        try:
            number = float(str(value).strip()) if isinstance(value, str) else float(value)
        except (TypeError, ValueError):
            raise PydanticCustomError("price_not_positive", PRICE_ERROR) from None
        if not math.isfinite(number) or number <= 0:
            raise PydanticCustomError("price_not_positive", PRICE_ERROR)
        return number

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: str) -> str:
        if not is_valid_image_url(value):
            raise PydanticCustomError("invalid_image_url", IMAGE_URL_ERROR)
        return value


def _text(value: Any) -> Any:
    return "" if value is None else value


def validate_product_form(data: Mapping[str, Any]) -> Tuple[Optional[ProductForm], Dict[str, List[str]]]:
    """
    Validate the submitted form fields.

    Returns the parsed form and an empty mapping, or ``None`` and a mapping of
    field name to error messages for the fields that failed.
    """
    payload = {
        "name": _text(data.get("name")),
        "description": _text(data.get("description")),
        "price": data.get("price") if data.get("price") is not None else "",
        "imageUrl": _text(data.get("imageUrl")),
    }
    try:
        return ProductForm.model_validate(payload), {}
    except ValidationError as exc:
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else "_form"
            # Non-text input fails type validation before the field rules run.
            message = FIELD_ERRORS.get(field, error["msg"]) if error["type"] == "string_type" else error["msg"]
            errors.setdefault(field, []).append(message)
        return None, errors
