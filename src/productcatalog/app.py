from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from productcatalog.config.settings import configure_logging, settings
from productcatalog.core.models import (
    CODE_CREATED,
    CODE_DELETED,
    CODE_DUPLICATE_NAME,
    CODE_MISSING_ID,
    CODE_STORAGE_ERROR,
    CODE_VALIDATION_ERROR,
    ActionResult,
)
from productcatalog.services.product_service import ProductService


configure_logging()

app = FastAPI(title="Product Catalog API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_origin_regex=settings.cors_allow_origin_regex or None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

STATUS_BY_CODE: Dict[str, int] = {
    CODE_CREATED: 201,
    CODE_DELETED: 200,
    CODE_VALIDATION_ERROR: 422,
    CODE_DUPLICATE_NAME: 409,
    CODE_MISSING_ID: 400,
    CODE_STORAGE_ERROR: 502,
}


class ProductPayload(BaseModel):
    # Untyped so the form validator does all coercion and rejection.
    name: Optional[Any] = None
    description: Optional[Any] = None
    price: Optional[Any] = None
    imageUrl: Optional[Any] = None


@lru_cache
def get_product_service() -> ProductService:
    return ProductService.from_settings()


def _result_response(result: ActionResult) -> JSONResponse:
    return JSONResponse(
        content=result.to_dict(),
        status_code=STATUS_BY_CODE.get(result.code, 200),
    )


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/products")
def list_products(service: ProductService = Depends(get_product_service)) -> List[Dict]:
    return [product.to_dict() for product in service.list_products()]


@app.post("/products")
def submit_product(payload: ProductPayload, service: ProductService = Depends(get_product_service)) -> JSONResponse:
    return _result_response(service.submit_product(payload.model_dump()))


@app.delete("/products/{product_id}")
def delete_product(product_id: str, service: ProductService = Depends(get_product_service)) -> JSONResponse:
    return _result_response(service.delete_product(product_id))
