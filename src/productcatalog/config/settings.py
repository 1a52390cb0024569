from dataclasses import dataclass
import logging
import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    catalog_backend: str = os.getenv("CATALOG_BACKEND", "firestore").strip().lower()

    firebase_project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
    firestore_products_collection: str = os.getenv("FIRESTORE_PRODUCTS_COLLECTION", "products")

    appwrite_endpoint: str = os.getenv("APPWRITE_ENDPOINT", "")
    appwrite_project_id: str = os.getenv("APPWRITE_PROJECT_ID", "")
    appwrite_api_key: str = os.getenv("APPWRITE_API_KEY") or os.getenv("APPWRITE_FUNCTION_API_KEY", "")
    appwrite_database_id: str = os.getenv("APPWRITE_DATABASE_ID", "")
    appwrite_products_collection_id: str = os.getenv("APPWRITE_PRODUCTS_COLLECTION_ID", "products")

    sqlite_path: str = os.getenv("SQLITE_PATH", "data/catalog.db")

    listing_revalidate_seconds: int = int(os.getenv("LISTING_REVALIDATE_SECONDS", "60"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    )
    cors_allow_origin_regex: str = os.getenv(
        "CORS_ALLOW_ORIGIN_REGEX",
        r"^https?:\/\/(localhost|127\.0\.0\.1)(:\d+)?$",
    )


settings = Settings()


def configure_logging(level: str = "") -> None:
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
