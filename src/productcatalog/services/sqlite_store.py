"""SQLite-backed product store.

Local runnable baseline for development without cloud credentials. Set
CATALOG_BACKEND=firestore (the default) to use Firestore instead.
"""

from __future__ import annotations

import sqlite3
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, List

from productcatalog.core.models import Product
from productcatalog.services.store import ProductStoreError


class SqliteStoreError(ProductStoreError):
    pass


class SqliteProductStore:
    def __init__(self, db_path: str = "data/catalog.db") -> None:
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS products (
              id TEXT PRIMARY KEY,
              name TEXT NOT NULL,
              description TEXT NOT NULL,
              price REAL NOT NULL,
              image_url TEXT NOT NULL,
              created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
            );
            """
        )
        self.conn.commit()

    @staticmethod
    def _wrap(exc: sqlite3.Error) -> SqliteStoreError:
        return SqliteStoreError(str(exc), code=getattr(exc, "sqlite_errorname", None))

    def list_products(self) -> List[Product]:
        try:
            with self._lock:
                rows = self.conn.execute(
                    "SELECT * FROM products ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
        except sqlite3.Error as exc:
            raise self._wrap(exc) from exc
        return [
            Product.from_document(
                row["id"],
                {
                    "name": row["name"],
                    "description": row["description"],
                    "price": row["price"],
                    "imageUrl": row["image_url"],
                    "createdAt": row["created_at"],
                },
            )
            for row in rows
        ]

    def add_product(self, fields: Dict[str, Any]) -> str:
        product_id = uuid.uuid4().hex
        try:
            with self._lock:
                self.conn.execute(
                    "INSERT INTO products(id, name, description, price, image_url) VALUES(?,?,?,?,?)",
                    (product_id, fields["name"], fields["description"], fields["price"], fields["imageUrl"]),
                )
                self.conn.commit()
        except sqlite3.Error as exc:
            raise self._wrap(exc) from exc
        return product_id

    def delete_product(self, product_id: str) -> None:
        try:
            with self._lock:
                self.conn.execute("DELETE FROM products WHERE id=?", (product_id,))
                self.conn.commit()
        except sqlite3.Error as exc:
            raise self._wrap(exc) from exc

    def close(self) -> None:
        self.conn.close()
