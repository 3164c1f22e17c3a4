# catalog/services/product_store.py
from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from catalog.core.errors import ProductNotFoundError
from catalog.database import FileBackedDB
from catalog.models.product import Product

logger = logging.getLogger(__name__)

TABLE = "products"


class ProductStore(Protocol):
    """Storage collaborator the product form submits to."""

    def create(self, data: Dict[str, Any]) -> Product: ...

    def update(self, product: Product) -> Product: ...

    def get(self, product_id: str) -> Optional[Product]: ...

    def list(self) -> List[Product]: ...


class FileProductStore:
    """ProductStore backed by the CSV / Excel FileBackedDB."""

    def __init__(self, db: FileBackedDB):
        self.db = db

    def create(self, data: Dict[str, Any]) -> Product:
        row = {k: v for k, v in data.items() if k != "id"}
        row["created_at"] = datetime.utcnow().isoformat(sep=" ")
        saved = self.db.create_record(TABLE, row, id_field="id")
        product = Product.from_dict(saved)
        logger.info("product created: %s", product.id)
        return product

    def update(self, product: Product) -> Product:
        if not product.id:
            raise ProductNotFoundError("")
        updates = product.to_dict()
        updates.pop("id", None)
        updates.pop("created_at", None)
        updated = self.db.update_record(TABLE, "id", product.id, updates)
        if not updated:
            raise ProductNotFoundError(product.id)
        logger.info("product updated: %s", product.id)
        return Product.from_dict(updated)

    def get(self, product_id: str) -> Optional[Product]:
        row = self.db.get_record(TABLE, "id", product_id)
        return Product.from_dict(row) if row else None

    def list(self) -> List[Product]:
        return [Product.from_dict(r) for r in self.db.list_records(TABLE)]
