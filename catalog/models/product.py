# catalog/models/product.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any, List
from datetime import datetime


class ProductCategory(str, Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME = "Home"
    SPORTS = "Sports"
    OTHER = "Other"

    @classmethod
    def values(cls) -> List[str]:
        return [c.value for c in cls]

    @classmethod
    def coerce(cls, value: Any) -> Optional["ProductCategory"]:
        """Return the matching category for an enum member or its display string, else None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for c in cls:
                if c.value == value:
                    return c
        return None


@dataclass
class Product:
    """
    Stored product record. The CSV-backed store hands everything back as strings,
    so from_dict converts to proper types.
    """
    id: Optional[str] = None
    name: str = ""
    price: float = 0.0
    category: str = ProductCategory.OTHER.value
    stock_quantity: int = 0
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        if d is None:
            raise ValueError("Cannot construct Product from None")
        id_val = d.get("id") or d.get("product_id") or None
        name = d.get("name") or ""
        category = d.get("category") or ProductCategory.OTHER.value
        if isinstance(category, ProductCategory):
            category = category.value
        price_raw = d.get("price", 0)
        stock_raw = d.get("stock_quantity", d.get("stock", 0))
        # empty CSV cells come back as "", which means "absent"
        description = d.get("description") or None
        image_url = d.get("image_url") or None

        # cast numeric fields safely
        try:
            price = float(price_raw) if price_raw not in (None, "") else 0.0
        except (TypeError, ValueError):
            price = 0.0

        stock_quantity = 0
        if stock_raw not in (None, ""):
            try:
                stock_quantity = int(stock_raw)
            except (TypeError, ValueError):
                # "15.0" style cells
                try:
                    stock_quantity = int(float(stock_raw))
                except (TypeError, ValueError, OverflowError):
                    stock_quantity = 0

        created_at_raw = d.get("created_at")
        created_at = None
        if created_at_raw:
            if isinstance(created_at_raw, datetime):
                created_at = created_at_raw
            else:
                try:
                    created_at = datetime.fromisoformat(str(created_at_raw))
                except ValueError:
                    created_at = None

        return cls(
            id=str(id_val) if id_val is not None else None,
            name=str(name),
            price=price,
            category=str(category),
            stock_quantity=stock_quantity,
            description=str(description) if description is not None else None,
            image_url=str(image_url) if image_url is not None else None,
            created_at=created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        if self.created_at and isinstance(self.created_at, datetime):
            out["created_at"] = self.created_at.isoformat(sep=" ")
        else:
            out["created_at"] = None
        out["price"] = float(self.price) if self.price is not None else 0.0
        out["stock_quantity"] = int(self.stock_quantity) if self.stock_quantity is not None else 0
        return out
