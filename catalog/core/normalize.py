from __future__ import annotations
from typing import Any, Dict, Optional

from catalog.core.validation import parse_leading_float, parse_leading_int
from catalog.models.form_draft import FormDraft
from catalog.models.product import ProductCategory


def normalize_draft(draft: FormDraft, image_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Convert a draft that already passed validation into typed product data
    (name/description trimmed, empty description dropped to None).
    Raises ValueError if the numeric fields do not parse.
    """
    price = parse_leading_float(draft.price or "")
    if price is None:
        raise ValueError(f"Unparseable price: {draft.price!r}")
    stock_quantity = parse_leading_int(draft.stock_quantity or "")
    if stock_quantity is None:
        raise ValueError(f"Unparseable stock quantity: {draft.stock_quantity!r}")
    category = ProductCategory.coerce(draft.category)
    if category is None:
        raise ValueError(f"Unknown category: {draft.category!r}")

    return {
        "name": (draft.name or "").strip(),
        "price": price,
        "category": category.value,
        "stock_quantity": stock_quantity,
        "description": (draft.description or "").strip() or None,
        "image_url": image_url,
    }
