# catalog/models/form_draft.py
from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional, Union

from catalog.models.product import Product, ProductCategory


@dataclass
class ImageInput:
    """Opaque image picked by the user. Bytes are kept as-is; nothing here inspects them."""
    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


@dataclass
class FormDraft:
    """
    Raw, unvalidated input for one product edit. Enforces nothing:
    every constraint lives in catalog.core.validation.
    """
    name: str = ""
    price: str = ""
    category: Union[ProductCategory, str] = ""
    stock_quantity: str = ""
    description: str = ""
    image_input: Optional[ImageInput] = None

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]


def _format_number(value: float) -> str:
    # 10.0 -> "10", 29.99 -> "29.99"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def empty_draft() -> FormDraft:
    return FormDraft()


def draft_from_product(product: Optional[Product]) -> FormDraft:
    """
    Build the editable draft for `product`. Call again whenever the edited
    record is swapped; `None` gives the blank draft of a new product.
    """
    if product is None:
        return empty_draft()
    category = ProductCategory.coerce(product.category) or product.category or ""
    return FormDraft(
        name=product.name,
        price=_format_number(product.price),
        category=category,
        stock_quantity=str(int(product.stock_quantity)),
        description=product.description or "",
        image_input=None,
    )
