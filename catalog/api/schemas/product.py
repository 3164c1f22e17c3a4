from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field, field_validator

from catalog.models.form_draft import FormDraft
from catalog.models.product import Product


def _as_text(v: Any) -> str:
    # form clients may send null or bare numbers; the draft only holds raw text
    if v is None:
        return ""
    return v if isinstance(v, str) else str(v)


class ProductDraftIn(BaseModel):
    name: str = ""
    price: str = ""
    category: str = ""
    stock_quantity: str = ""
    description: str = ""

    @field_validator("name", "price", "category", "stock_quantity", "description", mode="before")
    @classmethod
    def raw_text(cls, v):
        return _as_text(v)

    def to_draft(self) -> FormDraft:
        return FormDraft(
            name=self.name,
            price=self.price,
            category=self.category,
            stock_quantity=self.stock_quantity,
            description=self.description,
        )


class ValidationResultOut(BaseModel):
    is_valid: bool
    field_errors: Dict[str, str] = Field(default_factory=dict)


class PriceRangeIn(BaseModel):
    min_price: str = Field("", description="Lower bound; empty means no bound")
    max_price: str = Field("", description="Upper bound; empty means no bound")

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def raw_text(cls, v):
        return _as_text(v)


class PriceRangeOut(BaseModel):
    is_valid: bool
    error: Optional[str] = None


class ProductOut(BaseModel):
    id: Optional[str] = None
    name: str
    price: float
    category: str
    stock_quantity: int
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductOut":
        return cls(**product.to_dict())


class DraftOut(BaseModel):
    name: str
    price: str
    category: str
    stock_quantity: str
    description: str
    image_url: Optional[str] = Field(None, description="Current image, kept unless a new one is uploaded")


class CategoriesOut(BaseModel):
    categories: List[str]
