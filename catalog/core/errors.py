from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog.core.validation import ValidationResult


class CatalogError(Exception):
    pass


class ProductNotFoundError(CatalogError, LookupError):
    def __init__(self, product_id: str):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class FormValidationError(CatalogError, ValueError):
    """Raised by callers that want a failed submit as an exception instead of data."""

    def __init__(self, result: "ValidationResult"):
        fields = ", ".join(sorted(result.field_errors))
        super().__init__(f"Invalid product form fields: {fields}")
        self.result = result

    @property
    def field_errors(self):
        return dict(self.result.field_errors)


class SessionClosedError(CatalogError):
    pass
