# catalog/services/product_form.py
from __future__ import annotations
import dataclasses
import logging
from typing import Any, Dict, Optional

from catalog.core.errors import FormValidationError, SessionClosedError
from catalog.core.normalize import normalize_draft
from catalog.core.validation import ValidationResult, validate
from catalog.models.form_draft import FormDraft, ImageInput, draft_from_product
from catalog.models.product import Product
from catalog.services.product_store import ProductStore
from catalog.utils.images import encode_image_input

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "price", "category", "stock_quantity", "description")


class ProductFormSession:
    """
    Headless product form: owns the draft being edited, the errors shown for
    it and the record it was seeded from (None for a new product).

    Usage:
      session = ProductFormSession(store, product=existing)
      session.set_field("price", "24.50")
      saved = session.submit()
      if saved is None:
          show(session.errors)
    """

    def __init__(self, store: ProductStore, product: Optional[Product] = None):
        self.store = store
        self.product: Optional[Product] = None
        self.draft: FormDraft = FormDraft()
        self.errors: Dict[str, str] = {}
        self.closed = False
        self.load(product)

    @property
    def is_edit(self) -> bool:
        return self.product is not None

    def load(self, product: Optional[Product]) -> None:
        """Swap the edited record and rebuild the draft from it."""
        self.product = product
        self.draft = draft_from_product(product)
        self.errors = {}
        self.closed = False

    def reset(self) -> None:
        self.draft = draft_from_product(self.product)
        self.errors = {}

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError("Product form was already submitted")

    def set_field(self, field: str, value: Any) -> None:
        self._ensure_open()
        if field not in TEXT_FIELDS:
            raise KeyError(field)
        setattr(self.draft, field, value)
        self.errors.pop(field, None)

    def set_image(self, image: Optional[ImageInput]) -> None:
        self._ensure_open()
        self.draft.image_input = image
        self.errors.pop("image_input", None)

    @property
    def image_preview(self) -> Optional[str]:
        if self.draft.image_input is not None:
            return encode_image_input(self.draft.image_input)
        return self.product.image_url if self.product else None

    def _resolve_image_url(self) -> Optional[str]:
        if self.draft.image_input is not None:
            return encode_image_input(self.draft.image_input)
        if self.product is not None:
            return self.product.image_url
        return None

    def check(self) -> ValidationResult:
        return validate(self.draft)

    def submit(self) -> Optional[Product]:
        """
        Validate and hand the normalized product to the store.
        Returns the saved product, or None with `errors` filled in; nothing is
        stored unless every field passes.
        """
        self._ensure_open()
        result = validate(self.draft)
        if not result.is_valid:
            self.errors = dict(result.field_errors)
            return None

        data = normalize_draft(self.draft, image_url=self._resolve_image_url())
        try:
            if self.product is not None:
                saved = self.store.update(dataclasses.replace(self.product, **data))
            else:
                saved = self.store.create(data)
        except Exception:
            logger.exception("saving product failed (edit=%s)", self.is_edit)
            raise

        self.errors = {}
        self.closed = True
        return saved

    def submit_or_raise(self) -> Product:
        saved = self.submit()
        if saved is None:
            raise FormValidationError(ValidationResult(dict(self.errors)))
        return saved
