# catalog/api/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from catalog.api.deps import get_product_store
from catalog.api.schemas.product import (
    CategoriesOut,
    DraftOut,
    PriceRangeIn,
    PriceRangeOut,
    ProductDraftIn,
    ProductOut,
    ValidationResultOut,
)
from catalog.core.errors import ProductNotFoundError
from catalog.core.validation import validate, validate_price_range
from catalog.models.form_draft import draft_from_product
from catalog.models.product import Product, ProductCategory
from catalog.services.product_form import ProductFormSession
from catalog.services.product_store import ProductStore
from catalog.utils.images import read_image_upload

router = APIRouter(prefix="/api/products", tags=["products"])


def _get_or_404(store: ProductStore, product_id: str) -> Product:
    product = store.get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


async def _submit_form(
    store: ProductStore,
    product: Optional[Product],
    fields: ProductDraftIn,
    image: Optional[UploadFile],
) -> Product:
    session = ProductFormSession(store, product=product)
    for name, value in fields.model_dump().items():
        session.set_field(name, value)
    upload = await read_image_upload(image)
    if upload is not None:
        session.set_image(upload)
    try:
        saved = session.submit()
    except ProductNotFoundError:
        raise HTTPException(status_code=404, detail="Product not found")
    if saved is None:
        raise HTTPException(
            status_code=422,
            detail={"field_errors": session.errors},
        )
    return saved


def _form_fields(
    name: str = Form(""),
    price: str = Form(""),
    category: str = Form(""),
    stock_quantity: str = Form(""),
    description: str = Form(""),
) -> ProductDraftIn:
    return ProductDraftIn(
        name=name,
        price=price,
        category=category,
        stock_quantity=stock_quantity,
        description=description,
    )


@router.get("/categories", response_model=CategoriesOut)
def list_categories():
    return CategoriesOut(categories=ProductCategory.values())


@router.post("/validate", response_model=ValidationResultOut)
def validate_product_form(payload: ProductDraftIn):
    """
    Dry-run validation of a product form. Always 200; problems come back
    in `field_errors`.
    """
    return ValidationResultOut(**validate(payload.to_draft()).to_dict())


@router.post("/price-range/validate", response_model=PriceRangeOut)
def validate_price_filter(payload: PriceRangeIn):
    return PriceRangeOut(**validate_price_range(payload.min_price, payload.max_price).to_dict())


@router.get("/", response_model=List[ProductOut])
def list_products(
    q: Optional[str] = Query(None, description="search query (name)"),
    category: Optional[str] = Query(None),
    min_price: str = Query("", description="lower price bound"),
    max_price: str = Query("", description="upper price bound"),
    limit: int = 100,
    offset: int = 0,
    store: ProductStore = Depends(get_product_store),
):
    """
    List products. Supports a name substring search, a category and a price range.
    """
    price_range = validate_price_range(min_price, max_price)
    if not price_range.is_valid:
        raise HTTPException(status_code=400, detail=price_range.error)
    lo = float(min_price) if min_price else None
    hi = float(max_price) if max_price else None

    results = []
    for p in store.list():
        if q and q.lower() not in p.name.lower():
            continue
        if category and p.category != category:
            continue
        if lo is not None and p.price < lo:
            continue
        if hi is not None and p.price > hi:
            continue
        results.append(ProductOut.from_product(p))
    return results[offset : offset + limit]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, store: ProductStore = Depends(get_product_store)):
    return ProductOut.from_product(_get_or_404(store, product_id))


@router.get("/{product_id}/draft", response_model=DraftOut)
def get_product_draft(product_id: str, store: ProductStore = Depends(get_product_store)):
    """Editable form values for an existing product."""
    product = _get_or_404(store, product_id)
    draft = draft_from_product(product)
    category = draft.category.value if isinstance(draft.category, ProductCategory) else draft.category
    return DraftOut(
        name=draft.name,
        price=draft.price,
        category=category,
        stock_quantity=draft.stock_quantity,
        description=draft.description,
        image_url=product.image_url,
    )


@router.post("/", response_model=ProductOut, status_code=201)
async def create_product(
    fields: ProductDraftIn = Depends(_form_fields),
    image: Optional[UploadFile] = File(None),
    store: ProductStore = Depends(get_product_store),
):
    """
    Create a product from raw form input (multipart). 422 with `field_errors`
    when any field is invalid; nothing is stored in that case.
    """
    saved = await _submit_form(store, None, fields, image)
    return ProductOut.from_product(saved)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: str,
    fields: ProductDraftIn = Depends(_form_fields),
    image: Optional[UploadFile] = File(None),
    store: ProductStore = Depends(get_product_store),
):
    """Update a product. Without a new image the current one is kept."""
    product = _get_or_404(store, product_id)
    saved = await _submit_form(store, product, fields, image)
    return ProductOut.from_product(saved)
