import pytest

from catalog.core.normalize import normalize_draft
from catalog.core.validation import MAX_INT_DIGITS
from catalog.models.form_draft import FormDraft, draft_from_product, empty_draft
from catalog.models.product import Product, ProductCategory


def test_empty_draft_has_blank_fields():
    draft = empty_draft()
    assert draft == FormDraft(name="", price="", category="", stock_quantity="", description="", image_input=None)
    assert draft_from_product(None) == draft


def test_draft_seeded_from_product():
    product = Product(id="p1", name="Desk Lamp", price=10.0, category="Home", stock_quantity=3,
                      description=None, image_url="data:image/png;base64,AAAA")
    draft = draft_from_product(product)
    assert draft.name == "Desk Lamp"
    assert draft.price == "10"
    assert draft.category is ProductCategory.HOME
    assert draft.stock_quantity == "3"
    assert draft.description == ""
    # the existing image stays on the record; the draft only carries a new upload
    assert draft.image_input is None


@pytest.mark.parametrize("price,text", [(29.99, "29.99"), (0.5, "0.5"), (100.0, "100"), (7.1, "7.1")])
def test_draft_price_text(price, text):
    assert draft_from_product(Product(name="abc", price=price)).price == text


def test_unknown_stored_category_is_kept_as_text():
    assert draft_from_product(Product(name="abc", category="Toys")).category == "Toys"


def test_normalize_draft_types_and_trims(valid_draft):
    draft = valid_draft(name="  Wireless Mouse ", description="  Two buttons  ", stock_quantity="5.9")
    data = normalize_draft(draft, image_url="data:image/png;base64,AAAA")
    assert data == {
        "name": "Wireless Mouse",
        "price": 29.99,
        "category": "Electronics",
        "stock_quantity": 5,
        "description": "Two buttons",
        "image_url": "data:image/png;base64,AAAA",
    }


def test_normalize_drops_blank_description(valid_draft):
    assert normalize_draft(valid_draft(description="   "))["description"] is None
    assert normalize_draft(valid_draft(description=""))["image_url"] is None


def test_normalize_rejects_unparseable_numbers(valid_draft):
    with pytest.raises(ValueError):
        normalize_draft(valid_draft(price="abc"))
    with pytest.raises(ValueError):
        normalize_draft(valid_draft(stock_quantity="many"))


def test_normalize_overlong_stock_keeps_leading_digits(valid_draft):
    stock = normalize_draft(valid_draft(stock_quantity="0" * 10 + "1" * 5000))["stock_quantity"]
    assert stock > 0
    assert len(str(stock)) == MAX_INT_DIGITS


def test_stored_large_stock_reads_back():
    assert Product.from_dict({"name": "abc", "stock_quantity": "1" * 4000}).stock_quantity == int("1" * 4000)
    assert Product.from_dict({"name": "abc", "stock_quantity": "15.0"}).stock_quantity == 15
    assert Product.from_dict({"name": "abc", "stock_quantity": "1e400"}).stock_quantity == 0
