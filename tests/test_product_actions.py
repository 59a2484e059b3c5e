import pytest

from grillmaster.models import ProductUpdate
from grillmaster.product_actions import add_product, delete_product, update_product
from grillmaster.selectors import product_by_id


def test_add_product_parses_form_price(store):
    result = add_product(store, " Fish Burger ", "1450.50", " Seafood ")

    product = result.value
    assert result
    assert product.name == "Fish Burger"
    assert product.price == pytest.approx(1450.5)
    assert product.category == "Seafood"
    assert product.image == "🍽️"
    assert store.get_state().products[-1] == product


@pytest.mark.parametrize(
    "name,price,category",
    [("", 100, "Sides"), ("Fries", "abc", "Sides"), ("Fries", -1, "Sides"), ("Fries", 100, "  ")],
)
def test_add_product_rejects_missing_or_bad_fields(store, name, price, category):
    result = add_product(store, name, price, category)

    assert result.error == "Invalid product data"
    assert len(store.get_state().products) == 20


def test_add_product_enforces_rules(store):
    assert add_product(store, "Pi", 100, "Sides").error.startswith("Name must be at least")
    assert add_product(store, "Gold Burger", 2_000_000, "Beef Burgers").error.startswith("Price cannot exceed")


def test_update_product_applies_only_valid_fields(store):
    result = update_product(store, 2, {"name": "  ", "price": "-5", "category": "Specials"})

    product = result.value
    assert product.name == "Classic Beef"
    assert product.price == 1650.00
    assert product.category == "Specials"
    assert product_by_id(store.get_state(), 2) == product


def test_update_product_with_dto(store):
    update_product(store, 15, ProductUpdate(price=300, image="🧃"))

    product = product_by_id(store.get_state(), 15)
    assert product.price == 300
    assert product.image == "🧃"


def test_update_unknown_product_fails(store):
    assert update_product(store, 404, {"price": 1}).error == "Product not found"


def test_delete_product(store):
    assert delete_product(store, 20)
    assert product_by_id(store.get_state(), 20) is None
    assert delete_product(store, 20).error == "Product not found"
