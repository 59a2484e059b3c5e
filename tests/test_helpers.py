import math

import pytest

from grillmaster.helpers import clean_text, format_currency, generate_id, parse_number, to_number
from grillmaster.models import ActionResult, Customer, Order, Product
from grillmaster.validators import validate_customer, validate_order, validate_product


def test_generate_id_is_unique_and_prefixed():
    ids = {generate_id() for _ in range(100)}

    assert len(ids) == 100
    assert generate_id("ord").startswith("ord-")


@pytest.mark.parametrize(
    "raw,expected",
    [("12.5", 12.5), (" 7 ", 7.0), (3, 3.0), ("", None), (None, None), (True, None), ("abc", None), ("nan", None), (math.inf, None)],
)
def test_parse_number(raw, expected):
    assert parse_number(raw) == expected


def test_to_number_defaults():
    assert to_number("x") == 0
    assert to_number("x", default=5) == 5
    assert to_number("15") == 15


def test_clean_text():
    assert clean_text(None) == ""
    assert clean_text("  a b ") == "a b"


def test_format_currency():
    assert format_currency(1234.5) == "Rs. 1,234.50"
    assert format_currency("oops") == "Rs. 0.00"


def test_action_result_truthiness():
    assert ActionResult.ok(1)
    assert ActionResult.ok().value is None
    failed = ActionResult.fail("nope")
    assert not failed
    assert failed.error == "nope"


def test_validate_customer():
    assert validate_customer(Customer(id=1, name="Ann", phone="0771234567", email="ann@x.lk")) == []
    fields = {error.field for error in validate_customer(Customer(id=1, name="A", phone="771234567", email="ann"))}
    assert fields == {"name", "phone", "email"}


def test_validate_product():
    assert validate_product(Product(id=1, name="Cola", price=250, category="Beverages")) == []
    fields = {error.field for error in validate_product(Product(id=1, name="Co", price=-1, category=" "))}
    assert fields == {"name", "price", "category"}


def _order(**overrides):
    values = dict(
        id="o1",
        items=(),
        customer=None,
        order_type="dine-in",
        subtotal=0,
        discount_value=0,
        discount_type="none",
        tax_rate=0,
        tax_amount=0,
        total=0,
        amount_received=0,
        change_due=0,
        payment_method="cash",
        payment_status="unpaid",
        status="preparing",
        timestamp="2026-03-10T12:00:00",
    )
    values.update(overrides)
    return Order(**values)


def test_validate_order():
    fields = {error.field for error in validate_order(_order(total=-1, payment_method="iou"))}

    assert fields == {"items", "total", "payment_method"}
