import pytest

from grillmaster.data import demo_customers, demo_orders, demo_products
from grillmaster.models import AppState, Product
from grillmaster.storage import KeyValueStorage
from grillmaster.store import Store


@pytest.fixture
def burger():
    return Product(id=1, name="Beef Whopper", price=2050.85, category="Beef Burgers", image="🍔")


@pytest.fixture
def fries():
    return Product(id=10, name="Thick Cut Fries", price=559.32, category="Sides", image="🍟")


@pytest.fixture
def store():
    return Store(AppState(products=demo_products(), customers=demo_customers()))


@pytest.fixture
def demo_store():
    return Store(AppState(products=demo_products(), customers=demo_customers(), orders=demo_orders()))


@pytest.fixture
def storage(tmp_path):
    kv = KeyValueStorage(tmp_path / "pos.db")
    assert kv.bootstrap_schema()
    return kv


@pytest.fixture
def recorder():
    """A store listener that keeps every snapshot it receives."""
    calls = []

    def listener(state):
        calls.append(state)

    listener.calls = calls
    return listener
