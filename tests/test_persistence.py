import sqlite3

import pytest

from grillmaster import persistence
from grillmaster.cart_actions import add_to_cart
from grillmaster.constant import STORAGE_KEYS
from grillmaster.customer_actions import set_current_customer
from grillmaster.main import build_store
from grillmaster.models import AppState
from grillmaster.order_actions import place_order, set_order_type
from grillmaster.persistence import DebouncedSaver, load_state, reset_data, reset_to_demo, save_state
from grillmaster.selectors import customer_by_id
from grillmaster.storage import KeyValueStorage
from grillmaster.store import Store


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def scheduler():
    timers = []

    def schedule(delay, callback):
        timer = FakeTimer(delay, callback)
        timers.append(timer)
        return timer

    schedule.timers = timers
    return schedule


def test_storage_round_trips_json(storage):
    assert storage.save("k", {"a": [1, 2], "b": "ලංකා"})
    assert storage.load("k") == {"a": [1, 2], "b": "ලංකා"}


def test_storage_overwrites_existing_key(storage):
    storage.save("k", 1)
    storage.save("k", 2)

    assert storage.load("k") == 2


def test_storage_missing_key_returns_default(storage):
    assert storage.load("missing", []) == []


def test_storage_delete(storage):
    storage.save("k", 1)

    assert storage.delete("k")
    assert storage.load("k") is None


def test_storage_save_failures_return_false(storage, tmp_path):
    assert storage.save("k", {1, 2}) is False
    assert KeyValueStorage(tmp_path / "fresh.db").save("k", 1) is False


def test_storage_corrupt_value_returns_default(storage):
    with sqlite3.connect(storage.db_path) as conn:
        conn.execute("INSERT INTO kv_store (key, value, updated_at) VALUES ('bad', '{not json', 'now')")
    conn.close()

    assert storage.load("bad", "fallback") == "fallback"


def test_storage_deeply_nested_blob_is_treated_as_missing(storage):
    with sqlite3.connect(storage.db_path) as conn:
        conn.execute(
            "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, 'now')",
            (STORAGE_KEYS["products"], "[" * 200_000),
        )
    conn.close()

    assert storage.load(STORAGE_KEYS["products"], []) == []
    assert len(load_state(storage).products) == 20


def test_storage_save_of_deeply_nested_value_returns_false(storage):
    nested = []
    for _ in range(200_000):
        nested = [nested]

    assert storage.save("deep", nested) is False


def test_empty_storage_loads_demo_data(storage):
    state = load_state(storage)

    assert len(state.products) == 20
    assert len(state.customers) == 11
    assert [o.id for o in state.orders] == ["demo-1", "demo-2"]
    assert state.cart == []
    assert state.current_customer is None
    assert state.current_order_type == "dine-in"


def test_save_then_load_restores_state(storage, store, burger):
    add_to_cart(store, burger)
    set_current_customer(store, customer_by_id(store.get_state(), 2))
    set_order_type(store, "delivery")
    order = place_order(store, "card", subtotal=2050.85, total=2050.85, payment_status="paid").value

    assert save_state(storage, store.get_state())
    loaded = load_state(storage)

    original = store.get_state()
    assert loaded.products == original.products
    assert loaded.customers == original.customers
    assert loaded.orders == [order]
    assert loaded.current_customer == original.current_customer
    assert loaded.current_order_type == "delivery"


def test_history_and_cart_are_not_persisted_by_default(storage, store, burger):
    add_to_cart(store, burger)

    save_state(storage, store.get_state())
    loaded = load_state(storage)

    assert storage.load(STORAGE_KEYS["cart"]) is None
    assert loaded.cart == []
    assert loaded.action_history == []
    assert loaded.last_action is None


def test_cart_persists_when_enabled(storage, store, burger, monkeypatch):
    monkeypatch.setattr(persistence, "PERSIST_CART", True)
    add_to_cart(store, burger)
    add_to_cart(store, burger)

    save_state(storage, store.get_state())

    assert load_state(storage).cart == store.get_state().cart


def test_malformed_collections_fall_back_to_demo(storage):
    storage.save(STORAGE_KEYS["products"], "not a list")
    storage.save(STORAGE_KEYS["customers"], [{"name": "no id"}])
    storage.save(STORAGE_KEYS["current_order_type"], "drive-thru")

    state = load_state(storage)

    assert len(state.products) == 20
    assert len(state.customers) == 11
    assert state.current_order_type == "dine-in"


def test_reset_to_demo_is_fresh():
    state = reset_to_demo()

    assert isinstance(state, AppState)
    assert state.cart == []
    assert len(state.orders) == 2


def test_reset_data_replaces_and_saves(storage, store, burger, recorder):
    add_to_cart(store, burger)
    store.replace_state({"products": []})
    store.subscribe(recorder)

    assert reset_data(store, storage)

    state = store.get_state()
    assert len(recorder.calls) == 1
    assert state.cart == []
    assert state.action_history == []
    assert len(state.products) == 20
    assert len(storage.load(STORAGE_KEYS["products"])) == 20


def test_saver_without_scheduler_saves_every_change(storage, store):
    DebouncedSaver(store, storage)

    set_order_type(store, "takeaway")

    assert storage.load(STORAGE_KEYS["current_order_type"]) == "takeaway"


def test_saver_debounces_a_burst(storage, store, burger, scheduler):
    saver = DebouncedSaver(store, storage, schedule=scheduler, delay=0.25)

    add_to_cart(store, burger)
    add_to_cart(store, burger)
    set_order_type(store, "delivery")

    assert len(scheduler.timers) == 3
    assert [t.cancelled for t in scheduler.timers] == [True, True, False]
    assert scheduler.timers[-1].delay == 0.25
    assert saver.pending
    assert storage.load(STORAGE_KEYS["current_order_type"]) is None

    scheduler.timers[-1].callback()

    assert not saver.pending
    assert storage.load(STORAGE_KEYS["current_order_type"]) == "delivery"


def test_saver_close_flushes_and_unsubscribes(storage, store, scheduler):
    saver = DebouncedSaver(store, storage, schedule=scheduler)
    set_order_type(store, "takeaway")

    saver.close()
    set_order_type(store, "delivery")

    assert storage.load(STORAGE_KEYS["current_order_type"]) == "takeaway"
    assert len(scheduler.timers) == 1


def test_build_store_bootstraps_and_loads(tmp_path):
    storage = KeyValueStorage(tmp_path / "nested" / "pos.db")

    store = build_store(storage)

    assert isinstance(store, Store)
    assert storage.db_path.exists()
    assert len(store.get_state().products) == 20
