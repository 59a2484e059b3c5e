import logging

import pytest

from grillmaster.models import AppState, Customer
from grillmaster.store import Store


def test_default_state_is_empty():
    state = Store().get_state()

    assert state.products == []
    assert state.cart == []
    assert state.current_customer is None
    assert state.current_order_type == "dine-in"
    assert state.action_history == []


def test_get_state_returns_a_detached_copy(store):
    snapshot = store.get_state()
    snapshot.products.clear()

    assert len(store.get_state().products) == 20


def test_initial_state_is_copied():
    initial = AppState(customers=[Customer(id=0, name="Guest")])
    store = Store(initial)
    initial.customers.append(Customer(id=5, name="Later"))

    assert len(store.get_state().customers) == 1


def test_replace_state_merges_patch_and_notifies(store, recorder):
    store.subscribe(recorder)
    store.replace_state({"current_order_type": "takeaway"})

    assert store.get_state().current_order_type == "takeaway"
    assert len(store.get_state().products) == 20
    assert len(recorder.calls) == 1
    assert recorder.calls[0].current_order_type == "takeaway"


def test_update_state_computes_patch_from_current_state(store):
    store.update_state(lambda state: {"products": state.products[:3]})

    assert [p.id for p in store.get_state().products] == [1, 2, 3]


def test_update_state_returning_none_still_notifies(store, recorder):
    store.subscribe(recorder)
    before = store.get_state()

    store.update_state(lambda state: None)

    assert store.get_state() == before
    assert len(recorder.calls) == 1


def test_unknown_field_is_rejected(store):
    with pytest.raises(TypeError):
        store.replace_state({"not_a_field": 1})


def test_listeners_run_in_subscription_order():
    store = Store()
    seen = []
    store.subscribe(lambda state: seen.append("first"))
    store.subscribe(lambda state: seen.append("second"))

    store.replace_state({"last_action": "X"})

    assert seen == ["first", "second"]


def test_subscribing_twice_registers_once(store, recorder):
    store.subscribe(recorder)
    store.subscribe(recorder)

    store.replace_state({"last_action": "X"})

    assert len(recorder.calls) == 1


def test_unsubscribe_stops_notifications(store, recorder):
    unsubscribe = store.subscribe(recorder)
    unsubscribe()
    unsubscribe()

    store.replace_state({"last_action": "X"})

    assert recorder.calls == []


def test_failing_listener_is_logged_and_others_still_run(store, recorder, caplog):
    def broken(state):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(recorder)

    with caplog.at_level(logging.ERROR, logger="grillmaster.store"):
        store.replace_state({"current_order_type": "delivery"})

    assert store.get_state().current_order_type == "delivery"
    assert len(recorder.calls) == 1
    assert "listener" in caplog.text


def test_listener_may_unsubscribe_during_notification(store):
    seen = []

    def once(state):
        seen.append(state.last_action)
        unsubscribe()

    unsubscribe = store.subscribe(once)
    store.replace_state({"last_action": "A"})
    store.replace_state({"last_action": "B"})

    assert seen == ["A"]


def test_listener_snapshot_mutation_does_not_leak(store):
    store.subscribe(lambda state: state.products.clear())

    store.replace_state({"last_action": "X"})

    assert len(store.get_state().products) == 20


def test_listener_writing_state_triggers_nested_notification():
    store = Store()
    seen = []

    def follow_up(state):
        seen.append(("follow_up", state.last_action))
        if state.last_action == "FIRST":
            store.replace_state({"last_action": "SECOND"})

    def observer(state):
        seen.append(("observer", state.last_action))

    store.subscribe(follow_up)
    store.subscribe(observer)

    store.replace_state({"last_action": "FIRST"})

    assert seen == [
        ("follow_up", "FIRST"),
        ("follow_up", "SECOND"),
        ("observer", "SECOND"),
        # Each listener gets the state as it is when called.
        ("observer", "SECOND"),
    ]
    assert store.get_state().last_action == "SECOND"
