import pytest

from grillmaster.cart_actions import (
    add_to_cart,
    clear_cart,
    remove_from_cart,
    undo_last_action,
    update_cart_quantity,
)
from grillmaster.models import AddedToCart, CartCleared, CartItem, Product, QuantityChanged, RemovedFromCart
from grillmaster.selectors import can_undo, cart_count, cart_total, undo_label
from grillmaster.store import Store


@pytest.mark.parametrize("times", [1, 2, 7])
def test_repeated_adds_bump_a_single_line(store, burger, times):
    for _ in range(times):
        add_to_cart(store, burger)

    cart = store.get_state().cart
    assert len(cart) == 1
    assert cart[0].quantity == times


def test_add_snapshots_the_product(store, burger):
    result = add_to_cart(store, burger)

    item = store.get_state().cart[0]
    assert result.success
    assert result.value == item
    assert isinstance(item, CartItem)
    assert (item.id, item.name, item.price, item.category, item.image) == (
        1,
        "Beef Whopper",
        2050.85,
        "Beef Burgers",
        "🍔",
    )


def test_add_keeps_insertion_order(store, burger, fries):
    add_to_cart(store, fries)
    add_to_cart(store, burger)
    add_to_cart(store, fries)

    assert [item.id for item in store.get_state().cart] == [10, 1]


def test_add_without_id_fails_without_writing(store, recorder):
    store.subscribe(recorder)

    result = add_to_cart(store, Product(id="", name="Mystery", price=1.0, category="Sides"))

    assert not result
    assert result.error == "Product has no id"
    assert store.get_state().cart == []
    assert recorder.calls == []


def test_add_records_history_in_the_same_write(store, burger, recorder):
    store.subscribe(recorder)

    add_to_cart(store, burger)

    assert len(recorder.calls) == 1
    state = recorder.calls[0]
    assert isinstance(state.action_history[0], AddedToCart)
    assert state.action_history[0].previous_cart == ()
    assert state.last_action == "ADD_TO_CART"


def test_remove_drops_the_whole_line(store, burger, fries):
    add_to_cart(store, burger)
    add_to_cart(store, burger)
    add_to_cart(store, fries)

    result = remove_from_cart(store, burger.id)

    assert result
    assert [item.id for item in store.get_state().cart] == [10]
    assert isinstance(store.get_state().action_history[0], RemovedFromCart)


def test_remove_missing_item_fails_without_writing(store, recorder):
    store.subscribe(recorder)

    result = remove_from_cart(store, 99)

    assert result.error == "Item not in cart"
    assert recorder.calls == []


def test_update_quantity_sets_exact_value(store, burger):
    add_to_cart(store, burger)

    update_cart_quantity(store, burger.id, 4)

    state = store.get_state()
    assert state.cart[0].quantity == 4
    entry = state.action_history[0]
    assert isinstance(entry, QuantityChanged)
    assert (entry.from_quantity, entry.to_quantity) == (1, 4)


@pytest.mark.parametrize("quantity", [0, -1, -50])
def test_update_to_zero_or_less_matches_remove(burger, fries, quantity):
    by_update, by_remove = Store(), Store()
    for target in (by_update, by_remove):
        add_to_cart(target, burger)
        add_to_cart(target, fries)

    update_cart_quantity(by_update, burger.id, quantity)
    remove_from_cart(by_remove, burger.id)

    left, right = by_update.get_state(), by_remove.get_state()
    assert left.cart == right.cart
    assert left.last_action == right.last_action == "REMOVE_FROM_CART"
    assert [type(e) for e in left.action_history] == [type(e) for e in right.action_history]


def test_update_missing_item_fails(store):
    result = update_cart_quantity(store, 42, 3)

    assert result.error == "Item not in cart"


def test_clear_cart_records_history_even_when_empty(store):
    clear_cart(store)

    entry = store.get_state().action_history[0]
    assert isinstance(entry, CartCleared)
    assert entry.item_count == 0


def test_history_is_capped_and_newest_first(store, burger):
    for quantity in range(2, 8):
        if not store.get_state().cart:
            add_to_cart(store, burger)
        else:
            update_cart_quantity(store, burger.id, quantity)

    history = store.get_state().action_history
    assert len(history) == 5
    assert isinstance(history[-1], QuantityChanged)
    assert history[0].to_quantity == 7
    # The add that started it all has been evicted.
    assert not any(isinstance(entry, AddedToCart) for entry in history)


def test_evicted_action_cannot_be_undone(store, burger):
    for _ in range(6):
        add_to_cart(store, burger)

    for _ in range(5):
        assert undo_last_action(store)

    assert store.get_state().cart[0].quantity == 1
    assert not undo_last_action(store)


def test_undo_round_trip_restores_original_cart(store, burger, fries):
    add_to_cart(store, fries)
    add_to_cart(store, fries)
    add_to_cart(store, burger)
    store.replace_state({"action_history": [], "last_action": None})
    original = store.get_state().cart

    update_cart_quantity(store, fries.id, 5)
    remove_from_cart(store, burger.id)
    clear_cart(store)

    for _ in range(3):
        assert undo_last_action(store)

    state = store.get_state()
    assert state.cart == original
    assert state.action_history == []
    assert state.last_action is None


def test_undo_restores_cart_and_pops_one_entry(store, burger, fries):
    add_to_cart(store, burger)
    add_to_cart(store, fries)

    result = undo_last_action(store)

    state = store.get_state()
    assert isinstance(result.value, AddedToCart)
    assert [item.id for item in state.cart] == [1]
    assert len(state.action_history) == 1
    assert state.last_action == "ADD_TO_CART"


def test_undo_with_empty_history_fails(store):
    result = undo_last_action(store)

    assert not result
    assert result.error == "Nothing to undo"


def test_cart_selectors(store, burger, fries):
    add_to_cart(store, burger)
    add_to_cart(store, burger)
    add_to_cart(store, fries)

    state = store.get_state()
    assert cart_count(state) == 3
    assert cart_total(state) == pytest.approx(2050.85 * 2 + 559.32)
    assert can_undo(state)
    assert undo_label(state) == "Add Thick Cut Fries"
