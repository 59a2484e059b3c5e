"""Reactive state container: one state object, one mutation funnel, synchronous subscribers."""

from __future__ import annotations

import copy
import dataclasses
import logging
from collections.abc import Callable, Mapping
from typing import Any

from grillmaster.models import AppState

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]
Updater = Callable[[AppState], Mapping[str, Any] | None]


class Store:
    """
    Holds the application state and notifies subscribers after every write.

    ``replace_state`` merges a shallow patch. ``update_state`` computes the patch
    from the current state; an updater returning ``None`` skips the merge, but
    subscribers are still notified. Listeners run synchronously in subscription
    order and each receives its own snapshot. A listener that raises is logged
    and skipped; the state change it observed stays applied.
    """

    def __init__(self, initial_state: AppState | None = None) -> None:
        self._state = copy.deepcopy(initial_state) if initial_state is not None else AppState()
        self._listeners: list[Listener] = []

    def get_state(self) -> AppState:
        """Return a snapshot of the current state; mutating it does not touch the store."""
        return copy.deepcopy(self._state)

    def replace_state(self, patch: Mapping[str, Any]) -> None:
        self._apply(patch)

    def update_state(self, updater: Updater) -> None:
        self._apply(updater(self.get_state()))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _apply(self, patch: Mapping[str, Any] | None) -> None:
        if patch is not None:
            # Unknown field names raise TypeError here.
            self._state = dataclasses.replace(self._state, **copy.deepcopy(dict(patch)))
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.get_state())
            except Exception:
                logger.exception("Store listener %r failed", listener)
