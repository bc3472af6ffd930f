"""
Client-side entity store: the single source of truth for every screen.

One instance lives in st.session_state and is shared by all views, so a
mutation made on one screen is immediately visible on the others.

Rules:
- A table is fetched once (IDLE -> LOADING -> LOADED). A failed initial load
  goes through LOAD_FAILED, then LOADED with the fallback dataset and the
  table is flagged degraded. There is no automatic refetch.
- Local state is patched only after the remote call succeeds, so a failed
  mutation never needs a rollback.
- Mutations are guarded per (table, operation, key): a duplicate dispatch
  while the first is still in flight is ignored.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional

from data.adapters import ADAPTERS, EntityAdapter
from data.connection import StoreError, TableClient
from data.feedback import Notifier
from data.service import load_entities


logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


class MutationState(str, Enum):
    CREATING = "creating"
    UPDATING = "updating"
    DELETING = "deleting"


_MUTATION_STATES = {
    "create": MutationState.CREATING,
    "update": MutationState.UPDATING,
    "activate": MutationState.UPDATING,
    "deactivate": MutationState.UPDATING,
    "delete": MutationState.DELETING,
}

Subscriber = Callable[[str, tuple], None]


class EntityStore:
    TABLES = tuple(ADAPTERS)

    def __init__(self, client: TableClient, notifier: Optional[Notifier] = None, source: str = "supabase"):
        self.client = client
        self.notifier = notifier or Notifier()
        self.source = source
        self._items: dict[str, tuple] = {}
        self._load_state: dict[str, LoadState] = {}
        self._degraded: dict[str, bool] = {}
        self._pending: dict[str, MutationState] = {}
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._in_flight: set[tuple[str, str, str]] = set()
        self._lock = threading.Lock()
        self.transitions: list[tuple[str, LoadState]] = []

    # --- read side ---

    def adapter(self, table: str) -> EntityAdapter:
        return ADAPTERS[table]

    def items(self, table: str) -> tuple:
        return self._items.get(table, ())

    def get(self, table: str, id: str) -> Optional[Any]:
        return next((e for e in self.items(table) if e.id == str(id)), None)

    def load_state(self, table: str) -> LoadState:
        return self._load_state.get(table, LoadState.IDLE)

    def is_degraded(self, table: str) -> bool:
        return self._degraded.get(table, False)

    def pending(self, table: str) -> Optional[MutationState]:
        return self._pending.get(table)

    def is_in_flight(self, table: str, operation: str, key: str) -> bool:
        with self._lock:
            return (table, operation, str(key)) in self._in_flight

    def subscribe(self, table: str, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.setdefault(table, []).append(callback)

        def unsubscribe() -> None:
            subs = self._subscribers.get(table, [])
            if callback in subs:
                subs.remove(callback)

        return unsubscribe

    def _set_items(self, table: str, items) -> None:
        self._items[table] = tuple(items)
        for cb in list(self._subscribers.get(table, [])):
            cb(table, self._items[table])

    def _transition(self, table: str, state: LoadState) -> None:
        self._load_state[table] = state
        self.transitions.append((table, state))

    # --- loading ---

    def ensure_loaded(self, table: str) -> LoadState:
        if self.load_state(table) == LoadState.IDLE:
            self.load(table)
        return self.load_state(table)

    def load(self, table: str) -> LoadState:
        adapter = self.adapter(table)
        self._transition(table, LoadState.LOADING)
        logger.info("Loading '%s' from %s", table, self.source)
        result = load_entities(self.client, adapter, self.source)

        if result.degraded:
            self._transition(table, LoadState.LOAD_FAILED)
            self.notifier.failure("load", adapter.label, table, result.error)
            self._degraded[table] = True
        else:
            self._degraded[table] = False

        self._set_items(table, result.rows)
        self._transition(table, LoadState.LOADED)
        return self.load_state(table)

    def reload(self, table: str) -> LoadState:
        return self.load(table)

    # --- mutations ---

    def _dispatch(self, table: str, operation: str, key: str, call: Callable[[], Any]) -> tuple[bool, Any]:
        token = (table, operation, str(key))
        with self._lock:
            if token in self._in_flight:
                logger.info("Ignoring duplicate %s on '%s' (%s): already in flight", operation, table, key)
                return False, None
            self._in_flight.add(token)
        self._pending[table] = _MUTATION_STATES.get(operation, MutationState.UPDATING)
        adapter = self.adapter(table)
        try:
            result = call()
        except Exception as e:
            self.notifier.failure(operation, adapter.label, table, e)
            return False, None
        finally:
            with self._lock:
                self._in_flight.discard(token)
            self._pending.pop(table, None)
        self.notifier.success(operation, adapter.label)
        return True, result

    def create(self, table: str, values: dict, key: str = "new") -> Optional[Any]:
        adapter = self.adapter(table)
        payload = adapter.to_write_payload(values)

        def call():
            rows = self.client.insert(table, payload)
            if not rows:
                raise StoreError(table, "insert", "no row returned")
            return adapter.to_view_model(rows[0])

        ok, created = self._dispatch(table, "create", key, call)
        if ok:
            self._set_items(table, self.items(table) + (created,))
        return created

    def update(self, table: str, id: str, changes: dict, operation: str = "update") -> Optional[Any]:
        adapter = self.adapter(table)
        payload = adapter.to_write_payload(changes)
        id = str(id)

        def call():
            rows = self.client.update(table, id, payload)
            if rows:
                return adapter.to_view_model(rows[0])
            # Store accepted the write but returned no representation.
            existing = self.get(table, id)
            return dataclasses.replace(existing, **changes) if existing is not None else None

        ok, updated = self._dispatch(table, operation, id, call)
        if ok and updated is not None:
            self._set_items(table, tuple(updated if e.id == id else e for e in self.items(table)))
        return updated if ok else None

    def delete(self, table: str, id: str) -> bool:
        id = str(id)
        ok, _ = self._dispatch(table, "delete", id, lambda: self.client.delete(table, id))
        if ok:
            self._set_items(table, tuple(e for e in self.items(table) if e.id != id))
        return ok
