from __future__ import annotations

from data.controllers import AdminsController
from data.feedback import Notifier
from data.mock_client import MockTableClient
from data.store import EntityStore, LoadState


def test_failed_load_falls_back_once(failing_store, notifier):
    state = failing_store.ensure_loaded("admins")

    assert state == LoadState.LOADED
    assert failing_store.is_degraded("admins")
    assert [a.name for a in failing_store.items("admins")] == ["John Doe", "Jane Smith", "Robert Johnson"]
    assert notifier.count("error") == 1
    assert notifier.history[0].message == "Could not load admins. Showing sample data instead."
    assert [s for t, s in failing_store.transitions if t == "admins"] == [
        LoadState.LOADING,
        LoadState.LOAD_FAILED,
        LoadState.LOADED,
    ]


def test_ensure_loaded_does_not_refetch(store, client):
    store.ensure_loaded("forms")
    store.ensure_loaded("forms")
    assert [c[:2] for c in client.calls] == [("fetch", "forms")]


def test_reload_clears_degraded_flag(notifier):
    client = MockTableClient.seeded(fail_on={"fetch"})
    store = EntityStore(client, notifier)
    store.load("forms")
    assert store.is_degraded("forms")

    client.fail_on.clear()
    store.reload("forms")
    assert not store.is_degraded("forms")
    assert store.load_state("forms") == LoadState.LOADED


def test_empty_live_table_is_not_degraded(notifier):
    store = EntityStore(MockTableClient({"admins": []}), notifier)
    store.load("admins")
    assert store.items("admins") == ()
    assert not store.is_degraded("admins")
    assert not notifier.history


def test_failed_mutation_leaves_items_untouched(store, client, notifier):
    store.load("admins")
    before = store.items("admins")
    client.fail_on.add("update")

    assert store.update("admins", "1", {"status": "inactive"}, operation="deactivate") is None
    assert store.items("admins") == before
    assert store.pending("admins") is None
    assert notifier.history[-1].level == "error"
    assert notifier.history[-1].message == "Could not deactivate admin. Please try again."


def test_failed_create_adds_nothing(store, client, notifier):
    store.load("questionnaires")
    client.fail_on.add("insert")
    assert store.create("questionnaires", {"title": "New"}) is None
    assert len(store.items("questionnaires")) == 3
    assert notifier.count("error") == 1


def test_duplicate_delete_while_in_flight_is_ignored(store, client):
    store.load("admins")
    reentered = []

    def hook(operation, table, args):
        if operation == "delete" and not reentered:
            assert store.is_in_flight("admins", "delete", "2")
            reentered.append(store.delete("admins", "2"))

    client.before_call = hook
    assert store.delete("admins", "2") is True

    assert reentered == [False]
    assert sum(1 for c in client.calls if c[0] == "delete") == 1
    assert store.get("admins", "2") is None
    assert not store.is_in_flight("admins", "delete", "2")


def test_pending_state_visible_during_call(store, client):
    store.load("forms")
    seen = []
    client.before_call = lambda operation, table, args: seen.append(store.pending(table))
    store.update("forms", "2", {"status": "active"}, operation="activate")
    assert [s.value for s in seen] == ["updating"]
    assert store.pending("forms") is None


def test_subscribers_see_every_change(store):
    seen = []
    unsubscribe = store.subscribe("admins", lambda table, items: seen.append(len(items)))
    store.load("admins")
    store.delete("admins", "3")
    unsubscribe()
    store.delete("admins", "2")
    assert seen == [3, 2]


def test_update_without_returned_row_patches_locally(store, client, monkeypatch):
    store.load("admins")
    monkeypatch.setattr(client, "update", lambda table, id, record: [])
    updated = store.update("admins", "3", {"status": "active"}, operation="activate")
    assert updated.status == "active"
    assert store.get("admins", "3").status == "active"


def test_one_store_shared_by_every_screen(store):
    first = AdminsController(store)
    second = AdminsController(store)
    first.load()
    first.request_delete("1")
    first.confirm_delete()
    assert [a.id for a in second.items] == ["2", "3"]


def test_notification_history_is_bounded():
    notifier = Notifier(history_limit=3)
    for i in range(5):
        notifier.info(f"message {i}")

    assert [n.message for n in notifier.history] == ["message 2", "message 3", "message 4"]
    assert len(notifier.drain()) == 5
    assert notifier.count("info") == 3
