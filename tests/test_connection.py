from __future__ import annotations

import pytest

from config import AppConfig
from data.connection import (
    Filter,
    OrderBy,
    QueryOptions,
    StoreConfigError,
    StoreError,
    SupabaseTableClient,
    get_table_client,
)
from data.mock_client import MockTableClient


def _cfg(url="https://demo.supabase.co", key="anon-key") -> AppConfig:
    return AppConfig(
        supabase_url=url,
        supabase_key=key,
        app_base_url="http://localhost:8501",
        default_use_mock=False,
        log_level="INFO",
    )


class _Response:
    def __init__(self, data):
        self.data = data


class _Query:
    """Records the PostgREST builder chain and replays canned data."""

    def __init__(self, data=None, error=None):
        self.data = data or []
        self.error = error
        self.chain: list[tuple] = []

    def __getattr__(self, name):
        def step(*args, **kwargs):
            self.chain.append((name, args, kwargs))
            return self

        return step

    def execute(self):
        if self.error is not None:
            raise self.error
        return _Response(self.data)


class _Client:
    def __init__(self, query: _Query):
        self.query = query
        self.tables: list[str] = []

    def table(self, name):
        self.tables.append(name)
        return self.query


def _client_with(query: _Query) -> tuple[SupabaseTableClient, _Client]:
    stub = _Client(query)
    client = SupabaseTableClient(_cfg())
    client._client = stub
    return client, stub


def test_fetch_builds_filter_order_limit():
    query = _Query(data=[{"id": 1}])
    client, stub = _client_with(query)
    options = QueryOptions(
        filters=[Filter("status", "eq", "active")],
        order_by=OrderBy("created_at", ascending=False),
        limit=10,
    )

    assert client.fetch("forms", options) == [{"id": 1}]
    assert stub.tables == ["forms"]
    assert query.chain == [
        ("select", ("*",), {}),
        ("filter", ("status", "eq", "active"), {}),
        ("order", ("created_at",), {"desc": True}),
        ("limit", (10,), {}),
    ]


def test_zero_limit_means_unbounded():
    query = _Query()
    client, _ = _client_with(query)
    client.fetch("forms", QueryOptions(limit=0))
    assert [step[0] for step in query.chain] == ["select"]


def test_negative_limit_is_rejected():
    with pytest.raises(ValueError):
        QueryOptions(limit=-1)


def test_update_and_delete_target_id():
    query = _Query(data=[{"id": "2", "status": "active"}])
    client, _ = _client_with(query)

    assert client.update("forms", "2", {"status": "active"}) == [{"id": "2", "status": "active"}]
    assert client.delete("forms", "2") is True
    assert query.chain == [
        ("update", ({"status": "active"},), {}),
        ("eq", ("id", "2"), {}),
        ("delete", (), {}),
        ("eq", ("id", "2"), {}),
    ]


def test_driver_errors_become_store_errors(caplog):
    client, _ = _client_with(_Query(error=RuntimeError("connection refused")))
    with pytest.raises(StoreError) as excinfo:
        client.insert("admins", {"name": "x"})
    assert excinfo.value.table == "admins"
    assert excinfo.value.operation == "insert"
    assert "connection refused" in caplog.text


def test_unconfigured_client_raises_config_error():
    client = SupabaseTableClient(_cfg(url=None, key=None))
    with pytest.raises(StoreConfigError, match="SUPABASE_URL, SUPABASE_ANON_KEY"):
        client.fetch("admins")


def test_get_table_client_picks_backend():
    assert isinstance(get_table_client(_cfg(), use_mock=True), MockTableClient)
    assert isinstance(get_table_client(_cfg()), SupabaseTableClient)


# --- in-memory client ---------------------------------------------------------


@pytest.mark.parametrize(
    "flt, expected",
    [
        (Filter("status", "eq", "active"), ["1", "3"]),
        (Filter("status", "neq", "active"), ["2", "4", "5"]),
        (Filter("responses", "gte", 18), ["1", "2", "4"]),
        (Filter("responses", "lt", 18), ["3", "5"]),
        (Filter("title", "ilike", "%evaluation%"), ["1", "3", "4"]),
        (Filter("section", "like", "CS%"), ["1"]),
        (Filter("id", "in", "(2,4)"), ["2", "4"]),
    ],
)
def test_mock_client_filters(flt, expected):
    rows = MockTableClient.seeded().fetch("forms", QueryOptions(filters=[flt]))
    assert [r["id"] for r in rows] == expected


def test_mock_client_orders_and_limits():
    rows = MockTableClient.seeded().fetch(
        "forms", QueryOptions(order_by=OrderBy("responses", ascending=False), limit=2)
    )
    assert [r["id"] for r in rows] == ["4", "1"]


def test_mock_client_unknown_operator():
    with pytest.raises(StoreError):
        MockTableClient.seeded().fetch("forms", QueryOptions(filters=[Filter("id", "regex", ".*")]))


def test_mock_client_insert_assigns_id_and_timestamps():
    client = MockTableClient()
    (row,) = client.insert("forms", {"title": "New"})
    assert row["id"]
    assert row["created_at"]
    assert row["responses"] == 0
    assert client.rows("forms") == [row]
