from __future__ import annotations

import copy
import logging
import re
from typing import Any, Callable, Iterable, Optional

from faker import Faker

from data.adapters import utcnow
from data.connection import QueryOptions, StoreError
from data import mock_data


logger = logging.getLogger(__name__)


def _like(pattern: str, value: Any, ignore_case: bool) -> bool:
    regex = "^" + "".join(".*" if c in "%*" else "." if c == "_" else re.escape(c) for c in str(pattern)) + "$"
    return re.match(regex, str(value), re.IGNORECASE if ignore_case else 0) is not None


def _parse_in(value: Any) -> list[str]:
    if isinstance(value, str):
        return [v.strip().strip('"') for v in value.strip("()").split(",") if v.strip()]
    return [str(v) for v in value]


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "eq": lambda a, b: a is not None and str(a) == str(b),
    "neq": lambda a, b: a is None or str(a) != str(b),
    "gt": lambda a, b: a is not None and a > b,
    "gte": lambda a, b: a is not None and a >= b,
    "lt": lambda a, b: a is not None and a < b,
    "lte": lambda a, b: a is not None and a <= b,
    "like": lambda a, b: a is not None and _like(b, a, ignore_case=False),
    "ilike": lambda a, b: a is not None and _like(b, a, ignore_case=True),
    "in": lambda a, b: a is not None and str(a) in _parse_in(b),
    "is": lambda a, b: (a is None) if str(b).lower() == "null" else a is b,
}


class MockTableClient:
    """
    In-memory stand-in for the Supabase table store.

    Same contract as SupabaseTableClient. Every call is recorded in `calls`;
    operations listed in `fail_on` raise StoreError, and `before_call` (if set)
    runs before each operation so tests can interleave dispatches.
    """

    def __init__(
        self,
        tables: Optional[dict[str, list[dict]]] = None,
        fail_on: Iterable[str] = (),
        seed: int = 7,
    ):
        self._tables: dict[str, list[dict]] = {k: copy.deepcopy(v) for k, v in (tables or {}).items()}
        self.fail_on = set(fail_on)
        self.calls: list[tuple] = []
        self.before_call: Optional[Callable[[str, str, tuple], None]] = None
        self._fake = Faker()
        self._fake.seed_instance(seed)

    @classmethod
    def seeded(cls, **kwargs) -> "MockTableClient":
        return cls({t: mock_data.fallback_rows(t) for t in mock_data.FALLBACK_ROWS}, **kwargs)

    def rows(self, table: str) -> list[dict]:
        return copy.deepcopy(self._tables.get(table, []))

    def _enter(self, table: str, operation: str, *args) -> None:
        self.calls.append((operation, table) + args)
        if self.before_call is not None:
            self.before_call(operation, table, args)
        if operation in self.fail_on:
            logger.error("Simulated %s failure on '%s'", operation, table)
            raise StoreError(table, operation, "simulated failure")

    def fetch(self, table: str, options: Optional[QueryOptions] = None) -> list[dict]:
        options = options or QueryOptions()
        self._enter(table, "fetch", options)
        rows = self.rows(table)
        for f in options.filters:
            op = _OPERATORS.get(f.operator)
            if op is None:
                raise StoreError(table, "fetch", f"unsupported operator '{f.operator}'")
            rows = [r for r in rows if op(r.get(f.column), f.value)]
        if options.order_by:
            col = options.order_by.column
            rows.sort(key=lambda r: (r.get(col) is None, r.get(col)), reverse=not options.order_by.ascending)
        if options.limit:
            rows = rows[: options.limit]
        return rows

    def insert(self, table: str, record: dict) -> list[dict]:
        self._enter(table, "insert", record)
        now = utcnow().isoformat()
        row = {"id": self._fake.uuid4(), **copy.deepcopy(record)}
        row.setdefault("created_at", now)
        if table == "questionnaires":
            row.setdefault("updated_at", row["created_at"])
        if table == "forms":
            row.setdefault("responses", 0)
        self._tables.setdefault(table, []).append(row)
        return [copy.deepcopy(row)]

    def update(self, table: str, id: str, record: dict) -> list[dict]:
        self._enter(table, "update", id, record)
        updated = []
        for row in self._tables.get(table, []):
            if str(row.get("id")) == str(id):
                row.update(copy.deepcopy(record))
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, table: str, id: str) -> bool:
        self._enter(table, "delete", id)
        rows = self._tables.get(table, [])
        self._tables[table] = [r for r in rows if str(r.get("id")) != str(id)]
        return True
