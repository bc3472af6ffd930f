from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from supabase import Client, create_client

from config import AppConfig


logger = logging.getLogger(__name__)


class StoreConfigError(RuntimeError):
    pass


class StoreError(RuntimeError):
    """Any failed fetch/insert/update/delete. Carries no structured error code."""

    def __init__(self, table: str, operation: str, message: str = ""):
        self.table = table
        self.operation = operation
        super().__init__(f"{operation} on '{table}' failed" + (f": {message}" if message else ""))


@dataclass(frozen=True)
class Filter:
    column: str
    operator: str
    value: Any


@dataclass(frozen=True)
class OrderBy:
    column: str
    ascending: bool = True


@dataclass(frozen=True)
class QueryOptions:
    filters: list[Filter] = field(default_factory=list)
    order_by: Optional[OrderBy] = None
    limit: Optional[int] = None

    def __post_init__(self):
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")


class TableClient(Protocol):
    def fetch(self, table: str, options: Optional[QueryOptions] = None) -> list[dict]: ...

    def insert(self, table: str, record: dict) -> list[dict]: ...

    def update(self, table: str, id: str, record: dict) -> list[dict]: ...

    def delete(self, table: str, id: str) -> bool: ...


class SupabaseTableClient:
    """
    Table-oriented client over Supabase (PostgREST).
    One attempt per call: no retry, no timeout, no backoff.
    """

    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self._client: Optional[Client] = None

    def _get_client(self) -> Client:
        if self._client is None:
            if not self.cfg.is_configured:
                raise StoreConfigError(
                    "Missing Supabase settings: "
                    + ", ".join(self.cfg.missing_settings)
                    + ". Set them in the environment or in .env."
                )
            self._client = create_client(self.cfg.supabase_url, self.cfg.supabase_key)
        return self._client

    def _execute(self, table: str, operation: str, build):
        try:
            response = build(self._get_client().table(table)).execute()
        except StoreConfigError:
            logger.error("Cannot %s '%s': store is not configured", operation, table)
            raise
        except Exception as e:
            logger.error("Error during %s on '%s': %s", operation, table, e)
            raise StoreError(table, operation, str(e)) from e
        return response.data or []

    def fetch(self, table: str, options: Optional[QueryOptions] = None) -> list[dict]:
        options = options or QueryOptions()

        def build(query):
            query = query.select("*")
            for f in options.filters:
                query = query.filter(f.column, f.operator, f.value)
            if options.order_by:
                query = query.order(options.order_by.column, desc=not options.order_by.ascending)
            if options.limit:
                query = query.limit(options.limit)
            return query

        return list(self._execute(table, "fetch", build))

    def insert(self, table: str, record: dict) -> list[dict]:
        return list(self._execute(table, "insert", lambda q: q.insert(record)))

    def update(self, table: str, id: str, record: dict) -> list[dict]:
        return list(self._execute(table, "update", lambda q: q.update(record).eq("id", id)))

    def delete(self, table: str, id: str) -> bool:
        self._execute(table, "delete", lambda q: q.delete().eq("id", id))
        return True


def get_table_client(cfg: AppConfig, use_mock: bool = False) -> TableClient:
    if use_mock:
        from data.mock_client import MockTableClient

        return MockTableClient.seeded()
    return SupabaseTableClient(cfg)
