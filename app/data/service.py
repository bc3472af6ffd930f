from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import pandas as pd

from data.adapters import ADMINS, FORMS, QUESTIONNAIRES, EntityAdapter
from data.connection import QueryOptions, TableClient
from data import mock_data


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataResult:
    rows: list
    source: str  # "supabase" | "mock" | "fallback"
    warning: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def degraded(self) -> bool:
        return self.source == "fallback"

    def to_frame(self) -> pd.DataFrame:
        return entities_to_frame(self.rows)


def entities_to_frame(entities: list) -> pd.DataFrame:
    return pd.DataFrame([dataclasses.asdict(e) for e in entities])


def _fallback(source: str, fn_live: Callable[[], list], fn_fallback: Callable[[], list]) -> DataResult:
    try:
        return DataResult(rows=fn_live(), source=source)
    except Exception as e:
        logger.warning("Falling back to sample data (%s: %s)", type(e).__name__, e)
        return DataResult(
            rows=fn_fallback(),
            source="fallback",
            warning=f"Fell back to sample data: {type(e).__name__}",
            error=e,
        )


def load_entities(
    client: TableClient,
    adapter: EntityAdapter,
    source: str = "supabase",
    options: Optional[QueryOptions] = None,
) -> DataResult:
    def live() -> list[Any]:
        return [adapter.to_view_model(r) for r in client.fetch(adapter.table, options)]

    def sample() -> list[Any]:
        return [adapter.to_view_model(r) for r in mock_data.fallback_rows(adapter.table)]

    return _fallback(source, fn_live=live, fn_fallback=sample)


def get_questionnaires(client: TableClient, source: str = "supabase") -> DataResult:
    return load_entities(client, QUESTIONNAIRES, source)


def get_forms(client: TableClient, source: str = "supabase") -> DataResult:
    return load_entities(client, FORMS, source)


def get_admins(client: TableClient, source: str = "supabase") -> DataResult:
    return load_entities(client, ADMINS, source)
