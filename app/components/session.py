from __future__ import annotations

import logging
from typing import Callable, TypeVar

import streamlit as st

from config import AppConfig
from data.connection import get_table_client
from data.controllers import AdminsController, FormsController, QuestionnairesController
from data.store import EntityStore


logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_store(cfg: AppConfig, use_mock: bool) -> EntityStore:
    """One store per session; switching the data mode starts a fresh one."""
    mode = "mock" if use_mock else "supabase"
    store = st.session_state.get("entity_store")
    if store is None or store.source != mode:
        logger.info("Creating entity store (%s)", mode)
        store = EntityStore(get_table_client(cfg, use_mock), source=mode)
        st.session_state["entity_store"] = store
        for key in [k for k in st.session_state.keys() if str(k).startswith("controller_")]:
            del st.session_state[key]
    return store


def _controller(name: str, factory: Callable[[], T]) -> T:
    key = f"controller_{name}"
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def questionnaires_controller(store: EntityStore) -> QuestionnairesController:
    return _controller("questionnaires", lambda: QuestionnairesController(store))


def forms_controller(store: EntityStore, cfg: AppConfig) -> FormsController:
    return _controller("forms", lambda: FormsController(store, base_url=cfg.app_base_url))


def admins_controller(store: EntityStore) -> AdminsController:
    return _controller("admins", lambda: AdminsController(store))
