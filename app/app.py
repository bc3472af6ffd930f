"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
for p in [APP_DIR, REPO_ROOT]:
    if p not in sys.path:
        sys.path.insert(0, p)

import streamlit as st  # noqa: E402

from components.header import render_header  # noqa: E402
from components.notifications import flush_toasts  # noqa: E402
from components.session import get_store  # noqa: E402
from components.sidebar import render_sidebar  # noqa: E402
from components.styles import apply_theme  # noqa: E402
from config import configure_logging, get_config  # noqa: E402

from views import admins, analytics, forms, questionnaires  # noqa: E402


VIEWS = {
    "questionnaires": questionnaires,
    "forms": forms,
    "admins": admins,
    "analytics": analytics,
}


def main() -> None:
    configure_logging()
    apply_theme()
    cfg = get_config()
    logging.getLogger().setLevel(cfg.log_level)

    state = render_sidebar(cfg)
    store = get_store(cfg, state.use_mock)
    if state.view in store.TABLES:
        store.ensure_loaded(state.view)

    degraded = any(store.is_degraded(t) for t in store.TABLES)
    if state.use_mock:
        pill = "Data: Mock"
    elif degraded:
        pill = "Data: Sample (store unavailable)"
    else:
        pill = "Data: Supabase"
    render_header(
        app_name="Faculty Evaluation System",
        subtitle="Questionnaires, form distribution, administrators and results",
        right_pill=pill,
        degraded=degraded,
    )

    # Routing only
    view = VIEWS.get(state.view)
    if view is None:
        st.error("Unknown view")
    else:
        view.render(cfg, store)

    flush_toasts(store.notifier)


if __name__ == "__main__":
    main()
