from __future__ import annotations

import streamlit as st

from data.controllers import ScreenController
from data.feedback import Notifier
from data.store import LoadState


def flush_toasts(notifier: Notifier) -> None:
    for n in notifier.drain():
        st.toast(n.message, icon=n.icon or None)


def render_load_status(controller: ScreenController, label: str) -> None:
    """Degraded mode is never silent: show it and offer an explicit retry."""
    if controller.state == LoadState.LOADING:
        st.info(f"Loading {label}...")
        return
    if controller.degraded:
        c1, c2 = st.columns([5, 1])
        c1.warning(f"Live {label} could not be loaded. Showing sample data (read-mostly).")
        if c2.button("Retry", key=f"retry_{controller.table}", use_container_width=True):
            controller.reload()
            st.rerun()
