from __future__ import annotations

from typing import Callable

import streamlit as st

from data.controllers import ScreenController


def render_delete_confirmation(controller: ScreenController, describe: Callable[[object], str]) -> None:
    """Every destructive action goes through this confirm step."""
    if controller.pending_delete is None:
        return
    entity = controller.get(controller.pending_delete)
    if entity is None:
        controller.cancel_delete()
        return

    with st.container(border=True):
        st.markdown("**Confirm deletion**")
        st.write(f"Are you sure you want to delete {describe(entity)}? This action cannot be undone.")
        c1, c2, _ = st.columns([1, 1, 4])
        if c1.button("Cancel", key=f"cancel_delete_{controller.table}", use_container_width=True):
            controller.cancel_delete()
            st.rerun()
        if c2.button(
            "Delete",
            key=f"confirm_delete_{controller.table}",
            type="primary",
            use_container_width=True,
            disabled=controller.pending is not None,
        ):
            controller.confirm_delete()
            st.rerun()
