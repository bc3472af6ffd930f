from __future__ import annotations

import streamlit as st


def render_header(app_name: str, subtitle: str, right_pill: str, degraded: bool = False) -> None:
    pill_cls = "pill degraded" if degraded else "pill"
    st.markdown(
        f"""
<div class="app-header">
  <div>
    <div class="app-title">{app_name}</div>
    <div class="app-subtitle">{subtitle}</div>
  </div>
  <div class="{pill_cls}"><span class="dot"></span>{right_pill}</div>
</div>
        """,
        unsafe_allow_html=True,
    )


def status_badge(status: str) -> str:
    return f'<span class="badge badge-{status}">{status.capitalize()}</span>'
