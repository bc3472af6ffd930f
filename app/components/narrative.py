from __future__ import annotations

import streamlit as st


def render_page_intro(title: str, context: str | None = None) -> None:
    st.markdown(
        f"""
<div class="page-intro">
  <div class="page-intro-title">{title}</div>
  {f'<div class="page-intro-context">{context}</div>' if context else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def render_callout(title: str, body: str) -> None:
    st.markdown(
        f"""
<div class="callout">
  <div class="callout-title">{title}</div>
  <div class="callout-body">{body}</div>
</div>
        """,
        unsafe_allow_html=True,
    )
