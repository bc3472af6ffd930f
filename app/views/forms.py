from __future__ import annotations

from datetime import datetime, time, timedelta

import streamlit as st

from components.dialogs import render_delete_confirmation
from components.header import status_badge
from components.narrative import render_callout, render_page_intro
from components.notifications import render_load_status
from components.session import forms_controller, questionnaires_controller
from config import AppConfig
from data.adapters import utcnow
from data.controllers import FormsController
from data.mock_data import CLASS_SECTIONS
from data.models import Form, FormDraft
from data.store import EntityStore


def _set_mode(mode: str, selected: str | None = None) -> None:
    st.session_state["forms_mode"] = mode
    st.session_state["forms_selected"] = selected


def resolve_mode(ctl: FormsController, mode: str, selected: str | None) -> str:
    """A form that is gone (deleted elsewhere) sends its edit/view/link screen back to the list."""
    if mode in ("edit", "view", "link") and (selected is None or ctl.get(selected) is None):
        return "list"
    return mode


def render(cfg: AppConfig, store: EntityStore) -> None:
    ctl = forms_controller(store, cfg)
    ctl.load()

    selected = st.session_state.get("forms_selected")
    mode = resolve_mode(ctl, st.session_state.get("forms_mode", "list"), selected)
    if mode != st.session_state.get("forms_mode", "list"):
        _set_mode(mode)
        selected = None

    c1, c2 = st.columns([4, 1])
    c1.title("Form Distribution")
    if mode == "list":
        if c2.button("➕ Create new form", use_container_width=True):
            _set_mode("create")
            st.rerun()
    elif c2.button("← Back to forms", use_container_width=True):
        _set_mode("list")
        st.rerun()

    render_load_status(ctl, "forms")

    if mode in ("create", "edit"):
        _render_creator(ctl, store, ctl.get(selected) if mode == "edit" else None)
        return

    render_page_intro(
        "Evaluation forms",
        "Section-scoped, time-bounded instances of a questionnaire. Deactivated forms move to the archive.",
    )
    render_delete_confirmation(ctl, lambda f: f'the form "{f.title}"')

    if selected and mode == "view" and ctl.get(selected) is not None:
        _render_details(ctl, ctl.get(selected))
    if selected and mode == "link":
        _render_link(ctl, selected)

    tab_active, tab_archived = st.tabs([f"Active forms ({len(ctl.active)})", f"Archived forms ({len(ctl.archived)})"])
    with tab_active:
        _render_table(ctl, ctl.active, "active")
    with tab_archived:
        _render_table(ctl, ctl.archived, "archived")


def _render_table(ctl: FormsController, forms: tuple[Form, ...], tab: str) -> None:
    if not forms:
        st.info("No forms here yet.")
        return
    widths = [3, 2.5, 1.5, 1.5, 1, 1.5, 1.5, 3]
    header = st.columns(widths)
    for col, name in zip(header, ["Title", "Questionnaire", "Section", "Status", "Responses", "Created", "Expires", "Actions"]):
        col.markdown(f"**{name}**")
    for f in forms:
        cols = st.columns(widths)
        cols[0].write(f.title)
        cols[1].write(f.questionnaire)
        cols[2].write(f.section)
        cols[3].markdown(status_badge(f.status), unsafe_allow_html=True)
        cols[4].write(f.responses)
        cols[5].caption(f"{f.created_at:%b %d, %Y}")
        cols[6].caption(f"{f.expires_at:%b %d, %Y}")
        a = cols[7].columns(5)
        busy = ctl.pending is not None
        if a[0].button("👁", key=f"f_view_{tab}_{f.id}", help="View details"):
            _set_mode("view", f.id)
            st.rerun()
        if a[1].button("🔗", key=f"f_link_{tab}_{f.id}", help="Copy link"):
            _set_mode("link", f.id)
            st.rerun()
        if a[2].button("✏️", key=f"f_edit_{tab}_{f.id}", help="Edit form"):
            _set_mode("edit", f.id)
            st.rerun()
        if f.is_active:
            if a[3].button("⏸", key=f"f_off_{tab}_{f.id}", help="Deactivate", disabled=busy):
                ctl.deactivate(f.id)
                st.rerun()
        elif a[3].button("▶", key=f"f_on_{tab}_{f.id}", help="Activate", disabled=busy):
            ctl.activate(f.id)
            st.rerun()
        if a[4].button("🗑", key=f"f_delete_{tab}_{f.id}", help="Delete"):
            ctl.request_delete(f.id)
            st.rerun()


def _render_details(ctl: FormsController, f: Form) -> None:
    with st.container(border=True):
        st.markdown("**Form details**")
        c1, c2 = st.columns(2)
        c1.markdown(f"**Title**  \n{f.title}")
        c2.markdown(f"**Status**  \n{status_badge(f.status)}", unsafe_allow_html=True)
        c1.markdown(f"**Questionnaire**  \n{f.questionnaire}")
        c2.markdown(f"**Section**  \n{f.section}")
        c1.markdown(f"**Created**  \n{f.created_at:%b %d, %Y}")
        c2.markdown(f"**Expires**  \n{f.expires_at:%b %d, %Y}")
        c1.markdown(f"**Responses**  \n{f.responses}")
        b1, b2, _ = st.columns([1, 1, 4])
        if b1.button("Close", key="f_details_close", use_container_width=True):
            _set_mode("list")
            st.rerun()
        if b2.button("Edit form", key="f_details_edit", type="primary", use_container_width=True):
            _set_mode("edit", f.id)
            st.rerun()


def _render_link(ctl: FormsController, id: str) -> None:
    link = ctl.share_link(id)
    if link is None:
        _set_mode("list")
        return
    with st.container(border=True):
        st.markdown("**Form link**")
        st.caption("Use the copy button to put the link on your clipboard.")
        st.code(link, language="text")
        if st.button("Close", key="f_link_close"):
            _set_mode("list")
            st.rerun()


def _render_creator(ctl: FormsController, store: EntityStore, existing: Form | None) -> None:
    st.subheader("Edit evaluation form" if existing else "Create new evaluation form")

    q_ctl = questionnaires_controller(store)
    q_ctl.load()
    templates = [q.title for q in q_ctl.items] or ["Standard Faculty Evaluation"]
    if existing and existing.questionnaire not in templates:
        templates.insert(0, existing.questionnaire)
    sections = list(CLASS_SECTIONS)
    if existing and existing.section not in sections:
        sections.insert(0, existing.section)

    default_expiry = (existing.expires_at if existing else utcnow() + timedelta(days=30)).date()

    with st.form(f"form_creator_{existing.id if existing else 'new'}"):
        title = st.text_input("Form title", value=existing.title if existing else "", placeholder="Evaluation Form")
        questionnaire = st.selectbox(
            "Questionnaire *",
            templates,
            index=templates.index(existing.questionnaire) if existing else 0,
            help="Choose the evaluation questionnaire to use for this form.",
        )
        section = st.selectbox(
            "Class section *",
            sections,
            index=sections.index(existing.section) if existing else 0,
            help="Select the class section for this evaluation.",
        )
        expires = st.date_input("Expires on *", value=default_expiry)
        is_active = st.toggle("Active", value=existing.is_active if existing else True)
        submitted = st.form_submit_button("Save form", type="primary", disabled=ctl.pending is not None)

    render_callout("Sharing", "After saving, use the link action in the forms list to copy a response link for this section.")

    if submitted:
        draft = FormDraft(
            title=title,
            questionnaire=questionnaire,
            section=section,
            expires_at=datetime.combine(expires, time(23, 59, 59)),
            is_active=is_active,
        )
        saved = ctl.update(existing.id, draft) if existing else ctl.create(draft)
        if saved is not None:
            _set_mode("list")
            st.rerun()
