from __future__ import annotations

import streamlit as st

from components.dialogs import render_delete_confirmation
from components.header import status_badge
from components.narrative import render_page_intro
from components.notifications import render_load_status
from components.session import admins_controller
from config import AppConfig
from data.controllers import AdminsController
from data.models import PERMISSIONS, Admin, AdminDraft
from data.store import EntityStore


ROLES = ["Super Admin", "Department Admin", "Viewer"]


def _set_mode(mode: str, selected: str | None = None) -> None:
    st.session_state["admins_mode"] = mode
    st.session_state["admins_selected"] = selected


def render(cfg: AppConfig, store: EntityStore) -> None:
    ctl = admins_controller(store)
    ctl.load()

    mode = st.session_state.get("admins_mode", "list")
    selected = st.session_state.get("admins_selected")

    c1, c2 = st.columns([4, 1])
    c1.title("Administrator Management")
    if mode == "list" and c2.button("➕ Add new admin", use_container_width=True):
        _set_mode("create")
        st.rerun()

    render_load_status(ctl, "administrators")

    if mode == "create":
        _render_form(ctl, None)
    elif mode == "edit" and ctl.get(selected) is not None:
        _render_form(ctl, ctl.get(selected))

    render_page_intro(
        "System administrators",
        "View and manage all administrator accounts in the Faculty Evaluation System.",
    )
    render_delete_confirmation(ctl, lambda a: f"the administrator {a.name} ({a.email})")
    _render_list(ctl)


def _render_list(ctl: AdminsController) -> None:
    if not ctl.items:
        st.info("No administrators yet.")
        return
    widths = [2, 3, 2, 1.2, 2, 3, 2.5]
    header = st.columns(widths)
    for col, name in zip(header, ["Name", "Email", "Role", "Status", "Last login", "Permissions", "Actions"]):
        col.markdown(f"**{name}**")
    busy = ctl.pending is not None
    for a in ctl.items:
        cols = st.columns(widths)
        cols[0].write(a.name)
        cols[1].write(a.email)
        cols[2].write(a.role)
        cols[3].markdown(status_badge(a.status), unsafe_allow_html=True)
        cols[4].caption(a.last_login.replace("T", " ")[:16])
        cols[5].caption(", ".join(PERMISSIONS.get(p, p) for p in a.permissions) or "-")
        b = cols[6].columns(4)
        if b[0].button("✏️", key=f"a_edit_{a.id}", help="Edit"):
            _set_mode("edit", a.id)
            st.rerun()
        toggle_help = "Deactivate" if a.status == "active" else "Activate"
        if b[1].button("⏻", key=f"a_toggle_{a.id}", help=toggle_help, disabled=busy):
            ctl.toggle_status(a.id)
            st.rerun()
        if b[2].button("🔑", key=f"a_reset_{a.id}", help="Reset password"):
            ctl.reset_password(a.id)
            st.rerun()
        if b[3].button("🗑", key=f"a_delete_{a.id}", help="Delete"):
            ctl.request_delete(a.id)
            st.rerun()


def _render_form(ctl: AdminsController, existing: Admin | None) -> None:
    with st.container(border=True):
        st.subheader("Edit administrator" if existing else "Add new administrator")
        roles = list(ROLES)
        if existing and existing.role not in roles:
            roles.append(existing.role)
        with st.form(f"admin_form_{existing.id if existing else 'new'}"):
            name = st.text_input("Full name *", value=existing.name if existing else "")
            email = st.text_input("Email *", value=existing.email if existing else "")
            role = st.selectbox("Role *", roles, index=roles.index(existing.role) if existing else len(roles) - 1)
            st.markdown("**Permissions**")
            checked = {
                key: st.checkbox(label, value=bool(existing and key in existing.permissions), key=f"perm_{existing.id if existing else 'new'}_{key}")
                for key, label in PERMISSIONS.items()
            }
            c1, c2 = st.columns(2)
            submitted = c1.form_submit_button("Save", type="primary", disabled=ctl.pending is not None)
            cancelled = c2.form_submit_button("Cancel")

    if cancelled:
        _set_mode("list")
        st.rerun()
    if submitted:
        draft = AdminDraft.from_checkboxes(name=name, email=email, role=role, checked=checked)
        saved = ctl.update(existing.id, draft) if existing else ctl.create(draft)
        if saved is not None:
            _set_mode("list")
            st.rerun()
