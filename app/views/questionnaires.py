from __future__ import annotations

import pandas as pd
import streamlit as st

from components.dialogs import render_delete_confirmation
from components.header import status_badge
from components.narrative import render_page_intro
from components.notifications import render_load_status
from components.session import questionnaires_controller
from config import AppConfig
from data.controllers import QuestionnairesController
from data.models import QUESTION_TYPES, QUESTIONNAIRE_STATUSES, Question, Questionnaire, QuestionnaireDraft, Section
from data.store import EntityStore


QUESTION_COLUMNS = ["section_id", "section", "section_description", "question_id", "question", "type", "required"]
EDITABLE_COLUMNS = ["section", "section_description", "question", "type", "required"]
TYPE_LABELS = {"rating": "Rating question (1-5)", "qualitative": "Text response", "text": "Text response"}


def sections_to_frame(sections: tuple[Section, ...]) -> pd.DataFrame:
    """One row per question. A section without questions still gets a row so it survives editing."""
    rows = []
    for s in sections:
        base = {"section_id": s.id, "section": s.title, "section_description": s.description or ""}
        if not s.questions:
            rows.append({**base, "question_id": "", "question": "", "type": "rating", "required": False})
        for q in s.questions:
            rows.append({**base, "question_id": q.id, "question": q.text, "type": q.type, "required": q.required})
    return pd.DataFrame(rows, columns=QUESTION_COLUMNS)


def _next_id(prefix: str, used: set[str]) -> str:
    n = 1
    while f"{prefix}{n}" in used:
        n += 1
    used.add(f"{prefix}{n}")
    return f"{prefix}{n}"


def sections_from_frame(df: pd.DataFrame) -> tuple[Section, ...]:
    """
    Group the flat question grid back into ordered sections.

    Rows keep the ids they were loaded with. Rows added in the editor join the
    section with the same name, and get the next free s<n>/q<n> id otherwise.
    """
    records = (
        df.reindex(columns=QUESTION_COLUMNS)
        .fillna(
            {
                "section_id": "",
                "section": "",
                "section_description": "",
                "question_id": "",
                "question": "",
                "type": "rating",
                "required": False,
            }
        )
        .to_dict("records")
    )
    used_sections = {str(r["section_id"]).strip() for r in records} - {""}
    used_questions = {str(r["question_id"]).strip() for r in records} - {""}

    groups: dict[str, dict] = {}
    by_title: dict[str, str] = {}
    for row in records:
        title = str(row["section"]).strip()
        text = str(row["question"]).strip()
        if not title and not text:
            continue
        sid = str(row["section_id"]).strip() or by_title.get(title) or _next_id("s", used_sections)
        by_title.setdefault(title, sid)
        group = groups.setdefault(sid, {"title": title, "description": None, "questions": []})
        description = str(row["section_description"]).strip()
        if description and group["description"] is None:
            group["description"] = description
        if text:
            qid = str(row["question_id"]).strip() or _next_id("q", used_questions)
            group["questions"].append(
                Question(id=qid, text=text, type=row["type"] or "rating", required=bool(row["required"]))
            )
    return tuple(
        Section(id=sid, title=g["title"], questions=tuple(g["questions"]), description=g["description"])
        for sid, g in groups.items()
    )


def _set_mode(mode: str, selected: str | None = None) -> None:
    st.session_state["questionnaires_mode"] = mode
    st.session_state["questionnaires_selected"] = selected


def render(cfg: AppConfig, store: EntityStore) -> None:
    ctl = questionnaires_controller(store)
    ctl.load()

    mode = st.session_state.get("questionnaires_mode", "list")
    selected = st.session_state.get("questionnaires_selected")

    c1, c2 = st.columns([4, 1])
    c1.title("Questionnaire Management")
    if mode == "list":
        if c2.button("➕ New questionnaire", use_container_width=True):
            _set_mode("create")
            st.rerun()
    elif c2.button("← Back to list", use_container_width=True):
        _set_mode("list")
        st.rerun()

    render_load_status(ctl, "questionnaires")

    if mode == "create":
        _render_builder(ctl, None)
    elif mode == "edit" and ctl.get(selected) is not None:
        _render_builder(ctl, ctl.get(selected))
    elif mode == "view" and ctl.get(selected) is not None:
        _render_detail(ctl.get(selected))
    else:
        _render_list(ctl)


def _render_list(ctl: QuestionnairesController) -> None:
    render_page_intro(
        "Evaluation questionnaires",
        "Reusable templates of sections and questions. Forms are distributed from these.",
    )
    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Search", placeholder="Search questionnaires...", label_visibility="collapsed")
    status = c2.selectbox(
        "Status",
        ["all", *QUESTIONNAIRE_STATUSES],
        format_func=lambda s: "All statuses" if s == "all" else s.capitalize(),
        label_visibility="collapsed",
    )

    render_delete_confirmation(ctl, lambda q: f'the questionnaire "{q.title}"')

    rows = ctl.visible(search, status)
    if not rows:
        st.info("No questionnaires found. Create your first questionnaire to get started.")
        return

    header = st.columns([3, 4, 1, 1, 1.5, 2.5])
    for col, name in zip(header, ["Title", "Description", "Sections", "Questions", "Status", "Last updated"]):
        col.markdown(f"**{name}**")
    for q in rows:
        cols = st.columns([3, 4, 1, 1, 1.5, 2.5])
        cols[0].write(q.title)
        cols[1].caption(q.description)
        cols[2].write(len(q.sections))
        cols[3].write(q.total_questions)
        cols[4].markdown(status_badge(q.status), unsafe_allow_html=True)
        with cols[5]:
            st.caption(q.updated_at.strftime("%b %d, %Y"))
            a1, a2, a3 = st.columns(3)
            if a1.button("👁", key=f"q_view_{q.id}", help="View"):
                _set_mode("view", q.id)
                st.rerun()
            if a2.button("✏️", key=f"q_edit_{q.id}", help="Edit"):
                _set_mode("edit", q.id)
                st.rerun()
            if a3.button("🗑", key=f"q_delete_{q.id}", help="Delete"):
                ctl.request_delete(q.id)
                st.rerun()


def _render_builder(ctl: QuestionnairesController, existing: Questionnaire | None) -> None:
    st.subheader("Edit questionnaire" if existing else "Create new questionnaire")
    key = existing.id if existing else "new"
    with st.form(f"questionnaire_builder_{key}"):
        title = st.text_input("Title *", value=existing.title if existing else "")
        description = st.text_area("Description", value=existing.description if existing else "")
        status = st.selectbox(
            "Status",
            QUESTIONNAIRE_STATUSES,
            index=QUESTIONNAIRE_STATUSES.index(existing.status) if existing else 0,
        )
        st.markdown("**Sections and questions**")
        st.caption(
            "Rows with the same section name are grouped in order of appearance. "
            "A row without a question keeps an empty section."
        )
        grid = st.data_editor(
            sections_to_frame(existing.sections if existing else ()),
            num_rows="dynamic",
            use_container_width=True,
            column_order=EDITABLE_COLUMNS,
            column_config={
                "section": st.column_config.TextColumn("Section", required=True),
                "section_description": st.column_config.TextColumn("Section description"),
                "question": st.column_config.TextColumn("Question", width="large"),
                "type": st.column_config.SelectboxColumn("Type", options=list(QUESTION_TYPES), default="rating"),
                "required": st.column_config.CheckboxColumn("Required", default=False),
            },
            key=f"questionnaire_grid_{key}",
        )
        submitted = st.form_submit_button("Save questionnaire", type="primary", disabled=ctl.pending is not None)

    if submitted:
        draft = QuestionnaireDraft(title=title, description=description, sections=sections_from_frame(grid), status=status)
        saved = ctl.update(existing.id, draft) if existing else ctl.create(draft)
        if saved is not None:
            _set_mode("list")
            st.rerun()


def _render_detail(q: Questionnaire) -> None:
    st.subheader(q.title)
    st.markdown(status_badge(q.status), unsafe_allow_html=True)
    st.write(q.description)
    st.caption(f"Created {q.created_at:%b %d, %Y} · Updated {q.updated_at:%b %d, %Y} · {q.total_questions} questions")
    for s in q.sections:
        with st.container(border=True):
            st.markdown(f"#### {s.title}")
            if s.description:
                st.caption(s.description)
            for question in s.questions:
                st.markdown(f"**{question.text}**" + (" *" if question.required else ""))
                st.caption(TYPE_LABELS.get(question.type, question.type))
    if st.button("Edit questionnaire", type="primary"):
        _set_mode("edit", q.id)
        st.rerun()
