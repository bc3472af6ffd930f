"""
Wire row <-> view model transforms, one adapter per table.

Design rules:
- Pure functions: no store access, no logging, no st.* calls.
- Defaults are applied once, on read. Writes send only what the caller set.
- Nested fields are decoded only when the wire hands us text.
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Union

from data.models import Admin, Form, Question, Questionnaire, Section


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Any) -> datetime:
    """ISO-8601 string (or datetime) -> naive UTC datetime. Absent -> now."""
    if value is None or value == "":
        return utcnow()
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def format_timestamp(value: Union[datetime, str, None]) -> Union[str, None]:
    if value is None or isinstance(value, str):
        return value
    return value.isoformat()


def _decode_json_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        text = value.strip()
        # Postgres array literal: {a,b,c}
        if text.startswith("{") and text.endswith("}"):
            inner = text[1:-1].strip()
            return [p.strip().strip('"') for p in inner.split(",")] if inner else []
        return json.loads(text)
    return list(value)


def _fields(entity_or_partial: Any) -> dict:
    if dataclasses.is_dataclass(entity_or_partial) and not isinstance(entity_or_partial, type):
        return {f.name: getattr(entity_or_partial, f.name) for f in dataclasses.fields(entity_or_partial)}
    return dict(entity_or_partial)


# --- questionnaires ---------------------------------------------------------


def _question_from_dict(d: dict) -> Question:
    return Question(
        id=str(d.get("id", "")),
        text=d.get("text", ""),
        type=d.get("type", "rating"),
        required=bool(d.get("required", False)),
    )


def _section_from_dict(d: dict) -> Section:
    return Section(
        id=str(d.get("id", "")),
        title=d.get("title", ""),
        questions=tuple(_question_from_dict(q) for q in d.get("questions", [])),
        description=d.get("description"),
    )


def section_to_dict(s: Section) -> dict:
    out = {
        "id": s.id,
        "title": s.title,
        "questions": [{"id": q.id, "text": q.text, "type": q.type, "required": q.required} for q in s.questions],
    }
    if s.description is not None:
        out["description"] = s.description
    return out


def questionnaire_to_view_model(row: dict) -> Questionnaire:
    sections = row.get("sections")
    if isinstance(sections, str):
        sections = json.loads(sections) if sections.strip() else []
    created_at = parse_timestamp(row.get("created_at"))
    updated_at = parse_timestamp(row.get("updated_at"))
    return Questionnaire(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description") or "",
        sections=tuple(
            s if isinstance(s, Section) else _section_from_dict(s) for s in (sections or [])
        ),
        status=row.get("status") or "draft",
        created_at=created_at,
        updated_at=max(updated_at, created_at),
    )


def questionnaire_to_wire_row(entity_or_partial: Any) -> dict:
    row = {}
    for key, value in _fields(entity_or_partial).items():
        if key in ("created_at", "updated_at"):
            row[key] = format_timestamp(value)
        elif key == "sections":
            # text-encoded column
            row[key] = json.dumps([section_to_dict(s) if isinstance(s, Section) else s for s in value])
        else:
            row[key] = value
    return row


# --- forms ------------------------------------------------------------------


def form_to_view_model(row: dict) -> Form:
    return Form(
        id=str(row["id"]),
        title=row.get("title") or "",
        questionnaire=str(row.get("questionnaire") or ""),
        section=row.get("section") or "",
        status=row.get("status") or "inactive",
        responses=int(row.get("responses") or 0),
        created_at=parse_timestamp(row.get("created_at")),
        expires_at=parse_timestamp(row.get("expires_at")),
    )


def form_to_wire_row(entity_or_partial: Any) -> dict:
    row = {}
    for key, value in _fields(entity_or_partial).items():
        row[key] = format_timestamp(value) if key in ("created_at", "expires_at") else value
    return row


# --- admins -----------------------------------------------------------------


def admin_to_view_model(row: dict) -> Admin:
    last_login = row.get("last_login")
    return Admin(
        id=str(row["id"]),
        name=row.get("name") or "",
        email=row.get("email") or "",
        role=row.get("role") or "Viewer",
        status=row.get("status") or "inactive",
        last_login=format_timestamp(last_login) if last_login else utcnow().isoformat(),
        permissions=tuple(str(p) for p in _decode_json_list(row.get("permissions"))),
    )


def admin_to_wire_row(entity_or_partial: Any) -> dict:
    row = {}
    for key, value in _fields(entity_or_partial).items():
        if key == "permissions":
            # native array column
            row[key] = list(value)
        elif key == "last_login":
            row[key] = format_timestamp(value)
        else:
            row[key] = value
    return row


@dataclass(frozen=True)
class EntityAdapter:
    table: str
    label: str
    to_view_model: Callable[[dict], Any]
    to_wire_row: Callable[[Any], dict]
    read_only: frozenset = frozenset({"id"})

    def to_write_payload(self, entity_or_partial: Any) -> dict:
        return {k: v for k, v in self.to_wire_row(entity_or_partial).items() if k not in self.read_only}


QUESTIONNAIRES = EntityAdapter(
    table="questionnaires",
    label="Questionnaire",
    to_view_model=questionnaire_to_view_model,
    to_wire_row=questionnaire_to_wire_row,
)

FORMS = EntityAdapter(
    table="forms",
    label="Form",
    to_view_model=form_to_view_model,
    to_wire_row=form_to_wire_row,
    # server-maintained
    read_only=frozenset({"id", "responses"}),
)

ADMINS = EntityAdapter(
    table="admins",
    label="Admin",
    to_view_model=admin_to_view_model,
    to_wire_row=admin_to_wire_row,
)

ADAPTERS = {a.table: a for a in (QUESTIONNAIRES, FORMS, ADMINS)}
