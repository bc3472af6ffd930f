"""
View models for the evaluation entities, plus the closed "draft" structs that
screens submit. A draft is validated at the boundary before it is adapted into
a wire payload, so no free-form dict ever reaches the store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


QUESTIONNAIRE_STATUSES = ("draft", "active", "archived")
FORM_STATUSES = ("active", "inactive")
ADMIN_STATUSES = ("active", "inactive")
QUESTION_TYPES = ("rating", "qualitative", "text")

PERMISSIONS = {
    "manage_questionnaires": "Manage questionnaires",
    "manage_forms": "Manage forms",
    "view_analytics": "View analytics",
    "manage_admins": "Manage administrators",
}


class ValidationError(ValueError):
    """Required-field or consistency violation, caught before any store call."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    type: str = "rating"
    required: bool = False


@dataclass(frozen=True)
class Section:
    id: str
    title: str
    questions: tuple[Question, ...] = ()
    description: Optional[str] = None


@dataclass(frozen=True)
class Questionnaire:
    id: str
    title: str
    description: str
    sections: tuple[Section, ...]
    status: str
    created_at: datetime
    updated_at: datetime

    @property
    def total_questions(self) -> int:
        return sum(len(s.questions) for s in self.sections)


@dataclass(frozen=True)
class Form:
    id: str
    title: str
    questionnaire: str
    section: str
    status: str
    responses: int
    created_at: datetime
    expires_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == "active"


@dataclass(frozen=True)
class Admin:
    id: str
    name: str
    email: str
    role: str
    status: str
    last_login: str
    permissions: tuple[str, ...] = ()


def _required(errors: list[str], label: str, value) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        errors.append(f"{label} is required")


@dataclass(frozen=True)
class QuestionnaireDraft:
    title: str
    description: str = ""
    sections: tuple[Section, ...] = ()
    status: Optional[str] = None

    def validate(self) -> "QuestionnaireDraft":
        errors: list[str] = []
        _required(errors, "Title", self.title)
        if self.status is not None and self.status not in QUESTIONNAIRE_STATUSES:
            errors.append(f"Unknown status '{self.status}'")
        for s in self.sections:
            _required(errors, "Section title", s.title)
            for q in s.questions:
                _required(errors, "Question text", q.text)
                if q.type not in QUESTION_TYPES:
                    errors.append(f"Unknown question type '{q.type}'")
        if errors:
            raise ValidationError(errors)
        return self


@dataclass(frozen=True)
class FormDraft:
    questionnaire: str
    section: str
    expires_at: datetime
    title: str = ""
    is_active: bool = True
    created_at: Optional[datetime] = None

    def validate(self, created_at: Optional[datetime] = None) -> "FormDraft":
        errors: list[str] = []
        _required(errors, "Questionnaire", self.questionnaire)
        _required(errors, "Section", self.section)
        _required(errors, "Expiry date", self.expires_at)
        start = self.created_at or created_at
        if start is not None and self.expires_at is not None and self.expires_at <= start:
            errors.append("Expiry date must be after the creation date")
        if errors:
            raise ValidationError(errors)
        return self


@dataclass(frozen=True)
class AdminDraft:
    name: str
    email: str
    role: str = "Viewer"
    permissions: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_checkboxes(cls, name: str, email: str, role: str, checked: dict[str, bool]) -> "AdminDraft":
        return cls(name=name, email=email, role=role, permissions=tuple(k for k, v in checked.items() if v))

    def validate(self) -> "AdminDraft":
        errors: list[str] = []
        _required(errors, "Name", self.name)
        _required(errors, "Email", self.email)
        if self.email and "@" not in self.email:
            errors.append("Email must be a valid address")
        _required(errors, "Role", self.role)
        if errors:
            raise ValidationError(errors)
        return self
