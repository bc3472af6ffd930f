"""
Screen controllers: everything a list/detail screen does except drawing.

Views own one controller per screen (kept in st.session_state) and call only
these methods. Errors never escape: validation and store failures become
notifications on the shared Notifier.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from data.adapters import utcnow
from data.analytics import matches
from data.export import build_share_link
from data.models import Admin, AdminDraft, Form, FormDraft, Questionnaire, QuestionnaireDraft, ValidationError
from data.store import EntityStore, LoadState, MutationState


def _changed(existing: Any, candidate: dict) -> dict:
    return {k: v for k, v in candidate.items() if getattr(existing, k) != v}


class ScreenController:
    table: str = ""

    def __init__(self, store: EntityStore):
        self.store = store
        self.pending_delete: Optional[str] = None

    # --- state ---

    def load(self) -> LoadState:
        return self.store.ensure_loaded(self.table)

    def reload(self) -> LoadState:
        return self.store.reload(self.table)

    @property
    def state(self) -> LoadState:
        return self.store.load_state(self.table)

    @property
    def degraded(self) -> bool:
        return self.store.is_degraded(self.table)

    @property
    def pending(self) -> Optional[MutationState]:
        return self.store.pending(self.table)

    @property
    def items(self) -> tuple:
        return self.store.items(self.table)

    def get(self, id: str):
        return self.store.get(self.table, id)

    # --- delete (always confirmed) ---

    def request_delete(self, id: str) -> None:
        self.pending_delete = str(id)

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self) -> bool:
        if self.pending_delete is None:
            return False
        id = self.pending_delete
        try:
            return self.store.delete(self.table, id)
        finally:
            if self.pending_delete == id:
                self.pending_delete = None

    # --- helpers ---

    def _validated(self, label: str, check: Callable[[], Any]) -> bool:
        try:
            check()
        except ValidationError as e:
            self.store.notifier.invalid(label, e.errors)
            return False
        return True

    def _save_changes(self, id: str, candidate: dict, operation: str = "update", stamp: Optional[str] = None):
        existing = self.get(id)
        if existing is None:
            self.store.notifier.info(f"{self.store.adapter(self.table).label} no longer exists")
            return None
        changes = _changed(existing, candidate)
        if not changes:
            self.store.notifier.info("No changes to save")
            return existing
        if stamp:
            changes[stamp] = utcnow()
        return self.store.update(self.table, id, changes, operation=operation)


class QuestionnairesController(ScreenController):
    table = "questionnaires"

    def visible(self, search: str = "", status: str = "all") -> list[Questionnaire]:
        return [q for q in self.items if matches(q, {"status": status}, search, ("title", "description"))]

    def create(self, draft: QuestionnaireDraft) -> Optional[Questionnaire]:
        if not self._validated("Questionnaire", draft.validate):
            return None
        return self.store.create(
            self.table,
            {
                "title": draft.title.strip(),
                "description": draft.description,
                "sections": draft.sections,
                "status": draft.status or "draft",
            },
        )

    def update(self, id: str, draft: QuestionnaireDraft) -> Optional[Questionnaire]:
        if not self._validated("Questionnaire", draft.validate):
            return None
        candidate = {"title": draft.title.strip(), "description": draft.description, "sections": draft.sections}
        if draft.status:
            candidate["status"] = draft.status
        return self._save_changes(id, candidate, stamp="updated_at")


class FormsController(ScreenController):
    """Forms are split into an active and an archived collection by status."""

    table = "forms"

    def __init__(self, store: EntityStore, base_url: str = "http://localhost:8501"):
        super().__init__(store)
        self.base_url = base_url
        self._collections: tuple[tuple[Form, ...], tuple[Form, ...]] = ((), ())
        self._unsubscribe = store.subscribe(self.table, self._partition)
        self._partition(self.table, store.items(self.table))

    def _partition(self, table: str, forms: tuple) -> None:
        # one assignment: both views always come from the same snapshot
        self._collections = (
            tuple(f for f in forms if f.status == "active"),
            tuple(f for f in forms if f.status != "active"),
        )

    @property
    def active(self) -> tuple[Form, ...]:
        return self._collections[0]

    @property
    def archived(self) -> tuple[Form, ...]:
        return self._collections[1]

    def create(self, draft: FormDraft) -> Optional[Form]:
        if not self._validated("Form", lambda: draft.validate(created_at=utcnow())):
            return None
        return self.store.create(
            self.table,
            {
                "title": draft.title.strip() or f"Evaluation Form {len(self.active) + 1}",
                "questionnaire": draft.questionnaire,
                "section": draft.section,
                "status": "active" if draft.is_active else "inactive",
                "expires_at": draft.expires_at,
            },
        )

    def update(self, id: str, draft: FormDraft) -> Optional[Form]:
        existing = self.get(id)
        created_at = existing.created_at if existing is not None else None
        if not self._validated("Form", lambda: draft.validate(created_at=created_at)):
            return None
        candidate = {
            "questionnaire": draft.questionnaire,
            "section": draft.section,
            "status": "active" if draft.is_active else "inactive",
            "expires_at": draft.expires_at,
        }
        if draft.title.strip():
            candidate["title"] = draft.title.strip()
        return self._save_changes(id, candidate)

    def activate(self, id: str) -> Optional[Form]:
        return self.store.update(self.table, id, {"status": "active"}, operation="activate")

    def deactivate(self, id: str) -> Optional[Form]:
        return self.store.update(self.table, id, {"status": "inactive"}, operation="deactivate")

    def share_link(self, id: str) -> Optional[str]:
        form = self.get(id)
        return build_share_link(self.base_url, form) if form is not None else None


class AdminsController(ScreenController):
    table = "admins"

    def create(self, draft: AdminDraft) -> Optional[Admin]:
        if not self._validated("Admin", draft.validate):
            return None
        return self.store.create(
            self.table,
            {
                "name": draft.name.strip(),
                "email": draft.email.strip(),
                "role": draft.role,
                "status": "active",
                "last_login": utcnow().isoformat(),
                "permissions": tuple(draft.permissions),
            },
        )

    def update(self, id: str, draft: AdminDraft) -> Optional[Admin]:
        if not self._validated("Admin", draft.validate):
            return None
        return self._save_changes(
            id,
            {
                "name": draft.name.strip(),
                "email": draft.email.strip(),
                "role": draft.role,
                "permissions": tuple(draft.permissions),
            },
        )

    def toggle_status(self, id: str) -> Optional[Admin]:
        admin = self.get(id)
        if admin is None:
            return None
        if admin.status == "active":
            return self.store.update(self.table, id, {"status": "inactive"}, operation="deactivate")
        return self.store.update(self.table, id, {"status": "active"}, operation="activate")

    def reset_password(self, id: str) -> Optional[str]:
        """Simulated: no store call, just the confirmation toast."""
        admin = self.get(id)
        if admin is None:
            return None
        self.store.notifier.info(f"Password reset link sent to {admin.email}")
        return admin.email
