from __future__ import annotations

from datetime import datetime, timedelta

from data.adapters import utcnow
from data.controllers import FormsController
from data.models import AdminDraft, FormDraft, Question, QuestionnaireDraft, Section


def _store_calls(client, operation):
    return [c for c in client.calls if c[0] == operation]


# --- admins -----------------------------------------------------------------


def test_confirmed_delete_removes_exactly_one_admin(admins, client):
    admins.request_delete("2")
    assert admins.pending_delete == "2"
    assert admins.confirm_delete() is True

    assert [c[:3] for c in _store_calls(client, "delete")] == [("delete", "admins", "2")]
    assert [a.id for a in admins.items] == ["1", "3"]
    assert admins.pending_delete is None


def test_cancelled_delete_never_reaches_store(admins, client):
    admins.request_delete("2")
    admins.cancel_delete()
    assert admins.confirm_delete() is False
    assert _store_calls(client, "delete") == []


def test_create_admin_is_active_with_checked_permissions(admins, notifier):
    draft = AdminDraft.from_checkboxes(
        "Grace Hopper",
        "grace@faculty-eval.com",
        "Department Admin",
        {"manage_forms": True, "view_analytics": True, "manage_admins": False},
    )
    created = admins.create(draft)

    assert created.status == "active"
    assert created.permissions == ("manage_forms", "view_analytics")
    assert admins.get(created.id) == created
    assert notifier.history[-1].message == "Admin created successfully"


def test_invalid_admin_is_rejected_before_store(admins, client, notifier):
    assert admins.create(AdminDraft(name=" ", email="not-an-email")) is None
    assert _store_calls(client, "insert") == []
    assert "Name is required" in notifier.history[-1].message
    assert "Email must be a valid address" in notifier.history[-1].message


def test_update_sends_only_changed_fields(admins, client):
    jane = admins.get("2")
    draft = AdminDraft(name=jane.name, email=jane.email, role="Viewer", permissions=jane.permissions)
    updated = admins.update("2", draft)

    assert updated.role == "Viewer"
    assert _store_calls(client, "update") == [("update", "admins", "2", {"role": "Viewer"})]


def test_unchanged_update_makes_no_store_call(admins, client, notifier):
    jane = admins.get("2")
    draft = AdminDraft(name=jane.name, email=jane.email, role=jane.role, permissions=jane.permissions)
    assert admins.update("2", draft) == jane
    assert _store_calls(client, "update") == []
    assert notifier.history[-1].message == "No changes to save"


def test_toggle_status_flips(admins):
    assert admins.toggle_status("3").status == "active"
    assert admins.toggle_status("3").status == "inactive"


def test_reset_password_is_simulated(admins, client, notifier):
    calls_before = len(client.calls)
    assert admins.reset_password("1") == "john.doe@example.com"
    assert len(client.calls) == calls_before
    assert notifier.history[-1].level == "info"


# --- forms ------------------------------------------------------------------


def _assert_partitioned(forms):
    active = {f.id for f in forms.active}
    archived = {f.id for f in forms.archived}
    assert not active & archived
    assert active | archived == {f.id for f in forms.items}
    assert all(f.status == "active" for f in forms.active)


def test_forms_are_split_by_status(forms):
    assert [f.id for f in forms.active] == ["1", "3"]
    assert [f.id for f in forms.archived] == ["2", "4", "5"]
    _assert_partitioned(forms)


def test_activate_and_deactivate_move_forms_between_collections(forms):
    forms.deactivate("1")
    _assert_partitioned(forms)
    assert [f.id for f in forms.active] == ["3"]

    forms.activate("5")
    _assert_partitioned(forms)
    assert {f.id for f in forms.active} == {"3", "5"}


def test_failed_activate_keeps_collections(forms, client):
    client.fail_on.add("update")
    assert forms.activate("2") is None
    assert [f.id for f in forms.active] == ["1", "3"]


def test_create_form_gets_default_title_and_starts_with_no_responses(forms):
    created = forms.create(
        FormDraft(
            questionnaire="Standard Faculty Evaluation",
            section="CS201-B",
            expires_at=utcnow() + timedelta(days=30),
        )
    )
    assert created.title == "Evaluation Form 3"
    assert created.responses == 0
    assert created in forms.active
    _assert_partitioned(forms)


def test_form_expiring_before_creation_is_rejected(forms, client, notifier):
    draft = FormDraft(questionnaire="Quick Feedback Form", section="CS101-A", expires_at=datetime(2020, 1, 1))
    assert forms.create(draft) is None
    assert _store_calls(client, "insert") == []
    assert "Expiry date must be after the creation date" in notifier.history[-1].message


def test_form_edit_checks_expiry_against_creation_date(forms):
    # form 2 was created 2023-08-15
    draft = FormDraft(
        questionnaire="Quick Feedback Form",
        section="MATH202-B",
        expires_at=datetime(2023, 8, 1),
        is_active=False,
    )
    assert forms.update("2", draft) is None


def test_share_link(store):
    forms = FormsController(store, base_url="http://localhost:8501")
    forms.load()
    assert forms.share_link("1") == "http://localhost:8501/forms/response/1?section=CS101-A"
    assert forms.share_link("missing") is None


# --- questionnaires -----------------------------------------------------------


def test_visible_combines_search_and_status(questionnaires):
    assert [q.id for q in questionnaires.visible("SEMESTER", "active")] == ["1"]
    # matched through the description
    assert [q.id for q in questionnaires.visible("semester", "draft")] == ["2"]
    assert [q.id for q in questionnaires.visible("semester", "archived")] == []
    assert {q.id for q in questionnaires.visible("evaluation")} == {"1", "3"}
    assert len(questionnaires.visible()) == 3


def test_create_questionnaire_defaults_to_draft(questionnaires):
    draft = QuestionnaireDraft(
        title="Lab Survey",
        description="Labs only",
        sections=(Section(id="s1", title="Labs", questions=(Question(id="q1", text="Were labs useful?"),)),),
    )
    created = questionnaires.create(draft)
    assert created.status == "draft"
    assert created.total_questions == 1
    assert questionnaires.get(created.id) == created


def test_questionnaire_without_title_is_rejected(questionnaires, client, notifier):
    assert questionnaires.create(QuestionnaireDraft(title="")) is None
    assert _store_calls(client, "insert") == []
    assert notifier.history[-1].message == "Questionnaire not saved: Title is required"


def test_questionnaire_update_stamps_updated_at(questionnaires, client):
    before = questionnaires.get("2")
    draft = QuestionnaireDraft(
        title=before.title,
        description=before.description,
        sections=before.sections,
        status="active",
    )
    updated = questionnaires.update("2", draft)

    (call,) = _store_calls(client, "update")
    assert set(call[3]) == {"status", "updated_at"}
    assert updated.status == "active"
    assert updated.updated_at > before.updated_at
