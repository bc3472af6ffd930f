from __future__ import annotations

import pandas as pd

from data.mock_client import MockTableClient
from data.models import Question, QuestionnaireDraft, Section
from data.service import get_questionnaires
from views.forms import resolve_mode
from views.questionnaires import sections_from_frame, sections_to_frame


CUSTOM_SECTIONS = (
    Section(
        id="intro",
        title="Introduction",
        questions=(
            Question(id="q-10", text="Were the course goals clear?", type="rating", required=True),
            Question(id="q-3", text="Anything else?", type="text"),
        ),
        description="Warm-up questions",
    ),
    Section(id="sec-7", title="Labs"),
    Section(
        id="s2",
        title="Wrap-up",
        questions=(Question(id="q1", text="Overall impressions?", type="qualitative"),),
        description="Closing",
    ),
)


# --- question grid ------------------------------------------------------------


def test_question_grid_round_trip():
    sections = get_questionnaires(MockTableClient.seeded()).rows[0].sections
    frame = sections_to_frame(sections)
    assert len(frame) == 4

    rebuilt = sections_from_frame(frame)
    assert [s.title for s in rebuilt] == ["Teaching Quality", "Course Content"]
    assert [q.id for s in rebuilt for q in s.questions] == ["q1", "q2", "q3", "q4"]
    assert [q.text for s in rebuilt for q in s.questions] == [q.text for s in sections for q in s.questions]


def test_question_grid_keeps_ids_descriptions_and_empty_sections():
    assert sections_from_frame(sections_to_frame(CUSTOM_SECTIONS)) == CUSTOM_SECTIONS


def test_rows_added_in_the_editor_get_free_ids():
    added = pd.DataFrame(
        [
            {"section": "Labs", "question": "Was the lab useful?", "type": "rating", "required": False},
            {"section": "Feedback", "question": "Comments", "type": "text", "required": False},
        ]
    )
    rebuilt = sections_from_frame(pd.concat([sections_to_frame(CUSTOM_SECTIONS), added], ignore_index=True))

    assert [s.id for s in rebuilt] == ["intro", "sec-7", "s2", "s1"]
    assert rebuilt[1].questions == (Question(id="q2", text="Was the lab useful?"),)
    assert rebuilt[3] == Section(id="s1", title="Feedback", questions=(Question(id="q3", text="Comments", type="text"),))


def test_question_grid_skips_blank_rows():
    frame = pd.DataFrame(
        [
            {"section": "Intro", "question": "Clear goals?", "type": "rating", "required": True},
            {"section": None, "question": None, "type": None, "required": None},
            {"section": "Wrap-up", "question": "Comments", "type": "text", "required": False},
        ]
    )
    rebuilt = sections_from_frame(frame)
    assert [(s.id, s.title) for s in rebuilt] == [("s1", "Intro"), ("s2", "Wrap-up")]
    assert rebuilt[0].questions[0].required is True
    assert rebuilt[1].questions[0].id == "q2"


def test_saving_an_untouched_grid_changes_nothing(questionnaires, client, notifier):
    before = questionnaires.get("1")
    draft = QuestionnaireDraft(
        title=before.title,
        description=before.description,
        sections=sections_from_frame(sections_to_frame(before.sections)),
        status=before.status,
    )

    assert questionnaires.update("1", draft) == before
    assert [c for c in client.calls if c[0] == "update"] == []
    assert notifier.history[-1].message == "No changes to save"


# --- forms screen -------------------------------------------------------------


def test_deleted_form_sends_edit_screen_back_to_list(forms):
    assert resolve_mode(forms, "edit", "2") == "edit"

    forms.request_delete("2")
    forms.confirm_delete()

    assert resolve_mode(forms, "edit", "2") == "list"
    assert resolve_mode(forms, "view", "2") == "list"
    assert resolve_mode(forms, "link", None) == "list"
    assert resolve_mode(forms, "create", None) == "create"
