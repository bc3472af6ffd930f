"""
Hardcoded sample records, stored as wire rows.

Used two ways:
- fallback dataset when an initial live load fails (degraded mode)
- seed data for the in-memory MockTableClient (USE_MOCK_DATA=true)
"""

from __future__ import annotations

import copy
import json


_QUESTIONNAIRES = [
    {
        "id": "1",
        "title": "End of Semester Evaluation",
        "description": "Standard evaluation form for end of semester feedback",
        "sections": json.dumps(
            [
                {
                    "id": "s1",
                    "title": "Teaching Quality",
                    "questions": [
                        {"id": "q1", "text": "How would you rate the overall teaching quality?", "type": "rating"},
                        {"id": "q2", "text": "What aspects of teaching could be improved?", "type": "qualitative"},
                    ],
                },
                {
                    "id": "s2",
                    "title": "Course Content",
                    "questions": [
                        {"id": "q3", "text": "Was the course content relevant to your learning goals?", "type": "rating"},
                        {"id": "q4", "text": "What topics would you like to see added or removed?", "type": "qualitative"},
                    ],
                },
            ]
        ),
        "status": "active",
        "created_at": "2023-06-15T00:00:00",
        "updated_at": "2023-07-01T00:00:00",
    },
    {
        "id": "2",
        "title": "Mid-Term Feedback Form",
        "description": "Quick feedback collection halfway through the semester",
        "sections": json.dumps(
            [
                {
                    "id": "s1",
                    "title": "Course Progress",
                    "questions": [
                        {"id": "q1", "text": "How would you rate your understanding of the material so far?", "type": "rating"},
                        {"id": "q2", "text": "What areas do you need more clarification on?", "type": "qualitative"},
                    ],
                }
            ]
        ),
        "status": "draft",
        "created_at": "2023-08-10T00:00:00",
        "updated_at": "2023-08-10T00:00:00",
    },
    {
        "id": "3",
        "title": "Teaching Assistant Evaluation",
        "description": "Form for evaluating teaching assistants",
        "sections": json.dumps(
            [
                {
                    "id": "s1",
                    "title": "TA Performance",
                    "questions": [
                        {"id": "q1", "text": "How helpful was the TA during lab sessions?", "type": "rating"},
                        {"id": "q2", "text": "How clear were the TA's explanations?", "type": "rating"},
                    ],
                }
            ]
        ),
        "status": "archived",
        "created_at": "2023-03-05T00:00:00",
        "updated_at": "2023-06-20T00:00:00",
    },
]

_FORMS = [
    {
        "id": "1",
        "title": "End of Semester Evaluation",
        "questionnaire": "Standard Faculty Evaluation",
        "section": "CS101-A",
        "status": "active",
        "responses": 24,
        "created_at": "2023-09-01T00:00:00",
        "expires_at": "2023-12-15T00:00:00",
    },
    {
        "id": "2",
        "title": "Mid-term Feedback",
        "questionnaire": "Quick Feedback Form",
        "section": "MATH202-B",
        "status": "inactive",
        "responses": 18,
        "created_at": "2023-08-15T00:00:00",
        "expires_at": "2023-10-01T00:00:00",
    },
    {
        "id": "3",
        "title": "Teaching Assistant Evaluation",
        "questionnaire": "TA Performance Review",
        "section": "PHYS303-C",
        "status": "active",
        "responses": 12,
        "created_at": "2023-09-10T00:00:00",
        "expires_at": "2023-11-30T00:00:00",
    },
    {
        "id": "4",
        "title": "Previous Semester Evaluation",
        "questionnaire": "Standard Faculty Evaluation",
        "section": "ENG101-D",
        "status": "inactive",
        "responses": 45,
        "created_at": "2023-01-15T00:00:00",
        "expires_at": "2023-05-30T00:00:00",
    },
    {
        "id": "5",
        "title": "Department Chair Review",
        "questionnaire": "Leadership Assessment",
        "section": "ADMIN-A",
        "status": "inactive",
        "responses": 12,
        "created_at": "2023-02-10T00:00:00",
        "expires_at": "2023-03-10T00:00:00",
    },
]

_ADMINS = [
    {
        "id": "1",
        "name": "John Doe",
        "email": "john.doe@example.com",
        "role": "Super Admin",
        "status": "active",
        "last_login": "2023-06-15T10:30:00",
        "permissions": ["manage_questionnaires", "manage_forms", "view_analytics", "manage_admins"],
    },
    {
        "id": "2",
        "name": "Jane Smith",
        "email": "jane.smith@example.com",
        "role": "Department Admin",
        "status": "active",
        "last_login": "2023-06-14T14:45:00",
        "permissions": ["manage_questionnaires", "manage_forms", "view_analytics"],
    },
    {
        "id": "3",
        "name": "Robert Johnson",
        "email": "robert.johnson@example.com",
        "role": "Viewer",
        "status": "inactive",
        "last_login": "2023-05-20T09:15:00",
        "permissions": ["view_analytics"],
    },
]

FALLBACK_ROWS = {
    "questionnaires": _QUESTIONNAIRES,
    "forms": _FORMS,
    "admins": _ADMINS,
}

# Section/class choices offered by the form creator.
CLASS_SECTIONS = ["CS101-A", "CS201-B", "MATH101-A", "MATH202-B", "PHYS303-C", "ENG101-D"]


def fallback_rows(table: str) -> list[dict]:
    """Fresh copy so callers can never mutate the shared sample data."""
    return copy.deepcopy(FALLBACK_ROWS.get(table, []))
