from __future__ import annotations

import pytest

from data.controllers import AdminsController, FormsController, QuestionnairesController
from data.feedback import Notifier
from data.mock_client import MockTableClient
from data.store import EntityStore


@pytest.fixture
def client() -> MockTableClient:
    return MockTableClient.seeded()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def store(client, notifier) -> EntityStore:
    return EntityStore(client, notifier, source="mock")


@pytest.fixture
def failing_store(notifier) -> EntityStore:
    return EntityStore(MockTableClient.seeded(fail_on={"fetch"}), notifier)


@pytest.fixture
def questionnaires(store) -> QuestionnairesController:
    ctl = QuestionnairesController(store)
    ctl.load()
    return ctl


@pytest.fixture
def forms(store) -> FormsController:
    ctl = FormsController(store, base_url="https://eval.example.edu")
    ctl.load()
    return ctl


@pytest.fixture
def admins(store) -> AdminsController:
    ctl = AdminsController(store)
    ctl.load()
    return ctl
