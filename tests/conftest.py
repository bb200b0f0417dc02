import json

import pytest
import requests

from models.category import Category
from models.question import AnswerOption, Question
from models.user import User, UserRole, UserStatus
from services.webhook_client import ENDPOINTS
from state import session_file
from state.store import AppStore


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = "" if body is None else json.dumps(body)
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeWebhook:
    """Stands in for the Triad3 webhook server, keyed by endpoint slug."""

    def __init__(self):
        self.responses = {}
        self.calls = []

    def respond(self, name, body=None, status_code=200, text=None):
        self.responses.setdefault(ENDPOINTS[name], []).append(
            FakeResponse(status_code=status_code, body=body, text=text)
        )

    def fail(self, name, exc=None):
        self.responses.setdefault(ENDPOINTS[name], []).append(
            exc or requests.ConnectionError("connection refused")
        )

    def payloads(self, name):
        return [payload for slug, payload in self.calls if slug == ENDPOINTS[name]]

    def handle(self, url, json=None, timeout=None):
        slug = url.rsplit("/", 1)[-1]
        self.calls.append((slug, json))
        queue = self.responses[slug]
        # The last queued response keeps answering repeated calls.
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def webhook(monkeypatch):
    fake = FakeWebhook()
    monkeypatch.setattr(requests, "post", lambda url, json=None, timeout=None: fake.handle(url, json, timeout))
    monkeypatch.setattr(requests, "get", lambda url, timeout=None: fake.handle(url, None, timeout))
    return fake


@pytest.fixture(autouse=True)
def session_dir(tmp_path, monkeypatch):
    directory = tmp_path / "sessions"
    monkeypatch.setattr(session_file, "SESSION_DIR", str(directory))
    return directory


@pytest.fixture
def store():
    return AppStore()


@pytest.fixture
def admin():
    return User(
        id="admin-ana@triad3.io",
        name="Ana",
        company_name="Triad3",
        email="ana@triad3.io",
        phone="",
        password_hash="",
        role=UserRole.ADMIN,
        status=UserStatus.APPROVED,
    )


@pytest.fixture
def company_user():
    return User(
        id="user-joao@acme.com",
        name="João",
        company_name="Acme",
        email="joao@acme.com",
        phone="11999990000",
        password_hash="",
        role=UserRole.COMPANY,
        status=UserStatus.APPROVED,
    )


@pytest.fixture
def loaded_store(store):
    """Two categories: Atendimento (max 15) and Vendas (max 10)."""
    store.replace_categories(
        [
            Category(id="cat-derived-atendimento", name="Atendimento"),
            Category(id="cat-derived-vendas", name="Vendas"),
        ]
    )
    store.replace_questions(
        [
            Question(
                id="q-api-1",
                category_id="cat-derived-atendimento",
                text="Vocês medem a satisfação dos clientes?",
                answers=[
                    AnswerOption(id="ans-api-1-0", text="Nunca", score=0),
                    AnswerOption(id="ans-api-1-1", text="Às vezes", score=7),
                    AnswerOption(id="ans-api-1-2", text="Sempre", score=10),
                ],
            ),
            Question(
                id="q-api-2",
                category_id="cat-derived-atendimento",
                text="Existe um canal de reclamações?",
                answers=[
                    AnswerOption(id="ans-api-2-0", text="Não", score=0),
                    AnswerOption(id="ans-api-2-1", text="Sim", score=5),
                ],
            ),
            Question(
                id="q-api-3",
                category_id="cat-derived-vendas",
                text="Há metas de vendas definidas?",
                answers=[
                    AnswerOption(id="ans-api-3-0", text="Não", score=2),
                    AnswerOption(id="ans-api-3-1", text="Sim", score=10),
                ],
            ),
        ]
    )
    return store
