import pytest

from memosphere import analyzer, create_app
from memosphere.database import drop_db, init_db

HAPPY_ANALYSIS = {
    "primaryEmotion": "happy",
    "emotionalInsight": "You sound upbeat and energized.",
    "suggestion": "Write down what made today good.",
}


@pytest.fixture
def app():
    app = create_app({
        "DATABASE_URL": "sqlite://",
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "ANTHROPIC_API_KEY": None,
    })
    init_db()
    yield app
    drop_db()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def other_client(app):
    return app.test_client()


@pytest.fixture
def analysis_calls(monkeypatch):
    """Replace sentiment classification with a stub that always reports "happy"."""
    calls = []

    def analyze(text):
        calls.append(text)
        return dict(HAPPY_ANALYSIS)

    monkeypatch.setattr(analyzer, "analyze_journal_entry", analyze)
    return calls


def register(client, username="alice", password="s3cret-pass"):
    response = client.post("/api/register", json={"username": username, "password": password})
    assert response.status_code == 201
    return response.get_json()


def create_entry(client, **fields):
    body = {"title": "A day", "content": "Today was a day."}
    body.update(fields)
    response = client.post("/api/entries", json=body)
    assert response.status_code == 201
    return response.get_json()
