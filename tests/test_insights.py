from datetime import datetime

from memosphere import analyzer, routes, storage
from memosphere.routes import one_month_ago
from tests.conftest import register

NOW = datetime(2026, 10, 19, 12, 0)


def _freeze_now(monkeypatch):
    monkeypatch.setattr(routes, "_utcnow", lambda: NOW)


def test_one_month_ago_clamps_to_month_end():
    assert one_month_ago(datetime(2026, 3, 31, 9, 0)) == datetime(2026, 2, 28, 9, 0)
    assert one_month_ago(datetime(2026, 1, 15)) == datetime(2025, 12, 15)
    assert one_month_ago(NOW) == datetime(2026, 9, 19, 12, 0)


def test_on_this_day_adds_memory_summaries(client, monkeypatch):
    _freeze_now(monkeypatch)
    user = register(client)
    storage.create_entry(user["id"], "one", "Moved into the new flat.", created_at=datetime(2025, 10, 19, 7, 0))
    storage.create_entry(user["id"], "three", "First snow.", created_at=datetime(2023, 10, 19, 7, 0))
    storage.create_entry(user["id"], "today", "Not a memory yet.", created_at=datetime(2026, 10, 19, 7, 0))

    requests = []

    def summarize(content, year_difference):
        requests.append((content, year_difference))
        return f"{year_difference} years ago, you wrote: {content}"

    monkeypatch.setattr(analyzer, "generate_memory_summary", summarize)

    memories = client.get("/api/memories/on-this-day").get_json()
    assert [memory["title"] for memory in memories] == ["one", "three"]
    assert [memory["yearDifference"] for memory in memories] == [1, 3]
    assert memories[1]["memorySummary"] == "3 years ago, you wrote: First snow."
    assert requests == [("Moved into the new flat.", 1), ("First snow.", 3)]


def test_on_this_day_falls_back_without_llm(client, monkeypatch):
    _freeze_now(monkeypatch)
    user = register(client)
    storage.create_entry(user["id"], "one", "c", created_at=datetime(2024, 10, 19))

    memories = client.get("/api/memories/on-this-day").get_json()
    assert memories[0]["memorySummary"] == "2 years ago on this day, you wrote this entry."


def test_on_this_day_requires_login(client):
    assert client.get("/api/memories/on-this-day").status_code == 401


def test_monthly_insights_without_entries(client, monkeypatch):
    _freeze_now(monkeypatch)
    user = register(client)
    storage.create_entry(user["id"], "too old", "c", created_at=datetime(2026, 9, 1))

    body = client.get("/api/insights/monthly").get_json()
    assert body == {
        "monthlyReflection": "You haven't created any journal entries in the past month.",
        "suggestions": [
            "Try to write at least once a week",
            "Short entries are better than no entries",
            "Set a reminder to journal regularly",
        ],
    }


def test_monthly_insights_summarizes_recent_entries(client, monkeypatch):
    _freeze_now(monkeypatch)
    user = register(client)
    storage.create_entry(user["id"], "old", "Old news.", mood="sad", created_at=datetime(2026, 9, 10))
    storage.create_entry(user["id"], "a", "Good run.", mood="happy", created_at=datetime(2026, 10, 1))
    storage.create_entry(user["id"], "b", "Busy week.", created_at=datetime(2026, 10, 15))

    received = []

    def insights(entries):
        received.extend(entries)
        return {"monthlyReflection": "A steady month.", "suggestions": ["a", "b", "c"]}

    monkeypatch.setattr(analyzer, "generate_monthly_insights", insights)

    body = client.get("/api/insights/monthly").get_json()
    assert body == {"monthlyReflection": "A steady month.", "suggestions": ["a", "b", "c"], "entryCount": 2}
    assert received == [("Busy week.", None), ("Good run.", "happy")]


def test_monthly_insights_falls_back_without_llm(client, monkeypatch):
    _freeze_now(monkeypatch)
    user = register(client)
    storage.create_entry(user["id"], "a", "c", created_at=datetime(2026, 10, 1))

    body = client.get("/api/insights/monthly").get_json()
    assert body["monthlyReflection"] == analyzer.FALLBACK_MONTHLY_INSIGHTS["monthlyReflection"]
    assert len(body["suggestions"]) == 3
    assert body["entryCount"] == 1


def test_mood_insights(client):
    user = register(client)
    storage.create_entry(user["id"], "a", "c", mood="happy", created_at=datetime(2026, 9, 2))
    storage.create_entry(user["id"], "b", "c", mood="sad", created_at=datetime(2026, 10, 5))
    storage.create_entry(user["id"], "c", "c", mood="happy", created_at=datetime(2026, 10, 1))
    storage.create_entry(user["id"], "d", "c", created_at=datetime(2026, 10, 7))

    stats = client.get("/api/insights/moods").get_json()
    assert stats["distribution"] == [
        {"mood": "happy", "count": 2, "percentage": 67},
        {"mood": "sad", "count": 1, "percentage": 33},
    ]
    assert stats["timeline"] == [
        {"date": "2026-09-02", "mood": "happy", "score": 7},
        {"date": "2026-10-01", "mood": "happy", "score": 7},
        {"date": "2026-10-05", "mood": "sad", "score": 2},
    ]
    assert stats["monthly"] == [
        {"month": "2026-09", "moods": {"happy": 1}},
        {"month": "2026-10", "moods": {"sad": 1, "happy": 1}},
    ]
