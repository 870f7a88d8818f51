from collections import Counter, defaultdict

from memosphere.models import MOOD_VALUES

NEUTRAL_SCORE = MOOD_VALUES["neutral"]


def mood_distribution(entries):
    moods = [entry.mood for entry in entries if entry.mood]
    if not moods:
        return []
    mood_counts = Counter(moods)
    total = sum(mood_counts.values())
    return [
        {"mood": mood, "count": count, "percentage": round(count / total * 100)}
        for mood, count in mood_counts.most_common()
    ]


def mood_timeline(entries):
    """Oldest-first points for the mood line chart; unknown labels score as neutral."""
    points = [
        {
            "date": entry.created_at.strftime("%Y-%m-%d"),
            "mood": entry.mood,
            "score": MOOD_VALUES.get(entry.mood, NEUTRAL_SCORE),
        }
        for entry in entries
        if entry.mood
    ]
    return sorted(points, key=lambda point: point["date"])


def monthly_breakdown(entries):
    months = defaultdict(Counter)
    for entry in entries:
        if entry.mood:
            months[entry.created_at.strftime("%Y-%m")][entry.mood] += 1
    return [{"month": month, "moods": dict(counts)} for month, counts in sorted(months.items())]


def mood_stats(entries):
    return {
        "distribution": mood_distribution(entries),
        "timeline": mood_timeline(entries),
        "monthly": monthly_breakdown(entries),
    }
