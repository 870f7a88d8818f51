import calendar
import logging
import re

from flask import Blueprint, abort, jsonify, request
from flask_login import current_user, login_required

from memosphere import analyzer, storage, trends
from memosphere.models import utcnow
from memosphere.schemas import CreateEntry, UpdateEntry

logger = logging.getLogger(__name__)

bp = Blueprint("entries", __name__, url_prefix="/api")

NO_ENTRIES_REFLECTION = "You haven't created any journal entries in the past month."
NO_ENTRIES_SUGGESTIONS = [
    "Try to write at least once a week",
    "Short entries are better than no entries",
    "Set a reminder to journal regularly",
]

# Fields that may be cleared with an explicit null on update
_NULLABLE_FIELDS = {"mood", "image_url"}

_ENTRY_ID = re.compile(r"-?[0-9]+", re.ASCII)


def _utcnow():
    return utcnow()


def one_month_ago(now):
    year, month = (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def _json_body():
    return request.get_json(silent=True) or {}


def _parse_entry_id(raw_id):
    # int() also accepts underscores and non-ASCII digits
    if not _ENTRY_ID.fullmatch(raw_id):
        abort(400, description="Invalid entry ID")
    return int(raw_id)


def _get_owned_entry(raw_id):
    entry = storage.get_entry_by_id(_parse_entry_id(raw_id))
    if entry is None:
        abort(404, description="Entry not found")
    if entry.user_id != current_user.id:
        abort(403, description="Access denied")
    return entry


def _derive_mood(mood, sentiment):
    """Keep a supplied mood; otherwise take the classified emotion when classification worked."""
    if mood:
        return mood
    if not analyzer.is_fallback(sentiment):
        return sentiment["primaryEmotion"]
    return None


@bp.route("/entries", methods=["POST"])
@login_required
def create_entry():
    payload = CreateEntry.model_validate(_json_body())
    sentiment = analyzer.analyze_journal_entry(payload.content)

    entry = storage.create_entry(
        current_user.id,
        payload.title,
        payload.content,
        mood=_derive_mood(payload.mood, sentiment),
        is_public=payload.is_public,
        image_url=payload.image_url,
        sentiment_analysis=sentiment,
    )
    logger.info("User %s created entry %s", current_user.id, entry.id)
    return jsonify(entry.to_dict()), 201


@bp.route("/entries", methods=["GET"])
@login_required
def list_entries():
    entries = storage.get_entries_by_user_id(current_user.id)
    return jsonify([entry.to_dict() for entry in entries])


@bp.route("/entries/public", methods=["GET"])
def list_public_entries():
    results = []
    for entry, author in storage.get_public_entries():
        item = entry.to_dict()
        item["user"] = {"username": author.username, "displayName": author.display_name}
        results.append(item)
    return jsonify(results)


@bp.route("/entries/<entry_id>", methods=["GET"])
def get_entry(entry_id):
    entry = storage.get_entry_by_id(_parse_entry_id(entry_id))
    if entry is None:
        abort(404, description="Entry not found")
    if not entry.is_public and (not current_user.is_authenticated or current_user.id != entry.user_id):
        abort(403, description="Access denied")
    return jsonify(entry.to_dict())


@bp.route("/entries/<entry_id>", methods=["PUT"])
@login_required
def update_entry(entry_id):
    existing = _get_owned_entry(entry_id)
    payload = UpdateEntry.model_validate(_json_body())
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field in _NULLABLE_FIELDS
    }

    content = changes.get("content")
    if content and content != existing.content:
        sentiment = analyzer.analyze_journal_entry(content)
        changes["sentiment_analysis"] = sentiment
        mood = _derive_mood(changes.get("mood"), sentiment)
        if mood:
            changes["mood"] = mood

    entry = storage.update_entry(existing.id, **changes)
    if entry is None:
        abort(404, description="Entry not found")
    return jsonify(entry.to_dict())


@bp.route("/entries/<entry_id>", methods=["DELETE"])
@login_required
def delete_entry(entry_id):
    existing = _get_owned_entry(entry_id)
    if not storage.delete_entry(existing.id):
        abort(500, description="Failed to delete entry")
    logger.info("User %s deleted entry %s", current_user.id, existing.id)
    return "", 204


@bp.route("/memories/on-this-day", methods=["GET"])
@login_required
def on_this_day():
    today = _utcnow().date()
    memories = []
    for entry in storage.get_on_this_day_entries(current_user.id, today):
        year_difference = today.year - entry.created_at.year
        item = entry.to_dict()
        item["memorySummary"] = analyzer.generate_memory_summary(entry.content, year_difference)
        item["yearDifference"] = year_difference
        memories.append(item)
    return jsonify(memories)


@bp.route("/insights/monthly", methods=["GET"])
@login_required
def monthly_insights():
    recent = storage.get_entries_since(current_user.id, one_month_ago(_utcnow()))
    if not recent:
        return jsonify({
            "monthlyReflection": NO_ENTRIES_REFLECTION,
            "suggestions": list(NO_ENTRIES_SUGGESTIONS),
        })

    insights = analyzer.generate_monthly_insights([(entry.content, entry.mood) for entry in recent])
    insights["entryCount"] = len(recent)
    return jsonify(insights)


@bp.route("/insights/moods", methods=["GET"])
@login_required
def mood_insights():
    return jsonify(trends.mood_stats(storage.get_entries_by_user_id(current_user.id)))
