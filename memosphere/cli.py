import logging
from datetime import datetime

import click

from memosphere import storage
from memosphere.database import init_db
from memosphere.models import utcnow
from memosphere.passwords import hash_password

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demopassword"

SAMPLE_ENTRIES = [
    {
        "title": "Weekend hike with friends",
        "content": "It was such a refreshing experience to disconnect from technology and reconnect with nature. "
                   "The mountain views were absolutely breathtaking, and spending quality time with friends made "
                   "it even better. I feel rejuvenated and ready for the week ahead.",
        "mood": "happy",
        "is_public": False,
        "image_url": "https://images.unsplash.com/photo-1519834055134-c8c3a3acaaec?auto=format&fit=crop&w=500&q=60",
        "sentiment_analysis": {
            "primaryEmotion": "happy",
            "emotionalInsight": "You're feeling refreshed and energized after connecting with nature and friends.",
            "suggestion": "Consider making outdoor activities a regular part of your routine.",
        },
        "created_at": datetime(2023, 6, 12),
    },
    {
        "title": "Reflections on the job interview",
        "content": "Today's interview went better than expected. I was nervous at first, but once we started "
                   "discussing the technical problems, I felt confident. Now I just need to wait for their response.",
        "mood": "nervous",
        "is_public": False,
        "image_url": None,
        "sentiment_analysis": {
            "primaryEmotion": "nervous",
            "emotionalInsight": "You started anxious but gained confidence during the interview process.",
            "suggestion": "Celebrate this small win regardless of the outcome.",
        },
        "created_at": datetime(2023, 6, 10),
    },
    {
        "title": "Birthday celebration",
        "content": "The surprise party my friends threw for me today was incredible! I had no idea they were "
                   "planning this for weeks. So grateful for the amazing people in my life.",
        "mood": "excited",
        "is_public": True,
        "image_url": "https://images.unsplash.com/photo-1533371452382-d45a9da51ad9?auto=format&fit=crop&w=500&q=60",
        "sentiment_analysis": {
            "primaryEmotion": "excited",
            "emotionalInsight": "You're feeling loved and appreciative of your social connections.",
            "suggestion": "Take time to individually thank those who made your day special.",
        },
        "created_at": datetime(2023, 6, 5),
    },
    {
        "title": "First day at new job",
        "content": "I'm feeling both nervous and excited about starting at the new company tomorrow. It's a big "
                   "step up in my career, but I know I've prepared well for this opportunity.",
        "mood": "excited",
        "is_public": False,
        "image_url": None,
        "sentiment_analysis": {
            "primaryEmotion": "excited",
            "emotionalInsight": "You're experiencing positive anticipation mixed with natural nervousness.",
            "suggestion": "Focus on listening and observing on your first day to help ease the transition.",
        },
        "created_at": datetime(2022, 6, 15),
    },
]


def seed_demo_data():
    """Create the demo account and its sample entries. Returns the number of entries created."""
    user = storage.get_user_by_username(DEMO_USERNAME)
    if user is None:
        user = storage.create_user(DEMO_USERNAME, hash_password(DEMO_PASSWORD))
        logger.info("Demo user created with ID %s", user.id)

    if storage.get_entries_by_user_id(user.id):
        logger.info("Demo user already has entries, skipping entry creation")
        return 0

    for sample in SAMPLE_ENTRIES:
        storage.create_entry(user.id, **sample)
    return len(SAMPLE_ENTRIES)


@click.command("init-db")
def init_db_command():
    """Create the database tables."""
    init_db()
    click.echo("Database tables created.")


@click.command("seed")
def seed_command():
    """Load the demo user and sample journal entries."""
    init_db()
    created = seed_demo_data()
    click.echo(f"Created {created} sample journal entries.")


@click.command("prune-sessions")
def prune_sessions_command():
    """Delete expired login sessions."""
    removed = storage.delete_expired_web_sessions(utcnow())
    click.echo(f"Removed {removed} expired sessions.")
