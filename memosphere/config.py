import os
import secrets

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Settings read from the environment at startup."""

    DATABASE_URL = os.getenv("DATABASE_URL")
    ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
    ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-haiku-20240307")
    SECRET_KEY = os.getenv("SECRET_KEY") or secrets.token_hex(32)
    PORT = int(os.getenv("PORT", 5005))
    SQL_ECHO = os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes")
    SESSION_LIFETIME_DAYS = int(os.getenv("SESSION_LIFETIME_DAYS", 7))

    # Body-size limit at the transport layer
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024


settings = Config()
