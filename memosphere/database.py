import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from memosphere.models import Base

logger = logging.getLogger(__name__)

# Bound to an engine by init_engine() when the app is created.
SessionLocal = sessionmaker(expire_on_commit=False)

engine = None


def init_engine(database_url, echo=False):
    global engine
    options = {"echo": echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so every session sees the same in-memory database
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    engine = create_engine(database_url, **options)
    SessionLocal.configure(bind=engine)
    logger.info("Database engine configured for %s", engine.url.render_as_string(hide_password=True))
    return engine


def init_db():
    Base.metadata.create_all(bind=engine)


def drop_db():
    Base.metadata.drop_all(bind=engine)
