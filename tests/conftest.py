import os
from pathlib import Path

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("PORTFOLIO_CONFIG_DIR", str(Path(__file__).resolve().parent.parent / "config"))

import pytest

from portfolio_api.database import connection
from portfolio_api.models import Base, Hashtag, Post, Topic, POST_STATUS_PUBLISHED


@pytest.fixture
def session_factory(tmp_path, monkeypatch):
    """File-backed SQLite so worker threads each get their own connection."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'portfolio.db'}")
    connection.reset_engine()
    Base.metadata.create_all(bind=connection.get_engine())
    yield connection.get_session_local()
    connection.reset_engine()


@pytest.fixture
def add_post(session_factory):
    """Insert a post with the given topic/hashtag names and return its id."""

    def _add_post(slug, content="", topics=(), hashtags=(), status=POST_STATUS_PUBLISHED, title=None):
        with session_factory() as db:
            topic_rows = [_get_or_create(db, Topic, name) for name in topics]
            hashtag_rows = [_get_or_create(db, Hashtag, name) for name in hashtags]
            post = Post(
                slug=slug,
                title=title or slug.replace("-", " ").title(),
                content=content,
                status=status,
                topics=topic_rows,
                hashtags=hashtag_rows,
            )
            db.add(post)
            db.commit()
            return post.id

    return _add_post


def _get_or_create(db, model, name):
    instance = db.query(model).filter(model.slug == name).first()
    if instance is None:
        instance = model(name=name, slug=name)
        db.add(instance)
        db.flush()
    return instance
