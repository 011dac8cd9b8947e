"""
Seed a small demo content graph so the related-posts endpoint has data.

Usage:
    ENVIRONMENT=development python scripts/seed_content.py
"""

import logging
import sys

from sqlalchemy import select

from portfolio_api.database.connection import get_engine, get_session_local
from portfolio_api.models import (
    Base,
    Hashtag,
    Post,
    Technology,
    Topic,
    POST_STATUS_DRAFT,
    POST_STATUS_PUBLISHED,
)

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s", stream=sys.stdout)
logger = logging.getLogger(__name__)

TOPICS = {
    "backend": "Backend",
    "databases": "Databases",
    "devops": "DevOps",
}

HASHTAGS = {
    "python": "#python",
    "postgres": "#postgres",
    "docker": "#docker",
}

TECHNOLOGIES = {
    "fastapi": "FastAPI",
    "sqlalchemy": "SQLAlchemy",
}

POSTS = [
    {
        "slug": "building-a-fastapi-service",
        "title": "Building a FastAPI Service",
        "content": "Start with the schema, see [indexes](/blog/postgres-indexing-basics).",
        "topics": ["backend"],
        "hashtags": ["python"],
        "status": POST_STATUS_PUBLISHED,
    },
    {
        "slug": "postgres-indexing-basics",
        "title": "Postgres Indexing Basics",
        "content": "B-tree indexes cover most lookups.",
        "topics": ["databases", "backend"],
        "hashtags": ["postgres"],
        "status": POST_STATUS_PUBLISHED,
    },
    {
        "slug": "shipping-with-docker",
        "title": "Shipping with Docker",
        "content": 'Containerise the API from <a href="/blog/building-a-fastapi-service">the last post</a>.',
        "topics": ["devops"],
        "hashtags": ["docker", "python"],
        "status": POST_STATUS_PUBLISHED,
    },
    {
        "slug": "unfinished-notes",
        "title": "Unfinished Notes",
        "content": "Draft.",
        "topics": ["backend"],
        "hashtags": ["python"],
        "status": POST_STATUS_DRAFT,
    },
]


def _get_or_create(db, model, slug: str, name: str):
    instance = db.execute(select(model).where(model.slug == slug)).scalar_one_or_none()
    if instance is None:
        instance = model(slug=slug, name=name)
        db.add(instance)
    return instance


def seed() -> None:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)

    SessionLocal = get_session_local()
    with SessionLocal() as db:
        topics = {slug: _get_or_create(db, Topic, slug, name) for slug, name in TOPICS.items()}
        hashtags = {slug: _get_or_create(db, Hashtag, slug, name) for slug, name in HASHTAGS.items()}
        for slug, name in TECHNOLOGIES.items():
            _get_or_create(db, Technology, slug, name)

        created = 0
        for data in POSTS:
            if db.execute(select(Post).where(Post.slug == data["slug"])).scalar_one_or_none():
                logger.info(f"Post already exists: {data['slug']}")
                continue
            post = Post(
                slug=data["slug"],
                title=data["title"],
                content=data["content"],
                status=data["status"],
                topics=[topics[t] for t in data["topics"]],
                hashtags=[hashtags[h] for h in data["hashtags"]],
            )
            db.add(post)
            created += 1

        db.commit()
        logger.info(f"Seeded {created} posts, {len(topics)} topics, {len(hashtags)} hashtags")


if __name__ == "__main__":
    try:
        seed()
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)
