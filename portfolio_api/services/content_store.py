"""
Read-only queries against posts and their topic/hashtag associations.
"""

from typing import Iterable, List, Optional, Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio_api.models import Post, PostTopic, PostHashtag, POST_STATUS_PUBLISHED
from portfolio_api.services.relatedness import ContentRelations


class ContentStore:
    def __init__(self, db: Session):
        self.db = db

    def get_published_post_by_slug(self, slug: str) -> Optional[Post]:
        return self.db.execute(
            select(Post).where(Post.slug == slug, Post.status == POST_STATUS_PUBLISHED)
        ).scalar_one_or_none()

    def get_published_slug_by_id(self, post_id: str) -> Optional[str]:
        return self.db.execute(
            select(Post.slug).where(Post.id == post_id, Post.status == POST_STATUS_PUBLISHED)
        ).scalar_one_or_none()

    def get_topic_ids(self, post_id: str) -> Set[str]:
        rows = self.db.execute(select(PostTopic.topic_id).where(PostTopic.post_id == post_id))
        return set(rows.scalars())

    def get_hashtag_ids(self, post_id: str) -> Set[str]:
        rows = self.db.execute(select(PostHashtag.hashtag_id).where(PostHashtag.post_id == post_id))
        return set(rows.scalars())

    def get_relations(self, post_id: str) -> ContentRelations:
        return ContentRelations.from_ids(self.get_topic_ids(post_id), self.get_hashtag_ids(post_id))

    def find_post_ids_sharing_topics(self, topic_ids: Iterable[str], exclude_post_id: str) -> Set[str]:
        topic_ids = list(topic_ids)
        if not topic_ids:
            return set()
        rows = self.db.execute(
            select(PostTopic.post_id)
            .where(PostTopic.topic_id.in_(topic_ids), PostTopic.post_id != exclude_post_id)
            .distinct()
        )
        return set(rows.scalars())

    def find_post_ids_sharing_hashtags(self, hashtag_ids: Iterable[str], exclude_post_id: str) -> Set[str]:
        hashtag_ids = list(hashtag_ids)
        if not hashtag_ids:
            return set()
        rows = self.db.execute(
            select(PostHashtag.post_id)
            .where(PostHashtag.hashtag_id.in_(hashtag_ids), PostHashtag.post_id != exclude_post_id)
            .distinct()
        )
        return set(rows.scalars())

    def get_published_posts(self, post_ids: Iterable[str]) -> List[Post]:
        post_ids = list(post_ids)
        if not post_ids:
            return []
        rows = self.db.execute(
            select(Post).where(Post.id.in_(post_ids), Post.status == POST_STATUS_PUBLISHED)
        )
        return list(rows.scalars())
