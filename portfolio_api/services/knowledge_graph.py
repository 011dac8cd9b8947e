"""
Knowledge graph service - related post recommendations.

Posts are related through shared topics, shared hashtags, or a direct
/blog/<slug> link from the source body to the candidate. See
relatedness.py for the weights.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from portfolio_api.config import settings
from portfolio_api.database.connection import get_session_local
from portfolio_api.services.content_store import ContentStore
from portfolio_api.services.relatedness import (
    ContentRelations,
    extract_linked_slugs,
    score_candidate,
)

logger = logging.getLogger(__name__)


class RelatedContentError(Exception):
    """Raised when related posts cannot be loaded from the content store."""


@dataclass(frozen=True)
class RelatedCandidate:
    id: str
    slug: str
    title: str
    relations: ContentRelations


@dataclass(frozen=True)
class RelatedItem:
    id: str
    slug: str
    title: str
    score: int


class RelatedContentService:
    def __init__(self, session_factory=None, max_workers: Optional[int] = None):
        self.session_factory = session_factory or get_session_local()
        self.max_workers = max_workers or settings.related_max_workers

    def get_related_items(self, slug: str, limit: int = 5) -> List[RelatedItem]:
        """
        Rank published posts related to the post at ``slug``.

        Returns at most ``limit`` items ordered by score (highest first),
        ties broken by slug. An unknown or unpublished slug yields [].

        Raises:
            ValueError: limit is not a positive integer
            RelatedContentError: the content store could not be read
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit!r}")

        try:
            with self.session_factory() as db:
                store = ContentStore(db)
                source = store.get_published_post_by_slug(slug)
                if source is None:
                    logger.warning(f"Related items requested for unknown post '{slug}'")
                    return []

                source_id = source.id
                source_relations = store.get_relations(source_id)
                linked_slugs = extract_linked_slugs(source.content)
                posts = self._find_candidate_posts(store, source_id, source_relations)

            # Source session is released before the fan-out opens one session per candidate
            candidates = self._load_candidates(posts)
        except SQLAlchemyError as e:
            logger.error(f"Error getting related items for post '{slug}': {str(e)}")
            raise RelatedContentError(f"Failed to get related items for '{slug}'") from e

        if not candidates:
            logger.debug(f"No related candidates for post '{slug}'")
            return []

        scored = []
        for candidate in candidates:
            score = score_candidate(source_relations, candidate.relations, candidate.slug, linked_slugs)
            if score > 0:
                scored.append(RelatedItem(id=candidate.id, slug=candidate.slug, title=candidate.title, score=score))

        scored.sort(key=lambda item: (-item.score, item.slug))
        logger.info(f"Found {len(scored)} related items for post '{slug}', returning up to {limit}")
        return scored[:limit]

    def get_related_items_by_id(self, post_id: str, limit: int = 5) -> List[RelatedItem]:
        """Same as get_related_items, keyed by post id."""
        try:
            with self.session_factory() as db:
                slug = ContentStore(db).get_published_slug_by_id(post_id)
        except SQLAlchemyError as e:
            logger.error(f"Error resolving post id '{post_id}': {str(e)}")
            raise RelatedContentError(f"Failed to get related items for id '{post_id}'") from e

        if slug is None:
            logger.warning(f"Related items requested for unknown post id '{post_id}'")
            return []

        return self.get_related_items(slug, limit)

    def _find_candidate_posts(
        self, store: ContentStore, source_id: str, source_relations: ContentRelations
    ) -> List[Tuple[str, str, str]]:
        """(id, slug, title) of published posts sharing a topic or hashtag with the source."""
        if source_relations.is_empty:
            return []

        candidate_ids = store.find_post_ids_sharing_topics(source_relations.topic_ids, source_id)
        candidate_ids |= store.find_post_ids_sharing_hashtags(source_relations.hashtag_ids, source_id)
        if not candidate_ids:
            return []

        return [(post.id, post.slug, post.title) for post in store.get_published_posts(candidate_ids)]

    def _load_candidates(self, posts: List[Tuple[str, str, str]]) -> List[RelatedCandidate]:
        relations = self._load_candidate_relations(post_id for post_id, _, _ in posts)

        return [
            RelatedCandidate(id=post_id, slug=slug, title=title, relations=relations[post_id])
            for post_id, slug, title in posts
        ]

    def _load_candidate_relations(self, post_ids: Iterable[str]) -> Dict[str, ContentRelations]:
        post_ids = list(post_ids)
        if not post_ids:
            return {}

        # Each lookup runs on its own session; sessions are not thread-safe
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(post_ids))) as executor:
            results = executor.map(self._fetch_relations, post_ids)
            return dict(zip(post_ids, results))

    def _fetch_relations(self, post_id: str) -> ContentRelations:
        with self.session_factory() as db:
            return ContentStore(db).get_relations(post_id)
