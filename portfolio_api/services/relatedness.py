"""
Relatedness scoring between blog posts.

Pure functions only; everything that touches the database lives in
knowledge_graph.py.
"""

import re
from dataclasses import dataclass, field
from typing import AbstractSet, FrozenSet, Iterable, Optional, Set


@dataclass(frozen=True)
class RelationWeights:
    link: int
    topic: int
    technology: int
    hashtag: int


# technology is reserved: there is no post-technology association to score yet
RELATION_WEIGHTS = RelationWeights(link=4, topic=3, technology=2, hashtag=1)

# /blog/<slug>, href="/blog/<slug>" and [text](/blog/<slug>)
_BLOG_LINK_RE = re.compile(r"""(?:/blog/|href=["']/blog/|\]\(/blog/)([a-z0-9-]+)""", re.IGNORECASE)


@dataclass(frozen=True)
class ContentRelations:
    """Topic and hashtag identifiers attached to a post."""

    topic_ids: FrozenSet[str] = field(default_factory=frozenset)
    hashtag_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_ids(cls, topic_ids: Iterable[str], hashtag_ids: Iterable[str]) -> "ContentRelations":
        return cls(topic_ids=frozenset(topic_ids), hashtag_ids=frozenset(hashtag_ids))

    @property
    def is_empty(self) -> bool:
        return not self.topic_ids and not self.hashtag_ids


def extract_linked_slugs(content: Optional[str]) -> Set[str]:
    """
    Collect the slugs of blog posts referenced from a post body.

    Matching is case-insensitive and slugs are returned lower-cased,
    so ``/Blog/Foo`` and ``href="/blog/foo"`` both yield ``foo``.
    """
    if not content:
        return set()
    return {match.group(1).lower() for match in _BLOG_LINK_RE.finditer(content)}


def score_candidate(
    source: ContentRelations,
    candidate: ContentRelations,
    candidate_slug: str,
    linked_slugs: AbstractSet[str],
    weights: RelationWeights = RELATION_WEIGHTS,
) -> int:
    """Weighted relatedness of ``candidate`` as seen from ``source``."""
    shared_topics = len(source.topic_ids & candidate.topic_ids)
    shared_hashtags = len(source.hashtag_ids & candidate.hashtag_ids)

    score = shared_topics * weights.topic
    score += shared_hashtags * weights.hashtag
    if candidate_slug in linked_slugs:
        score += weights.link
    return score
