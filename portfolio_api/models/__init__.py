from portfolio_api.database.connection import Base
from portfolio_api.models.post import (
    Post,
    PostTopic,
    PostHashtag,
    POST_STATUS_DRAFT,
    POST_STATUS_PUBLISHED,
)
from portfolio_api.models.taxonomy import Topic, Hashtag, Technology

__all__ = [
    "Base",
    "Post",
    "PostTopic",
    "PostHashtag",
    "Topic",
    "Hashtag",
    "Technology",
    "POST_STATUS_DRAFT",
    "POST_STATUS_PUBLISHED",
]
