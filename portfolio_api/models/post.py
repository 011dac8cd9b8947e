import uuid
from sqlalchemy import Column, String, DateTime, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from portfolio_api.database.connection import Base

POST_STATUS_DRAFT = "DRAFT"
POST_STATUS_PUBLISHED = "PUBLISHED"


def generate_id() -> str:
    return str(uuid.uuid4())


class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, default=generate_id)
    title = Column(Text, nullable=False)
    slug = Column(String, nullable=False, unique=True)
    status = Column(String, nullable=False, default=POST_STATUS_DRAFT)

    # Body may contain /blog/<slug> links to other posts
    content = Column(Text, nullable=False)
    excerpt = Column(Text)
    read_time = Column(Integer)
    publish_date = Column(DateTime(timezone=True))

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    topics = relationship("Topic", secondary="post_topics", back_populates="posts")
    hashtags = relationship("Hashtag", secondary="post_hashtags", back_populates="posts")

    __table_args__ = (
        Index('ix_posts_status', 'status'),
    )


class PostTopic(Base):
    __tablename__ = "post_topics"

    post_id = Column(String, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    topic_id = Column(String, ForeignKey("topics.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        Index('ix_post_topics_topic_id', 'topic_id'),
    )


class PostHashtag(Base):
    __tablename__ = "post_hashtags"

    post_id = Column(String, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True)
    hashtag_id = Column(String, ForeignKey("hashtags.id", ondelete="CASCADE"), primary_key=True)

    __table_args__ = (
        Index('ix_post_hashtags_hashtag_id', 'hashtag_id'),
    )
