from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from portfolio_api.database.connection import Base
from portfolio_api.models.post import generate_id


class Topic(Base):
    __tablename__ = "topics"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)
    description = Column(Text)

    posts = relationship("Post", secondary="post_topics", back_populates="topics")


class Hashtag(Base):
    __tablename__ = "hashtags"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    posts = relationship("Post", secondary="post_hashtags", back_populates="hashtags")


class Technology(Base):
    """Technology catalogue. Posts are not associated with technologies yet."""

    __tablename__ = "technologies"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=False, unique=True)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
