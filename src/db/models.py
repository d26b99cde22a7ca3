"""
SQLAlchemy ORM models for the feed sync service.

Models:
    Entry: A feed item that was registered with the ingestion service
    TimestampMixin: Provides automatic created_at/updated_at timestamps
"""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TimestampMixin:
    """
    Mixin to add automatic timestamp tracking to models.

    Both fields use database-level defaults (func.now()) for consistency.
    """

    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


class Entry(Base, TimestampMixin):
    """
    A feed entry that has been ingested.

    Rows are written once, right after the ingestion service accepted the
    entry's link, and never updated afterwards.

    Attributes:
        guid: Primary key, identifier of the item in the source feed (dedup key)
        link: URL of the item, the content sent for ingestion
        title: Item title from the feed
        task_id: Reference returned by the ingestion service
    """

    __tablename__ = "entries"

    guid = Column(String, primary_key=True)
    link = Column(Text, nullable=False)
    title = Column(Text, nullable=False, default="")
    task_id = Column(String, nullable=False)

    def __repr__(self):
        return f"<Entry(guid={self.guid}, task_id={self.task_id}, title='{self.title}')>"
