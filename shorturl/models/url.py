"""URL mapping data model.

This module defines the URLMapping model for storing short ID to URL
mappings in the database.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime, Index, Text, func
from sqlmodel import Field, SQLModel


class URLMapping(SQLModel, table=True):
    """
    A short ID and the original URL it redirects to.

    Rows are written once and never updated. The primary key on short_id
    is what guarantees uniqueness under concurrent writers.
    """

    __tablename__ = "urls"

    short_id: str = Field(
        primary_key=True,
        max_length=255,
        description="URL-safe identifier used in the short link path"
    )
    original_url: str = Field(
        sa_column=Column(Text, nullable=False),
        description="The original (long) URL to redirect to"
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), server_default=func.now()),
        description="Timestamp when this mapping was created"
    )

    __table_args__ = (
        Index("idx_urls_created_at", "created_at"),
    )
