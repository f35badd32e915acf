"""Domain models for blog content."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class BlogPost:
    """A blog article in any publishing state."""

    id: UUID
    title: str
    slug: str
    content: str
    excerpt: str | None
    image_url: str | None
    tags: list[str]
    meta_title: str | None
    meta_description: str | None
    status: str
    category: str
    featured: bool
    view_count: int
    published_at: datetime | None
    scheduled_for: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BlogStats:
    """Post counts by state."""

    total: int
    published: int
    drafts: int
    scheduled: int
    featured: int
