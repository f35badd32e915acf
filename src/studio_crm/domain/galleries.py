"""Domain models for client galleries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Gallery:
    """A collection of delivered images."""

    id: UUID
    title: str
    slug: str
    description: str | None
    client_id: UUID | None
    is_public: bool
    is_password_protected: bool
    created_at: datetime
    updated_at: datetime
    image_count: int = 0


@dataclass(frozen=True)
class GalleryImage:
    """An image inside a gallery."""

    id: UUID
    gallery_id: UUID
    filename: str
    url: str
    title: str | None
    description: str | None
    sort_order: int
    created_at: datetime
