"""Services for writing and publishing blog posts."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from studio_crm.domain.blog import BlogPost, BlogStats
from studio_crm.errors import NotFoundError, ValidationError


class BlogRepository(Protocol):
    """Persistence interface for blog posts."""

    def create_post(self, values: dict[str, object]) -> BlogPost:
        """Insert a post and return it."""

    def list_posts(  # noqa: PLR0913
        self,
        *,
        status: str | None,
        featured: bool | None,
        category: str | None,
        search_term: str | None,
        tags: list[str] | None,
        limit: int,
    ) -> list[BlogPost]:
        """Return posts, newest first."""

    def update_post(self, post_id: UUID, values: dict[str, object]) -> BlogPost | None:
        """Update a post, returning None when no row matched."""

    def delete_post(self, post_id: UUID) -> BlogPost | None:
        """Delete a post, returning the removed row when it existed."""

    def stats(self) -> BlogStats:
        """Count posts by state."""


@dataclass
class BlogService:
    """Application service for blog content."""

    repository: BlogRepository

    def create_post(self, values: dict[str, object]) -> BlogPost:
        """Create a post, filling SEO defaults and publication timestamps."""
        payload = {**values}
        payload.setdefault("meta_title", payload["title"])
        payload.setdefault("tags", [])
        payload.update(_publication_fields(payload))
        return self.repository.create_post(payload)

    def list_posts(  # noqa: PLR0913
        self,
        *,
        status: str | None = None,
        featured: bool | None = None,
        category: str | None = None,
        search_term: str | None = None,
        tags: list[str] | None = None,
        limit: int = 10,
    ) -> list[BlogPost]:
        """Return posts matching the filters."""
        return self.repository.list_posts(
            status=status,
            featured=featured,
            category=category,
            search_term=search_term,
            tags=tags,
            limit=limit,
        )

    def stats(self) -> BlogStats:
        """Return post counts."""
        return self.repository.stats()

    def update_post(self, post_id: UUID, values: dict[str, object]) -> BlogPost:
        """Update a post."""
        payload = {**values}
        if "status" in payload:
            payload.update(_publication_fields(payload))
        post = self.repository.update_post(post_id, payload)
        if post is None:
            raise NotFoundError(f"Blog post not found: {post_id}")
        return post

    def delete_post(self, post_id: UUID) -> BlogPost:
        """Delete a post."""
        post = self.repository.delete_post(post_id)
        if post is None:
            raise NotFoundError(f"Blog post not found: {post_id}")
        return post

    def publish(
        self,
        post_id: UUID,
        *,
        action: str,
        scheduled_for: datetime | None = None,
        featured: bool | None = None,
    ) -> BlogPost:
        """Publish now, schedule or unpublish a post."""
        if action == "publish_now":
            values: dict[str, object] = {"status": "PUBLISHED"}
        elif action == "schedule":
            values = {"status": "SCHEDULED", "scheduled_for": scheduled_for}
        else:
            values = {"status": "DRAFT", "published_at": None, "scheduled_for": None}
        values.update(_publication_fields(values))
        if featured is not None:
            values["featured"] = featured
        post = self.repository.update_post(post_id, values)
        if post is None:
            raise NotFoundError(f"Blog post not found: {post_id}")
        return post


def _publication_fields(values: dict[str, object]) -> dict[str, object]:
    status = values.get("status")
    if status == "PUBLISHED":
        return {"published_at": values.get("published_at") or datetime.now(tz=UTC)}
    if status == "SCHEDULED" and values.get("scheduled_for") is None:
        raise ValidationError(
            "scheduled_for", "Required when the post is scheduled"
        )
    return {}
