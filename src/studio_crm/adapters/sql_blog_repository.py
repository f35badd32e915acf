"""SQL implementation for blog posts."""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import String, cast, delete, func, insert, or_, select, update

from studio_crm.adapters.database import (
    LIKE_ESCAPE,
    Database,
    contains_pattern,
    row_to,
    utcnow,
)
from studio_crm.adapters.sql_tables import blog_posts
from studio_crm.domain.blog import BlogPost, BlogStats
from studio_crm.services.blog import BlogRepository


def _parse_post(row: Mapping[str, Any]) -> BlogPost:
    return row_to(BlogPost, row, tags=list(row["tags"] or []))


def _tag_pattern(tag: str) -> str:
    encoded = (
        json.dumps(tag)
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{encoded}%"


@dataclass
class SqlBlogRepository(BlogRepository):
    """SQL-backed repository for blog posts."""

    database: Database

    def create_post(self, values: dict[str, object]) -> BlogPost:
        """Insert a post and return it."""
        now = utcnow()
        post_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(blog_posts).values(
                    id=post_id,
                    view_count=0,
                    **values,
                    created_at=now,
                    updated_at=now,
                )
            )
            row = connection.execute(
                select(blog_posts).where(blog_posts.c.id == post_id)
            ).mappings().one()
        return _parse_post(row)

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
        statement = (
            select(blog_posts)
            .order_by(blog_posts.c.created_at.desc(), blog_posts.c.id)
            .limit(limit)
        )
        if status:
            statement = statement.where(blog_posts.c.status == status)
        if featured is not None:
            statement = statement.where(blog_posts.c.featured == featured)
        if category:
            statement = statement.where(
                func.lower(blog_posts.c.category) == category.lower()
            )
        if search_term:
            pattern = contains_pattern(search_term)
            statement = statement.where(
                or_(
                    func.lower(blog_posts.c.title).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(blog_posts.c.content).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(blog_posts.c.excerpt).like(pattern, escape=LIKE_ESCAPE),
                )
            )
        if tags:
            tag_text = cast(blog_posts.c.tags, String)
            statement = statement.where(
                or_(
                    *(
                        tag_text.like(_tag_pattern(tag), escape=LIKE_ESCAPE)
                        for tag in tags
                    )
                )
            )
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [_parse_post(row) for row in rows]

    def update_post(self, post_id: UUID, values: dict[str, object]) -> BlogPost | None:
        """Update a post, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(blog_posts)
                .where(blog_posts.c.id == post_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                select(blog_posts).where(blog_posts.c.id == post_id)
            ).mappings().one()
        return _parse_post(row)

    def delete_post(self, post_id: UUID) -> BlogPost | None:
        """Delete a post, returning the removed row when it existed."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(blog_posts).where(blog_posts.c.id == post_id)
            ).mappings().first()
            result = connection.execute(
                delete(blog_posts).where(blog_posts.c.id == post_id)
            )
            if result.rowcount == 0 or row is None:
                return None
        return _parse_post(row)

    def stats(self) -> BlogStats:
        """Count posts by state."""
        status = blog_posts.c.status
        with self.database.transaction() as connection:
            row = connection.execute(
                select(
                    func.count().label("total"),
                    func.count().filter(status == "PUBLISHED").label("published"),
                    func.count().filter(status == "DRAFT").label("drafts"),
                    func.count().filter(status == "SCHEDULED").label("scheduled"),
                    func.count()
                    .filter(blog_posts.c.featured.is_(True))
                    .label("featured"),
                )
            ).mappings().one()
        return BlogStats(
            total=int(row["total"]),
            published=int(row["published"]),
            drafts=int(row["drafts"]),
            scheduled=int(row["scheduled"]),
            featured=int(row["featured"]),
        )
