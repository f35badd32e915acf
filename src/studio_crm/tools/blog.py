"""Blog publishing tools."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, HttpUrl

from studio_crm.services.blog import BlogService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

PostStatus = Literal["DRAFT", "PUBLISHED", "SCHEDULED"]

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CreateBlogPostParams(ToolParameters):
    title: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: str = Field(min_length=100)
    excerpt: str | None = None
    image_url: HttpUrl | None = None
    tags: list[str] = Field(default_factory=list)
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=320)
    status: PostStatus = "DRAFT"
    scheduled_for: datetime | None = None
    featured: bool = False
    category: str = Field(default="Photography", min_length=1, max_length=120)


class ReadBlogPostsParams(ToolParameters):
    status: PostStatus | None = None
    featured: bool | None = None
    category: str | None = None
    search_term: str | None = Field(
        default=None, description="Matches title, content or excerpt"
    )
    tags: list[str] | None = None
    limit: int = Field(default=10, ge=1, le=50)
    include_stats: bool = False


class UpdateBlogPostParams(ToolParameters):
    post_id: UUID
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(
        default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN
    )
    content: str | None = Field(default=None, min_length=100)
    excerpt: str | None = None
    image_url: HttpUrl | None = None
    tags: list[str] | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = Field(default=None, max_length=320)
    status: PostStatus | None = None
    scheduled_for: datetime | None = None
    featured: bool | None = None
    category: str | None = Field(default=None, min_length=1, max_length=120)


class DeleteBlogPostParams(ToolParameters):
    post_id: UUID
    reason: str = Field(min_length=1)


class PublishBlogPostParams(ToolParameters):
    post_id: UUID
    action: Literal["publish_now", "schedule", "unpublish"] = "publish_now"
    scheduled_for: datetime | None = None
    featured: bool | None = None


def _stored(values: dict[str, object]) -> dict[str, object]:
    if values.get("image_url") is not None:
        return {**values, "image_url": str(values["image_url"])}
    return values


def blog_tools(blog: BlogService) -> list[Tool]:
    """Build tools for blog content."""

    async def create_blog_post(params: CreateBlogPostParams) -> ToolResult:
        post = blog.create_post(_stored(params.model_dump(exclude_none=True)))
        return success(
            post_id=post.id,
            post=post,
            message=f"Blog post '{post.title}' created as {post.status}",
        )

    async def read_blog_posts(params: ReadBlogPostsParams) -> ToolResult:
        posts = blog.list_posts(
            status=params.status,
            featured=params.featured,
            category=params.category,
            search_term=params.search_term,
            tags=params.tags,
            limit=params.limit,
        )
        if params.include_stats:
            return success(count=len(posts), posts=posts, stats=blog.stats())
        return success(count=len(posts), posts=posts)

    async def update_blog_post(params: UpdateBlogPostParams) -> ToolResult:
        post = blog.update_post(params.post_id, _stored(params.changes("post_id")))
        return success(post=post, message=f"Blog post '{post.title}' updated")

    async def delete_blog_post(params: DeleteBlogPostParams) -> ToolResult:
        post = blog.delete_post(params.post_id)
        return success(
            post_id=post.id,
            reason=params.reason,
            message=f"Blog post '{post.title}' deleted",
        )

    async def publish_blog_post(params: PublishBlogPostParams) -> ToolResult:
        post = blog.publish(
            params.post_id,
            action=params.action,
            scheduled_for=params.scheduled_for,
            featured=params.featured,
        )
        return success(post=post, message=f"Blog post '{post.title}' is {post.status}")

    return [
        Tool(
            name="create_blog_post",
            description="Write a new blog post as draft, published or scheduled.",
            parameters=CreateBlogPostParams,
            execute=create_blog_post,
        ),
        Tool(
            name="read_blog_posts",
            description="List or search blog posts, optionally with post statistics.",
            parameters=ReadBlogPostsParams,
            execute=read_blog_posts,
        ),
        Tool(
            name="update_blog_post",
            description="Edit an existing blog post.",
            parameters=UpdateBlogPostParams,
            execute=update_blog_post,
        ),
        Tool(
            name="delete_blog_post",
            description="Permanently delete a blog post.",
            parameters=DeleteBlogPostParams,
            execute=delete_blog_post,
        ),
        Tool(
            name="publish_blog_post",
            description="Publish a post now, schedule it or return it to draft.",
            parameters=PublishBlogPostParams,
            execute=publish_blog_post,
        ),
    ]
