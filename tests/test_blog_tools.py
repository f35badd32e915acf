"""Tests for blog tools."""

from uuid import uuid4

from studio_crm.services.blog import BlogService
from studio_crm.tools.blog import blog_tools
from studio_crm.tools.registry import ToolRegistry
from tests.conftest import LONG_CONTENT, SpyBlogRepository, run_tool


def _create_post(registry, **overrides: object) -> dict[str, object]:
    parameters: dict[str, object] = {
        "title": "Test",
        "slug": "test",
        "content": LONG_CONTENT,
        **overrides,
    }
    return run_tool(registry, "create_blog_post", **parameters)


def test_create_then_read_blog_post(registry) -> None:
    created = _create_post(registry)

    assert created["success"] is True
    post_id = created["post_id"]

    result = run_tool(registry, "read_blog_posts", search_term="Test")

    assert result["success"] is True
    assert result["count"] == 1
    assert result["posts"][0]["id"] == post_id
    assert result["posts"][0]["title"] == "Test"


def test_create_blog_post_applies_defaults(registry) -> None:
    post = _create_post(registry)["post"]

    assert post["status"] == "DRAFT"
    assert post["category"] == "Photography"
    assert post["meta_title"] == "Test"
    assert post["tags"] == []
    assert post["featured"] is False
    assert post["published_at"] is None


def test_empty_title_is_rejected(registry) -> None:
    result = run_tool(
        registry, "create_blog_post", title="", slug="x", content="..."
    )

    assert result["success"] is False
    assert result["error_kind"] == "validation"
    assert "title" in result["error"]


def test_validation_failure_never_reaches_storage() -> None:
    repository = SpyBlogRepository()
    registry = ToolRegistry(blog_tools(BlogService(repository)))

    run_tool(registry, "create_blog_post", title="", slug="x", content="...")
    run_tool(registry, "read_blog_posts", limit=0)
    run_tool(registry, "delete_blog_post", post_id="not-a-uuid", reason="cleanup")

    assert repository.calls == []


def test_duplicate_slug_is_a_storage_error(registry) -> None:
    _create_post(registry)

    result = _create_post(registry, title="Another")

    assert result["success"] is False
    assert result["error_kind"] == "storage"
    assert "UNIQUE" not in result["error"]
    assert "blog_posts" not in result["error"]


def test_scheduled_post_requires_a_date(registry) -> None:
    result = _create_post(registry, status="SCHEDULED")

    assert result["success"] is False
    assert result["error"].startswith("scheduled_for: ")


def test_read_blog_posts_filters_by_tag_and_reports_stats(registry) -> None:
    _create_post(registry, tags=["family", "studio"], status="PUBLISHED")
    _create_post(registry, title="Newborn tips", slug="newborn-tips", tags=["newborn"])

    result = run_tool(registry, "read_blog_posts", tags=["newborn"], include_stats=True)

    assert [post["slug"] for post in result["posts"]] == ["newborn-tips"]
    assert result["stats"] == {
        "total": 2,
        "published": 1,
        "drafts": 1,
        "scheduled": 0,
        "featured": 0,
    }


def test_publish_and_unpublish(registry) -> None:
    post_id = _create_post(registry)["post_id"]

    published = run_tool(
        registry, "publish_blog_post", post_id=post_id, featured=True
    )
    unpublished = run_tool(
        registry, "publish_blog_post", post_id=post_id, action="unpublish"
    )

    assert published["post"]["status"] == "PUBLISHED"
    assert published["post"]["published_at"] is not None
    assert published["post"]["featured"] is True
    assert unpublished["post"]["status"] == "DRAFT"
    assert unpublished["post"]["published_at"] is None


def test_update_and_delete_blog_post(registry) -> None:
    post_id = _create_post(registry)["post_id"]

    updated = run_tool(
        registry, "update_blog_post", post_id=post_id, excerpt="Short summary"
    )
    deleted = run_tool(
        registry, "delete_blog_post", post_id=post_id, reason="Outdated"
    )
    missing = run_tool(
        registry, "delete_blog_post", post_id=post_id, reason="Outdated"
    )

    assert updated["post"]["excerpt"] == "Short summary"
    assert deleted["success"] is True
    assert missing["error_kind"] == "not_found"


def test_update_unknown_post_is_not_found(registry) -> None:
    result = run_tool(
        registry, "update_blog_post", post_id=str(uuid4()), title="Renamed"
    )

    assert result["error_kind"] == "not_found"


def test_repeated_reads_return_the_same_result(registry) -> None:
    _create_post(registry)
    _create_post(registry, title="Second", slug="second", featured=True)

    first = run_tool(registry, "read_blog_posts", include_stats=True)
    second = run_tool(registry, "read_blog_posts", include_stats=True)

    assert first["count"] == 2
    assert first == second
