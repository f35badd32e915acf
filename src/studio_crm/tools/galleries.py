"""Gallery tools."""

from uuid import UUID

from pydantic import Field, HttpUrl

from studio_crm.services.galleries import GalleryService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CreateGalleryParams(ToolParameters):
    title: str = Field(min_length=1, max_length=255)
    client_id: UUID | None = None
    description: str | None = None
    is_public: bool = True
    is_password_protected: bool = False
    password: str | None = Field(default=None, min_length=4)
    slug: str | None = Field(default=None, max_length=255, pattern=SLUG_PATTERN)


class AddImageParams(ToolParameters):
    gallery_id: UUID
    filename: str = Field(min_length=1, max_length=255)
    url: HttpUrl
    title: str | None = None
    description: str | None = None
    sort_order: int = Field(default=0, ge=0)


class ReadGalleriesParams(ToolParameters):
    client_id: UUID | None = None
    is_public: bool | None = None
    limit: int = Field(default=20, ge=1, le=100)


class UpdateGalleryParams(ToolParameters):
    gallery_id: UUID
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    client_id: UUID | None = None
    is_public: bool | None = None
    is_password_protected: bool | None = None
    password: str | None = Field(default=None, min_length=4)
    slug: str | None = Field(default=None, max_length=255, pattern=SLUG_PATTERN)


def gallery_tools(galleries: GalleryService) -> list[Tool]:
    """Build tools for client galleries."""

    async def create_gallery(params: CreateGalleryParams) -> ToolResult:
        gallery = galleries.create_gallery(params.model_dump(exclude_none=True))
        return success(
            gallery_id=gallery.id,
            gallery=gallery,
            message=f"Gallery '{gallery.title}' created at /{gallery.slug}",
        )

    async def add_image_to_gallery(params: AddImageParams) -> ToolResult:
        values = params.model_dump(exclude={"gallery_id"})
        image = galleries.add_image(
            params.gallery_id, {**values, "url": str(params.url)}
        )
        return success(image_id=image.id, image=image)

    async def read_galleries(params: ReadGalleriesParams) -> ToolResult:
        found = galleries.list_galleries(
            client_id=params.client_id, is_public=params.is_public, limit=params.limit
        )
        return success(count=len(found), galleries=found)

    async def update_gallery(params: UpdateGalleryParams) -> ToolResult:
        gallery = galleries.update_gallery(
            params.gallery_id, params.changes("gallery_id")
        )
        return success(gallery=gallery, message=f"Gallery '{gallery.title}' updated")

    return [
        Tool(
            name="create_gallery",
            description="Create a client gallery, optionally password protected.",
            parameters=CreateGalleryParams,
            execute=create_gallery,
        ),
        Tool(
            name="add_image_to_gallery",
            description="Attach an uploaded image to a gallery.",
            parameters=AddImageParams,
            execute=add_image_to_gallery,
        ),
        Tool(
            name="read_galleries",
            description="List galleries with their image counts.",
            parameters=ReadGalleriesParams,
            execute=read_galleries,
        ),
        Tool(
            name="update_gallery",
            description="Change gallery settings such as visibility or password.",
            parameters=UpdateGalleryParams,
            execute=update_gallery,
        ),
    ]
