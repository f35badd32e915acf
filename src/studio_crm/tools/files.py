"""Digital file archive tools."""

from typing import Literal
from uuid import UUID

from pydantic import Field

from studio_crm.services.files import FileService
from studio_crm.tools.contract import Tool, ToolParameters, ToolResult, success

FileType = Literal["image", "document", "video", "audio", "other"]


class UploadFileParams(ToolParameters):
    folder_name: str = Field(min_length=1, max_length=255)
    file_name: str = Field(min_length=1, max_length=255)
    file_type: FileType
    file_size: int = Field(ge=1, description="Size in bytes")
    client_id: UUID | None = None
    session_id: UUID | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class ReadFilesParams(ToolParameters):
    folder_name: str | None = None
    file_type: FileType | None = None
    client_id: UUID | None = None
    session_id: UUID | None = None
    search_term: str | None = Field(
        default=None, description="Matches file name or description"
    )
    is_public: bool | None = None
    limit: int = Field(default=20, ge=1, le=100)


class UpdateFileParams(ToolParameters):
    file_id: UUID
    folder_name: str | None = Field(default=None, min_length=1, max_length=255)
    file_name: str | None = Field(default=None, min_length=1, max_length=255)
    file_type: FileType | None = None
    client_id: UUID | None = None
    session_id: UUID | None = None
    description: str | None = None
    tags: list[str] | None = None
    is_public: bool | None = None


class DeleteFileParams(ToolParameters):
    file_id: UUID


def file_tools(files: FileService) -> list[Tool]:
    """Build tools for the digital file archive."""

    async def upload_file(params: UploadFileParams) -> ToolResult:
        digital_file = files.register_upload(params.model_dump())
        return success(
            file_id=digital_file.id,
            file=digital_file,
            message=f"{digital_file.file_name} stored in {digital_file.folder_name}",
        )

    async def read_digital_files(params: ReadFilesParams) -> ToolResult:
        found = files.list_files(
            folder_name=params.folder_name,
            file_type=params.file_type,
            client_id=params.client_id,
            session_id=params.session_id,
            search_term=params.search_term,
            is_public=params.is_public,
            limit=params.limit,
        )
        return success(count=len(found), files=found)

    async def update_digital_file(params: UpdateFileParams) -> ToolResult:
        digital_file = files.update_file(params.file_id, params.changes("file_id"))
        return success(file=digital_file)

    async def delete_digital_file(params: DeleteFileParams) -> ToolResult:
        files.delete_file(params.file_id)
        return success(file_id=params.file_id, message="File deleted")

    return [
        Tool(
            name="upload_file",
            description="Record metadata for an uploaded file.",
            parameters=UploadFileParams,
            execute=upload_file,
        ),
        Tool(
            name="read_digital_files",
            description="List archived files by folder, type, client or session.",
            parameters=ReadFilesParams,
            execute=read_digital_files,
        ),
        Tool(
            name="update_digital_file",
            description="Rename, move, retag or republish a file.",
            parameters=UpdateFileParams,
            execute=update_digital_file,
        ),
        Tool(
            name="delete_digital_file",
            description="Remove a file from the archive.",
            parameters=DeleteFileParams,
            execute=delete_digital_file,
        ),
    ]
