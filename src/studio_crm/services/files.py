"""Services for the digital file archive."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from studio_crm.domain.files import DigitalFile
from studio_crm.errors import NotFoundError


class FileRepository(Protocol):
    """Persistence interface for file metadata."""

    def create_file(self, values: dict[str, object]) -> DigitalFile:
        """Insert file metadata and return it."""

    def list_files(  # noqa: PLR0913
        self,
        *,
        folder_name: str | None,
        file_type: str | None,
        client_id: UUID | None,
        session_id: UUID | None,
        search_term: str | None,
        is_public: bool | None,
        limit: int,
    ) -> list[DigitalFile]:
        """Return files, newest first."""

    def update_file(
        self, file_id: UUID, values: dict[str, object]
    ) -> DigitalFile | None:
        """Update file metadata, returning None when no row matched."""

    def delete_file(self, file_id: UUID) -> bool:
        """Delete file metadata, returning whether a row was removed."""


@dataclass
class FileService:
    """Application service for digital files."""

    repository: FileRepository

    def register_upload(self, values: dict[str, object]) -> DigitalFile:
        """Record metadata for an uploaded file."""
        return self.repository.create_file({"tags": [], **values})

    def list_files(  # noqa: PLR0913
        self,
        *,
        folder_name: str | None = None,
        file_type: str | None = None,
        client_id: UUID | None = None,
        session_id: UUID | None = None,
        search_term: str | None = None,
        is_public: bool | None = None,
        limit: int = 20,
    ) -> list[DigitalFile]:
        """Return files matching the filters."""
        return self.repository.list_files(
            folder_name=folder_name,
            file_type=file_type,
            client_id=client_id,
            session_id=session_id,
            search_term=search_term,
            is_public=is_public,
            limit=limit,
        )

    def update_file(self, file_id: UUID, values: dict[str, object]) -> DigitalFile:
        """Update file metadata."""
        digital_file = self.repository.update_file(file_id, values)
        if digital_file is None:
            raise NotFoundError(f"File not found: {file_id}")
        return digital_file

    def delete_file(self, file_id: UUID) -> None:
        """Remove file metadata."""
        if not self.repository.delete_file(file_id):
            raise NotFoundError(f"File not found: {file_id}")
