"""SQL implementation for digital file metadata."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, func, insert, or_, select, update

from studio_crm.adapters.database import (
    LIKE_ESCAPE,
    Database,
    contains_pattern,
    row_to,
    utcnow,
)
from studio_crm.adapters.sql_tables import digital_files
from studio_crm.domain.files import DigitalFile
from studio_crm.services.files import FileRepository


def _parse_file(row: Mapping[str, Any]) -> DigitalFile:
    return row_to(DigitalFile, row, tags=list(row["tags"] or []))


@dataclass
class SqlFileRepository(FileRepository):
    """SQL-backed repository for digital files."""

    database: Database

    def create_file(self, values: dict[str, object]) -> DigitalFile:
        """Insert file metadata and return it."""
        now = utcnow()
        file_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(digital_files).values(
                    id=file_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                select(digital_files).where(digital_files.c.id == file_id)
            ).mappings().one()
        return _parse_file(row)

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
        statement = (
            select(digital_files)
            .order_by(digital_files.c.created_at.desc())
            .limit(limit)
        )
        if folder_name:
            statement = statement.where(digital_files.c.folder_name == folder_name)
        if file_type:
            statement = statement.where(digital_files.c.file_type == file_type)
        if client_id is not None:
            statement = statement.where(digital_files.c.client_id == client_id)
        if session_id is not None:
            statement = statement.where(digital_files.c.session_id == session_id)
        if is_public is not None:
            statement = statement.where(digital_files.c.is_public == is_public)
        if search_term:
            pattern = contains_pattern(search_term)
            statement = statement.where(
                or_(
                    func.lower(digital_files.c.file_name).like(
                        pattern, escape=LIKE_ESCAPE
                    ),
                    func.lower(digital_files.c.description).like(
                        pattern, escape=LIKE_ESCAPE
                    ),
                )
            )
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [_parse_file(row) for row in rows]

    def update_file(
        self, file_id: UUID, values: dict[str, object]
    ) -> DigitalFile | None:
        """Update file metadata, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(digital_files)
                .where(digital_files.c.id == file_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                select(digital_files).where(digital_files.c.id == file_id)
            ).mappings().one()
        return _parse_file(row)

    def delete_file(self, file_id: UUID) -> bool:
        """Delete file metadata, returning whether a row was removed."""
        with self.database.transaction() as connection:
            result = connection.execute(
                delete(digital_files).where(digital_files.c.id == file_id)
            )
        return result.rowcount > 0
