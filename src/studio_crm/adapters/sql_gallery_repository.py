"""SQL implementation for galleries and gallery images."""

from dataclasses import dataclass
from uuid import UUID, uuid4

from sqlalchemy import func, insert, select, update

from studio_crm.adapters.database import Database, row_to, utcnow
from studio_crm.adapters.sql_tables import galleries, gallery_images
from studio_crm.domain.galleries import Gallery, GalleryImage
from studio_crm.services.galleries import GalleryRepository

_IMAGE_COUNT = (
    select(func.count())
    .where(gallery_images.c.gallery_id == galleries.c.id)
    .scalar_subquery()
    .label("image_count")
)


@dataclass
class SqlGalleryRepository(GalleryRepository):
    """SQL-backed repository for galleries."""

    database: Database

    def create_gallery(self, values: dict[str, object]) -> Gallery:
        """Insert a gallery and return it."""
        now = utcnow()
        gallery_id = uuid4()
        with self.database.transaction() as connection:
            connection.execute(
                insert(galleries).values(
                    id=gallery_id, **values, created_at=now, updated_at=now
                )
            )
            row = connection.execute(
                select(galleries, _IMAGE_COUNT).where(galleries.c.id == gallery_id)
            ).mappings().one()
        return row_to(Gallery, row)

    def update_gallery(
        self, gallery_id: UUID, values: dict[str, object]
    ) -> Gallery | None:
        """Update a gallery, returning None when no row matched."""
        with self.database.transaction() as connection:
            result = connection.execute(
                update(galleries)
                .where(galleries.c.id == gallery_id)
                .values(**values, updated_at=utcnow())
            )
            if result.rowcount == 0:
                return None
            row = connection.execute(
                select(galleries, _IMAGE_COUNT).where(galleries.c.id == gallery_id)
            ).mappings().one()
        return row_to(Gallery, row)

    def list_galleries(
        self, *, client_id: UUID | None, is_public: bool | None, limit: int
    ) -> list[Gallery]:
        """Return galleries with image counts, newest first."""
        statement = (
            select(galleries, _IMAGE_COUNT)
            .order_by(galleries.c.created_at.desc())
            .limit(limit)
        )
        if client_id is not None:
            statement = statement.where(galleries.c.client_id == client_id)
        if is_public is not None:
            statement = statement.where(galleries.c.is_public == is_public)
        with self.database.transaction() as connection:
            rows = connection.execute(statement).mappings().all()
        return [row_to(Gallery, row) for row in rows]

    def add_image(
        self, gallery_id: UUID, values: dict[str, object]
    ) -> GalleryImage | None:
        """Insert an image, returning None when the gallery does not exist."""
        now = utcnow()
        image_id = uuid4()
        with self.database.transaction() as connection:
            touched = connection.execute(
                update(galleries)
                .where(galleries.c.id == gallery_id)
                .values(updated_at=now)
            )
            if touched.rowcount == 0:
                return None
            connection.execute(
                insert(gallery_images).values(
                    id=image_id,
                    gallery_id=gallery_id,
                    **values,
                    created_at=now,
                    updated_at=now,
                )
            )
            row = connection.execute(
                select(gallery_images).where(gallery_images.c.id == image_id)
            ).mappings().one()
        return row_to(GalleryImage, row)

    def get_gallery(self, gallery_id: UUID) -> Gallery | None:
        """Return a gallery by id."""
        with self.database.transaction() as connection:
            row = connection.execute(
                select(galleries, _IMAGE_COUNT).where(galleries.c.id == gallery_id)
            ).mappings().first()
        return row_to(Gallery, row) if row else None
