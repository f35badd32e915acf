"""Services for client galleries."""

import re
import secrets
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import bcrypt

from studio_crm.domain.galleries import Gallery, GalleryImage
from studio_crm.errors import NotFoundError, ValidationError

_NON_SLUG = re.compile(r"[^a-z0-9]+")


class GalleryRepository(Protocol):
    """Persistence interface for galleries."""

    def create_gallery(self, values: dict[str, object]) -> Gallery:
        """Insert a gallery and return it."""

    def update_gallery(
        self, gallery_id: UUID, values: dict[str, object]
    ) -> Gallery | None:
        """Update a gallery, returning None when no row matched."""

    def list_galleries(
        self, *, client_id: UUID | None, is_public: bool | None, limit: int
    ) -> list[Gallery]:
        """Return galleries with image counts, newest first."""

    def add_image(
        self, gallery_id: UUID, values: dict[str, object]
    ) -> GalleryImage | None:
        """Insert an image, returning None when the gallery does not exist."""

    def get_gallery(self, gallery_id: UUID) -> Gallery | None:
        """Return a gallery by id."""


@dataclass
class GalleryService:
    """Application service for galleries."""

    repository: GalleryRepository

    def create_gallery(self, values: dict[str, object]) -> Gallery:
        """Create a gallery, generating a slug when none is given."""
        payload = _with_password_hash(values)
        if not payload.get("slug"):
            payload["slug"] = f"{slugify(str(payload['title']))}-{secrets.token_hex(3)}"
        return self.repository.create_gallery(payload)

    def update_gallery(self, gallery_id: UUID, values: dict[str, object]) -> Gallery:
        """Update gallery settings, keeping an existing password unless replaced."""
        protected = False
        if values.get("is_password_protected") and not values.get("password"):
            current = self.repository.get_gallery(gallery_id)
            if current is None:
                raise NotFoundError(f"Gallery not found: {gallery_id}")
            protected = current.is_password_protected
        gallery = self.repository.update_gallery(
            gallery_id, _with_password_hash(values, has_password=protected)
        )
        if gallery is None:
            raise NotFoundError(f"Gallery not found: {gallery_id}")
        return gallery

    def list_galleries(
        self,
        *,
        client_id: UUID | None = None,
        is_public: bool | None = None,
        limit: int = 20,
    ) -> list[Gallery]:
        """Return galleries for a client or all galleries."""
        return self.repository.list_galleries(
            client_id=client_id, is_public=is_public, limit=limit
        )

    def add_image(self, gallery_id: UUID, values: dict[str, object]) -> GalleryImage:
        """Attach an image to a gallery."""
        image = self.repository.add_image(gallery_id, values)
        if image is None:
            raise NotFoundError(f"Gallery not found: {gallery_id}")
        return image


def slugify(text: str) -> str:
    """Return a URL-safe slug for a title."""
    slug = _NON_SLUG.sub("-", text.lower()).strip("-")
    return slug or "gallery"


def hash_password(plain: str) -> str:
    """Hash a gallery password with bcrypt."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _with_password_hash(
    values: dict[str, object], *, has_password: bool = False
) -> dict[str, object]:
    payload = {key: value for key, value in values.items() if key != "password"}
    password = values.get("password")
    if payload.get("is_password_protected") and not password and not has_password:
        raise ValidationError("password", "Required for a password protected gallery")
    if password:
        payload["password_hash"] = hash_password(str(password))
        payload.setdefault("is_password_protected", True)
    if payload.get("is_password_protected") is False:
        payload["password_hash"] = None
    return payload
