"""Image upload strategies for profile pictures and service photos."""

from __future__ import annotations

import contextlib
import logging
from typing import Protocol
from uuid import UUID, uuid4

from helptrix.core import NotOwner
from helptrix.models import UpdateServiceRequest
from helptrix.service_service import ServiceRepository

__all__ = [
    "StorageService",
    "UserRepository",
    "ImageUploadStrategy",
    "ProfileImageStrategy",
    "ServiceImageStrategy",
    "object_path",
]

logger = logging.getLogger(__name__)


class StorageService(Protocol):
    """Object storage holding uploaded files."""

    def upload_file(
        self, folder: str, owner_id: str, filename: str, data: bytes, content_type: str
    ) -> str: ...

    def delete_file(self, object_path: str) -> None: ...


class UserRepository(Protocol):
    """The part of user storage that deals with profile pictures."""

    def get_profile_picture(self, user_id: UUID) -> str: ...

    def update_profile_picture(self, user_id: UUID, url: str) -> None: ...


class ImageUploadStrategy(Protocol):
    """Uploads an image for one kind of owner and returns its public URL."""

    def upload(
        self,
        requester_id: UUID,
        owner_id: UUID,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> str: ...


def object_path(url: str, bucket_name: str) -> str:
    """Turn a public storage URL of *bucket_name* into the object's path."""
    prefix = f"https://storage.googleapis.com/{bucket_name}/"
    return url[len(prefix):] if url.startswith(prefix) else url


def _extension(filename: str) -> str:
    base = filename.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


class ProfileImageStrategy:
    """Replaces a user's profile picture; only the user may do so."""

    def __init__(self, storage: StorageService, user_repo: UserRepository, bucket_name: str) -> None:
        self.storage = storage
        self.user_repo = user_repo
        self.bucket_name = bucket_name

    def upload(
        self,
        requester_id: UUID,
        owner_id: UUID,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> str:
        if requester_id != owner_id:
            raise NotOwner()

        current_url = self.user_repo.get_profile_picture(owner_id)
        logger.debug(
            "profile upload: current=%r content_type=%r bucket=%r",
            current_url,
            content_type,
            self.bucket_name,
        )

        if current_url:
            self.storage.delete_file(object_path(current_url, self.bucket_name))

        try:
            new_url = self.storage.upload_file(
                "profile-images", str(owner_id), filename, data, content_type
            )
        except Exception:
            logger.exception("error uploading file")
            raise

        self.user_repo.update_profile_picture(owner_id, new_url)
        return new_url


class ServiceImageStrategy:
    """Adds a photo to a service owned by the requester."""

    def __init__(
        self, storage: StorageService, service_repo: ServiceRepository, bucket_name: str
    ) -> None:
        self.storage = storage
        self.service_repo = service_repo
        self.bucket_name = bucket_name

    def upload(
        self,
        requester_id: UUID,
        service_id: UUID,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> str:
        service = self.service_repo.get_by_id(service_id, requester_id)

        storage_filename = f"{uuid4()}{_extension(filename) or '.jpg'}"
        new_url = self.storage.upload_file(
            "service-images", str(service_id), storage_filename, data, content_type
        )

        photos = [*(service.photos or []), new_url]
        try:
            self.service_repo.update(service_id, requester_id, UpdateServiceRequest(photos=photos))
        except Exception:
            # Best-effort rollback of the orphaned object; the update error wins.
            with contextlib.suppress(Exception):
                self.storage.delete_file(object_path(new_url, self.bucket_name))
            raise

        return new_url