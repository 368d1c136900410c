"""Dispatches image uploads to the strategy registered for each image type."""

from __future__ import annotations

from collections.abc import Mapping
from uuid import UUID

from helptrix.core import InvalidImageType
from helptrix.strategies import ImageUploadStrategy

__all__ = ["UploaderService"]


class UploaderService:
    """Routes an upload to the strategy for its image type."""

    def __init__(self, strategies: Mapping[str, ImageUploadStrategy]) -> None:
        self.strategies = dict(strategies)

    def upload(
        self,
        image_type: str,
        requester_id: UUID,
        owner_id: UUID,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> str:
        try:
            strategy = self.strategies[image_type]
        except KeyError:
            raise InvalidImageType() from None
        return strategy.upload(requester_id, owner_id, filename, data, content_type)