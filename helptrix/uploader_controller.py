"""HTTP handler for image uploads."""

from __future__ import annotations

import logging
from http import HTTPStatus
from uuid import UUID

from helptrix.core import InvalidImageType, NotOwner, ServiceNotFound, UserNotFound
from helptrix.uploader_service import UploaderService
from helptrix.web import Request, Response, error_response

__all__ = ["UploaderController"]

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"profile-images", "service-images"})
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024


def _parse_uuid(text: str | None) -> UUID | None:
    try:
        return UUID(text)
    except (ValueError, TypeError, AttributeError):
        return None


class UploaderController:
    """Validates an uploaded image and hands it to the uploader service."""

    def __init__(self, service: UploaderService) -> None:
        self.service = service

    def upload(self, request: Request) -> Response:
        image_type = request.params.get("image-type", "")
        if image_type not in ALLOWED_IMAGE_TYPES:
            return error_response(HTTPStatus.BAD_REQUEST, "invalid image type")

        target_id = _parse_uuid(request.params.get("id"))
        if target_id is None:
            return error_response(HTTPStatus.BAD_REQUEST, "invalid id")

        requester_id = _parse_uuid(request.payload.user_id)
        if requester_id is None:
            return error_response(HTTPStatus.BAD_REQUEST, "invalid requester id")

        image = request.files.get("image")
        if image is None:
            return error_response(HTTPStatus.BAD_REQUEST, "image file is required")

        if image.size > MAX_FILE_SIZE_BYTES:
            return error_response(HTTPStatus.BAD_REQUEST, "image file exceeds 5MB limit")

        if image.content_type not in ALLOWED_CONTENT_TYPES:
            return error_response(HTTPStatus.BAD_REQUEST, "unsupported image content type")

        try:
            url = self.service.upload(
                image_type,
                requester_id,
                target_id,
                image.filename,
                image.data,
                image.content_type,
            )
        except NotOwner as exc:
            return error_response(HTTPStatus.FORBIDDEN, str(exc))
        except (UserNotFound, ServiceNotFound) as exc:
            return error_response(HTTPStatus.NOT_FOUND, str(exc))
        except InvalidImageType as exc:
            return error_response(HTTPStatus.BAD_REQUEST, str(exc))
        except Exception:
            logger.exception("uploading image failed")
            return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "internal server error")

        return Response(int(HTTPStatus.OK), {"url": url})