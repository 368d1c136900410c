"""Proposals, reviews, services and image uploads for a business/helper marketplace."""

__version__ = "0.1.0"

__all__ = [
    "core",
    "models",
    "proposal_service",
    "review_service",
    "service_service",
    "strategies",
    "uploader_service",
    "web",
    "proposal_controller",
    "review_controller",
    "service_controller",
    "uploader_controller",
]