"""Application services."""

from chatrest.application.services.overwrite_service import OverwriteService

__all__ = ["OverwriteService"]
