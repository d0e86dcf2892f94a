"""Application ports - interfaces for external adapters."""

from chatrest.application.ports.authorization_context import AuthorizationContext
from chatrest.application.ports.dispatcher import Dispatcher
from chatrest.application.ports.overwrite_cache import OverwriteCache

__all__ = [
    "AuthorizationContext",
    "Dispatcher",
    "OverwriteCache",
]
