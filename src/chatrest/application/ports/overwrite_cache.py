"""Overwrite cache port - read-only view of known remote state."""

from typing import Protocol

from chatrest.domain.entities import PermissionOverwrite


class OverwriteCache(Protocol):
    """Port for looking up the last known overwrite of a subject in a channel."""

    def lookup(self, channel_id: int, subject_id: int) -> PermissionOverwrite | None: ...
