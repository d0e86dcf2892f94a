"""In-memory overwrite cache fed by gateway channel events."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from chatrest.domain.entities import PermissionOverwrite

logger = logging.getLogger(__name__)


class InMemoryOverwriteCache:
    """Last known overwrites per channel.

    Actions only read from it. ``apply_channel_update`` and
    ``remove_channel`` are driven by the gateway event stream.
    """

    def __init__(self) -> None:
        self._by_channel: dict[int, dict[int, PermissionOverwrite]] = {}

    def lookup(self, channel_id: int, subject_id: int) -> PermissionOverwrite | None:
        return self._by_channel.get(channel_id, {}).get(subject_id)

    def overwrites_for(self, channel_id: int) -> list[PermissionOverwrite]:
        return list(self._by_channel.get(channel_id, {}).values())

    def replace(self, channel_id: int, overwrites: Iterable[PermissionOverwrite]) -> None:
        self._by_channel[channel_id] = {o.subject_id: o for o in overwrites}

    def apply_channel_update(self, payload: Mapping[str, Any]) -> None:
        """Replace a channel's overwrites from a CHANNEL_CREATE/CHANNEL_UPDATE payload."""
        channel_id = int(payload["id"])
        overwrites = [
            PermissionOverwrite.from_payload(channel_id, data)
            for data in payload.get("permission_overwrites", [])
        ]
        self.replace(channel_id, overwrites)
        logger.debug("Cached %s overwrites for channel %s", len(overwrites), channel_id)

    def remove_channel(self, channel_id: int) -> None:
        self._by_channel.pop(channel_id, None)
