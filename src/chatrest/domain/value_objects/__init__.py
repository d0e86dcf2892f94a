"""Domain value objects."""

from chatrest.domain.value_objects.channel_type import ChannelType
from chatrest.domain.value_objects.overwrite_type import OverwriteType
from chatrest.domain.value_objects.permission import (
    ALL_PERMISSIONS,
    Permission,
    check_raw,
    inherited,
)
from chatrest.domain.value_objects.route import CompiledRoute, Route, Routes

__all__ = [
    "ALL_PERMISSIONS",
    "ChannelType",
    "CompiledRoute",
    "OverwriteType",
    "Permission",
    "Route",
    "Routes",
    "check_raw",
    "inherited",
]
