"""Request and response DTOs exchanged with a dispatcher."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from chatrest.domain.value_objects import CompiledRoute


@dataclass(frozen=True)
class Request:
    """Fully built request handed to a dispatcher."""

    route: CompiledRoute
    body: dict[str, Any] | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    deadline: float | None = None  # epoch seconds
    check: Callable[[], bool] | None = None

    @property
    def method(self) -> str:
        return self.route.method

    @property
    def path(self) -> str:
        return self.route.path

    def is_expired(self, now: float) -> bool:
        return self.deadline is not None and now >= self.deadline


@dataclass(frozen=True)
class Response:
    """Successful raw response."""

    status: int
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
