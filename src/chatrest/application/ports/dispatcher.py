"""Dispatcher port - rate-limited request execution."""

from typing import Protocol

from chatrest.application.dto.request import Request, Response


class Dispatcher(Protocol):
    """Port for sending requests to the remote API.

    Implementations own rate limiting, back-off and retries. They must not
    send when ``request.check`` returns False or ``request.deadline`` passed,
    and raise a ``DispatchError`` for any failed exchange.
    """

    async def execute(self, request: Request) -> Response: ...
