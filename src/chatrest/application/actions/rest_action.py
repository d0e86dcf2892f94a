"""Generic REST action - configure, check, build, dispatch, translate, reset."""

import asyncio
import logging
import time
from collections.abc import Callable
from enum import StrEnum
from typing import Any, Generic, Self, TypeVar
from urllib.parse import quote

from chatrest.application.authorization import AuthorizationGate, Check
from chatrest.application.dto.request import Request, Response
from chatrest.application.ports import Dispatcher
from chatrest.domain.exceptions import RequestCancelled, RequestTimeout, ValidationError
from chatrest.domain.value_objects import CompiledRoute

logger = logging.getLogger(__name__)

T = TypeVar("T")

AUDIT_LOG_REASON_HEADER = "X-Audit-Log-Reason"
MAX_REASON_LENGTH = 512

_in_flight: set["asyncio.Task[Any]"] = set()


class ActionState(StrEnum):
    """Lifecycle of a single send."""

    CONFIGURING = "configuring"
    SENDING = "sending"
    COMPLETED = "completed"
    FAILED = "failed"


class RestAction(Generic[T]):
    """Reusable request descriptor.

    Subclasses accumulate edits through fluent setters and implement
    ``_build_body`` and ``_handle_success``. Each send evaluates the
    authorization gate and builds the body synchronously on the caller's
    context; only the dispatcher call is awaited. Once the send settles,
    successfully or not, ``_reset`` clears the edit state so the instance can
    be reused.

    An instance is meant for one owner and one send at a time. Starting a
    second send before the first settles is not supported.
    """

    def __init__(self, dispatcher: Dispatcher, route: CompiledRoute) -> None:
        self._dispatcher = dispatcher
        self._route = route
        self._state = ActionState.CONFIGURING
        self._last_outcome: ActionState | None = None
        self._gate: AuthorizationGate | None = None
        self._check: Check | None = None
        self._timeout: float | None = None
        self._deadline: float | None = None

    # --- configuration ---

    @property
    def route(self) -> CompiledRoute:
        return self._route

    @property
    def state(self) -> ActionState:
        return self._state

    @property
    def last_outcome(self) -> ActionState | None:
        """COMPLETED or FAILED for the most recent settled send, None before any."""
        return self._last_outcome

    @property
    def gate(self) -> AuthorizationGate:
        """Gate evaluated on the next send, including the caller's check."""
        gate = self._gate if self._gate is not None else self._default_gate()
        if self._check is not None:
            gate = gate.then(self._check)
        return gate

    def set_check(self, check: Check | None) -> Self:
        """Extra predicate ANDed after the built-in checks; False cancels the send."""
        self._check = check
        return self

    def set_gate(self, gate: AuthorizationGate | None) -> Self:
        """Replace the built-in checks; None restores them."""
        self._gate = gate
        return self

    def timeout(self, seconds: float) -> Self:
        """Fail with RequestTimeout if a send does not settle within ``seconds``."""
        if seconds <= 0:
            raise ValidationError("Timeout must be positive")
        self._timeout = float(seconds)
        self._deadline = None
        return self

    def deadline(self, timestamp: float) -> Self:
        """Fail with RequestTimeout if a send has not settled by epoch ``timestamp``."""
        self._deadline = float(timestamp)
        self._timeout = None
        return self

    # --- hooks ---

    def _default_gate(self) -> AuthorizationGate:
        return AuthorizationGate()

    def _build_body(self) -> dict[str, Any] | None:
        return None

    def _build_headers(self) -> dict[str, str]:
        return {}

    def _handle_success(self, response: Response, request: Request) -> T:
        raise NotImplementedError

    def _reset(self) -> None:
        pass

    # --- sending ---

    def submit(self) -> "asyncio.Future[T]":
        """Start a send and return its future without waiting.

        Gate failures and cancellations settle the returned future
        immediately; the dispatcher is not called.
        """
        loop = asyncio.get_running_loop()
        try:
            request = self._prepare()
        except Exception as exc:
            logger.debug("%s %s rejected before dispatch: %s", self._route.method, self._route.path, exc)
            self._settle(ActionState.FAILED)
            future: asyncio.Future[T] = loop.create_future()
            future.set_exception(exc)
            return future
        task = loop.create_task(self._run(request))
        # The loop only keeps weak references to tasks.
        _in_flight.add(task)
        task.add_done_callback(_in_flight.discard)
        return task

    async def execute(self) -> T:
        """Send and wait for the translated result."""
        return await self.submit()

    def queue(
        self,
        success: Callable[[T], Any] | None = None,
        failure: Callable[[BaseException], Any] | None = None,
    ) -> "asyncio.Future[T]":
        """Send and deliver the outcome to callbacks once it settles."""
        future = self.submit()

        def _deliver(fut: "asyncio.Future[T]") -> None:
            if fut.cancelled():
                error: BaseException | None = RequestCancelled("Request was cancelled")
            else:
                error = fut.exception()
            if error is None:
                if success is not None:
                    success(fut.result())
            elif failure is not None:
                failure(error)
            else:
                logger.error(
                    "%s %s failed: %s", self._route.method, self._route.path, error,
                    exc_info=error,
                )

        future.add_done_callback(_deliver)
        return future

    def _prepare(self) -> Request:
        self._state = ActionState.SENDING
        deadline = self._effective_deadline()
        gate = self.gate
        if not gate.evaluate():
            raise RequestCancelled(f"Check rejected {self._route.method} {self._route.path}")
        return Request(
            route=self._route,
            body=self._build_body(),
            headers=self._build_headers(),
            deadline=deadline,
            check=gate.evaluate,
        )

    async def _run(self, request: Request) -> T:
        try:
            response = await self._dispatch(request)
            result = self._handle_success(response, request)
        except BaseException:
            self._settle(ActionState.FAILED)
            raise
        self._settle(ActionState.COMPLETED)
        return result

    async def _dispatch(self, request: Request) -> Response:
        remaining = None
        if request.deadline is not None:
            remaining = request.deadline - time.time()
            if remaining <= 0:
                raise RequestTimeout(f"Deadline passed before sending {request.method} {request.path}")
        logger.debug("Dispatching %s %s", request.method, request.path)
        try:
            async with asyncio.timeout(remaining):
                return await self._dispatcher.execute(request)
        except TimeoutError as exc:
            raise RequestTimeout(f"{request.method} {request.path} timed out") from exc

    def _effective_deadline(self) -> float | None:
        if self._timeout is not None:
            return time.time() + self._timeout
        return self._deadline

    def _settle(self, outcome: ActionState) -> None:
        self._reset()
        self._last_outcome = outcome
        self._state = ActionState.CONFIGURING
        logger.debug("%s %s settled: %s", self._route.method, self._route.path, outcome)


class AuditableRestAction(RestAction[T]):
    """REST action that can attach a reason to the guild audit log."""

    def __init__(self, dispatcher: Dispatcher, route: CompiledRoute) -> None:
        super().__init__(dispatcher, route)
        self._reason: str | None = None

    @property
    def audit_reason(self) -> str | None:
        return self._reason

    def reason(self, text: str | None) -> Self:
        """Audit log reason for the next send; cleared once it settles."""
        if text is not None and len(text) > MAX_REASON_LENGTH:
            raise ValidationError(f"Reason may not be longer than {MAX_REASON_LENGTH} characters")
        self._reason = text or None
        return self

    def _build_headers(self) -> dict[str, str]:
        headers = super()._build_headers()
        if self._reason:
            headers[AUDIT_LOG_REASON_HEADER] = quote(self._reason, safe="/ ")
        return headers

    def _reset(self) -> None:
        super()._reset()
        self._reason = None

