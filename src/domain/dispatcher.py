"""
Prompt dispatcher - Dispatch state machine implementation.

This module contains the orchestration shared by every use case: validate
the request, render the prompt, invoke the generative backend, validate the
reply.

Dispatch State Machine (Forward-Only Transitions)
=================================================

    IDLE -> RENDERING -> INVOKING -> VALIDATING -> SUCCEEDED
                |            |            |
                +------------+------------+----> FAILED

- RENDERING -> FAILED: request failed its schema (backend never called)
- INVOKING -> FAILED: transport error, timeout, undecodable reply
- VALIDATING -> FAILED: reply failed the response schema
- RENDERING -> VALIDATING: use-case fast path produced a canned reply

A dispatch never returns a partial result and never caches one: two
identical requests are two independent backend calls.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .exceptions import (
    BackendInvocationError,
    DispatchError,
    InputValidationError,
    OutputValidationError,
    SchemaValidationError,
)
from .ports import DispatchState, FailureKind, GenerativeBackend
from .schema import validate
from .use_case import UseCase, UseCaseRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchFailure:
    """Structured failure: what went wrong and the underlying error."""

    kind: FailureKind
    message: str
    error: DispatchError


@dataclass(frozen=True)
class DispatchResult:
    """
    Outcome of a single dispatch.

    Exactly one of `value` and `failure` is set. Carries no backend state.
    """

    use_case: str
    state: DispatchState
    transitions: tuple[DispatchState, ...]
    value: dict[str, Any] | None = None
    failure: DispatchFailure | None = None
    fast_path: bool = False

    @property
    def ok(self) -> bool:
        return self.state is DispatchState.SUCCEEDED

    def unwrap(self) -> dict[str, Any]:
        """
        Return the validated response.

        Raises:
            DispatchError: The underlying error if the dispatch failed
        """
        if self.failure is not None:
            raise self.failure.error
        assert self.value is not None
        return self.value


@dataclass
class _Trace:
    """Per-dispatch state tracker; never shared between dispatches."""

    use_case: str
    transitions: list[DispatchState] = field(default_factory=lambda: [DispatchState.IDLE])

    @property
    def state(self) -> DispatchState:
        return self.transitions[-1]

    def advance(self, state: DispatchState) -> None:
        logger.debug("[DISPATCH] %s: %s -> %s", self.use_case, self.state.value, state.value)
        self.transitions.append(state)

    def succeed(self, value: dict[str, Any], *, fast_path: bool = False) -> DispatchResult:
        self.advance(DispatchState.SUCCEEDED)
        logger.info("[DISPATCH] %s succeeded%s", self.use_case, " (fast path)" if fast_path else "")
        return DispatchResult(
            use_case=self.use_case,
            state=DispatchState.SUCCEEDED,
            transitions=tuple(self.transitions),
            value=value,
            fast_path=fast_path,
        )

    def fail(self, kind: FailureKind, error: DispatchError) -> DispatchResult:
        self.advance(DispatchState.FAILED)
        logger.warning("[DISPATCH] %s failed (%s): %s", self.use_case, kind.value, error)
        return DispatchResult(
            use_case=self.use_case,
            state=DispatchState.FAILED,
            transitions=tuple(self.transitions),
            failure=DispatchFailure(kind=kind, message=str(error), error=error),
        )


@dataclass
class PromptDispatcher:
    """
    Domain service running use cases against a generative backend.

    Holds no mutable state of its own, so one instance serves any number
    of concurrent dispatches.
    """

    backend: GenerativeBackend
    registry: UseCaseRegistry

    async def dispatch(
        self,
        use_case: str | UseCase,
        request: Mapping[str, Any],
        *,
        timeout: float | None = None,
    ) -> DispatchResult:
        """
        Run one use case for one request.

        Args:
            use_case: Registered use case name, or the UseCase itself
            request: Caller payload, checked against the request schema
            timeout: Per-call backend timeout in seconds; None uses the
                backend's configured default

        Returns:
            DispatchResult in state SUCCEEDED or FAILED

        Raises:
            UseCaseNotFound: If `use_case` names nothing in the registry
        """
        definition = self.registry.get(use_case) if isinstance(use_case, str) else use_case
        trace = _Trace(definition.name)

        trace.advance(DispatchState.RENDERING)
        try:
            validated = validate(definition.request, request)
        except SchemaValidationError as e:
            return trace.fail(
                FailureKind.INPUT_VALIDATION, InputValidationError(definition.name, e.issues)
            )

        if definition.fast_path is not None:
            canned = definition.fast_path(validated)
            if canned is not None:
                trace.advance(DispatchState.VALIDATING)
                return self._accept(definition, trace, canned, fast_path=True)

        prompt = definition.template.render(validated)

        trace.advance(DispatchState.INVOKING)
        try:
            raw = await self.backend.invoke(prompt, definition.response, timeout=timeout)
        except BackendInvocationError as e:
            return trace.fail(FailureKind.BACKEND_INVOCATION, e)

        trace.advance(DispatchState.VALIDATING)
        return self._accept(definition, trace, raw)

    def _accept(
        self, definition: UseCase, trace: _Trace, raw: Any, *, fast_path: bool = False
    ) -> DispatchResult:
        try:
            value = validate(definition.response, raw)
        except SchemaValidationError as e:
            return trace.fail(
                FailureKind.OUTPUT_VALIDATION, OutputValidationError(definition.name, e.issues)
            )
        return trace.succeed(value, fast_path=fast_path)
