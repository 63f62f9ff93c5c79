"""
Domain exceptions - Semantic error types for prompt dispatch.

This module defines the error taxonomy of the dispatch pipeline. Definition
errors surface at import time when a use case is declared; dispatch errors
surface per call and are collapsed into ActionFailed at the action boundary.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import FieldIssue


class PromptError(Exception):
    """Base class for prompt dispatch domain errors."""

    pass


class DefinitionError(PromptError):
    """A schema, template or registry is malformed at definition time."""

    pass


class UseCaseNotFound(PromptError):
    """No use case is registered under the requested name."""

    pass


def _format_issues(issues: Sequence[FieldIssue]) -> str:
    return "; ".join(str(issue) for issue in issues)


class SchemaValidationError(PromptError):
    """Data does not match a declared schema."""

    def __init__(self, issues: Sequence[FieldIssue]) -> None:
        self.issues = tuple(issues)
        super().__init__(_format_issues(self.issues))

    @property
    def path(self) -> str:
        """Path of the first offending field."""
        return self.issues[0].path if self.issues else ""


class DispatchError(PromptError):
    """A single dispatch did not produce a validated response."""

    pass


class InputValidationError(DispatchError):
    """Caller-supplied request failed its request schema."""

    def __init__(self, use_case: str, issues: Sequence[FieldIssue]) -> None:
        self.use_case = use_case
        self.issues = tuple(issues)
        super().__init__(f"{use_case}: invalid request: {_format_issues(self.issues)}")


class BackendInvocationError(DispatchError):
    """Network failure, timeout or unusable reply from the generative backend."""

    pass


class OutputValidationError(DispatchError):
    """Backend replied, but the payload does not match the response schema."""

    def __init__(self, use_case: str, issues: Sequence[FieldIssue]) -> None:
        self.use_case = use_case
        self.issues = tuple(issues)
        super().__init__(f"{use_case}: invalid response: {_format_issues(self.issues)}")


class ActionFailed(PromptError):
    """User-facing failure raised by an action; the cause is chained."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
