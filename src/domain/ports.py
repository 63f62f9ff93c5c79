"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interface (port) that the domain requires from a
generative backend, together with the value objects that cross it.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .schema import Schema, split_data_uri


class DispatchState(str, Enum):
    """
    Dispatch state machine states.

    State Transitions (forward-only):
    - IDLE -> RENDERING (request accepted for dispatch)
    - RENDERING -> INVOKING (prompt rendered)
    - INVOKING -> VALIDATING (backend replied)
    - VALIDATING -> SUCCEEDED (response matches schema)

    Failure transitions:
    - RENDERING -> FAILED (request failed its schema)
    - INVOKING -> FAILED (network/backend error or timeout)
    - VALIDATING -> FAILED (response failed its schema)

    Terminal States:
    - SUCCEEDED
    - FAILED

    Note: a use-case fast path goes RENDERING -> VALIDATING without
    INVOKING, since the canned response is still checked.
    """

    IDLE = "IDLE"
    RENDERING = "RENDERING"
    INVOKING = "INVOKING"
    VALIDATING = "VALIDATING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class FailureKind(Enum):
    """
    Reason a dispatch ended in FAILED.

    All kinds collapse into a single user-visible failure at the action
    boundary; the kind is kept for logs and diagnostics.
    """

    INPUT_VALIDATION = "input_validation"
    BACKEND_INVOCATION = "backend_invocation"
    OUTPUT_VALIDATION = "output_validation"


@dataclass(frozen=True)
class MediaAttachment:
    """Binary attachment (e.g. an image) embedded in a prompt."""

    mime_type: str
    data: bytes

    @classmethod
    def from_data_uri(cls, uri: str) -> "MediaAttachment":
        """
        Build an attachment from a `data:<mime>;base64,<payload>` URI.

        Raises:
            ValueError: If the URI is not a decodable base64 data URI
        """
        decoded = split_data_uri(uri)
        if decoded is None:
            raise ValueError("not a base64 data URI")
        mime_type, data = decoded
        return cls(mime_type=mime_type, data=data)

    def __repr__(self) -> str:
        return f"MediaAttachment(mime_type={self.mime_type!r}, size={len(self.data)})"


@dataclass(frozen=True)
class RenderedPrompt:
    """
    Output of template rendering.

    `parts` keeps text and media in template order so a backend can
    interleave them; media never appears inside the text.
    """

    parts: tuple[str | MediaAttachment, ...]

    @property
    def text(self) -> str:
        return "".join(part for part in self.parts if isinstance(part, str))

    @property
    def attachments(self) -> tuple[MediaAttachment, ...]:
        return tuple(part for part in self.parts if isinstance(part, MediaAttachment))


class GenerativeBackend(Protocol):
    """Port interface for the external generative model."""

    async def invoke(
        self,
        prompt: RenderedPrompt,
        response_schema: Schema,
        *,
        timeout: float | None = None,
    ) -> Any:
        """
        Send a rendered prompt and return the decoded structured output.

        The backend is stateless across calls and applies no retries.

        Args:
            prompt: Rendered text parts and media attachments, in order
            response_schema: Expected shape, forwarded so the model can
                be constrained to emit matching structure
            timeout: Seconds to wait before giving up; None uses the
                backend's configured default

        Returns:
            Decoded JSON value (untrusted; validated by the dispatcher)

        Raises:
            BackendInvocationError: On transport failure, timeout, or a
                reply that cannot be decoded
        """
        ...
