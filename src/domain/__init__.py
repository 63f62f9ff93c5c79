"""
Domain layer - Pure dispatch logic with zero framework imports.

This package contains the structured prompt-and-validate mechanism: schema
descriptors and validation, the template mini-language, use case
definitions, and the dispatch state machine. It defines its own port
interface for the generative backend, ensuring true hexagonal architecture
decoupling.
"""

from .dispatcher import DispatchFailure, DispatchResult, PromptDispatcher
from .exceptions import (
    ActionFailed,
    BackendInvocationError,
    DefinitionError,
    DispatchError,
    InputValidationError,
    OutputValidationError,
    PromptError,
    SchemaValidationError,
    UseCaseNotFound,
)
from .ports import DispatchState, FailureKind, GenerativeBackend, MediaAttachment, RenderedPrompt
from .schema import FieldIssue, FieldKind, FieldSpec, Schema, validate
from .template import PromptTemplate, render
from .use_case import DEFAULT_FAILURE_MESSAGE, UseCase, UseCaseRegistry

__all__ = [
    "DEFAULT_FAILURE_MESSAGE",
    "ActionFailed",
    "BackendInvocationError",
    "DefinitionError",
    "DispatchError",
    "DispatchFailure",
    "DispatchResult",
    "DispatchState",
    "FailureKind",
    "FieldIssue",
    "FieldKind",
    "FieldSpec",
    "GenerativeBackend",
    "InputValidationError",
    "MediaAttachment",
    "OutputValidationError",
    "PromptDispatcher",
    "PromptError",
    "PromptTemplate",
    "RenderedPrompt",
    "Schema",
    "SchemaValidationError",
    "UseCase",
    "UseCaseNotFound",
    "UseCaseRegistry",
    "render",
    "validate",
]
