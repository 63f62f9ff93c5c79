"""
Use case definitions and registry.

A use case is the immutable triple (request schema, response schema, prompt
template) plus a stable name. Use cases are declared at import time and
collected into a registry that cannot change afterwards.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .exceptions import DefinitionError, UseCaseNotFound
from .schema import Schema
from .template import PromptTemplate

DEFAULT_FAILURE_MESSAGE = "Failed to get response from AI."

# Receives the validated request; returns a canned response or None.
FastPath = Callable[[Mapping[str, Any]], Mapping[str, Any] | None]


@dataclass(frozen=True)
class UseCase:
    """One AI-backed feature."""

    name: str
    request: Schema
    response: Schema
    template: PromptTemplate
    description: str = ""
    failure_message: str = DEFAULT_FAILURE_MESSAGE
    fast_path: FastPath | None = None

    @classmethod
    def define(
        cls,
        name: str,
        *,
        request: Schema,
        response: Schema,
        prompt: str,
        description: str = "",
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
        fast_path: FastPath | None = None,
    ) -> "UseCase":
        """
        Declare a use case, compiling its prompt against the request schema.

        Raises:
            DefinitionError: If the name is empty or the prompt references
                fields the request schema does not declare
        """
        if not name:
            raise DefinitionError("use case name must not be empty")
        try:
            template = PromptTemplate.compile(prompt, request)
        except DefinitionError as e:
            raise DefinitionError(f"{name}: {e}") from e
        return cls(
            name=name,
            request=request,
            response=response,
            template=template,
            description=description,
            failure_message=failure_message,
            fast_path=fast_path,
        )


class UseCaseRegistry:
    """Read-only name -> UseCase lookup, fixed at construction."""

    def __init__(self, use_cases: Iterable[UseCase]) -> None:
        by_name: dict[str, UseCase] = {}
        for use_case in use_cases:
            if use_case.name in by_name:
                raise DefinitionError(f"duplicate use case name {use_case.name!r}")
            by_name[use_case.name] = use_case
        self._by_name = MappingProxyType(by_name)

    def get(self, name: str) -> UseCase:
        """
        Look up a use case by name.

        Raises:
            UseCaseNotFound: If nothing is registered under `name`
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UseCaseNotFound(name) from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[UseCase]:
        return iter(self._by_name.values())

    def __len__(self) -> int:
        return len(self._by_name)
