"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A mocked generative backend
- Dispatcher and action service wiring over the real use case registry
- Sample media payloads
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapters.gemini import GeminiBackend
from src.domain.dispatcher import PromptDispatcher
from src.domain.use_case import UseCaseRegistry
from src.flows import build_registry
from src.flows.actions import ActionService

# 8-byte PNG signature, base64 encoded
PNG_DATA_URI = "data:image/png;base64,iVBORw0KGgo="
PNG_BYTES = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def png_data_uri() -> str:
    return PNG_DATA_URI


@pytest.fixture
def mock_backend() -> MagicMock:
    """Backend double; set `invoke.return_value` or `side_effect` per test."""
    backend = MagicMock(spec=GeminiBackend)
    backend.invoke = AsyncMock()
    return backend


@pytest.fixture
def registry() -> UseCaseRegistry:
    return build_registry()


@pytest.fixture
def dispatcher(mock_backend: MagicMock, registry: UseCaseRegistry) -> PromptDispatcher:
    return PromptDispatcher(backend=mock_backend, registry=registry)


@pytest.fixture
def action_service(dispatcher: PromptDispatcher) -> ActionService:
    return ActionService(dispatcher=dispatcher)
