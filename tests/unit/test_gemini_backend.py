"""
Unit tests for the Gemini backend adapter.

The google-genai client is mocked; tests verify the request sent to
`aio.models.generate_content` and how replies and errors are mapped.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, PropertyMock

import httpx
import pytest
from google.genai import errors, types

from src.adapters.gemini import BackendConfig, GeminiBackend, to_gemini_schema
from src.domain.exceptions import BackendInvocationError
from src.domain.ports import MediaAttachment, RenderedPrompt
from src.domain.schema import Schema, array, boolean, enum, number, obj, record, string

RESPONSE = Schema(
    enum("riskLevel", ("Low", "Medium", "High"), "Assessed risk."),
    number("confidence"),
    string("notes", required=False),
)

PROMPT = RenderedPrompt(
    parts=("Look at this: ", MediaAttachment("image/png", b"\x89PNG\r\n\x1a\n"), " then answer.")
)


def make_backend(reply_text: str | None = '{"ok": true}', **config) -> tuple[GeminiBackend, MagicMock]:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=reply_text))
    backend = GeminiBackend(BackendConfig(api_key="test-key", **config), client=client)
    return backend, client


class TestSchemaConversion:
    """Domain Schema -> google.genai types.Schema."""

    def test_object_with_required_fields(self) -> None:
        converted = to_gemini_schema(RESPONSE)

        assert converted.type == types.Type.OBJECT
        assert converted.required == ["riskLevel", "confidence"]
        assert converted.property_ordering == ["riskLevel", "confidence", "notes"]
        assert converted.properties["riskLevel"].enum == ["Low", "Medium", "High"]
        assert converted.properties["riskLevel"].description == "Assessed risk."
        assert converted.properties["confidence"].type == types.Type.NUMBER

    def test_nested_array_and_object(self) -> None:
        converted = to_gemini_schema(
            Schema(
                array("cycles", record(string("start"), string("end"))),
                obj("recipe", string("name"), boolean("vegan", required=False)),
            )
        )

        cycles = converted.properties["cycles"]
        assert cycles.type == types.Type.ARRAY
        assert cycles.items.type == types.Type.OBJECT
        assert cycles.items.required == ["start", "end"]
        recipe = converted.properties["recipe"]
        assert recipe.properties["vegan"].type == types.Type.BOOLEAN
        assert recipe.required == ["name"]


class TestInvoke:
    """GeminiBackend.invoke request contract."""

    def test_returns_decoded_json(self) -> None:
        backend, _ = make_backend('{"riskLevel": "Low", "confidence": 0.4}')

        result = asyncio.run(backend.invoke(PROMPT, RESPONSE))

        assert result == {"riskLevel": "Low", "confidence": 0.4}

    def test_sends_parts_in_order(self) -> None:
        backend, client = make_backend()

        asyncio.run(backend.invoke(PROMPT, RESPONSE))

        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        (content,) = kwargs["contents"]
        assert content.role == "user"
        assert [part.text for part in content.parts] == ["Look at this: ", None, " then answer."]
        assert content.parts[1].inline_data.mime_type == "image/png"
        assert content.parts[1].inline_data.data == b"\x89PNG\r\n\x1a\n"

    def test_requests_json_with_schema(self) -> None:
        backend, client = make_backend(temperature=0.2, model="gemini-2.5-flash")

        asyncio.run(backend.invoke(PROMPT, RESPONSE))

        kwargs = client.aio.models.generate_content.await_args.kwargs
        config = kwargs["config"]
        assert kwargs["model"] == "gemini-2.5-flash"
        assert config.response_mime_type == "application/json"
        assert config.response_schema == to_gemini_schema(RESPONSE)
        assert config.temperature == 0.2

    def test_fenced_json_is_accepted(self) -> None:
        backend, _ = make_backend('```json\n{"confidence": 1}\n```')

        assert asyncio.run(backend.invoke(PROMPT, RESPONSE)) == {"confidence": 1}

    def test_config_property(self) -> None:
        backend, _ = make_backend(timeout_seconds=5.0)
        assert backend.config.timeout_seconds == 5.0


class TestInvokeErrors:
    """Every backend problem surfaces as BackendInvocationError."""

    def test_empty_reply(self) -> None:
        backend, _ = make_backend(None)

        with pytest.raises(BackendInvocationError, match="empty"):
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

    def test_malformed_json(self) -> None:
        backend, _ = make_backend("I think the risk is low.")

        with pytest.raises(BackendInvocationError, match="malformed JSON"):
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

    def test_api_error(self) -> None:
        backend, client = make_backend()
        client.aio.models.generate_content.side_effect = errors.APIError(
            503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}}
        )

        with pytest.raises(BackendInvocationError, match="503") as exc_info:
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

        assert isinstance(exc_info.value.__cause__, errors.APIError)

    def test_transport_error(self) -> None:
        backend, client = make_backend()
        client.aio.models.generate_content.side_effect = httpx.ConnectError("refused")

        with pytest.raises(BackendInvocationError, match="transport"):
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

    def test_timeout(self) -> None:
        backend, client = make_backend()

        async def slow(**kwargs):
            await asyncio.sleep(1)

        client.aio.models.generate_content.side_effect = slow

        with pytest.raises(BackendInvocationError, match="timed out"):
            asyncio.run(backend.invoke(PROMPT, RESPONSE, timeout=0.01))

    def test_default_timeout_from_config(self) -> None:
        backend, client = make_backend(timeout_seconds=0.01)

        async def slow(**kwargs):
            await asyncio.sleep(1)

        client.aio.models.generate_content.side_effect = slow

        with pytest.raises(BackendInvocationError, match="0.0s"):
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

    def test_unreadable_response(self) -> None:
        """A body the SDK cannot parse is a backend failure, not a crash."""
        backend, client = make_backend()
        client.aio.models.generate_content.side_effect = errors.UnknownApiResponseError(
            "Failed to parse response as JSON. Raw response: <html>"
        )

        with pytest.raises(BackendInvocationError, match="unreadable") as exc_info:
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

        assert isinstance(exc_info.value.__cause__, errors.UnknownApiResponseError)

    def test_other_transport_error(self) -> None:
        """Errors from a non-httpx transport are wrapped too."""
        backend, client = make_backend()
        client.aio.models.generate_content.side_effect = ConnectionResetError("peer reset")

        with pytest.raises(BackendInvocationError, match="call failed") as exc_info:
            asyncio.run(backend.invoke(PROMPT, RESPONSE))

        assert isinstance(exc_info.value.__cause__, ConnectionResetError)

    def test_reply_text_error(self) -> None:
        """Reading the reply text can fail as well."""
        backend, client = make_backend()
        reply = MagicMock()
        type(reply).text = PropertyMock(side_effect=ValueError("no candidates"))
        client.aio.models.generate_content.return_value = reply

        with pytest.raises(BackendInvocationError, match="no candidates"):
            asyncio.run(backend.invoke(PROMPT, RESPONSE))
