"""
Gemini backend adapter - Implements GenerativeBackend protocol.

This module sends rendered prompts to Google Gemini through the
`google-genai` async client and decodes the JSON reply.

Behaviour:
- Text and media parts are sent in template order as one user turn.
- The response schema is forwarded as a Gemini `Schema` together with
  `response_mime_type="application/json"` to constrain the output.
- Every call is bounded by a timeout (per call, else the configured default).
- No retries: every failure of the call, including unparseable SDK
  responses, transport errors, timeouts, empty replies and undecodable JSON,
  surfaces as BackendInvocationError.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from src.domain.exceptions import BackendInvocationError
from src.domain.ports import MediaAttachment, RenderedPrompt
from src.domain.schema import FieldKind, FieldSpec, Schema

logger = logging.getLogger(__name__)

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)

_SCALAR_TYPES = {
    FieldKind.STRING: types.Type.STRING,
    FieldKind.NUMBER: types.Type.NUMBER,
    FieldKind.BOOLEAN: types.Type.BOOLEAN,
    FieldKind.ENUM: types.Type.STRING,
    FieldKind.MEDIA: types.Type.STRING,
}


@dataclass(frozen=True)
class BackendConfig:
    """Explicit backend configuration; no process-wide client state."""

    api_key: str
    model: str = "gemini-2.0-flash"
    timeout_seconds: float = 60.0
    temperature: float | None = None


def build_gemini_client(*, api_key: str) -> genai.Client:
    # An empty key lets the SDK fall back to GOOGLE_API_KEY / GEMINI_API_KEY.
    return genai.Client(api_key=api_key or None)


def _field_schema(spec: FieldSpec) -> types.Schema:
    description = spec.description or None
    if spec.kind is FieldKind.ARRAY:
        assert spec.items is not None
        return types.Schema(
            type=types.Type.ARRAY, items=_field_schema(spec.items), description=description
        )
    if spec.kind is FieldKind.OBJECT:
        assert spec.fields is not None
        schema = to_gemini_schema(spec.fields)
        schema.description = description
        return schema
    if spec.kind is FieldKind.ENUM:
        return types.Schema(
            type=types.Type.STRING, enum=list(spec.choices), description=description
        )
    return types.Schema(type=_SCALAR_TYPES[spec.kind], description=description)


def to_gemini_schema(schema: Schema) -> types.Schema:
    """Convert a domain Schema into a Gemini response schema."""
    return types.Schema(
        type=types.Type.OBJECT,
        properties={spec.name: _field_schema(spec) for spec in schema.fields},
        required=[spec.name for spec in schema.fields if spec.required],
        property_ordering=list(schema.names),
    )


def _to_part(part: str | MediaAttachment) -> types.Part:
    if isinstance(part, MediaAttachment):
        return types.Part.from_bytes(data=part.data, mime_type=part.mime_type)
    return types.Part.from_text(text=part)


def _decode_json(text: str) -> Any:
    """Decode the reply, tolerating a fenced ```json block."""
    stripped = text.strip()
    match = _JSON_FENCE_RE.search(stripped)
    if match:
        stripped = match.group(1).strip()
    return json.loads(stripped)


class GeminiBackend:
    """
    Implements GenerativeBackend protocol via google-genai.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stateless between calls; safe to share across concurrent dispatches.
    """

    def __init__(self, config: BackendConfig, client: genai.Client | None = None) -> None:
        """
        Initialize backend with explicit configuration.

        Args:
            config: Model, credentials, timeout and sampling settings
            client: Pre-built client (defaults to one built from config)
        """
        self._config = config
        self._client = client or build_gemini_client(api_key=config.api_key)

    @property
    def config(self) -> BackendConfig:
        return self._config

    async def invoke(
        self,
        prompt: RenderedPrompt,
        response_schema: Schema,
        *,
        timeout: float | None = None,
    ) -> Any:
        """
        Send the prompt to Gemini and return the decoded JSON reply.

        Args:
            prompt: Rendered text and media parts
            response_schema: Expected response shape
            timeout: Seconds before giving up (defaults to config)

        Returns:
            Decoded JSON value, unvalidated

        Raises:
            BackendInvocationError: On API error, timeout, empty or
                undecodable reply
        """
        limit = timeout if timeout is not None else self._config.timeout_seconds
        contents = [types.Content(role="user", parts=[_to_part(part) for part in prompt.parts])]
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=to_gemini_schema(response_schema),
            temperature=self._config.temperature,
        )

        logger.debug(
            "[GEMINI] model=%s parts=%d attachments=%d timeout=%.1fs",
            self._config.model,
            len(prompt.parts),
            len(prompt.attachments),
            limit,
        )

        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._config.model,
                    contents=contents,
                    config=config,
                ),
                timeout=limit,
            )
            text = response.text
        except asyncio.TimeoutError:
            raise BackendInvocationError(f"Gemini call timed out after {limit:.1f}s") from None
        except errors.APIError as e:
            raise BackendInvocationError(f"Gemini API error {e.code}: {e.message}") from e
        except errors.UnknownApiResponseError as e:
            raise BackendInvocationError(f"Gemini returned an unreadable response: {e}") from e
        except httpx.HTTPError as e:
            raise BackendInvocationError(f"Gemini transport error: {e!r}") from e
        except Exception as e:
            # aiohttp transport errors and anything else the SDK raises
            raise BackendInvocationError(f"Gemini call failed: {e!r}") from e

        if not text:
            raise BackendInvocationError("Gemini returned an empty response")

        try:
            return _decode_json(text)
        except json.JSONDecodeError as e:
            raise BackendInvocationError(f"Gemini returned malformed JSON: {e}") from e
