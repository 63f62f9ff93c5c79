"""Gemini adapters - Google generative backend implementation."""

from .client import BackendConfig, GeminiBackend, build_gemini_client, to_gemini_schema

__all__ = ["BackendConfig", "GeminiBackend", "build_gemini_client", "to_gemini_schema"]
