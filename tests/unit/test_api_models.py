"""
Unit tests for API request/response models.

Tests Pydantic model validation for the action endpoints.
"""

import pytest
from pydantic import ValidationError

from src.api.models import ActionSummary, ErrorResponse


class TestActionSummary:
    """Tests for ActionSummary model."""

    def test_valid_summary(self) -> None:
        summary = ActionSummary(name="pregnancy-progress", description="Week-by-week summary")
        assert summary.model_dump() == {
            "name": "pregnancy-progress",
            "description": "Week-by-week summary",
        }

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ActionSummary(description="x")
        assert "name" in str(exc_info.value)


class TestErrorResponse:
    """Tests for ErrorResponse model."""

    def test_error_response(self) -> None:
        response = ErrorResponse(detail="Failed to get response from AI.")
        assert response.detail == "Failed to get response from AI."

    def test_detail_required(self) -> None:
        with pytest.raises(ValidationError):
            ErrorResponse()
