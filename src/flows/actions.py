"""
Action service - Client-callable entry points.

One method per use case. Every failure a caller can see is an ActionFailed
carrying the use case's fixed message; the real cause is logged and chained.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.domain.dispatcher import PromptDispatcher
from src.domain.exceptions import ActionFailed

from . import (
    baby_growth_analysis,
    baby_health_tracker,
    baby_nutrition_recipe,
    breast_cancer_analysis,
    hormonal_cycle_nutrition,
    mental_health_chatbot,
    occupational_disease_detection,
    period_predictions,
    pregnancy_progress,
    pregnancy_symptom_checker,
)

logger = logging.getLogger(__name__)


@dataclass
class ActionService:
    """Runs use cases and collapses their failures into ActionFailed."""

    dispatcher: PromptDispatcher

    async def run(
        self,
        name: str,
        payload: Mapping[str, Any],
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """
        Dispatch a use case by name.

        Args:
            name: Registered use case name
            payload: Request data for the use case
            timeout: Optional per-call backend timeout in seconds

        Returns:
            Validated response data

        Raises:
            UseCaseNotFound: If `name` is not registered
            ActionFailed: If the dispatch failed for any reason
        """
        use_case = self.dispatcher.registry.get(name)
        result = await self.dispatcher.dispatch(use_case, payload, timeout=timeout)
        if result.failure is not None:
            cause = result.failure.error
            logger.error(
                "[ACTION] %s failed: %s",
                name,
                result.failure.message,
                exc_info=(type(cause), cause, cause.__traceback__),
            )
            raise ActionFailed(use_case.failure_message) from cause
        return result.unwrap()

    async def predict_period(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(period_predictions.NAME, payload)

    async def get_hormonal_nutrition(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(hormonal_cycle_nutrition.NAME, payload)

    async def mental_health_chatbot(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(mental_health_chatbot.NAME, payload)

    async def baby_health_tracker(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(baby_health_tracker.NAME, payload)

    async def get_pregnancy_progress(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(pregnancy_progress.NAME, payload)

    async def breast_cancer_analysis(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(breast_cancer_analysis.NAME, payload)

    async def detect_occupational_disease(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(occupational_disease_detection.NAME, payload)

    async def get_baby_nutrition(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(baby_nutrition_recipe.NAME, payload)

    async def baby_growth_analysis(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(baby_growth_analysis.NAME, payload)

    async def pregnancy_symptom_checker(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return await self.run(pregnancy_symptom_checker.NAME, payload)
