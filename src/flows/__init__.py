"""
Use case catalogue.

Every AI-backed feature of the application is declared in a module of this
package. Declaring compiles each prompt against its request schema, so a
broken template fails at import time.
"""

from src.domain.use_case import UseCase, UseCaseRegistry

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

USE_CASES: tuple[UseCase, ...] = (
    period_predictions.USE_CASE,
    hormonal_cycle_nutrition.USE_CASE,
    mental_health_chatbot.USE_CASE,
    baby_health_tracker.USE_CASE,
    pregnancy_progress.USE_CASE,
    breast_cancer_analysis.USE_CASE,
    occupational_disease_detection.USE_CASE,
    baby_nutrition_recipe.USE_CASE,
    baby_growth_analysis.USE_CASE,
    pregnancy_symptom_checker.USE_CASE,
)


def build_registry() -> UseCaseRegistry:
    """Registry of all declared use cases."""
    return UseCaseRegistry(USE_CASES)


__all__ = ["USE_CASES", "build_registry"]
