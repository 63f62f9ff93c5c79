"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services into routes.
"""

from fastapi import Request

from src.domain.dispatcher import PromptDispatcher
from src.flows.actions import ActionService


def get_dispatcher(request: Request) -> PromptDispatcher:
    """
    Get the prompt dispatcher from app state.

    The dispatcher is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.dispatcher


def get_action_service(request: Request) -> ActionService:
    """Get the action service wired during startup."""
    return request.app.state.action_service
