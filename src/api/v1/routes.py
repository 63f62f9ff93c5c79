"""
API v1 routes.

Defines REST endpoints for running NariCare AI actions.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from src.api.dependencies import get_action_service, get_dispatcher
from src.api.models import ActionSummary, ErrorResponse
from src.domain.dispatcher import PromptDispatcher
from src.domain.exceptions import ActionFailed, InputValidationError, UseCaseNotFound
from src.flows.actions import ActionService

router = APIRouter(tags=["v1"])


@router.get(
    "/actions",
    response_model=list[ActionSummary],
    summary="List available actions",
)
async def list_actions(
    dispatcher: PromptDispatcher = Depends(get_dispatcher),
) -> list[ActionSummary]:
    """List every registered use case with a short description."""
    return [
        ActionSummary(name=use_case.name, description=use_case.description)
        for use_case in dispatcher.registry
    ]


@router.post(
    "/actions/{name}",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown action"},
        422: {"model": ErrorResponse, "description": "Request does not match the action schema"},
        502: {"model": ErrorResponse, "description": "Generative backend failed"},
    },
    summary="Run an action",
    description="Submit a JSON object matching the action's request schema. "
    "The reply is the validated structured output of the model.",
)
async def run_action(
    name: str,
    payload: Any = Body(default=None),
    service: ActionService = Depends(get_action_service),
) -> dict[str, Any]:
    """
    Run one action.

    - **name**: Action name as listed by `GET /v1/actions`

    Failures carry only the action's fixed message; causes are logged.
    """
    try:
        return await service.run(name, payload)
    except UseCaseNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown action: {name}",
        ) from None
    except ActionFailed as e:
        code = (
            status.HTTP_422_UNPROCESSABLE_ENTITY
            if isinstance(e.__cause__, InputValidationError)
            else status.HTTP_502_BAD_GATEWAY
        )
        raise HTTPException(status_code=code, detail=e.message) from None
