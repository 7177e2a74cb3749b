from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from ..domain.actions import DeleteAction, parse_action
from ..domain.models import User
from ..services.workflow_controller import WorkflowController
from .auth import get_current_user_optional

router = APIRouter(prefix="/workflow", tags=["workflow"])


def get_controller(request: Request, current_user: User | None = Depends(get_current_user_optional)) -> WorkflowController:
    # shared host, single-user app: concurrent requests would overwrite each other's user
    request.app.state.host.user = current_user
    return request.app.state.controller


def _workflow_out(controller: WorkflowController) -> Dict[str, Any]:
    state = controller.state
    return {
        "mode": state.mode.value,
        "isNew": state.is_new,
        "surface": controller.surface.snapshot(),
    }


@router.get("")
async def get_workflow(controller: WorkflowController = Depends(get_controller)):
    return _workflow_out(controller)


@router.post("/actions")
async def post_action(payload: Dict[str, Any] = Body(...), controller: WorkflowController = Depends(get_controller)):
    try:
        action = parse_action(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    if isinstance(action, DeleteAction):
        controller.surface.answer_confirmation(action.confirmed)
    result = await controller.dispatch(action)
    error = None
    if result.error is not None:
        error = {"code": getattr(result.error, "code", "ERROR"), "message": str(result.error)}
    return {"outcome": result.status.value, "error": error, **_workflow_out(controller)}
