# /conversation_flows/routes/flows.py

import logging
import structlog
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from conversation_flows.config.settings import settings
from conversation_flows.models.api import APIResponse, FlowResponse, TurnRequest
from conversation_flows.utils.errors import MalformedContextError
from conversation_flows.workflows.definitions import WORKFLOWS
from conversation_flows.workflows.engine import handle_turn

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/flows",
    tags=["Flows"],
)


@router.get("", response_model=APIResponse)
async def list_flows():
    """List the available conversation flows and their steps."""
    flows = [
        {
            "flow_type": flow.flow_type.value,
            "purpose": flow.purpose,
            "steps": list(flow.step_ids()),
        }
        for flow in WORKFLOWS.values()
    ]
    return APIResponse(
        success=True,
        message="Flows retrieved",
        data={"flows": flows},
        version=settings.api_version
    )


@router.post("/turn", response_model=FlowResponse, response_model_exclude_unset=True)
async def process_turn(request: TurnRequest):
    """Run one conversation turn through the flow engine."""
    with structlog.contextvars.bound_contextvars(conversation_id=request.conversation_id):
        try:
            result = handle_turn(
                request.conversation_id,
                request.current_step,
                request.user_input,
                request.context,
            )
        except MalformedContextError as e:
            logger.warning(f"Rejected turn: {e}")
            raise HTTPException(
                status_code=422,
                detail={"message": str(e), "errors": e.errors},
            )
    return JSONResponse(content=result.to_payload())
