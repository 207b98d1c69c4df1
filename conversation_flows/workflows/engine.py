# /conversation_flows/workflows/engine.py

"""
Pure conversation flow engine.

`handle_turn` takes the caller's view of a conversation turn (conversation
id, current step, raw input, context) and returns a FlowResponse. It:
- Selects the active flow and resolves the current step
- Validates the answer against the step's rule
- Records validated answers in a new flow_data mapping (copy-on-write)
- Computes the successor step and renders the next prompt

All processing is:
- Deterministic (same input = same output)
- Free of I/O beyond logging and metrics
- Safe to run concurrently as long as each call gets its own context
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from conversation_flows.config.settings import settings
from conversation_flows.models.api import FlowResponse
from conversation_flows.models.context import ConversationContext
from conversation_flows.models.flow import FlowDefinition, StepDefinition, StepType
from conversation_flows.utils.errors import MalformedContextError
from conversation_flows.utils.metrics import (
    flow_turns_counter,
    flow_completions_counter,
    unresolved_steps_counter,
    validation_failures_counter,
)
from conversation_flows.workflows import responses
from conversation_flows.workflows.definitions import WORKFLOWS
from conversation_flows.workflows.selector import resolve_active_flow, suggest_flows
from conversation_flows.workflows.validator import has_contact_details, validate_step

logger = logging.getLogger(__name__)

FlowData = Dict[str, str]


def load_context(context: Union[ConversationContext, Mapping[str, Any]]) -> ConversationContext:
    """Validate the caller's context, failing fast on missing required fields."""
    if isinstance(context, ConversationContext):
        return context
    if not isinstance(context, Mapping):
        raise MalformedContextError(f"Conversation context must be a mapping, got {type(context).__name__}")
    try:
        return ConversationContext.model_validate(context)
    except ValidationError as e:
        raise MalformedContextError(
            f"Conversation context is malformed: {e.error_count()} validation error(s)",
            errors=e.errors(include_url=False, include_context=False),
        ) from e


def resolve_step(flow: FlowDefinition, current_step: Optional[str]) -> Optional[StepDefinition]:
    """The step definition for `current_step`, or None when the step is empty or not in the flow."""
    if not validate_step(flow, current_step)["is_valid"]:
        return None
    return flow.get_step(current_step)


def _progress(flow: FlowDefinition, answered: StepDefinition) -> str:
    return f"Step {flow.index_of(answered.id) + 2} of {flow.visible_step_count}"


def _merge(result: FlowResponse, **updates: Any) -> FlowResponse:
    """Copy of a response with some fields replaced, keeping unset fields unset."""
    return FlowResponse(**{**result.model_dump(exclude_unset=True), **updates})


def _completion_response(
    flow: FlowDefinition,
    context: ConversationContext,
    flow_data: Optional[FlowData] = None,
) -> FlowResponse:
    fields: Dict[str, Any] = {}
    if flow_data is not None:
        fields["flow_data"] = flow_data
    return FlowResponse(
        flow_active=False,
        flow_completed=True,
        current_step=None,
        flow_type=flow.flow_type,
        response=responses.format_completion(flow.flow_type, context),
        **fields,
    )


def _record_unresolved(flow: FlowDefinition, step_id: Optional[str], source: str) -> None:
    # Ending the flow on an unknown step is deliberate; keep it visible.
    check = validate_step(flow, step_id)
    logger.warning(
        f"{check['message']} [{check['error_code']}] ({source}); treating flow as completed"
    )
    unresolved_steps_counter.labels(flow_type=flow.flow_type.value, source=source).inc()


def _successor(
    flow: FlowDefinition,
    step: StepDefinition,
    user_input: str,
    context: ConversationContext,
) -> Optional[StepDefinition]:
    next_id = step.next_step(user_input, context)
    next_step = flow.get_step(next_id)
    if next_step is None and next_id is not None:
        _record_unresolved(flow, next_id, source="next_step")
    return next_step


# ---------------- Entering steps ---------------- #

def enter_step(
    flow: FlowDefinition,
    step: StepDefinition,
    context: ConversationContext,
    flow_data: FlowData,
) -> FlowResponse:
    """
    Render a step the conversation has just arrived at. Interactive steps
    ask their question; every other step type is processed right away, since
    it consumes no input.
    """
    if step.is_interactive:
        return FlowResponse(
            flow_active=True,
            current_step=step.id,
            flow_type=flow.flow_type,
            response=responses.format_step_question(step),
            flow_data=flow_data,
            requires_input=True,
        )
    processor = _PASSIVE_PROCESSORS.get(step.type, _process_default)
    return processor(flow, step, context, flow_data)


def start_flow(flow: FlowDefinition, context: ConversationContext) -> FlowResponse:
    """Open a freshly selected flow at its first step."""
    step = flow.first_step
    flow_data = dict(context.flow_data)
    if not step.is_interactive:
        return enter_step(flow, step, context, flow_data)
    return FlowResponse(
        flow_active=True,
        current_step=step.id,
        flow_type=flow.flow_type,
        response=responses.format_flow_start(step, context),
        flow_data=flow_data,
        progress=f"Step 1 of {flow.visible_step_count}",
        requires_input=True,
    )


# ---------------- Interactive steps ---------------- #

def _advance(
    flow: FlowDefinition,
    step: StepDefinition,
    user_input: str,
    context: ConversationContext,
    acknowledgment: str,
) -> FlowResponse:
    """Shared success path: record the answer, resolve the successor, render it."""
    flow_data = {**context.flow_data, step.id: user_input}
    next_step = _successor(flow, step, user_input, context)

    if next_step is None:
        flow_completions_counter.labels(flow_type=flow.flow_type.value).inc()
        return _completion_response(flow, context, flow_data)

    if next_step.is_interactive:
        return FlowResponse(
            flow_active=True,
            current_step=next_step.id,
            flow_type=flow.flow_type,
            response=f"{acknowledgment}\n\n{responses.format_step_question(next_step)}",
            flow_data=flow_data,
            progress=_progress(flow, step),
        )

    entered = enter_step(flow, next_step, context, flow_data)
    updates: Dict[str, Any] = {
        "response": f"{acknowledgment}\n\n{entered.response}",
        "flow_data": flow_data,
    }
    landed = flow.get_step(entered.current_step)
    if entered.flow_active and landed is not None and landed.is_interactive:
        updates["progress"] = _progress(flow, step)
    return _merge(entered, **updates)


def _reprompt(flow: FlowDefinition, step: StepDefinition, response: str) -> FlowResponse:
    validation_failures_counter.labels(flow_type=flow.flow_type.value, step_id=step.id).inc()
    return FlowResponse(
        flow_active=True,
        current_step=step.id,
        flow_type=flow.flow_type,
        response=response,
        requires_input=True,
    )


def _process_selection(flow, step, user_input, context) -> FlowResponse:
    if step.validate_input(user_input):
        acknowledgment = responses.format_selection_acknowledgment(step, user_input, context)
        return _advance(flow, step, user_input, context, acknowledgment)
    return _reprompt(flow, step, responses.format_selection_reprompt(step, context))


def _process_text(flow, step, user_input, context) -> FlowResponse:
    if step.validate_input(user_input):
        return _advance(flow, step, user_input, context, responses.format_text_acknowledgment(context))
    return _reprompt(flow, step, responses.format_text_reprompt(step, context))


def _process_contact_form(flow, step, user_input, context) -> FlowResponse:
    if has_contact_details(user_input):
        return _process_text(flow, step, user_input, context)
    return _reprompt(flow, step, responses.format_contact_form_reprompt(context))


def _process_phone(flow, step, user_input, context) -> FlowResponse:
    if step.validate_input(user_input):
        return _process_text(flow, step, user_input, context)
    return _reprompt(flow, step, responses.format_phone_reprompt(context))


# ---------------- Non-interactive steps ---------------- #

def _process_summary(flow, step, context, flow_data) -> FlowResponse:
    # Pass-through node: no input is consulted.
    next_step = _successor(flow, step, "", context)
    if next_step is None:
        flow_completions_counter.labels(flow_type=flow.flow_type.value).inc()
        return _completion_response(flow, context, flow_data)
    return enter_step(flow, next_step, context, flow_data)


def _process_completion(flow, step, context, flow_data) -> FlowResponse:
    flow_completions_counter.labels(flow_type=flow.flow_type.value).inc()
    return _completion_response(flow, context, flow_data)


def _process_safety_message(flow, step, context, flow_data) -> FlowResponse:
    next_step = _successor(flow, step, "", context)
    if next_step is None:
        return _completion_response(flow, context, flow_data)
    return FlowResponse(
        flow_active=True,
        current_step=next_step.id,
        flow_type=flow.flow_type,
        response=responses.format_safety_message(next_step),
        flow_data=flow_data,
        requires_input=True,
    )


def _process_dispatch(flow, step, context, flow_data) -> FlowResponse:
    flow_completions_counter.labels(flow_type=flow.flow_type.value).inc()
    return FlowResponse(
        flow_active=False,
        flow_completed=True,
        current_step=None,
        flow_type=flow.flow_type,
        response=responses.format_dispatch(context),
        flow_data=flow_data,
        urgent=True,
    )


def _process_confirmation(flow, step, context, flow_data) -> FlowResponse:
    # Read-back only; the caller advances by sending the returned step next turn.
    return FlowResponse(
        flow_active=True,
        current_step=step.next_step("", context),
        flow_type=flow.flow_type,
        response=responses.format_confirmation(flow_data, context),
        flow_data=flow_data,
        requires_confirmation=True,
    )


def _process_planning_completion(flow, step, context, flow_data) -> FlowResponse:
    flow_completions_counter.labels(flow_type=flow.flow_type.value).inc()
    summary = responses.format_planning_summary(flow_data, context)
    completion = responses.format_completion(flow.flow_type, context)
    return FlowResponse(
        flow_active=False,
        flow_completed=True,
        current_step=None,
        flow_type=flow.flow_type,
        response=f"{summary}\n\n{completion}",
        flow_data=flow_data,
    )


def _process_default(flow, step, context, flow_data) -> FlowResponse:
    return FlowResponse(
        flow_active=True,
        current_step=step.id,
        flow_type=flow.flow_type,
        response=responses.format_default_reprompt(step, context),
        requires_input=True,
    )


_INTERACTIVE_PROCESSORS: Dict[Any, Callable[..., FlowResponse]] = {
    StepType.SELECTION: _process_selection,
    StepType.TEXT: _process_text,
    StepType.TEXTAREA: _process_text,
    StepType.CONTACT_FORM: _process_contact_form,
    StepType.PHONE: _process_phone,
}

_PASSIVE_PROCESSORS: Dict[Any, Callable[..., FlowResponse]] = {
    StepType.SUMMARY: _process_summary,
    StepType.COMPLETION: _process_completion,
    StepType.SAFETY_MESSAGE: _process_safety_message,
    StepType.DISPATCH: _process_dispatch,
    StepType.CONFIRMATION: _process_confirmation,
    StepType.PLANNING_COMPLETION: _process_planning_completion,
}


def process_step(
    flow: FlowDefinition,
    step: StepDefinition,
    user_input: str,
    context: ConversationContext,
) -> FlowResponse:
    """Dispatch on step type to validate, advance and render one step."""
    processor = _INTERACTIVE_PROCESSORS.get(step.type)
    if processor is not None:
        return processor(flow, step, user_input, context)
    passive = _PASSIVE_PROCESSORS.get(step.type, _process_default)
    return passive(flow, step, context, dict(context.flow_data))


# ---------------- Entry point ---------------- #

def _outcome(result: FlowResponse) -> str:
    if result.flow_completed:
        return "completed"
    if result.requires_input and result.flow_data is None:
        return "reprompted"
    return "advanced"


def handle_turn(
    conversation_id: str,
    current_step: Optional[str],
    user_input: Optional[str],
    context: Union[ConversationContext, Mapping[str, Any]],
) -> FlowResponse:
    """
    Process one conversation turn.

    Args:
        conversation_id: Caller's conversation key (used for logging only)
        current_step: Step the caller believes is in progress, or None
        user_input: Raw user message
        context: ConversationContext, or a mapping that validates into one

    Returns:
        FlowResponse for the turn. When the context is a ConversationContext
        instance, its flow_data is rebound to the new mapping; the previous
        mapping object is never modified.

    Raises:
        MalformedContextError: if required context fields are missing
    """
    ctx = load_context(context)
    user_input = user_input or ""

    flow_type = resolve_active_flow(ctx, current_step, user_input)
    if flow_type is None:
        logger.debug(f"No flow selected for conversation {conversation_id}")
        flow_turns_counter.labels(flow_type="none", outcome="initiation").inc()
        return FlowResponse(
            flow_active=False,
            current_step=None,
            response=responses.format_initiation(ctx),
            suggested_flows=suggest_flows(ctx),
        )

    flow = WORKFLOWS[flow_type]

    if not current_step and settings.start_flow_on_empty_step:
        logger.info(f"Starting flow '{flow_type.value}' for conversation {conversation_id}")
        result = start_flow(flow, ctx)
    else:
        step = resolve_step(flow, current_step)
        if step is None:
            logger.info(f"Conversation {conversation_id} sent unresolved step for flow '{flow_type.value}'")
            _record_unresolved(flow, current_step, source="current_step")
            result = _completion_response(flow, ctx)
        else:
            result = process_step(flow, step, user_input, ctx)

    if result.flow_data is not None and result.flow_data != ctx.flow_data:
        ctx.flow_data = dict(result.flow_data)

    flow_turns_counter.labels(flow_type=flow_type.value, outcome=_outcome(result)).inc()
    logger.debug(
        f"Conversation {conversation_id}: flow '{flow_type.value}' step '{current_step}' -> '{result.current_step}'"
    )
    return result
