# /conversation_flows/workflows/validator.py

"""
Pure validation functions for conversation flows.

Two families live here:
- input predicates used by step definitions (`validate_input`)
- integrity checks that walk the flow catalog and report steps whose
  transitions name ids outside their own flow

All functions are:
- Pure (no side effects)
- Deterministic (same input = same output)
- No logging
"""

from typing import Dict, Optional, List, Iterable, Callable, TypedDict

from conversation_flows.config.rules import EMAIL_RE, PHONE_SEARCH_RE, PHONE_RE
from conversation_flows.models.context import ConversationContext
from conversation_flows.models.flow import FlowDefinition, FlowType, StepType


class ValidationResult(TypedDict):
    """Result of a validation check."""
    is_valid: bool
    error_code: Optional[str]
    message: Optional[str]


class TransitionProblem(TypedDict):
    flow_type: str
    step_id: str
    next_step: Optional[str]
    message: str


_VALID: ValidationResult = {"is_valid": True, "error_code": None, "message": None}


# ---------------- Input predicates ---------------- #

def is_non_empty(user_input: str) -> bool:
    return bool(user_input)


def longer_than(length: int) -> Callable[[str], bool]:
    """Builds a predicate accepting input strictly longer than `length` characters."""
    def _predicate(user_input: str) -> bool:
        return bool(user_input) and len(user_input) > length
    return _predicate


def has_contact_details(user_input: str) -> bool:
    """Both an email address and a phone number must appear somewhere in the input."""
    if not user_input:
        return False
    return bool(EMAIL_RE.search(user_input)) and bool(PHONE_SEARCH_RE.search(user_input))


def is_phone_number(user_input: str) -> bool:
    if not user_input:
        return False
    return bool(PHONE_RE.match(user_input.strip()))


# ---------------- Catalog checks ---------------- #

def validate_step(flow: FlowDefinition, step_id: Optional[str]) -> ValidationResult:
    """
    Validate that a step exists in the given flow.

    Args:
        flow: The flow definition
        step_id: The step id to validate

    Returns:
        ValidationResult with is_valid=True if the step exists, False otherwise
    """
    if not step_id:
        return {
            "is_valid": False,
            "error_code": "EMPTY_STEP",
            "message": "Step cannot be empty"
        }

    if flow.get_step(step_id) is None:
        return {
            "is_valid": False,
            "error_code": "UNKNOWN_STEP",
            "message": f"Step '{step_id}' is not defined for flow '{flow.flow_type.value}'"
        }

    return _VALID


def sample_contexts() -> List[ConversationContext]:
    """Representative contexts used to exercise context-dependent transitions."""
    base = {
        "short_term_memory": {"recent_intents": [], "recent_topics": []},
        "urgency_level": {"level": "normal"},
        "user_profile": {"user_name": "Alex"},
    }
    return [
        ConversationContext.model_validate(base),
        ConversationContext.model_validate({
            **base,
            "long_term_memory": {"budget_range": "$25,000 - $50,000", "primary_interests": ["quote"]},
            "urgency_level": {"level": "critical"},
        }),
    ]


def sample_inputs(flow: FlowDefinition) -> List[str]:
    """Representative inputs: every listed option plus a handful of free-text answers."""
    inputs = ["", "yes", "Emergency repair needed", "A fairly long free-text answer about the project"]
    for step in flow.steps:
        inputs.extend(step.options)
    return inputs


def validate_transitions(
    flow: FlowDefinition,
    inputs: Optional[Iterable[str]] = None,
    contexts: Optional[Iterable[ConversationContext]] = None,
) -> List[TransitionProblem]:
    """
    Walk every step of a flow with representative inputs and contexts and
    report each successor id that is not a step of the same flow, and each
    completion step that does not end the flow.
    """
    inputs = list(inputs) if inputs is not None else sample_inputs(flow)
    contexts = list(contexts) if contexts is not None else sample_contexts()
    known_ids = set(flow.step_ids())
    problems: List[TransitionProblem] = []
    seen = set()

    for step in flow.steps:
        for context in contexts:
            for user_input in inputs:
                next_id = step.next_step(user_input, context)
                if step.type == StepType.COMPLETION:
                    if next_id is not None:
                        message = "Completion step must end the flow"
                    else:
                        continue
                elif next_id is None or next_id in known_ids:
                    continue
                else:
                    message = f"Successor '{next_id}' is not defined in this flow"

                key = (step.id, next_id)
                if key in seen:
                    continue
                seen.add(key)
                problems.append({
                    "flow_type": flow.flow_type.value,
                    "step_id": step.id,
                    "next_step": next_id,
                    "message": message,
                })
    return problems


def validate_catalog(workflows: Dict[FlowType, FlowDefinition]) -> List[TransitionProblem]:
    """Run `validate_transitions` over every flow in the catalog."""
    problems: List[TransitionProblem] = []
    for flow in workflows.values():
        problems.extend(validate_transitions(flow))
    return problems
