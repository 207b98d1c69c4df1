# /conversation_flows/workflows/selector.py

"""
Flow selection.

Decides which conversation flow is active for a turn. Selection is re-derived
on every call from the context and the latest input; nothing is stored here.
"""

from typing import Dict, List, Optional

from conversation_flows.config import rules
from conversation_flows.config.strings import SUGGESTION_DESCRIPTIONS
from conversation_flows.models.api import SuggestedFlow
from conversation_flows.models.context import ConversationContext
from conversation_flows.models.flow import FlowType
from conversation_flows.utils.keywords import matches_rule
from conversation_flows.workflows.definitions import WORKFLOWS


def select_flow(context: ConversationContext, user_input: str) -> Optional[FlowType]:
    """
    Pick a flow from the context and the raw user input. First match wins:

    1. critical urgency, or an emergency keyword
    2. project_quote intent, or a quote/estimate keyword
    3. project_consultation intent, or a consultation/meeting keyword
    4. a planning/design/requirements keyword
    5. "quote" among recent topics while "completed" is not
    """
    user_input = user_input or ""
    primary_intent = context.latest_intent()

    if context.urgency_level.level == rules.CRITICAL_URGENCY or matches_rule(user_input, rules.EMERGENCY_RULE):
        return FlowType.EMERGENCY_ASSESSMENT

    if primary_intent == rules.QUOTE_INTENT or matches_rule(user_input, rules.QUOTE_RULE):
        return FlowType.QUOTE_COLLECTION

    if primary_intent == rules.CONSULTATION_INTENT or matches_rule(user_input, rules.CONSULTATION_RULE):
        return FlowType.CONSULTATION_SCHEDULING

    if matches_rule(user_input, rules.PLANNING_RULE):
        return FlowType.PROJECT_PLANNING

    recent_topics = context.short_term_memory.recent_topics
    if rules.QUOTE_TOPIC in recent_topics and rules.COMPLETED_TOPIC not in recent_topics:
        return FlowType.QUOTE_COLLECTION

    return None


def flows_owning_step(step_id: Optional[str]) -> List[FlowType]:
    """Flows, in catalog order, that define a step with this id."""
    if not step_id:
        return []
    return [flow_type for flow_type, flow in WORKFLOWS.items() if flow.get_step(step_id) is not None]


def _owner_of_latest_answer(owners: List[FlowType], flow_data: Dict[str, str]) -> Optional[FlowType]:
    # flow_data keeps insertion order, so the last key is the latest answer.
    for step_id in reversed(list(flow_data)):
        for flow_type in owners:
            if WORKFLOWS[flow_type].get_step(step_id) is not None:
                return flow_type
    return None


def resolve_active_flow(
    context: ConversationContext,
    current_step: Optional[str],
    user_input: str,
) -> Optional[FlowType]:
    """
    Work out which flow handles this turn.

    With no recognised in-progress step the keyword selector decides, so
    critical urgency always reaches the emergency flow. A recognised step
    identifies its flow. When several flows share the id (every flow ends in
    "completion"), the caller's `active_flow` hint is preferred if it owns the
    step, then the flow that recorded the latest answer in flow_data, then
    the keyword selector, then catalog order.
    """
    owners = flows_owning_step(current_step)
    if not owners:
        return select_flow(context, user_input)
    if len(owners) == 1:
        return owners[0]

    if context.active_flow in owners:
        return context.active_flow

    latest = _owner_of_latest_answer(owners, context.flow_data)
    if latest is not None:
        return latest

    selected = select_flow(context, user_input)
    if selected in owners:
        return selected
    return owners[0]


def suggest_flows(context: ConversationContext) -> List[SuggestedFlow]:
    """
    Ranked suggestions shown when no flow is active: urgency-driven first,
    interest-driven second, then the two always-offered flows.
    """
    suggestions: List[FlowType] = []

    if context.urgency_level.level != rules.NORMAL_URGENCY:
        suggestions.append(FlowType.EMERGENCY_ASSESSMENT)

    if rules.INTEREST_QUOTE in context.long_term_memory.primary_interests:
        suggestions.append(FlowType.QUOTE_COLLECTION)

    suggestions.extend([FlowType.CONSULTATION_SCHEDULING, FlowType.PROJECT_PLANNING])

    return [
        SuggestedFlow(name=flow_type, description=SUGGESTION_DESCRIPTIONS[flow_type.value])
        for flow_type in suggestions
    ]
