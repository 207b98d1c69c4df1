# /conversation_flows/workflows/responses.py

"""
Pure response formatters.

Every function here turns step, flow and context data into user-facing
text. They read templates from config.strings and branding from settings,
and have no side effects: the same inputs always give the same string.
"""

from typing import Dict, Mapping, Optional, Sequence, Union

from conversation_flows.config import strings
from conversation_flows.config.settings import settings
from conversation_flows.models.context import ConversationContext
from conversation_flows.models.flow import FlowType, StepDefinition, StepType


def _user_name(context: ConversationContext) -> str:
    return context.user_profile.user_name


def format_options(options: Sequence[str]) -> str:
    """Numbered menu, one option per line, starting at 1."""
    return "\n".join(f"{index + 1}. {option}" for index, option in enumerate(options))


def format_step_question(step: StepDefinition) -> str:
    """The step's question, followed by its numbered options for selection steps."""
    if not step.question:
        return ""

    question_text = step.question
    if step.type == StepType.SELECTION and step.options:
        question_text += "\n\n" + format_options(step.options)
        question_text += "\n\n" + strings.OPTIONS_FOOTER
    return question_text


def format_acknowledgment(step_id: str, answer: str) -> str:
    template = strings.STEP_ACKNOWLEDGMENTS.get(step_id, strings.DEFAULT_ACKNOWLEDGMENT)
    return template.format(answer=answer.lower())


def format_selection_acknowledgment(step: StepDefinition, answer: str, context: ConversationContext) -> str:
    return strings.SELECTION_ACKNOWLEDGMENT.format(
        user_name=_user_name(context),
        acknowledgment=format_acknowledgment(step.id, answer),
    )


def format_text_acknowledgment(context: ConversationContext) -> str:
    return strings.TEXT_ACKNOWLEDGMENT.format(user_name=_user_name(context))


def format_flow_start(step: StepDefinition, context: ConversationContext) -> str:
    return strings.FLOW_START.format(user_name=_user_name(context), question=format_step_question(step))


def format_completion(flow_type: Optional[Union[FlowType, str]], context: ConversationContext) -> str:
    """Completion message for the flow type, or a generic thank-you for unknown types."""
    key = flow_type.value if isinstance(flow_type, FlowType) else flow_type
    template = strings.FLOW_COMPLETIONS.get(key, strings.DEFAULT_COMPLETION)
    return template.format(
        user_name=_user_name(context),
        company_name=settings.company_name,
        emergency_contact_number=settings.emergency_contact_number,
    )


def format_initiation(context: ConversationContext) -> str:
    return strings.FLOW_INITIATION.format(user_name=_user_name(context))


# --- Re-prompts ---

def format_selection_reprompt(step: StepDefinition, context: ConversationContext) -> str:
    return strings.SELECTION_REPROMPT.format(
        user_name=_user_name(context),
        options=format_options(step.options),
    )


def format_text_reprompt(step: StepDefinition, context: ConversationContext) -> str:
    return strings.TEXT_REPROMPT.format(user_name=_user_name(context), question=step.question or "")


def format_contact_form_reprompt(context: ConversationContext) -> str:
    return strings.CONTACT_FORM_REPROMPT.format(user_name=_user_name(context))


def format_phone_reprompt(context: ConversationContext) -> str:
    return strings.PHONE_REPROMPT.format(user_name=_user_name(context))


def format_default_reprompt(step: StepDefinition, context: ConversationContext) -> str:
    return strings.DEFAULT_REPROMPT.format(
        user_name=_user_name(context),
        question=step.question or strings.DEFAULT_REQUEST,
    )


# --- Non-interactive steps ---

def format_safety_message(next_step: Optional[StepDefinition]) -> str:
    return strings.SAFETY_FIRST.format(
        emergency_services_number=settings.emergency_services_number,
        question=next_step.question if next_step and next_step.question else "",
    ).rstrip()


def format_dispatch(context: ConversationContext) -> str:
    return strings.EMERGENCY_DISPATCH.format(
        user_name=_user_name(context),
        emergency_contact_number=settings.emergency_contact_number,
    )


def _read_back(flow_data: Mapping[str, str], defaults: Dict[str, str]) -> Dict[str, str]:
    return {key: flow_data.get(key) or default for key, default in defaults.items()}


def format_confirmation(flow_data: Mapping[str, str], context: ConversationContext) -> str:
    """Reads back the consultation answers, falling back to placeholders for missing ones."""
    return strings.CONSULTATION_CONFIRMATION.format(
        user_name=_user_name(context),
        **_read_back(flow_data, strings.CONFIRMATION_DEFAULTS),
    )


def format_planning_summary(flow_data: Mapping[str, str], context: ConversationContext) -> str:
    fields = ("project_goals", "space_requirements", "design_preferences",
              "material_preferences", "sustainability_concerns")
    defaults = {field: strings.PLANNING_SUMMARY_DEFAULT for field in fields}
    return strings.PLANNING_SUMMARY.format(
        user_name=_user_name(context),
        **_read_back(flow_data, defaults),
    )
