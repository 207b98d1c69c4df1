# /conversation_flows/workflows/definitions.py

"""
Conversation flow definitions.

This module defines the flow catalog as data. It is built once at import
and never changes afterwards.
Each flow specifies:
- flow_type: The FlowType identifier
- purpose: Human-readable description (display only)
- steps: The step definitions; list order is used for progress display only

Each step defines:
- question: Prompt shown to the user (None for non-interactive steps)
- type: The StepType that selects the step processor
- options: Numbered menu for selection steps
- validate_input: Predicate the raw answer must satisfy
- next_step: Function of (answer, context) returning the successor id, or None
"""

from typing import Dict, Optional, Callable

from conversation_flows.config.rules import URGENT_REPAIR_RULE, SAFETY_RISK_RULE
from conversation_flows.models.context import ConversationContext
from conversation_flows.models.flow import FlowDefinition, FlowType, StepDefinition, StepType
from conversation_flows.utils.keywords import matches_rule
from conversation_flows.workflows.validator import (
    is_non_empty,
    longer_than,
    has_contact_details,
    is_phone_number,
)

COMPLETION_STEP_ID = "completion"


def goto(step_id: Optional[str]) -> Callable[..., Optional[str]]:
    """Transition that ignores input and context."""
    def _next(user_input: str = "", context: Optional[ConversationContext] = None) -> Optional[str]:
        return step_id
    return _next


def _completion_step() -> StepDefinition:
    return StepDefinition(id=COMPLETION_STEP_ID, type=StepType.COMPLETION, next_step=goto(None))


# --- quote_collection transitions ---

def _after_project_type(user_input: str, context: ConversationContext) -> str:
    if matches_rule(user_input, URGENT_REPAIR_RULE):
        return "urgency_assessment"
    return "location_details"


def _after_project_scope(user_input: str, context: ConversationContext) -> str:
    # Skip the budget question when the budget is already known
    if context.long_term_memory.budget_range:
        return "timeline_preference"
    return "budget_range"


# --- emergency_assessment transitions ---

def _after_urgency_level(user_input: str, context: ConversationContext) -> str:
    if matches_rule(user_input, SAFETY_RISK_RULE):
        return "safety_first"
    return "damage_assessment"


QUOTE_COLLECTION = FlowDefinition(
    flow_type=FlowType.QUOTE_COLLECTION,
    purpose="Collect comprehensive project information for accurate quoting",
    steps=(
        StepDefinition(
            id="project_type",
            question="What type of construction project are you planning?",
            type=StepType.SELECTION,
            options=("Kitchen Renovation", "Bathroom Remodel", "Home Addition",
                     "New Construction", "Commercial Project", "Other"),
            validate_input=is_non_empty,
            next_step=_after_project_type,
        ),
        StepDefinition(
            id="urgency_assessment",
            question="How soon does this repair need attention?",
            type=StepType.SELECTION,
            options=("Immediately - there is active damage", "Within 24 hours",
                     "Within a week", "Flexible timing"),
            validate_input=is_non_empty,
            next_step=goto("location_details"),
        ),
        StepDefinition(
            id="location_details",
            question="Where is your project located? (City, State or ZIP code)",
            type=StepType.TEXT,
            validate_input=longer_than(5),
            next_step=goto("project_scope"),
        ),
        StepDefinition(
            id="project_scope",
            question="Could you describe the scope of work? What specific areas or features are you looking to address?",
            type=StepType.TEXTAREA,
            validate_input=longer_than(10),
            next_step=_after_project_scope,
        ),
        StepDefinition(
            id="budget_range",
            question="What's your approximate budget range for this project?",
            type=StepType.SELECTION,
            options=("Under $10,000", "$10,000 - $25,000", "$25,000 - $50,000",
                     "$50,000 - $100,000", "$100,000+", "I need guidance on budgeting"),
            validate_input=is_non_empty,
            next_step=goto("timeline_preference"),
        ),
        StepDefinition(
            id="timeline_preference",
            question="When would you ideally like to start this project?",
            type=StepType.SELECTION,
            options=("As soon as possible", "Within 1 month", "2-3 months",
                     "4-6 months", "More than 6 months", "Flexible timing"),
            validate_input=is_non_empty,
            next_step=goto("contact_preferences"),
        ),
        StepDefinition(
            id="contact_preferences",
            question="How would you prefer to receive your detailed estimate and discuss next steps?",
            type=StepType.SELECTION,
            options=("Phone call", "Email with detailed breakdown",
                     "In-person consultation", "Video call consultation"),
            validate_input=is_non_empty,
            next_step=goto("quote_summary"),
        ),
        StepDefinition(
            id="quote_summary",
            type=StepType.SUMMARY,
            next_step=goto(COMPLETION_STEP_ID),
        ),
        _completion_step(),
    ),
)

EMERGENCY_ASSESSMENT = FlowDefinition(
    flow_type=FlowType.EMERGENCY_ASSESSMENT,
    purpose="Assess and respond to emergency construction situations",
    steps=(
        StepDefinition(
            id="urgency_level",
            question="How urgent is this situation? Please select the level that best describes your needs:",
            type=StepType.SELECTION,
            options=("Life-threatening emergency (call 911 first)", "Immediate safety hazard",
                     "Property damage requiring immediate attention",
                     "Urgent repair needed within 24 hours", "Needs attention within a few days"),
            validate_input=is_non_empty,
            next_step=_after_urgency_level,
        ),
        StepDefinition(
            id="safety_first",
            type=StepType.SAFETY_MESSAGE,
            next_step=goto("damage_assessment"),
        ),
        StepDefinition(
            id="damage_assessment",
            question="Please describe the damage or issue you're experiencing:",
            type=StepType.TEXTAREA,
            validate_input=longer_than(10),
            next_step=goto("location_access"),
        ),
        StepDefinition(
            id="location_access",
            question="What's the property address, and will our emergency team have access?",
            type=StepType.TEXT,
            validate_input=longer_than(10),
            next_step=goto("contact_immediate"),
        ),
        StepDefinition(
            id="contact_immediate",
            question="What's the best phone number to reach you immediately for our emergency response team?",
            type=StepType.PHONE,
            validate_input=is_phone_number,
            next_step=goto("emergency_dispatch"),
        ),
        StepDefinition(
            id="emergency_dispatch",
            type=StepType.DISPATCH,
            next_step=goto(COMPLETION_STEP_ID),
        ),
        _completion_step(),
    ),
)

CONSULTATION_SCHEDULING = FlowDefinition(
    flow_type=FlowType.CONSULTATION_SCHEDULING,
    purpose="Schedule and prepare for project consultations",
    steps=(
        StepDefinition(
            id="consultation_type",
            question="What type of consultation would work best for you?",
            type=StepType.SELECTION,
            options=("Initial project discussion (30 min)", "Detailed design consultation (1 hour)",
                     "Site visit and assessment", "Virtual consultation via video call",
                     "Phone consultation"),
            validate_input=is_non_empty,
            next_step=goto("preferred_timing"),
        ),
        StepDefinition(
            id="preferred_timing",
            question="When would you prefer to schedule this consultation?",
            type=StepType.SELECTION,
            options=("This week", "Next week", "Within 2 weeks",
                     "Flexible - you choose the best time", "Evenings or weekends preferred"),
            validate_input=is_non_empty,
            next_step=goto("contact_details"),
        ),
        StepDefinition(
            id="contact_details",
            question="Please provide your contact information for scheduling:",
            type=StepType.CONTACT_FORM,
            validate_input=has_contact_details,
            next_step=goto("consultation_prep"),
        ),
        StepDefinition(
            id="consultation_prep",
            question="Is there anything specific you'd like our team to prepare for the consultation?",
            type=StepType.TEXTAREA,
            next_step=goto("scheduling_confirmation"),
        ),
        StepDefinition(
            id="scheduling_confirmation",
            type=StepType.CONFIRMATION,
            next_step=goto(COMPLETION_STEP_ID),
        ),
        _completion_step(),
    ),
)

PROJECT_PLANNING = FlowDefinition(
    flow_type=FlowType.PROJECT_PLANNING,
    purpose="Comprehensive project planning and requirements gathering",
    steps=(
        StepDefinition(
            id="project_goals",
            question="What are your main goals for this construction project?",
            type=StepType.TEXTAREA,
            validate_input=longer_than(20),
            next_step=goto("space_requirements"),
        ),
        StepDefinition(
            id="space_requirements",
            question="Tell me about your space requirements and how you plan to use the area:",
            type=StepType.TEXTAREA,
            validate_input=longer_than(15),
            next_step=goto("design_preferences"),
        ),
        StepDefinition(
            id="design_preferences",
            question="Do you have any specific design preferences, styles, or inspiration?",
            type=StepType.TEXTAREA,
            next_step=goto("material_preferences"),
        ),
        StepDefinition(
            id="material_preferences",
            question="Are there specific materials or finishes you prefer or want to avoid?",
            type=StepType.TEXTAREA,
            next_step=goto("sustainability_concerns"),
        ),
        StepDefinition(
            id="sustainability_concerns",
            question="Are sustainability and eco-friendly materials important to you?",
            type=StepType.SELECTION,
            options=("Very important - please prioritize green materials",
                     "Somewhat important - consider when cost-effective",
                     "Not a primary concern", "I need more information about sustainable options"),
            validate_input=is_non_empty,
            next_step=goto("planning_summary"),
        ),
        StepDefinition(
            id="planning_summary",
            type=StepType.SUMMARY,
            next_step=goto("next_steps"),
        ),
        StepDefinition(
            id="next_steps",
            type=StepType.PLANNING_COMPLETION,
            next_step=goto(COMPLETION_STEP_ID),
        ),
        _completion_step(),
    ),
)

WORKFLOWS: Dict[FlowType, FlowDefinition] = {
    FlowType.QUOTE_COLLECTION: QUOTE_COLLECTION,
    FlowType.EMERGENCY_ASSESSMENT: EMERGENCY_ASSESSMENT,
    FlowType.CONSULTATION_SCHEDULING: CONSULTATION_SCHEDULING,
    FlowType.PROJECT_PLANNING: PROJECT_PLANNING,
}
