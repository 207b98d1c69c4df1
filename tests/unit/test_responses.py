# tests/unit/test_responses.py
from conversation_flows.config.settings import settings
from conversation_flows.models.flow import FlowType, StepType
from conversation_flows.workflows import responses
from conversation_flows.workflows.definitions import WORKFLOWS


def test_format_options_numbers_from_one():
    assert responses.format_options(["A", "B", "C"]) == "1. A\n2. B\n3. C"


def test_selection_question_lists_options():
    step = WORKFLOWS[FlowType.QUOTE_COLLECTION].get_step("project_type")
    text = responses.format_step_question(step)
    assert text.startswith("What type of construction project are you planning?")
    assert "1. Kitchen Renovation" in text
    assert "6. Other" in text
    assert text.endswith("You can respond with the number or type your choice.")


def test_text_question_has_no_options():
    step = WORKFLOWS[FlowType.QUOTE_COLLECTION].get_step("location_details")
    assert responses.format_step_question(step) == "Where is your project located? (City, State or ZIP code)"


def test_non_interactive_step_has_empty_question():
    step = WORKFLOWS[FlowType.QUOTE_COLLECTION].get_step("quote_summary")
    assert step.type == StepType.SUMMARY
    assert responses.format_step_question(step) == ""


def test_acknowledgments():
    assert responses.format_acknowledgment("project_type", "Kitchen Renovation") == \
        "I understand you're planning kitchen renovation."
    assert responses.format_acknowledgment("budget_range", "$100,000+") == "I've recorded your budget range."
    assert responses.format_acknowledgment("unlisted_step", "x") == "I've recorded that information."


def test_completion_templates_are_personalised(make_context):
    context = make_context(user_name="Jordan")
    quote = responses.format_completion(FlowType.QUOTE_COLLECTION, context)
    assert quote.startswith("Excellent, Jordan!")
    assert settings.company_name in quote

    emergency = responses.format_completion("emergency_assessment", context)
    assert settings.emergency_contact_number in emergency

    fallback = responses.format_completion("unknown_flow", context)
    assert fallback == (
        "Thank you for providing that information, Jordan! "
        "Our team will review everything and get back to you soon."
    )


def test_formatters_are_idempotent(make_context):
    context = make_context()
    first = responses.format_initiation(context)
    assert first == responses.format_initiation(context)
    assert "Project Quote Collection" in first


def test_confirmation_reads_back_flow_data(make_context):
    context = make_context(user_name="Sam")
    text = responses.format_confirmation({"consultation_type": "Phone consultation"}, context)
    assert "**Type**: Phone consultation" in text
    assert "**Timing**: To be scheduled" in text
    assert "**Contact**: Provided" in text


def test_safety_message_asks_next_question():
    damage = WORKFLOWS[FlowType.EMERGENCY_ASSESSMENT].get_step("damage_assessment")
    text = responses.format_safety_message(damage)
    assert text.startswith("🚨 **SAFETY FIRST**")
    assert f"call {settings.emergency_services_number} immediately" in text
    assert text.endswith(damage.question)
