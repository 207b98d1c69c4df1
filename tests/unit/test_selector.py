# tests/unit/test_selector.py
import pytest

from conversation_flows.models.flow import FlowType
from conversation_flows.workflows.selector import (
    select_flow,
    resolve_active_flow,
    suggest_flows,
    flows_owning_step,
)


@pytest.mark.parametrize("message, expected_flow", [
    ("I need a quote for a kitchen renovation", FlowType.QUOTE_COLLECTION),
    ("Can you give me an ESTIMATE?", FlowType.QUOTE_COLLECTION),
    ("Could I get a few estimates", FlowType.QUOTE_COLLECTION),
    ("We have an emergency, water everywhere", FlowType.EMERGENCY_ASSESSMENT),
    ("I'd like to book a consultation", FlowType.CONSULTATION_SCHEDULING),
    ("Can we set up a meeting?", FlowType.CONSULTATION_SCHEDULING),
    ("Help me with planning my new office", FlowType.PROJECT_PLANNING),
    ("Let's talk about the design", FlowType.PROJECT_PLANNING),
    ("Here are my requirements", FlowType.PROJECT_PLANNING),
    ("Hello there", None),
])
def test_select_flow_by_keyword(make_context, message, expected_flow):
    assert select_flow(make_context(), message) == expected_flow


def test_keywords_are_whole_tokens(make_context):
    """'designer' is not the keyword 'design'; 'quoted' is not 'quote'."""
    assert select_flow(make_context(), "My designer quoted me last week") is None


def test_priority_order_first_match_wins(make_context):
    message = "emergency quote for a consultation about design"
    assert select_flow(make_context(), message) == FlowType.EMERGENCY_ASSESSMENT
    assert select_flow(make_context(), "quote for a consultation") == FlowType.QUOTE_COLLECTION
    assert select_flow(make_context(), "consultation about design") == FlowType.CONSULTATION_SCHEDULING


@pytest.mark.parametrize("message", [
    "I need a quote",
    "book a meeting please",
    "planning my garage",
    "hello",
])
def test_critical_urgency_overrides_keywords(make_context, message):
    assert select_flow(make_context(urgency="critical"), message) == FlowType.EMERGENCY_ASSESSMENT


def test_intent_selects_flow(make_context):
    assert select_flow(make_context(intents=["project_quote"]), "hi") == FlowType.QUOTE_COLLECTION
    assert select_flow(make_context(intents=["project_consultation"]), "hi") == FlowType.CONSULTATION_SCHEDULING


def test_most_recent_intent_is_used(make_context):
    context = make_context(intents=["project_quote", "project_consultation"])
    assert select_flow(context, "hi") == FlowType.CONSULTATION_SCHEDULING


def test_recent_topics_continue_quote(make_context):
    assert select_flow(make_context(topics=["pricing", "quote"]), "sounds good") == FlowType.QUOTE_COLLECTION
    assert select_flow(make_context(topics=["quote", "completed"]), "sounds good") is None


def test_selection_is_deterministic(make_context):
    context = make_context(topics=["quote"], intents=["greeting"])
    results = {select_flow(context, "anything else?") for _ in range(5)}
    assert results == {FlowType.QUOTE_COLLECTION}


def test_suggestions_for_normal_context(make_context):
    names = [s.name for s in suggest_flows(make_context())]
    assert names == [FlowType.CONSULTATION_SCHEDULING, FlowType.PROJECT_PLANNING]


def test_suggestions_are_ranked_urgency_then_interest(make_context):
    suggestions = suggest_flows(make_context(urgency="high", interests=["quote", "kitchen"]))
    assert [s.name for s in suggestions] == [
        FlowType.EMERGENCY_ASSESSMENT,
        FlowType.QUOTE_COLLECTION,
        FlowType.CONSULTATION_SCHEDULING,
        FlowType.PROJECT_PLANNING,
    ]
    assert all(s.description for s in suggestions)


def test_flows_owning_step():
    assert flows_owning_step("project_type") == [FlowType.QUOTE_COLLECTION]
    assert len(flows_owning_step("completion")) == 4
    assert flows_owning_step("no_such_step") == []
    assert flows_owning_step(None) == []


def test_resolve_active_flow_from_in_progress_step(make_context):
    # "Austin" carries no flow keyword; the step alone identifies the flow.
    context = make_context()
    assert resolve_active_flow(context, "location_details", "Austin, TX 78701") == FlowType.QUOTE_COLLECTION
    assert resolve_active_flow(context, "contact_details", "x") == FlowType.CONSULTATION_SCHEDULING


def test_caller_hint_does_not_override_step_owner(make_context):
    context = make_context(active_flow="project_planning")
    assert resolve_active_flow(context, "project_type", "Kitchen Renovation") == FlowType.QUOTE_COLLECTION


def test_caller_hint_picks_between_flows_sharing_a_step(make_context):
    context = make_context(
        active_flow="project_planning",
        flow_data={"consultation_type": "Phone consultation"},
    )
    assert resolve_active_flow(context, "completion", "ok") == FlowType.PROJECT_PLANNING


def test_caller_hint_is_ignored_without_an_in_progress_step(make_context):
    critical = make_context(urgency="critical", active_flow="quote_collection")
    assert resolve_active_flow(critical, None, "the ceiling collapsed") == FlowType.EMERGENCY_ASSESSMENT
    assert resolve_active_flow(make_context(active_flow="quote_collection"), None, "Hello") is None


def test_resolve_shared_step_uses_flow_data(make_context):
    context = make_context(flow_data={"consultation_type": "Phone consultation", "preferred_timing": "This week"})
    assert resolve_active_flow(context, "completion", "ok") == FlowType.CONSULTATION_SCHEDULING


def test_resolve_shared_step_follows_latest_answer(make_context):
    quote_answers = {
        "project_type": "Kitchen Renovation",
        "location_details": "Austin, TX",
        "project_scope": "New cabinets and counters",
        "budget_range": "$25,000 - $50,000",
    }
    consultation_answers = {"consultation_type": "Phone consultation"}

    later_consultation = make_context(flow_data={**quote_answers, **consultation_answers})
    assert resolve_active_flow(later_consultation, "completion", "ok") == FlowType.CONSULTATION_SCHEDULING

    later_quote = make_context(flow_data={**consultation_answers, **quote_answers})
    assert resolve_active_flow(later_quote, "completion", "ok") == FlowType.QUOTE_COLLECTION


def test_resolve_without_step_falls_back_to_selector(make_context):
    assert resolve_active_flow(make_context(), None, "need an estimate") == FlowType.QUOTE_COLLECTION
    assert resolve_active_flow(make_context(), "bogus", "hello") is None
