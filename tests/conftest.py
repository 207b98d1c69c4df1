import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from conversation_flows.main import app
from conversation_flows.models.context import ConversationContext


def build_context_payload(
    user_name="Alex",
    urgency="normal",
    intents=None,
    topics=None,
    interests=None,
    budget_range=None,
    flow_data=None,
    active_flow=None,
):
    """Context in the camelCase shape the chat frontend sends."""
    payload = {
        "shortTermMemory": {
            "recentIntents": [{"primaryIntent": intent} for intent in (intents or [])],
            "recentTopics": list(topics or []),
        },
        "longTermMemory": {
            "budgetRange": budget_range,
            "primaryInterests": list(interests or []),
        },
        "urgencyLevel": {"level": urgency},
        "userProfile": {"userName": user_name},
        "flowData": dict(flow_data or {}),
    }
    if active_flow is not None:
        payload["activeFlow"] = active_flow
    return payload


@pytest.fixture
def make_context():
    """Factory for ConversationContext objects with sensible defaults."""
    def _make(**kwargs):
        return ConversationContext.model_validate(build_context_payload(**kwargs))
    return _make


@pytest.fixture
def context_payload():
    return build_context_payload


@pytest.fixture
def metric_value():
    """Reads the current value of a Prometheus sample, treating missing samples as zero."""
    def _read(name, labels):
        return REGISTRY.get_sample_value(name, labels) or 0.0
    return _read


@pytest.fixture(scope="function")
def test_client():
    """Provides a TestClient for API integration tests; runs the app lifespan."""
    with TestClient(app) as client:
        yield client
