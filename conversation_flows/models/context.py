# /conversation_flows/models/context.py

from typing import Optional, List, Dict
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel

from conversation_flows.models.flow import FlowType

# The conversation context is owned by the caller. The engine reads it and
# extends flow_data; it never persists or deletes anything in it.
# Fields accept both camelCase (as produced by the chat frontend) and snake_case.

_CONTEXT_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="allow",
)


class IntentRecord(BaseModel):
    """An intent classification produced upstream for one user message."""
    model_config = _CONTEXT_CONFIG

    primary_intent: Optional[str] = Field(default=None, description="Top-ranked intent label")
    confidence: Optional[float] = Field(default=None, description="Classifier confidence")


class ShortTermMemory(BaseModel):
    model_config = _CONTEXT_CONFIG

    recent_intents: List[IntentRecord] = Field(default_factory=list, description="Chronological, most recent last")
    recent_topics: List[str] = Field(default_factory=list, description="Topic tokens seen recently")


class LongTermMemory(BaseModel):
    model_config = _CONTEXT_CONFIG

    budget_range: Optional[str] = Field(default=None, description="Budget range already known for the user")
    primary_interests: List[str] = Field(default_factory=list, description="Most frequent topics for the user")


class UrgencyLevel(BaseModel):
    model_config = _CONTEXT_CONFIG

    level: str = Field(..., description="critical, high, moderate or normal")
    score: Optional[float] = Field(default=None, description="Raw urgency score")


class UserProfile(BaseModel):
    model_config = _CONTEXT_CONFIG

    user_name: str = Field(..., description="Name used to personalise responses")


class ConversationContext(BaseModel):
    """Caller-owned bundle of memories, urgency, profile and accumulated flow answers."""
    model_config = _CONTEXT_CONFIG

    short_term_memory: ShortTermMemory = Field(..., description="Recent intents and topics")
    long_term_memory: LongTermMemory = Field(default_factory=LongTermMemory, description="Durable facts about the user")
    urgency_level: UrgencyLevel = Field(..., description="Externally computed urgency signal")
    user_profile: UserProfile = Field(..., description="User details used for personalisation")
    flow_data: Dict[str, str] = Field(default_factory=dict, description="Step id -> validated answer")
    active_flow: Optional[FlowType] = Field(default=None, description="Flow the caller persisted from the previous turn")

    def latest_intent(self) -> Optional[str]:
        """Primary intent of the most recent intent record, if any."""
        if not self.short_term_memory.recent_intents:
            return None
        # Intents are appended as they are detected, so the newest is last.
        return self.short_term_memory.recent_intents[-1].primary_intent
