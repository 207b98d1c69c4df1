# /conversation_flows/models/api.py

from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Dict, Optional, Any
from datetime import datetime

from conversation_flows.models.flow import FlowType

# This file contains Pydantic models that define the structure of data
# returned by the engine and exchanged over the HTTP adapter.


class SuggestedFlow(BaseModel):
    name: FlowType
    description: str


class FlowResponse(BaseModel):
    """
    Result of one engine turn.

    Only the fields relevant to the path taken are set; serialise with
    `to_payload()` so unset fields are left out of the wire format.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    flow_active: bool
    current_step: Optional[str] = None
    response: str
    flow_type: Optional[FlowType] = None
    flow_completed: Optional[bool] = None
    flow_data: Optional[Dict[str, str]] = None
    progress: Optional[str] = None
    requires_input: Optional[bool] = None
    requires_confirmation: Optional[bool] = None
    urgent: Optional[bool] = None
    suggested_flows: Optional[List[SuggestedFlow]] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class TurnRequest(BaseModel):
    conversation_id: str = Field(..., min_length=1, max_length=255)
    current_step: Optional[str] = None
    user_input: str = Field(default="", max_length=4000)
    context: Dict[str, Any]


class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    version: str
