# /conversation_flows/models/flow.py

from enum import Enum
from typing import Optional, Tuple, Callable, Union, Any
from pydantic import BaseModel, Field, ConfigDict, field_validator


class FlowType(str, Enum):
    QUOTE_COLLECTION = "quote_collection"
    EMERGENCY_ASSESSMENT = "emergency_assessment"
    CONSULTATION_SCHEDULING = "consultation_scheduling"
    PROJECT_PLANNING = "project_planning"


class StepType(str, Enum):
    SELECTION = "selection"
    TEXT = "text"
    TEXTAREA = "textarea"
    CONTACT_FORM = "contact_form"
    PHONE = "phone"
    SUMMARY = "summary"
    COMPLETION = "completion"
    SAFETY_MESSAGE = "safety_message"
    DISPATCH = "dispatch"
    CONFIRMATION = "confirmation"
    PLANNING_COMPLETION = "planning_completion"


# Step types that consume user input; every other type is entered and
# rendered without waiting for the user.
INTERACTIVE_STEP_TYPES = frozenset({
    StepType.SELECTION,
    StepType.TEXT,
    StepType.TEXTAREA,
    StepType.CONTACT_FORM,
    StepType.PHONE,
})


def _always_valid(user_input: str) -> bool:
    return True


def _end_of_flow(user_input: str, context: Any) -> Optional[str]:
    return None


class StepDefinition(BaseModel):
    """
    One unit of interaction within a flow.

    This is static configuration: `validate_input` is a pure predicate over the raw
    input and `next_step` a pure function of (input, context) returning the
    successor step id, or None when the flow ends.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique step identifier within its flow")
    type: Union[StepType, str] = Field(..., description="StepType, or an unrecognised type name")
    question: Optional[str] = Field(default=None, description="Prompt text for interactive steps")
    options: Tuple[str, ...] = Field(default_factory=tuple, description="Numbered menu for selection steps")
    validate_input: Callable[[str], bool] = Field(default=_always_valid)
    next_step: Callable[..., Optional[str]] = Field(default=_end_of_flow)

    @field_validator("type", mode="before")
    @classmethod
    def coerce_known_type(cls, v):
        # Known names become StepType members so dispatch tables match them
        try:
            return StepType(v)
        except ValueError:
            return v

    @property
    def is_interactive(self) -> bool:
        return self.type in INTERACTIVE_STEP_TYPES


class FlowDefinition(BaseModel):
    """A named, ordered dialogue procedure. Order of steps is informational only."""
    model_config = ConfigDict(frozen=True)

    flow_type: FlowType
    purpose: str
    steps: Tuple[StepDefinition, ...]

    def get_step(self, step_id: Optional[str]) -> Optional[StepDefinition]:
        if not step_id:
            return None
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def index_of(self, step_id: str) -> int:
        for index, step in enumerate(self.steps):
            if step.id == step_id:
                return index
        return -1

    def step_ids(self) -> Tuple[str, ...]:
        return tuple(step.id for step in self.steps)

    @property
    def first_step(self) -> StepDefinition:
        return self.steps[0]

    @property
    def visible_step_count(self) -> int:
        """Number of steps shown in progress indicators; the terminal completion step is excluded."""
        return len(self.steps) - 1
