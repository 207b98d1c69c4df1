# /conversation_flows/utils/errors.py

from typing import Any, Dict, List, Optional


class FlowEngineError(Exception):
    """Base class for errors raised by the conversation flow engine."""


class MalformedContextError(FlowEngineError):
    """The caller supplied a conversation context that is missing required fields."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []
