# /conversation_flows/config/rules.py

import re

# This file contains the keyword rules used to pick a conversation flow and
# to branch inside flows. Flow rules are processed in order, defining their priority.

# Precompiled regex for tokenising user input
WORD_RE = re.compile(r'\w+')

# Mapping plurals to singular so "quotes" and "quote" match the same rule
PLURAL_MAPPINGS = {
    "emergencies": "emergency", "quotes": "quote", "estimates": "estimate",
    "consultations": "consultation", "meetings": "meeting",
    "requirement": "requirements", "designs": "design", "repairs": "repair",
}

# Intent labels produced upstream that map directly onto a flow
QUOTE_INTENT = "project_quote"
CONSULTATION_INTENT = "project_consultation"

CRITICAL_URGENCY = "critical"
NORMAL_URGENCY = "normal"

# Flow rules organized by priority.
# Each rule is a tuple: ({single_word_tokens}, [multi_word_phrases])
EMERGENCY_RULE = ({"emergency"}, [])
QUOTE_RULE = ({"quote", "estimate"}, [])
CONSULTATION_RULE = ({"consultation", "meeting"}, [])
PLANNING_RULE = ({"planning", "design", "requirements"}, [])

# Conversation-history continuation heuristic
QUOTE_TOPIC = "quote"
COMPLETED_TOPIC = "completed"
INTEREST_QUOTE = "quote"

# In-flow branching rules
URGENT_REPAIR_RULE = ({"emergency", "repair"}, [])
SAFETY_RISK_RULE = (set(), ["life-threatening", "life threatening", "safety hazard"])

# Validation patterns
EMAIL_RE = re.compile(r'\S+@\S+\.\S+')
PHONE_SEARCH_RE = re.compile(r'[\d\s\-()]{10,}')
PHONE_RE = re.compile(r'^\(?[\d\s\-()]{10,}$')
