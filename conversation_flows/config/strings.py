# /conversation_flows/config/strings.py

# This file contains all user-facing strings, making them easy to manage
# and update without changing the flow logic.
# Templates are rendered with str.format; {user_name} is always available.

# Flow entry
FLOW_INITIATION = """I'm here to help guide you through your construction project, {user_name}! I can walk you through several helpful processes:

🔨 **Project Quote Collection** - Get detailed estimates
🚨 **Emergency Assessment** - For urgent construction issues
📅 **Consultation Scheduling** - Plan your project meeting
🏗️ **Project Planning** - Comprehensive requirement gathering

Which of these would be most helpful for you right now?"""

FLOW_START = "Great, {user_name}! Let's get started.\n\n{question}"

SUGGESTION_DESCRIPTIONS = {
    "emergency_assessment": "Get immediate help for urgent construction issues",
    "quote_collection": "Get a detailed project estimate",
    "consultation_scheduling": "Schedule a meeting with our experts",
    "project_planning": "Plan your project comprehensively",
}

# Step prompts
OPTIONS_FOOTER = "You can respond with the number or type your choice."

SELECTION_ACKNOWLEDGMENT = "Thank you, {user_name}! {acknowledgment}"
TEXT_ACKNOWLEDGMENT = "Perfect, {user_name}! I've noted that information."

STEP_ACKNOWLEDGMENTS = {
    "project_type": "I understand you're planning {answer}.",
    "urgency_assessment": "I've noted how soon the repair needs attention.",
    "location_details": "I've noted the project location.",
    "project_scope": "That gives me a good understanding of your project scope.",
    "budget_range": "I've recorded your budget range.",
    "timeline_preference": "I've noted your timeline preference.",
    "urgency_level": "I understand the urgency level.",
    "consultation_type": "That consultation type sounds perfect.",
    "preferred_timing": "I've noted your scheduling preference.",
}
DEFAULT_ACKNOWLEDGMENT = "I've recorded that information."

# Re-prompts after failed validation
SELECTION_REPROMPT = """I'd like to help you with that, {user_name}. Please choose one of the following options:

{options}

""" + OPTIONS_FOOTER

TEXT_REPROMPT = """I'd like to get a bit more detail, {user_name}. {question}

Please provide some additional information to help me assist you better."""

CONTACT_FORM_REPROMPT = """Please provide both your email address and phone number so we can schedule your consultation, {user_name}.

Example: john@email.com, (555) 123-4567"""

PHONE_REPROMPT = """Please provide a valid phone number where our emergency team can reach you, {user_name}.

Example: (555) 123-4567 or 555-123-4567"""

DEFAULT_REPROMPT = "I'm here to help you with the next step, {user_name}. {question}"
DEFAULT_REQUEST = "Please provide the requested information."

# Emergency
SAFETY_FIRST = """🚨 **SAFETY FIRST** - If this is a life-threatening emergency, please call {emergency_services_number} immediately.

If the situation involves gas leaks, electrical hazards, or structural collapse, please evacuate the area and contact emergency services first.

Once you're safe, I'll help coordinate our emergency construction response. {question}"""

EMERGENCY_DISPATCH = """🚨 **EMERGENCY DISPATCH INITIATED**

Your emergency request has been processed with the following details:
• **Priority Level**: URGENT
• **Response Team**: Emergency Construction Unit
• **Estimated Arrival**: Within 2 hours
• **Emergency Contact**: {emergency_contact_number}

**What Happens Next:**
1. Our emergency coordinator will call you within 15 minutes
2. Emergency team will be dispatched to your location
3. Assessment and immediate stabilization will begin
4. Detailed repair plan will be provided on-site

Please keep your phone available and ensure safe access for our team. Stay safe, {user_name}!"""

# Consultation
CONSULTATION_CONFIRMATION = """Let me confirm your consultation request, {user_name}:

📋 **Consultation Details:**
• **Type**: {consultation_type}
• **Timing**: {preferred_timing}
• **Contact**: {contact_details}

Our team will contact you to finalize the scheduling. Is there anything you'd like to add or change?"""

CONFIRMATION_DEFAULTS = {
    "consultation_type": "Standard consultation",
    "preferred_timing": "To be scheduled",
    "contact_details": "Provided",
}

# Project planning
PLANNING_SUMMARY = """Here's a summary of what you've shared, {user_name}:

📋 **Project Planning Summary:**
• **Goals**: {project_goals}
• **Space**: {space_requirements}
• **Design**: {design_preferences}
• **Materials**: {material_preferences}
• **Sustainability**: {sustainability_concerns}"""

PLANNING_SUMMARY_DEFAULT = "Not specified"

# Completion
FLOW_COMPLETIONS = {
    "quote_collection": """Excellent, {user_name}! I have all the information needed for your project quote.

**Next Steps:**
• Our estimating team will review your requirements
• You'll receive a detailed quote within 2-3 business days
• A project specialist will contact you to discuss details
• We'll schedule a site visit if needed

Thank you for choosing {company_name}! Is there anything else I can help you with today?""",

    "emergency_assessment": """Your emergency response request has been processed, {user_name}.

**Emergency Response Activated:**
• Our emergency team has been dispatched
• You should receive a call within 15 minutes
• Team arrival estimated within 2 hours
• Emergency contact number: {emergency_contact_number}

Please keep your phone available for our emergency coordinator. Stay safe!""",

    "consultation_scheduling": """Perfect, {user_name}! Your consultation has been requested.

**What Happens Next:**
• Our scheduling team will contact you within 4 hours
• We'll confirm your preferred time and format
• You'll receive a calendar invitation with details
• Preparation materials will be sent if needed

Looking forward to discussing your project in detail!""",

    "project_planning": """Thank you for the detailed project information, {user_name}!

**Your Project Planning Session:**
• Our design team will review your requirements
• We'll prepare initial concepts and suggestions
• A senior project manager will be assigned
• You'll receive a planning summary within 5 days

This comprehensive approach ensures your project exceeds expectations!""",
}

DEFAULT_COMPLETION = "Thank you for providing that information, {user_name}! Our team will review everything and get back to you soon."
