"""
Canned assistant replies and recommendation templates.

Elicitation prompts are keyed by the controller state the patient was in
when they answered, so the table stays independent of rendering and of
the turn-count logic.
"""

from healthnav.models.triage import ConversationState, UrgencyLevel

GREETING_PROMPT = (
    "Hello! I'm HealthNav, your AI healthcare assistant. I'm here to help assess "
    "your symptoms and guide you to the right care. What symptoms are you "
    "experiencing today?"
)

# Reply sent after a patient turn, keyed by the pre-transition state
ELICITATION_PROMPTS = {
    ConversationState.GREETING: GREETING_PROMPT,
    ConversationState.COLLECTING_CHIEF_COMPLAINT: (
        "How long have you been experiencing these symptoms? Please specify in "
        "hours, days, or weeks. This helps our ML model provide more accurate "
        "predictions."
    ),
    ConversationState.COLLECTING_DURATION: (
        "On a scale of 1-10, with 10 being the most severe, how would you rate "
        "your symptoms? This data will be used in our risk prediction model."
    ),
    ConversationState.COLLECTING_SEVERITY: (
        "Are you experiencing any other symptoms I should know about? The more "
        "information you provide, the more accurate our ML-powered assessment "
        "will be."
    ),
    ConversationState.COLLECTING_ADDITIONAL: (
        "I understand. Can you provide more details about your symptoms? Our AI "
        "system uses these details to provide the most accurate health guidance "
        "possible."
    ),
}

# High-salience replies for urgent turns, keyed by red flag category
URGENT_REPLIES = {
    "cardiac_emergency": (
        "I understand you're experiencing chest pain. This could be serious. Our "
        "AI system is analyzing this now. Are you also experiencing shortness of "
        "breath, nausea, or pain radiating to your arm or jaw? If yes, please "
        "call 911 immediately."
    ),
    "respiratory_emergency": (
        "Difficulty breathing requires immediate attention. Our ML model is "
        "evaluating the severity. Can you describe how severe it is? Are your "
        "lips or fingernails turning blue?"
    ),
}

ANALYSIS_PROMPT = (
    "Thank you for providing that information. Our ML model is now analyzing "
    "your symptoms to provide personalized recommendations..."
)

RECOMMENDATION_TEMPLATES = {
    UrgencyLevel.EMERGENCY: (
        "🚨 EMERGENCY ASSESSMENT\n\n"
        "ML Analysis Findings:\n{findings}\n\n"
        "Recommended Action: Call 911 or go to the nearest emergency room "
        "immediately. Your symptoms require urgent medical attention from "
        "{specialty} specialists."
    ),
    UrgencyLevel.HIGH: (
        "⚠️ HIGH PRIORITY\n\n"
        "ML Analysis Findings:\n{findings}\n\n"
        "Recommended Action: Seek prompt medical attention. Visit an urgent care "
        "center or schedule a same-day appointment with a {specialty} provider."
    ),
    UrgencyLevel.MODERATE: (
        "📋 MODERATE PRIORITY\n\n"
        "ML Analysis Findings:\n{findings}\n\n"
        "Recommended Action: Schedule an appointment with a {specialty} provider "
        "within the next few days for proper evaluation."
    ),
    UrgencyLevel.LOW: (
        "✓ LOW PRIORITY\n\n"
        "ML Analysis Findings:\n{findings}\n\n"
        "Recommended Action: Monitor your symptoms. Consider self-care measures "
        "and schedule a routine check-up with a {specialty} provider if symptoms "
        "persist."
    ),
}

FALLBACK_NOTE = (
    "Note: Our ML service was unavailable, so this assessment was produced by "
    "our rule-based safety checks."
)
