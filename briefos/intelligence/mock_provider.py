"""
Demo-mode documents.

Used when no Gemini credential is available, and as fixtures in tests.
Every document here must validate against its model so callers never
need a separate code path for demo output.
"""

from datetime import date
from typing import Optional

from briefos.config.credentials import MISSING_REASON, CredentialDiagnosis
from briefos.models.brief import BattlecardDocument, BriefDocument, ResearchDocument

DEMO_MARKER = "DEMO MODE"

MOCK_OPPORTUNITIES = [
    {
        "id": 1,
        "feature_name": "Real-time Agent Coaching with Sentiment Analysis",
        "description": "Live prompts for agents based on customer sentiment shifts.",
        "why_build_it": "NICE and Genesys have launched this; high demand for reducing agent churn.",
        "competitor_activity": "NICE CXone, Genesys Cloud CX",
    },
    {
        "id": 2,
        "feature_name": "Auto-Summarization for Voice & Digital",
        "description": "Generative AI summaries of all interactions pushed to CRM.",
        "why_build_it": "Standard table stakes feature now. Saves 3-5 mins per call.",
        "competitor_activity": "Salesforce Einstein, Five9 AI Summaries",
    },
    {
        "id": 3,
        "feature_name": "Predictive Engagement Routing",
        "description": "Route based on predicted customer intent and agent proficiency.",
        "why_build_it": "Increases FCR (First Contact Resolution).",
        "competitor_activity": "Genesys Predictive Routing",
    },
]

MOCK_SECTIONS = [
    {
        "title": "Vendor Innovation",
        "items": [
            {
                "headline": "Salesforce Announces New 'Einstein Service Agent' Features",
                "source": "Salesforce Service Cloud AI Blog",
                "url": "https://www.salesforce.com/blog",
                "summary": (
                    "Salesforce has unveiled new autonomous capabilities for Einstein, allowing agents "
                    "to hand off complex tier-2 tickets to AI with higher confidence scores. Key features "
                    "include auto-summarization of voice logs and sentiment-based routing."
                ),
                "tags": ["GenAI", "Agent Assist", "Automation"],
            },
            {
                "headline": "NICE CXone Adds Real-Time Behavioral Coaching",
                "source": "NICE CX AI",
                "url": "https://www.nice.com/blog",
                "summary": (
                    "NICE's latest update integrates real-time sentiment analysis to prompt agents with "
                    "behavioral coaching tips during live calls, aiming to improve NPS scores in "
                    "high-stress interactions."
                ),
                "tags": ["Coaching", "Real-time AI"],
            },
        ],
    },
    {
        "title": "Market Analysis",
        "items": [
            {
                "headline": "The Shift from CCaaS to 'Experience Orchestration'",
                "source": "NoJitter",
                "url": "https://www.nojitter.com",
                "summary": (
                    "Analysts discuss the rebranding of CCaaS platforms as 'Experience Orchestration' "
                    "engines. The focus is shifting from pure call routing to managing the entire "
                    "customer journey across digital and voice channels using predictive AI."
                ),
                "tags": ["Market Trends", "Strategy"],
            },
        ],
    },
    {
        "title": "Thought Leadership",
        "items": [
            {
                "headline": "Why Your AI Strategy Needs a 'Human in the Loop'",
                "source": "Sheila McGee-Smith",
                "url": "https://www.linkedin.com",
                "summary": (
                    "Sheila argues that while automation is surging, the most successful CCaaS "
                    "deployments are those that use AI to augment, not replace, human agents. She "
                    "cites recent failures in fully autonomous support tiers."
                ),
                "tags": ["Strategy", "Human-AI Teaming"],
            },
        ],
    },
]


def mock_brief(
    diagnosis: Optional[CredentialDiagnosis] = None,
    today: Optional[date] = None,
    env_var_name: str = "GEMINI_API_KEY",
) -> BriefDocument:
    """Build the demo brief, explaining why demo mode is active."""
    diagnosis = diagnosis or CredentialDiagnosis(credential=None, reason=MISSING_REASON)
    reason = diagnosis.reason or MISSING_REASON
    today = today or date.today()

    summary = (
        f"⚠️ {DEMO_MARKER} ({reason}): The server could not find a valid {env_var_name} "
        f"in the environment. \n\nDebug Info:\n"
        f"- Env Var Present: {str(diagnosis.env_var_present).lower()}\n"
        f"- Key Length: {diagnosis.key_length}\n\n"
        f"Please ensure you have added the key to the environment or .env file "
        f"and restarted the server."
    )

    return BriefDocument.model_validate({
        "date": today.isoformat(),
        "is_mock": True,
        "executive_summary": summary,
        "top_10_opportunities": MOCK_OPPORTUNITIES,
        "sections": MOCK_SECTIONS,
    })


def mock_battlecard(home_vendor: str = "Sprinklr") -> BattlecardDocument:
    """Demo battlecard for a competitor news item."""
    return BattlecardDocument.model_validate({
        "threat_level": "High",
        "sprinklr_advantage": (
            f"{home_vendor}'s Unified-CXM platform offers native integration across 30+ channels, "
            "whereas this competitor solution likely requires disjointed point-solution integrations."
        ),
        "kill_points": [
            "Ask the prospect: 'How does this new feature share data with your marketing and social teams in real-time?'",
            "Ask: 'Does this require a separate license or login for your agents?'",
            f"Highlight: {home_vendor} AI+ is trained on your specific historical data, not just generic models.",
        ],
        "elevator_pitch": (
            f"While [Competitor] is just catching up with this feature, {home_vendor} has had this "
            "integrated for months. Our advantage is that this feature triggers actions across Marketing "
            "and Care simultaneously, preventing the siloed customer experience that [Competitor] creates."
        ),
        "is_mock": True,
    })


def mock_research() -> ResearchDocument:
    """Demo research summary for a product opportunity."""
    return ResearchDocument.model_validate({
        "summary": "This is a mock research summary because no API key is present.",
        "key_findings": ["Competitor A has a similar feature.", "Market demand is growing."],
        "competitor_landscape": "Demo mode: competitor landscape is not available without an API key.",
        "links": [{"title": "Mock Link", "url": "https://example.com"}],
        "is_mock": True,
    })
