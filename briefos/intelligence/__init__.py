"""
Brief generation pipeline.

Gemini with Google Search grounding produces the brief; the normalizer
turns its reply into validated documents; the mock provider covers demo
mode when no API key is configured.
"""

from .gemini_client import GeminiClient, TextGenerator
from .mock_provider import mock_battlecard, mock_brief, mock_research
from .normalizer import normalize, strip_fences
from .orchestrator import GenerationOrchestrator

__all__ = [
    "GeminiClient",
    "GenerationOrchestrator",
    "TextGenerator",
    "mock_battlecard",
    "mock_brief",
    "mock_research",
    "normalize",
    "strip_fences",
]
