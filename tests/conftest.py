"""
Pytest configuration and fixtures for BriefOS tests.
"""

import asyncio
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment
os.environ['TESTING'] = '1'

# Shaped like a real Google key, but not one
FAKE_GOOGLE_KEY = "AIzaSyD3m0K3yF0rT3st1ngPurp0s3sOnly12"


# ============================================================
# Settings / Storage Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def clean_briefos_logger():
    """Drop handlers configure_logging attaches during a test."""
    import logging

    logger = logging.getLogger("briefos")
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the developer's .env and real database."""
    from briefos.config.settings import get_settings

    return get_settings(
        _env_file=None,
        db_path=str(tmp_path / "briefs.db"),
        dotenv_path=str(tmp_path / "missing.env"),
        log_dir=str(tmp_path / "logs"),
        json_logs=False,
        mock_delay_seconds=0,
        generation_timeout_seconds=2,
        analysis_timeout_seconds=2,
    )


@pytest.fixture
def store(settings):
    """A fresh SQLite-backed brief store."""
    from briefos.storage.brief_store import BriefStore

    return BriefStore(settings)


@pytest.fixture
def memory_store(settings):
    """A brief store that never touches disk."""
    from briefos.storage.brief_store import BriefStore, InMemoryBriefLog

    return BriefStore(settings, backend=InMemoryBriefLog())


@pytest.fixture
def demo_resolver(settings):
    """Resolver that sees an empty environment."""
    from briefos.config.credentials import CredentialResolver

    return CredentialResolver(settings, environ={})


@pytest.fixture
def live_resolver(settings):
    """Resolver that finds a key in GEMINI_API_KEY."""
    from briefos.config.credentials import CredentialResolver

    return CredentialResolver(settings, environ={"GEMINI_API_KEY": FAKE_GOOGLE_KEY})


# ============================================================
# Upstream Fakes
# ============================================================

class FakeUpstream:
    """Stands in for GeminiClient. Records every call."""

    def __init__(self, text: Optional[str] = None, delay: float = 0, error: Optional[Exception] = None):
        self.text = text
        self.delay = delay
        self.error = error
        self.calls: List[dict] = []
        self.keys: List[str] = []

    def factory(self, api_key: str) -> "FakeUpstream":
        self.keys.append(api_key)
        return self

    async def generate_text(self, prompt: str, use_search: bool = False) -> Optional[str]:
        self.calls.append({"prompt": prompt, "use_search": use_search})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_upstream():
    return FakeUpstream


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def sample_brief_payload():
    """A well-formed brief as the model would return it."""
    return {
        "date": "2025-03-14",
        "executive_summary": "Agent assist is becoming table stakes across CCaaS vendors.",
        "sections": [
            {
                "title": "Vendor Innovation",
                "items": [
                    {
                        "headline": "Genesys launches AI Studio",
                        "source": "CXToday",
                        "url": "https://www.cxtoday.com/genesys-ai-studio",
                        "summary": "Genesys bundles generative AI tooling for bot builders.",
                        "tags": ["GenAI", "Bots"],
                    }
                ],
            }
        ],
        "top_10_opportunities": [
            {
                "id": 1,
                "feature_name": "Low-code bot studio",
                "description": "Visual builder for generative bots.",
                "why_build_it": "Genesys just shipped one.",
                "competitor_activity": "Genesys AI Studio",
            }
        ],
    }


@pytest.fixture
def sample_brief_json(sample_brief_payload):
    return json.dumps(sample_brief_payload)


@pytest.fixture
def sample_battlecard_json():
    return json.dumps({
        "threat_level": "Medium",
        "sprinklr_advantage": "Unified codebase across channels.",
        "kill_points": ["Ask about data silos.", "Ask about licensing.", "Ask about AI training data."],
        "elevator_pitch": "They bolt AI on. We built it in.",
    })


@pytest.fixture
def sample_research_json():
    return json.dumps({
        "summary": "Several vendors ship real-time coaching.",
        "key_findings": ["NICE leads", "Genesys follows"],
        "competitor_landscape": "NICE, Genesys, Five9",
        "links": [{"title": "NICE blog", "url": "https://www.nice.com/blog"}],
    })
