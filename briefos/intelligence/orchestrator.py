"""
Brief generation orchestrator.

Flow for every operation:
1. Resolve a Gemini key (no key -> demo document after a short delay)
2. Call Gemini with a wall-clock timeout
3. Normalize the reply into a validated document
4. For daily briefs only: fill in the date and append to history

Nothing is retried here. Callers decide whether to try again.
"""

import asyncio
import logging
import time
from datetime import date
from typing import Callable, Optional, Type, TypeVar

from pydantic import BaseModel

from briefos.config.credentials import CredentialDiagnosis, CredentialResolver
from briefos.config.settings import Settings
from briefos.errors import UpstreamError, UpstreamTimeout, UpstreamTransportFailure
from briefos.models.brief import (
    BattlecardDocument,
    BriefDocument,
    BriefRecord,
    CompetitorItemRequest,
    ResearchDocument,
    ResearchTopicRequest,
)
from briefos.storage.brief_store import BriefStore

from .gemini_client import TextGenerator, gemini_factory
from .mock_provider import mock_battlecard, mock_brief, mock_research
from .normalizer import normalize
from .prompts import BATTLECARD_PROMPT, DAILY_BRIEF_PROMPT, RESEARCH_PROMPT

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

UpstreamFactory = Callable[[str], TextGenerator]


class GenerationOrchestrator:
    """Runs brief, battlecard and research generation end to end."""

    def __init__(
        self,
        settings: Settings,
        resolver: CredentialResolver,
        store: BriefStore,
        upstream_factory: Optional[UpstreamFactory] = None,
        today: Callable[[], date] = date.today,
    ):
        self.settings = settings
        self.resolver = resolver
        self.store = store
        self.upstream_factory = upstream_factory or gemini_factory(settings.gemini_model)
        self.today = today

    # ============== Operations ==============

    async def generate(self) -> BriefRecord:
        """Generate today's brief, store it and return the stored record."""
        logger.info("Generating brief request received...")
        diagnosis = await self._diagnose()

        if not diagnosis.available:
            logger.warning(f"No valid API key found ({diagnosis.reason}). Generating MOCK brief.")
            await self._simulate_latency()
            document = mock_brief(
                diagnosis,
                today=self.today(),
                env_var_name=self._primary_env_var(),
            )
        else:
            prompt = DAILY_BRIEF_PROMPT.format(today=self.today().isoformat())
            document = await self._call(
                diagnosis,
                prompt,
                BriefDocument,
                use_search=True,
                timeout=self.settings.generation_timeout_seconds,
                label="brief",
            )
            if not document.date:
                document = document.with_date(self.today().isoformat())

        record = await self.store.append(document)
        logger.info(f"Brief {record.id} ready ({'mock' if document.from_mock else 'live'})")
        return record

    async def analyze_competitor(self, item: CompetitorItemRequest) -> BattlecardDocument:
        """Build a sales battlecard for one competitor news item. Not stored."""
        diagnosis = await self._diagnose()
        if not diagnosis.available:
            await self._simulate_latency()
            return mock_battlecard(self.settings.home_vendor)

        prompt = BATTLECARD_PROMPT.format(
            home_vendor=self.settings.home_vendor,
            headline=item.headline,
            source=item.source,
            summary=item.summary,
        )
        return await self._call(
            diagnosis,
            prompt,
            BattlecardDocument,
            use_search=False,
            timeout=self.settings.analysis_timeout_seconds,
            label="battlecard",
        )

    async def research_topic(self, opportunity: ResearchTopicRequest) -> ResearchDocument:
        """Research one product opportunity with search grounding. Not stored."""
        diagnosis = await self._diagnose()
        if not diagnosis.available:
            await self._simulate_latency()
            return mock_research()

        prompt = RESEARCH_PROMPT.format(topic=opportunity.topic, context=opportunity.context)
        return await self._call(
            diagnosis,
            prompt,
            ResearchDocument,
            use_search=True,
            timeout=self.settings.analysis_timeout_seconds,
            label="research",
        )

    # ============== Internals ==============

    async def _call(
        self,
        diagnosis: CredentialDiagnosis,
        prompt: str,
        model: Type[T],
        use_search: bool,
        timeout: float,
        label: str,
    ) -> T:
        """
        Call the provider and validate the reply.

        The timeout bounds how long we wait. Cancelling the awaiting task is
        best-effort: the provider may still finish the request on its side.
        """
        upstream = self.upstream_factory(diagnosis.credential)
        start_time = time.time()

        try:
            raw_text = await asyncio.wait_for(
                upstream.generate_text(prompt, use_search=use_search),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini {label} request timed out after {timeout:g}s")
            raise UpstreamTimeout(
                f"Request timed out after {timeout:g} seconds",
                details=f"The AI provider did not answer the {label} request in time.",
            ) from e
        except UpstreamError:
            raise
        except Exception as e:
            logger.error(f"Gemini {label} request failed: {e}")
            raise UpstreamTransportFailure(
                "AI provider request failed.",
                details=f"{type(e).__name__}: {e}",
            ) from e

        logger.info(f"Gemini {label} reply in {time.time() - start_time:.1f}s")
        return normalize(raw_text, model)

    async def _diagnose(self) -> CredentialDiagnosis:
        # Reads .env from disk
        return await asyncio.to_thread(self.resolver.diagnose)

    async def _simulate_latency(self):
        if self.settings.mock_delay_seconds > 0:
            await asyncio.sleep(self.settings.mock_delay_seconds)

    def _primary_env_var(self) -> str:
        names = self.settings.credential_env_vars
        return names[0] if names else "GEMINI_API_KEY"
