"""
Integration tests for the generation orchestrator.

These run the real resolver, normalizer and store with a fake upstream
standing in for Gemini.
"""

import json
from datetime import date

import pytest

TODAY = date(2025, 3, 14)


def build(settings, resolver, store, upstream=None):
    from briefos.intelligence.orchestrator import GenerationOrchestrator

    return GenerationOrchestrator(
        settings,
        resolver,
        store,
        upstream_factory=upstream.factory if upstream else None,
        today=lambda: TODAY,
    )


@pytest.mark.integration
class TestDemoGeneration:
    """Tests for generation without a Gemini key."""

    @pytest.mark.asyncio
    async def test_generates_and_stores_mock_brief(self, settings, demo_resolver, store, fake_upstream):
        """Test demo mode stores a DEMO MODE brief without calling upstream."""
        upstream = fake_upstream(text="never used")
        orchestrator = build(settings, demo_resolver, store, upstream)

        record = await orchestrator.generate()

        assert upstream.calls == []
        assert record.date == "2025-03-14"
        document = record.document()
        assert document.from_mock is True
        assert "DEMO MODE" in document.executive_summary
        assert (await store.latest()).id == record.id

    @pytest.mark.asyncio
    async def test_demo_analysis_and_research(self, settings, demo_resolver, memory_store):
        """Test demo analysis and research return mock documents and store nothing."""
        from briefos.models.brief import CompetitorItemRequest, ResearchTopicRequest

        orchestrator = build(settings, demo_resolver, memory_store)

        battlecard = await orchestrator.analyze_competitor(CompetitorItemRequest(headline="Genesys AI Studio"))
        research = await orchestrator.research_topic(ResearchTopicRequest(topic="Agent coaching"))

        assert battlecard.model_extra["is_mock"] is True
        assert research.model_extra["is_mock"] is True
        assert await memory_store.list() == []


@pytest.mark.integration
class TestLiveGeneration:
    """Tests for generation with a key and a fake upstream."""

    @pytest.mark.asyncio
    async def test_live_brief_is_stored(self, settings, live_resolver, store, fake_upstream, sample_brief_json):
        """Test a live reply is validated and stored."""
        upstream = fake_upstream(text=sample_brief_json)
        orchestrator = build(settings, live_resolver, store, upstream)

        record = await orchestrator.generate()

        assert upstream.keys == [live_resolver.resolve()]
        assert upstream.calls[0]["use_search"] is True
        assert "2025-03-14" in upstream.calls[0]["prompt"]
        assert record.document().from_mock is False
        assert record.document().executive_summary.startswith("Agent assist")
        assert (await store.latest()).id == record.id

    @pytest.mark.asyncio
    async def test_fenced_reply_accepted(self, settings, live_resolver, memory_store, fake_upstream, sample_brief_json):
        """Test a fenced reply is accepted."""
        upstream = fake_upstream(text=f"```json\n{sample_brief_json}\n```")
        record = await build(settings, live_resolver, memory_store, upstream).generate()

        assert record.document().sections[0].title == "Vendor Innovation"

    @pytest.mark.asyncio
    async def test_missing_date_filled_in(self, settings, live_resolver, memory_store, fake_upstream, sample_brief_payload):
        """Test a reply without a date gets today's date."""
        del sample_brief_payload["date"]
        upstream = fake_upstream(text=json.dumps(sample_brief_payload))

        record = await build(settings, live_resolver, memory_store, upstream).generate()

        assert record.date == "2025-03-14"
        assert record.document().date == "2025-03-14"

    @pytest.mark.asyncio
    async def test_model_supplied_date_is_kept(self, settings, live_resolver, memory_store, fake_upstream, sample_brief_payload):
        """Test a date from the model is kept."""
        sample_brief_payload["date"] = "2025-03-13"
        upstream = fake_upstream(text=json.dumps(sample_brief_payload))

        record = await build(settings, live_resolver, memory_store, upstream).generate()

        assert record.date == "2025-03-13"


@pytest.mark.integration
class TestGenerationFailures:
    """Tests that failed generations raise and store nothing."""

    @pytest.mark.asyncio
    async def test_timeout(self, settings, live_resolver, memory_store, fake_upstream, sample_brief_json):
        """Test a slow upstream raises UpstreamTimeout."""
        from briefos.errors import UpstreamTimeout

        settings = settings.model_copy(update={"generation_timeout_seconds": 0.05})
        upstream = fake_upstream(text=sample_brief_json, delay=1)

        with pytest.raises(UpstreamTimeout) as exc_info:
            await build(settings, live_resolver, memory_store, upstream).generate()

        assert exc_info.value.kind == "timeout"
        assert "timed out" in exc_info.value.message
        assert await memory_store.list() == []

    @pytest.mark.asyncio
    async def test_invalid_reply(self, settings, live_resolver, memory_store, fake_upstream):
        """Test prose instead of JSON raises InvalidUpstreamResponse."""
        from briefos.errors import InvalidUpstreamResponse

        upstream = fake_upstream(text="Sorry, I could not find any news today.")

        with pytest.raises(InvalidUpstreamResponse):
            await build(settings, live_resolver, memory_store, upstream).generate()

        assert await memory_store.list() == []

    @pytest.mark.asyncio
    async def test_free_text_date_is_rejected(self, settings, live_resolver, store, fake_upstream, sample_brief_payload):
        """Test a reply whose date is not YYYY-MM-DD is never stored."""
        from briefos.errors import InvalidUpstreamResponse

        sample_brief_payload["date"] = "sometime last week, probably"
        upstream = fake_upstream(text=json.dumps(sample_brief_payload))

        with pytest.raises(InvalidUpstreamResponse) as exc_info:
            await build(settings, live_resolver, store, upstream).generate()

        assert "date" in exc_info.value.details
        assert await store.list() == []

    @pytest.mark.asyncio
    async def test_empty_date_filled_in(self, settings, live_resolver, memory_store, fake_upstream, sample_brief_payload):
        """Test an empty date from the model is replaced with today's date."""
        sample_brief_payload["date"] = ""
        upstream = fake_upstream(text=json.dumps(sample_brief_payload))

        record = await build(settings, live_resolver, memory_store, upstream).generate()

        assert record.date == "2025-03-14"

    @pytest.mark.asyncio
    async def test_empty_reply(self, settings, live_resolver, memory_store, fake_upstream):
        """Test an empty reply raises InvalidUpstreamResponse."""
        from briefos.errors import InvalidUpstreamResponse

        with pytest.raises(InvalidUpstreamResponse):
            await build(settings, live_resolver, memory_store, fake_upstream(text=None)).generate()

    @pytest.mark.asyncio
    async def test_transport_failure_is_wrapped(self, settings, live_resolver, memory_store, fake_upstream):
        """Test arbitrary upstream exceptions become transport failures."""
        from briefos.errors import UpstreamTransportFailure

        upstream = fake_upstream(error=ConnectionError("network unreachable"))

        with pytest.raises(UpstreamTransportFailure) as exc_info:
            await build(settings, live_resolver, memory_store, upstream).generate()

        assert "network unreachable" in exc_info.value.details
        assert await memory_store.list() == []

    @pytest.mark.asyncio
    async def test_upstream_errors_pass_through(self, settings, live_resolver, memory_store, fake_upstream):
        """Test upstream errors are re-raised unchanged."""
        from briefos.errors import UpstreamTransportFailure

        original = UpstreamTransportFailure("AI provider request failed.", details="quota")
        upstream = fake_upstream(error=original)

        with pytest.raises(UpstreamTransportFailure) as exc_info:
            await build(settings, live_resolver, memory_store, upstream).generate()

        assert exc_info.value is original


@pytest.mark.integration
class TestLiveAnalysis:
    """Tests for battlecards and topic research."""

    @pytest.mark.asyncio
    async def test_battlecard_without_search(self, settings, live_resolver, memory_store, fake_upstream, sample_battlecard_json):
        """Test battlecards skip search grounding."""
        from briefos.models.brief import CompetitorItemRequest

        upstream = fake_upstream(text=sample_battlecard_json)
        item = CompetitorItemRequest(headline="Genesys AI Studio", summary="Bots", source="CXToday")

        battlecard = await build(settings, live_resolver, memory_store, upstream).analyze_competitor(item)

        assert battlecard.threat_level == "Medium"
        assert upstream.calls[0]["use_search"] is False
        assert "Genesys AI Studio" in upstream.calls[0]["prompt"]
        assert settings.home_vendor in upstream.calls[0]["prompt"]
        assert await memory_store.list() == []

    @pytest.mark.asyncio
    async def test_research_with_search(self, settings, live_resolver, memory_store, fake_upstream, sample_research_json):
        """Test research uses search grounding."""
        from briefos.models.brief import ResearchTopicRequest

        upstream = fake_upstream(text=sample_research_json)
        opportunity = ResearchTopicRequest(topic="Real-time coaching", context="NICE launched it")

        research = await build(settings, live_resolver, memory_store, upstream).research_topic(opportunity)

        assert research.key_findings == ["NICE leads", "Genesys follows"]
        assert upstream.calls[0]["use_search"] is True
        assert "Real-time coaching" in upstream.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_analysis_timeout(self, settings, live_resolver, memory_store, fake_upstream, sample_battlecard_json):
        """Test analysis uses its own timeout."""
        from briefos.errors import UpstreamTimeout
        from briefos.models.brief import CompetitorItemRequest

        settings = settings.model_copy(update={"analysis_timeout_seconds": 0.05})
        upstream = fake_upstream(text=sample_battlecard_json, delay=1)

        with pytest.raises(UpstreamTimeout):
            await build(settings, live_resolver, memory_store, upstream).analyze_competitor(
                CompetitorItemRequest(headline="Genesys AI Studio")
            )
