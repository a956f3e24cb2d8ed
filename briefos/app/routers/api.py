import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from briefos.errors import BriefOSError
from briefos.intelligence.orchestrator import GenerationOrchestrator
from briefos.models.brief import CompetitorItemRequest, ResearchTopicRequest
from briefos.storage.brief_store import BriefStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_orchestrator(request: Request) -> GenerationOrchestrator:
    return request.app.state.orchestrator


def get_store(request: Request) -> BriefStore:
    return request.app.state.store


def error_response(error: str, details: Optional[str] = None, status_code: int = 500) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def pipeline_error(error: str, e: Exception) -> JSONResponse:
    """500 response for a failed pipeline call; keeps the failure kind visible."""
    if isinstance(e, BriefOSError):
        kind = getattr(e, "kind", None)
        details = e.message
        if e.details:
            details = f"{details} ({e.details})"
        if kind:
            details = f"[{kind}] {details}"
        return error_response(error, details)
    return error_response(error, str(e))


@router.get("/briefs")
async def list_briefs(request: Request):
    try:
        records = await get_store(request).list()
        return [record.to_api() for record in records]
    except Exception as e:
        logger.error(f"Error fetching briefs: {e}")
        return error_response("Failed to fetch briefs", str(e))


@router.get("/briefs/latest")
async def latest_brief(request: Request):
    try:
        record = await get_store(request).latest()
        return record.to_api() if record else None
    except Exception as e:
        logger.error(f"Error fetching latest brief: {e}")
        return error_response("Failed to fetch latest brief", str(e))


@router.post("/generate-brief")
async def generate_brief(request: Request):
    try:
        record = await get_orchestrator(request).generate()
        return {"id": record.id, **record.document().model_dump(mode="json", exclude_none=True)}
    except Exception as e:
        logger.error(f"Error generating brief: {e}")
        return pipeline_error("Failed to generate brief", e)


@router.post("/analyze-competitor")
async def analyze_competitor(item: CompetitorItemRequest, request: Request):
    try:
        battlecard = await get_orchestrator(request).analyze_competitor(item)
        return battlecard.model_dump(mode="json", exclude_none=True)
    except Exception as e:
        logger.error(f"Error analyzing competitor: {e}")
        return pipeline_error("Failed to analyze competitor", e)


@router.post("/research-topic")
async def research_topic(opportunity: ResearchTopicRequest, request: Request):
    try:
        research = await get_orchestrator(request).research_topic(opportunity)
        return research.model_dump(mode="json", exclude_none=True)
    except Exception as e:
        logger.error(f"Error researching topic: {e}")
        return pipeline_error("Failed to research topic", e)


@router.get("/status")
async def api_status(request: Request):
    state = request.app.state
    diagnosis = await asyncio.to_thread(state.resolver.diagnose)
    return {
        "status": "online",
        "mode": diagnosis.mode,
        "credential_reason": diagnosis.reason,
        "store": await state.store.status(),
        "validation": state.validation.as_dict() if state.validation else None,
    }
