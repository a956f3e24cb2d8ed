"""
BriefOS - Daily CCaaS Intelligence Brief Service
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from briefos import __version__
from briefos.app.routers import api
from briefos.config.credentials import CredentialResolver
from briefos.config.settings import Settings, get_settings
from briefos.config.startup_validation import run_startup_validation
from briefos.intelligence.orchestrator import GenerationOrchestrator, UpstreamFactory
from briefos.storage.brief_store import BriefStore
from briefos.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def _log_loop_exception(loop, context):
    """Last-resort handler: log stray task errors instead of dying."""
    exc = context.get("exception")
    logger.error(f"Unhandled error in background task: {context.get('message')}", exc_info=exc)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[BriefStore] = None,
    resolver: Optional[CredentialResolver] = None,
    upstream_factory: Optional[UpstreamFactory] = None,
    print_summary: bool = True,
) -> FastAPI:
    if settings is None:
        load_dotenv()
        settings = get_settings()
    configure_logging(settings)

    resolver = resolver or CredentialResolver(settings)
    store = store or BriefStore(settings)
    orchestrator = GenerationOrchestrator(settings, resolver, store, upstream_factory=upstream_factory)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        asyncio.get_running_loop().set_exception_handler(_log_loop_exception)
        app.state.validation = await asyncio.to_thread(
            run_startup_validation, resolver, store, print_summary
        )
        logger.info(f"{settings.app_name} ready (gemini={app.state.validation.services['Gemini API'].status.value}, store={store.mode})")
        yield
        logger.info(f"Shutting down {settings.app_name}...")

    app = FastAPI(title=settings.app_name, version=__version__, debug=settings.debug, lifespan=lifespan)
    app.state.settings = settings
    app.state.resolver = resolver
    app.state.store = store
    app.state.orchestrator = orchestrator
    app.state.validation = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        if request.url.path.startswith("/api"):
            logger.info(f"[API] {request.method} {request.url.path}")
        return await call_next(request)

    app.include_router(api.router, prefix="/api")

    # Catch-all so unknown API routes answer JSON instead of falling through
    @app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
    async def api_not_found(path: str):
        logger.info(f"[API] 404 Not Found: /api/{path}")
        return JSONResponse(status_code=404, content={"error": "API route not found"})

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=400, content={"error": "Invalid request", "details": problems})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception(f"[API] Unhandled error: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal Server Error", "details": str(exc)})

    @app.get("/health")
    async def health():
        diagnosis = await asyncio.to_thread(resolver.diagnose)
        return {"status": "healthy", "mode": diagnosis.mode}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("briefos.app.main:create_app", factory=True, host="0.0.0.0", port=3000)
