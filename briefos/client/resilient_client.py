"""
Consumer-side HTTP client for the brief service.

Masks transient failures while the service starts up: a request that
raises, or that answers with something other than JSON (an HTML error
page from a proxy, for example), is retried a fixed number of times with
a fixed delay. A JSON error payload is a real answer and is not retried.

Retrying ``generate_brief`` after a partial success can store the brief
twice; there is no idempotency key for generation.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from briefos.errors import ClientExhausted, ServiceError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY = 1.0


class NonStructuredResponse(Exception):
    """The server answered, but not with JSON."""

    def __init__(self, status_code: int, content_type: str | None):
        super().__init__(
            f"Server not ready or endpoint not found "
            f"(status {status_code}, content-type {content_type or 'none'})"
        )
        self.status_code = status_code
        self.content_type = content_type


class ResilientClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        timeout_seconds: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self.attempts_made = 0

    async def __aenter__(self) -> ResilientClient:
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type | None,
        exc_val: Exception | None,
        exc_tb: Any,
    ) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "ResilientClient must be used as async context manager"
            )
        return self._client

    async def request(
        self,
        target: str,
        method: str = "GET",
        **options: Any,
    ) -> Any:
        """
        Send a request and return the parsed JSON body.

        Raises:
            ServiceError: the server returned a JSON error payload.
            ClientExhausted: every attempt failed transiently.
        """
        last_error: Exception | None = None
        self.attempts_made = 0

        for attempt in range(1, self.max_attempts + 1):
            self.attempts_made = attempt
            try:
                response = await self.client.request(method, target, **options)
                return self._parse(response)
            except (httpx.HTTPError, NonStructuredResponse) as e:
                last_error = e
                if attempt < self.max_attempts:
                    logger.warning(
                        f"{method} {target} failed (attempt {attempt}/{self.max_attempts}): {e}. "
                        f"Retrying in {self.retry_delay:g}s..."
                    )
                    await asyncio.sleep(self.retry_delay)

        logger.error(f"{method} {target} failed after {self.max_attempts} attempts: {last_error}")
        raise ClientExhausted(
            f"Request failed after {self.max_attempts} attempts. Please try again.",
            attempts=self.max_attempts,
            last_error=last_error,
        ) from last_error

    def _parse(self, response: httpx.Response) -> Any:
        content_type = response.headers.get("content-type")
        if not content_type or "application/json" not in content_type:
            raise NonStructuredResponse(response.status_code, content_type)

        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise NonStructuredResponse(response.status_code, content_type) from e

        if response.is_error or (isinstance(body, dict) and body.get("error")):
            error_body = body if isinstance(body, dict) else {}
            message = (
                error_body.get("error")
                or error_body.get("details")
                or f"Request failed with status {response.status_code}"
            )
            details = error_body.get("details")
            raise ServiceError(
                str(message),
                details=str(details) if details is not None else None,
                status_code=response.status_code,
            )

        return body

    # ============== Brief service endpoints ==============

    async def latest_brief(self) -> dict | None:
        return await self.request("/api/briefs/latest")

    async def list_briefs(self) -> list[dict]:
        return await self.request("/api/briefs")

    async def generate_brief(self) -> dict:
        return await self.request("/api/generate-brief", method="POST")

    async def analyze_competitor(self, headline: str, summary: str = "", source: str = "") -> dict:
        return await self.request(
            "/api/analyze-competitor",
            method="POST",
            json={"headline": headline, "summary": summary, "source": source},
        )

    async def research_topic(self, topic: str, context: str = "") -> dict:
        return await self.request(
            "/api/research-topic",
            method="POST",
            json={"topic": topic, "context": context},
        )
