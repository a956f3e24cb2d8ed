"""
Response normalization for Gemini output.

Models often wrap JSON in markdown code fences. The normalizer removes the
fences, parses the remainder and validates it against a document model.
It does not repair anything else: malformed or mistyped content fails.
"""

import json
import logging
import re
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from briefos.errors import InvalidUpstreamResponse
from briefos.models.brief import BriefDocument

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# ```json / ```JSON / ``` at the very start, ``` at the very end
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")

EXCERPT_LENGTH = 200


def strip_fences(text: str) -> str:
    """Remove one leading and one trailing code fence, then trim."""
    text = text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def _excerpt(text: str) -> str:
    if len(text) <= EXCERPT_LENGTH:
        return text
    return text[:EXCERPT_LENGTH] + "..."


def normalize(raw_text: Optional[str], model: Type[T] = BriefDocument) -> T:
    """
    Parse raw model output into ``model``.

    Raises:
        InvalidUpstreamResponse: empty text, invalid JSON, a non-object
            payload, or a payload that fails schema validation.
    """
    if raw_text is None or not raw_text.strip():
        raise InvalidUpstreamResponse(
            "Failed to parse AI response. The model returned no text."
        )

    text = strip_fences(raw_text)
    logger.debug(f"Cleaned response length: {len(text)} (raw {len(raw_text)})")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error at position {e.pos}: {e.msg}")
        logger.error(f"Raw response: {_excerpt(raw_text)}")
        raise InvalidUpstreamResponse(
            "Failed to parse AI response. The model might have returned invalid JSON.",
            details=f"{e.msg} at position {e.pos}: {_excerpt(text)}",
        ) from e

    if not isinstance(payload, dict):
        raise InvalidUpstreamResponse(
            f"AI response must be a JSON object, got {type(payload).__name__}.",
            details=_excerpt(text),
        )

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        logger.error(f"{model.__name__} validation failed: {problems}")
        raise InvalidUpstreamResponse(
            f"AI response does not match the {model.__name__} schema.",
            details=problems,
        ) from e
