"""
Brief document models.

Document models are the validation boundary for model output: they run in
strict mode so a reply with mistyped fields is rejected instead of coerced.
Unknown fields (such as the ``is_mock`` marker) are kept.
"""

import json
import re
from datetime import date as calendar_date
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class DocumentModel(BaseModel):
    """Base for documents parsed from model output."""

    model_config = ConfigDict(strict=True, extra="allow", frozen=True)


class Item(DocumentModel):
    """A single news item inside a brief section."""

    headline: str
    source: str
    url: str
    summary: str
    tags: List[str] = Field(default_factory=list)


class Section(DocumentModel):
    """A titled group of news items."""

    title: str
    items: List[Item] = Field(default_factory=list)


class Opportunity(DocumentModel):
    """A product opportunity synthesized from the brief."""

    id: int
    feature_name: str
    description: str
    why_build_it: str
    competitor_activity: str


class BriefDocument(DocumentModel):
    """
    One daily intelligence brief.

    ``date`` may be missing in a model reply; the orchestrator fills it in
    before the brief is stored.
    """

    date: Optional[str] = None
    executive_summary: str
    sections: List[Section]
    top_10_opportunities: Optional[List[Opportunity]] = None

    @field_validator("date")
    @classmethod
    def _calendar_date(cls, value):
        # Empty means "not given"; the orchestrator fills it in
        if not value:
            return value
        if not ISO_DATE.match(value):
            raise ValueError("date must be a YYYY-MM-DD calendar date")
        calendar_date.fromisoformat(value)
        return value

    @field_validator("top_10_opportunities")
    @classmethod
    def _unique_opportunity_ids(cls, value):
        if value is None:
            return value
        ids = [opportunity.id for opportunity in value]
        if len(ids) != len(set(ids)):
            raise ValueError("opportunity ids must be unique within a brief")
        return value

    @property
    def opportunities(self) -> List[Opportunity]:
        """Opportunities, treating an absent list as empty."""
        return list(self.top_10_opportunities or [])

    @property
    def from_mock(self) -> bool:
        return bool((self.model_extra or {}).get("is_mock", False))

    def with_date(self, date: str) -> "BriefDocument":
        """Return a copy with ``date`` set."""
        return self.model_copy(update={"date": date})

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class BattlecardDocument(DocumentModel):
    """Sales battlecard for one competitor news item."""

    threat_level: Literal["Low", "Medium", "High"]
    sprinklr_advantage: str
    kill_points: List[str]
    elevator_pitch: str


class ResearchLink(DocumentModel):
    title: str
    url: str


class ResearchDocument(DocumentModel):
    """Deep-dive research on one product opportunity."""

    summary: str
    key_findings: List[str]
    competitor_landscape: Optional[str] = None
    links: List[ResearchLink] = Field(default_factory=list)


# ============== Requests ==============

class CompetitorItemRequest(BaseModel):
    """News item to build a battlecard for."""

    headline: str = Field(..., min_length=1)
    summary: str = ""
    source: str = ""


class ResearchTopicRequest(BaseModel):
    """Opportunity to research."""

    topic: str = Field(..., min_length=1)
    context: str = ""


# ============== Persistence ==============

class BriefRecord(BaseModel):
    """A stored brief. ``id`` and ``created_at`` are assigned by the store."""

    model_config = ConfigDict(frozen=True)

    id: int
    date: str
    content: str
    created_at: datetime

    def document(self) -> BriefDocument:
        """Parse the stored content back into a brief."""
        return BriefDocument.model_validate(json.loads(self.content))

    def to_api(self) -> dict:
        """Shape returned by the history endpoints."""
        return {
            "id": self.id,
            "date": self.date,
            "content": self.content,
            "created_at": self.created_at.isoformat(),
        }
