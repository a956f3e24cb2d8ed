from .brief import (
    BattlecardDocument,
    BriefDocument,
    BriefRecord,
    CompetitorItemRequest,
    Item,
    Opportunity,
    ResearchDocument,
    ResearchLink,
    ResearchTopicRequest,
    Section,
)

__all__ = [
    "BattlecardDocument",
    "BriefDocument",
    "BriefRecord",
    "CompetitorItemRequest",
    "Item",
    "Opportunity",
    "ResearchDocument",
    "ResearchLink",
    "ResearchTopicRequest",
    "Section",
]
