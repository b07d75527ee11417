"""Result-list card summaries."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from models.regulation import Regulation

PREVIEW_TAGS = 3
MAX_PREVIEW_TAGS = 6


class RegulationCard(BaseModel):
    """Compact summary of a regulation as shown in the result list."""
    model_config = ConfigDict(frozen=True)

    meta_id: str
    name: str
    country: str = ""
    region: str = ""
    obligation: str = ""
    authority: str = ""
    thresholds: dict[str, str] = Field(default_factory=dict)
    sectors: List[str] = Field(default_factory=list)
    more_sectors: int = 0
    subject_tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_regulation(cls, reg: Regulation) -> RegulationCard:
        thresholds = {
            label: value
            for label, value in (
                ("employee_count", reg.employee_count),
                ("turnover", reg.turnover),
                ("balance_sheet", reg.balance_sheet),
            )
            if value
        }
        sectors = reg.sector_tags
        tags = (
            reg.environmental_tags[:PREVIEW_TAGS]
            + reg.social_tags[:PREVIEW_TAGS]
            + reg.governance_tags[:PREVIEW_TAGS]
        )[:MAX_PREVIEW_TAGS]
        return cls(
            meta_id=reg.meta_id,
            name=reg.name,
            country=reg.country,
            region=reg.region,
            obligation=reg.obligation,
            authority=reg.authority,
            thresholds=thresholds,
            sectors=sectors[:PREVIEW_TAGS],
            more_sectors=max(0, len(sectors) - PREVIEW_TAGS),
            subject_tags=tags,
        )
