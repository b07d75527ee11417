"""Detail view for a single regulation."""
from __future__ import annotations

from typing import Iterable, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from models.regulation import Regulation

logger = structlog.get_logger(__name__)

DEFAULT_AMOUNT_UNIT = "million"


class LabeledValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class RelatedRegulation(BaseModel):
    """A related regulation named in free text, resolved to a record when possible."""
    model_config = ConfigDict(frozen=True)

    name: str
    meta_id: Optional[str] = None


class RegulationDetail(BaseModel):
    """Everything the detail page renders for one regulation."""
    model_config = ConfigDict(frozen=True)

    regulation: Regulation
    timeline: List[LabeledValue] = Field(default_factory=list)
    thresholds: List[LabeledValue] = Field(default_factory=list)
    sectors: List[str] = Field(default_factory=list)
    subject_tags: dict[str, List[str]] = Field(default_factory=dict)
    related: List[RelatedRegulation] = Field(default_factory=list)

    @classmethod
    def from_regulation(
        cls,
        reg: Regulation,
        regulations: Iterable[Regulation] = (),
    ) -> RegulationDetail:
        """Build the detail view; regulations is used to resolve related names."""
        timeline = _labeled(
            ("Publication Date", reg.publication_date),
            ("Entry into Force", reg.entry_into_force),
            ("Applicability Date", reg.applicability_date),
            ("Current Stage", reg.current_stage),
        )

        unit = reg.currency or DEFAULT_AMOUNT_UNIT
        thresholds = _labeled(
            ("Employee Count", reg.employee_count),
            ("Balance Sheet", f"{reg.balance_sheet} {unit}" if reg.balance_sheet else ""),
            ("Turnover", f"{reg.turnover} {unit}" if reg.turnover else ""),
        )

        grouped: dict[str, List[str]] = {}
        for tag in reg.subject_tags():
            grouped.setdefault(tag.category, []).append(tag.label)

        return cls(
            regulation=reg,
            timeline=timeline,
            thresholds=thresholds,
            sectors=reg.sector_tags,
            subject_tags=grouped,
            related=resolve_related(reg, regulations),
        )


def _labeled(*pairs: tuple[str, str]) -> List[LabeledValue]:
    return [LabeledValue(label=label, value=value) for label, value in pairs if value]


def resolve_related(reg: Regulation, regulations: Iterable[Regulation]) -> List[RelatedRegulation]:
    """Match each related name against loaded records by exact name or alias."""
    names = reg.related_regulation_names
    if not names:
        return []

    index: dict[str, str] = {}
    for other in regulations:
        if other.meta_id == reg.meta_id:
            continue
        for key in (other.name, other.alias):
            if key and key not in index:
                index[key] = other.meta_id

    related = [RelatedRegulation(name=name, meta_id=index.get(name)) for name in names]
    logger.debug(
        "related_resolved",
        meta_id=reg.meta_id,
        related=len(related),
        resolved=sum(1 for r in related if r.meta_id),
    )
    return related
