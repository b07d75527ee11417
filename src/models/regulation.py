"""Regulation record model for the explorer.

Defines the immutable Regulation record produced by the CSV parser and the
column layout that maps raw row positions onto its attributes.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict


TAG_SEPARATOR = ";"

# Raw row position -> Regulation attribute. Position 0 is unused by the export.
REGULATION_COLUMNS: tuple[tuple[int, str], ...] = (
    (1, "meta_id"),
    (2, "country_code"),
    (3, "name"),
    (4, "alias"),
    (5, "authority"),
    (6, "source_url"),
    (7, "region"),
    (8, "country"),
    (9, "summary"),
    (10, "conditions"),
    (11, "employee_count"),
    (12, "currency"),
    (13, "turnover"),
    (14, "balance_sheet_currency"),
    (15, "balance_sheet"),
    (16, "public_private"),
    (17, "penalties"),
    (18, "aum"),
    (19, "non_eu_applies"),
    (20, "obligation"),
    (21, "subject_tagging"),
    (22, "environmental"),
    (23, "social"),
    (24, "governance"),
    (25, "publication_date"),
    (26, "entry_into_force"),
    (27, "current_stage"),
    (28, "applicability_date"),
    (29, "first_reporting_expected"),
    (30, "parent_regulation"),
    (31, "relationship_type"),
    (32, "applicability"),
    (33, "sector"),
    (34, "related_regulations"),
    (35, "last_updated"),
)


def split_tags(value: str) -> List[str]:
    """Split a semicolon-separated label list into trimmed, non-empty labels."""
    if not value:
        return []
    return [label.strip() for label in value.split(TAG_SEPARATOR) if label.strip()]


class SubjectTag(BaseModel):
    """A single ESG subject label and the pillar it was tagged under."""
    model_config = ConfigDict(frozen=True)

    label: str
    category: str


class Regulation(BaseModel):
    """One regulatory entry from the regulations export.

    All attributes are kept as text; numeric and date-like fields are parsed on
    demand by the filter engine.
    """
    model_config = ConfigDict(frozen=True)

    # Identity
    meta_id: str = ""
    country_code: str = ""

    # Descriptive
    name: str = ""
    alias: str = ""
    authority: str = ""
    source_url: str = ""
    region: str = ""
    country: str = ""
    summary: str = ""
    conditions: str = ""
    penalties: str = ""

    # Applicability thresholds
    employee_count: str = ""
    currency: str = ""
    turnover: str = ""
    balance_sheet_currency: str = ""
    balance_sheet: str = ""
    public_private: str = ""
    aum: str = ""
    non_eu_applies: str = ""
    obligation: str = ""
    applicability: str = ""
    sector: str = ""

    # Subject classification (semicolon-separated labels)
    subject_tagging: str = ""
    environmental: str = ""
    social: str = ""
    governance: str = ""

    # Temporal
    publication_date: str = ""
    entry_into_force: str = ""
    current_stage: str = ""
    applicability_date: str = ""
    first_reporting_expected: str = ""

    # Relational
    parent_regulation: str = ""
    relationship_type: str = ""
    related_regulations: str = ""
    last_updated: str = ""

    @classmethod
    def from_row(cls, row: List[str]) -> Regulation:
        """Decode a raw row using REGULATION_COLUMNS; missing positions become ""."""
        values = {
            attr: row[pos] if pos < len(row) else ""
            for pos, attr in REGULATION_COLUMNS
        }
        return cls(**values)

    @property
    def environmental_tags(self) -> List[str]:
        return split_tags(self.environmental)

    @property
    def social_tags(self) -> List[str]:
        return split_tags(self.social)

    @property
    def governance_tags(self) -> List[str]:
        return split_tags(self.governance)

    @property
    def sector_tags(self) -> List[str]:
        return split_tags(self.sector)

    @property
    def related_regulation_names(self) -> List[str]:
        # Free-text names, not ids
        return split_tags(self.related_regulations)

    def subject_tags(self) -> List[SubjectTag]:
        """All E/S/G labels in Environmental, Social, Governance order."""
        tags: List[SubjectTag] = []
        for category, labels in (
            ("Environmental", self.environmental_tags),
            ("Social", self.social_tags),
            ("Governance", self.governance_tags),
        ):
            tags.extend(SubjectTag(label=label, category=category) for label in labels)
        return tags
