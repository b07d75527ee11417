"""Filter criteria passed to the filter engine on every evaluation."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from config.loader import get_default_match_mode, get_default_year_floor

def default_year_range() -> Tuple[int, int]:
    """Configured year floor up to the current year."""
    return (get_default_year_floor(), date.today().year)


class MatchMode(str, Enum):
    """How tag-like and Yes/No fields are compared against selections.

    - SUBSTRING: selection is contained anywhere in the raw field. Matches the
      behavior of the published explorer, including its false positives
      ("no" inside "known", "Climate" inside "Climate Risk").
    - EXACT: field is split on ";" and labels are compared whole; Yes/No
      fields must equal "yes"/"no" after normalization.
    """
    SUBSTRING = "substring"
    EXACT = "exact"


def default_match_mode() -> MatchMode:
    return MatchMode(get_default_match_mode())


class FilterCriteria(BaseModel):
    """Immutable bundle of all filter selections evaluated together.

    Empty selections and empty strings mean "inactive".
    """
    model_config = ConfigDict(frozen=True)

    search: str = ""

    # Multi-select groups (OR within a group)
    obligations: Tuple[str, ...] = ()
    authorities: Tuple[str, ...] = ()
    applicabilities: Tuple[str, ...] = ()
    regions: Tuple[str, ...] = ()
    countries: Tuple[str, ...] = ()
    sectors: Tuple[str, ...] = ()
    environmental_tags: Tuple[str, ...] = ()
    social_tags: Tuple[str, ...] = ()
    governance_tags: Tuple[str, ...] = ()

    # Numeric thresholds, kept as the raw user input
    employee_count: str = ""
    turnover: str = ""
    balance_sheet: str = ""

    extra_jurisdictional: Optional[Literal["Yes", "No"]] = None
    year_range: Tuple[int, int] = Field(default_factory=default_year_range)
    match_mode: MatchMode = Field(default_factory=default_match_mode)

    def active_filter_count(self) -> int:
        """Count shown on the filter badge; search and year range are not counted."""
        selected = sum(
            len(group)
            for group in (
                self.obligations,
                self.authorities,
                self.applicabilities,
                self.regions,
                self.countries,
                self.sectors,
                self.environmental_tags,
                self.social_tags,
                self.governance_tags,
            )
        )
        thresholds = sum(1 for v in (self.employee_count, self.turnover, self.balance_sheet) if v)
        return selected + thresholds + (1 if self.extra_jurisdictional else 0)

    def is_default(self) -> bool:
        return self == FilterCriteria(match_mode=self.match_mode)

    def cleared(self) -> FilterCriteria:
        """Reset every selection, keeping the comparison mode."""
        return FilterCriteria(match_mode=self.match_mode)
