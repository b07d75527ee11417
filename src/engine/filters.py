"""Multi-predicate filter engine for regulation records.

A record passes when it satisfies every active predicate (AND across groups);
inside a multi-select group any selected value is enough (OR within a group).
Empty selections are inactive. Numeric and date values are parsed leniently
and unparseable inputs never raise: they simply leave the predicate inactive
or let the record through.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Tuple

import structlog

from models.criteria import FilterCriteria, MatchMode
from models.regulation import Regulation, split_tags

logger = structlog.get_logger(__name__)

SEARCH_FIELDS: Tuple[str, ...] = (
    "meta_id",
    "name",
    "alias",
    "authority",
    "country",
    "region",
    "summary",
    "conditions",
    "obligation",
    "applicability",
    "environmental",
    "social",
    "governance",
    "sector",
    "penalties",
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def parse_leading_int(value: str) -> Optional[int]:
    """Parse the integer at the start of value ("250 employees" -> 250)."""
    match = _INT_PREFIX.match(value or "")
    if not match:
        return None
    return int(match.group(1))


def parse_leading_float(value: str) -> Optional[float]:
    """Parse the decimal number at the start of value ("40.5m" -> 40.5)."""
    match = _FLOAT_PREFIX.match(value or "")
    if not match:
        return None
    return float(match.group(1))


def _strip_thousands(value: str) -> str:
    return value.replace(",", "")


# ---------------------------------------------------------------------------
# Individual predicates
# ---------------------------------------------------------------------------

def searchable_text(reg: Regulation) -> str:
    return " ".join(getattr(reg, name) for name in SEARCH_FIELDS).lower()


def matches_search(reg: Regulation, search: str) -> bool:
    if not search:
        return True
    term = search.strip().lower()
    return term in searchable_text(reg)


def matches_exact(value: str, selected: Sequence[str]) -> bool:
    if not selected:
        return True
    return value in selected


def matches_any_tag(value: str, selected: Sequence[str], mode: MatchMode = MatchMode.SUBSTRING) -> bool:
    """Tag-style membership against a semicolon-separated field.

    SUBSTRING mode checks containment in the raw field, so "Climate" also
    matches "Climate Risk". EXACT mode compares whole, trimmed labels.
    """
    if not selected:
        return True
    if mode == MatchMode.EXACT:
        labels = set(split_tags(value))
        return any(tag in labels for tag in selected)
    return any(tag in value for tag in selected)


def matches_threshold(record_value: str, filter_value: str, integer: bool = False) -> bool:
    """Keep records whose stated threshold is at or below the filter value.

    Records without a parseable value always pass; an unparseable filter
    value leaves the predicate inactive.
    """
    if not filter_value or not record_value:
        return True
    parse = parse_leading_int if integer else parse_leading_float
    record_number = parse(_strip_thousands(record_value))
    filter_number = parse(_strip_thousands(filter_value))
    if record_number is None or filter_number is None:
        return True
    return not filter_number < record_number


def matches_extra_jurisdictional(
    value: str,
    choice: Optional[str],
    mode: MatchMode = MatchMode.SUBSTRING,
) -> bool:
    """Yes/No filter on the "applies outside the jurisdiction" field.

    In SUBSTRING mode "No" is satisfied by any value containing "no", so
    "Unknown" or "Not yet determined" pass it too.
    """
    if not choice or not value:
        return True
    wanted = choice.lower()
    normalized = value.strip().lower()
    if mode == MatchMode.EXACT:
        return normalized == wanted
    return wanted in normalized


def publication_year(value: str) -> Optional[int]:
    """Extract the year from "dd/mm/yyyy" or "yyyy-mm-dd" style dates."""
    if not value:
        return None
    slash_parts = value.split("/")
    if len(slash_parts) > 2 and slash_parts[2]:
        candidate = slash_parts[2]
    else:
        candidate = value.split("-")[0]
    year = parse_leading_int(candidate)
    # A zero year is treated as unknown
    return year or None


def matches_year_range(value: str, year_range: Tuple[int, int]) -> bool:
    year = publication_year(value)
    if year is None:
        return True
    low, high = year_range
    return low <= year <= high


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def matches(reg: Regulation, criteria: FilterCriteria) -> bool:
    """True if the record satisfies every active predicate in criteria."""
    mode = criteria.match_mode

    if not matches_search(reg, criteria.search):
        return False

    if not matches_exact(reg.obligation, criteria.obligations):
        return False
    if not matches_exact(reg.authority, criteria.authorities):
        return False
    if not matches_exact(reg.region, criteria.regions):
        return False
    if not matches_exact(reg.country, criteria.countries):
        return False

    if not matches_any_tag(reg.applicability, criteria.applicabilities, mode):
        return False

    if not matches_threshold(reg.employee_count, criteria.employee_count, integer=True):
        return False
    if not matches_threshold(reg.turnover, criteria.turnover):
        return False
    if not matches_threshold(reg.balance_sheet, criteria.balance_sheet):
        return False

    if not matches_extra_jurisdictional(reg.non_eu_applies, criteria.extra_jurisdictional, mode):
        return False

    if not matches_year_range(reg.publication_date, criteria.year_range):
        return False

    if not matches_any_tag(reg.environmental, criteria.environmental_tags, mode):
        return False
    if not matches_any_tag(reg.social, criteria.social_tags, mode):
        return False
    if not matches_any_tag(reg.governance, criteria.governance_tags, mode):
        return False

    if not matches_any_tag(reg.sector, criteria.sectors, mode):
        return False

    return True


def filter_regulations(
    records: Iterable[Regulation],
    criteria: FilterCriteria,
) -> List[Regulation]:
    """Return the records matching criteria, in their original order.

    Args:
        records: Full record sequence.
        criteria: Active filter selections.

    Returns:
        Ordered subsequence of records.
    """
    records = list(records)
    filtered = [reg for reg in records if matches(reg, criteria)]

    logger.debug(
        "filter_applied",
        total=len(records),
        matched=len(filtered),
        active_filters=criteria.active_filter_count(),
        search=bool(criteria.search),
        match_mode=criteria.match_mode.value,
    )
    return filtered
