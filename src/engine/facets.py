"""Filter option lists for the explorer's multi-select widgets."""
from __future__ import annotations

from typing import Iterable, List

from models.regulation import Regulation, split_tags

REGIONS = [
    "Asia Pacific",
    "Europe",
    "North America",
    "South America",
    "Africa & Middle East",
    "International",
]
OBLIGATIONS = ["Mandatory", "Voluntary", "Comply or Explain"]
CURRENCIES = ["USD", "EUR"]
APPLICABILITIES = [
    "Financial Institutions",
    "Credit Institutions",
    "Asset Owners",
    "Investment Managers",
    "Data Providers",
    "Others",
]

TAG_FIELDS = ("environmental", "social", "governance", "sector")


def distinct_values(records: Iterable[Regulation], field: str) -> List[str]:
    """Sorted non-empty values of a single-valued field."""
    return sorted({getattr(reg, field) for reg in records if getattr(reg, field)})


def distinct_countries(records: Iterable[Regulation]) -> List[str]:
    return distinct_values(records, "country")


def distinct_tags(records: Iterable[Regulation], field: str) -> List[str]:
    """Sorted labels found in a semicolon-separated field across all records."""
    if field not in TAG_FIELDS:
        raise ValueError(f"Not a tag field: {field}. Supported: {', '.join(TAG_FIELDS)}")
    labels = set()
    for reg in records:
        labels.update(split_tags(getattr(reg, field)))
    return sorted(labels)


def search_options(options: Iterable[str], term: str) -> List[str]:
    """Narrow an option list by case-insensitive substring, keeping order."""
    needle = (term or "").lower()
    return [opt for opt in options if needle in opt.lower()]


def build_facets(records: Iterable[Regulation]) -> dict[str, List[str]]:
    """All option lists, static ones plus those derived from the dataset."""
    records = list(records)
    return {
        "obligations": list(OBLIGATIONS),
        "regions": list(REGIONS),
        "applicabilities": list(APPLICABILITIES),
        "currencies": list(CURRENCIES),
        "authorities": distinct_values(records, "authority"),
        "countries": distinct_countries(records),
        "sectors": distinct_tags(records, "sector"),
        "environmental_tags": distinct_tags(records, "environmental"),
        "social_tags": distinct_tags(records, "social"),
        "governance_tags": distinct_tags(records, "governance"),
    }
