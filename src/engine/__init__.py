"""Filtering, pagination and facet computation over parsed regulations.

This package contains:
- filters.py: Multi-predicate filter engine
- pagination.py: Fixed-size result pages
- facets.py: Option lists for filter widgets
"""
from engine.facets import (
    APPLICABILITIES,
    CURRENCIES,
    OBLIGATIONS,
    REGIONS,
    build_facets,
    distinct_countries,
    distinct_tags,
    search_options,
)
from engine.filters import (
    filter_regulations,
    matches,
    matches_any_tag,
    matches_extra_jurisdictional,
    matches_search,
    matches_threshold,
    matches_year_range,
    publication_year,
)
from engine.pagination import DEFAULT_PAGE_SIZE, Page, paginate

__all__ = [
    # Filters
    "filter_regulations",
    "matches",
    "matches_any_tag",
    "matches_extra_jurisdictional",
    "matches_search",
    "matches_threshold",
    "matches_year_range",
    "publication_year",
    # Pagination
    "DEFAULT_PAGE_SIZE",
    "Page",
    "paginate",
    # Facets
    "APPLICABILITIES",
    "CURRENCIES",
    "OBLIGATIONS",
    "REGIONS",
    "build_facets",
    "distinct_countries",
    "distinct_tags",
    "search_options",
]
