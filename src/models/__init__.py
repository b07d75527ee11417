"""Record and criteria models shared by the parser, engine and views."""
from models.criteria import (
    FilterCriteria,
    MatchMode,
    default_match_mode,
    default_year_range,
)
from models.regulation import (
    REGULATION_COLUMNS,
    Regulation,
    SubjectTag,
    split_tags,
)

__all__ = [
    "FilterCriteria",
    "MatchMode",
    "default_match_mode",
    "default_year_range",
    "REGULATION_COLUMNS",
    "Regulation",
    "SubjectTag",
    "split_tags",
]
