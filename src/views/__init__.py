"""Presentation models built from parsed regulations."""
from views.cards import RegulationCard
from views.detail import LabeledValue, RegulationDetail, RelatedRegulation, resolve_related

__all__ = [
    "LabeledValue",
    "RegulationCard",
    "RegulationDetail",
    "RelatedRegulation",
    "resolve_related",
]
