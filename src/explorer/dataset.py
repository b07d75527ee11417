"""Loading the regulations export and holding explorer state.

A failed load never propagates into the filter engine: it is logged and the
caller gets the previous record sequence (or an empty one) instead.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import structlog

from config.loader import get_page_size
from engine.filters import filter_regulations
from engine.pagination import Page, paginate
from models.criteria import FilterCriteria
from models.regulation import Regulation
from parsers.csv_parser import parse_regulations

logger = structlog.get_logger(__name__)


def load_regulations(
    path: Path | str,
    previous: Optional[Sequence[Regulation]] = None,
) -> List[Regulation]:
    """Read and parse the export at path.

    Returns previous (or []) if the file cannot be read.
    """
    file_path = Path(path)
    logger.info("dataset_load_started", path=str(file_path))
    try:
        # utf-8-sig drops the BOM spreadsheet exports tend to add
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("dataset_load_failed", path=str(file_path), error=str(e))
        return list(previous) if previous is not None else []

    regulations = parse_regulations(text)
    logger.info("dataset_loaded", path=str(file_path), records=len(regulations))
    return regulations


class RegulationDataset:
    """Loaded records plus the current criteria and page.

    Changing the criteria always returns to the first page.
    """

    def __init__(
        self,
        regulations: Sequence[Regulation] = (),
        criteria: Optional[FilterCriteria] = None,
        page_size: Optional[int] = None,
        source: Optional[Path | str] = None,
    ):
        self.regulations: List[Regulation] = list(regulations)
        self.criteria = criteria or FilterCriteria()
        self.page_size = page_size if page_size is not None else get_page_size()
        if self.page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {self.page_size}")
        self.source = Path(source) if source is not None else None
        self.current_page = 1
        self._filtered = filter_regulations(self.regulations, self.criteria)

    @classmethod
    def from_file(cls, path: Path | str, **kwargs) -> RegulationDataset:
        return cls(load_regulations(path), source=path, **kwargs)

    @property
    def filtered(self) -> List[Regulation]:
        return list(self._filtered)

    def apply(self, criteria: FilterCriteria) -> Page:
        """Replace the criteria, re-filter in full and return page 1."""
        self.criteria = criteria
        self._filtered = filter_regulations(self.regulations, criteria)
        self.current_page = 1
        return self.page(1)

    def clear_filters(self) -> Page:
        return self.apply(self.criteria.cleared())

    def page(self, number: Optional[int] = None) -> Page:
        result = paginate(
            self._filtered,
            page=self.current_page if number is None else number,
            page_size=self.page_size,
        )
        self.current_page = result.page
        return result

    def find(self, meta_id: str) -> Optional[Regulation]:
        for reg in self.regulations:
            if reg.meta_id == meta_id:
                return reg
        return None

    def reload(self) -> None:
        """Re-read the source file, keeping the current records if that fails."""
        if self.source is None:
            return
        self.regulations = load_regulations(self.source, previous=self.regulations)
        self._filtered = filter_regulations(self.regulations, self.criteria)
        self.current_page = 1
