from __future__ import annotations

import csv
import io
import sys
from pathlib import Path

# Add src directory to path immediately on import - MUST be before any other imports
_src_dir = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_src_dir)
if _src_str not in sys.path:
    sys.path.insert(0, _src_str)

import pytest

from models.regulation import REGULATION_COLUMNS, Regulation

ROW_WIDTH = 36

PREAMBLE = [
    ["", "ESG Regulations Database"],
    ["", "Exported", "2024-06-01"],
    ["", "Source", "Reporting Exchange"],
    ["", "Meta ID", "Country Code", "Name"],
]


def pytest_configure(config: pytest.Config) -> None:
    """Ensure src directory is on sys.path so tests can import modules."""
    if _src_str not in sys.path:
        sys.path.insert(0, _src_str)


def make_row(**fields: str) -> list[str]:
    """Build a raw 36-position export row from Regulation attribute names."""
    row = [""] * ROW_WIDTH
    positions = {attr: pos for pos, attr in REGULATION_COLUMNS}
    for attr, value in fields.items():
        row[positions[attr]] = value
    return row


def to_csv(rows: list[list[str]], line_ending: str = "\r\n") -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator=line_ending)
    writer.writerows(rows)
    return buf.getvalue()


@pytest.fixture
def sample_rows() -> list[list[str]]:
    return [
        make_row(
            meta_id="reg/0001",
            country_code="EU",
            name="Corporate Sustainability Reporting Directive",
            alias="CSRD",
            authority="European Commission",
            region="Europe",
            country="European Union",
            summary="Requires large companies to report on sustainability, in detail.",
            employee_count="250",
            currency="EUR",
            turnover="40",
            balance_sheet="20",
            non_eu_applies="Yes",
            obligation="Mandatory",
            environmental="Climate Risk;Water",
            social="Human Rights",
            governance="Board Diversity",
            publication_date="14/12/2022",
            entry_into_force="05/01/2023",
            applicability="Financial Institutions; Others",
            sector="Banking;Insurance;Energy;Mining",
            related_regulations="Sustainable Finance Disclosure Regulation; EU Taxonomy",
        ),
        make_row(
            meta_id="reg/0002",
            country_code="EU",
            name="Sustainable Finance Disclosure Regulation",
            alias="SFDR",
            authority="European Commission",
            region="Europe",
            country="European Union",
            employee_count="500",
            non_eu_applies="No",
            obligation="Mandatory",
            environmental="Climate",
            publication_date="2019-11-27",
            applicability="Investment Managers",
            sector="Asset Management",
        ),
        make_row(
            meta_id="reg/0003",
            country_code="US",
            name="Climate Disclosure Rule",
            authority="SEC",
            region="North America",
            country="United States",
            employee_count="1,000",
            turnover="n/a",
            non_eu_applies="Unknown",
            obligation="Voluntary",
            social="Labour Standards",
            publication_date="2010-03-06",
            sector="Banking",
        ),
        make_row(
            meta_id="reg/0004",
            country_code="JP",
            name="Stewardship Code",
            authority="FSA",
            region="Asia Pacific",
            country="Japan",
            obligation="Comply or Explain",
            governance="Stewardship",
            publication_date="March 2014",
        ),
    ]


@pytest.fixture
def sample_csv(sample_rows: list[list[str]]) -> str:
    return to_csv(PREAMBLE + sample_rows)


@pytest.fixture
def sample_regulations(sample_rows: list[list[str]]) -> list[Regulation]:
    return [Regulation.from_row(row) for row in sample_rows]


@pytest.fixture
def sample_file(tmp_path: Path, sample_csv: str) -> Path:
    path = tmp_path / "regulations.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path
