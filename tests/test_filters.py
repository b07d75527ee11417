"""Tests for the multi-predicate filter engine."""
from __future__ import annotations

import pytest

from engine.filters import (
    filter_regulations,
    matches_any_tag,
    matches_extra_jurisdictional,
    matches_search,
    matches_threshold,
    parse_leading_float,
    parse_leading_int,
    publication_year,
)
from models.criteria import FilterCriteria, MatchMode
from models.regulation import Regulation


def _ids(regs: list[Regulation]) -> list[str]:
    return [r.meta_id for r in regs]


@pytest.fixture
def pair() -> list[Regulation]:
    return [
        Regulation(meta_id="reg/A", obligation="Mandatory", region="Europe", authority="X"),
        Regulation(meta_id="reg/B", obligation="Voluntary", region="Europe", authority="Y"),
        Regulation(meta_id="reg/C", obligation="Mandatory", region="Asia Pacific", authority="Z"),
    ]


class TestCombination:
    """AND across groups, OR within a group."""

    def test_default_criteria_keep_everything(self, sample_regulations):
        assert filter_regulations(sample_regulations, FilterCriteria()) == sample_regulations

    def test_and_across_groups(self, pair):
        criteria = FilterCriteria(obligations=["Mandatory"], regions=["Europe"])

        assert _ids(filter_regulations(pair, criteria)) == ["reg/A"]

    def test_or_within_group(self, pair):
        criteria = FilterCriteria(authorities=["X", "Y"])

        assert _ids(filter_regulations(pair, criteria)) == ["reg/A", "reg/B"]

    def test_exact_membership_is_case_sensitive(self, pair):
        criteria = FilterCriteria(regions=["europe"])

        assert filter_regulations(pair, criteria) == []

    def test_country_filter(self, sample_regulations):
        criteria = FilterCriteria(countries=["Japan", "United States"])

        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0003", "reg/0004"]

    def test_idempotent(self, sample_regulations):
        criteria = FilterCriteria(regions=["Europe"], employee_count="300")

        once = filter_regulations(sample_regulations, criteria)
        twice = filter_regulations(once, criteria)

        assert once == twice

    @pytest.mark.parametrize(
        "criteria",
        [
            FilterCriteria(),
            FilterCriteria(search="climate"),
            FilterCriteria(sectors=["Banking"]),
            FilterCriteria(year_range=(2015, 2030)),
            FilterCriteria(extra_jurisdictional="No"),
        ],
    )
    def test_output_is_ordered_subsequence(self, sample_regulations, criteria):
        out = filter_regulations(sample_regulations, criteria)

        positions = [sample_regulations.index(r) for r in out]
        assert positions == sorted(positions)

    def test_accepts_any_iterable(self, sample_regulations):
        out = filter_regulations(iter(sample_regulations), FilterCriteria(regions=["Japan"]))

        assert out == []


class TestSearch:

    def test_case_insensitive_and_trimmed(self, sample_regulations):
        criteria = FilterCriteria(search="  CSRD ")

        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0001"]

    def test_searches_tag_fields(self, sample_regulations):
        criteria = FilterCriteria(search="stewardship")

        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0004"]

    def test_searches_id(self, sample_regulations):
        assert _ids(filter_regulations(sample_regulations, FilterCriteria(search="reg/0002"))) == ["reg/0002"]

    def test_does_not_search_unlisted_fields(self):
        reg = Regulation(meta_id="reg/1", source_url="https://example.org/climate")

        assert not matches_search(reg, "example.org")

    def test_empty_search_is_inactive(self):
        assert matches_search(Regulation(), "")

    def test_term_may_span_fields(self):
        reg = Regulation(meta_id="reg/1", name="Alpha", alias="Beta")

        assert matches_search(reg, "alpha beta")


class TestApplicability:

    def test_substring_membership(self, sample_regulations):
        criteria = FilterCriteria(applicabilities=["Others"])

        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0001"]

    def test_exact_mode_uses_whole_labels(self):
        reg = Regulation(meta_id="reg/1", applicability="Financial Institutions; Others")

        assert matches_any_tag(reg.applicability, ["Others"], MatchMode.EXACT)
        assert not matches_any_tag(reg.applicability, ["Financial"], MatchMode.EXACT)
        assert matches_any_tag(reg.applicability, ["Financial"], MatchMode.SUBSTRING)


class TestThresholds:

    def test_missing_value_passes(self):
        reg = Regulation(meta_id="reg/1")

        assert filter_regulations([reg], FilterCriteria(employee_count="1")) == [reg]

    def test_boundary_is_inclusive(self):
        reg = Regulation(meta_id="reg/1", employee_count="250")

        assert filter_regulations([reg], FilterCriteria(employee_count="250")) == [reg]
        assert filter_regulations([reg], FilterCriteria(employee_count="249")) == []

    def test_thousands_separators_are_stripped(self):
        assert matches_threshold("1,000", "1000", integer=True)
        assert not matches_threshold("1,000", "999", integer=True)

    def test_unparseable_record_value_passes(self, sample_regulations):
        # reg/0003 has turnover "n/a"
        out = filter_regulations(sample_regulations, FilterCriteria(turnover="1"))

        assert "reg/0003" in _ids(out)
        assert "reg/0001" not in _ids(out)

    def test_unparseable_filter_value_is_inactive(self, sample_regulations):
        criteria = FilterCriteria(employee_count="lots", balance_sheet="?")

        assert filter_regulations(sample_regulations, criteria) == sample_regulations

    def test_float_thresholds(self):
        assert matches_threshold("40.5", "40.5")
        assert not matches_threshold("40.5", "40.4")

    def test_leading_number_semantics(self):
        assert matches_threshold("250 employees", "300", integer=True)
        assert not matches_threshold("250 employees", "200", integer=True)

    def test_employee_count_filter_truncates_to_integer(self):
        assert matches_threshold("250", "250.9", integer=True)

    def test_missing_threshold_only_skips_that_predicate(self):
        reg = Regulation(meta_id="reg/1", region="Europe")
        criteria = FilterCriteria(employee_count="10", regions=["Japan"])

        assert filter_regulations([reg], criteria) == []

    def test_all_three_thresholds(self, sample_regulations):
        criteria = FilterCriteria(employee_count="300", turnover="50", balance_sheet="25")

        # reg/0002 needs 500 employees; reg/0003 needs 1,000
        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0001", "reg/0004"]


class TestNumberParsing:

    @pytest.mark.parametrize(
        "text, expected",
        [("250", 250), (" 42abc", 42), ("-3", -3), ("12.9", 12), ("", None), ("n/a", None)],
    )
    def test_parse_leading_int(self, text, expected):
        assert parse_leading_int(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [("40.5m", 40.5), (".5", 0.5), ("1e3", 1000.0), ("EUR 40", None)],
    )
    def test_parse_leading_float(self, text, expected):
        assert parse_leading_float(text) == expected

    def test_only_ascii_digits_are_numbers(self):
        arabic_indic_250 = "\u0662\u0665\u0660"

        assert parse_leading_int(arabic_indic_250) is None
        assert parse_leading_float(arabic_indic_250) is None
        assert matches_threshold(arabic_indic_250, "1", integer=True)


class TestExtraJurisdictional:

    def test_yes(self, sample_regulations):
        out = filter_regulations(sample_regulations, FilterCriteria(extra_jurisdictional="Yes"))

        # reg/0004 has no value, so the predicate does not apply to it
        assert _ids(out) == ["reg/0001", "reg/0004"]

    def test_no_substring_includes_unknown(self, sample_regulations):
        out = filter_regulations(sample_regulations, FilterCriteria(extra_jurisdictional="No"))

        assert _ids(out) == ["reg/0002", "reg/0003", "reg/0004"]

    def test_no_exact_mode(self, sample_regulations):
        criteria = FilterCriteria(extra_jurisdictional="No", match_mode=MatchMode.EXACT)

        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0002", "reg/0004"]

    def test_case_insensitive(self):
        assert matches_extra_jurisdictional("YES, via subsidiaries", "Yes")
        assert not matches_extra_jurisdictional("YES, via subsidiaries", "Yes", MatchMode.EXACT)
        assert matches_extra_jurisdictional(" yes ", "Yes", MatchMode.EXACT)

    def test_unset_choice_is_inactive(self):
        assert matches_extra_jurisdictional("No", None)


class TestPublicationYear:

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("14/12/2022", 2022),
            ("2019-11-27", 2019),
            ("2019", 2019),
            ("01/2020", 1),
            ("5/6/", 5),
            ("March 2014", None),
            ("", None),
            ("0000-01-01", None),
        ],
    )
    def test_extraction(self, value, expected):
        assert publication_year(value) == expected

    def test_range_is_inclusive(self, sample_regulations):
        criteria = FilterCriteria(year_range=(2019, 2022))

        # reg/0003 (2010) is out; reg/0004 has no parseable year and passes
        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0001", "reg/0002", "reg/0004"]

    def test_default_range_starts_in_1950(self):
        old = Regulation(meta_id="reg/1", publication_date="1949-12-31")

        assert filter_regulations([old], FilterCriteria()) == []


class TestTagFilters:

    def test_environmental_substring_matches_longer_tag(self, sample_regulations):
        out = filter_regulations(sample_regulations, FilterCriteria(environmental_tags=["Climate"]))

        assert _ids(out) == ["reg/0001", "reg/0002"]

    def test_environmental_exact(self, sample_regulations):
        criteria = FilterCriteria(environmental_tags=["Climate"], match_mode=MatchMode.EXACT)

        assert _ids(filter_regulations(sample_regulations, criteria)) == ["reg/0002"]

    def test_tag_groups_are_independent(self, sample_regulations):
        criteria = FilterCriteria(social_tags=["Human Rights"], governance_tags=["Stewardship"])

        assert filter_regulations(sample_regulations, criteria) == []

    def test_tag_match_is_case_sensitive(self, sample_regulations):
        assert filter_regulations(sample_regulations, FilterCriteria(social_tags=["human rights"])) == []

    def test_sector_filter(self, sample_regulations):
        out = filter_regulations(sample_regulations, FilterCriteria(sectors=["Banking", "Asset Management"]))

        assert _ids(out) == ["reg/0001", "reg/0002", "reg/0003"]
