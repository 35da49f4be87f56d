"""Tests for the text feature extractors."""

from datetime import datetime

import pytest

from models.paper import PaperRecord
from scoring.features import (
    count_matches,
    has_quantitative_data,
    has_real_authors,
    has_value,
    is_recent_publication,
    parse_list_field,
    parse_publication_date,
    searchable_text,
)
from utils.scoring_tables import SYNTHETIC_AUTHOR_PATTERNS


class TestParseListField:
    """Tests for serialized list parsing."""

    def test_json_string(self):
        assert parse_list_field('["a", "b"]') == ["a", "b"]

    def test_plain_list(self):
        assert parse_list_field(["a"]) == ["a"]

    def test_malformed_json_is_empty(self):
        assert parse_list_field("[not json") == []

    def test_json_object_is_empty(self):
        assert parse_list_field('{"_quality_score": {}}') == []

    def test_none_is_empty(self):
        assert parse_list_field(None) == []


class TestHasValue:
    """Tests for field presence checks."""

    @pytest.mark.parametrize("value", [None, "", "   ", "[]", [], {}])
    def test_absent_values(self, value):
        assert has_value(value) is False

    @pytest.mark.parametrize("value", ["x", ["a"], 0, 0.0])
    def test_present_values(self, value):
        assert has_value(value) is True


class TestSearchableText:
    """Tests for the combined lowercase search string."""

    def test_combines_title_abstract_keywords(self):
        paper = PaperRecord(id="1", title="Biofilm Study", abstract="An ABSTRACT",
                            keywords='["Geobacter", "MFC"]')
        text = searchable_text(paper)
        assert "biofilm study" in text
        assert "an abstract" in text
        assert "geobacter mfc" in text

    def test_missing_fields(self):
        paper = PaperRecord(id="1", title="Only title")
        assert searchable_text(paper).strip() == "only title"


class TestKeywordMatching:
    """Tests for substring keyword counting."""

    def test_counts_each_phrase_once(self):
        text = "biofilm biofilm power density"
        assert count_matches(text, ["biofilm", "power density", "geobacter"]) == 2


class TestQuantitativeData:
    """Tests for number-plus-unit detection."""

    @pytest.mark.parametrize("text", [
        "a power of 120 mw was reached",
        "voltage 0.65 v",
        "efficiency 45.2 %",
        "run at 30 °c",
        "operated for 14 days",
        "a 250 ml chamber",
    ])
    def test_detects_units(self, text):
        assert has_quantitative_data(text) is True

    def test_no_numbers(self):
        assert has_quantitative_data("a qualitative review of the field") is False


class TestRealAuthors:
    """Tests for the synthetic author check."""

    def test_real_names(self):
        assert has_real_authors('["Jane Smith", "Wei Chen"]', SYNTHETIC_AUTHOR_PATTERNS) is True

    def test_synthetic_name(self):
        authors = '["Jane Smith", "AI Research Assistant"]'
        assert has_real_authors(authors, SYNTHETIC_AUTHOR_PATTERNS) is False

    def test_unparseable_authors(self):
        assert has_real_authors("Smith, J. and Chen, W.", SYNTHETIC_AUTHOR_PATTERNS) is False

    def test_missing_authors(self):
        assert has_real_authors(None, SYNTHETIC_AUTHOR_PATTERNS) is False
        assert has_real_authors("[]", SYNTHETIC_AUTHOR_PATTERNS) is False

    def test_list_input(self):
        assert has_real_authors(["Jane Smith"], SYNTHETIC_AUTHOR_PATTERNS) is True


class TestPublicationDate:
    """Tests for publication date parsing and recency."""

    def test_parse_formats(self):
        assert parse_publication_date("2021") == datetime(2021, 1, 1)
        assert parse_publication_date("2021-05-04") == datetime(2021, 5, 4)
        assert parse_publication_date("2021-05-04T10:00:00Z") == datetime(2021, 5, 4, 10, 0, 0)

    def test_parse_invalid(self):
        assert parse_publication_date("sometime last year") is None
        assert parse_publication_date(None) is None

    def test_recent(self):
        now = datetime(2024, 6, 1)
        assert is_recent_publication("2022-01-01", 5, now) is True
        assert is_recent_publication("2015-01-01", 5, now) is False
        assert is_recent_publication(None, 5, now) is False

    def test_leap_day_reference(self):
        now = datetime(2024, 2, 29)
        assert is_recent_publication("2019-03-01", 5, now) is True
