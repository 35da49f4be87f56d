"""Tests for loadable scoring tables."""

import json

import pytest

from models.paper import PaperRecord
from scoring.enrichment import lookup_journal_impact_factor
from scoring.subscores import calculate_relevance_score
from utils.scoring_tables import RELEVANCE_KEYWORDS, ScoringTables


class TestScoringTables:
    """Tests for defaults and JSON overrides."""

    def test_defaults(self):
        tables = ScoringTables()
        assert tables.relevance_keywords == RELEVANCE_KEYWORDS
        assert len(tables.methodology_phrases) == 10
        assert "crossref_api" in tables.reputable_sources

    def test_defaults_are_independent_copies(self):
        first = ScoringTables()
        first.relevance_keywords.append("algae")
        assert "algae" not in ScoringTables().relevance_keywords

    def test_override_keywords_changes_relevance(self):
        tables = ScoringTables.from_dict({"relevance_keywords": ["Algal Biofilm", "photobioreactor"]})
        paper = PaperRecord(id="1", title="An algal biofilm in a photobioreactor")
        assert tables.relevance_keywords == ["algal biofilm", "photobioreactor"]
        assert calculate_relevance_score(paper, tables) == 60

    def test_override_impact_factors(self):
        tables = ScoringTables.from_dict({"journal_impact_factors": {"Chemical Engineering Journal": "15.1"}})
        assert lookup_journal_impact_factor("Chemical Engineering Journal", tables.journal_impact_factors) == 15.1
        assert lookup_journal_impact_factor("Nature", tables.journal_impact_factors) is None

    @pytest.mark.parametrize("data", [
        {"unknown_table": []},
        {"relevance_keywords": "biofilm"},
        {"relevance_keywords": []},
        {"journal_impact_factors": ["nature"]},
        {"journal_impact_factors": {"nature": "high"}},
        {"generic_system_type": 3},
    ])
    def test_invalid_overrides(self, data):
        with pytest.raises(ValueError):
            ScoringTables.from_dict(data)

    def test_from_file(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"high_impact_journals": ["joule"]}), encoding="utf-8")
        tables = ScoringTables.from_file(str(path))
        assert tables.high_impact_journals == ["joule"]

    def test_from_file_rejects_bad_json(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            ScoringTables.from_file(str(path))


class TestJournalImpactFactor:
    """Tests for the static impact factor lookup."""

    @pytest.mark.parametrize("journal,expected", [
        ("Nature Energy", 60.9),
        ("Nature Communications", 49.9),
        ("Environmental Science & Technology", 11.4),
        ("Bioresource Technology", 11.4),
        ("Journal of Power Sources", None),
        (None, None),
    ])
    def test_lookup(self, journal, expected):
        assert lookup_journal_impact_factor(journal, ScoringTables().journal_impact_factors) == expected
