"""
Keyword lists and lookup tables used by the quality scorer.

The defaults below can be overridden key by key from a JSON file, e.g.::

    {
        "relevance_keywords": ["microbial fuel cell", "biofilm"],
        "journal_impact_factors": {"joule": 41.2}
    }
"""
import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

from utils.categories import GENERIC_SYSTEM_TYPE

logger = logging.getLogger(__name__)

RELEVANCE_KEYWORDS = [
    "microbial fuel cell",
    "mfc",
    "microbial electrolysis cell",
    "mec",
    "microbial desalination cell",
    "mdc",
    "microbial electrosynthesis",
    "mes",
    "bioelectrochemical",
    "electroactive bacteria",
    "geobacter",
    "shewanella",
    "biofilm",
    "electron transfer",
    "bioenergy",
    "wastewater treatment",
    "hydrogen production",
    "current density",
    "power density",
    "coulombic efficiency",
]

METHODOLOGY_PHRASES = [
    "experimental setup",
    "materials and methods",
    "reactor configuration",
    "electrode preparation",
    "inoculum",
    "operating conditions",
    "analytical methods",
    "characterization",
    "measurements",
    "statistical analysis",
]

# Loose markers for the has_detailed_methodology flag
METHODOLOGY_INDICATORS = ["method", "experimental", "procedure", "protocol", "setup"]

STATISTICAL_TERMS = ["statistical", "significance", "p-value"]

HIGH_IMPACT_JOURNALS = [
    "nature",
    "science",
    "nature energy",
    "energy & environmental science",
    "acs energy letters",
    "advanced energy materials",
    "joule",
    "environmental science & technology",
    "water research",
    "bioresource technology",
    "applied energy",
    "renewable and sustainable energy reviews",
]

# Substring matched in order, so specific names come before "nature" and "science"
JOURNAL_IMPACT_FACTORS = {
    "nature energy": 60.9,
    "energy & environmental science": 38.5,
    "environmental science & technology": 11.4,
    "joule": 41.2,
    "advanced energy materials": 29.4,
    "water research": 12.8,
    "bioresource technology": 11.4,
    "nature": 49.9,
    "science": 47.7,
}

REPUTABLE_SOURCES = ["crossref_api", "pubmed_api", "arxiv_api", "local_pdf"]

SYNTHETIC_AUTHOR_PATTERNS = [
    "ai research assistant",
    "automated content generator",
    "ai assistant",
    "content generator",
    "synthetic author",
]


@dataclass
class ScoringTables:
    """All data tables the scorer consults"""
    relevance_keywords: List[str] = field(default_factory=lambda: list(RELEVANCE_KEYWORDS))
    methodology_phrases: List[str] = field(default_factory=lambda: list(METHODOLOGY_PHRASES))
    methodology_indicators: List[str] = field(default_factory=lambda: list(METHODOLOGY_INDICATORS))
    statistical_terms: List[str] = field(default_factory=lambda: list(STATISTICAL_TERMS))
    high_impact_journals: List[str] = field(default_factory=lambda: list(HIGH_IMPACT_JOURNALS))
    journal_impact_factors: Dict[str, float] = field(default_factory=lambda: dict(JOURNAL_IMPACT_FACTORS))
    reputable_sources: List[str] = field(default_factory=lambda: list(REPUTABLE_SOURCES))
    synthetic_author_patterns: List[str] = field(default_factory=lambda: list(SYNTHETIC_AUTHOR_PATTERNS))
    generic_system_type: str = GENERIC_SYSTEM_TYPE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringTables":
        """Overlay the given keys on top of the defaults, validating their shapes"""
        tables = cls()
        types = {f.name: f.type for f in fields(cls)}

        for key, value in data.items():
            if key not in types:
                raise ValueError(f"Unknown scoring table: {key}")

            expected = types[key]
            if expected == List[str]:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ValueError(f"Scoring table '{key}' must be a list of strings")
                value = [v.lower() for v in value]
            elif expected == Dict[str, float]:
                if not isinstance(value, dict):
                    raise ValueError(f"Scoring table '{key}' must be a mapping of name to number")
                try:
                    value = {str(k).lower(): float(v) for k, v in value.items()}
                except (TypeError, ValueError):
                    raise ValueError(f"Scoring table '{key}' must map names to numbers")
            elif not isinstance(value, str):
                raise ValueError(f"Scoring table '{key}' must be a string")

            setattr(tables, key, value)

        if not tables.relevance_keywords:
            raise ValueError("Scoring table 'relevance_keywords' must not be empty")
        if not tables.methodology_phrases:
            raise ValueError("Scoring table 'methodology_phrases' must not be empty")

        return tables

    @classmethod
    def from_file(cls, path: str) -> "ScoringTables":
        """Load table overrides from a JSON file"""
        with open(Path(path), "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid scoring tables file {path}: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Scoring tables file {path} must contain a JSON object")

        logger.info(f"Loaded scoring table overrides from {path}: {', '.join(data)}")
        return cls.from_dict(data)
