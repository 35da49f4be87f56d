"""Pytest configuration and fixtures for the paper quality scorer tests."""

import asyncio
from datetime import datetime
from typing import Dict, Optional

import pytest

from models.paper import PaperRecord
from scoring.enrichment import CitationSource
from utils.scoring_tables import ScoringTables


class StubCitationSource(CitationSource):
    """Citation source returning canned counts per DOI."""

    def __init__(self, counts: Optional[Dict[str, Optional[int]]] = None, default: Optional[int] = None):
        self.counts = counts or {}
        self.default = default
        self.calls = []

    async def get_citation_count(self, doi: str) -> Optional[int]:
        self.calls.append(doi)
        return self.counts.get(doi, self.default)


class FailingCitationSource(CitationSource):
    """Citation source that always raises."""

    async def get_citation_count(self, doi: str) -> Optional[int]:
        raise ConnectionError("bibliographic API unreachable")


class HangingCitationSource(CitationSource):
    """Citation source that never answers in time."""

    async def get_citation_count(self, doi: str) -> Optional[int]:
        await asyncio.sleep(10)
        return 500


@pytest.fixture
def tables():
    """Default scoring tables."""
    return ScoringTables()


@pytest.fixture
def now():
    """Fixed reference time so recency checks are deterministic."""
    return datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def title_only_paper():
    """A record with nothing but an id and a title."""
    return PaperRecord(id="p-empty", title="Untitled record")


@pytest.fixture
def rich_paper():
    """A well documented microbial fuel cell paper."""
    return PaperRecord(
        id="p-rich",
        title="Enhanced power density in microbial fuel cell with Geobacter biofilm anodes",
        authors='["Bruce E. Logan", "Korneel Rabaey"]',
        abstract=(
            "We report a microbial fuel cell (MFC) for wastewater treatment in which a "
            "Geobacter sulfurreducens biofilm on carbon cloth reached a power density of "
            "1250 mW/m2 and a coulombic efficiency of 65%. The experimental setup, electrode "
            "preparation and operating conditions are described, and statistical analysis of "
            "triplicate reactors showed significance (p-value < 0.05). Electron transfer "
            "measurements were performed over 30 days."
        ),
        doi="10.1016/j.watres.2023.120001",
        external_url="https://doi.org/10.1016/j.watres.2023.120001",
        keywords='["bioelectrochemical", "current density"]',
        system_type="MFC",
        power_output=1250.0,
        efficiency=65.0,
        anode_materials='["carbon cloth"]',
        cathode_materials='["Pt/C"]',
        organism_types='["Geobacter sulfurreducens"]',
        source="crossref_api",
        journal="Water Research",
        volume="231",
        issue="4",
        pages="120001",
        publication_date="2023-03-15",
    )
