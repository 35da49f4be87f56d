"""
Paper quality scorer: combines the five sub-scores into one assessment
"""
import asyncio
import dataclasses
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from config import Config
from models.paper import PaperRecord, QualityScore, ScoreBreakdown
from scoring.enrichment import CitationSource, lookup_journal_impact_factor
from scoring.subscores import (
    analyze_breakdown,
    calculate_authenticity_score,
    calculate_completeness_score,
    calculate_impact_score,
    calculate_methodology_score,
    calculate_relevance_score,
)
from utils.scoring_tables import ScoringTables

logger = logging.getLogger(__name__)

SCORE_WEIGHTS = {
    "authenticity": 0.30,
    "relevance": 0.25,
    "completeness": 0.20,
    "impact": 0.15,
    "methodology": 0.10,
}

# Sub-scores below these values trigger recommendations; methodology has none
RECOMMENDATION_THRESHOLDS = {
    "authenticity": 70,
    "relevance": 60,
    "completeness": 70,
    "impact": 50,
}


def calculate_overall_score(scores: Dict[str, float]) -> int:
    """Weighted sum of the sub-scores, rounded half up"""
    total = sum(Decimal(str(weight)) * Decimal(str(scores[name]))
                for name, weight in SCORE_WEIGHTS.items())
    overall = int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(overall, 100))


def generate_recommendations(breakdown: ScoreBreakdown, scores: Dict[str, float]) -> List[str]:
    recommendations = []

    if scores["authenticity"] < RECOMMENDATION_THRESHOLDS["authenticity"]:
        if not breakdown.has_verification_id:
            recommendations.append("Add DOI, PubMed ID, or arXiv ID for verification")
        if not breakdown.has_external_url:
            recommendations.append("Add external URL linking to the actual paper")

    if scores["relevance"] < RECOMMENDATION_THRESHOLDS["relevance"]:
        recommendations.append("Ensure paper is directly related to microbial electrochemical systems")
        recommendations.append("Add more specific MES-related keywords and data")

    if scores["completeness"] < RECOMMENDATION_THRESHOLDS["completeness"]:
        if not breakdown.has_abstract:
            recommendations.append("Add detailed abstract")
        if not breakdown.has_performance_data:
            recommendations.append("Extract performance metrics (power density, current density, efficiency)")
        if not breakdown.has_materials_data:
            recommendations.append("Extract materials information (electrodes, microorganisms)")

    if scores["impact"] < RECOMMENDATION_THRESHOLDS["impact"]:
        recommendations.append("Verify publication in peer-reviewed journal")
        recommendations.append("Check for citation count and journal impact factor")

    return recommendations


class PaperQualityScorer:
    """Scores research papers for authenticity, relevance and data quality"""

    def __init__(self, tables: Optional[ScoringTables] = None,
                 citation_source: Optional[CitationSource] = None,
                 citation_timeout: float = Config.CITATION_TIMEOUT,
                 recent_years: int = Config.RECENT_YEARS):
        self.tables = tables or ScoringTables()
        self.citation_source = citation_source
        self.citation_timeout = citation_timeout
        self.recent_years = recent_years

    async def score_paper(self, paper: PaperRecord, now: Optional[datetime] = None) -> QualityScore:
        breakdown = await self.analyze_breakdown(paper, now)

        scores = {
            "authenticity": calculate_authenticity_score(paper, breakdown, self.tables),
            "relevance": calculate_relevance_score(paper, self.tables),
            "completeness": calculate_completeness_score(paper, breakdown),
            "impact": calculate_impact_score(paper, breakdown, self.tables),
            "methodology": calculate_methodology_score(paper, self.tables),
        }

        return QualityScore(
            overall=calculate_overall_score(scores),
            breakdown=breakdown,
            recommendations=tuple(generate_recommendations(breakdown, scores)),
            **scores,
        )

    async def analyze_breakdown(self, paper: PaperRecord,
                                now: Optional[datetime] = None) -> ScoreBreakdown:
        breakdown = analyze_breakdown(paper, self.tables, now, self.recent_years)

        citation_count = None
        if paper.doi:
            citation_count = await self.lookup_citation_count(paper.doi)

        return dataclasses.replace(
            breakdown,
            citation_count=citation_count,
            journal_impact_factor=lookup_journal_impact_factor(
                paper.journal, self.tables.journal_impact_factors),
        )

    async def lookup_citation_count(self, doi: str) -> Optional[int]:
        """Citation count for a DOI, or None if the source is missing, slow or broken"""
        if self.citation_source is None:
            return None

        try:
            return await asyncio.wait_for(
                self.citation_source.get_citation_count(doi),
                timeout=self.citation_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Citation lookup timed out after {self.citation_timeout}s for {doi}")
        except Exception as e:
            logger.warning(f"Citation lookup failed for {doi}: {e}")
        return None
