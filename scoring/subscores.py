"""
Sub-score calculators. Each maps a paper record to a number in [0, 100].
"""
from datetime import datetime
from typing import Optional

from models.paper import PaperRecord, ScoreBreakdown
from scoring.features import (
    contains_any,
    count_matches,
    has_quantitative_data,
    has_real_authors,
    has_value,
    is_recent_publication,
    searchable_text,
)
from utils.scoring_tables import ScoringTables

MAX_SCORE = 100
IMPACT_BASE_SCORE = 30
METHODOLOGY_BASE_SCORE = 40

# (threshold, bonus) pairs, first match wins
CITATION_TIERS = [(100, 30), (50, 20), (10, 10), (0, 5)]
IMPACT_FACTOR_TIERS = [(10, 25), (5, 15), (2, 10), (1, 5)]


def has_performance_data(paper: PaperRecord) -> bool:
    return paper.power_output is not None or paper.efficiency is not None


def has_electrode_data(paper: PaperRecord) -> bool:
    return has_value(paper.anode_materials) or has_value(paper.cathode_materials)


def analyze_breakdown(paper: PaperRecord, tables: ScoringTables,
                      now: Optional[datetime] = None, recent_years: int = 5) -> ScoreBreakdown:
    """Collect the authenticity signals that can be read straight off the record"""
    text = searchable_text(paper)
    return ScoreBreakdown(
        has_verification_id=any(has_value(v) for v in (paper.doi, paper.arxiv_id,
                                                        paper.pubmed_id, paper.ieee_id)),
        has_external_url=has_value(paper.external_url),
        has_abstract=bool(paper.abstract) and len(paper.abstract) > 50,
        has_performance_data=has_performance_data(paper),
        has_materials_data=has_electrode_data(paper) or has_value(paper.organism_types),
        has_recent_publication=is_recent_publication(paper.publication_date, recent_years, now),
        is_from_reputable_source=paper.source in tables.reputable_sources,
        has_detailed_methodology=contains_any(text, tables.methodology_indicators),
    )


def calculate_authenticity_score(paper: PaperRecord, breakdown: ScoreBreakdown,
                                 tables: ScoringTables) -> int:
    score = 0

    # Verification IDs are the strongest signal
    if breakdown.has_verification_id:
        score += 40
    if breakdown.has_external_url:
        score += 20
    if breakdown.is_from_reputable_source:
        score += 20
    if breakdown.has_abstract:
        score += 10
    if has_real_authors(paper.authors, tables.synthetic_author_patterns):
        score += 10

    return min(score, MAX_SCORE)


def calculate_relevance_score(paper: PaperRecord, tables: ScoringTables) -> float:
    text = searchable_text(paper)
    matches = count_matches(text, tables.relevance_keywords)
    score = matches * 60 / len(tables.relevance_keywords)

    if has_value(paper.system_type) and paper.system_type != tables.generic_system_type:
        score += 20
    if has_performance_data(paper):
        score += 15
    if has_electrode_data(paper):
        score += 5

    return min(score, MAX_SCORE)


def calculate_completeness_score(paper: PaperRecord, breakdown: ScoreBreakdown) -> int:
    score = 0

    # Essential bibliographic fields
    if breakdown.has_abstract:
        score += 20
    if breakdown.has_external_url:
        score += 15
    if has_value(paper.authors):
        score += 10
    if has_value(paper.publication_date):
        score += 10

    # Technical data
    if breakdown.has_performance_data:
        score += 20
    if breakdown.has_materials_data:
        score += 15

    # Publication details
    if has_value(paper.journal):
        score += 5
    if has_value(paper.volume) and has_value(paper.issue):
        score += 3
    if has_value(paper.pages):
        score += 2

    return min(score, MAX_SCORE)


def _tier_bonus(value: Optional[float], tiers) -> int:
    if value is None:
        return 0
    for threshold, bonus in tiers:
        if value > threshold:
            return bonus
    return 0


def is_high_impact_journal(journal: Optional[str], tables: ScoringTables) -> bool:
    if not journal:
        return False
    lowered = journal.lower()
    return any(name in lowered for name in tables.high_impact_journals)


def calculate_impact_score(paper: PaperRecord, breakdown: ScoreBreakdown,
                           tables: ScoringTables) -> int:
    """Base score plus citation, impact factor and journal bonuses.

    Citation count and impact factor come from the breakdown; an unknown value
    (None) earns no tier bonus, a known zero earns none either.
    """
    score = IMPACT_BASE_SCORE
    score += _tier_bonus(breakdown.citation_count, CITATION_TIERS)
    score += _tier_bonus(breakdown.journal_impact_factor, IMPACT_FACTOR_TIERS)

    if is_high_impact_journal(paper.journal, tables):
        score += 15

    return min(score, MAX_SCORE)


def calculate_methodology_score(paper: PaperRecord, tables: ScoringTables) -> float:
    score = METHODOLOGY_BASE_SCORE
    text = searchable_text(paper)

    matches = count_matches(text, tables.methodology_phrases)
    score += matches * 40 / len(tables.methodology_phrases)

    if has_quantitative_data(text):
        score += 10
    if contains_any(text, tables.statistical_terms):
        score += 10

    return min(score, MAX_SCORE)
