"""
Paper quality scoring package
"""

from scoring.enrichment import CitationSource, CrossRefCitationSource
from scoring.scorer import PaperQualityScorer
from scoring.batch import BatchRunner, PersistenceError

__all__ = [
    'CitationSource',
    'CrossRefCitationSource',
    'PaperQualityScorer',
    'BatchRunner',
    'PersistenceError'
]
