"""
Persistence for paper records and their quality scores
"""

from storage.paper_store import PaperStore

__all__ = ['PaperStore']
