"""
Scrapers package for bibliographic sources
"""
from scrapers.arxiv_scraper import ArXivScraper

__all__ = ['ArXivScraper']
