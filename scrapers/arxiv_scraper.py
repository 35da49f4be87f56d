"""
Collector for bioelectrochemistry papers on arXiv
"""
import asyncio
import logging
import urllib.parse
import xml.etree.ElementTree as ET
from typing import List, Optional

import aiohttp

from config import Config
from models.paper import PaperRecord
from utils.categories import ARXIV_CATEGORIES

logger = logging.getLogger(__name__)

ATOM_NS = {'atom': 'http://www.w3.org/2005/Atom',
           'arxiv': 'http://arxiv.org/schemas/atom'}


class ArXivScraper:
    """Searches the arXiv API and turns entries into paper records"""

    BASE_URL = Config.ARXIV_API_URL
    ABS_BASE_URL = "https://arxiv.org/abs"
    DEFAULT_QUERY = 'all:"microbial fuel cell" OR all:bioelectrochemical OR all:"microbial electrolysis"'

    def __init__(self, timeout: float = 30):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.session = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    def construct_query_url(self, query: Optional[str] = None, max_papers: int = 50) -> str:
        """Construct arXiv API query URL"""
        params = {
            'search_query': query or self.DEFAULT_QUERY,
            'start': 0,
            'max_results': max_papers,
            'sortBy': 'submittedDate',
            'sortOrder': 'descending'
        }
        return f"{self.BASE_URL}?" + urllib.parse.urlencode(params)

    async def search(self, query: Optional[str] = None, max_papers: int = 50) -> List[PaperRecord]:
        """Fetch the most recent papers matching the query"""
        papers = []
        query_url = self.construct_query_url(query, max_papers)
        logger.info(f"Querying arXiv API: {query_url}")

        try:
            async with self.session.get(query_url) as response:
                logger.info(f"Response status: {response.status}")

                if response.status != 200:
                    logger.error(f"Failed: HTTP {response.status}")
                    return papers

                content = await response.text()
                papers = self.parse_feed(content, max_papers)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error querying arXiv API: {e!r}")

        logger.info(f"Total papers collected: {len(papers)}")
        return papers

    def parse_feed(self, xml_content: str, max_papers: int = 50) -> List[PaperRecord]:
        """Parse an arXiv Atom feed"""
        papers = []

        try:
            root = ET.fromstring(xml_content)
        except ET.ParseError as e:
            logger.error(f"Error parsing XML: {e}")
            return papers

        entries = root.findall('atom:entry', ATOM_NS)
        logger.info(f"Found {len(entries)} entries in XML")

        for entry in entries[:max_papers]:
            paper = self._parse_entry(entry)
            if paper is not None:
                papers.append(paper)
                logger.debug(f"Extracted paper: {paper.arxiv_id} - {paper.title[:50]}...")

        return papers

    def _parse_entry(self, entry: ET.Element) -> Optional[PaperRecord]:
        id_text = self._text(entry, 'atom:id')
        if not id_text:
            return None

        # http://arxiv.org/abs/2401.01234v2 -> 2401.01234v2
        arxiv_id = id_text.split('/abs/')[-1]
        title = " ".join((self._text(entry, 'atom:title') or f"arXiv Paper {arxiv_id}").split())

        authors = []
        for author_elem in entry.findall('atom:author', ATOM_NS):
            name = self._text(author_elem, 'atom:name')
            if name:
                authors.append(name)

        abstract = self._text(entry, 'atom:summary')
        if abstract:
            abstract = " ".join(abstract.split())

        keywords = []
        for category in entry.findall('atom:category', ATOM_NS):
            term = category.get('term')
            if term:
                keywords.append(ARXIV_CATEGORIES.get(term, term))

        published = self._text(entry, 'atom:published')

        return PaperRecord(
            id=f"arxiv:{arxiv_id}",
            title=title,
            authors=authors,
            abstract=abstract,
            doi=self._text(entry, 'arxiv:doi'),
            arxiv_id=arxiv_id,
            external_url=f"{self.ABS_BASE_URL}/{arxiv_id}",
            keywords=keywords,
            source="arxiv_api",
            journal=self._text(entry, 'arxiv:journal_ref'),
            publication_date=published[:10] if published else None,
        )

    @staticmethod
    def _text(elem: ET.Element, path: str) -> Optional[str]:
        found = elem.find(path, ATOM_NS)
        if found is None or found.text is None:
            return None
        text = found.text.strip()
        return text or None
