"""
Best-effort enrichment lookups used by the impact sub-score
"""
import asyncio
import logging
import urllib.parse
from typing import Dict, Optional

import aiohttp

from config import Config

logger = logging.getLogger(__name__)


class CitationSource:
    """Looks up how many times a paper has been cited.

    Implementations return None when the count cannot be determined.
    """

    async def get_citation_count(self, doi: str) -> Optional[int]:
        raise NotImplementedError


class CrossRefCitationSource(CitationSource):
    """Citation counts from the CrossRef works API"""

    def __init__(self, base_url: str = Config.CROSSREF_API_URL,
                 timeout: float = Config.CITATION_TIMEOUT,
                 mailto: str = Config.CROSSREF_MAILTO):
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.mailto = mailto
        self.session = None

    async def __aenter__(self):
        headers = {}
        if self.mailto:
            # CrossRef routes identified clients to its polite pool
            headers["User-Agent"] = f"messai-paper-scorer (mailto:{self.mailto})"
        self.session = aiohttp.ClientSession(headers=headers)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    def construct_url(self, doi: str) -> str:
        return f"{self.base_url}/{urllib.parse.quote(doi.strip(), safe='/')}"

    async def get_citation_count(self, doi: str) -> Optional[int]:
        url = self.construct_url(doi)
        logger.debug(f"Querying CrossRef: {url}")

        try:
            async with self.session.get(url, timeout=self.timeout) as response:
                if response.status != 200:
                    logger.debug(f"CrossRef returned HTTP {response.status} for {doi}")
                    return None

                data = await response.json(content_type=None)
                count = data["message"]["is-referenced-by-count"]
                return int(count)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Citation lookup failed for {doi}: {e!r}")
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Unexpected CrossRef response for {doi}: {e!r}")

        return None


def lookup_journal_impact_factor(journal: Optional[str],
                                 impact_factors: Dict[str, float]) -> Optional[float]:
    """First table entry whose name is contained in the journal name"""
    if not journal:
        return None

    lowered = journal.lower()
    for name, factor in impact_factors.items():
        if name in lowered:
            return factor
    return None
