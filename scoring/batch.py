"""
Sequential batch runner that scores a paper collection and persists the results
"""
import asyncio
import inspect
import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from config import Config
from models.paper import QUALITY_SCORE_KEY, PaperRecord, QualityScore, RunSummary, ScoringReport
from scoring.scorer import PaperQualityScorer

logger = logging.getLogger(__name__)

NEEDS_REVIEW_THRESHOLD = 50
LOW_SCORE_ISSUE = "Low quality score - consider review or removal"

# Called with (paper, score); may be a plain function or a coroutine function
PersistCallback = Callable[[PaperRecord, QualityScore], Any]


class PersistenceError(Exception):
    """Raised when no score of a run could be written back"""

    def __init__(self, message: str, summary: RunSummary):
        super().__init__(message)
        self.summary = summary


def display_title(paper: PaperRecord) -> str:
    title = getattr(paper, "title", None)
    return str(title) if title is not None else ""


def previous_overall(paper: PaperRecord) -> Optional[int]:
    stored = (paper.metadata or {}).get(QUALITY_SCORE_KEY)
    if isinstance(stored, dict) and isinstance(stored.get("overall"), (int, float)):
        return int(stored["overall"])
    return None


class BatchRunner:
    """Scores papers one at a time with a fixed delay between external lookups"""

    def __init__(self, scorer: PaperQualityScorer,
                 persist: Optional[PersistCallback] = None,
                 delay: float = Config.BATCH_DELAY,
                 progress_interval: int = Config.PROGRESS_INTERVAL):
        self.scorer = scorer
        self.persist = persist
        self.delay = delay
        self.progress_interval = progress_interval

    async def run(self, papers: Iterable[PaperRecord], limit: Optional[int] = None) -> RunSummary:
        papers = list(papers)
        if limit is not None:
            papers = papers[:max(limit, 0)]

        summary = RunSummary(timestamp=datetime.now().isoformat())
        persisted = 0
        logger.info(f"Scoring {len(papers)} papers...")

        for index, paper in enumerate(papers, 1):
            logger.info(f"Scoring {index}/{len(papers)}: {display_title(paper)[:50]}...")

            report = await self.score_one(paper)
            summary.reports.append(report)

            if report.error is not None:
                summary.failed += 1
            elif self.persist is not None:
                if await self._persist(paper, report):
                    persisted += 1
                else:
                    summary.persistence_failures += 1

            if index % self.progress_interval == 0:
                logger.info(f"  Progress: {index}/{len(papers)} - "
                            f"Average quality score: {summary.average_score:.1f}")

            if index < len(papers) and self.delay > 0:
                await asyncio.sleep(self.delay)

        if self.persist is not None and summary.persistence_failures and persisted == 0:
            raise PersistenceError(
                f"Could not persist any of {summary.persistence_failures} scores", summary)

        return summary

    async def score_one(self, paper: PaperRecord) -> ScoringReport:
        """Score a single paper; failures become an error report instead of raising"""
        paper_id = str(getattr(paper, "id", ""))
        title = display_title(paper)

        try:
            score = await self.scorer.score_paper(paper)
            previous = previous_overall(paper)
        except Exception as e:
            logger.error(f"Error scoring paper {paper_id}: {e}", exc_info=True)
            return ScoringReport(
                paper_id=paper_id,
                title=title,
                score=QualityScore.error(),
                issues=[f"Scoring failed: {e}"],
                error=str(e) or type(e).__name__,
            )

        return ScoringReport(
            paper_id=paper_id,
            title=title,
            score=score,
            previous_score=previous,
            improvement=score.overall - previous if previous is not None else 0,
            issues=[LOW_SCORE_ISSUE] if score.overall < NEEDS_REVIEW_THRESHOLD else [],
        )

    async def _persist(self, paper: PaperRecord, report: ScoringReport) -> bool:
        try:
            result = self.persist(paper, report.score)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning(f"Failed to update quality score for paper {report.paper_id}: {e}")
            report.issues.append(f"Score not persisted: {e}")
            return False
        return True
