"""
JSON file backed store for paper records

Scores are appended to a JSON Lines journal next to the paper file as they
are produced, and folded into the paper file by save(). A journal left
behind by an interrupted run is replayed on load().
"""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List

from models.paper import QUALITY_SCORE_KEY, PaperRecord, QualityScore

logger = logging.getLogger(__name__)

class PaperStore:
    """Loads paper records from a JSON array file and writes them back"""

    def __init__(self, path: str):
        self.path = Path(path)
        self.journal_path = self.path.with_suffix(self.path.suffix + ".scores.jsonl")
        self.papers: List[PaperRecord] = []

    def load(self) -> List[PaperRecord]:
        if not self.path.exists():
            logger.info(f"No paper file at {self.path}, starting empty")
            self.papers = []
            return self.papers

        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("papers", [])
        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a list of papers")

        self.papers = [PaperRecord.from_dict(item) for item in data if isinstance(item, dict)]
        logger.info(f"Loaded {len(self.papers)} papers from {self.path}")

        replayed = self._replay_journal()
        if replayed:
            logger.info(f"Recovered {replayed} unsaved scores from {self.journal_path}")
        return self.papers

    def save(self):
        """Rewrite the paper file; the journal is dropped once its scores are in it"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump([paper.to_dict() for paper in self.papers], f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)

        if self.journal_path.exists():
            self.journal_path.unlink()

    def add_papers(self, papers: Iterable[PaperRecord]) -> int:
        """Add papers not already present by id or DOI; returns how many were added"""
        seen_ids = {p.id for p in self.papers}
        seen_dois = {p.doi.lower() for p in self.papers if p.doi}
        added = 0

        for paper in papers:
            if paper.id in seen_ids or (paper.doi and paper.doi.lower() in seen_dois):
                logger.debug(f"Skipping duplicate paper {paper.id}")
                continue
            self.papers.append(paper)
            seen_ids.add(paper.id)
            if paper.doi:
                seen_dois.add(paper.doi.lower())
            added += 1

        return added

    def update_score(self, paper: PaperRecord, score: QualityScore):
        """Journal the score, then attach it to the paper

        The paper is left untouched when the journal write fails.
        """
        stored = {
            "overall": score.overall,
            **score.sub_scores(),
            "last_scored": datetime.now().isoformat(),
        }
        self._append_journal(paper.id, stored)
        self._attach(paper, stored)

    def _append_journal(self, paper_id: str, stored: Dict[str, Any]):
        self.journal_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.journal_path, "a", encoding="utf-8") as f:
            f.write(json.dumps({"id": paper_id, "score": stored}, ensure_ascii=False) + "\n")

    def _replay_journal(self) -> int:
        if not self.journal_path.exists():
            return 0

        by_id = {paper.id: paper for paper in self.papers}
        replayed = 0

        with open(self.journal_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = json.loads(line)
                except ValueError:
                    # Partial last line from a crashed run
                    logger.warning(f"Skipping unreadable line in {self.journal_path}")
                    continue

                if not isinstance(entry, dict) or not isinstance(entry.get("score"), dict):
                    continue
                paper = by_id.get(entry.get("id"))
                if paper is None:
                    logger.debug(f"Journal entry for unknown paper {entry.get('id')}")
                    continue

                self._attach(paper, entry["score"])
                replayed += 1

        return replayed

    @staticmethod
    def _attach(paper: PaperRecord, stored: Dict[str, Any]):
        metadata = dict(paper.metadata or {})
        metadata[QUALITY_SCORE_KEY] = stored
        paper.metadata = metadata
