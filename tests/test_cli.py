"""Tests for the command line pipeline."""

import argparse
import json
from unittest.mock import patch

import pytest

from models.paper import QUALITY_SCORE_KEY
from paper_scorer import run_scoring
from utils.scoring_tables import ScoringTables


def make_args(tmp_path, **overrides):
    values = dict(
        papers=str(tmp_path / "papers.json"),
        limit=None,
        report_dir=str(tmp_path / "reports"),
        offline=True,
        delay=0,
        fetch_arxiv=None,
        max_papers=5,
        extract=False,
        ollama_model="qwen3",
        ollama_url="http://localhost:11434",
    )
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def papers_file(tmp_path, rich_paper, title_only_paper):
    path = tmp_path / "papers.json"
    path.write_text(json.dumps([rich_paper.to_dict(), title_only_paper.to_dict()]), encoding="utf-8")
    return path


class TestRunScoring:
    """Tests for run_scoring."""

    @pytest.mark.asyncio
    async def test_scores_and_writes_report(self, tmp_path, papers_file):
        exit_code = await run_scoring(make_args(tmp_path), ScoringTables())

        assert exit_code == 0
        reports = list((tmp_path / "reports").glob("quality-scoring-*.json"))
        assert len(reports) == 1
        data = json.loads(reports[0].read_text(encoding="utf-8"))
        assert data["summary"]["total_scored"] == 2
        assert [r["paper_id"] for r in data["reports"]] == ["p-rich", "p-empty"]

        stored = json.loads(papers_file.read_text(encoding="utf-8"))
        assert all(QUALITY_SCORE_KEY in paper["metadata"] for paper in stored)
        assert not (tmp_path / "papers.json.scores.jsonl").exists()

    @pytest.mark.asyncio
    async def test_limit(self, tmp_path, papers_file):
        await run_scoring(make_args(tmp_path, limit=1), ScoringTables())

        stored = json.loads(papers_file.read_text(encoding="utf-8"))
        assert QUALITY_SCORE_KEY in stored[0]["metadata"]
        assert QUALITY_SCORE_KEY not in stored[1]["metadata"]

    @pytest.mark.asyncio
    async def test_no_papers(self, tmp_path):
        assert await run_scoring(make_args(tmp_path), ScoringTables()) == 0
        assert not (tmp_path / "reports").exists()

    @pytest.mark.asyncio
    async def test_unwritable_store_exits_non_zero_with_report(self, tmp_path, papers_file):
        with patch("storage.paper_store.PaperStore._append_journal", side_effect=OSError("read-only")):
            exit_code = await run_scoring(make_args(tmp_path), ScoringTables())

        assert exit_code == 1
        reports = list((tmp_path / "reports").glob("quality-scoring-*.json"))
        data = json.loads(reports[0].read_text(encoding="utf-8"))
        assert data["summary"]["persistence_failures"] == 2

    @pytest.mark.asyncio
    async def test_final_save_failure_keeps_journal(self, tmp_path, papers_file):
        with patch("storage.paper_store.PaperStore.save", side_effect=OSError("disk full")):
            exit_code = await run_scoring(make_args(tmp_path), ScoringTables())

        assert exit_code == 1
        journal = (tmp_path / "papers.json.scores.jsonl").read_text(encoding="utf-8")
        assert len(journal.splitlines()) == 2
