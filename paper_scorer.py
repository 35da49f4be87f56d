#!/usr/bin/env python3
"""
Paper Quality Scorer - Main Entry Point
Scores bioelectrochemical-system papers for authenticity, relevance and data quality
"""

import asyncio
import argparse
import json
import logging
import sys
from collections import Counter
from contextlib import AsyncExitStack
from datetime import datetime
from pathlib import Path

# Local imports
from config import Config
from extraction.ollama_client import OllamaClient
from extraction.parameter_extractor import ParameterExtractor
from models.paper import RunSummary
from scoring.batch import BatchRunner, PersistenceError
from scoring.enrichment import CrossRefCitationSource
from scoring.scorer import PaperQualityScorer
from scrapers.arxiv_scraper import ArXivScraper
from storage.paper_store import PaperStore
from utils.categories import PAPER_SOURCES
from utils.scoring_tables import ScoringTables

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def fetch_arxiv_papers(args, store: PaperStore):
    """Add recent arXiv papers matching the query to the store"""
    print(f"Fetching up to {args.max_papers} papers from arXiv...")
    async with ArXivScraper() as scraper:
        papers = await scraper.search(args.fetch_arxiv, args.max_papers)

    added = store.add_papers(papers)
    store.save()
    print(f"Found {len(papers)} papers, {added} new")


async def extract_parameters(args, store: PaperStore):
    """Fill missing technical fields with the local LLM before scoring"""
    async with OllamaClient(args.ollama_url) as client:
        if not await client.is_running():
            print("Ollama is not running - skipping parameter extraction (start it with: ollama serve)")
            return
        if not await client.has_model(args.ollama_model):
            print(f"Model {args.ollama_model} not available in Ollama - skipping parameter extraction")
            return

        extractor = ParameterExtractor(client, args.ollama_model)
        papers = store.papers[:args.limit] if args.limit is not None else store.papers
        enriched = 0

        for i, paper in enumerate(papers, 1):
            print(f"Extracting {i}/{len(papers)}: {paper.title[:60]}")
            result = await extractor.extract(paper)
            if extractor.apply(paper, result):
                enriched += 1

    store.save()
    print(f"Parameters extracted for {enriched} papers")


def print_summary(summary: RunSummary, store: PaperStore):
    total = summary.total_scored
    print("\n" + "="*70)
    print("QUALITY SCORING SUMMARY")
    print("="*50)
    print(f"Papers scored: {total}")
    if not total:
        return

    print(f"Average quality score: {summary.average_score:.1f}/100")
    for label, count in (("High quality (80+)", summary.high_quality),
                         ("Medium quality (60-79)", summary.medium_quality),
                         ("Low quality (<60)", summary.low_quality)):
        print(f"  {label}: {count} ({count / total * 100:.1f}%)")

    if summary.failed:
        print(f"Failed to score: {summary.failed}")
    if summary.persistence_failures:
        print(f"Scores not saved: {summary.persistence_failures}")

    sources = Counter(paper.source or "unknown" for paper in store.papers)
    print("\nPapers by source:")
    for source, count in sources.most_common():
        print(f"  {PAPER_SOURCES.get(source, source):15} - {count}")


def write_report(summary: RunSummary, report_dir: str) -> Path:
    timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
    report_path = Path(report_dir) / f"quality-scoring-{timestamp}.json"
    report_path.parent.mkdir(parents=True, exist_ok=True)

    with open(report_path, 'w', encoding='utf-8') as f:
        json.dump(summary.to_dict(), f, indent=2, ensure_ascii=False)

    return report_path


async def run_scoring(args, tables: ScoringTables) -> int:
    """Run the scoring pipeline; returns the process exit code"""
    print("Paper Quality Scorer")
    print("Focus: authenticity, relevance, completeness, impact and methodology")
    print("="*70)

    store = PaperStore(args.papers)
    store.load()

    if args.fetch_arxiv is not None:
        await fetch_arxiv_papers(args, store)

    if args.extract:
        await extract_parameters(args, store)

    if not store.papers:
        print("No papers found!")
        return 0

    exit_code = 0
    async with AsyncExitStack() as stack:
        citation_source = None
        if not args.offline:
            citation_source = await stack.enter_async_context(CrossRefCitationSource())

        scorer = PaperQualityScorer(tables, citation_source)
        runner = BatchRunner(scorer, store.update_score, delay=args.delay)

        try:
            summary = await runner.run(store.papers, args.limit)
        except PersistenceError as e:
            logger.error(f"Quality scoring failed: {e}")
            summary = e.summary
            exit_code = 1

    try:
        store.save()
    except OSError as e:
        logger.error(f"Could not write {store.path}: {e}; scores remain in {store.journal_path}")
        exit_code = 1

    print_summary(summary, store)

    report_path = write_report(summary, args.report_dir)
    print(f"\nDetailed report saved to: {report_path}")

    if summary.needs_review:
        print(f"\n{len(summary.needs_review)} papers have very low quality scores and may need review")

    return exit_code


def main():
    """Main entry point for the script"""
    parser = argparse.ArgumentParser(description="Paper Quality Scorer - Rates research papers on bioelectrochemical systems")
    parser.add_argument("limit_arg", nargs="?", type=int, metavar="LIMIT", help="Maximum papers to score (same as --limit)")
    parser.add_argument("--papers", default=Config.PAPERS_FILE, help="JSON file holding the paper records")
    parser.add_argument("--limit", type=int, help="Maximum papers to score")
    parser.add_argument("--report-dir", default=Config.REPORT_DIR, help="Directory for the detailed JSON report")
    parser.add_argument("--tables", help="JSON file overriding keyword lists and journal tables")
    parser.add_argument("--offline", action="store_true", help="Skip CrossRef citation lookups")
    parser.add_argument("--delay", type=float, default=Config.BATCH_DELAY, help="Seconds to wait between papers")
    parser.add_argument("--fetch-arxiv", nargs="?", const="", metavar="QUERY",
                        help="Add recent arXiv papers before scoring (optional arXiv search query)")
    parser.add_argument("--max-papers", type=int, default=50, help="Maximum papers to fetch from arXiv")
    parser.add_argument("--extract", action="store_true", help="Fill missing parameters with a local Ollama model")
    parser.add_argument("--ollama-model", default=Config.OLLAMA_MODEL, help="Ollama model used for extraction")
    parser.add_argument("--ollama-url", default=Config.OLLAMA_BASE_URL, help="Ollama server URL")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    if args.limit is None:
        args.limit = args.limit_arg
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must not be negative")

    # Set logging level
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        for handler in logging.getLogger().handlers:
            handler.setLevel(logging.DEBUG)

    try:
        tables = ScoringTables.from_file(args.tables) if args.tables else ScoringTables()
    except (OSError, ValueError) as e:
        parser.error(f"Could not load scoring tables: {e}")

    try:
        exit_code = asyncio.run(run_scoring(args, tables))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        exit_code = 130
    except Exception as e:
        logger.error(f"Quality scoring failed: {e}", exc_info=True)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
