"""
Configuration constants for the paper quality scorer
"""
import os


class Config:
    """Application configuration, overridable through environment variables"""
    CROSSREF_API_URL = os.getenv("CROSSREF_API_URL", "https://api.crossref.org/works")
    CROSSREF_MAILTO = os.getenv("CROSSREF_MAILTO", "")
    CITATION_TIMEOUT = float(os.getenv("CITATION_TIMEOUT", "8"))

    OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    OLLAMA_TIMEOUT = float(os.getenv("OLLAMA_TIMEOUT", "60"))
    OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "qwen2.5-coder:latest")

    ARXIV_API_URL = "http://export.arxiv.org/api/query"

    PAPERS_FILE = os.getenv("PAPERS_FILE", "papers.json")
    REPORT_DIR = os.getenv("REPORT_DIR", "reports")
    BATCH_DELAY = float(os.getenv("BATCH_DELAY", "0.1"))
    PROGRESS_INTERVAL = 25
    RECENT_YEARS = 5
