"""
Text feature extractors over paper records
"""
import json
import re
from datetime import datetime
from typing import Any, Iterable, List, Optional

from models.paper import PaperRecord

QUANTITATIVE_PATTERNS = [
    re.compile(r"\d+\.?\d*\s*(mw|ma|v|%|°c|mg/l)", re.IGNORECASE),
    re.compile(r"\d+\.?\d*\s*(hours?|days?|minutes?)", re.IGNORECASE),
    re.compile(r"\d+\.?\d*\s*(cm|mm|μm|ml|l)", re.IGNORECASE),
]

YEAR_ONLY = re.compile(r"^\s*(\d{4})\s*$")


def parse_list_field(value: Any) -> List[Any]:
    """Return a serialized list field as a list; anything else is empty"""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return []
        return parsed if isinstance(parsed, list) else []
    return []


def has_value(value: Any) -> bool:
    """True when a field holds data; empty strings and empty lists count as absent"""
    if value is None:
        return False
    if isinstance(value, str):
        stripped = value.strip()
        return bool(stripped) and stripped != "[]"
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def searchable_text(paper: PaperRecord) -> str:
    """Lowercased title, abstract and keywords joined into one string"""
    keywords = " ".join(str(k) for k in parse_list_field(paper.keywords))
    return " ".join([paper.title or "", paper.abstract or "", keywords]).lower()


def count_matches(text: str, phrases: Iterable[str]) -> int:
    return sum(1 for phrase in phrases if phrase in text)


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    return any(phrase in text for phrase in phrases)


def has_quantitative_data(text: str) -> bool:
    """Look for a number followed by a unit"""
    return any(pattern.search(text) for pattern in QUANTITATIVE_PATTERNS)


def has_real_authors(authors: Any, synthetic_patterns: Iterable[str]) -> bool:
    """True when the author list parses and no name looks machine generated"""
    names = parse_list_field(authors)
    if not names:
        return False

    patterns = list(synthetic_patterns)
    for name in names:
        lowered = str(name).lower()
        if any(pattern in lowered for pattern in patterns):
            return False
    return True


def parse_publication_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None

    match = YEAR_ONLY.match(str(value))
    if match:
        return datetime(int(match.group(1)), 1, 1)

    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def is_recent_publication(value: Optional[str], years: int = 5,
                          now: Optional[datetime] = None) -> bool:
    """Published within the last `years` years"""
    published = parse_publication_date(value)
    if published is None:
        return False

    now = now or datetime.now()
    try:
        cutoff = now.replace(year=now.year - years)
    except ValueError:
        # Feb 29 on a non-leap target year
        cutoff = now.replace(year=now.year - years, day=28)
    return published > cutoff
