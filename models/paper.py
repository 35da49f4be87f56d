"""
Data models for research paper records and quality scores
"""
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Any, Union

# Serialized list fields arrive either as JSON strings (database dumps) or plain lists
ListField = Union[str, List[str], None]

# camelCase keys used by the MESSAi database export
# Namespaced metadata key so stored scores never collide with other paper metadata
QUALITY_SCORE_KEY = "_quality_score"

_CAMEL_CASE_KEYS = {
    "arxivId": "arxiv_id",
    "pubmedId": "pubmed_id",
    "ieeeId": "ieee_id",
    "externalUrl": "external_url",
    "systemType": "system_type",
    "powerOutput": "power_output",
    "anodeMaterials": "anode_materials",
    "cathodeMaterials": "cathode_materials",
    "organismTypes": "organism_types",
    "publicationDate": "publication_date",
}


@dataclass
class PaperRecord:
    """A research paper as stored in the literature database"""
    id: str
    title: str
    authors: ListField = None
    abstract: Optional[str] = None
    doi: Optional[str] = None
    arxiv_id: Optional[str] = None
    pubmed_id: Optional[str] = None
    ieee_id: Optional[str] = None
    external_url: Optional[str] = None
    keywords: ListField = None
    system_type: Optional[str] = None
    power_output: Optional[float] = None  # mW/m²
    efficiency: Optional[float] = None  # %
    anode_materials: ListField = None
    cathode_materials: ListField = None
    organism_types: ListField = None
    source: Optional[str] = None
    journal: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    publication_date: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaperRecord":
        """Build a record from a stored dict, accepting camelCase export keys"""
        known = set(cls.__dataclass_fields__)
        values = {}
        for key, value in data.items():
            key = _CAMEL_CASE_KEYS.get(key, key)
            if key in known:
                values[key] = value

        if not values.get("id"):
            values["id"] = (values.get("doi") or values.get("arxiv_id")
                            or values.get("pubmed_id") or values.get("title") or "")
        values.setdefault("title", "")
        if values.get("metadata") is None:
            values["metadata"] = {}
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreBreakdown:
    """Authenticity signals found on a paper plus optional enrichment values"""
    has_verification_id: bool = False
    has_external_url: bool = False
    has_abstract: bool = False
    has_performance_data: bool = False
    has_materials_data: bool = False
    has_recent_publication: bool = False
    is_from_reputable_source: bool = False
    has_detailed_methodology: bool = False
    # None means the lookup found nothing, which is different from a known zero
    citation_count: Optional[int] = None
    journal_impact_factor: Optional[float] = None


@dataclass(frozen=True)
class QualityScore:
    """Paper quality assessment, every score in [0, 100]"""
    overall: int
    authenticity: float
    relevance: float
    completeness: float
    impact: float
    methodology: float
    breakdown: ScoreBreakdown
    recommendations: tuple = ()

    @classmethod
    def error(cls) -> "QualityScore":
        """Placeholder score recorded for a paper that failed to score"""
        return cls(
            overall=0,
            authenticity=0,
            relevance=0,
            completeness=0,
            impact=0,
            methodology=0,
            breakdown=ScoreBreakdown(),
            recommendations=("Error occurred during scoring",),
        )

    def sub_scores(self) -> Dict[str, float]:
        return {
            "authenticity": self.authenticity,
            "relevance": self.relevance,
            "completeness": self.completeness,
            "impact": self.impact,
            "methodology": self.methodology,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["recommendations"] = list(self.recommendations)
        return data


@dataclass
class ScoringReport:
    """Result of scoring one paper during a batch run"""
    paper_id: str
    title: str
    score: QualityScore
    previous_score: Optional[int] = None
    improvement: int = 0
    issues: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paper_id": self.paper_id,
            "title": self.title,
            "score": self.score.to_dict(),
            "previous_score": self.previous_score,
            "improvement": self.improvement,
            "issues": list(self.issues),
            "error": self.error,
        }


@dataclass
class RunSummary:
    """Aggregate report of a batch scoring run"""
    reports: List[ScoringReport] = field(default_factory=list)
    failed: int = 0
    persistence_failures: int = 0
    timestamp: str = ""

    @property
    def total_scored(self) -> int:
        return len(self.reports)

    @property
    def average_score(self) -> float:
        if not self.reports:
            return 0.0
        return sum(r.score.overall for r in self.reports) / len(self.reports)

    @property
    def high_quality(self) -> int:
        return sum(1 for r in self.reports if r.score.overall >= 80)

    @property
    def medium_quality(self) -> int:
        return sum(1 for r in self.reports if 60 <= r.score.overall < 80)

    @property
    def low_quality(self) -> int:
        return sum(1 for r in self.reports if r.score.overall < 60)

    @property
    def needs_review(self) -> List[ScoringReport]:
        return [r for r in self.reports if r.score.overall < 50]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "timestamp": self.timestamp,
                "total_scored": self.total_scored,
                "average_score": round(self.average_score, 1),
                "high_quality": self.high_quality,
                "medium_quality": self.medium_quality,
                "low_quality": self.low_quality,
                "needs_review": len(self.needs_review),
                "failed": self.failed,
                "persistence_failures": self.persistence_failures,
            },
            "reports": [r.to_dict() for r in self.reports],
        }
