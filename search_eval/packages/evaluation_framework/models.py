"""
Data models for the evaluation framework.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, NewType, Any, Tuple

# Type aliases to enforce type safety
DocumentId = NewType('DocumentId', str)
QueryText = NewType('QueryText', str)

# Standard recall levels of an eleven-point curve: 0.0, 0.1, ..., 1.0
RECALL_LEVELS: Tuple[float, ...] = tuple(k / 10 for k in range(11))


@dataclass(frozen=True)
class RankedResult:
    """One retrieved document. Its rank is its position in the result list."""
    relevant: bool
    doc_id: DocumentId = DocumentId("")
    title: str = ""
    score: float = 0.0
    abstract_text: str = ""


@dataclass
class RetrievalResult:
    """Ranked results of one query plus the number of relevant docs for its task."""
    query: QueryText
    task_number: int
    results: List[RankedResult]
    total_relevant: int


@dataclass(frozen=True)
class Point:
    """Single (recall, precision) pair."""
    recall: float
    precision: float


Curve = List[Point]


@dataclass(frozen=True)
class ElevenPointCurve:
    """Precision sampled at the eleven standard recall levels."""
    points: Tuple[Point, ...]

    def __post_init__(self):
        if len(self.points) != len(RECALL_LEVELS):
            raise ValueError(
                f"Eleven-point curve needs {len(RECALL_LEVELS)} points, got {len(self.points)}")
        recalls = tuple(p.recall for p in self.points)
        if recalls != RECALL_LEVELS:
            raise ValueError(f"Unexpected recall levels in eleven-point curve: {recalls}")

    def precisions(self) -> List[float]:
        return [p.precision for p in self.points]

    def mean_precision(self) -> float:
        """11-point average precision."""
        return sum(self.precisions()) / len(self.points)


@dataclass
class QueryEvaluation:
    """Curves computed for a single query."""
    query: QueryText
    task_number: int
    total_relevant: int
    raw: Curve
    interpolated: Curve
    eleven_point: ElevenPointCurve


@dataclass
class Metrics:
    """Evaluation metrics for one experiment."""
    per_query: List[QueryEvaluation]
    average: ElevenPointCurve


@dataclass
class ExperimentConfig:
    """Configuration for an experiment run."""
    timestamp: datetime
    scheme: str
    task_number: int
    name: str = ""
    retriever_config: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Experiment:
    """Container for experiment data."""
    retrievals: List[RetrievalResult]
    metrics: Metrics
    config: ExperimentConfig
