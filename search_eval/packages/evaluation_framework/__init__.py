"""
Evaluation Framework for Search/Retrieval Systems

Precision-recall curves, 11-point interpolated precision and multi-query
averages over ranked, relevance-labelled results. Independent of the search
backend that produced the ranking.
"""

from .curves import build_curve, interpolate, sample_eleven_points, average_curves
from .dataset import EvaluationQuery, QuerySet
from .evaluator import Evaluator
from .experiment import save_experiment, load_experiment, compare_experiments
from .models import (
    DocumentId,
    QueryText,
    RankedResult,
    RetrievalResult,
    Point,
    Curve,
    ElevenPointCurve,
    RECALL_LEVELS,
    QueryEvaluation,
    Metrics,
    ExperimentConfig,
    Experiment,
)
from .report import format_curve, format_results, format_comparison
from .retriever import Retriever

__all__ = [
    "DocumentId",
    "QueryText",
    "RankedResult",
    "RetrievalResult",
    "Point",
    "Curve",
    "ElevenPointCurve",
    "RECALL_LEVELS",
    "QueryEvaluation",
    "Metrics",
    "ExperimentConfig",
    "Experiment",
    "EvaluationQuery",
    "QuerySet",
    "Retriever",
    "Evaluator",
    "build_curve",
    "interpolate",
    "sample_eleven_points",
    "average_curves",
    "format_curve",
    "format_results",
    "format_comparison",
    "save_experiment",
    "load_experiment",
    "compare_experiments",
]
