"""
Evaluator for computing precision-recall curves over retrieval results.
"""

import logging
from typing import List

from .curves import average_curves, build_curve, interpolate, sample_eleven_points
from .models import Metrics, QueryEvaluation, RetrievalResult

logger = logging.getLogger(__name__)


class Evaluator:
    """Turns ranked, relevance-labelled results into precision-recall curves."""

    def evaluate(self, retrievals: List[RetrievalResult]) -> Metrics:
        """Evaluate every query and average their eleven-point curves."""
        logger.info(f"Starting evaluation for {len(retrievals)} queries")

        per_query: List[QueryEvaluation] = []
        for retrieval in retrievals:
            if retrieval.total_relevant == 0:
                logger.warning(
                    f"Query '{retrieval.query}' has no relevant docs in task "
                    f"{retrieval.task_number}, recall is 0 at every rank")
            per_query.append(self.evaluate_query(retrieval))

        # Raises ValueError on an empty run
        average = average_curves([e.eleven_point for e in per_query])

        logger.info("Evaluation complete")
        return Metrics(per_query=per_query, average=average)

    def evaluate_query(self, retrieval: RetrievalResult) -> QueryEvaluation:
        """Build raw, interpolated and eleven-point curves for one query."""
        raw = build_curve(retrieval.results, retrieval.total_relevant)
        interpolated = interpolate(raw)
        eleven_point = sample_eleven_points(interpolated)

        logger.debug(
            f"Query '{retrieval.query}': {len(raw)} results, "
            f"11-pt average precision {eleven_point.mean_precision():.4f}")

        return QueryEvaluation(
            query=retrieval.query,
            task_number=retrieval.task_number,
            total_relevant=retrieval.total_relevant,
            raw=raw,
            interpolated=interpolated,
            eleven_point=eleven_point,
        )

    def show_failures(self, metrics: Metrics, n: int = 5) -> None:
        """Log the worst N queries by 11-point average precision."""
        logger.info(f"Analyzing top {n} failures")

        ranked = sorted(metrics.per_query, key=lambda e: e.eleven_point.mean_precision())

        logger.info("=" * 80)
        logger.info(f"WORST {n} QUERIES (by 11-pt average precision)")
        logger.info("=" * 80)

        for i, evaluation in enumerate(ranked[:n], 1):
            relevant_found = 0
            if evaluation.raw:
                relevant_found = round(evaluation.raw[-1].recall * evaluation.total_relevant)
            logger.info(f"{i}. Query: {evaluation.query} (task {evaluation.task_number})")
            logger.info(f"   11-pt AP: {evaluation.eleven_point.mean_precision():.4f}")
            logger.info(f"   Retrieved: {len(evaluation.raw)}, "
                        f"relevant found: {relevant_found}/{evaluation.total_relevant}")
            logger.info("-" * 80)

        logger.info("Failure analysis complete")
