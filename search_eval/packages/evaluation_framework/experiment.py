"""
Experiment management for saving, loading, and comparing experiments.
"""

import json
import logging
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import List

from .models import (
    Curve,
    DocumentId,
    ElevenPointCurve,
    Experiment,
    ExperimentConfig,
    Metrics,
    Point,
    QueryEvaluation,
    QueryText,
    RankedResult,
    RetrievalResult,
)

logger = logging.getLogger(__name__)

DEFAULT_RUNS_DIR = "evaluation/runs"


def _curve_to_json(curve) -> List[List[float]]:
    return [[p.recall, p.precision] for p in curve]


def _curve_from_json(data) -> Curve:
    return [Point(recall=r, precision=p) for r, p in data]


def save_experiment(
    exp_name: str,
    retrievals: List[RetrievalResult],
    metrics: Metrics,
    config: ExperimentConfig,
    runs_dir: str = DEFAULT_RUNS_DIR
) -> Path:
    """Save experiment results, metrics, and config to disk."""
    logger.info(f"Saving experiment: {exp_name}")

    exp_dir = Path(runs_dir) / exp_name
    exp_dir.mkdir(parents=True, exist_ok=True)

    # Save ranked results as JSONL, one query per line
    results_path = exp_dir / "results.jsonl"
    with open(results_path, 'w', encoding='utf-8') as f:
        for retrieval in retrievals:
            f.write(json.dumps(asdict(retrieval)) + '\n')

    logger.info(f"Saved results to {results_path}")

    metrics_path = exp_dir / "metrics.json"
    metrics_dict = {
        "average": _curve_to_json(metrics.average.points),
        "mean_precision": metrics.average.mean_precision(),
        "per_query": [
            {
                "query": e.query,
                "task_number": e.task_number,
                "total_relevant": e.total_relevant,
                "raw": _curve_to_json(e.raw),
                "interpolated": _curve_to_json(e.interpolated),
                "eleven_point": _curve_to_json(e.eleven_point.points),
            }
            for e in metrics.per_query
        ]
    }
    with open(metrics_path, 'w', encoding='utf-8') as f:
        json.dump(metrics_dict, f, indent=2)

    logger.info(f"Saved metrics to {metrics_path}")

    config_path = exp_dir / "config.json"
    config_dict = {
        "timestamp": config.timestamp.isoformat(),
        "scheme": config.scheme,
        "task_number": config.task_number,
        "retriever_config": config.retriever_config,
        "metadata": config.metadata
    }

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config_dict, f, indent=2)

    logger.info(f"Saved config to {config_path}")
    logger.info(f"Experiment {exp_name} saved successfully")
    return exp_dir


def load_experiment(exp_name: str, runs_dir: str = DEFAULT_RUNS_DIR) -> Experiment:
    """Load experiment results, metrics, and config from disk."""
    logger.info(f"Loading experiment: {exp_name}")

    exp_dir = Path(runs_dir) / exp_name
    if not exp_dir.exists():
        raise FileNotFoundError(f"Experiment directory not found: {exp_dir}")

    retrievals: List[RetrievalResult] = []
    results_path = exp_dir / "results.jsonl"
    with open(results_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            data = json.loads(line)
            retrievals.append(RetrievalResult(
                query=QueryText(data["query"]),
                task_number=data["task_number"],
                results=[
                    RankedResult(
                        relevant=r["relevant"],
                        doc_id=DocumentId(r["doc_id"]),
                        title=r["title"],
                        score=r["score"],
                        abstract_text=r.get("abstract_text", ""),
                    )
                    for r in data["results"]
                ],
                total_relevant=data["total_relevant"],
            ))

    logger.info(f"Loaded {len(retrievals)} query results from {results_path}")

    metrics_path = exp_dir / "metrics.json"
    with open(metrics_path, 'r', encoding='utf-8') as f:
        metrics_dict = json.load(f)

    per_query = [
        QueryEvaluation(
            query=QueryText(q["query"]),
            task_number=q["task_number"],
            total_relevant=q["total_relevant"],
            raw=_curve_from_json(q["raw"]),
            interpolated=_curve_from_json(q["interpolated"]),
            eleven_point=ElevenPointCurve(points=tuple(_curve_from_json(q["eleven_point"]))),
        )
        for q in metrics_dict["per_query"]
    ]
    metrics = Metrics(
        per_query=per_query,
        average=ElevenPointCurve(points=tuple(_curve_from_json(metrics_dict["average"]))),
    )

    logger.info(f"Loaded metrics from {metrics_path}")

    config_path = exp_dir / "config.json"
    with open(config_path, 'r', encoding='utf-8') as f:
        config_dict = json.load(f)

    config = ExperimentConfig(
        timestamp=datetime.fromisoformat(config_dict["timestamp"]),
        scheme=config_dict["scheme"],
        task_number=config_dict["task_number"],
        name=exp_name,  # Use directory name as experiment name
        retriever_config=config_dict.get("retriever_config", {}),
        metadata=config_dict.get("metadata", {})
    )

    logger.info(f"Loaded config from {config_path}")
    logger.info(f"Experiment {exp_name} loaded successfully")

    return Experiment(
        retrievals=retrievals,
        metrics=metrics,
        config=config
    )


def compare_experiments(exp1: Experiment, exp2: Experiment) -> None:
    """Compare two experiments and log the delta of their averaged curves."""
    logger.info(f"Comparing experiments: {exp1.config.name} vs {exp2.config.name}")

    curve1 = exp1.metrics.average
    curve2 = exp2.metrics.average

    logger.info("=" * 80)
    logger.info("EXPERIMENT COMPARISON")
    logger.info("=" * 80)
    logger.info(f"Experiment 1: {exp1.config.name} ({exp1.config.scheme})")
    logger.info(f"Experiment 2: {exp2.config.name} ({exp2.config.scheme})")
    logger.info("=" * 80)

    logger.info(f"{'Recall':<20} {'Exp1':>10} {'Exp2':>10} {'Delta':>12} {'% Change':>12}")
    logger.info("-" * 80)

    for p1, p2 in zip(curve1.points, curve2.points):
        delta = p2.precision - p1.precision
        pct = (delta / p1.precision * 100) if p1.precision != 0 else 0
        logger.info(
            f"{p1.recall:<20.1f} {p1.precision:>10.4f} {p2.precision:>10.4f} "
            f"{delta:>+12.4f} {pct:>+11.1f}%")

    mean1 = curve1.mean_precision()
    mean2 = curve2.mean_precision()
    mean_delta = mean2 - mean1
    mean_pct = (mean_delta / mean1 * 100) if mean1 != 0 else 0
    logger.info("-" * 80)
    logger.info(
        f"{'11-pt AP':<20} {mean1:>10.4f} {mean2:>10.4f} {mean_delta:>+12.4f} {mean_pct:>+11.1f}%")

    logger.info("=" * 80)

    logger.info("Experiment comparison complete")
