"""
Evaluation script for the corpus retrieval schemes.

Runs every query of a query set against the XML collection, builds
precision-recall curves, saves results, and compares with baseline.
"""

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List

from search_eval.config import Config
from search_eval.evaluation.retrievers.corpus_retriever import CorpusRetriever
from search_eval.packages.corpus import DocumentCollection
from search_eval.packages.evaluation_framework import (
    ElevenPointCurve,
    Evaluator,
    Experiment,
    ExperimentConfig,
    Metrics,
    QuerySet,
    RetrievalResult,
    Retriever,
    compare_experiments,
    format_comparison,
    format_curve,
    format_results,
    load_experiment,
    save_experiment,
)
from search_eval.packages.search_service import RetrievalScheme

logger = logging.getLogger(__name__)

ALL_SCHEMES = "all"
DEFAULT_QUERIES_PATH = Path(__file__).parent / "datasets" / "queries.jsonl"
BASELINE_NAME = "best_run"


def parse_args(argv=None):
    """Parse CLI arguments."""
    logger.info("Parsing CLI arguments")
    scheme_names = [s.value for s in RetrievalScheme]
    parser = argparse.ArgumentParser(description="Evaluate retrieval schemes with precision-recall curves")
    parser.add_argument("--corpus", dest="corpus_path", help="XML document collection (env: CORPUS_PATH)")
    parser.add_argument(
        "--queries",
        default=str(DEFAULT_QUERIES_PATH),
        help="JSONL query file (default: bundled queries)"
    )
    parser.add_argument("--task", dest="task_number", type=int, help="Search task number (env: TASK_NUMBER)")
    parser.add_argument(
        "--scheme",
        choices=scheme_names + [ALL_SCHEMES],
        help=f"Retrieval scheme, or '{ALL_SCHEMES}' to run every scheme. Options: {', '.join(scheme_names)}"
    )
    parser.add_argument("--limit", dest="search_limit", type=int, help="Maximum results per query")
    parser.add_argument("--runs-dir", dest="runs_dir", help="Experiment directory (default: evaluation/runs)")
    parser.add_argument("--name", help="Experiment name (default: timestamp)")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save the experiment results (default: False)"
    )
    parser.add_argument(
        "--show-results",
        action="store_true",
        help="Print the ranked results of every query"
    )
    parser.add_argument(
        "--show-curves",
        action="store_true",
        help="Log the raw and interpolated curve of every query"
    )
    args = parser.parse_args(argv)
    logger.info(f"Parsed arguments: name={args.name}, scheme={args.scheme}, save={args.save}")
    return args


def build_config(args: argparse.Namespace) -> Config:
    """Merge CLI values over environment settings."""
    overrides = {
        key: getattr(args, key)
        for key in ("corpus_path", "task_number", "search_limit", "runs_dir")
        if getattr(args, key) is not None
    }
    if args.scheme is not None and args.scheme != ALL_SCHEMES:
        overrides["scheme"] = args.scheme
    return Config(**overrides)


def generate_experiment_name() -> str:
    """Generate timestamp-based experiment name."""
    logger.info("Generating experiment name")
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    name = f"run_{timestamp}"
    logger.info(f"Generated experiment name: {name}")
    return name


def run_retrieval(query_set: QuerySet, retriever: Retriever) -> List[RetrievalResult]:
    """Run retrieval for all queries in the query set."""
    logger.info(f"Starting retrieval for {len(query_set.get_queries())} queries")

    retrievals: List[RetrievalResult] = []
    failed_queries: List[str] = []
    total_queries = len(query_set.get_queries())

    for idx, query in enumerate(query_set.get_queries(), start=1):
        try:
            logger.info(f"Processing query {idx}/{total_queries}")
            retrieval = retriever.retrieve(query.query, query.task_number)
            retrievals.append(retrieval)
            logger.info(f"Retrieved {len(retrieval.results)} documents for query: {query.query}")
        except Exception as e:
            logger.error(f"Failed to retrieve for query '{query.query}': {e}")
            failed_queries.append(query.query)

    if failed_queries:
        logger.warning(f"Failed to retrieve for {len(failed_queries)} queries: {failed_queries}")

    if len(retrievals) == 0:
        raise ValueError("No successful retrievals. Cannot evaluate an empty run.")

    logger.info(f"Retrieval complete. Processed {len(retrievals)} queries")
    return retrievals


def display_results(retrievals: List[RetrievalResult]):
    """Print the ranked results of every query."""
    for retrieval in retrievals:
        print(f"searchQuery: {retrieval.query}")
        print(format_results(retrieval.results))


def display_query_curves(metrics: Metrics):
    """Log raw and interpolated curves of every query."""
    for evaluation in metrics.per_query:
        logger.info("=" * 80)
        logger.info(f"Query: {evaluation.query} (task {evaluation.task_number})")
        for title, curve in (("Raw curve", evaluation.raw), ("Interpolated curve", evaluation.interpolated)):
            for line in format_curve(curve, title=title).splitlines():
                logger.info(line)
            logger.info("-" * 80)


def display_final_summary(exp_name: str, scheme: RetrievalScheme, metrics: Metrics):
    """Display per-query and averaged eleven-point curves."""
    logger.info("=" * 80)
    logger.info(f"EXPERIMENT: {exp_name} ({scheme.value})")
    logger.info("=" * 80)
    for evaluation in metrics.per_query:
        title = (f"Query: {evaluation.query} (task {evaluation.task_number}, "
                 f"{evaluation.total_relevant} relevant)")
        for line in format_curve(evaluation.eleven_point.points, title=title).splitlines():
            logger.info(line)
        logger.info("-" * 80)
    for line in format_curve(metrics.average.points, title="Average over all queries").splitlines():
        logger.info(line)
    logger.info(f"11-pt AP: {metrics.average.mean_precision():.4f}")
    logger.info("=" * 80)


def has_baseline(runs_dir: str) -> bool:
    """Check if baseline experiment exists."""
    logger.info("Checking for baseline")
    exists = (Path(runs_dir) / BASELINE_NAME / "metrics.json").exists()
    logger.info(f"Baseline exists: {exists}")
    return exists


def print_verdict(baseline_metrics: Metrics, current_metrics: Metrics, exp_name: str, runs_dir: str):
    """Print verdict comparing baseline and current averaged curves."""
    logger.info("Calculating verdict")

    baseline_ap = baseline_metrics.average.mean_precision()
    current_ap = current_metrics.average.mean_precision()

    logger.info("=" * 80)
    logger.info("VERDICT")
    logger.info("=" * 80)

    if current_ap > baseline_ap:
        logger.info("✓ BETTER - 11-pt average precision improved!")
        logger.info(f"  11-pt AP: {baseline_ap:.4f} → {current_ap:.4f}")
        logger.info(f"  Promote: cp -r {runs_dir}/{exp_name} {runs_dir}/{BASELINE_NAME}")
    elif current_ap == baseline_ap:
        logger.info("= EQUAL - 11-pt average precision unchanged")
        logger.info(f"  11-pt AP: {baseline_ap:.4f}")
    else:
        logger.info("✗ WORSE - 11-pt average precision regressed")
        logger.info(f"  11-pt AP: {baseline_ap:.4f} → {current_ap:.4f}")

    logger.info("=" * 80)


def compare_and_decide(current_exp: Experiment, runs_dir: str):
    """Compare current experiment with baseline and print verdict."""
    logger.info(f"Comparing experiment {current_exp.config.name} with baseline")

    if not has_baseline(runs_dir):
        logger.warning("No baseline found. Set this as baseline:")
        logger.warning(
            f"   cp -r {runs_dir}/{current_exp.config.name} {runs_dir}/{BASELINE_NAME}")
        return

    baseline_exp = load_experiment(BASELINE_NAME, runs_dir)

    logger.info("=" * 80)
    compare_experiments(baseline_exp, current_exp)

    print_verdict(baseline_exp.metrics, current_exp.metrics, current_exp.config.name, runs_dir)


def run_scheme(
    scheme: RetrievalScheme,
    exp_name: str,
    collection: DocumentCollection,
    query_set: QuerySet,
    config: Config,
    args: argparse.Namespace
) -> Experiment:
    """Index, retrieve, evaluate and report one retrieval scheme."""
    logger.info(f"Running scheme {scheme.value} as experiment {exp_name}")

    retriever = CorpusRetriever(collection, scheme, limit=config.search_limit)
    retrievals = run_retrieval(query_set, retriever)

    if args.show_results:
        display_results(retrievals)

    metrics = Evaluator().evaluate(retrievals)

    experiment_config = ExperimentConfig(
        timestamp=datetime.now(timezone.utc),
        scheme=scheme.value,
        task_number=config.task_number,
        name=exp_name,
        retriever_config=scheme.config.model_dump(mode="json"),
        metadata={
            "search_limit": config.search_limit,
            "query_count": len(query_set.get_queries()),
            "corpus_size": len(collection),
        },
    )
    experiment = Experiment(retrievals=retrievals, metrics=metrics, config=experiment_config)

    # Save (only if --save flag is passed)
    if args.save:
        save_experiment(exp_name, retrievals, metrics, experiment_config, config.runs_dir)
        logger.info(f"Saved to: {config.runs_dir}/{exp_name}/")
    else:
        logger.info("Skipping save (use --save to save results)")

    if args.show_curves:
        display_query_curves(metrics)
    display_final_summary(exp_name, scheme, metrics)
    Evaluator().show_failures(metrics)
    compare_and_decide(experiment, config.runs_dir)

    return experiment


def run(argv=None) -> Dict[str, ElevenPointCurve]:
    """Main coordinator function. Returns the averaged curve per scheme."""
    logger.info("Starting evaluation script")

    args = parse_args(argv)
    config = build_config(args)
    if config.corpus_path is None:
        raise ValueError("No corpus given. Pass --corpus or set CORPUS_PATH.")

    exp_name = args.name if args.name else generate_experiment_name()
    if args.scheme == ALL_SCHEMES:
        schemes = list(RetrievalScheme)
    else:
        schemes = [config.scheme]
    logger.info(f"Using schemes: {[s.value for s in schemes]}")

    collection = DocumentCollection.from_xml(config.corpus_path)
    query_set = QuerySet.from_jsonl(args.queries, default_task_number=config.task_number)

    averages: Dict[str, ElevenPointCurve] = {}
    for scheme in schemes:
        name = exp_name if len(schemes) == 1 else f"{exp_name}_{scheme.value}"
        experiment = run_scheme(scheme, name, collection, query_set, config, args)
        averages[scheme.value] = experiment.metrics.average

    if len(averages) > 1:
        logger.info("=" * 80)
        logger.info("SCHEME COMPARISON (averaged interpolated precision)")
        logger.info("=" * 80)
        for line in format_comparison(averages).splitlines():
            logger.info(line)
        logger.info("=" * 80)

    logger.info("Evaluation script complete")
    return averages


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    run()
