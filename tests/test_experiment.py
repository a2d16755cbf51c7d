import logging
from datetime import datetime, timezone

import pytest

from search_eval.packages.evaluation_framework import (
    DocumentId,
    Evaluator,
    Experiment,
    ExperimentConfig,
    QueryText,
    RankedResult,
    RetrievalResult,
    compare_experiments,
    load_experiment,
    save_experiment,
)


def make_experiment(name, labels):
    retrievals = [RetrievalResult(
        query=QueryText("speech"),
        task_number=9,
        results=[
            RankedResult(relevant=label, doc_id=DocumentId(str(i)), title=f"doc {i}", score=1.0 / (i + 1))
            for i, label in enumerate(labels)
        ],
        total_relevant=2,
    )]
    metrics = Evaluator().evaluate(retrievals)
    config = ExperimentConfig(
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        scheme="vsm-stop",
        task_number=9,
        name=name,
        retriever_config={"weighting": "vsm"},
        metadata={"query_count": 1},
    )
    return Experiment(retrievals=retrievals, metrics=metrics, config=config)


def test_save_and_load(tmp_path):
    experiment = make_experiment("run_a", [True, False, True])
    runs_dir = str(tmp_path / "runs")

    exp_dir = save_experiment("run_a", experiment.retrievals, experiment.metrics, experiment.config, runs_dir)

    assert (exp_dir / "results.jsonl").exists()
    assert (exp_dir / "metrics.json").exists()
    assert (exp_dir / "config.json").exists()

    loaded = load_experiment("run_a", runs_dir)

    assert loaded.retrievals == experiment.retrievals
    assert loaded.metrics.average == experiment.metrics.average
    assert loaded.metrics.per_query[0].raw == experiment.metrics.per_query[0].raw
    assert loaded.config.scheme == "vsm-stop"
    assert loaded.config.name == "run_a"
    assert loaded.config.timestamp == experiment.config.timestamp


def test_load_missing_experiment(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_experiment("missing", str(tmp_path))


def test_compare_experiments_logs_deltas(caplog):
    better = make_experiment("better", [True, True])
    worse = make_experiment("worse", [False, True, False, True])

    with caplog.at_level(logging.INFO):
        compare_experiments(worse, better)

    assert "EXPERIMENT COMPARISON" in caplog.text
    assert "11-pt AP" in caplog.text
    assert "+0.5000" in caplog.text
