import pytest
from pydantic import ValidationError

from search_eval.config import Config, Transport, get_config
from search_eval.packages.search_service import RetrievalScheme


def test_defaults(monkeypatch):
    for name in ("CORPUS_PATH", "TASK_NUMBER", "RETRIEVAL_SCHEME", "SEARCH_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    config = Config()

    assert config.corpus_path is None
    assert config.task_number == 9
    assert config.scheme == RetrievalScheme.VSM_STOP
    assert config.search_limit == 1000
    assert config.transport == Transport.STREAMABLE_HTTP


def test_environment(monkeypatch):
    monkeypatch.setenv("CORPUS_PATH", "/data/corpus.xml")
    monkeypatch.setenv("RETRIEVAL_SCHEME", "bm25-stem")

    config = Config()

    assert config.corpus_path == "/data/corpus.xml"
    assert config.scheme == RetrievalScheme.BM25_STEM


def test_cli_overrides_environment(monkeypatch):
    monkeypatch.setenv("TASK_NUMBER", "4")

    config = get_config(["--corpus", "c.xml", "--task", "3", "--scheme", "bm25-stop", "--transport", "stdio"])

    assert config.corpus_path == "c.xml"
    assert config.task_number == 3
    assert config.scheme == RetrievalScheme.BM25_STOP
    assert config.transport == Transport.STDIO


def test_sse_is_rejected():
    with pytest.raises(ValidationError):
        Config(transport="sse")


def test_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Config(search_limit=0)
