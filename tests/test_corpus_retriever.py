from search_eval.evaluation.retrievers.corpus_retriever import CorpusRetriever
from search_eval.packages.corpus import DocumentCollection
from search_eval.packages.evaluation_framework import Evaluator, QueryText
from search_eval.packages.search_service import RetrievalScheme


def test_retrieve_labels_results_with_corpus_relevance(corpus_path):
    collection = DocumentCollection.from_xml(corpus_path)
    retriever = CorpusRetriever(collection, RetrievalScheme.VSM_STEM_STOP)

    retrieval = retriever.retrieve(QueryText("speech"), task_number=9)

    assert retrieval.total_relevant == 3
    assert {r.doc_id for r in retrieval.results} == {"0", "2", "3"}
    labels = {r.doc_id: r.relevant for r in retrieval.results}
    assert labels == {"0": True, "2": True, "3": False}


def test_retrieval_feeds_the_evaluator(corpus_path):
    collection = DocumentCollection.from_xml(corpus_path)
    retriever = CorpusRetriever(collection, RetrievalScheme.BM25_STOP, limit=10)

    retrieval = retriever.retrieve(QueryText("speech"), task_number=9)
    evaluation = Evaluator().evaluate_query(retrieval)

    # Two of the three relevant task documents mention speech
    assert evaluation.raw[-1].recall == 2 / 3
    assert evaluation.raw[-1].precision == 2 / 3
    assert len(evaluation.eleven_point.points) == 11


def test_query_without_matches(corpus_path):
    collection = DocumentCollection.from_xml(corpus_path)
    retriever = CorpusRetriever(collection, RetrievalScheme.VSM_STOP)

    retrieval = retriever.retrieve(QueryText("astronomy"), task_number=9)
    evaluation = Evaluator().evaluate_query(retrieval)

    assert retrieval.results == []
    assert evaluation.eleven_point.precisions() == [0.0] * 11
