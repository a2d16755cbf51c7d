"""
Corpus retriever for the evaluation framework.

Runs queries through SearchService and labels each hit with the corpus relevance.
"""

import logging
from typing import List

from search_eval.packages.corpus import DocumentCollection
from search_eval.packages.evaluation_framework import (
    DocumentId,
    QueryText,
    RankedResult,
    RetrievalResult,
    Retriever,
)
from search_eval.packages.search_service import (
    DEFAULT_SEARCH_LIMIT,
    RetrievalScheme,
    SearchHit,
    SearchService,
)

logger = logging.getLogger(__name__)


class CorpusRetriever(Retriever):
    """Retriever over an in-memory XML document collection."""

    def __init__(
        self,
        collection: DocumentCollection,
        scheme: RetrievalScheme,
        limit: int = DEFAULT_SEARCH_LIMIT
    ):
        """Index the collection with the given scheme."""
        logger.info(f"Initializing CorpusRetriever with scheme={scheme.value}, limit={limit}")
        self.collection = collection
        self.scheme = scheme
        self.limit = limit
        self.search_service = SearchService(collection.get_documents(), scheme.config)
        logger.info("CorpusRetriever initialized successfully")

    def retrieve(self, query: QueryText, task_number: int) -> RetrievalResult:
        """Retrieve ranked results for a query within one task."""
        logger.debug(f"Starting retrieval for query: '{query}' in task {task_number}")

        hits = self.search_service.search(query, task_number, limit=self.limit)
        results = self._to_ranked_results(hits)
        total_relevant = self.collection.count_relevant(task_number)
        logger.debug(f"Retrieved {len(results)} results, {total_relevant} relevant in task")

        return RetrievalResult(
            query=query,
            task_number=task_number,
            results=results,
            total_relevant=total_relevant,
        )

    def _to_ranked_results(self, hits: List[SearchHit]) -> List[RankedResult]:
        return [
            RankedResult(
                relevant=hit.relevant,
                doc_id=DocumentId(str(hit.doc_id)),
                title=hit.title,
                score=hit.score,
                abstract_text=hit.abstract_text,
            )
            for hit in hits
        ]
