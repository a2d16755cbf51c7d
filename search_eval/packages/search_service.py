"""
Search the document collection with library-backed VSM or BM25 scoring.
"""

import logging
from enum import Enum
from typing import Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field
from rank_bm25 import BM25Okapi
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.metrics.pairwise import cosine_similarity

from search_eval.packages.analysis import Analyzer
from search_eval.packages.corpus import DocumentInCollection

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 1000


class Weighting(str, Enum):
    VSM = "vsm"
    BM25 = "bm25"


class RetrievalConfig(BaseModel):
    """Term weighting plus analyzer options."""
    model_config = ConfigDict(frozen=True)

    weighting: Weighting = Field(description="Term weighting and scoring model")
    stemming: bool = Field(description="Apply the Porter stemmer")
    stop_words: bool = Field(description="Remove English stop words")


class RetrievalScheme(str, Enum):
    VSM_STEM_STOP = "vsm-stem-stop"
    VSM_STEM = "vsm-stem"
    VSM_STOP = "vsm-stop"
    BM25_STEM_STOP = "bm25-stem-stop"
    BM25_STEM = "bm25-stem"
    BM25_STOP = "bm25-stop"

    @property
    def config(self) -> RetrievalConfig:
        return SCHEME_CONFIGS[self]


SCHEME_CONFIGS: Dict[RetrievalScheme, RetrievalConfig] = {
    RetrievalScheme.VSM_STEM_STOP: RetrievalConfig(weighting=Weighting.VSM, stemming=True, stop_words=True),
    RetrievalScheme.VSM_STEM: RetrievalConfig(weighting=Weighting.VSM, stemming=True, stop_words=False),
    RetrievalScheme.VSM_STOP: RetrievalConfig(weighting=Weighting.VSM, stemming=False, stop_words=True),
    RetrievalScheme.BM25_STEM_STOP: RetrievalConfig(weighting=Weighting.BM25, stemming=True, stop_words=True),
    RetrievalScheme.BM25_STEM: RetrievalConfig(weighting=Weighting.BM25, stemming=True, stop_words=False),
    RetrievalScheme.BM25_STOP: RetrievalConfig(weighting=Weighting.BM25, stemming=False, stop_words=True),
}


class SearchHit(BaseModel):
    """Model for one search result."""
    doc_id: int = Field(description="Position of the document in the collection")
    score: float = Field(description="Retrieval score")
    title: str = Field(description="Document title")
    abstract_text: str = Field(description="Document abstract")
    search_task_number: int = Field(description="Search task of the document")
    relevant: bool = Field(description="Relevance label of the document for its task")


class SearchService:
    """Indexes document abstracts and runs task-filtered term queries."""

    def __init__(self, documents: List[DocumentInCollection], config: RetrievalConfig):
        """Index the abstracts of all documents."""
        if len(documents) == 0:
            raise ValueError("Cannot index an empty document collection")

        logger.info(f"Indexing {len(documents)} documents with {config}")
        self.config = config
        self.analyzer = Analyzer(stemming=config.stemming, stop_words=config.stop_words)
        self._documents = documents

        tokenized = [self.analyzer.analyze(d.abstract_text) for d in documents]
        self._doc_terms: List[Set[str]] = [set(tokens) for tokens in tokenized]

        if config.weighting == Weighting.VSM:
            self._vectorizer = TfidfVectorizer(analyzer=self.analyzer.analyze)
            self._matrix = self._vectorizer.fit_transform([d.abstract_text for d in documents])
        else:
            self._bm25 = BM25Okapi(tokenized)

        logger.info("Indexing complete")

    def search(self, query: str, task_number: int, limit: int = DEFAULT_SEARCH_LIMIT) -> List[SearchHit]:
        """Return documents of the task matching any query term, best score first."""
        logger.info(f"Starting search for query: '{query}' in task {task_number} with limit: {limit}")

        if limit < 1:
            logger.error(f"Invalid limit: {limit}. Must be at least 1.")
            raise ValueError(f"Limit must be at least 1, got {limit}")

        query_tokens = self.analyzer.analyze(query)
        if len(query_tokens) == 0:
            logger.warning(f"Query '{query}' has no terms after analysis")
            return []

        # Task filter is a required clause, query terms are optional clauses
        query_terms = set(query_tokens)
        candidates = [
            i for i, doc in enumerate(self._documents)
            if doc.search_task_number == task_number and self._doc_terms[i] & query_terms
        ]
        if len(candidates) == 0:
            logger.warning(f"No documents match query '{query}' in task {task_number}")
            return []

        scores = self._score(query, query_tokens)

        # Stable sort: equal scores keep collection order
        ranked = sorted(candidates, key=lambda i: scores[i], reverse=True)[:limit]

        hits = [
            SearchHit(
                doc_id=self._documents[i].doc_id,
                score=scores[i],
                title=self._documents[i].title,
                abstract_text=self._documents[i].abstract_text,
                search_task_number=self._documents[i].search_task_number,
                relevant=self._documents[i].relevant,
            )
            for i in ranked
        ]
        logger.info(f"Search returned {len(hits)} results")
        return hits

    def _score(self, query: str, query_tokens: List[str]) -> List[float]:
        """Score every indexed document against the query."""
        if self.config.weighting == Weighting.VSM:
            query_vector = self._vectorizer.transform([query])
            scores = cosine_similarity(query_vector, self._matrix)[0]
        else:
            scores = self._bm25.get_scores(query_tokens)
        return [float(s) for s in scores]
