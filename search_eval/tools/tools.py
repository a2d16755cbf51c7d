"""
MCP tools for searching the collection and evaluating queries.
"""

from typing import List, Optional

from mcp.types import ToolAnnotations
from pydantic import BaseModel, Field

from search_eval.evaluation.retrievers.corpus_retriever import CorpusRetriever
from search_eval.packages.evaluation_framework import Evaluator, QuerySet
from search_eval.packages.search_service import SearchHit

SEARCH_TOOL_NAME = 'search'
EVALUATE_TOOL_NAME = 'evaluate'


class SearchResults(BaseModel):
    """Container for search results."""
    results: List[SearchHit] = Field(description="Ranked matching documents")
    total: int = Field(description="Total number of results returned")


class CurvePoint(BaseModel):
    recall: float = Field(description="Recall level")
    precision: float = Field(description="Interpolated precision at the recall level")


class QuerySummary(BaseModel):
    query: str = Field(description="Query text")
    retrieved: int = Field(description="Number of retrieved documents")
    total_relevant: int = Field(description="Relevant documents in the task")
    mean_precision: float = Field(description="11-point average interpolated precision")


class EvaluationSummary(BaseModel):
    """Averaged eleven-point curve plus per-query averages."""
    scheme: str = Field(description="Retrieval scheme used")
    task_number: int = Field(description="Search task the queries were restricted to")
    average: List[CurvePoint] = Field(description="Eleven-point curve averaged over all queries")
    mean_precision: float = Field(description="11-point average precision of the averaged curve")
    per_query: List[QuerySummary] = Field(description="Per-query summaries")


class SearchTool():
    def __init__(self, retriever: CorpusRetriever, default_task_number: int):
        self.name = SEARCH_TOOL_NAME
        self.title = 'Search the document collection'
        self.description = 'Search document abstracts within one search task, best matches first.'
        self.annotations = ToolAnnotations(title="Collection Search Tool", readOnlyHint=True)
        self.structured_output = True
        self.retriever = retriever
        self.default_task_number = default_task_number

    def execute(
        self,
        query: str = Field(
            description="Terms to search for in document abstracts."),
        task_number: Optional[int] = Field(
            default=None,
            description="Search task to restrict results to. Defaults to the server's configured task."),
        limit: int = Field(
            default=10,
            description="Maximum number of results to return. Default is 10.",
            ge=1,
            le=1000)
    ) -> SearchResults:
        """Search document abstracts within one search task."""
        task = task_number if task_number is not None else self.default_task_number
        hits = self.retriever.search_service.search(query, task, limit)
        return SearchResults(results=hits, total=len(hits))


class EvaluateTool():
    def __init__(self, retriever: CorpusRetriever, default_task_number: int):
        self.name = EVALUATE_TOOL_NAME
        self.title = 'Evaluate queries with precision-recall curves'
        self.description = ('Run queries against the collection and return the averaged '
                            '11-point interpolated precision-recall curve.')
        self.annotations = ToolAnnotations(title="Precision-Recall Evaluation Tool", readOnlyHint=True)
        self.structured_output = True
        self.retriever = retriever
        self.default_task_number = default_task_number
        self.evaluator = Evaluator()

    def execute(
        self,
        queries: List[str] = Field(
            description="Queries to evaluate.",
            min_length=1),
        task_number: Optional[int] = Field(
            default=None,
            description="Search task providing the relevance labels. Defaults to the server's configured task.")
    ) -> EvaluationSummary:
        """Evaluate queries and return their averaged eleven-point curve."""
        task = task_number if task_number is not None else self.default_task_number
        query_set = QuerySet.from_texts(queries, task)
        retrievals = [self.retriever.retrieve(q.query, q.task_number) for q in query_set.get_queries()]
        metrics = self.evaluator.evaluate(retrievals)

        return EvaluationSummary(
            scheme=self.retriever.scheme.value,
            task_number=task,
            average=[CurvePoint(recall=p.recall, precision=p.precision) for p in metrics.average.points],
            mean_precision=metrics.average.mean_precision(),
            per_query=[
                QuerySummary(
                    query=e.query,
                    retrieved=len(e.raw),
                    total_relevant=e.total_relevant,
                    mean_precision=e.eleven_point.mean_precision(),
                )
                for e in metrics.per_query
            ],
        )
