"""
Query set management for evaluation runs.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Tuple

from .models import QueryText

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationQuery:
    """Query text plus the search task it is evaluated against."""
    query: QueryText
    task_number: int


class QuerySet:
    """Queries to run in one evaluation."""

    def __init__(self, queries: List[EvaluationQuery]):
        """Initialize query set with queries."""
        logger.info(f"Initializing query set with {len(queries)} queries")
        self._queries = queries
        self._query_map: Dict[Tuple[str, int], EvaluationQuery] = {
            (q.query, q.task_number): q for q in queries
        }
        self._validate()
        logger.info("Query set initialized successfully")

    def _validate(self) -> None:
        """Validate query set integrity."""
        logger.info("Validating query set")

        # Check for duplicate queries
        keys = [(q.query, q.task_number) for q in self._queries]
        if len(keys) != len(set(keys)):
            seen = set()
            duplicates = []
            for key in keys:
                if key in seen:
                    duplicates.append(key)
                seen.add(key)

            duplicate_list = "\n".join(f"  - {q} (task {t})" for q, t in duplicates)
            raise ValueError(f"Duplicate queries found in query set:\n{duplicate_list}")

        for query in self._queries:
            if not query.query.strip():
                logger.warning(f"Empty query text for task {query.task_number}")

        logger.info("Query set validation complete")

    @classmethod
    def from_jsonl(cls, path: str, default_task_number: int) -> "QuerySet":
        """Load query set from JSONL file. Lines without task_number use the default."""
        logger.info(f"Loading query set from {path}")

        path_obj = Path(path)
        if not path_obj.exists():
            raise FileNotFoundError(f"Query file not found: {path}")

        queries: List[EvaluationQuery] = []

        with open(path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    data = json.loads(line)
                    query = EvaluationQuery(
                        query=QueryText(data['query']),
                        task_number=int(data.get('task_number', default_task_number))
                    )
                    queries.append(query)

                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    raise ValueError(
                        f"Error parsing line {line_num} in {path}: {e}"
                    ) from e

        logger.info(f"Loaded {len(queries)} queries from {path}")
        return cls(queries)

    @classmethod
    def from_texts(cls, texts: List[str], task_number: int) -> "QuerySet":
        """Build query set from plain query strings sharing one task."""
        return cls([EvaluationQuery(query=QueryText(t), task_number=task_number) for t in texts])

    def get_queries(self) -> List[EvaluationQuery]:
        """Get all queries."""
        return self._queries

    def get_query(self, query_text: str, task_number: int) -> EvaluationQuery:
        """Get specific query by text and task."""
        key = (query_text, task_number)
        if key not in self._query_map:
            raise KeyError(f"Query not found: {query_text} (task {task_number})")
        return self._query_map[key]
