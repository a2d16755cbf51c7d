"""
Abstract retriever interface for evaluation framework.
"""

import logging
from abc import ABC, abstractmethod

from .models import QueryText, RetrievalResult

logger = logging.getLogger(__name__)


class Retriever(ABC):
    """Abstract interface for any retrieval system you evaluate."""

    @abstractmethod
    def retrieve(self, query: QueryText, task_number: int) -> RetrievalResult:
        """Retrieve ranked, relevance-labelled results for a query within one task."""
        pass
