"""
XML document collection with per-task relevance labels.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class DocumentInCollection(BaseModel):
    """Single document of the collection."""
    doc_id: int = Field(description="Position of the document in the collection")
    title: str = Field(default="", description="Document title")
    abstract_text: str = Field(default="", description="Document abstract, the searched field")
    search_task_number: int = Field(description="Search task the document belongs to")
    relevant: bool = Field(default=False, description="Relevance to its search task")


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


class DocumentCollection:
    """Documents parsed from the course corpus XML."""

    def __init__(self, documents: List[DocumentInCollection]):
        self._documents = documents
        logger.info(f"Document collection holds {len(documents)} documents")

    @classmethod
    def from_xml(cls, path: str) -> "DocumentCollection":
        """Parse every <doc> element of the corpus file.

        Expected layout of one document:

            <doc>
              <Title>...</Title>
              <Abstract>...</Abstract>
              <Search_Task>
                <task_number>9</task_number>
                <Relevance_Class>1</Relevance_Class>
              </Search_Task>
            </doc>
        """
        logger.info(f"Loading document collection from {path}")

        if not Path(path).exists():
            raise FileNotFoundError(f"Corpus file not found: {path}")

        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as e:
            raise ValueError(f"Error parsing corpus {path}: {e}") from e

        documents: List[DocumentInCollection] = []
        for position, element in enumerate(root.iter("doc")):
            task = element.find("Search_Task")
            if task is None:
                raise ValueError(f"Document {position} in {path} has no Search_Task")

            try:
                task_number = int(_text(task, "task_number"))
            except ValueError as e:
                raise ValueError(
                    f"Document {position} in {path} has an invalid task_number: {e}"
                ) from e

            documents.append(DocumentInCollection(
                doc_id=position,
                title=_text(element, "Title"),
                abstract_text=_text(element, "Abstract"),
                search_task_number=task_number,
                relevant=_text(task, "Relevance_Class") == "1",
            ))

        logger.info(f"Loaded {len(documents)} documents from {path}")
        return cls(documents)

    def get_documents(self, task_number: Optional[int] = None) -> List[DocumentInCollection]:
        """Get all documents, or only those of one task."""
        if task_number is None:
            return self._documents
        return [d for d in self._documents if d.search_task_number == task_number]

    def count_relevant(self, task_number: int) -> int:
        """Number of documents labelled relevant for a task."""
        return sum(1 for d in self.get_documents(task_number) if d.relevant)

    def __len__(self) -> int:
        return len(self._documents)
