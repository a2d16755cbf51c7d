import json

import pytest

CORPUS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<collection>
  <doc>
    <Title>Speech recognition with hidden Markov models</Title>
    <Abstract>We present a speech recognition system based on hidden Markov models.</Abstract>
    <Search_Task><task_number>9</task_number><Relevance_Class>1</Relevance_Class></Search_Task>
  </doc>
  <doc>
    <Title>Image segmentation</Title>
    <Abstract>Image segmentation using convolutional networks.</Abstract>
    <Search_Task><task_number>9</task_number><Relevance_Class>0</Relevance_Class></Search_Task>
  </doc>
  <doc>
    <Title>Acoustic models</Title>
    <Abstract>Recognizing spoken words: acoustic models for speech.</Abstract>
    <Search_Task><task_number>9</task_number><Relevance_Class>1</Relevance_Class></Search_Task>
  </doc>
  <doc>
    <Title>Conference report</Title>
    <Abstract>A speech given at the conference about economics.</Abstract>
    <Search_Task><task_number>9</task_number><Relevance_Class>0</Relevance_Class></Search_Task>
  </doc>
  <doc>
    <Title>Speech synthesis</Title>
    <Abstract>Speech synthesis for the robots.</Abstract>
    <Search_Task><task_number>3</task_number><Relevance_Class>1</Relevance_Class></Search_Task>
  </doc>
  <doc>
    <Title>Language modeling</Title>
    <Abstract>Neural networks for language modeling.</Abstract>
    <Search_Task><task_number>9</task_number><Relevance_Class>1</Relevance_Class></Search_Task>
  </doc>
  <doc>
    <Title>Indexing</Title>
    <Abstract>Database indexing structures.</Abstract>
    <Search_Task><task_number>3</task_number><Relevance_Class>0</Relevance_Class></Search_Task>
  </doc>
</collection>
"""


@pytest.fixture
def corpus_path(tmp_path):
    path = tmp_path / "corpus.xml"
    path.write_text(CORPUS_XML, encoding="utf-8")
    return str(path)


@pytest.fixture
def queries_path(tmp_path):
    path = tmp_path / "queries.jsonl"
    lines = [
        {"query": "speech", "task_number": 9},
        {"query": "acoustic models"},
        {"query": "networks", "task_number": 9},
    ]
    path.write_text("\n".join(json.dumps(line) for line in lines) + "\n", encoding="utf-8")
    return str(path)
