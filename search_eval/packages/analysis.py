"""
Text analysis: tokenization, stop-word removal and Porter stemming.
"""

from typing import List

from nltk.stem import PorterStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS, CountVectorizer


class Analyzer:
    """Lowercasing word tokenizer with optional stop-word filter and stemmer."""

    def __init__(self, stemming: bool, stop_words: bool):
        self.stemming = stemming
        self.stop_words = stop_words
        # Lowercases and keeps every word token, single characters included
        self._tokenize = CountVectorizer(lowercase=True, token_pattern=r"(?u)\b\w+\b").build_analyzer()
        self._stemmer = PorterStemmer() if stemming else None

    def analyze(self, text: str) -> List[str]:
        tokens = self._tokenize(text)
        if self.stop_words:
            tokens = [t for t in tokens if t not in ENGLISH_STOP_WORDS]
        if self._stemmer is not None:
            tokens = [self._stemmer.stem(t) for t in tokens]
        return tokens

    def __repr__(self) -> str:
        return f"Analyzer(stemming={self.stemming}, stop_words={self.stop_words})"
