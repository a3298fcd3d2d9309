"""
Bigram canonicalization and indexing.

Text is first reduced to lowercase letters separated by single spaces, then
every overlapping pair of adjacent characters is mapped to a dense index in
[0, BIGRAM_DOMAIN) and collected in an IndexedSet.
"""

import re

from .base import BIGRAM_DOMAIN, Bigram
from .utils import IndexedSet


NON_ALPHABET = re.compile(r"[^a-z ]")
WHITESPACE = re.compile(r"\s+")


def canonicalize(text: str) -> str:
    """Lowercase, turn anything outside a-z into a word break, collapse and trim spaces."""
    text = NON_ALPHABET.sub(" ", text.lower())
    return WHITESPACE.sub(" ", text).strip()


def bigram_index(a: str, b: str) -> int:
    return Bigram(a, b).index()


def bigrams_of(text: str) -> IndexedSet[Bigram]:
    """
    Set of every adjacent character pair in an already canonical string.

    Strings shorter than two characters yield an empty set.
    """
    bigrams: IndexedSet[Bigram] = IndexedSet(BIGRAM_DOMAIN)
    for i in range(len(text) - 1):
        bigrams.insert(Bigram(text[i], text[i + 1]))
    return bigrams


def similarity(a: str, b: str) -> float:
    """Jaccard similarity of the bigram sets of two canonical strings."""
    return bigrams_of(a).jaccard(bigrams_of(b))
