import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import ahocorasick

from .base import Bigram
from .bigram import bigrams_of, canonicalize
from .utils import IndexedSet


logger = logging.getLogger(__name__)


@dataclass
class CompiledQuery:
    """Everything about a needle that does not depend on the haystack."""
    needle: str  # canonical form
    word_count: int
    bigrams: IndexedSet[Bigram]
    automaton: Optional[Any] = None
    stats: Dict[str, Any] = field(default_factory=dict)

    def may_match(self, haystack: str, threshold: float) -> bool:
        """
        False only when no window of the canonical haystack can reach the threshold.

        With a positive threshold and at least one needle bigram, a haystack
        sharing no bigram with the needle gives every window a Jaccard score of 0.
        """
        if threshold <= 0 or self.automaton is None:
            return True
        for _ in self.automaton.iter(haystack):
            return True
        return False


class QueryBuilder:
    """Prepares a needle once so it can be matched against many files."""

    def __init__(self, needle: str, prefilter: bool = True):
        self.raw_needle = needle
        self.prefilter = prefilter
        self.stats = {
            "build_time": 0,
            "bigram_count": 0
        }

    def build(self) -> CompiledQuery:
        start_time = time.time()

        needle = canonicalize(self.raw_needle)
        bigrams = bigrams_of(needle)
        automaton = self._build_automaton(needle) if self.prefilter else None

        self.stats["build_time"] = time.time() - start_time
        self.stats["bigram_count"] = bigrams.cardinality()
        logger.debug(f"Compiled needle '{needle}' with {self.stats['bigram_count']} bigrams")

        return CompiledQuery(
            needle=needle,
            word_count=len(needle.split()),
            bigrams=bigrams,
            automaton=automaton,
            stats=dict(self.stats)
        )

    def _build_automaton(self, needle: str) -> Optional[Any]:
        if len(needle) < 2:
            return None
        automaton = ahocorasick.Automaton()
        for i in range(len(needle) - 1):
            pair = needle[i:i + 2]
            if pair not in automaton:
                automaton.add_word(pair, pair)
        automaton.make_automaton()
        return automaton
