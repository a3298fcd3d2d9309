from typing import Any, Dict, Optional

from .base import BIGRAM_DOMAIN, Bigram, MatchType, WindowMatch
from .bigram import bigram_index, bigrams_of, canonicalize, similarity
from .builder import CompiledQuery, QueryBuilder
from .config import DEFAULT_CONFIG, load_config
from .engine import DirectoryScanner, Matcher, match, rank, scan_directory
from .errors import (
    CgrepError,
    ConfigurationError,
    IndexOutOfRange,
    InvalidBigram,
    InvalidCapacity,
    NotADirectory,
)
from .storage import read_file
from .utils import IndexAssignable, IndexedSet


__all__ = [
    "IndexedSet",
    "IndexAssignable",
    "Bigram",
    "BIGRAM_DOMAIN",
    "MatchType",
    "WindowMatch",
    "canonicalize",
    "bigram_index",
    "bigrams_of",
    "similarity",
    "QueryBuilder",
    "CompiledQuery",
    "Matcher",
    "DirectoryScanner",
    "match",
    "rank",
    "scan_directory",
    "read_file",
    "DEFAULT_CONFIG",
    "load_config",
    "CgrepError",
    "ConfigurationError",
    "IndexOutOfRange",
    "InvalidBigram",
    "InvalidCapacity",
    "NotADirectory",
    "load_scanner"
]

__version__ = "0.1.0"


def load_scanner(config: Optional[Dict[str, Any]] = None) -> DirectoryScanner:
    """
    Factory function for a DirectoryScanner.

    Args:
        config: Optional overrides for DEFAULT_CONFIG. CGREP_* environment
                variables are applied first, these on top.
    """
    return DirectoryScanner(config)
