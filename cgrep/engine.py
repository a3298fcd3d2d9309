import logging
import os
import stat
from concurrent.futures import ThreadPoolExecutor, as_completed
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import Levenshtein

from .base import MatchType, WindowMatch
from .bigram import bigrams_of, canonicalize
from .builder import CompiledQuery, QueryBuilder
from .config import load_config
from .errors import NotADirectory
from .storage import read_file


logger = logging.getLogger(__name__)

Needle = Union[str, CompiledQuery]


class Matcher:
    """Slides a needle-sized word window over a haystack and keeps windows above threshold."""

    def __init__(self, prefilter: bool = True):
        self.prefilter = prefilter

    def compile(self, needle: Needle) -> CompiledQuery:
        if isinstance(needle, CompiledQuery):
            return needle
        return QueryBuilder(needle, prefilter=self.prefilter).build()

    def match(self, needle: Needle, haystack: str, threshold: float) -> List[str]:
        return [m.text for m in self.match_windows(needle, haystack, threshold)]

    def match_windows(self, needle: Needle, haystack: str, threshold: float) -> List[WindowMatch]:
        query = self.compile(needle)
        if query.word_count == 0:
            return []

        haystack = canonicalize(haystack)
        if not query.may_match(haystack, threshold):
            logger.debug(f"No bigram of '{query.needle}' occurs in haystack, skipping windows")
            return []

        words = haystack.split()
        k = query.word_count
        matches = []
        for i in range(len(words) - k + 1):
            candidate = " ".join(words[i:i + k])
            score = query.bigrams.jaccard(bigrams_of(candidate))
            if score >= threshold:
                matches.append(WindowMatch(
                    text=candidate,
                    position=i,
                    score=score,
                    edit_ratio=Levenshtein.ratio(query.needle, candidate),
                    match_type=MatchType.EXACT if candidate == query.needle else MatchType.FUZZY
                ))
        return matches


class DirectoryScanner:
    """Matches a needle against every file directly inside a directory, one task per file."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = load_config(config)
        self.matcher = Matcher(prefilter=self.config["prefilter"])

    def scan(self, needle: str, dir_path: str, threshold: Optional[float] = None) -> Mapping[str, Tuple[str, ...]]:
        """
        Map each readable file to the window texts that matched, in window order.

        Raises NotADirectory or the underlying OSError when the directory itself
        cannot be inspected; unreadable files are left out of the result.
        """
        scored = self.scan_windows(needle, dir_path, threshold)
        return MappingProxyType({
            path: tuple(m.text for m in matches) for path, matches in scored.items()
        })

    def scan_windows(self, needle: str, dir_path: str,
                     threshold: Optional[float] = None) -> Mapping[str, Tuple[WindowMatch, ...]]:
        if threshold is None:
            threshold = self.config["threshold"]

        filepaths = self._list_files(dir_path)
        query = self.matcher.compile(needle)

        results: Dict[str, Tuple[WindowMatch, ...]] = {}
        if not filepaths:
            return MappingProxyType(results)

        with ThreadPoolExecutor(max_workers=self.config["max_workers"]) as executor:
            futures = {
                executor.submit(self._scan_file, query, path, threshold): path
                for path in filepaths
            }
            for future in as_completed(futures):
                path = futures[future]
                matches = future.result()
                if matches is None:
                    continue
                results[path] = tuple(matches)

        logger.debug(f"Scanned {len(filepaths)} files in {dir_path}, {len(results)} readable")
        return MappingProxyType(results)

    def _list_files(self, dir_path: str) -> List[str]:
        try:
            info = os.stat(dir_path)
        except OSError as e:
            logger.debug(f"Cannot open directory {dir_path}: {e}")
            raise

        if not stat.S_ISDIR(info.st_mode):
            logger.debug(f"Not a directory: {dir_path}")
            raise NotADirectory(dir_path)

        try:
            with os.scandir(dir_path) as entries:
                # First-level search only.
                return [os.path.join(dir_path, entry.name) for entry in entries if not entry.is_dir()]
        except OSError as e:
            logger.debug(f"Cannot list directory {dir_path}: {e}")
            raise

    def _scan_file(self, query: CompiledQuery, filepath: str, threshold: float) -> Optional[List[WindowMatch]]:
        try:
            contents = read_file(filepath, encoding=self.config["encoding"], errors=self.config["errors"])
        except (OSError, UnicodeError) as e:
            logger.warning(f"Skipping {filepath}: {e}")
            return None

        matches = self.matcher.match_windows(query, contents, threshold)
        logger.debug(f"{len(matches)} matches in {filepath}")
        return matches


def rank(matches: Iterable[WindowMatch]) -> List[WindowMatch]:
    """Best first: Jaccard score, then edit ratio, then earlier position."""
    return sorted(matches, key=lambda m: (-m.score, -m.edit_ratio, m.position))


def match(needle: str, haystack: str, threshold: float) -> List[str]:
    return Matcher().match(needle, haystack, threshold)


def scan_directory(needle: str, dir_path: str, threshold: float,
                   max_workers: Optional[int] = None) -> Mapping[str, Tuple[str, ...]]:
    overrides = {"max_workers": max_workers} if max_workers is not None else None
    return DirectoryScanner(overrides).scan(needle, dir_path, threshold)
