import logging
import os


logger = logging.getLogger(__name__)


def read_file(filepath: str, encoding: str = "utf-8", errors: str = "replace") -> str:
    """
    Return the full text of a file, one "\\n" after every line.

    Line endings are normalised, and a last line without a newline gains one.
    """
    if os.path.isdir(filepath):
        raise IsADirectoryError(f"file may not be a directory: {filepath}")

    lines = []
    with open(filepath, "r", encoding=encoding, errors=errors) as f:
        for line in f:
            lines.append(line.rstrip("\n"))
            lines.append("\n")
    logger.debug(f"Read {len(lines) // 2} lines from {filepath}")
    return "".join(lines)
