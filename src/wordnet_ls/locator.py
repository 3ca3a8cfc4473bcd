"""Find the word under the editor cursor."""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

logger = logging.getLogger(__name__)


def word_at(line: str, character: int) -> str | None:
    """Return the lowercased alphabetic run touching ``character``.

    A cursor on an alphabetic character selects the whole run around it.
    A cursor on any other character, or at the end of the line, selects
    the run that ends immediately before it. Anything else, including a
    cursor past the end of the line, is no word.
    """
    if character < 0:
        return None

    current = ""
    reached = False
    for i, ch in enumerate(line):
        if ch.isalpha():
            current += ch.lower()
            if i == character:
                reached = True
            continue
        if reached or i == character:
            return current or None
        current = ""

    # End of line: the cursor sat inside the trailing run or just after it.
    if reached or character == len(line):
        return current or None
    return None


def uri_to_path(uri: str) -> Path | None:
    """Convert a ``file://`` URI to a local path, None for other schemes."""
    parsed = urlparse(uri)
    if parsed.scheme != "file":
        return None
    path = url2pathname(parsed.path)
    if parsed.netloc and parsed.netloc != "localhost":
        path = f"//{parsed.netloc}{path}"
    return Path(path)


def read_line(path: str | Path, line: int) -> str | None:
    """Read a single line (0-based) without loading the whole document."""
    if line < 0:
        return None
    try:
        with open(path, encoding="utf-8") as f:
            text = next(itertools.islice(f, line, None), None)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read line {line} of {path}: {e}")
        return None
    if text is None:
        return None
    return text.rstrip("\r\n")


def word_at_position(uri: str, line: int, character: int) -> str | None:
    """Word under the cursor in the document addressed by ``uri``."""
    path = uri_to_path(uri)
    if path is None:
        logger.debug(f"Not a file URI: {uri}")
        return None
    text = read_line(path, line)
    if text is None:
        return None
    return word_at(text, character)
