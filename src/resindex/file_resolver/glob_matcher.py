"""
Ant-style wildcard matching on full path strings.

Supported wildcards:
- `?` matches one character other than `/`
- `*` matches any run of characters other than `/`
- `**` matches across directories: `**/` is zero or more whole directories,
  a trailing `/**` is the directory itself plus everything below it, and any
  other `**` is any run of characters

Everything else is literal. Matches are anchored at both ends, so a pattern
has to account for the whole candidate.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache


def normalize_separators(path: str) -> str:
    """Use `/` as the only separator."""
    return path.replace("\\", "/")


def _translate(pattern: str) -> str:
    """Translate a normalized Ant pattern into a regex body (without anchors)."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if pattern.startswith("**", i):
            at_segment_start = i == 0 or pattern[i - 1] == "/"
            if at_segment_start and pattern.startswith("**/", i):
                out.append("(?:.*/)?")
                i += 3
                continue
            if i + 2 == n and out and out[-1] == "/":
                # Drop the slash already emitted so `dir/**` also matches `dir`.
                # After `**/` there is no literal slash to drop, so `.*` follows.
                out.pop()
                out.append("(?:/.*)?")
                i += 2
                continue
            out.append(".*")
            i += 2
        elif c == "*":
            out.append("[^/]*")
            i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(c))
            i += 1
    return "".join(out)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern[str] | None:
    """
    Compile an Ant pattern to a regex. A trailing `/` means `/**`.
    Returns `None` if the pattern can't be compiled, in which case callers
    fall back to literal comparison.
    """
    normalized = normalize_separators(pattern)
    if normalized.endswith("/"):
        normalized += "**"
    try:
        return re.compile(_translate(normalized), re.DOTALL)
    except re.error:
        return None


def matches(candidate: str, pattern: str) -> bool:
    """Check whether `candidate` is matched in full by the Ant-style `pattern`."""
    candidate = normalize_separators(candidate)
    regex = compile_pattern(pattern)
    if regex is None:
        return candidate == normalize_separators(pattern)
    return regex.fullmatch(candidate) is not None


def matches_any(candidate: str, patterns: Iterable[str]) -> bool:
    """OR semantics across `patterns`. An empty list matches nothing."""
    return any(matches(candidate, p) for p in patterns)
