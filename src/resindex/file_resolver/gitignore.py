"""Gitignore handling for resource directories using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec

from resindex.errors import TraversalError


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist or is empty.
    """
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    lines = gitignore.read_text(encoding="utf-8").splitlines()
    lines = [line for line in lines if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


class GitignoreFilter:
    """
    Answers "is this path ignored?" for paths below one resource root, using
    every `.gitignore` between the root and the path. Ignore files above the
    root are not consulted, since the root is what gets packaged.
    """

    def __init__(self, root: Path) -> None:
        self._root: Path = root
        # Cache gitignore specs per directory to avoid re-reading from disk.
        self._cache: dict[Path, pathspec.PathSpec | None] = {}

    def _get(self, directory: Path) -> pathspec.PathSpec | None:
        if directory not in self._cache:
            try:
                self._cache[directory] = load_gitignore(directory)
            except (OSError, UnicodeDecodeError, ValueError) as e:
                # Unreadable, non-UTF-8, or invalid pattern.
                raise TraversalError(directory / ".gitignore", e) from e
        return self._cache[directory]

    def is_ignored(self, path: Path, is_dir: bool = False) -> bool:
        """
        Check `path` against each `.gitignore` from the root down to its parent.
        Raises `TraversalError` if one of those files can't be loaded.
        """
        rel_parts = path.relative_to(self._root).parts
        current = self._root
        for i in range(len(rel_parts)):
            spec = self._get(current)
            if spec is not None:
                rel = "/".join(rel_parts[i:])
                if is_dir:
                    rel += "/"
                if spec.match_file(rel):
                    return True
            current = current / rel_parts[i]
        return False
