"""Recursive listing of regular files below a directory."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

from resindex.errors import TraversalError


def walk_files(
    root: Path,
    follow_symlinks: bool = False,
    skip_dir: Callable[[Path], bool] | None = None,
) -> Iterator[Path]:
    """
    Yield every regular file below `root`, in no particular order.

    Symlinked directories are entered only with `follow_symlinks`; each real
    directory is visited once so link cycles terminate. `skip_dir` can prune
    subdirectories before they are entered.

    Raises `TraversalError` if `root` is missing or not a directory, or if any
    directory below it can't be listed.
    """
    if not root.exists():
        raise TraversalError(root, "no such directory")
    if not root.is_dir():
        raise TraversalError(root, "not a directory")

    def on_error(e: OSError) -> None:
        raise TraversalError(Path(e.filename or root), e) from e

    visited: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=follow_symlinks):
        current = Path(dirpath)

        if follow_symlinks:
            real = os.path.realpath(dirpath)
            if real in visited:
                dirnames[:] = []
                continue
            visited.add(real)

        # Prune in-place (prevents descent)
        if skip_dir is not None:
            dirnames[:] = [d for d in dirnames if not skip_dir(current / d)]

        for filename in filenames:
            filepath = current / filename
            # os.walk lists broken links and special files as non-directories
            if filepath.is_file():
                yield filepath
