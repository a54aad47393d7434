"""
ResourceResolver: turns one resource source into the list of files it
contributes, each mapped to its target path inside the packaged artifact.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable
from pathlib import Path

from resindex.file_resolver.gitignore import GitignoreFilter
from resindex.file_resolver.glob_matcher import matches_any, normalize_separators
from resindex.file_resolver.types import ResolvedEntry, ResolverConfig, ResourceSource
from resindex.file_resolver.walker import walk_files

log = logging.getLogger(__name__)


def qualify_patterns(root: Path, patterns: Iterable[str]) -> list[str]:
    """
    Expand patterns declared relative to `root` into fully-qualified patterns,
    so they can be matched against absolute candidate paths.
    """
    prefix = root.as_posix().rstrip("/")
    return [f"{prefix}/{normalize_separators(p).lstrip('/')}" for p in patterns]


def target_path_for(target_prefix: str, relative_path: str) -> str:
    """
    Join a target prefix and a relative path into a normalized, `/`-separated
    target path. Target paths are relative to the artifact root, so leading
    slashes are dropped.
    """
    prefix = normalize_separators(target_prefix)
    relative = normalize_separators(relative_path)
    joined = posixpath.join(prefix, relative) if prefix else relative
    return posixpath.normpath(joined).lstrip("/")


class ResourceResolver:
    """
    Resolves resource sources into `ResolvedEntry` lists.

    Include and exclude patterns are evaluated against the absolute path of each
    file. An empty include list selects every file, and excludes always win.
    """

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self._config: ResolverConfig = config or ResolverConfig()

    def resolve(self, source: ResourceSource) -> list[ResolvedEntry]:
        """
        Walk `source.directory` and return an entry for each selected file.
        `TraversalError` from the walk propagates unchanged.
        """
        root = source.directory.resolve()
        log.info("Reading resources from %s", source.directory)

        includes = qualify_patterns(root, source.includes)
        excludes = qualify_patterns(root, list(source.excludes) + self._config.effective_excludes)
        log.debug("Include: %s, Exclude: %s", includes, excludes)

        gitignore = GitignoreFilter(root) if self._config.respect_gitignore else None
        skip_dir = (lambda d: gitignore.is_ignored(d, is_dir=True)) if gitignore else None

        entries: list[ResolvedEntry] = []
        for path in walk_files(root, self._config.follow_symlinks, skip_dir):
            candidate = path.as_posix()
            relative = path.relative_to(root).as_posix()
            if includes and not matches_any(candidate, includes):
                log.debug("  skipped (not included): %s", relative)
                continue
            if matches_any(candidate, excludes):
                log.debug("  skipped (excluded): %s", relative)
                continue
            if gitignore and gitignore.is_ignored(path):
                log.debug("  skipped (gitignored): %s", relative)
                continue

            log.info("- %s", relative)
            entries.append(
                ResolvedEntry(
                    source_path=path,
                    relative_path=relative,
                    target_path=target_path_for(source.target_prefix, relative),
                )
            )
        return entries
