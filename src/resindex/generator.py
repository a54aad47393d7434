"""
Index generation: resolve every resource source, merge the results with the
caller's excludes and (optionally) the previous index, and write the index.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from resindex.errors import RunError, TraversalError
from resindex.file_resolver import (
    DEFAULT_TARGET_PATH,
    ResolvedEntry,
    ResolverConfig,
    ResourceResolver,
    ResourceSource,
)
from resindex.manifest import Manifest, merge_manifest, read_manifest, write_manifest

log = logging.getLogger(__name__)


def resolve_sources(
    sources: Sequence[ResourceSource],
    resolver_config: ResolverConfig | None = None,
) -> list[ResolvedEntry]:
    """
    Resolve each source in declaration order and concatenate the entries.
    A `TraversalError` is wrapped in `RunError`.
    """
    resolver = ResourceResolver(resolver_config)
    entries: list[ResolvedEntry] = []
    for source in sources:
        try:
            entries.extend(resolver.resolve(source))
        except TraversalError as e:
            raise RunError("walk resources in", e.path, str(e.cause)) from e
    return entries


def load_existing(manifest_path: Path, append_if_exists: bool) -> Manifest | None:
    """The previous index, if appending and one exists. Read errors are fatal."""
    if not (append_if_exists and manifest_path.exists()):
        return None
    log.info("Merging with existing resource index %s", manifest_path)
    try:
        return read_manifest(manifest_path)
    except (OSError, UnicodeDecodeError) as e:
        raise RunError("read existing resource index", manifest_path, str(e)) from e


def build_manifest(
    sources: Sequence[ResourceSource],
    exclude: Collection[str],
    manifest_path: Path,
    append_if_exists: bool = False,
    resolver_config: ResolverConfig | None = None,
) -> Manifest:
    """
    Compute the manifest `generate_index` would write, without writing it.
    `manifest_path` is only read, and only with `append_if_exists`.
    """
    entries = resolve_sources(sources, resolver_config)
    existing = load_existing(manifest_path, append_if_exists)
    return merge_manifest(entries, exclude, existing)


def generate_index(
    sources: Sequence[ResourceSource],
    exclude: Collection[str],
    manifest_path: Path,
    append_if_exists: bool = False,
    resolver_config: ResolverConfig | None = None,
) -> Manifest:
    """
    Build the resource index and write it to `manifest_path`.

    With `append_if_exists`, an existing index is merged with the new entries.
    Either way the file is rewritten as a whole. Nothing is written if
    resolution fails. Returns the manifest that was written.
    """
    manifest = build_manifest(sources, exclude, manifest_path, append_if_exists, resolver_config)

    log.info("Writing resource index to %s (%d entries)", manifest_path, len(manifest))
    try:
        write_manifest(manifest_path, manifest)
    except OSError as e:
        raise RunError("write resource index", manifest_path, str(e)) from e
    return manifest


@dataclass
class IndexSettings:
    """Everything a run needs besides the resource sources."""

    output_dir: Path = field(default_factory=Path)
    target_path: str = DEFAULT_TARGET_PATH
    append_if_exists: bool = False
    excludes: list[str] = field(default_factory=list)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / self.target_path


class IndexGenerator:
    """Runs index generation for a fixed list of sources and settings."""

    def __init__(self, sources: Sequence[ResourceSource], settings: IndexSettings) -> None:
        self.sources: list[ResourceSource] = list(sources)
        self.settings: IndexSettings = settings

    def resolve(self) -> Manifest:
        """Compute the manifest without touching the index file."""
        return build_manifest(
            self.sources,
            self.settings.excludes,
            self.settings.manifest_path,
            append_if_exists=self.settings.append_if_exists,
            resolver_config=self.settings.resolver,
        )

    def run(self) -> Manifest:
        return generate_index(
            self.sources,
            self.settings.excludes,
            self.settings.manifest_path,
            append_if_exists=self.settings.append_if_exists,
            resolver_config=self.settings.resolver,
        )
