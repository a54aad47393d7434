"""
Manifest merging and the `resources.list` text format.

A manifest is a set of target paths. On disk it is UTF-8 text with one path
per line, joined by `\\n`, with no trailing newline.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from pathlib import Path

from strif import atomic_output_file

from resindex.file_resolver.types import ResolvedEntry

Manifest = frozenset[str]


def merge_manifest(
    entries: Iterable[ResolvedEntry],
    exclude: Collection[str],
    existing: Manifest | None = None,
) -> Manifest:
    """
    Merge resolved entries into a manifest.

    Target paths listed in `exclude` (exact strings) are dropped from the new
    entries, then the result is unioned with `existing` if given. Duplicates
    collapse, whichever source produced them.
    """
    excluded = set(exclude)
    targets = {entry.target_path for entry in entries} - excluded
    if existing is not None:
        targets |= existing
    return frozenset(targets)


def parse_manifest(text: str) -> Manifest:
    """Parse manifest text. Blank lines are ignored."""
    return frozenset(line for line in text.splitlines() if line.strip())


def format_manifest(manifest: Iterable[str]) -> str:
    """
    Serialize a manifest. Lines are sorted so the file is stable across runs,
    though readers must not depend on the order.
    """
    return "\n".join(sorted(manifest))


def read_manifest(path: Path) -> Manifest:
    return parse_manifest(path.read_text(encoding="utf-8"))


def write_manifest(path: Path, manifest: Iterable[str]) -> None:
    """Write the manifest atomically, replacing any previous file."""
    with atomic_output_file(path, make_parents=True) as temp_path:
        Path(temp_path).write_bytes(format_manifest(manifest).encode("utf-8"))
