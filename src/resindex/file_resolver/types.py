"""Data types for resource resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from resindex.file_resolver.defaults import VCS_EXCLUDES


@dataclass(frozen=True)
class ResourceSource:
    """
    One declared resource tree.

    `includes` and `excludes` are Ant patterns relative to `directory`. Empty
    `includes` means every file. `target_prefix` is prepended to each file's
    relative path to form its location inside the packaged artifact.
    """

    directory: Path
    target_prefix: str = ""
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedEntry:
    """A matched file and the target path it will occupy."""

    source_path: Path
    relative_path: str
    target_path: str


@dataclass
class ResolverConfig:
    """
    Options shared by every resource source in a run.

    `exclude_vcs` adds `VCS_EXCLUDES` to each source's excludes.
    `respect_gitignore` skips files ignored by `.gitignore` files found inside
    a resource directory.
    """

    follow_symlinks: bool = False
    respect_gitignore: bool = False
    exclude_vcs: bool = False
    extra_excludes: list[str] = field(default_factory=list)

    @property
    def effective_excludes(self) -> list[str]:
        """Excludes added to every source: VCS defaults (if on) + `extra_excludes`."""
        base = list(VCS_EXCLUDES) if self.exclude_vcs else []
        return base + self.extra_excludes
