"""
Resource discovery: Ant-style include/exclude globbing over declared resource
directories, with each matched file mapped to its target path.

Usage::

    from resindex.file_resolver import ResourceResolver, ResourceSource

    source = ResourceSource(
        directory=Path("src/main/resources"),
        target_prefix="static",
        includes=("**/*.txt",),
    )
    entries = ResourceResolver().resolve(source)
"""

from resindex.file_resolver.defaults import DEFAULT_TARGET_PATH, VCS_EXCLUDES
from resindex.file_resolver.glob_matcher import matches
from resindex.file_resolver.resolver import ResourceResolver
from resindex.file_resolver.types import ResolvedEntry, ResolverConfig, ResourceSource
from resindex.file_resolver.walker import walk_files

__all__ = [
    "DEFAULT_TARGET_PATH",
    "VCS_EXCLUDES",
    "ResolvedEntry",
    "ResolverConfig",
    "ResourceResolver",
    "ResourceSource",
    "matches",
    "walk_files",
]
