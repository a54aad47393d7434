"""
resindex scans resource directories and writes a flat index of the paths the
resources will have inside a packaged artifact.
"""

from resindex.errors import ConfigError, ResourceIndexError, RunError, TraversalError
from resindex.file_resolver import ResolvedEntry, ResolverConfig, ResourceResolver, ResourceSource
from resindex.generator import (
    IndexGenerator,
    IndexSettings,
    build_manifest,
    generate_index,
    resolve_sources,
)
from resindex.manifest import Manifest, merge_manifest

__all__ = [
    "ConfigError",
    "IndexGenerator",
    "IndexSettings",
    "Manifest",
    "ResolvedEntry",
    "ResolverConfig",
    "ResourceIndexError",
    "ResourceResolver",
    "ResourceSource",
    "RunError",
    "TraversalError",
    "build_manifest",
    "generate_index",
    "merge_manifest",
    "resolve_sources",
]
