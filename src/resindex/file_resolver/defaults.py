"""
Default values for resource resolution.

Patterns use Ant syntax and are relative to each resource directory.
"""

from __future__ import annotations

# Where the index is written, relative to the output directory.
DEFAULT_TARGET_PATH: str = "resources.list"

# Version control and editor droppings. Only applied when `exclude_vcs` is on,
# so by default every file under a resource directory is a candidate.
VCS_EXCLUDES: list[str] = [
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    "**/.git/**",
    "**/.gitignore",
    "**/.gitattributes",
    "**/.gitmodules",
    "**/.hg/**",
    "**/.hgignore",
    "**/.svn/**",
    "**/.bzr/**",
    "**/CVS/**",
    "**/.cvsignore",
    "**/.DS_Store",
    "**/Thumbs.db",
]
