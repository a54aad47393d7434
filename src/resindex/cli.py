#!/usr/bin/env python3
"""
resindex: Generate a resource index (resources.list) for packaged artifacts

Common usage:
  resindex src/main/resources -o build/classes
  resindex res --include '**/*.txt' --target-prefix static
  resindex --append-if-exists --exclude-target secret.txt
  resindex --list

Resource directories can also be declared in `resindex.toml`, `.resindex.toml`,
or `[tool.resindex]` in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from resindex.config import find_config_file, load_config, merge_cli_with_config
from resindex.errors import ResourceIndexError
from resindex.file_resolver import DEFAULT_TARGET_PATH, ResolverConfig, ResourceSource
from resindex.generator import IndexGenerator, IndexSettings
from resindex.manifest import format_manifest

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the resindex tool."""

    directories: list[str]
    output_dir: Path
    target_path: str
    append_if_exists: bool
    excludes: list[str]
    # Patterns for directories given on the command line
    include: list[str]
    exclude_pattern: list[str]
    target_prefix: str
    # Discovery
    follow_symlinks: bool
    respect_gitignore: bool
    exclude_vcs: bool
    # Misc
    list_only: bool
    config: str | None
    no_config: bool
    verbose: int
    quiet: bool
    version: bool
    resources: list[ResourceSource] = field(default_factory=list)


# argparse dest name -> Options field name, for flags a config file can also set
_TRACKED_FLAGS: dict[str, str] = {
    "output_dir": "output_dir",
    "target_path": "target_path",
    "append_if_exists": "append_if_exists",
    "exclude_target": "excludes",
    "follow_symlinks": "follow_symlinks",
    "respect_gitignore": "respect_gitignore",
    "exclude_vcs": "exclude_vcs",
}


def _build_parser(track_explicit: bool = False) -> argparse.ArgumentParser:
    """
    Build the argument parser. With `track_explicit`, every default is
    `argparse.SUPPRESS`, so the parsed namespace holds only flags the user
    actually passed (for config merge precedence).
    """

    def default(value: object) -> object:
        return argparse.SUPPRESS if track_explicit else value

    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")

    parser = argparse.ArgumentParser(
        prog="resindex",
        description=doc_parts[0],
        epilog="\n\n".join(doc_parts[1:]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=not track_explicit,
    )
    parser.add_argument(
        "directories",
        nargs="*",
        type=str,
        default=[],
        help="Resource directories to index, in addition to any declared in a config file",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=default(Path(".")),
        help="Directory the index path is relative to (default: current directory)",
    )
    parser.add_argument(
        "-t",
        "--target-path",
        type=str,
        default=default(DEFAULT_TARGET_PATH),
        help="Path of the index file inside the output directory (default: %(default)s)",
    )
    parser.add_argument(
        "-a",
        "--append-if-exists",
        action="store_true",
        default=default(False),
        help="Merge with an existing index file instead of replacing its contents",
    )
    parser.add_argument(
        "--exclude-target",
        action="append",
        default=default([]),
        metavar="TARGET",
        help="Target path to leave out of the index (exact match, not a glob). Can be repeated",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=default([]),
        metavar="PATTERN",
        help="Ant-style include pattern for directories given on the command line "
        "(e.g., '**/*.txt'). Can be repeated; default is every file",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        dest="exclude_pattern",
        default=default([]),
        metavar="PATTERN",
        help="Ant-style exclude pattern for directories given on the command line. Can be repeated",
    )
    parser.add_argument(
        "--target-prefix",
        type=str,
        default=default(""),
        metavar="PREFIX",
        help="Target path prefix for directories given on the command line",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        default=default(False),
        help="Descend into symlinked directories",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        default=default(False),
        help="Skip files ignored by .gitignore files inside resource directories",
    )
    parser.add_argument(
        "--exclude-vcs",
        action="store_true",
        default=default(False),
        help="Skip version control and editor files (.git/, .DS_Store, *~, ...)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        dest="list_only",
        default=default(False),
        help="Print the index to stdout without writing it",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=default(None),
        metavar="FILE",
        help="Config file to use instead of searching for one",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        default=default(False),
        help="Ignore config files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=default(0),
        help="Log progress (-v) or debugging detail (-vv) to stderr",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Only log errors",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=default(False),
        help="Show version information and exit",
    )
    return parser


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which config-settable flags the user explicitly passed.
    """
    opts = _build_parser().parse_args(args)

    explicit_opts, _ = _build_parser(track_explicit=True).parse_known_args(
        args if args is not None else sys.argv[1:]
    )
    explicit_flags = {
        field_name
        for dest_name, field_name in _TRACKED_FLAGS.items()
        if hasattr(explicit_opts, dest_name)
    }

    options = Options(
        directories=opts.directories,
        output_dir=opts.output_dir,
        target_path=opts.target_path,
        append_if_exists=opts.append_if_exists,
        excludes=opts.exclude_target,
        include=opts.include,
        exclude_pattern=opts.exclude_pattern,
        target_prefix=opts.target_prefix,
        follow_symlinks=opts.follow_symlinks,
        respect_gitignore=opts.respect_gitignore,
        exclude_vcs=opts.exclude_vcs,
        list_only=opts.list_only,
        config=opts.config,
        no_config=opts.no_config,
        verbose=opts.verbose,
        quiet=opts.quiet,
        version=opts.version,
        resources=[
            ResourceSource(
                directory=Path(d),
                target_prefix=opts.target_prefix,
                includes=tuple(opts.include),
                excludes=tuple(opts.exclude_pattern),
            )
            for d in opts.directories
        ],
    )
    return options, explicit_flags


def _setup_logging(options: Options) -> None:
    if options.quiet:
        level = logging.ERROR
    elif options.verbose >= 2:
        level = logging.DEBUG
    elif options.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr)


def _load_config_into(options: Options, explicit_flags: set[str]) -> None:
    """Find (or use the given) config file and merge it into `options`."""
    if options.no_config:
        return
    config_path = Path(options.config) if options.config else find_config_file(Path.cwd())
    if config_path is None:
        return
    log.info("Using config %s", config_path)
    merge_cli_with_config(options, load_config(config_path), explicit_flags)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the resindex CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for run or config errors, 2 for anything else)
    """
    options, explicit_flags = _parse_args(args)

    # Display version information if requested
    if options.version:
        try:
            version = importlib.metadata.version("resindex")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _setup_logging(options)

    try:
        _load_config_into(options, explicit_flags)

        if not options.resources:
            log.warning("No resource directories declared; the index will be empty")

        settings = IndexSettings(
            output_dir=options.output_dir,
            target_path=options.target_path,
            append_if_exists=options.append_if_exists,
            excludes=options.excludes,
            resolver=ResolverConfig(
                follow_symlinks=options.follow_symlinks,
                respect_gitignore=options.respect_gitignore,
                exclude_vcs=options.exclude_vcs,
            ),
        )
        generator = IndexGenerator(options.resources, settings)

        # Handle --list mode (print and exit)
        if options.list_only:
            manifest = generator.resolve()
            if manifest:
                print(format_manifest(manifest))
            return 0

        generator.run()
    except (ResourceIndexError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        # Catch anything else so the tool exits cleanly with a message.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
