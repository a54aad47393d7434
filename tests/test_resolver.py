"""Tests for resolving resource sources into target paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from resindex.errors import TraversalError
from resindex.file_resolver import (
    VCS_EXCLUDES,
    ResolverConfig,
    ResourceResolver,
    ResourceSource,
)
from resindex.file_resolver.resolver import qualify_patterns, target_path_for


def _make_res(root: Path) -> Path:
    """Create `res/a.txt` and `res/img/b.png`."""
    res = root / "res"
    (res / "img").mkdir(parents=True)
    (res / "a.txt").write_text("a")
    (res / "img" / "b.png").write_text("b")
    return res


def _targets(source: ResourceSource, config: ResolverConfig | None = None) -> list[str]:
    return sorted(e.target_path for e in ResourceResolver(config).resolve(source))


def test_config_effective_excludes_default_empty():
    assert ResolverConfig().effective_excludes == []


def test_config_effective_excludes_vcs():
    config = ResolverConfig(exclude_vcs=True, extra_excludes=["**/*.tmp"])
    assert config.effective_excludes == VCS_EXCLUDES + ["**/*.tmp"]


def test_qualify_patterns(tmp_path: Path):
    root = tmp_path / "res"
    assert qualify_patterns(root, ["**/*.txt", "/img/**", "img\\*.png"]) == [
        f"{root.as_posix()}/**/*.txt",
        f"{root.as_posix()}/img/**",
        f"{root.as_posix()}/img/*.png",
    ]


@pytest.mark.parametrize(
    ("prefix", "relative", "expected"),
    [
        ("", "a.txt", "a.txt"),
        ("static", "img/b.png", "static/img/b.png"),
        ("static/", "a.txt", "static/a.txt"),
        ("/static", "a.txt", "static/a.txt"),
        ("META-INF\\res", "a.txt", "META-INF/res/a.txt"),
        ("./x/../y", "a.txt", "y/a.txt"),
        ("", "img\\b.png", "img/b.png"),
    ],
)
def test_target_path_for(prefix: str, relative: str, expected: str):
    assert target_path_for(prefix, relative) == expected


def test_empty_includes_selects_every_file(tmp_path: Path):
    res = _make_res(tmp_path)
    assert _targets(ResourceSource(directory=res)) == ["a.txt", "img/b.png"]


def test_include_pattern_filters(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, includes=("**/*.txt",))
    assert _targets(source) == ["a.txt"]


def test_includes_are_ored(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, includes=("*.txt", "img/*.png"))
    assert _targets(source) == ["a.txt", "img/b.png"]


def test_include_star_does_not_cross_directories(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, includes=("*.png",))
    assert _targets(source) == []


def test_exclude_wins_over_include(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, includes=("**",), excludes=("**/*.png",))
    assert _targets(source) == ["a.txt"]


def test_exclude_directory_shorthand(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, excludes=("img/",))
    assert _targets(source) == ["a.txt"]


def test_exclude_nested_directory_shorthand(tmp_path: Path):
    res = _make_res(tmp_path)
    (res / "img" / "deep").mkdir()
    (res / "img" / "deep" / "c.png").write_text("c")
    assert _targets(ResourceSource(directory=res, excludes=("img/**/",))) == ["a.txt"]
    assert _targets(ResourceSource(directory=res, includes=("**/",))) == [
        "a.txt",
        "img/b.png",
        "img/deep/c.png",
    ]


def test_target_prefix(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, target_prefix="static")
    assert _targets(source) == ["static/a.txt", "static/img/b.png"]


def test_entry_fields(tmp_path: Path):
    res = _make_res(tmp_path)
    source = ResourceSource(directory=res, target_prefix="p", includes=("img/**",))
    (entry,) = ResourceResolver().resolve(source)
    assert entry.relative_path == "img/b.png"
    assert entry.target_path == "p/img/b.png"
    assert entry.source_path == (res / "img" / "b.png").resolve()
    assert entry.source_path.is_absolute()


def test_relative_directory_resolved(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_res(tmp_path)
    monkeypatch.chdir(tmp_path)
    source = ResourceSource(directory=Path("res"), includes=("**/*.txt",))
    assert _targets(source) == ["a.txt"]


def test_missing_directory_raises(tmp_path: Path):
    with pytest.raises(TraversalError):
        ResourceResolver().resolve(ResourceSource(directory=tmp_path / "missing"))


def test_extra_excludes_apply_to_every_source(tmp_path: Path):
    res = _make_res(tmp_path)
    (res / "notes.tmp").write_text("t")
    config = ResolverConfig(extra_excludes=["**/*.tmp"])
    assert _targets(ResourceSource(directory=res), config) == ["a.txt", "img/b.png"]


def test_exclude_vcs(tmp_path: Path):
    res = _make_res(tmp_path)
    git = res / ".git"
    git.mkdir()
    (git / "HEAD").write_text("ref")
    (res / ".DS_Store").write_text("x")
    (res / "a.txt~").write_text("backup")

    assert len(_targets(ResourceSource(directory=res))) == 5
    config = ResolverConfig(exclude_vcs=True)
    assert _targets(ResourceSource(directory=res), config) == ["a.txt", "img/b.png"]


def test_respect_gitignore(tmp_path: Path):
    res = _make_res(tmp_path)
    (res / ".gitignore").write_text("# generated\n*.log\nbuild/\n")
    (res / "debug.log").write_text("log")
    build = res / "build"
    build.mkdir()
    (build / "out.txt").write_text("out")
    nested = res / "img" / "gen"
    nested.mkdir()
    (res / "img" / ".gitignore").write_text("gen/\n")
    (nested / "c.png").write_text("c")

    source = ResourceSource(directory=res, excludes=("**/.gitignore",))
    assert _targets(source) == [
        "a.txt",
        "build/out.txt",
        "debug.log",
        "img/b.png",
        "img/gen/c.png",
    ]
    config = ResolverConfig(respect_gitignore=True)
    assert _targets(source, config) == ["a.txt", "img/b.png"]
