"""
Unit tests for boxfs/utils/paths.py
"""
import pytest

from boxfs.utils.paths import (
    PathPrefixer,
    basename,
    join_path,
    normalize_path,
    path_segments,
    split_path,
)


@pytest.mark.parametrize("raw, expected", [
    ("", ""),
    ("/", ""),
    ("a", "a"),
    ("/a/b/", "a/b"),
    ("a//b///c", "a/b/c"),
])
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


def test_path_segments_discards_empty_segments():
    assert path_segments("//x/y//z/") == ["x", "y", "z"]
    assert path_segments("") == []


def test_join_path_ignores_empty_parts():
    assert join_path("", "docs", "/2024/", "report.pdf") == "docs/2024/report.pdf"
    assert join_path("", "") == ""


def test_split_path():
    assert split_path("docs/2024/report.pdf") == ("docs/2024", "report.pdf")
    assert split_path("/top.txt") == ("", "top.txt")
    assert split_path("") == ("", "")


def test_basename():
    assert basename("docs/2024/report.pdf") == "report.pdf"
    assert basename("docs/") == "docs"


def test_prefixer_without_prefix():
    prefixer = PathPrefixer()

    assert prefixer.prefix_path("/docs/a.txt") == "docs/a.txt"
    assert prefixer.prefix_path("") == ""


def test_prefixer_with_prefix():
    prefixer = PathPrefixer("/apps/storage/")

    assert prefixer.prefix == "apps/storage"
    assert prefixer.prefix_path("a.txt") == "apps/storage/a.txt"
    assert prefixer.prefix_path("/") == "apps/storage"
    assert prefixer.strip_prefix("apps/storage/x/a.txt") == "x/a.txt"
    assert prefixer.strip_prefix("apps/storage") == ""
