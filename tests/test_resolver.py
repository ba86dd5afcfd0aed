"""
Tests for path resolution.
"""
import pytest

from boxfs.exceptions import DirectoryDoesNotExist, FileDoesNotExist
from boxfs.folder_index import FolderIndex
from boxfs.models import FILE, FOLDER, ResolvedItem
from boxfs.resolver import PathResolver


@pytest.fixture
def resolver(mock_client):
    return PathResolver(mock_client, FolderIndex(mock_client))


def test_resolve_folder_and_file(resolver, mock_client):
    """A folder comes from the index; a file costs one listing of its parent."""
    resolver.index.ensure_built()
    mock_client.list_calls.clear()

    assert resolver.resolve("/docs/2024") == ResolvedItem(FOLDER, "1001")
    assert mock_client.list_calls == []

    assert resolver.resolve("/docs/2024/report.pdf") == ResolvedItem(FILE, "1002")
    assert mock_client.list_calls == ["1001"]


def test_resolve_root(resolver):
    assert resolver.resolve("") == ResolvedItem(FOLDER, "0")
    assert resolver.resolve("/") == ResolvedItem(FOLDER, "0")


def test_resolve_file_in_root(resolver):
    assert resolver.resolve("top.txt") == ResolvedItem(FILE, "1005")
    assert resolver.resolve("/top.txt") == ResolvedItem(FILE, "1005")


def test_resolve_missing_file(resolver):
    with pytest.raises(FileDoesNotExist) as exc_info:
        resolver.resolve("docs/missing.txt")

    assert exc_info.value.location == "docs/missing.txt"


def test_resolve_under_missing_folder(resolver):
    with pytest.raises(DirectoryDoesNotExist) as exc_info:
        resolver.resolve("nope/file.txt")

    assert exc_info.value.location == "nope"


def test_file_lookup_is_case_sensitive(resolver):
    with pytest.raises(FileDoesNotExist):
        resolver.resolve("TOP.txt")


def test_folder_name_is_not_a_file(resolver):
    """file_id only matches entries of type file."""
    with pytest.raises(FileDoesNotExist):
        resolver.file_id("docs/2024")


def test_files_are_not_cached(resolver, mock_client):
    resolver.resolve("top.txt")
    resolver.resolve("top.txt")

    assert mock_client.list_calls.count("0") == 3  # index build + two scans


def test_new_remote_file_is_seen(resolver, mock_client):
    resolver.index.ensure_built()
    file_id = mock_client.add_file("late.txt", "1004")

    assert resolver.resolve("empty/late.txt") == ResolvedItem(FILE, file_id)


def test_find_folder_id(resolver):
    assert resolver.find_folder_id("docs") == "1000"
    assert resolver.find_folder_id("docs/readme.txt") is None

    with pytest.raises(DirectoryDoesNotExist):
        resolver.folder_id("missing")
