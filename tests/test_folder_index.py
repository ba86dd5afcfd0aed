"""
Tests for the folder index.
"""
import threading
import time

import pytest

from boxfs.exceptions import BoxAPIError
from boxfs.folder_index import FolderIndex
from boxfs.models import FolderMapEntry
from tests.fixtures.mock_box_client import MockBoxClient


def test_index_is_lazy(mock_client):
    """Creating an index makes no remote calls."""
    index = FolderIndex(mock_client)

    assert not index.is_built
    assert mock_client.list_calls == []


def test_build_indexes_every_folder(mock_client):
    index = FolderIndex(mock_client)

    index.ensure_built()

    assert index.paths() == ["", "docs", "docs/2024", "empty"]
    assert index.lookup("").id == "0"
    assert index.lookup("docs").id == "1000"
    assert index.lookup("docs/2024").id == "1001"
    assert index.lookup("docs/2024").name == "2024"
    assert index.lookup("docs/2024").full_path == "docs/2024"


def test_build_ignores_files(mock_client):
    index = FolderIndex(mock_client)

    assert index.lookup("top.txt") is None
    assert index.lookup("docs/readme.txt") is None
    assert "docs/2024/report.pdf" not in index


def test_build_lists_each_folder_once(mock_client):
    index = FolderIndex(mock_client)
    index.ensure_built()

    assert sorted(mock_client.list_calls) == ["0", "1000", "1001", "1004"]


def test_ensure_built_is_idempotent(mock_client):
    index = FolderIndex(mock_client)

    index.ensure_built()
    calls = list(mock_client.list_calls)
    index.ensure_built()

    assert mock_client.list_calls == calls
    assert len(index) == 4


def test_lookup_normalizes_paths(mock_client):
    index = FolderIndex(mock_client)

    assert index.lookup("/docs/2024/").id == "1001"
    assert index.lookup("/").id == "0"
    assert "docs//2024" in index


def test_custom_root_folder():
    """Paths are relative to the configured root folder."""
    client = MockBoxClient()
    apps_id = client.add_folder("apps")
    client.add_folder("logs", apps_id)

    index = FolderIndex(client, root_folder_id=apps_id)

    assert index.lookup("").id == apps_id
    assert index.paths() == ["", "logs"]


def test_insert_adds_entry(mock_client):
    index = FolderIndex(mock_client)

    index.insert(FolderMapEntry("2000", "new", "docs/new"))

    assert index.lookup("docs/new").id == "2000"
    # Existing entries survive the insert
    assert index.lookup("docs/2024").id == "1001"


def test_build_failure_propagates_without_partial_index(mock_client):
    mock_client.failures["list_items_in_folder"] = BoxAPIError("boom", status_code=500)
    index = FolderIndex(mock_client)

    with pytest.raises(BoxAPIError):
        index.ensure_built()
    assert not index.is_built

    # The next access builds the index from scratch
    del mock_client.failures["list_items_in_folder"]
    assert index.lookup("docs/2024").id == "1001"


def test_deep_tree_does_not_hit_recursion_limit():
    client = MockBoxClient()
    parent_id = None
    for depth in range(2000):
        parent_id = client.add_folder(f"d{depth}", parent_id)

    index = FolderIndex(client)

    deepest = "/".join(f"d{depth}" for depth in range(2000))
    assert index.lookup(deepest).id == parent_id
    assert len(index) == 2001


def test_concurrent_callers_build_once(mock_client):
    """Threads racing on a fresh index trigger a single walk."""
    list_items = mock_client.list_items_in_folder

    def slow_list(folder_id):
        time.sleep(0.01)
        return list_items(folder_id)

    mock_client.list_items_in_folder = slow_list
    index = FolderIndex(mock_client)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(index.lookup("docs/2024").id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == ["1001"] * 8
    assert sorted(mock_client.list_calls) == ["0", "1000", "1001", "1004"]
