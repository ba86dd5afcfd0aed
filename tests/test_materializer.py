"""
Tests for directory materialization.
"""
import pytest

from boxfs.exceptions import BoxAPIError, DirectoryExists
from boxfs.folder_index import FolderIndex
from boxfs.materializer import DirectoryMaterializer


@pytest.fixture
def materializer(mock_client):
    return DirectoryMaterializer(mock_client, FolderIndex(mock_client))


def test_creates_one_level_per_call(materializer, mock_client):
    entry = materializer.ensure_directory("x/y")

    assert entry.full_path == "x"
    assert mock_client.created_folders == {"0": ["x"]}
    assert "x" in materializer.index
    assert "x/y" not in materializer.index

    second = materializer.ensure_directory("x/y")

    assert second.full_path == "x/y"
    assert mock_client.created_folders[entry.id] == ["y"]
    assert materializer.index.lookup("x/y").id == second.id


def test_creates_under_existing_parent(materializer, mock_client):
    entry = materializer.ensure_directory("/docs/2024/q1/")

    assert entry.name == "q1"
    assert mock_client.created_folders == {"1001": ["q1"]}


def test_existing_directory_raises(materializer, mock_client):
    with pytest.raises(DirectoryExists):
        materializer.ensure_directory("docs/2024")

    assert mock_client.created_folders == {}


def test_root_counts_as_existing(materializer):
    with pytest.raises(DirectoryExists):
        materializer.ensure_directory("/")


def test_remote_failure_leaves_index_untouched(materializer, mock_client):
    mock_client.failures["create_folder"] = BoxAPIError("denied", status_code=403)

    with pytest.raises(BoxAPIError):
        materializer.ensure_directory("new")

    assert "new" not in materializer.index


def test_ensure_all_creates_every_missing_level(materializer, mock_client):
    created = materializer.ensure_all("docs/a/b/c")

    assert [entry.full_path for entry in created] == ["docs/a", "docs/a/b", "docs/a/b/c"]
    assert mock_client.find("docs", "a", "b", "c")["type"] == "folder"


def test_ensure_all_on_existing_path_is_noop(materializer, mock_client):
    assert materializer.ensure_all("docs/2024") == []
    assert materializer.ensure_all("") == []
    assert mock_client.created_folders == {}
