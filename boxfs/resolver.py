"""
Path resolution: turn a normalized path into a folder or file id.
"""
import logging
from typing import Optional

from .exceptions import DirectoryDoesNotExist, FileDoesNotExist
from .folder_index import FolderIndex
from .models import FILE, FOLDER, ResolvedItem
from .utils.paths import normalize_path, split_path


# Configure logger
logger = logging.getLogger(__name__)


class PathResolver:
    """
    Classifies paths using the folder index.

    Folders are answered from the index. Files are found by listing the
    parent folder on every call; file listings are never cached.
    """

    def __init__(self, client, index: FolderIndex):
        self.client = client
        self.index = index

    def find_folder_id(self, path: str) -> Optional[str]:
        """Return the folder id for a path, or None if it is not a known folder."""
        entry = self.index.lookup(path)
        return entry.id if entry is not None else None

    def folder_id(self, path: str) -> str:
        folder_id = self.find_folder_id(path)
        if folder_id is None:
            raise DirectoryDoesNotExist(normalize_path(path))
        return folder_id

    def file_id(self, path: str) -> str:
        """
        Find the id of a file by scanning its parent folder.

        Raises:
            DirectoryDoesNotExist: the parent folder is unknown
            FileDoesNotExist: the parent has no file with that name
        """
        path = normalize_path(path)
        parent_path, file_name = split_path(path)
        if not file_name:
            raise FileDoesNotExist(path)

        parent_id = self.folder_id(parent_path)
        for item in self.client.list_items_in_folder(parent_id):
            # Names are unique within a Box folder, first match wins
            if item.get("type") == FILE and item.get("name") == file_name:
                return str(item["id"])

        raise FileDoesNotExist(path)

    def resolve(self, path: str) -> ResolvedItem:
        """
        Resolve a path to a folder or file.

        Args:
            path: Slash separated path, "" or "/" for the root

        Returns:
            ResolvedItem with kind "folder" or "file"
        """
        path = normalize_path(path)

        folder_id = self.find_folder_id(path)
        if folder_id is not None:
            logger.debug(f"Resolved {path!r} to folder {folder_id}")
            return ResolvedItem(FOLDER, folder_id)

        file_id = self.file_id(path)
        logger.debug(f"Resolved {path!r} to file {file_id}")
        return ResolvedItem(FILE, file_id)
