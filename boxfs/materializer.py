"""
Directory materialization: create missing folders along a path.
"""
import logging
from typing import List

from .exceptions import DirectoryExists
from .folder_index import FolderIndex
from .models import FolderMapEntry
from .utils.paths import join_path, path_segments


# Configure logger
logger = logging.getLogger(__name__)


class DirectoryMaterializer:
    """Creates folders remotely and records them in the folder index."""

    def __init__(self, client, index: FolderIndex):
        self.client = client
        self.index = index

    def ensure_directory(self, path: str) -> FolderMapEntry:
        """
        Create the first missing folder of a path.

        Only one level is created per call: for "x/y" with neither folder
        present, "x" is created and "y" is left for the next call.

        Args:
            path: Folder path to materialize

        Returns:
            Index entry of the folder that was created

        Raises:
            DirectoryExists: every segment of the path is already indexed
        """
        current_path = ""
        for segment in path_segments(path):
            parent_path = current_path
            current_path = join_path(current_path, segment)

            if current_path in self.index:
                continue

            # Walking left to right, the parent is always indexed by now
            parent_id = self.index.lookup(parent_path).id
            folder_id = self.client.create_folder(segment, parent_id)

            entry = FolderMapEntry(str(folder_id), segment, current_path)
            self.index.insert(entry)
            logger.info(f"Created folder {current_path!r} ({entry.id})")
            return entry

        raise DirectoryExists(path)

    def ensure_all(self, path: str) -> List[FolderMapEntry]:
        """
        Create every missing folder of a path, one level at a time.

        Returns:
            Entries created, outermost first; empty if the path already exists
        """
        created: List[FolderMapEntry] = []
        while path_segments(path) and path not in self.index:
            created.append(self.ensure_directory(path))
        return created
