"""
Folder index: the path -> folder id map for a Box account.

The index is built once by walking every folder reachable from the root
folder. After that it only grows, when the adapter itself creates a
folder. Files are never indexed.
"""
import logging
import threading
from typing import Iterator, List, Optional, Tuple

from .config import DEFAULT_ROOT_FOLDER_ID
from .models import FOLDER, FolderMap, FolderMapEntry
from .utils.paths import join_path, normalize_path


# Configure logger
logger = logging.getLogger(__name__)


class FolderIndex:
    """Lazily built map from normalized folder path to FolderMapEntry."""

    def __init__(self, client, root_folder_id: str = DEFAULT_ROOT_FOLDER_ID):
        """
        Initialize an unbuilt index.

        Args:
            client: Remote client used to list folders
            root_folder_id: ID of the folder that the empty path denotes
        """
        self.client = client
        self.root_folder_id = str(root_folder_id)
        self._map: Optional[FolderMap] = None
        self._lock = threading.RLock()

    @property
    def is_built(self) -> bool:
        return self._map is not None

    def ensure_built(self) -> None:
        """Build the index if it has not been built yet."""
        if self._map is not None:
            return

        with self._lock:
            if self._map is None:
                self._map = self._build()

    def _build(self) -> FolderMap:
        """
        Walk the folder tree from the root.

        The walk uses an explicit stack, so depth is bounded only by memory.
        Any remote failure propagates and no partial map is kept.
        """
        logger.debug(f"Building folder index from root folder {self.root_folder_id}")
        folder_map: FolderMap = {
            "": FolderMapEntry(self.root_folder_id, "", ""),
        }

        stack: List[Tuple[str, str]] = [(self.root_folder_id, "")]
        while stack:
            folder_id, path = stack.pop()
            for item in self.client.list_items_in_folder(folder_id):
                if item.get("type") != FOLDER:
                    continue

                child_path = join_path(path, item["name"])
                child_id = str(item["id"])
                folder_map[child_path] = FolderMapEntry(child_id, item["name"], child_path)
                stack.append((child_id, child_path))

        logger.debug(f"Folder index built with {len(folder_map)} folders")
        return folder_map

    def lookup(self, path: str) -> Optional[FolderMapEntry]:
        """Return the entry for a folder path, or None if it is unknown."""
        self.ensure_built()
        return self._map.get(normalize_path(path))

    def insert(self, entry: FolderMapEntry) -> None:
        """Record a folder created through the adapter."""
        self.ensure_built()
        with self._lock:
            key = normalize_path(entry.full_path)
            existing = self._map.get(key)
            if existing is not None and existing.id != entry.id:
                logger.warning(
                    f"Replacing index entry for {key!r}: folder {existing.id} -> {entry.id}"
                )
            self._map[key] = entry
        logger.debug(f"Indexed folder {key!r} ({entry.id})")

    def paths(self) -> List[str]:
        self.ensure_built()
        return sorted(self._map)

    def __contains__(self, path: str) -> bool:
        return self.lookup(path) is not None

    def __len__(self) -> int:
        self.ensure_built()
        return len(self._map)

    def __iter__(self) -> Iterator[FolderMapEntry]:
        self.ensure_built()
        return iter(list(self._map.values()))
