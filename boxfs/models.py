"""
Models for the Box filesystem adapter.
Contains the folder index entry, resolution result and attribute records.
"""
from typing import Any, Dict, Literal, Optional, Union

FILE: Literal["file"] = "file"
FOLDER: Literal["folder"] = "folder"

ItemKind = Literal["file", "folder"]


class FolderMapEntry:
    """Represents one known folder in the folder index."""

    def __init__(self, id: str, name: str, full_path: str):
        self.id: str = id
        self.name: str = name
        self.full_path: str = full_path

    def __repr__(self) -> str:
        return f"FolderMapEntry(id={self.id!r}, name={self.name!r}, full_path={self.full_path!r})"


class ResolvedItem:
    """Result of resolving a path: what it is and its remote id."""

    def __init__(self, kind: ItemKind, id: str):
        self.kind: ItemKind = kind
        self.id: str = id

    @property
    def is_file(self) -> bool:
        return self.kind == FILE

    @property
    def is_folder(self) -> bool:
        return self.kind == FOLDER

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResolvedItem):
            return NotImplemented
        return self.kind == other.kind and self.id == other.id

    def __repr__(self) -> str:
        return f"ResolvedItem(kind={self.kind!r}, id={self.id!r})"


class FileAttributes:
    """Attributes of a file as exposed through the adapter."""

    def __init__(
        self,
        path: str,
        file_size: Optional[int] = None,
        visibility: Optional[str] = None,
        last_modified: Optional[int] = None,
        mime_type: Optional[str] = None,
        extra_metadata: Optional[Dict[str, Any]] = None,
    ):
        self.path: str = path
        self.type: Literal["file"] = FILE
        self.file_size: Optional[int] = file_size
        self.visibility: Optional[str] = visibility
        self.last_modified: Optional[int] = last_modified
        self.mime_type: Optional[str] = mime_type
        self.extra_metadata: Dict[str, Any] = extra_metadata or {}

    def is_file(self) -> bool:
        return True

    def is_dir(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"FileAttributes(path={self.path!r}, file_size={self.file_size!r})"


class DirectoryAttributes:
    """Attributes of a directory as exposed through the adapter."""

    def __init__(
        self,
        path: str,
        visibility: Optional[str] = None,
        last_modified: Optional[int] = None,
        extra_metadata: Optional[Dict[str, Any]] = None,
    ):
        self.path: str = path
        self.type: Literal["folder"] = FOLDER
        self.visibility: Optional[str] = visibility
        self.last_modified: Optional[int] = last_modified
        self.extra_metadata: Dict[str, Any] = extra_metadata or {}

    def is_file(self) -> bool:
        return False

    def is_dir(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"DirectoryAttributes(path={self.path!r})"


# Type definitions for the main data structures
RemoteItem = Dict[str, Any]  # One entry of a Box folder listing
FolderMap = Dict[str, FolderMapEntry]
StorageAttributes = Union[FileAttributes, DirectoryAttributes]
