"""
Path-addressed filesystem adapter over the ID-addressed Box API.
"""
from abc import ABC, abstractmethod
from datetime import datetime
import io
import logging
from typing import Any, BinaryIO, Dict, List, Optional, Union

from .config import DEFAULT_ROOT_FOLDER_ID
from .exceptions import (
    DirectoryExists,
    UnableToCreateDirectory,
    UnableToDeleteDirectory,
    UnableToDeleteFile,
    UnableToListContents,
    UnableToReadFile,
    UnableToRetrieveMetadata,
    UnableToSetVisibility,
    UnableToWriteFile,
)
from .folder_index import FolderIndex
from .materializer import DirectoryMaterializer
from .models import (
    FOLDER,
    DirectoryAttributes,
    FileAttributes,
    RemoteItem,
    StorageAttributes,
)
from .resolver import PathResolver
from .utils.mime import ExtensionMimeTypeDetector
from .utils.paths import PathPrefixer, join_path, split_path


# Configure logger
logger = logging.getLogger(__name__)


class FilesystemAdapter(ABC):
    """Operations a storage backend exposes to a path-based filesystem."""

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check if a file exists."""
        pass

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        """Check if a directory exists."""
        pass

    @abstractmethod
    def write(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> None:
        """Store file contents."""
        pass

    @abstractmethod
    def write_stream(self, path: str, contents: BinaryIO, config: Optional[Dict[str, Any]] = None) -> None:
        """Store file contents from a binary stream."""
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Get file contents."""
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Get file contents as a binary stream."""
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file."""
        pass

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Delete a directory and its contents."""
        pass

    @abstractmethod
    def create_directory(self, path: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Create a directory."""
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> None:
        """Set file visibility."""
        pass

    @abstractmethod
    def visibility(self, path: str) -> FileAttributes:
        """Get file visibility."""
        pass

    @abstractmethod
    def mime_type(self, path: str) -> FileAttributes:
        """Get MIME type of a file."""
        pass

    @abstractmethod
    def last_modified(self, path: str) -> StorageAttributes:
        """Get last modified timestamp."""
        pass

    @abstractmethod
    def file_size(self, path: str) -> FileAttributes:
        """Get file size in bytes."""
        pass

    @abstractmethod
    def list_contents(self, path: str = "", deep: bool = False) -> List[StorageAttributes]:
        """List the contents of a directory."""
        pass

    @abstractmethod
    def move(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Move a file."""
        pass

    @abstractmethod
    def copy(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        """Copy a file."""
        pass


def _to_timestamp(value: Optional[str]) -> Optional[int]:
    """Convert a Box ISO 8601 date into a unix timestamp."""
    if not value:
        return None
    return int(datetime.fromisoformat(value).timestamp())


class BoxAdapter(FilesystemAdapter):
    """
    Filesystem adapter for Box.

    Paths are resolved through a folder index that is built on first use
    by walking the whole folder tree under ``root_folder_id``. Files are
    looked up by listing their parent folder on every call.
    """

    def __init__(
        self,
        client,
        prefix: str = "",
        root_folder_id: str = DEFAULT_ROOT_FOLDER_ID,
        mime_type_detector=None,
    ):
        """
        Initialize the adapter.

        Args:
            client: Remote client (see BoxClient)
            prefix: Path prepended to every path passed to the adapter
            root_folder_id: Folder that the empty path denotes
            mime_type_detector: Object with detect_mime_type_from_path(path);
                defaults to extension based detection
        """
        self.client = client
        self.prefixer = PathPrefixer(prefix)
        self.mime_type_detector = mime_type_detector or ExtensionMimeTypeDetector()

        self.index = FolderIndex(client, root_folder_id)
        self.resolver = PathResolver(client, self.index)
        self.materializer = DirectoryMaterializer(client, self.index)

    def file_exists(self, path: str) -> bool:
        try:
            metadata = self.get_metadata(path)
        except Exception as e:
            logger.debug(f"file_exists({path!r}) -> False: {e}")
            return False
        return metadata.is_file()

    def directory_exists(self, path: str) -> bool:
        return self.prefixer.prefix_path(path) in self.index

    def list_contents(self, path: str = "", deep: bool = False) -> List[StorageAttributes]:
        """
        List the items directly inside a directory.

        ``deep`` is accepted for interface compatibility; listings are
        always a single level.
        """
        location = self.prefixer.prefix_path(path)
        if deep:
            logger.debug(f"Deep listing requested for {location!r}, listing one level")

        try:
            folder_id = self.resolver.folder_id(location)
            items = self.client.list_items_in_folder(folder_id)
            return [self._attributes_from_item(path, item) for item in items]
        except Exception as e:
            raise UnableToListContents(location, str(e)) from e

    @staticmethod
    def _attributes_from_item(parent: str, item: RemoteItem) -> StorageAttributes:
        item_path = join_path(parent, item["name"])
        extra = {"id": str(item["id"])}
        last_modified = _to_timestamp(item.get("modified_at"))

        if item.get("type") == FOLDER:
            return DirectoryAttributes(item_path, last_modified=last_modified, extra_metadata=extra)
        return FileAttributes(
            item_path,
            file_size=item.get("size"),
            last_modified=last_modified,
            extra_metadata=extra,
        )

    def delete(self, path: str) -> None:
        location = self.prefixer.prefix_path(path)

        try:
            file_id = self.resolver.file_id(location)
            self.client.delete(file_id)
        except Exception as e:
            logger.error(f"Failed to delete file {location!r}: {e}")
            raise UnableToDeleteFile(location, str(e)) from e

    def delete_directory(self, path: str) -> None:
        location = self.prefixer.prefix_path(path)
        if not location:
            raise UnableToDeleteDirectory(location, "Refusing to delete the root folder.")

        try:
            folder_id = self.resolver.folder_id(location)
            self.client.delete_folder(folder_id)
        except Exception as e:
            logger.error(f"Failed to delete directory {location!r}: {e}")
            raise UnableToDeleteDirectory(location, str(e)) from e

    def create_directory(self, path: str, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Create the first missing folder of ``path``.

        A single folder level is created per call; call again to create
        the next level.
        """
        location = self.prefixer.prefix_path(path)

        try:
            self.materializer.ensure_directory(location)
        except DirectoryExists as e:
            raise UnableToCreateDirectory(location, str(e)) from e
        except Exception as e:
            logger.error(f"Failed to create directory {location!r}: {e}")
            raise UnableToCreateDirectory(location, str(e)) from e

    def set_visibility(self, path: str, visibility: str) -> None:
        raise UnableToSetVisibility(path, "Adapter does not support visibility controls.")

    def visibility(self, path: str) -> FileAttributes:
        return FileAttributes(path)

    def move(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        raise UnableToSetVisibility(source, "Adapter does not support move command.")

    def copy(self, source: str, destination: str, config: Optional[Dict[str, Any]] = None) -> None:
        raise UnableToSetVisibility(source, "Adapter does not support copy command.")

    def mime_type(self, path: str) -> FileAttributes:
        mime_type = self.mime_type_detector.detect_mime_type_from_path(path)
        if mime_type is None:
            raise UnableToRetrieveMetadata.mime_type(path, "Unknown file extension.")
        return FileAttributes(path, mime_type=mime_type)

    def last_modified(self, path: str) -> StorageAttributes:
        location = self.prefixer.prefix_path(path)

        try:
            metadata = self._fetch_metadata(path, location)
        except Exception as e:
            raise UnableToRetrieveMetadata.last_modified(location, str(e)) from e

        if metadata.last_modified is None:
            raise UnableToRetrieveMetadata.last_modified(location, "No modification date reported.")
        return metadata

    def file_size(self, path: str) -> FileAttributes:
        location = self.prefixer.prefix_path(path)

        try:
            metadata = self._fetch_metadata(path, location)
        except Exception as e:
            raise UnableToRetrieveMetadata.file_size(location, str(e)) from e

        if not metadata.is_file() or metadata.file_size is None:
            raise UnableToRetrieveMetadata.file_size(location, "Path is not a file.")
        return metadata

    def get_metadata(self, path: str) -> StorageAttributes:
        """Fetch the attributes of a file or directory."""
        location = self.prefixer.prefix_path(path)

        try:
            return self._fetch_metadata(path, location)
        except Exception as e:
            raise UnableToRetrieveMetadata.metadata(location, str(e)) from e

    def _fetch_metadata(self, path: str, location: str) -> StorageAttributes:
        item = self.resolver.resolve(location)

        if item.is_file:
            info = self.client.get_file_information(item.id)
            return FileAttributes(
                path,
                file_size=info.get("size"),
                last_modified=_to_timestamp(info.get("modified_at")),
                extra_metadata={"id": item.id, "type": info.get("type")},
            )

        info = self.client.get_folder_information(item.id)
        return DirectoryAttributes(
            path,
            last_modified=_to_timestamp(info.get("modified_at")),
            extra_metadata={"id": item.id, "type": info.get("type")},
        )

    def write(self, path: str, contents: Union[str, bytes], config: Optional[Dict[str, Any]] = None) -> None:
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        self.write_stream(path, io.BytesIO(contents), config)

    def write_stream(self, path: str, contents: BinaryIO, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Upload a file, creating any missing parent folders first.
        """
        location = self.prefixer.prefix_path(path)
        parent_path, file_name = split_path(location)
        if not file_name:
            raise UnableToWriteFile(location, "Path does not name a file.")

        try:
            parent_id = self.resolver.find_folder_id(parent_path)
            if parent_id is None:
                logger.debug(f"Parent folder {parent_path!r} of {location!r} is missing, creating it")
                self.materializer.ensure_all(parent_path)
                parent_id = self.resolver.folder_id(parent_path)

            self.client.upload(file_name, parent_id, contents)
        except Exception as e:
            logger.error(f"Failed to write {location!r}: {e}")
            raise UnableToWriteFile(location, str(e)) from e

    def read(self, path: str) -> bytes:
        stream = self.read_stream(path)
        try:
            return stream.read()
        finally:
            stream.close()

    def read_stream(self, path: str) -> BinaryIO:
        location = self.prefixer.prefix_path(path)

        try:
            return self.client.download(self.resolver.file_id(location))
        except Exception as e:
            logger.error(f"Failed to read {location!r}: {e}")
            raise UnableToReadFile(location, str(e)) from e
