"""
Exceptions raised by the Box filesystem adapter.

Resolution errors (``DirectoryDoesNotExist``, ``FileDoesNotExist``) are
internal signals: adapter operations translate them into one of the
``UnableTo*`` errors, chaining the original exception as ``__cause__``.
"""
from typing import Optional


class BoxFsError(Exception):
    """Base exception for every error raised by this package."""
    pass


class PathNotFound(BoxFsError):
    """A path could not be resolved to a remote item."""

    def __init__(self, location: str, message: Optional[str] = None):
        self.location = location
        super().__init__(message or f"Path not found: {location!r}")


class DirectoryDoesNotExist(PathNotFound):
    """The path is not a known folder."""

    def __init__(self, location: str):
        super().__init__(location, f"Directory does not exist: {location!r}")


class FileDoesNotExist(PathNotFound):
    """No file with this name exists in the parent folder."""

    def __init__(self, location: str):
        super().__init__(location, f"File does not exist: {location!r}")


class DirectoryExists(BoxFsError):
    """Every segment of the path is already a known folder."""

    def __init__(self, location: str):
        self.location = location
        super().__init__("Directory exists")


class BoxAPIError(BoxFsError):
    """A call to the Box API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        detail = f" ({self.code})" if self.code else ""
        return f"HTTP {self.status_code}{detail}: {self.message}"


class BoxTransientError(BoxAPIError):
    """Rate limiting or server-side failure; safe to retry."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, status_code, code)
        self.retry_after = retry_after


class FilesystemOperationFailed(BoxFsError):
    """Base class for failures reported by adapter operations."""

    operation = "operation"

    def __init__(self, location: str, reason: str = ""):
        self.location = location
        self.reason = reason
        message = f"Unable to {self.operation} at location: {location}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class UnableToReadFile(FilesystemOperationFailed):
    operation = "read file"


class UnableToWriteFile(FilesystemOperationFailed):
    operation = "write file"


class UnableToDeleteFile(FilesystemOperationFailed):
    operation = "delete file"


class UnableToDeleteDirectory(FilesystemOperationFailed):
    operation = "delete directory"


class UnableToCreateDirectory(FilesystemOperationFailed):
    operation = "create directory"


class UnableToSetVisibility(FilesystemOperationFailed):
    operation = "set visibility"


class UnableToListContents(FilesystemOperationFailed):
    operation = "list contents"


class UnableToRetrieveMetadata(FilesystemOperationFailed):
    """Metadata of the given type could not be fetched."""

    def __init__(self, location: str, metadata_type: str, reason: str = ""):
        self.metadata_type = metadata_type
        self.operation = f"retrieve the {metadata_type}"
        super().__init__(location, reason)

    @classmethod
    def file_size(cls, location: str, reason: str = "") -> "UnableToRetrieveMetadata":
        return cls(location, "file_size", reason)

    @classmethod
    def last_modified(cls, location: str, reason: str = "") -> "UnableToRetrieveMetadata":
        return cls(location, "last_modified", reason)

    @classmethod
    def mime_type(cls, location: str, reason: str = "") -> "UnableToRetrieveMetadata":
        return cls(location, "mime_type", reason)

    @classmethod
    def metadata(cls, location: str, reason: str = "") -> "UnableToRetrieveMetadata":
        return cls(location, "metadata", reason)
