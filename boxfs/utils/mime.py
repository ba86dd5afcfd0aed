"""
MIME type detection from file names.
"""
import mimetypes
from typing import Optional


class ExtensionMimeTypeDetector:
    """
    Detects MIME types from the file extension only.

    Any object with a ``detect_mime_type_from_path(path)`` method can be
    passed to the adapter in place of this detector.
    """

    def __init__(self, default: Optional[str] = None):
        self.default = default

    def detect_mime_type_from_path(self, path: str) -> Optional[str]:
        mime_type, _ = mimetypes.guess_type(path, strict=False)
        return mime_type or self.default
