"""
Box API client.
Provides the ID-addressed operations the adapter needs: folder listing,
folder creation, upload, download, deletion and item information.
"""
import io
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import json
import logging
from typing import Any, BinaryIO, Dict, List, Optional, Union

import requests

from .config import (
    BOX_API_URL,
    BOX_UPLOAD_URL,
    ITEM_FIELDS,
    LIST_ITEMS_LIMIT,
    MAX_RETRIES,
    REQUEST_TIMEOUT,
)
from .exceptions import BoxAPIError, BoxTransientError
from .models import RemoteItem
from .utils.retries import with_retry


# Configure logger
logger = logging.getLogger(__name__)

# Connection failures and timeouts surface as BoxTransientError
RETRYABLE_ERRORS = (BoxTransientError,)


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Seconds to wait from a Retry-After header (delay seconds or HTTP-date)."""
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparsable Retry-After header: {value!r}")
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


class BoxClient:
    """Thin client over the Box REST API using a bearer token."""

    def __init__(
        self,
        access_token: str,
        api_url: str = BOX_API_URL,
        upload_url: str = BOX_UPLOAD_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            access_token: OAuth2 access token or developer token
            api_url: Base URL of the content API
            upload_url: Base URL of the upload API
            timeout: Per-request timeout in seconds
            session: Optional pre-configured session
        """
        if not access_token:
            raise ValueError("A Box access token is required")

        self.api_url = api_url.rstrip("/")
        self.upload_url = upload_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {access_token}"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request and map error responses to BoxAPIError."""
        kwargs.setdefault("timeout", self.timeout)
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise BoxTransientError(f"{method} {url} failed: {e}") from e
        except requests.RequestException as e:
            raise BoxAPIError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            raise self._error_from_response(response)
        return response

    @staticmethod
    def _error_from_response(response: requests.Response) -> BoxAPIError:
        code = None
        message = response.reason or "Box API request failed"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            code = body.get("code")
            message = body.get("message") or message

        status = response.status_code
        if status == 429 or status >= 500:
            retry_after = response.headers.get("Retry-After")
            return BoxTransientError(
                message,
                status_code=status,
                code=code,
                retry_after=_parse_retry_after(retry_after),
            )
        return BoxAPIError(message, status_code=status, code=code)

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def list_items_in_folder(self, folder_id: str) -> List[RemoteItem]:
        """
        List the items directly inside a folder.

        Only the first page is fetched.

        Args:
            folder_id: Folder ID to list

        Returns:
            List of entries with id, name, type, size and modified_at
        """
        response = self._request(
            "GET",
            f"{self.api_url}/folders/{folder_id}/items",
            params={"fields": ITEM_FIELDS, "limit": LIST_ITEMS_LIMIT},
        )
        body = response.json()
        entries = body.get("entries", [])

        total = body.get("total_count")
        if total is not None and total > len(entries):
            logger.warning(
                f"Folder {folder_id} has {total} items, only the first {len(entries)} were listed"
            )
        return entries

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def create_folder(self, name: str, parent_id: str) -> str:
        """
        Create a folder.

        Args:
            name: Name for new folder
            parent_id: Parent folder ID

        Returns:
            ID of created folder
        """
        response = self._request(
            "POST",
            f"{self.api_url}/folders",
            json={"name": name, "parent": {"id": str(parent_id)}},
        )
        folder_id = str(response.json()["id"])
        logger.info(f"Created folder {name!r} ({folder_id}) in parent {parent_id}")
        return folder_id

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def delete(self, file_id: str) -> None:
        """Delete a file."""
        self._request("DELETE", f"{self.api_url}/files/{file_id}")
        logger.info(f"Deleted file {file_id}")

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def delete_folder(self, folder_id: str) -> None:
        """Delete a folder and everything inside it."""
        self._request(
            "DELETE",
            f"{self.api_url}/folders/{folder_id}",
            params={"recursive": "true"},
        )
        logger.info(f"Deleted folder {folder_id}")

    def upload(self, name: str, parent_id: str, content: Union[bytes, BinaryIO]) -> str:
        """
        Upload a new file.

        Args:
            name: File name
            parent_id: Parent folder ID
            content: Raw bytes or a binary stream

        Returns:
            ID of uploaded file
        """
        data = content.read() if hasattr(content, "read") else content
        return self._upload(name, str(parent_id), data)

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def _upload(self, name: str, parent_id: str, data: bytes) -> str:
        attributes = json.dumps({"name": name, "parent": {"id": parent_id}})
        response = self._request(
            "POST",
            f"{self.upload_url}/files/content",
            data={"attributes": attributes},
            files={"file": (name, data)},
        )
        file_id = str(response.json()["entries"][0]["id"])
        logger.info(f"Uploaded {name!r} ({len(data)} bytes) as file {file_id} in parent {parent_id}")
        return file_id

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def download(self, file_id: str) -> BinaryIO:
        """Download a file into an in-memory binary stream."""
        response = self._request("GET", f"{self.api_url}/files/{file_id}/content")
        return io.BytesIO(response.content)

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def get_file_information(self, file_id: str) -> Dict[str, Any]:
        """Return size, type and modified_at of a file."""
        response = self._request(
            "GET",
            f"{self.api_url}/files/{file_id}",
            params={"fields": "size,type,modified_at"},
        )
        return response.json()

    @with_retry(max_retries=MAX_RETRIES, exceptions=RETRYABLE_ERRORS)
    def get_folder_information(self, folder_id: str) -> Dict[str, Any]:
        """Return type and modified_at of a folder."""
        response = self._request(
            "GET",
            f"{self.api_url}/folders/{folder_id}",
            params={"fields": "type,modified_at"},
        )
        return response.json()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
