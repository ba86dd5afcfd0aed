"""
Shared fixtures for the boxfs tests.
"""
import pytest

from boxfs.adapter import BoxAdapter
from tests.fixtures.mock_box_client import MockBoxClient


@pytest.fixture
def mock_client():
    """
    Create a mock client with this tree:

        /docs/
        /docs/readme.txt
        /docs/2024/
        /docs/2024/report.pdf
        /empty/
        /top.txt
    """
    client = MockBoxClient()

    docs_id = client.add_folder("docs")
    year_id = client.add_folder("2024", docs_id)
    client.add_file("report.pdf", year_id, b"%PDF-1.4 quarterly report")
    client.add_file("readme.txt", docs_id, b"read me first")
    client.add_folder("empty")
    client.add_file("top.txt", content=b"top level", modified_at="2023-06-01T12:00:00+00:00")

    return client


@pytest.fixture
def adapter(mock_client):
    """Adapter over the mock tree with no prefix."""
    return BoxAdapter(mock_client)
