"""
Index Client for the Chaos dataset

This module fetches the published JSON index and turns it into an ordered
list of IndexEntry records, one per downloadable archive.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .errors import IndexFetchError
from .results import IndexEntry


NAME_FIELD = "name"
LOCATION_FIELD = "URL"


class IndexClient:
    """
    Client for the remote archive index.

    The index is a JSON array of objects; each object's `name` becomes a
    workspace directory and its `URL` is where the archive lives.
    """

    def __init__(self,
                 timeout: float = 60.0,
                 user_agent: str = "chaosgrab",
                 session: Optional[requests.Session] = None):
        """
        Initialize the index client.

        Args:
            timeout: Connect/read timeout in seconds for the index request
            user_agent: User-Agent header sent with the request
            session: Optional pre-built session (shared with the retriever)
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    def fetch_index(self, index_url: str) -> List[IndexEntry]:
        """
        Retrieve and parse the index.

        Args:
            index_url: Location of the JSON index

        Returns:
            Entries in the order the index lists them

        Raises:
            IndexFetchError: If the request fails or the payload is malformed
        """
        self.logger.info(f"Fetching index: {index_url}")

        try:
            response = self.session.get(index_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise IndexFetchError(f"error fetching index {index_url}: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise IndexFetchError(f"error decoding index {index_url}: {e}") from e

        entries = parse_index(payload)
        self.logger.info(f"Index lists {len(entries)} archives")
        return entries


def parse_index(payload: Any) -> List[IndexEntry]:
    """
    Convert a decoded index payload into entries.

    Unknown fields are ignored and missing ones become empty strings; the
    location is not validated here.

    Raises:
        IndexFetchError: If the payload is not an array of objects, or a
            known field holds something other than a string
    """
    if not isinstance(payload, list):
        raise IndexFetchError(
            f"error decoding index: expected an array, got {type(payload).__name__}"
        )

    entries = []
    for position, item in enumerate(payload):
        if not isinstance(item, dict):
            raise IndexFetchError(
                f"error decoding index: item {position} is {type(item).__name__}, not an object"
            )
        entries.append(IndexEntry(
            name=_string_field(item, NAME_FIELD, position),
            location=_string_field(item, LOCATION_FIELD, position),
        ))
    return entries


def _string_field(item: Dict[str, Any], key: str, position: int) -> str:
    # Exact key wins; otherwise fall back to a case-insensitive match.
    if key in item:
        value = item[key]
    else:
        value = next((v for k, v in item.items() if k.lower() == key.lower()), None)

    if value is None:
        return ""
    if not isinstance(value, str):
        raise IndexFetchError(
            f"error decoding index: item {position} field '{key}' is "
            f"{type(value).__name__}, not a string"
        )
    return value
