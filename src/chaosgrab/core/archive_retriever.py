"""
Archive Retrieval Module

This module downloads a single archive into a uniquely named temporary
file that lives only as long as the caller needs it.
"""

import logging
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import requests

from .errors import RetrievalError


class ArchiveRetriever:
    """
    Streams archive payloads to temporary files.

    Every request carries a timeout, and a shared stop event is checked
    between chunks so a long download can be abandoned.
    """

    def __init__(self,
                 timeout: float = 60.0,
                 chunk_size: int = 64 * 1024,
                 user_agent: str = "chaosgrab",
                 session: Optional[requests.Session] = None,
                 stop_event: Optional[threading.Event] = None):
        """
        Initialize the archive retriever.

        Args:
            timeout: Connect/read timeout in seconds for each request
            chunk_size: Bytes read from the response per iteration
            user_agent: User-Agent header sent with each request
            session: Optional pre-built session
            stop_event: Event that aborts an in-flight download when set
        """
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.stop_event = stop_event or threading.Event()
        self.logger = logging.getLogger(__name__)
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

    @contextmanager
    def download(self, location: str) -> Iterator[Path]:
        """
        Download an archive and yield the path of the temporary copy.

        The temporary file is removed when the block exits, whether it
        completes or raises.

        Args:
            location: URL of the archive

        Yields:
            Path to the downloaded archive

        Raises:
            RetrievalError: If the download or the write fails
        """
        try:
            handle = tempfile.NamedTemporaryFile(prefix="chaosgrab-", suffix=".zip", delete=False)
        except OSError as e:
            raise RetrievalError(f"error creating temp file: {e}") from e

        path = Path(handle.name)
        try:
            with handle:
                size = self._stream_to(location, handle)
            self.logger.debug(f"Downloaded {size} bytes from {location} to {path}")
            yield path
        finally:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                self.logger.warning(f"Cannot delete temporary file {path}: {e}")

    def _stream_to(self, location: str, handle) -> int:
        """Copy the response body for `location` into an open file handle."""
        written = 0
        try:
            with self.session.get(location, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                for chunk in response.iter_content(chunk_size=self.chunk_size):
                    if self.stop_event.is_set():
                        raise RetrievalError(f"download of {location} cancelled")
                    if chunk:
                        handle.write(chunk)
                        written += len(chunk)
        except requests.RequestException as e:
            raise RetrievalError(f"error downloading {location}: {e}") from e
        except OSError as e:
            raise RetrievalError(f"error writing to temp file: {e}") from e
        return written
