"""Byte transports for fetching catalog files.

The resolver only needs ``await transport.fetch(path) -> bytes``. The
embedding application picks the implementation at construction time:

    FileTransport   - local paths and file:// URLs
    HttpTransport   - http:// and https:// URLs via requests
    SchemeTransport - dispatches on the URL scheme (the default)

Blocking I/O runs in a worker thread (asyncio.to_thread) so concurrent
candidate rows do not serialize on the event loop.

A missing catalog is reported as FileNotFoundError by every transport,
including HTTP 404, so callers can tell "absent" from "broken".

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from http import HTTPStatus
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit
from urllib.request import url2pathname

import requests

from gettextengine.constants import DEFAULT_HTTP_TIMEOUT

__all__ = [
    "FileTransport",
    "HttpTransport",
    "SchemeTransport",
    "Transport",
    "is_network_url",
]

logger = logging.getLogger(__name__)

_NETWORK_SCHEMES = frozenset({"http", "https"})


def is_network_url(path: str) -> bool:
    """Check whether path is an http:// or https:// URL."""
    return urlsplit(path).scheme.lower() in _NETWORK_SCHEMES


class Transport(Protocol):
    """Protocol for fetching raw catalog bytes.

    This is a Protocol (structural typing) rather than ABC so that test
    doubles and custom transports need no base class.

    Example:
        >>> class DictTransport:
        ...     def __init__(self, files: dict[str, bytes]) -> None:
        ...         self.files = files
        ...     async def fetch(self, path: str) -> bytes:
        ...         try:
        ...             return self.files[path]
        ...         except KeyError:
        ...             raise FileNotFoundError(path) from None
    """

    async def fetch(self, path: str) -> bytes:
        """Fetch the bytes stored at path.

        Args:
            path: Filesystem path or URL

        Returns:
            File contents

        Raises:
            FileNotFoundError: If nothing exists at path
            OSError: If the resource exists but cannot be read
        """
        ...


class FileTransport:
    """Reads catalogs from the local filesystem.

    Accepts plain paths and ``file://`` URLs.
    """

    __slots__ = ()

    @staticmethod
    def to_local_path(path: str) -> Path:
        """Convert a file:// URL (or a plain path) to a Path."""
        parts = urlsplit(path)
        if parts.scheme.lower() == "file":
            return Path(url2pathname(parts.path))
        return Path(path)

    async def fetch(self, path: str) -> bytes:
        """Read the file at path in a worker thread."""
        local = self.to_local_path(path)
        logger.debug("Reading catalog file %s", local)
        return await asyncio.to_thread(local.read_bytes)


class HttpTransport:
    """Fetches catalogs over HTTP(S) with a shared requests.Session.

    Attributes:
        timeout: Seconds before a request is abandoned
    """

    __slots__ = ("_session", "timeout")

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Seconds before a request is abandoned
            session: Session to reuse (a new one is created if omitted)
        """
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def _get(self, url: str) -> bytes:
        response = self._session.get(url, timeout=self.timeout)
        if response.status_code == HTTPStatus.NOT_FOUND:
            msg = f"no catalog at {url}"
            raise FileNotFoundError(msg)
        response.raise_for_status()
        return response.content

    async def fetch(self, path: str) -> bytes:
        """GET the URL in a worker thread.

        Raises:
            FileNotFoundError: On HTTP 404
            requests.RequestException: On other HTTP or connection errors
        """
        logger.debug("Fetching catalog %s", path)
        return await asyncio.to_thread(self._get, path)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()


class SchemeTransport:
    """Routes http(s) URLs to an HttpTransport and everything else to a FileTransport."""

    __slots__ = ("file", "http")

    def __init__(
        self,
        file: Transport | None = None,
        http: Transport | None = None,
    ) -> None:
        """Initialize with optional transports for each route."""
        self.file: Transport = file if file is not None else FileTransport()
        self.http: Transport = http if http is not None else HttpTransport()

    async def fetch(self, path: str) -> bytes:
        """Fetch path with the transport matching its scheme."""
        if is_network_url(path):
            return await self.http.fetch(path)
        return await self.file.fetch(path)
