# -*- Mode: Python; coding: utf-8; indent-tabs-mode: nil; tab-width: 4 -*-
"""Named list sources for the picker.

A source loader turns a source name ('home', 'work', '15') into raw text
whose non-empty trimmed lines become the pool. Loaders are awaited by the
picker; any failure they raise is turned into an empty pool there.
"""

import asyncio
import logging
import os
from typing import Dict, List, Mapping, Optional

import aiohttp

from whosnext.picker.draw.pool import clean_entries

logger = logging.getLogger(__name__)

SOURCE_HOME = 'home'
SOURCE_WORK = 'work'
SOURCE_FIFTEEN = '15'
SOURCE_CUSTOM = 'custom'

# Named lists shipped as static text files
DEFAULT_SOURCE_FILES = {
    SOURCE_HOME: 'list2.txt',
    SOURCE_WORK: 'initial-names.txt',
    SOURCE_FIFTEEN: 'list15.txt',
}

# Sources selectable in the UI, in button order
KNOWN_SOURCES = (SOURCE_HOME, SOURCE_WORK, SOURCE_FIFTEEN, SOURCE_CUSTOM)


class SourceLoadError(Exception):
    """Raised when a named source cannot be loaded."""


class UnknownSourceError(SourceLoadError):
    """Raised when a loader has no list for the requested name."""


def parse_entries(text: str) -> List[str]:
    """Split raw source text into pool entries.

    Handles both '\\n' and '\\r\\n' line endings.
    """
    return clean_entries(text.splitlines())


class SourceLoader:
    """Base class for source loaders."""

    async def load(self, name: str) -> str:
        """Return the raw text of source ``name``.

        Raises:
            SourceLoadError: If the source cannot be provided.
        """
        raise NotImplementedError


class StaticSourceLoader(SourceLoader):
    """Serves lists held in memory. Useful for tests and embedding."""

    def __init__(self, sources: Mapping[str, str]):
        self._sources = dict(sources)

    async def load(self, name: str) -> str:
        try:
            return self._sources[name]
        except KeyError:
            raise UnknownSourceError(f"Unknown source: '{name}'") from None


class DirectorySourceLoader(SourceLoader):
    """Reads named list files from a directory."""

    def __init__(self, directory: str, files: Optional[Mapping[str, str]] = None,
                 encoding: str = 'utf-8'):
        """Initialize the loader.

        Args:
            directory: Folder holding the list files.
            files: Mapping of source name to file name. Defaults to
                DEFAULT_SOURCE_FILES.
            encoding: Text encoding of the list files.
        """
        self.directory = os.path.normpath(directory)
        self.files: Dict[str, str] = dict(files if files is not None else DEFAULT_SOURCE_FILES)
        self.encoding = encoding

    def path_for(self, name: str) -> str:
        try:
            filename = self.files[name]
        except KeyError:
            raise UnknownSourceError(f"Unknown source: '{name}'") from None
        return os.path.join(self.directory, filename)

    async def load(self, name: str) -> str:
        path = self.path_for(name)
        # Off the loop so spin timers keep firing
        return await asyncio.to_thread(self._read, path)

    def _read(self, path: str) -> str:
        with open(path, encoding=self.encoding) as f:
            return f.read()


class HttpSourceLoader(SourceLoader):
    """Fetches named list files from a web server with aiohttp."""

    def __init__(self, base_url: str, files: Optional[Mapping[str, str]] = None,
                 timeout: float = 10):
        """Initialize the loader.

        Args:
            base_url: URL the list file names are resolved against.
            files: Mapping of source name to file name. Defaults to
                DEFAULT_SOURCE_FILES.
            timeout: Total request timeout in seconds.
        """
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.files: Dict[str, str] = dict(files if files is not None else DEFAULT_SOURCE_FILES)
        self.timeout = timeout

    def url_for(self, name: str) -> str:
        try:
            filename = self.files[name]
        except KeyError:
            raise UnknownSourceError(f"Unknown source: '{name}'") from None
        return self.base_url + filename.lstrip('/')

    async def load(self, name: str) -> str:
        url = self.url_for(name)
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise SourceLoadError(
                        f"Fetching '{name}' from {url} returned HTTP {response.status}"
                    )
                text = await response.text()
        logger.debug(f"Fetched source '{name}' from {url} ({len(text)} chars)")
        return text
