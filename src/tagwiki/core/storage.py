"""Storage abstraction for wiki pages."""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from tagwiki.core.errors import InvalidSlug, ListFailed, PageNotFound, WriteFailed
from tagwiki.core.models import Page
from tagwiki.core.slugs import (
    DEFAULT_EXTENSION,
    filename_to_slug,
    slug_to_path,
    validate_slug,
)

logger = logging.getLogger(__name__)


class Storage(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def read_page(self, slug: str) -> str:
        """Return the raw body of a page. Raises PageNotFound."""
        ...

    @abstractmethod
    async def write_page(self, slug: str, body: str) -> Page:
        """Create or replace a page. Raises WriteFailed."""
        ...

    @abstractmethod
    async def list_pages(self) -> list[str]:
        """List all page slugs. Raises ListFailed."""
        ...

    @abstractmethod
    async def page_exists(self, slug: str) -> bool:
        """Check if a page exists."""
        ...

    async def get_page(self, slug: str) -> Page:
        """Get a page by slug. Raises PageNotFound."""
        return Page(slug=slug, body=await self.read_page(slug))


class FileStorage(Storage):
    """File-based storage implementation.

    Each page is one file directly under ``base_path`` whose name is the
    slug plus ``extension``. Bodies are stored as UTF-8 exactly as given;
    writes replace the whole file and are not atomic.
    """

    def __init__(self, base_path: Path, extension: str = DEFAULT_EXTENSION):
        self.base_path = base_path
        self.extension = extension
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_path(self, slug: str) -> Path:
        """Get full path for a page."""
        return slug_to_path(self.base_path, validate_slug(slug), self.extension)

    def _read(self, slug: str) -> str:
        path = self._get_path(slug)
        try:
            return path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read %s: %s", path, exc)
            raise PageNotFound() from exc

    def _write(self, slug: str, body: str) -> None:
        path = self._get_path(slug)
        try:
            path.write_bytes(body.encode("utf-8"))
        except OSError as exc:
            logger.error("Could not write %s: %s", path, exc)
            raise WriteFailed() from exc

    def _list(self) -> list[str]:
        slugs = []
        try:
            for path in self.base_path.iterdir():
                if not path.name.endswith(self.extension) or not path.is_file():
                    continue
                slug = filename_to_slug(path.name, self.extension)
                try:
                    slugs.append(validate_slug(slug))
                except InvalidSlug:
                    logger.debug("Ignoring %s: not a valid page name", path.name)
        except OSError as exc:
            logger.error("Could not list %s: %s", self.base_path, exc)
            raise ListFailed(str(exc)) from exc
        return sorted(slugs)

    async def read_page(self, slug: str) -> str:
        """Return the raw body of a page."""
        return await asyncio.to_thread(self._read, slug)

    async def write_page(self, slug: str, body: str) -> Page:
        """Create the page file, or fully replace its content."""
        await asyncio.to_thread(self._write, slug, body)
        logger.info("Saved page %r (%d chars)", slug, len(body))
        return Page(slug=slug, body=body)

    async def list_pages(self) -> list[str]:
        """List all page slugs, sorted."""
        return await asyncio.to_thread(self._list)

    async def page_exists(self, slug: str) -> bool:
        """Check if a page exists. Invalid slugs never exist."""
        try:
            path = self._get_path(slug)
        except InvalidSlug:
            return False
        return await asyncio.to_thread(path.is_file)
