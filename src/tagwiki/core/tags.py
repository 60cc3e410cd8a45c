"""Hashtag extraction and the derived tag index.

Tags are written inline in page bodies as a marker followed by word
characters, e.g. ``#python``. Nothing is cached: every call rescans the
current storage contents.

Two matching modes are supported when looking up pages for a tag:

- ``substring``: a page matches if its body contains ``#tag`` anywhere,
  so a lookup for ``world`` also finds pages that only mention
  ``#worldwide``.
- ``token``: a page matches only if ``tag`` is one of the tags extracted
  from its body.
"""

import logging
import re
from collections.abc import AsyncIterator
from typing import Literal

from tagwiki.core.errors import WikiError
from tagwiki.core.storage import Storage

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "#"

MatchMode = Literal["substring", "token"]


def tag_pattern(marker: str = DEFAULT_MARKER) -> re.Pattern[str]:
    """Regex matching one tag token; group 1 is the canonical name."""
    return re.compile(re.escape(marker) + r"(\w+)")


TAG_PATTERN = tag_pattern()


def extract_tags(text: str, marker: str = DEFAULT_MARKER) -> list[str]:
    """Extract unique tag names from text, in first-seen order.

    Matches are non-overlapping and greedy on the word run; case is kept.
    """
    pattern = TAG_PATTERN if marker == DEFAULT_MARKER else tag_pattern(marker)
    return list(dict.fromkeys(pattern.findall(text)))


def contains_tag(
    text: str,
    tag: str,
    marker: str = DEFAULT_MARKER,
    match: MatchMode = "substring",
) -> bool:
    """Check whether ``text`` is tagged with ``tag`` under the given mode."""
    if match == "token":
        return tag in extract_tags(text, marker)
    return (marker + tag) in text


class TagIndexer:
    """Builds tag listings by scanning every page in a storage.

    Pages that cannot be read during a scan (removed mid-scan, undecodable,
    unreadable) are skipped with a warning. A failure to list the storage
    directory propagates as ListFailed.
    """

    def __init__(
        self,
        storage: Storage,
        marker: str = DEFAULT_MARKER,
        match: MatchMode = "substring",
    ):
        self.storage = storage
        self.marker = marker
        self.match = match

    async def _scan(self) -> AsyncIterator[tuple[str, str]]:
        """Yield ``(slug, body)`` for every readable page, in catalog order."""
        for slug in await self.storage.list_pages():
            try:
                body = await self.storage.read_page(slug)
            except WikiError:
                logger.warning("Skipping unreadable page %r during tag scan", slug)
                continue
            yield slug, body

    async def all_tags(self) -> list[str]:
        """Return every tag used in any page, deduplicated."""
        seen: dict[str, None] = {}
        async for _, body in self._scan():
            for tag in extract_tags(body, self.marker):
                seen.setdefault(tag, None)
        return list(seen)

    async def pages_for_tag(self, tag: str) -> list[str]:
        """Return slugs of pages tagged with ``tag``. Empty if none match."""
        pages = []
        async for slug, body in self._scan():
            if contains_tag(body, tag, self.marker, self.match):
                pages.append(slug)
        logger.debug("Tag %r found in %d page(s)", tag, len(pages))
        return pages

    async def tag_index(self) -> dict[str, list[str]]:
        """Map every tag to the slugs of the pages tagged with it.

        Pages are read once. In ``substring`` mode a page is listed under
        every known tag whose marked form occurs in its body.
        """
        bodies = [(slug, body) async for slug, body in self._scan()]

        tags: dict[str, None] = {}
        for _, body in bodies:
            for tag in extract_tags(body, self.marker):
                tags.setdefault(tag, None)

        return {
            tag: [
                slug
                for slug, body in bodies
                if contains_tag(body, tag, self.marker, self.match)
            ]
            for tag in tags
        }
