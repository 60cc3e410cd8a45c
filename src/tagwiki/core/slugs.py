"""Mapping between page slugs and files in the storage directory."""

from pathlib import Path

from tagwiki.core.errors import InvalidSlug

DEFAULT_EXTENSION = ".md"

_FORBIDDEN_CHARACTERS = ("/", "\\", "\x00")


def validate_slug(slug: str) -> str:
    """Return ``slug`` unchanged if it names a file inside the storage root.

    Raises InvalidSlug for empty names, path separators, NUL bytes and the
    ``.``/``..`` directory names.
    """
    if not slug or slug in (".", ".."):
        raise InvalidSlug()
    if any(ch in slug for ch in _FORBIDDEN_CHARACTERS):
        raise InvalidSlug()
    return slug


def slug_to_filename(slug: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Convert a slug to its file name."""
    return slug + extension


def filename_to_slug(filename: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Convert a file name back to its slug."""
    return filename.removesuffix(extension)


def slug_to_path(root: Path, slug: str, extension: str = DEFAULT_EXTENSION) -> Path:
    """Get the full storage path for a slug. Performs no I/O."""
    return root / slug_to_filename(slug, extension)
