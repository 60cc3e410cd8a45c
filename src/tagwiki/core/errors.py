"""Exceptions raised by the wiki core."""


class WikiError(Exception):
    """Base class for all wiki errors. ``message`` is safe to show clients."""

    message = "Wiki error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class PageNotFound(WikiError):
    message = "Page does not exist."


class WriteFailed(WikiError):
    message = "Could not write page."


class ListFailed(WikiError):
    message = "Could not list pages."


class InvalidSlug(WikiError):
    message = "Invalid page name."
