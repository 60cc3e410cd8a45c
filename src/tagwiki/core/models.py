"""Data models for TagWiki."""

from typing import Literal

from pydantic import BaseModel, Field


class Page(BaseModel):
    """Represents a wiki page."""

    slug: str
    body: str


class PageWrite(BaseModel):
    """Request body for saving a page."""

    body: str


# ========== Response payloads ==========


class OkResponse(BaseModel):
    status: Literal["ok"] = "ok"


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str


class PageResponse(OkResponse):
    body: str


class PageListResponse(OkResponse):
    pages: list[str] = Field(default_factory=list)


class TagListResponse(OkResponse):
    tags: list[str] = Field(default_factory=list)


class TagPagesResponse(OkResponse):
    tag: str
    pages: list[str] = Field(default_factory=list)
