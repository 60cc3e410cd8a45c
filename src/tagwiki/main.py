"""TagWiki FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from tagwiki.config import Settings, settings
from tagwiki.core.errors import WikiError
from tagwiki.core.models import (
    ErrorResponse,
    OkResponse,
    PageListResponse,
    PageResponse,
    PageWrite,
    TagListResponse,
    TagPagesResponse,
)
from tagwiki.core.storage import FileStorage, Storage
from tagwiki.core.tags import TagIndexer
from tagwiki.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def get_storage(request: Request) -> Storage:
    """Storage bound to the running app."""
    return request.app.state.storage


def get_indexer(request: Request) -> TagIndexer:
    """Tag indexer bound to the running app."""
    return request.app.state.indexer


# ========== Page API ==========


async def read_page(
    slug: str, storage: Storage = Depends(get_storage)
) -> PageResponse | ErrorResponse:
    """Return the raw body of a page."""
    try:
        page = await storage.get_page(slug)
    except WikiError:
        return ErrorResponse(message="Page does not exist.")
    return PageResponse(body=page.body)


async def write_page(
    slug: str, payload: PageWrite, storage: Storage = Depends(get_storage)
) -> OkResponse | ErrorResponse:
    """Create or overwrite a page."""
    try:
        await storage.write_page(slug, payload.body)
    except WikiError:
        return ErrorResponse(message="Could not write page.")
    return OkResponse()


async def list_pages(
    storage: Storage = Depends(get_storage),
) -> PageListResponse | ErrorResponse:
    """List the slugs of all pages."""
    try:
        pages = await storage.list_pages()
    except WikiError as exc:
        return ErrorResponse(message=exc.message)
    return PageListResponse(pages=pages)


# ========== Tag API ==========


async def list_tags(
    indexer: TagIndexer = Depends(get_indexer),
) -> TagListResponse | ErrorResponse:
    """List every tag used across all pages."""
    try:
        tags = await indexer.all_tags()
    except WikiError as exc:
        return ErrorResponse(message=exc.message)
    return TagListResponse(tags=tags)


async def pages_for_tag(
    tag: str, indexer: TagIndexer = Depends(get_indexer)
) -> TagPagesResponse | ErrorResponse:
    """List the slugs of pages carrying a tag."""
    try:
        pages = await indexer.pages_for_tag(tag)
    except WikiError as exc:
        return ErrorResponse(message=exc.message)
    return TagPagesResponse(tag=tag, pages=pages)


# ========== Client ==========


def client_file(client_dir: Path, path: str) -> Path:
    """Resolve a request path to a file in the client build.

    Anything that is not an existing file inside ``client_dir`` falls back
    to ``index.html`` so the client can route it (e.g. a page being created).
    """
    root = client_dir.resolve()
    candidate = (root / path).resolve()
    if path and candidate.is_relative_to(root) and candidate.is_file():
        return candidate
    return root / "index.html"


def mount_client(app: FastAPI, client_dir: Path) -> None:
    """Serve the client build and fall back to its index page."""

    @app.get("/{path:path}", include_in_schema=False)
    async def client(path: str) -> FileResponse:
        target = client_file(client_dir, path)
        if not target.is_file():
            raise HTTPException(status_code=404, detail="Client not built")
        return FileResponse(target)


# ========== Application ==========


def create_app(config: Settings | None = None) -> FastAPI:
    """Build the application around its own storage directory."""
    if config is None:
        config = settings
    setup_logging(config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Serving %s pages from %s (tag match: %s)",
            config.page_extension,
            config.data_dir,
            config.tag_match,
        )
        yield

    app = FastAPI(title=config.app_title, debug=config.debug, lifespan=lifespan)

    storage = FileStorage(config.data_dir, extension=config.page_extension)
    app.state.storage = storage
    app.state.indexer = TagIndexer(
        storage, marker=config.tag_marker, match=config.tag_match
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.add_api_route("/api/page/{slug}", read_page, methods=["GET"])
    app.add_api_route("/api/page/{slug}", write_page, methods=["POST"])
    app.add_api_route("/api/pages/all", list_pages, methods=["GET"])
    app.add_api_route("/api/tags/all", list_tags, methods=["GET"])
    app.add_api_route("/api/tags/{tag}", pages_for_tag, methods=["GET"])

    if config.client_dir is not None and config.client_dir.is_dir():
        mount_client(app, config.client_dir)
    elif config.client_dir is not None:
        logger.warning("Client directory %s not found, not serving it", config.client_dir)

    return app


app = create_app()
