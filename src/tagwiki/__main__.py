"""Run the TagWiki server."""

import uvicorn

from tagwiki.config import settings


def main() -> None:
    """Serve the default app on the configured host and port."""
    uvicorn.run(
        "tagwiki.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
