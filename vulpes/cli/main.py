"""
CLI entry point for vulpes.

Commands:
  vulpes extract [PATH]   Extract text from an HTML file (or stdin)
  vulpes fetch URL        Fetch a page and print its text with timings
  vulpes status           Show the effective configuration
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import cyclopts

from vulpes.config.schema import DEFAULT_CONFIG_PATH, Settings

app = cyclopts.App(name="vulpes", help="A minimal text-mode page loader.")


@app.command
def extract(path: Path | None = None) -> None:
    """
    Extract readable text from an HTML document.

    Reads PATH, or stdin when PATH is omitted or "-", and writes the text to stdout.
    """
    from vulpes.core.text_extract import extract_text

    if path is None or str(path) == "-":
        html = sys.stdin.buffer.read()
    else:
        try:
            html = path.read_bytes()
        except OSError as exc:
            print(f"Error: cannot read {path} ({exc.strerror or exc})", file=sys.stderr)
            raise SystemExit(1) from exc

    text = extract_text(html)
    sys.stdout.flush()
    sys.stdout.buffer.write(text + b"\n" if text else b"")
    sys.stdout.buffer.flush()


@app.command
def fetch(
    url: str | None = None,
    preview: int | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    Fetch a URL and print its extracted text.

    Status, sizes and timings go to stderr; up to --preview characters of text go
    to stdout. Without URL the configured home page is loaded.
    """
    _setup_logging(log_level)
    settings = _load_settings(config)
    target = url or settings.display.home_page
    limit = preview if preview is not None else settings.display.preview_chars
    asyncio.run(_run_fetch(target, settings=settings, preview=max(limit, 0)))


@app.command
def status(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """Show the effective configuration."""
    settings = _load_settings(config)
    source = config if config.exists() else "defaults"
    print(f"Config:     {source}")
    print(f"Home page:  {settings.display.home_page}")
    print(f"User-Agent: {settings.fetch.user_agent}")
    print(f"Timeout:    {settings.fetch.timeout_seconds:g}s")
    print(f"Redirects:  {settings.fetch.max_redirects}")
    print(f"Body cap:   {settings.fetch.max_body_bytes} bytes")
    print(f"Preview:    {settings.display.preview_chars} chars")


# ── Internal helpers ─────────────────────────────────────────────────────────


def _load_settings(config: Path) -> Settings:
    """
    Load settings, turning a malformed or invalid config file into exit status 1.

    Both json.JSONDecodeError and pydantic.ValidationError subclass ValueError.
    """
    try:
        return Settings.load(config)
    except ValueError as exc:
        print(f"Error: invalid config {config} ({exc})", file=sys.stderr)
        raise SystemExit(1) from exc


async def _run_fetch(url: str, *, settings: Settings, preview: int) -> None:
    """
    Load one page and report it.

    Args:
        url: Page to load.
        settings: Loaded application settings.
        preview: Maximum number of text characters written to stdout.

    Raises:
        SystemExit: With status 1 if the page cannot be loaded.
    """
    import httpx

    from vulpes.adapters.network.http import HttpFetcher
    from vulpes.core.page import PageLoader

    loader = PageLoader(HttpFetcher(settings.fetch))
    print(f"Fetching: {url}", file=sys.stderr)
    try:
        page = await loader.load(url)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except httpx.HTTPError as exc:
        print(f"Error: request failed ({exc})", file=sys.stderr)
        raise SystemExit(1) from exc

    truncated = " (truncated)" if page.truncated else ""
    print(f"Status: {page.status}", file=sys.stderr)
    print(f"Title: {page.title}", file=sys.stderr)
    print(f"Body size: {page.body_bytes} bytes{truncated}", file=sys.stderr)
    print(f"Text size: {len(page.text)} chars", file=sys.stderr)
    print(f"Fetch time: {page.fetch_ms:.0f}ms", file=sys.stderr)
    print(f"Extract time: {page.extract_ms:.0f}ms", file=sys.stderr)
    print("\n--- Extracted Text ---\n", file=sys.stderr)
    print(page.text[:preview])


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _setup_logging(level: str) -> None:
    """
    Configure loguru for command output.

    Removes the default loguru stderr handler and replaces it with one that
    uses a consistent timestamp+level format. The httpx transport loggers are
    clamped to WARNING via the stdlib logging bridge.

    Args:
        level: Log level string (case-insensitive), e.g. "INFO", "DEBUG".

    Raises:
        SystemExit: If the level is not a valid log level name.
    """
    import logging

    from loguru import logger

    normalised = level.upper()
    if normalised not in _VALID_LOG_LEVELS:
        valid = ", ".join(sorted(_VALID_LOG_LEVELS))
        print(f"error: invalid --log-level '{level}'. Valid values: {valid}", file=sys.stderr)
        raise SystemExit(1)

    logger.remove()  # remove loguru's built-in default handler
    logger.add(
        sys.stderr,
        level=normalised,
        format=("<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level:<8}</level> {message}"),
        colorize=True,
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
