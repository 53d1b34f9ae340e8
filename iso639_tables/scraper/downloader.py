"""Page fetching and DOM construction.

This module fetches source pages with httpx and parses them into lxml HTML
documents. Independent sources are fetched concurrently; nothing is retried or
cached, and any HTTP failure propagates to the caller.

Functions
---------
fetch_and_parse : Async fetch of one page into an lxml document
fetch_documents : Concurrent fetch of several sources with a shared client
parse_document : Build an lxml document from raw bytes (no network)

Notes
-----
``encoding`` overrides whatever charset the server declares; the Library of
Congress code list is served as Latin-1 without saying so.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import lxml.etree
import lxml.html

from iso639_tables.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, setup_logging
from iso639_tables.errors import Iso639Error, MalformedTableError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from iso639_tables.pipeline import SourceConfig

# Module-level logger for fetch operations
logger = setup_logging(__name__)


def parse_document(
    content: bytes,
    url: str | None = None,
    encoding: str | None = None,
    absolutify_urls: bool = False,
) -> lxml.html.HtmlElement:
    """Parse raw page bytes into an lxml HTML document.

    Parameters
    ----------
    content : bytes
        Raw response body.
    url : str | None, optional
        Page URL, used as base for relative links.
    encoding : str | None, optional
        Text encoding of ``content``. Defaults to UTF-8.
    absolutify_urls : bool, optional
        Rewrite every relative link against ``url`` when ``True``.

    Returns
    -------
    lxml.html.HtmlElement
        Root ``<html>`` element of the document.

    Raises
    ------
    MalformedTableError
        If ``content`` holds no parsable markup (empty or blank body).
    """
    parser = lxml.html.HTMLParser(encoding=encoding or "utf-8")
    try:
        document = lxml.html.document_fromstring(content, parser=parser, base_url=url)
    except lxml.etree.ParserError as err:
        msg = f"Document is empty: {url or '<bytes>'}"
        raise MalformedTableError(msg) from err

    if absolutify_urls and url:
        document.make_links_absolute(url)

    return document


async def fetch_and_parse(
    url: str,
    encoding: str | None = None,
    absolutify_urls: bool = False,
    client: httpx.AsyncClient | None = None,
) -> lxml.html.HtmlElement:
    """Fetch a page and return its parsed DOM.

    Parameters
    ----------
    url : str
        Page URL (redirects are followed).
    encoding : str | None, optional
        Encoding override; when ``None`` the charset detected by httpx is used.
    absolutify_urls : bool, optional
        Rewrite relative links to absolute ones.
    client : httpx.AsyncClient | None, optional
        Shared client. A short-lived one is created when omitted.

    Returns
    -------
    lxml.html.HtmlElement
        Parsed document.

    Raises
    ------
    httpx.HTTPError
        If the request fails (4xx, 5xx, connection error).
    """
    if client is None:
        async with httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT,
            follow_redirects=True,
            headers={"User-Agent": DEFAULT_USER_AGENT},
        ) as own_client:
            return await fetch_and_parse(url, encoding, absolutify_urls, own_client)

    logger.info("Fetching: %s", url)
    response = await client.get(url)
    response.raise_for_status()  # Raise on 4xx/5xx

    page_encoding = encoding or response.encoding
    logger.debug("Fetched %s (%d bytes, encoding=%s)", url, len(response.content), page_encoding)
    return parse_document(response.content, str(response.url), page_encoding, absolutify_urls)


async def _fetch_source(source: SourceConfig, client: httpx.AsyncClient) -> lxml.html.HtmlElement:
    """Fetch one source page, stamping pipeline errors with the source id."""
    try:
        return await fetch_and_parse(source.url, source.encoding, source.absolutify_urls, client)
    except Iso639Error as err:
        if err.source_id is None:
            err.source_id = source.id
        raise


async def fetch_documents(
    sources: Iterable[SourceConfig],
    http_settings: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, lxml.html.HtmlElement]:
    """Fetch every source page concurrently.

    Parameters
    ----------
    sources : Iterable[SourceConfig]
        Source definitions; only ``id``, ``url``, ``encoding`` and
        ``absolutify_urls`` are used here.
    http_settings : dict[str, Any] | None, optional
        ``timeout`` and ``user_agent`` for the shared client.
    transport : httpx.AsyncBaseTransport | None, optional
        Transport override (tests pass an ``httpx.MockTransport``).

    Returns
    -------
    dict[str, lxml.html.HtmlElement]
        Parsed documents keyed by source id, in the order sources were given.
    """
    settings = http_settings or {}
    source_list = list(sources)

    async with httpx.AsyncClient(
        timeout=settings.get("timeout", DEFAULT_TIMEOUT),
        follow_redirects=True,
        headers={"User-Agent": settings.get("user_agent", DEFAULT_USER_AGENT)},
        transport=transport,
    ) as client:
        documents = await asyncio.gather(
            *(_fetch_source(source, client) for source in source_list),
        )

    return {source.id: document for source, document in zip(source_list, documents, strict=True)}
