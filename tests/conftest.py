"""Pytest configuration for iso639_tables tests.

This module provides:
- Sample pages mirroring the structure of the three source pages
  (Wikipedia ISO 639-1, Wikipedia ISO 639-2, Library of Congress code list)
- A mock HTTP transport serving those pages so pipeline tests run offline
- Small helpers for building lxml tables from inline HTML
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import lxml.html
import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

WIKI_639_1_URL = "https://en.wikipedia.org/wiki/List_of_ISO_639-1_codes"
WIKI_639_2_URL = "https://en.wikipedia.org/wiki/List_of_ISO_639-2_codes"
LOC_639_2_URL = "http://www.loc.gov/standards/iso639-2/php/code_list.php"

WIKI_639_1_HTML = """<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>List of ISO 639-1 codes</title></head>
<body>
<p><a href="/wiki/ISO_639">ISO 639</a> lists codes for languages.</p>
<table id="Table" class="wikitable sortable">
<thead>
<tr><th>ISO language name</th><th>Family</th><th>Name</th><th>Native name</th>
<th>639-1</th><th>639-2/T</th><th>639-2/B</th></tr>
</thead>
<tbody>
<tr><td>Tibetan</td><td>Sino-Tibetan</td><td><a href="/wiki/Standard_Tibetan">Tibetan</a></td>
<td>བོད་ཡིག</td><td>bo</td><td>bod</td><td>tib</td></tr>
<tr><td>English</td><td>Indo-European</td><td><a href="/wiki/English_language">English</a></td>
<td>English</td><td>en</td><td>eng</td><td>eng</td></tr>
<tr><td>Aragonese</td><td>Indo-European</td><td><a href="/wiki/Aragonese_language">Aragonese</a></td>
<td></td><td>an</td><td>arg</td><td>arg</td></tr>
</tbody>
</table>
</body></html>
"""

WIKI_639_2_HTML = """<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>List of ISO 639-2 codes</title></head>
<body>
<table class="infobox"><tr><td>Unrelated box above the contents</td></tr></table>
<div id="toc"><h2>Contents</h2><ul><li>A</li><li>B</li></ul></div>
<table class="wikitable sortable">
<tr><th>639-2</th><th>639-3</th><th>639-1</th><th>Language name(s)</th><th>Scope</th><th>Type</th></tr>
<tr><td>bod/tib*</td><td>bod</td><td>bo</td><td><a href="/wiki/Standard_Tibetan">Tibetan</a></td>
<td>Individual</td><td>Living</td></tr>
<tr><td>eng</td><td>eng</td><td>en</td><td><a href="/wiki/English_language">English</a></td>
<td>Individual</td><td>Living</td></tr>
<tr><td>spa</td><td>spa</td><td>es</td><td><a href="/wiki/Spanish_language">Spanish; Castilian</a></td>
<td>Individual</td><td>Living</td></tr>
<tr><td>zgh</td><td>zgh</td><td></td><td><a href="/wiki/Standard_Moroccan_Berber">Standard Moroccan Tamazight</a></td>
<td>Individual</td><td>Living</td></tr>
</table>
</body></html>
"""

LOC_639_2_HTML = """<html><head><title>ISO 639-2 Code List</title></head>
<body>
<table width="100%" border="1">
<tr><th>ISO 639-2 Code</th><th>ISO 639-1 Code</th><th>English name of Language</th>
<th>French name of Language</th><th>German name of Language</th></tr>
<tr><td>eng</td><td>en</td><td>English</td><td>anglais</td><td>Englisch</td></tr>
<tr><td>spa</td><td>es</td><td>Spanish; Castilian</td><td>espagnol; castillan</td><td>Spanisch</td></tr>
<tr><td>tib (B)<br>bod (T)</td><td>bo</td><td>Tibetan</td><td>tibétain</td><td>Tibetisch</td></tr>
<tr><td>zgh</td><td>&nbsp;</td><td>Standard Moroccan Tamazight</td><td>amazighe standard marocain</td><td></td></tr>
</table>
</body></html>
"""


PAGE_URLS = {
    "wiki_1": WIKI_639_1_URL,
    "wiki_2": WIKI_639_2_URL,
    "loc": LOC_639_2_URL,
}


def _page_bodies(overrides: dict[str, str]) -> dict[str, tuple[bytes, str]]:
    """Return ``{url: (body, content_type)}`` for the three sample pages."""
    html = {"wiki_1": WIKI_639_1_HTML, "wiki_2": WIKI_639_2_HTML, "loc": LOC_639_2_HTML, **overrides}
    return {
        WIKI_639_1_URL: (html["wiki_1"].encode("utf-8"), "text/html; charset=utf-8"),
        WIKI_639_2_URL: (html["wiki_2"].encode("utf-8"), "text/html; charset=utf-8"),
        # Served as Latin-1 without a declared charset, like the live page
        LOC_639_2_URL: (html["loc"].encode("iso-8859-1"), "text/html"),
    }


@pytest.fixture
def sample_html() -> dict[str, str]:
    """Sample page markup keyed by page name (``wiki_1``, ``wiki_2``, ``loc``)."""
    return {"wiki_1": WIKI_639_1_HTML, "wiki_2": WIKI_639_2_HTML, "loc": LOC_639_2_HTML}


@pytest.fixture
def page_transport() -> Callable[..., httpx.MockTransport]:
    """Factory for a mock transport serving the sample pages.

    Keyword arguments replace a page's markup by name; pages named in
    ``failing`` answer with HTTP 500.
    """

    def build(failing: tuple[str, ...] = (), **overrides: str) -> httpx.MockTransport:
        pages = _page_bodies(overrides)
        failing_urls = {PAGE_URLS[name] for name in failing}

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            if url in failing_urls:
                return httpx.Response(500, text="Internal Server Error")
            if url not in pages:
                return httpx.Response(404, text="Not Found")
            body, content_type = pages[url]
            return httpx.Response(200, content=body, headers={"content-type": content_type})

        return httpx.MockTransport(handler)

    return build


@pytest.fixture
def html_table() -> Callable[[str], lxml.html.HtmlElement]:
    """Factory parsing an inline ``<table>`` snippet into its element."""

    def build(markup: str) -> lxml.html.HtmlElement:
        document = lxml.html.document_fromstring(f"<html><body>{markup}</body></html>")
        return document.xpath("//table")[0]

    return build


@pytest.fixture
def html_cell() -> Callable[[str], lxml.html.HtmlElement]:
    """Factory parsing an inline ``<td>`` body into the cell element."""

    def build(inner: str) -> lxml.html.HtmlElement:
        document = lxml.html.document_fromstring(f"<html><body><table><tr><td>{inner}</td></tr></table></body></html>")
        return document.xpath("//td")[0]

    return build
