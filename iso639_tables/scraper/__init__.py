"""Scraper module for fetching source pages.

Primary helpers:
- fetch_documents: Fetch all configured sources concurrently (shared httpx client)
- fetch_and_parse: Fetch a single page into an lxml document
- parse_document: Parse already-downloaded bytes (used by tests and offline runs)
"""

from iso639_tables.scraper.downloader import fetch_and_parse, fetch_documents, parse_document

__all__ = [
    "fetch_and_parse",
    "fetch_documents",
    "parse_document",
]
