"""Table selectors: locate the target ``<table>`` inside a fetched page.

Selectors are named strategies built from the ``selector`` block of a source
in ``sources.json``:

* ``{"type": "by_id", "id": "Table"}``: the element with that id
* ``{"type": "following", "anchor_id": "toc", "tag": "table"}``: the first
  ``<table>`` after the element with id ``toc`` in document order
* ``{"type": "first", "tag": "table"}``: the first ``<table>`` in the page
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from iso639_tables.errors import MalformedTableError

if TYPE_CHECKING:
    from collections.abc import Callable

    from lxml.html import HtmlElement


def _first_match(document: HtmlElement, xpath: str, description: str, **variables: str) -> HtmlElement:
    matches = document.xpath(xpath, **variables)
    if not matches:
        msg = f"No table found for selector: {description}"
        raise MalformedTableError(msg)
    return matches[0]


def select_by_id(element_id: str) -> Callable[[HtmlElement], HtmlElement]:
    """Select the element whose ``id`` attribute equals ``element_id``."""

    def selector(document: HtmlElement) -> HtmlElement:
        return _first_match(document, "//*[@id=$element_id]", f"#{element_id}", element_id=element_id)

    return selector


def select_following(anchor_id: str, tag: str = "table") -> Callable[[HtmlElement], HtmlElement]:
    """Select the first ``tag`` element that follows the element ``#anchor_id``."""

    def selector(document: HtmlElement) -> HtmlElement:
        return _first_match(
            document,
            f"//*[@id=$anchor_id]/following::{tag}[1]",
            f"first {tag} after #{anchor_id}",
            anchor_id=anchor_id,
        )

    return selector


def select_first(tag: str = "table") -> Callable[[HtmlElement], HtmlElement]:
    """Select the first ``tag`` element in the document."""

    def selector(document: HtmlElement) -> HtmlElement:
        return _first_match(document, f"(//{tag})[1]", f"first {tag}")

    return selector


def build_selector(spec: dict[str, Any]) -> Callable[[HtmlElement], HtmlElement]:
    """Create a selector from its JSON description.

    Parameters
    ----------
    spec : dict[str, Any]
        Selector block with a ``type`` key and type-specific arguments.

    Returns
    -------
    Callable[[HtmlElement], HtmlElement]
        Function returning the target table of a document.

    Raises
    ------
    ValueError
        If ``type`` is unknown or a required argument is missing.
    """
    selector_type = spec.get("type")

    if selector_type == "by_id" and spec.get("id"):
        return select_by_id(spec["id"])
    if selector_type == "following" and spec.get("anchor_id"):
        return select_following(spec["anchor_id"], spec.get("tag", "table"))
    if selector_type == "first":
        return select_first(spec.get("tag", "table"))

    msg = f"Invalid table selector: {spec!r}"
    raise ValueError(msg)
