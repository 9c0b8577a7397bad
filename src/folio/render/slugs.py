"""Anchor slugs for rendered headings.

Headings are transliterated to ASCII first (``text-unidecode``), so Cyrillic
or CJK titles still get usable anchors, then slugged with the
MkDocs/Python-Markdown conventions of ``pymdownx.slugs``. Two rules are
added: ``&`` reads as "and", and runs of separators collapse into a single
hyphen. Identical headings produce identical slugs; no numeric suffix is
added.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from pymdownx.slugs import slugify as _md_slugify
from text_unidecode import unidecode

_slugify_lower = _md_slugify(case="lower", separator="-", normalize="NFKD")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def extract_text(node: Any) -> str:
    """Flatten nested content into plain text.

    Accepts strings, numbers, iterables and markdown-it tokens (anything with
    ``children`` or ``content``). ``None`` and ``False`` contribute nothing.

    >>> extract_text(["Models ", ["&", " Metrics"]])
    'Models & Metrics'
    """
    if node is None or node is False:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, (int, float)):
        return str(node)
    children = getattr(node, "children", None)
    if children:
        return extract_text(children)
    content = getattr(node, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(node, Iterable):
        return "".join(extract_text(child) for child in node)
    return str(node)


def heading_slug(text: Any) -> str:
    """Return the anchor id for a heading.

    >>> heading_slug("Models & Metrics")
    'models-and-metrics'
    >>> heading_slug("Café Résumé")
    'cafe-resume'
    >>> heading_slug("Привет мир")
    'privet-mir'
    """
    raw = unidecode(extract_text(text).replace("&", " and "))
    slug = _slugify_lower(raw, sep="-").lower()
    return _NON_ALNUM.sub("-", slug).strip("-")
