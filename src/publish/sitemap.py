# src/publish/sitemap.py — v1
"""sitemap.xml generation from a remote listing.

Only pages of the current documentation are listed: versioned trees
(``docs/0.10/...``) and the preview tree (``docs/next/...``) are skipped.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from xml.sax.saxutils import escape

from docship.publish.base_object_store import StoredObject

SITEMAP_KEY = "sitemap.xml"

_PAGE_RE = re.compile(r"^docs/(?!\d|next/).*index\.html$")


def is_main_page(key: str) -> bool:
    return bool(_PAGE_RE.match(key))


def build_sitemap(objects: Iterable[StoredObject], site_url: str) -> str:
    """Render a sitemaps.org urlset for the main documentation pages."""
    base = site_url.rstrip("/")
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for obj in sorted(objects, key=lambda o: o.key):
        if not is_main_page(obj.key):
            continue
        lastmod = obj.last_modified[:10]
        entry = f"<url><loc>{escape(f'{base}/{obj.key}')}</loc>"
        if lastmod:
            entry += f"<lastmod>{escape(lastmod)}</lastmod>"
        lines.append(entry + "</url>")
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"
