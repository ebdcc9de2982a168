"""HTML parsing helpers."""

import re
from typing import Optional

import lxml.html

# lxml refuses str input that carries an encoding declaration
XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def parse_html(content: str, base_url: Optional[str] = None) -> Optional[lxml.html.HtmlElement]:
    """Parse page text with lxml, returning None for an empty page."""
    if not content:
        return None
    content = XML_DECLARATION.sub("", content, count=1)
    if not content.strip():
        return None
    return lxml.html.fromstring(content, base_url=base_url)
