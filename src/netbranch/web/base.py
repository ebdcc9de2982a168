"""Abstract web session interface.

Link and form handling is done here against the current page with lxml;
subclasses only provide the transport.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlencode, urljoin

import lxml.html

from netbranch.domain.errors import (
    FetchError,
    FormNotFoundError,
    LinkNotFoundError,
    form_not_found,
    link_not_found,
)
from netbranch.utils.markup import parse_html

logger = logging.getLogger(__name__)


class WebSession(ABC):
    """Browser-like session: fetch pages, follow links, submit forms."""

    def __init__(self):
        self.url: Optional[str] = None
        self.content: Optional[str] = None

    @abstractmethod
    def _send(self, method: str, url: str, data: Optional[list[tuple[str, str]]] = None) -> tuple[str, str]:
        """Perform a request, following redirects.

        Returns:
            Tuple of (final URL, response text)

        Raises:
            FetchError: On network failure or a non-success status
        """
        pass

    def close(self) -> None:
        """Release transport resources."""
        pass

    def _load(self, method: str, url: str, data: Optional[list[tuple[str, str]]] = None) -> str:
        logger.debug("%s %s", method, url)
        self.url, self.content = self._send(method, url, data)
        return self.content

    def _document(self) -> lxml.html.HtmlElement:
        doc = parse_html(self.content, base_url=self.url)
        if doc is None:
            raise FetchError("No page has been loaded")
        return doc

    def get(self, url: str) -> str:
        """Fetch a URL and make it the current page."""
        return self._load("GET", url)

    def follow_link(self, text_regex: str) -> str:
        """Follow the first link whose visible text matches text_regex.

        Raises:
            LinkNotFoundError: If no link matches
        """
        pattern = re.compile(text_regex)
        for anchor in self._document().iterfind(".//a[@href]"):
            if pattern.search(anchor.text_content()):
                return self.get(urljoin(self.url, anchor.get("href").strip()))
        raise LinkNotFoundError(link_not_found(text_regex))

    def submit_form(
        self,
        fields: dict[str, str],
        form_name: Optional[str] = None,
        button: Optional[str] = None,
    ) -> str:
        """Fill in and submit a form on the current page.

        The form is selected by name, or else as the first form that has
        every field in ``fields``. ``button`` is the label of the submit
        control to press.

        Raises:
            FormNotFoundError: If the form, a field or the button is missing
        """
        form = self._find_form(fields, form_name)
        unknown = [name for name in fields if name not in form.inputs]
        if unknown:
            raise FormNotFoundError(f"Form has no field {', '.join(unknown)}")

        # Set values directly so select options are not validated
        values = [(name, value) for name, value in form.form_values() if name not in fields]
        values.extend((name, str(value)) for name, value in fields.items())
        if button is not None:
            values.extend(self._button_value(form, button))

        method = (form.method or "GET").upper()
        action = form.action or self.url
        if method == "GET":
            separator = "&" if "?" in action else "?"
            return self._load("GET", f"{action}{separator}{urlencode(values)}")
        return self._load("POST", action, values)

    def _find_form(self, fields: dict[str, str], form_name: Optional[str]) -> lxml.html.FormElement:
        for form in self._document().forms:
            if form_name is not None:
                if form.get("name") == form_name or form.get("id") == form_name:
                    return form
                continue
            if all(name in form.inputs for name in fields):
                return form
        raise FormNotFoundError(form_not_found(form_name, list(fields)))

    @staticmethod
    def _button_value(form: lxml.html.FormElement, label: str) -> list[tuple[str, str]]:
        for control in form.iter("input", "button"):
            kind = (control.get("type") or ("submit" if control.tag == "button" else "text")).lower()
            if kind not in ("submit", "image"):
                continue
            caption = control.get("value") if control.tag == "input" else control.text_content()
            if label in (control.get("name"), (caption or "").strip()):
                name = control.get("name")
                return [(name, control.get("value") or "")] if name else []
        raise FormNotFoundError(f"No button '{label}' in form")
