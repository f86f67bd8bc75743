# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""HTML allow-list policies built on BeautifulSoup.

Two presets back the default sanitizer:

* ``strict`` – strips every element, keeping only (escaped) text content.
* ``ugc``    – keeps a conservative set of formatting elements suitable for
  user generated content, with link/image attributes restricted to safe URL
  schemes and ``rel="nofollow"`` forced on links.

Elements in :data:`DROP_WITH_CONTENT` are always removed together with their
contents; any other element that is not allowed is unwrapped so its text
survives.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable, Mapping, Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Comment

DROP_WITH_CONTENT = frozenset(
    {
        "script",
        "style",
        "iframe",
        "object",
        "embed",
        "applet",
        "frame",
        "frameset",
        "noscript",
        "template",
    }
)

URL_ATTRIBUTES = frozenset({"href", "src", "cite", "action", "formaction", "background"})

DEFAULT_URL_SCHEMES = frozenset({"http", "https", "mailto"})

UGC_ELEMENTS = frozenset(
    {
        "a", "abbr", "acronym", "b", "blockquote", "br", "caption", "cite", "code",
        "dd", "del", "dfn", "div", "dl", "dt", "em", "h1", "h2", "h3", "h4", "h5",
        "h6", "hr", "i", "img", "ins", "kbd", "li", "mark", "ol", "p", "pre", "q",
        "s", "samp", "small", "span", "strike", "strong", "sub", "sup", "table",
        "tbody", "td", "tfoot", "th", "thead", "tr", "u", "ul", "var",
    }
)

UGC_ATTRIBUTES: Mapping[str, AbstractSet[str]] = {
    "*": frozenset({"title", "dir", "lang"}),
    "a": frozenset({"href"}),
    "img": frozenset({"src", "alt", "width", "height"}),
    "blockquote": frozenset({"cite"}),
    "q": frozenset({"cite"}),
    "td": frozenset({"colspan", "rowspan"}),
    "th": frozenset({"colspan", "rowspan", "scope"}),
}


class AllowListPolicy:
    """Sanitize HTML by keeping only allow-listed elements and attributes.

    Args:
        elements: Element names kept in the output. Empty means text only.
        attributes: Mapping of element name (or ``"*"`` for all elements) to
            the attribute names kept on it.
        url_schemes: Schemes accepted in URL-valued attributes. Relative URLs
            are always accepted.
        require_nofollow: Force ``rel="nofollow"`` on every kept link.
        parser: BeautifulSoup parser name.

    Example:
        ```python
        italics = AllowListPolicy(elements={"i"})
        italics.sanitize("<b>Get</b> <i>schwifty</i>")  # "Get <i>schwifty</i>"
        ```
    """

    def __init__(
        self,
        elements: Iterable[str] = (),
        attributes: Optional[Mapping[str, Iterable[str]]] = None,
        *,
        url_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
        require_nofollow: bool = False,
        parser: str = "html.parser",
    ):
        self._elements = frozenset(e.lower() for e in elements)
        self._attributes = {
            name.lower(): frozenset(a.lower() for a in attrs)
            for name, attrs in (attributes or {}).items()
        }
        self._url_schemes = frozenset(s.lower() for s in url_schemes)
        self._require_nofollow = require_nofollow
        self._parser = parser

    @property
    def elements(self) -> AbstractSet[str]:
        return self._elements

    def sanitize(self, text: str) -> str:
        if not text:
            return text

        soup = BeautifulSoup(text, self._parser)

        for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
            comment.extract()

        for tag in soup.find_all(sorted(DROP_WITH_CONTENT)):
            if not tag.decomposed:
                tag.decompose()

        for tag in soup.find_all(True):
            if tag.name not in self._elements:
                tag.unwrap()
                continue
            tag.attrs = self._allowed_attributes(tag.name, tag.attrs)
            if self._require_nofollow and tag.name == "a" and "href" in tag.attrs:
                tag["rel"] = "nofollow"

        return soup.decode(formatter="minimal")

    def _allowed_attributes(self, element: str, attrs: Mapping[str, object]) -> dict:
        allowed = self._attributes.get(element, frozenset()) | self._attributes.get("*", frozenset())
        kept = {}
        for name, value in attrs.items():
            if name not in allowed:
                continue
            if name in URL_ATTRIBUTES and not self._is_safe_url(value):
                continue
            kept[name] = value
        return kept

    def _is_safe_url(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        # Control characters and whitespace never count towards the scheme.
        cleaned = "".join(ch for ch in value if ch.isprintable() and not ch.isspace())
        try:
            scheme = urlsplit(cleaned).scheme
        except ValueError:
            return False
        if not scheme:
            return True
        return scheme.lower() in self._url_schemes

    def __repr__(self) -> str:
        return f"AllowListPolicy(elements={sorted(self._elements)!r})"


def strict_policy() -> AllowListPolicy:
    """Return a policy that removes all markup and keeps escaped text."""
    return AllowListPolicy()


def ugc_policy() -> AllowListPolicy:
    """Return a policy suitable for user generated content."""
    return AllowListPolicy(
        elements=UGC_ELEMENTS,
        attributes=UGC_ATTRIBUTES,
        require_nofollow=True,
    )


__all__ = [
    "AllowListPolicy",
    "DROP_WITH_CONTENT",
    "UGC_ELEMENTS",
    "UGC_ATTRIBUTES",
    "strict_policy",
    "ugc_policy",
]
