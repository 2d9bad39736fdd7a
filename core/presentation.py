"""
core/presentation.py -- Output sanitizer for user-supplied free text.

Every display field (thing titles and content, review text, user names) goes
through sanitize() before it is serialized into a response. The rules follow
an allow-list:

  - Tags in _ALLOWED_TAGS are kept, with only their allow-listed attributes.
    Event handlers (onerror=, onclick=, ...) are never on the list.
  - href/src values must use a safe scheme; javascript: URLs are dropped.
  - Every other tag is HTML-escaped so it renders as inert text, e.g.
    <script> becomes &lt;script&gt;.
  - Comments and declarations are removed.

Uses the standard-library html.parser tokenizer. convert_charrefs is off, and
entity and character references are copied from the source text exactly as
written, so "AT&T" and "&amp;" both come back unchanged.

Layer rule: core/ is the kernel. No imports from api/, auth/, or things/.
"""

from __future__ import annotations

import html
import re
from html.parser import HTMLParser
from typing import Optional

_ALLOWED_TAGS: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title", "target"}),
    "b": frozenset(),
    "blockquote": frozenset(),
    "br": frozenset(),
    "code": frozenset(),
    "em": frozenset(),
    "i": frozenset(),
    "img": frozenset({"src", "alt", "title", "width", "height"}),
    "li": frozenset(),
    "ol": frozenset(),
    "p": frozenset(),
    "pre": frozenset(),
    "strong": frozenset(),
    "u": frozenset(),
    "ul": frozenset(),
}

_URL_ATTRS = frozenset({"href", "src"})
_SAFE_URL_PREFIXES = ("http://", "https://", "mailto:", "/", "#")

# html.parser drops the "&" of a two-character "&X" left at the end of input.
_DANGLING_REF = re.compile(r"&[a-zA-Z]\Z")


def _safe_url(value: str) -> bool:
    # Browsers ignore embedded whitespace/control chars in schemes ("java\tscript:").
    compact = "".join(ch for ch in value if ch.isprintable() and not ch.isspace()).lower()
    return compact.startswith(_SAFE_URL_PREFIXES)


class _Sanitizer(HTMLParser):
    def __init__(self, text: str) -> None:
        super().__init__(convert_charrefs=False)
        self._out: list[str] = []
        self._text = text
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(text) if ch == "\n"]

    def result(self) -> str:
        return "".join(self._out)

    def _render(self, tag: str, attrs: list[tuple[str, Optional[str]]], self_closing: bool) -> str:
        allowed = _ALLOWED_TAGS.get(tag)
        if allowed is None:
            return html.escape(self.get_starttag_text() or "", quote=False)
        parts = [tag]
        for name, value in attrs:
            if name not in allowed:
                continue
            if value is None:
                parts.append(name)
                continue
            if name in _URL_ATTRS and not _safe_url(value):
                continue
            parts.append(f'{name}="{html.escape(value, quote=True)}"')
        end = " />" if self_closing else ">"
        return "<" + " ".join(parts) + end

    def handle_starttag(self, tag, attrs):
        self._out.append(self._render(tag, attrs, self_closing=False))

    def handle_startendtag(self, tag, attrs):
        self._out.append(self._render(tag, attrs, self_closing=True))

    def handle_endtag(self, tag):
        if tag in _ALLOWED_TAGS:
            self._out.append(f"</{tag}>")
        else:
            self._out.append(html.escape(f"</{tag}>", quote=False))

    def handle_data(self, data):
        self._out.append(data.replace("<", "&lt;").replace(">", "&gt;"))

    def _as_written(self, ref: str) -> str:
        # getpos() still points at the "&" while a reference handler runs.
        lineno, offset = self.getpos()
        start = self._line_starts[lineno - 1] + offset
        if self._text.startswith(ref + ";", start):
            return ref + ";"
        return ref

    def handle_entityref(self, name):
        self._out.append(self._as_written(f"&{name}"))

    def handle_charref(self, name):
        self._out.append(self._as_written(f"&#{name}"))

    # Comments, doctypes and processing instructions are dropped.
    def handle_comment(self, data):
        pass

    def handle_decl(self, decl):
        pass

    def handle_pi(self, data):
        pass

    def unknown_decl(self, data):
        pass


def sanitize(text: Optional[str]) -> str:
    """Strip active markup from a display field.

    None becomes "" so optional fields (e.g. nickname) serialize as an empty
    string rather than null.
    """
    if text is None:
        return ""
    text = str(text)
    dangling = _DANGLING_REF.search(text)
    body = text[: dangling.start()] if dangling else text
    parser = _Sanitizer(body)
    parser.feed(body)
    parser.close()
    return parser.result() + (dangling.group() if dangling else "")
