"""Rich document (TipTap JSON) to HTML rendering.

Each node type maps to a small handler in NODE_RENDERERS and each mark type to a
wrapper in MARK_RENDERERS. Types missing from either registry are skipped, so
documents written by a newer editor still render whatever this module knows.
Malformed input never raises: the public entry point logs and returns "".
"""

import json
import logging
from html import escape
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel

from folio.core.models import MarkType, NodeType


logger = logging.getLogger(__name__)

HEADING_LEVELS = (1, 2, 3)
TEXT_ALIGNMENTS = {"center", "right", "justify"}
SAFE_URL_SCHEMES = {"", "http", "https", "mailto"}


def _attrs(item: Mapping) -> Mapping:
    attrs = item.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _html_attrs(pairs: Mapping[str, Any]) -> str:
    """Serialize attribute pairs, dropping None values."""
    return "".join(
        f' {name}="{escape(str(value), quote=True)}"'
        for name, value in pairs.items()
        if value is not None
    )


def _safe_url(url: Any) -> Optional[str]:
    """Return url when it is a relative or http(s)/mailto URL, else None."""
    if not isinstance(url, str) or not url.strip():
        return None
    url = url.strip()
    try:
        scheme = urlsplit(url).scheme.lower()
    except ValueError:
        return None
    return url if scheme in SAFE_URL_SCHEMES else None


def _align_style(node: Mapping) -> Optional[str]:
    align = _attrs(node).get("textAlign")
    return f"text-align: {align}" if isinstance(align, str) and align in TEXT_ALIGNMENTS else None


def _children(node: Mapping) -> str:
    content = node.get("content")
    if not isinstance(content, list):
        return ""
    return "".join(_render_node(child) for child in content)


def _wrap(tag: str, node: Mapping, **attrs) -> str:
    return f"<{tag}{_html_attrs(attrs)}>{_children(node)}</{tag}>"


def _heading(node: Mapping) -> str:
    level = _attrs(node).get("level")
    if not isinstance(level, int) or isinstance(level, bool) or level not in HEADING_LEVELS:
        level = HEADING_LEVELS[0]
    return _wrap(f"h{level}", node, style=_align_style(node))


def _ordered_list(node: Mapping) -> str:
    start = _attrs(node).get("start")
    if isinstance(start, bool) or not isinstance(start, int) or start == 1:
        start = None
    return _wrap("ol", node, start=start)


def _image(node: Mapping) -> str:
    attrs = _attrs(node)
    src = _safe_url(attrs.get("src"))
    if src is None:
        return ""
    return f"<img{_html_attrs({'src': src, 'alt': attrs.get('alt'), 'title': attrs.get('title')})}>"


def _code_block(node: Mapping) -> str:
    language = _attrs(node).get("language")
    css = f"language-{language}" if isinstance(language, str) and language else None
    return f"<pre><code{_html_attrs({'class': css})}>{_children(node)}</code></pre>"


def _text(node: Mapping) -> str:
    text = node.get("text")
    if not isinstance(text, str):
        return ""
    html = escape(text, quote=False)
    marks = node.get("marks")
    if isinstance(marks, list):
        # first mark is the outermost element
        for mark in reversed(marks):
            html = _apply_mark(mark, html)
    return html


def _link(mark: Mapping, inner: str) -> str:
    href = _safe_url(_attrs(mark).get("href"))
    if href is None:
        return inner
    return f"<a{_html_attrs({'href': href})}>{inner}</a>"


def _tag_mark(tag: str) -> Callable[[Mapping, str], str]:
    return lambda mark, inner: f"<{tag}>{inner}</{tag}>"


MARK_RENDERERS: dict[str, Callable[[Mapping, str], str]] = {
    MarkType.bold.value:      _tag_mark("strong"),
    MarkType.italic.value:    _tag_mark("em"),
    MarkType.code.value:      _tag_mark("code"),
    MarkType.strike.value:    _tag_mark("s"),
    MarkType.underline.value: _tag_mark("u"),
    MarkType.link.value:      _link,
}


def _apply_mark(mark: Any, inner: str) -> str:
    if not isinstance(mark, Mapping) or not isinstance(mark.get("type"), str):
        return inner
    wrapper = MARK_RENDERERS.get(mark["type"])
    return wrapper(mark, inner) if wrapper else inner


NODE_RENDERERS: dict[str, Callable[[Mapping], str]] = {
    NodeType.doc.value:             _children,
    NodeType.paragraph.value:       lambda n: _wrap("p", n, style=_align_style(n)),
    NodeType.heading.value:         _heading,
    NodeType.bullet_list.value:     lambda n: _wrap("ul", n),
    NodeType.ordered_list.value:    _ordered_list,
    NodeType.list_item.value:       lambda n: _wrap("li", n),
    NodeType.blockquote.value:      lambda n: _wrap("blockquote", n),
    NodeType.code_block.value:      _code_block,
    NodeType.image.value:           _image,
    NodeType.text.value:            _text,
    NodeType.hard_break.value:      lambda n: "<br>",
    NodeType.horizontal_rule.value: lambda n: "<hr>",
}


def _render_node(node: Any) -> str:
    if not isinstance(node, Mapping) or not isinstance(node.get("type"), str):
        return ""
    handler = NODE_RENDERERS.get(node["type"])
    return handler(node) if handler else ""


def _dump(doc: Any) -> str:
    try:
        return json.dumps(doc, indent=2, default=str)
    except (TypeError, ValueError, RecursionError):
        return f"<unserializable {type(doc).__name__}>"


def render_html(doc: Any) -> str:
    """Render a TipTap JSON document to an HTML string.

    Returns "" for None, non-objects, objects without a `type`, and any
    document whose traversal fails; failures are logged with the content.
    """
    if isinstance(doc, BaseModel):
        doc = doc.model_dump(exclude_none=True)
    if not isinstance(doc, Mapping) or "type" not in doc:
        return ""
    try:
        return _render_node(doc)
    except Exception:
        logger.exception("Error generating HTML from rich document")
        logger.error("Content: %s", _dump(doc))
        return ""
