"""Plain-text extraction from rich documents for previews and search"""

import logging
from typing import Any, Mapping

from pydantic import BaseModel


logger = logging.getLogger(__name__)

ELLIPSIS = "…"


def _text_of(node: Any) -> str:
    """Depth-first: a leaf yields its text, a container joins its children with a space."""
    if not isinstance(node, Mapping):
        return ""
    text = node.get("text")
    if isinstance(text, str) and text:
        return text
    content = node.get("content")
    if isinstance(content, list):
        return " ".join(part for part in map(_text_of, content) if part)
    return ""


def extract_text(doc: Any) -> str:
    """Flatten a TipTap JSON document to plain text.

    Strings stored before rich content existed are returned unchanged; any other
    value without a `type` yields "". The result is raw text, not HTML-escaped.
    """
    if isinstance(doc, BaseModel):
        doc = doc.model_dump(exclude_none=True)
    if not isinstance(doc, Mapping) or "type" not in doc:
        return doc if isinstance(doc, str) else ""
    try:
        return _text_of(doc).strip()
    except Exception:
        logger.exception("Error extracting text from rich document")
        return ""


def preview(doc: Any, limit: int = 160) -> str:
    """Extracted text; beyond limit characters it is cut on a word boundary and ends in an ellipsis."""
    text = " ".join(extract_text(doc).split())
    if len(text) <= limit:
        return text
    cut = text[:limit].rsplit(" ", 1)[0] if " " in text[:limit] else text[:limit]
    return cut.rstrip(" ,.;:") + ELLIPSIS
