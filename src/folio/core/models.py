"""Rich document (TipTap JSON) model and the read models served to clients"""

import datetime as dt
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """Node tags the renderer knows; anything else is skipped."""
    doc             = "doc"
    paragraph       = "paragraph"
    heading         = "heading"
    bullet_list     = "bulletList"
    ordered_list    = "orderedList"
    list_item       = "listItem"
    image           = "image"
    text            = "text"
    blockquote      = "blockquote"
    code_block      = "codeBlock"
    hard_break      = "hardBreak"
    horizontal_rule = "horizontalRule"


class MarkType(str, Enum):
    """Inline marks that may decorate a text leaf."""
    bold      = "bold"
    italic    = "italic"
    link      = "link"
    code      = "code"
    strike    = "strike"
    underline = "underline"


class RichDocument(BaseModel):
    """Root of a TipTap JSON tree.

    Only the root `type` is checked; children and any extra keys pass through
    untouched so documents written by newer editor versions still load.
    """
    model_config = ConfigDict(extra="allow")

    type:    str
    content: Optional[list[Any]] = None


def empty_document() -> dict[str, Any]:
    """The placeholder document used before any content is written."""
    return {"type": NodeType.doc.value, "content": []}


def is_empty_document(doc: Any) -> bool:
    """True when doc has no child nodes and no text of its own."""
    if isinstance(doc, BaseModel):
        doc = doc.model_dump(exclude_none=True)
    if not isinstance(doc, Mapping):
        return True
    return not doc.get("content") and not doc.get("text")


class BlogSummary(BaseModel):
    """Blog list projection: metadata only, never the document body."""
    model_config = ConfigDict(from_attributes=True)

    id:         UUID
    title:      str
    slug:       str
    excerpt:    Optional[str] = None
    tags:       list[str] = Field(default_factory=list)
    published:  bool
    created_at: datetime
    updated_at: datetime


class BlogRead(BlogSummary):
    """Single blog post with its stored document and rendered HTML."""
    content:      dict[str, Any]
    content_html: str = ""


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:               UUID
    title:            str
    description:      dict[str, Any]
    description_html: str = ""
    description_text: str = ""
    image:            Optional[str] = None
    github:           Optional[str] = None
    tags:             list[str] = Field(default_factory=list)
    date:             dt.date
    created_at:       datetime
    updated_at:       datetime
