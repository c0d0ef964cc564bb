"""Slug generation for blog post identifiers"""

import re
import unicodedata


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated ASCII slug ("Hello, World!" -> "hello-world")."""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return text.strip("-")
