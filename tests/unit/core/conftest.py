"""Shared fixtures for core unit tests"""

import pytest


class NodeBuilder:
    """Terse constructors for TipTap JSON nodes."""

    @staticmethod
    def text(value: str, *marks: dict) -> dict:
        node = {"type": "text", "text": value}
        if marks:
            node["marks"] = list(marks)
        return node

    @staticmethod
    def paragraph(*children: dict, **attrs) -> dict:
        node = {"type": "paragraph", "content": list(children)}
        if attrs:
            node["attrs"] = attrs
        return node

    @staticmethod
    def doc(*children: dict) -> dict:
        return {"type": "doc", "content": list(children)}


@pytest.fixture(name="nodes")
def nodes_fixture():
    return NodeBuilder


@pytest.fixture(name="hello_doc")
def hello_doc_fixture(nodes):
    """Heading plus a bold paragraph."""
    return nodes.doc(
        {"type": "heading", "attrs": {"level": 1}, "content": [nodes.text("Hi")]},
        nodes.paragraph(nodes.text("World", {"type": "bold"})),
    )


@pytest.fixture(name="list_doc")
def list_doc_fixture(nodes):
    """Bullet list with two single-paragraph items."""
    return nodes.doc({
        "type": "bulletList",
        "content": [
            {"type": "listItem", "content": [nodes.paragraph(nodes.text("a"))]},
            {"type": "listItem", "content": [nodes.paragraph(nodes.text("b"))]},
        ],
    })
