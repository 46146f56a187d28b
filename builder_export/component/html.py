"""HTML fragment reader producing a ComponentInfo forest.

Used by the CLI (``--html``) and by scenario tests to build capture-shaped
input without a browser. Styles come only from inline ``style`` attributes;
no cascade is computed.
"""

from html import escape
from html.parser import HTMLParser
from typing import Any

from builder_export.component.lib import ComponentInfo

# Tags whose content never becomes a component
SKIP_TAGS = {
    "script",
    "style",
    "head",
    "title",
    "noscript",
    "template",
}

# Non-visual void tags dropped entirely
IGNORED_VOID_TAGS = {"meta", "link", "base"}

# Line-break tags kept in inner markup but not as components
BREAK_TAGS = {"br", "wbr"}

# Self-closing tags
VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}

# Abstract component types implied by the tag alone
TAG_COMPONENT_TYPES: dict[str, str] = {
    "hr": "divider",
    "audio": "audio",
    "pre": "code",
    "nav": "menu",
}

# Wrappers whose children are the real top-level components
DOCUMENT_TAGS = {"html", "body"}


def _render_starttag(tag: str, attrs: list[tuple[str, str | None]]) -> str:
    parts = [tag]
    for name, value in attrs:
        if value is None:
            parts.append(name)
        else:
            parts.append(f'{name}="{escape(value, quote=True)}"')
    return "<" + " ".join(parts) + ">"


class ComponentTreeBuilder(HTMLParser):
    """HTML parser that builds capture-shaped component dicts."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root: dict[str, Any] = {"tag": "root", "children": []}
        self.stack: list[dict[str, Any]] = [self.root]
        self.skip_depth = 0

    def _new_node(self, tag: str, attrs: list[tuple[str, str | None]]) -> dict:
        attrs_dict = {name: value or "" for name, value in attrs}
        return {
            "tag": tag,
            "attrs": attrs_dict,
            "children": [],
            "text": [],
            "inner": [],
        }

    def _emit(self, markup: str, text: str = "") -> None:
        """Append raw markup/text to every open node except the root."""
        for node in self.stack[1:]:
            node["inner"].append(markup)
            if text:
                node["text"].append(text)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.skip_depth:
            if tag in SKIP_TAGS:
                self.skip_depth += 1
            return
        if tag in SKIP_TAGS:
            self.skip_depth = 1
            return
        if tag in IGNORED_VOID_TAGS:
            return
        if tag in BREAK_TAGS:
            self._emit(f"<{tag}>", " ")
            return
        if tag in DOCUMENT_TAGS:
            return

        markup = _render_starttag(tag, attrs)
        self._emit(markup)

        node = self._new_node(tag, attrs)
        self.stack[-1]["children"].append(node)
        if tag not in VOID_TAGS:
            self.stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)
        if tag not in VOID_TAGS and not self.skip_depth and tag in self._open_tags():
            self.handle_endtag(tag)

    def handle_endtag(self, tag: str) -> None:
        if self.skip_depth:
            if tag in SKIP_TAGS:
                self.skip_depth -= 1
            return
        if tag in VOID_TAGS or tag in DOCUMENT_TAGS:
            return
        if tag not in self._open_tags():
            return

        # Close implicitly-open descendants up to the matching tag
        while len(self.stack) > 1:
            node = self.stack.pop()
            for ancestor in self.stack[1:]:
                ancestor["inner"].append(f"</{node['tag']}>")
            if node["tag"] == tag:
                break

    def handle_data(self, data: str) -> None:
        if self.skip_depth:
            return
        self._emit(escape(data, quote=False), data)

    def _open_tags(self) -> list[str]:
        return [node["tag"] for node in self.stack[1:]]


def _to_component(node: dict[str, Any]) -> ComponentInfo:
    attrs = dict(node["attrs"])
    element_id = attrs.pop("id", None) or None
    class_name = attrs.pop("class", None) or None
    raw: dict[str, Any] = {
        "tagName": node["tag"],
        "id": element_id,
        "className": class_name,
        "attributes": attrs,
        "textContent": " ".join("".join(node["text"]).split()),
        "innerHTML": "".join(node["inner"]).strip(),
        "componentType": TAG_COMPONENT_TYPES.get(node["tag"]),
        "children": [_to_component(child) for child in node["children"]],
    }
    return ComponentInfo.model_validate(raw)


def parse_html_components(html: str) -> list[ComponentInfo]:
    """Parse an HTML fragment or document into a ComponentInfo forest.

    ``<html>``/``<body>`` wrappers are transparent; script, style and head
    content is dropped. Inline ``style`` attributes populate each
    component's style map.

    Args:
        html: HTML string to parse.

    Returns:
        Top-level components in document order.

    Example:
        >>> [c.tag for c in parse_html_components("<p>Hello</p><hr>")]
        ['p', 'hr']
    """
    parser = ComponentTreeBuilder()
    parser.feed(html)
    parser.close()
    return [_to_component(node) for node in parser.root["children"]]


__all__ = [
    "ComponentTreeBuilder",
    "TAG_COMPONENT_TYPES",
    "parse_html_components",
]
