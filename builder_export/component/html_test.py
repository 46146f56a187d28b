"""Tests for the HTML fragment reader."""

import pytest

from builder_export.component.html import parse_html_components


class TestParseHtmlComponents:
    """Tests for parse_html_components."""

    @pytest.mark.unit
    def test_simple_paragraph(self):
        """A bare paragraph becomes one leaf component."""
        (p,) = parse_html_components("<p>Hello</p>")
        assert p.tag == "p"
        assert p.text_content == "Hello"
        assert p.inner_html == "Hello"
        assert p.children == []

    @pytest.mark.unit
    def test_nested_structure(self):
        """Nesting, classes and ids are preserved."""
        html = (
            '<section id="top" class="hero"><div class="row">'
            '<div class="col-6">A</div><div class="col-6">B</div>'
            "</div></section>"
        )
        (section,) = parse_html_components(html)
        assert section.id == "top"
        assert section.class_name == "hero"
        (row,) = section.children
        assert [c.text_content for c in row.children] == ["A", "B"]
        assert row.children[0].class_list == ["col-6"]

    @pytest.mark.unit
    def test_text_content_includes_descendants(self):
        """Text content spans descendants; inner markup is rebuilt."""
        (p,) = parse_html_components("<p>Hello <strong>world</strong></p>")
        assert p.text_content == "Hello world"
        assert p.inner_html == "Hello <strong>world</strong>"
        assert p.children[0].tag == "strong"

    @pytest.mark.unit
    def test_inline_style_parsed(self):
        """Inline styles populate the style map."""
        (div,) = parse_html_components('<div style="background-color: #fff">x</div>')
        assert div.styles == {"backgroundColor": "#fff"}
        assert div.attributes["style"] == "background-color: #fff"

    @pytest.mark.unit
    def test_script_and_style_skipped(self):
        """Script and style content never becomes components or text."""
        html = "<div><script>var x = 1;</script><style>p{}</style><p>Kept</p></div>"
        (div,) = parse_html_components(html)
        assert [c.tag for c in div.children] == ["p"]
        assert div.text_content == "Kept"

    @pytest.mark.unit
    def test_document_wrappers_transparent(self):
        """html/head/body wrappers are not components."""
        html = "<html><head><title>T</title></head><body><p>A</p><p>B</p></body></html>"
        assert [c.text_content for c in parse_html_components(html)] == ["A", "B"]

    @pytest.mark.unit
    def test_void_tags(self):
        """Void tags become leaves; br stays in markup only."""
        (div,) = parse_html_components('<div><img src="a.png" alt="A">one<br>two</div>')
        assert [c.tag for c in div.children] == ["img"]
        assert div.children[0].attributes == {"src": "a.png", "alt": "A"}
        assert "<br>" in div.inner_html

    @pytest.mark.unit
    def test_tag_component_types(self):
        """Tags with an implied component type carry it."""
        hr, nav, p = parse_html_components("<hr><nav>Menu</nav><p>x</p>")
        assert hr.component_type == "divider"
        assert nav.component_type == "menu"
        assert p.component_type is None

    @pytest.mark.unit
    def test_unclosed_inner_tag(self):
        """Closing an outer tag closes any unclosed inner tags."""
        (div,) = parse_html_components("<div><span>open</div><p>after</p>")[:1]
        assert div.children[0].tag == "span"
        assert div.inner_html == "<span>open</span>"
