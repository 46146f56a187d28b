"""Unit tests for the structural segmenter."""

from fractions import Fraction

import pytest

from builder_export.component import ComponentInfo, parse_html_components
from builder_export.segment.lib import (
    collect_content,
    column_fraction,
    count_content_units,
    is_content,
    matches_keyword,
    row_structure,
    segment,
)


class TestClassification:
    """Tests for class-token classification."""

    @pytest.mark.unit
    def test_keyword_parts(self):
        """Keywords match whole tokens or their separated parts."""
        assert matches_keyword("col-md-6", {"col"})
        assert matches_keyword("hero_banner", {"banner"})
        assert matches_keyword("ROW", {"row"})
        assert not matches_keyword("collapse", {"col"})
        assert not matches_keyword("arrow", {"row"})

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "class_name,expected",
        [
            ("col-3", Fraction(1, 4)),
            ("col-4", Fraction(1, 3)),
            ("col-6", Fraction(1, 2)),
            ("col-lg-8", Fraction(2, 3)),
            ("col-9", Fraction(3, 4)),
            ("col-5", Fraction(1)),
            ("column", Fraction(1)),
        ],
    )
    def test_column_fraction(self, class_name, expected):
        """Grid spans map through the fixed width table."""
        assert column_fraction(ComponentInfo(class_name=class_name)) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "count,expected",
        [
            (1, "1"),
            (2, "1/2,1/2"),
            (3, "1/3,1/3,1/3"),
            (4, "1/4,1/4,1/4,1/4"),
            (5, "1"),
            (0, "1"),
        ],
    )
    def test_row_structure_from_count(self, count, expected):
        """Row structure depends on the column count alone."""
        assert ",".join(str(f) for f in row_structure(count)) == expected

    @pytest.mark.unit
    def test_is_content(self):
        """Leaves, content tags and composite hints are content."""
        (wrapper,) = parse_html_components(
            '<div><p>a <b>b</b></p><div class="blurb"><h4>t</h4></div><div><span>x</span></div></div>'
        )
        p, blurb, plain = wrapper.children
        assert is_content(p)
        assert is_content(blurb)
        assert not is_content(plain)
        assert is_content(plain.children[0])
        assert not is_content(wrapper)

    @pytest.mark.unit
    def test_structural_component_type(self):
        """A layout component type does not make a node content."""
        node = ComponentInfo.model_validate(
            {"componentType": "container", "children": [{"tagName": "p"}]}
        )
        assert not is_content(node)

    @pytest.mark.unit
    def test_layout_classes_win(self):
        """A column with a composite hint is still a column."""
        (column,) = parse_html_components('<div class="col-6 blurb"><h4>t</h4><p>u</p></div>')
        assert not is_content(column)
        assert [c.tag for c in collect_content([column])] == ["h4", "p"]

    @pytest.mark.unit
    def test_empty_layout_nodes(self):
        """Empty layout nodes are never content; ones with own text are."""
        empty, texted, plain = parse_html_components(
            '<div class="col-6"></div><div class="col-6">A</div><div></div>'
        )
        assert not is_content(empty)
        assert is_content(texted)
        assert is_content(plain)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "html,expected",
        [
            ("<p>Hi <b>x</b> and <i>y</i></p><ul><li>a</li><li>b</li></ul>", 2),
            ('<div class="hero"></div><div><span>a</span><em>b</em></div>', 2),
            ('<div class="row"><div class="col-6"></div><div class="col-6">A</div></div>', 1),
            ("<section><div><div><h2>A</h2></div></div></section>", 1),
            ("", 0),
        ],
    )
    def test_count_content_units(self, html, expected):
        """Inline markup stays inside its unit; wrappers count nothing."""
        assert count_content_units(parse_html_components(html)) == expected

    @pytest.mark.unit
    def test_collect_content_flattens_wrappers(self):
        """Wrappers are consumed; content components keep source order."""
        forest = parse_html_components(
            "<div><div><h2>A</h2></div><p>B</p></div><img src='c.png'>"
        )
        assert [c.tag for c in collect_content(forest)] == ["h2", "p", "img"]


class TestSegment:
    """Tests for segment."""

    @pytest.mark.unit
    def test_hero_two_columns(self, hero_section_html):
        """A section with a two-column row keeps its structure."""
        (section,) = segment(parse_html_components(hero_section_html))
        assert not section.synthesized
        (row,) = section.rows
        assert not row.synthesized
        assert row.structure == (Fraction(1, 2), Fraction(1, 2))
        assert [c.fraction for c in row.columns] == [Fraction(1, 2)] * 2
        assert [[m.text_content for m in c.components] for c in row.columns] == [["A"], ["B"]]

    @pytest.mark.unit
    def test_bare_paragraph(self):
        """A bare paragraph gets synthesized section, row and column."""
        (section,) = segment(parse_html_components("<p>Hello</p>"))
        assert section.synthesized
        (row,) = section.rows
        assert row.synthesized
        (column,) = row.columns
        assert column.synthesized
        assert column.fraction == 1
        assert [c.text_content for c in column.components] == ["Hello"]

    @pytest.mark.unit
    def test_siblings_join_open_section(self):
        """Non-section siblings join the open section, implicit or explicit."""
        sections = segment(
            parse_html_components(
                "<p>intro</p><h2>more</h2><section><p>s</p></section><p>tail</p>"
            )
        )
        assert [s.synthesized for s in sections] == [True, False]
        assert len(sections[0].rows) == 2
        assert len(sections[1].rows) == 2
        assert sections[1].rows[1].columns[0].components[0].text_content == "tail"

    @pytest.mark.unit
    def test_orphans_get_own_rows(self):
        """Each orphan in a section is wrapped in its own row and column."""
        (section,) = segment(
            parse_html_components('<section class="banner"><h1>T</h1><p>S</p></section>')
        )
        assert len(section.rows) == 2
        assert all(row.synthesized and len(row.columns) == 1 for row in section.rows)

    @pytest.mark.unit
    def test_row_without_candidates(self):
        """A row without column candidates gets one synthesized column."""
        (section,) = segment(
            parse_html_components('<section><div class="row"><p>a</p><p>b</p></div></section>')
        )
        (row,) = section.rows
        (column,) = row.columns
        assert column.synthesized
        assert [c.text_content for c in column.components] == ["a", "b"]

    @pytest.mark.unit
    def test_mixed_row_children(self):
        """Non-column runs between candidates form synthesized columns."""
        (section,) = segment(
            parse_html_components(
                '<section><div class="row"><h2>t</h2><p>u</p>'
                '<div class="col-4">a</div><div class="col-8">b</div></div></section>'
            )
        )
        (row,) = section.rows
        assert [c.synthesized for c in row.columns] == [True, False, False]
        assert [c.fraction for c in row.columns] == [1, Fraction(1, 3), Fraction(2, 3)]
        assert [len(c.components) for c in row.columns] == [2, 1, 1]

    @pytest.mark.unit
    def test_container_wrapping_rows_is_transparent(self):
        """A container holding rows yields those rows in its place."""
        (section,) = segment(
            parse_html_components(
                '<section><div class="container">'
                '<div class="row"><div class="col-6">a</div><div class="col-6">b</div></div>'
                '<div class="row"><div class="col-4">c</div></div>'
                "</div></section>"
            )
        )
        assert [len(row.columns) for row in section.rows] == [2, 1]

    @pytest.mark.unit
    def test_structure_ignores_detected_widths(self):
        """Declared structure comes from the count, not the detected widths."""
        (section,) = segment(
            parse_html_components(
                '<section><div class="row">'
                '<div class="col-8">wide</div><div class="col-4">narrow</div>'
                "</div></section>"
            )
        )
        (row,) = section.rows
        assert [c.fraction for c in row.columns] == [Fraction(2, 3), Fraction(1, 3)]
        assert row.structure == (Fraction(1, 2), Fraction(1, 2))

    @pytest.mark.unit
    def test_empty_forest(self):
        """No input components yield no sections."""
        assert segment([]) == []
