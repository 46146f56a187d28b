"""Unit tests for markup rendering and the review tree."""

import pytest

from builder_export.document import BuilderExport, Column, Module, Row, Section
from builder_export.output.lib import format_export_tree, render_attributes, render_markup


def _document() -> BuilderExport:
    return BuilderExport(
        sections=[
            Section(
                attrs={"fullwidth": "off", "module_id": None},
                content=[
                    Row(
                        attrs={"column_structure": "1_2,1_2"},
                        content=[
                            Column(
                                attrs={"type": "1_2"},
                                content=[
                                    Module(
                                        type="et_pb_text",
                                        attrs={"module_class": ""},
                                        content="<p>A</p>",
                                    )
                                ],
                            ),
                            Column(
                                attrs={"type": "1_2"},
                                content=[Module(type="et_pb_image", attrs={"src": "b.png"})],
                            ),
                        ],
                    )
                ],
            )
        ]
    )


class TestRenderMarkup:
    """Tests for render_markup."""

    @pytest.mark.unit
    def test_render_tree(self, divi):
        """Sections, rows and columns nest with matching close tags."""
        markup = render_markup(_document().sections, divi)
        assert markup.splitlines() == [
            '[et_pb_section fullwidth="off"]',
            '[et_pb_row column_structure="1_2,1_2"]',
            '[et_pb_column type="1_2"]',
            "[et_pb_text]<p>A</p>[/et_pb_text]",
            "[/et_pb_column]",
            '[et_pb_column type="1_2"]',
            '[et_pb_image src="b.png"][/et_pb_image]',
            "[/et_pb_column]",
            "[/et_pb_row]",
            "[/et_pb_section]",
        ]

    @pytest.mark.unit
    def test_values_are_escaped(self, divi):
        """Shortcode-breaking characters are encoded in values."""
        assert render_attributes({"title": 'a "b" [c]'}, divi) == 'title="a %22b%22 %91c%93"'

    @pytest.mark.unit
    def test_blank_values_omitted(self, divi):
        """None and empty strings are never rendered."""
        assert render_attributes({"a": None, "b": "", "c": "off"}, divi) == 'c="off"'

    @pytest.mark.unit
    def test_empty(self, divi):
        """No sections render to an empty string."""
        assert render_markup([], divi) == ""


class TestFormatExportTree:
    """Tests for format_export_tree."""

    @pytest.mark.unit
    def test_tree(self, divi):
        """The tree shows structure codes and content previews."""
        tree = format_export_tree(_document(), divi)
        assert tree.splitlines() == [
            "Export [divi]",
            "└── Section",
            "    └── Row [1_2,1_2]",
            "        ├── Column [1_2]",
            '        │   └── et_pb_text "A"',
            "        └── Column [1_2]",
            "            └── et_pb_image",
        ]

    @pytest.mark.unit
    def test_long_preview_truncated(self, divi):
        """Long module content is shortened."""
        document = BuilderExport(
            sections=[
                Section(
                    synthesized=True,
                    content=[
                        Row(
                            content=[
                                Column(content=[Module(type="et_pb_text", content="word " * 20)])
                            ]
                        )
                    ],
                )
            ]
        )
        lines = format_export_tree(document, divi).splitlines()
        assert lines[1] == "└── Section (synthesized)"
        assert lines[2] == "    └── Row"
        assert lines[3] == "        └── Column"
        assert lines[4].endswith('..."')
