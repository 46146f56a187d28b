"""Unit tests for the export optimizer."""

import pytest

from builder_export.document import BuilderExport, Column, Module, Row, Section
from builder_export.optimize.lib import optimize_export


def _text(content: str = "x") -> Module:
    return Module(type="et_pb_text", content=content)


class TestOptimizeExport:
    """Tests for optimize_export."""

    @pytest.mark.unit
    def test_prunes_empty_synthesized_structure(self, divi):
        """Synthesized sections and rows without modules are removed."""
        document = BuilderExport(
            sections=[
                Section(
                    synthesized=True,
                    content=[Row(synthesized=True, content=[Column(synthesized=True)])],
                ),
                Section(
                    content=[
                        Row(content=[Column(content=[_text()])]),
                        Row(synthesized=True, content=[Column(synthesized=True)]),
                    ]
                ),
            ]
        )
        stats = optimize_export(document, divi)
        assert (stats.sections, stats.rows) == (1, 2)
        assert len(document.sections) == 1
        assert len(document.sections[0].content) == 1

    @pytest.mark.unit
    def test_keeps_source_structure(self, divi):
        """Empty structure taken from the source survives."""
        document = BuilderExport(sections=[Section(content=[Row(content=[Column()])])])
        assert optimize_export(document, divi).total == 0
        assert len(document.sections[0].content[0].content) == 1

    @pytest.mark.unit
    def test_prunes_column_and_restructures_row(self, divi):
        """An empty synthesized column goes when its row keeps another."""
        row = Row(
            attrs={"column_structure": "1_2,1_2"},
            content=[Column(synthesized=True), Column(attrs={"type": "4_4"}, content=[_text()])],
        )
        document = BuilderExport(sections=[Section(content=[row])])
        stats = optimize_export(document, divi)
        assert stats.columns == 1
        assert len(row.content) == 1
        assert row.attrs["column_structure"] == "4_4"

    @pytest.mark.unit
    def test_keeps_last_column(self, divi):
        """A row never loses its last column."""
        row = Row(content=[Column(synthesized=True), Column(synthesized=True)])
        document = BuilderExport(sections=[Section(content=[row])])
        optimize_export(document, divi)
        assert len(row.content) == 1

    @pytest.mark.unit
    def test_idempotent(self, divi):
        """A second pass changes nothing."""
        document = BuilderExport(
            sections=[
                Section(synthesized=True, content=[Row(synthesized=True)]),
                Section(
                    content=[
                        Row(
                            content=[
                                Column(synthesized=True),
                                Column(content=[_text("a")]),
                            ]
                        )
                    ]
                ),
            ]
        )
        optimize_export(document, divi)
        once = document.to_dict()
        assert optimize_export(document, divi).total == 0
        assert document.to_dict() == once
