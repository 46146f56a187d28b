"""Unit tests for export validation."""

import logging

import pytest

from builder_export.document import (
    BuilderExport,
    Column,
    GlobalColor,
    GlobalPreset,
    Module,
    Row,
    Section,
)
from builder_export.validation.lib import Severity, validate_export


def _document(*rows: Row) -> BuilderExport:
    return BuilderExport(sections=[Section(content=list(rows))])


def _row(structure: str, *columns: Column) -> Row:
    return Row(attrs={"column_structure": structure}, content=list(columns))


def _column(code: str, *modules: Module) -> Column:
    return Column(attrs={"type": code}, content=list(modules))


class TestValidateExport:
    """Tests for validate_export."""

    @pytest.mark.unit
    def test_valid_document(self, divi):
        """A well-formed document has no findings."""
        document = _document(
            _row(
                "1_2,1_2",
                _column("1_2", Module(type="et_pb_text")),
                _column("1_2", Module(type="et_pb_image")),
            )
        )
        report = validate_export(document, divi)
        assert report.is_valid
        assert report.warnings == []

    @pytest.mark.unit
    def test_structure_count_mismatch(self, divi):
        """Declared structure must match the column count."""
        document = _document(_row("1_2,1_2", _column("1_2", Module(type="et_pb_text"))))
        report = validate_export(document, divi)
        assert not report.is_valid
        assert [e.error_type for e in report.errors] == ["structure"]
        assert report.errors[0].node_path == "sections[0].rows[0]"

    @pytest.mark.unit
    def test_fractions_must_sum_to_one(self, divi):
        """Declared fractions must add up to a whole."""
        document = _document(
            _row("1_2,1_3", _column("1_2"), _column("1_3"))
        )
        report = validate_export(document, divi)
        assert any("sum to 1" in e.message for e in report.errors)

    @pytest.mark.unit
    def test_unknown_module_type(self, divi):
        """Module types must be in the destination vocabulary."""
        document = _document(_row("4_4", _column("4_4", Module(type="et_pb_hologram"))))
        report = validate_export(document, divi)
        (error,) = report.errors
        assert error.error_type == "module_type"
        assert error.node_path == "sections[0].rows[0].columns[0].modules[0]"

    @pytest.mark.unit
    def test_nesting(self, divi):
        """Nodes out of place are reported."""
        row = _row("4_4", _column("4_4"))
        row.content.append(Module(type="et_pb_text"))
        report = validate_export(_document(row), divi)
        assert "nesting" in [e.error_type for e in report.errors]

    @pytest.mark.unit
    def test_duplicate_module_ids(self, divi):
        """Module ids must be unique."""
        document = _document(
            _row(
                "4_4",
                _column(
                    "4_4",
                    Module(type="et_pb_text", attrs={"module_id": "x"}),
                    Module(type="et_pb_text", attrs={"module_id": "x"}),
                ),
            )
        )
        report = validate_export(document, divi)
        assert [e.error_type for e in report.errors] == ["duplicate_id"]

    @pytest.mark.unit
    def test_registries(self, divi):
        """Absent preset types and repeated color slugs are warnings."""
        document = _document(_row("4_4", _column("4_4", Module(type="et_pb_text"))))
        document.global_presets = [
            GlobalPreset(id="preset_1", title="Button Preset", module_type="et_pb_button")
        ]
        document.global_colors = [
            GlobalColor(id="gcid-1", name="A", color="#000000", slug="primary-1"),
            GlobalColor(id="gcid-2", name="B", color="#ffffff", slug="primary-1"),
        ]
        report = validate_export(document, divi)
        assert report.is_valid
        assert [w.error_type for w in report.warnings] == ["preset", "color_slug"]
        assert all(w.severity is Severity.WARNING for w in report.warnings)

    @pytest.mark.unit
    def test_findings_are_logged(self, divi, caplog):
        """Findings are logged, never raised."""
        document = _document(_row("1_2", _column("1_2")))
        with caplog.at_level(logging.WARNING, logger="builder_export.validation"):
            report = validate_export(document, divi)
        assert not report.is_valid
        assert "Export validation failed" in caplog.text
