"""Tests for the command line interface."""

import json

import pytest

from builder_export.__main__ import main


@pytest.fixture
def page_file(tmp_path, hero_section_html):
    path = tmp_path / "page.html"
    path.write_text(hero_section_html, encoding="utf-8")
    return path


class TestExportCommand:
    """Tests for the export command."""

    @pytest.mark.integration
    def test_html_to_json(self, page_file, capsys):
        """HTML input prints the JSON document."""
        assert main(["export", "--html", str(page_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [m["content"] for m in data["modules"]] == ["A", "B"]

    @pytest.mark.integration
    def test_json_input_to_markup(self, tmp_path, capsys):
        """A bare component list is accepted as input."""
        path = tmp_path / "page.json"
        path.write_text(json.dumps([{"tagName": "p", "textContent": "Hi", "innerHTML": "Hi"}]))
        assert main(["export", str(path), "--format", "markup"]) == 0
        assert "]Hi[/et_pb_text]" in capsys.readouterr().out

    @pytest.mark.integration
    def test_output_file(self, page_file, tmp_path):
        """Results can be written to a file."""
        target = tmp_path / "tree.txt"
        assert main(["export", "--html", str(page_file), "-f", "tree", "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8").startswith("Export [divi]")

    @pytest.mark.integration
    def test_invalid_input(self, tmp_path):
        """Malformed input JSON fails with exit code 1."""
        path = tmp_path / "bad.json"
        path.write_text('{"components": [{"children": "nope"}]}')
        assert main(["export", str(path)]) == 1

    @pytest.mark.integration
    def test_unknown_destination(self, page_file):
        """Unknown destinations fail with exit code 1."""
        assert main(["export", "--html", str(page_file), "-d", "wix"]) == 1

    @pytest.mark.integration
    def test_missing_input(self):
        """An input file or --html is required."""
        assert main(["export"]) == 1


class TestDestinationsCommand:
    """Tests for the destinations command."""

    @pytest.mark.integration
    def test_lists_divi(self, capsys):
        """Registered destinations are listed."""
        assert main(["destinations"]) == 0
        assert capsys.readouterr().out.startswith("divi\t")

    @pytest.mark.unit
    def test_no_command(self, capsys):
        """No command prints help and fails."""
        assert main([]) == 1
