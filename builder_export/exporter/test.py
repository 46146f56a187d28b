"""Tests for the target exporter and the end-to-end pipeline."""

import json
import re
from fractions import Fraction

import pytest

from builder_export.component import (
    CapturedPage,
    ComponentInfo,
    ComponentLibrary,
    TemplateParts,
    parse_html_components,
)
from builder_export.config import ExportOptions
from builder_export.document import Module
from builder_export.exporter.lib import (
    build_global_presets,
    build_page_settings,
    export,
    export_page,
)
from builder_export.optimize import optimize_export
from builder_export.segment import count_content_units

GRID_HTML = (
    '<header class="banner"><h1>Title</h1><p>Lead</p></header>'
    '<section class="features"><div class="container">'
    '<div class="row"><div class="col-4"><h3>One</h3></div>'
    '<div class="col-4"><h3>Two</h3></div><div class="col-4"><h3>Three</h3></div></div>'
    '<div class="row"><div class="col-3">a</div><div class="col-3">b</div>'
    '<div class="col-3">c</div><div class="col-3">d</div></div>'
    "</div></section>"
    '<div><div><p>Loose</p><img src="x.png"></div><span>Tail</span></div>'
)

_OPEN_TAG_RE = re.compile(r"\[(?!/)(\w+)([^\]]*)\]")
_KEY_RE = re.compile(r'(\w+)="')


def _json_sequence(data: dict) -> list[tuple[str, list[str]]]:
    sequence = []
    for section in data["sections"]:
        sequence.append(("et_pb_section", list(section["attrs"])))
        for row in section["content"]:
            sequence.append(("et_pb_row", list(row["attrs"])))
            for column in row["content"]:
                sequence.append(("et_pb_column", list(column["attrs"])))
                for module in column["content"]:
                    sequence.append((module["type"], list(module["attrs"])))
    return sequence


def _markup_sequence(markup: str) -> list[tuple[str, list[str]]]:
    return [
        (tag, _KEY_RE.findall(attributes)) for tag, attributes in _OPEN_TAG_RE.findall(markup)
    ]


class TestScenarios:
    """Pinned end-to-end scenarios."""

    @pytest.mark.integration
    def test_hero_two_columns(self, hero_section_html):
        """A hero row with two half columns yields two text modules."""
        result = export(parse_html_components(hero_section_html))
        (section,) = result.document.sections
        (row,) = section.content
        assert row.attrs["column_structure"] == "1_2,1_2"
        assert [column.attrs["type"] for column in row.content] == ["1_2", "1_2"]
        assert [[m.type for m in c.content] for c in row.content] == [["et_pb_text"]] * 2
        assert [m.content for m in result.document.modules] == ["A", "B"]

    @pytest.mark.integration
    def test_bare_paragraph(self):
        """A bare paragraph is wrapped in synthesized structure."""
        result = export(parse_html_components("<p>Hello</p>"))
        (section,) = result.document.sections
        (row,) = section.content
        (column,) = row.content
        assert section.synthesized and row.synthesized and column.synthesized
        assert row.attrs["column_structure"] == "4_4"
        assert column.attrs["type"] == "4_4"
        (module,) = column.content
        assert module.type == "et_pb_text"
        assert module.content == "Hello"

    @pytest.mark.unit
    def test_shared_button_preset(self):
        """Three buttons sharing two values yield one two-key preset."""
        modules = [
            Module(
                type="et_pb_button",
                attrs={"button_bg_color": "#fff", "url_new_window": "off", "button_text": label},
            )
            for label in ("One", "Two", "Three")
        ]
        (preset,) = build_global_presets(modules)
        assert preset.module_type == "et_pb_button"
        assert preset.settings == {"button_bg_color": "#fff", "url_new_window": "off"}
        assert preset.id == "preset_1"

    @pytest.mark.integration
    @pytest.mark.parametrize("name,expected", [("slideInLeft", "left"), ("wobble", "fade")])
    def test_animation_encoding(self, name, expected):
        """Entrance animations encode through the table with a fade fallback."""
        component = ComponentInfo.model_validate(
            {"tagName": "p", "textContent": "x", "animations": [{"name": name, "duration": "1s"}]}
        )
        result = export([component])
        assert result.document.modules[0].attrs["animation"] == expected


class TestProperties:
    """Structural properties that hold for any input."""

    @pytest.mark.integration
    @pytest.mark.parametrize(
        "html",
        [
            GRID_HTML,
            "<p>Hi <b>x</b> and <i>y</i></p><ul><li>a</li><li>b</li></ul>",
            '<section><div class="row"><div class="col-6"></div>'
            '<div class="col-6 blurb"><h4>t</h4><p>u</p></div></div></section>',
            '<div class="hero"></div><div><span>a</span><em>b</em></div>',
        ],
    )
    def test_module_count_matches_content_units(self, html):
        """Every content unit becomes exactly one module; wrappers none."""
        components = parse_html_components(html)
        result = export(components)
        assert len(result.document.modules) == count_content_units(components)

    @pytest.mark.integration
    def test_json_and_markup_agree(self):
        """Both encodings list the same tags and attribute keys in order."""
        components = parse_html_components(GRID_HTML)
        result = export(components)
        assert _json_sequence(json.loads(result.json)) == _markup_sequence(result.markup)

    @pytest.mark.integration
    def test_column_fractions_sum_to_one(self):
        """Every row's declared structure is a whole."""
        result = export(parse_html_components(GRID_HTML))
        for section in result.document.sections:
            for row in section.content:
                codes = row.attrs["column_structure"].split(",")
                total = sum(Fraction(*map(int, code.split("_"))) for code in codes)
                assert total == 1

    @pytest.mark.integration
    def test_optimizer_idempotent_on_export(self, divi):
        """Optimizing an exported document again changes nothing."""
        result = export(parse_html_components(GRID_HTML))
        before = result.document.to_dict()
        assert optimize_export(result.document, divi).total == 0
        assert result.document.to_dict() == before

    @pytest.mark.integration
    def test_grid_structure(self):
        """A container wrapping rows is transparent."""
        result = export(parse_html_components(GRID_HTML))
        structures = [
            [row.attrs["column_structure"] for row in section.content]
            for section in result.document.sections
        ]
        assert structures == [
            ["4_4", "4_4"],
            ["1_3,1_3,1_3", "1_4,1_4,1_4,1_4", "4_4"],
        ]
        # The trailing wrapper joins the open section in a synthesized row
        assert result.document.sections[1].content[-1].synthesized

    @pytest.mark.integration
    def test_valid_report(self):
        """A normal export validates cleanly."""
        result = export(parse_html_components(GRID_HTML))
        assert result.report is not None
        assert result.report.is_valid


class TestRegistries:
    """Tests for presets, colors, fonts, layouts and page settings."""

    @pytest.mark.integration
    def test_presets_from_export(self):
        """Preset settings never contain keys that differ between instances."""
        html = "".join(
            f'<a href="#" style="background-color: #fff">{label}</a>' for label in ("A", "B", "C")
        )
        result = export(parse_html_components(html), ExportOptions(create_global_presets=True))
        (preset,) = result.document.global_presets
        assert preset.module_type == "et_pb_button"
        assert preset.settings["button_bg_color"] == "#fff"
        assert "button_text" not in preset.settings

    @pytest.mark.integration
    def test_presets_off_by_default(self):
        """Presets are only built when requested."""
        result = export(parse_html_components("<p>a</p><p>b</p>"))
        assert result.document.global_presets is None
        assert "globalPresets" not in json.loads(result.json)

    @pytest.mark.integration
    def test_colors_and_fonts(self, sample_palette, sample_typography):
        """Palette and typography produce the theme registries."""
        result = export(
            parse_html_components(
                '<p style="color: #0066CC; font-family: Inter; font-size: 32px">x</p>'
            ),
            palette=sample_palette,
            typography=sample_typography,
        )
        data = json.loads(result.json)
        assert [c["slug"] for c in data["globalColors"]] == [
            "primary-1",
            "primary-2",
            "neutral-1",
            "error",
        ]
        assert data["fontSettings"]["body_font"]["font"] == "Inter"
        assert data["fontSettings"]["h2_font"]["font"] == "Inter"
        module = data["modules"][0]
        assert module["attrs"]["text_color_global"] == "primary-1"
        assert module["colorTokens"] == {"color": "primary-1"}
        assert module["fontTokens"] == {"fontFamily": "body"}
        assert module["sizeTokens"] == {"fontSize": "2xl"}

    @pytest.mark.integration
    def test_converted_layout(self):
        """Without a library, layouts hold the converted page."""
        result = export(parse_html_components("<p>Hello</p>"), ExportOptions(export_layouts=True))
        (layout,) = result.document.layouts
        assert layout.id == 1
        assert layout.title == "Converted Layout"
        assert layout.categories == ["Converted"]
        assert layout.content == result.markup

    @pytest.mark.integration
    def test_library_layouts(self):
        """Templates scoring 50 or more become layouts; 80 or more are global."""
        library = ComponentLibrary.model_validate(
            {
                "templates": [
                    {"name": "Weak", "category": "cards", "html": "<p>w</p>", "reusabilityScore": 40},
                    {"name": "Hero", "category": "heroes", "html": "<h1>h</h1>", "reusabilityScore": 60},
                    {"name": "Form", "category": "widgets", "html": "<p>f</p>", "reusabilityScore": 90},
                ]
            }
        )
        result = export(
            parse_html_components("<p>x</p>"), ExportOptions(export_layouts=True), library=library
        )
        layouts = result.document.layouts
        assert [layout.title for layout in layouts] == ["Hero", "Form"]
        assert [layout.categories for layout in layouts] == [["Hero"], ["Content"]]
        assert [layout.is_global for layout in layouts] == [False, True]
        assert "]h[/et_pb_text]" in layouts[0].content
        assert json.loads(result.json)["layouts"][1]["global"] is True

    @pytest.mark.integration
    def test_library_converted_without_layout_flag(self):
        """A supplied library is converted even when layout export is off."""
        library = ComponentLibrary.model_validate(
            {"templates": [{"name": "Hero", "html": "<h1>h</h1>", "reusabilityScore": 90}]}
        )
        result = export(parse_html_components("<p>x</p>"), library=library)
        assert [layout.title for layout in result.document.layouts] == ["Hero"]

    @pytest.mark.integration
    def test_weak_library_has_no_converted_layout(self):
        """A library with no usable template yields no layouts at all."""
        library = ComponentLibrary.model_validate(
            {"templates": [{"name": "Weak", "html": "<p>w</p>", "reusabilityScore": 10}]}
        )
        result = export(
            parse_html_components("<p>x</p>"), ExportOptions(export_layouts=True), library=library
        )
        assert result.document.layouts == []

    @pytest.mark.integration
    def test_template_parts(self):
        """Confident header/footer parts become global layouts."""
        parts = TemplateParts.model_validate(
            {
                "header": {"name": "Site Header", "html": "<nav>menu</nav>", "confidence": 75},
                "footer": {"name": "Site Footer", "html": "<p>c</p>", "confidence": 50},
            }
        )
        result = export(parse_html_components("<p>x</p>"), template_parts=parts)
        header = result.document.header
        assert header.id == 9999
        assert header.is_global
        assert header.categories == ["Header"]
        assert "et_pb_menu" in header.content
        assert result.document.footer is None

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "combine,inline,expected",
        [
            (False, False, None),
            (True, False, (True, False)),
            (False, True, (False, True)),
            (True, True, (False, True)),
        ],
    )
    def test_page_settings(self, combine, inline, expected):
        """CSS combination and critical CSS inlining are never both emitted."""
        settings = build_page_settings(
            ExportOptions(combine_css_files=combine, inline_critical_css=inline)
        )
        if expected is None:
            assert settings is None
        else:
            assert (settings.combine_css_files, settings.inline_critical_css) == expected


class TestPipeline:
    """Tests for pipeline options and contract errors."""

    @pytest.mark.unit
    def test_missing_tree(self):
        """A missing component tree is a contract violation."""
        with pytest.raises(ValueError, match="component tree is required"):
            export(None)

    @pytest.mark.unit
    def test_unknown_destination(self):
        """Unknown destinations are rejected with the available names."""
        with pytest.raises(KeyError, match="divi"):
            export([], ExportOptions(destination="wix"))

    @pytest.mark.integration
    def test_empty_forest(self):
        """An empty forest exports an empty document."""
        result = export([])
        assert result.document.sections == []
        assert result.markup == ""
        assert json.loads(result.json) == {"sections": [], "modules": [], "layouts": []}

    @pytest.mark.integration
    def test_validation_disabled(self):
        """Disabling validation leaves no report."""
        result = export(parse_html_components("<p>a</p>"), ExportOptions(validate_export=False))
        assert result.report is None

    @pytest.mark.integration
    def test_optimize_disabled(self):
        """Structure without empty synthesized nodes is the same either way."""
        components = parse_html_components(GRID_HTML)
        plain = export(components, ExportOptions(optimize_export=False))
        optimized = export(components)
        assert plain.json == optimized.json

    @pytest.mark.integration
    def test_export_page(self):
        """Captured pages decode from camelCase JSON and export."""
        page = CapturedPage.model_validate(
            {
                "components": [
                    {
                        "tagName": "section",
                        "className": "hero",
                        "children": [{"tagName": "h1", "textContent": "Hi", "innerHTML": "Hi"}],
                    }
                ],
                "colorPalette": {"primary": [{"hex": "#111111"}]},
            }
        )
        result = export_page(page)
        assert result.document.modules[0].content == "Hi"
        assert result.document.global_colors[0].slug == "primary-1"
        assert result.destination == "divi"
        assert result.tree.splitlines()[0] == "Export [divi]"
