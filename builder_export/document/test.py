"""Unit tests for output document models."""

import json

import pytest

from builder_export.document.lib import (
    BuilderExport,
    Column,
    Layout,
    Module,
    PageSettings,
    Row,
    Section,
    clean_attributes,
)
from builder_export.extract import EntranceAnimation


def _document() -> BuilderExport:
    module_a = Module(type="et_pb_text", attrs={"text_color": "#000", "module_id": None}, content="A")
    module_b = Module(type="et_pb_image", attrs={"src": "b.png", "alt": ""})
    return BuilderExport(
        sections=[
            Section(
                synthesized=True,
                content=[
                    Row(
                        attrs={"column_structure": "1_2,1_2"},
                        content=[
                            Column(attrs={"type": "1_2"}, content=[module_a]),
                            Column(attrs={"type": "1_2"}, content=[module_b]),
                        ],
                    )
                ],
            )
        ]
    )


class TestAttributes:
    """Tests for attribute cleaning."""

    @pytest.mark.unit
    def test_clean_attributes(self):
        """None and empty strings are dropped; falsy values otherwise kept."""
        assert clean_attributes({"a": None, "b": "", "c": 0, "d": "off"}) == {"c": 0, "d": "off"}

    @pytest.mark.unit
    def test_serialized_attrs_are_clean(self):
        """Blank attribute values never reach the JSON encoding."""
        dumped = Module(type="et_pb_image", attrs={"src": "x", "alt": ""}).model_dump(by_alias=True)
        assert dumped["attrs"] == {"src": "x"}


class TestBuilderExport:
    """Tests for the exported document."""

    @pytest.mark.unit
    def test_iter_modules_depth_first(self):
        """Modules are yielded in tree order."""
        document = _document()
        assert [m.type for m in document.iter_modules()] == ["et_pb_text", "et_pb_image"]

    @pytest.mark.unit
    def test_refresh_modules(self):
        """The flattened list is rebuilt from the tree."""
        document = _document()
        document.refresh_modules()
        assert [m.content for m in document.modules] == ["A", ""]

    @pytest.mark.unit
    def test_json_shape(self):
        """Document keys are camelCase; synthesized flags are not serialized."""
        document = _document()
        document.refresh_modules()
        document.page_settings = PageSettings(inline_critical_css=True)
        document.layouts = [Layout(id=1, title="Hero", categories=["Hero"], is_global=True)]
        document.modules[0].entrance_animation = EntranceAnimation(type="fadeIn", duration=500)
        data = json.loads(document.to_json())

        assert set(data) == {"sections", "modules", "layouts", "pageSettings"}
        section = data["sections"][0]
        assert "synthesized" not in section
        assert section["type"] == "section"
        assert section["content"][0]["attrs"] == {"column_structure": "1_2,1_2"}
        assert data["modules"][0]["attrs"] == {"text_color": "#000"}
        assert data["modules"][0]["entranceAnimation"] == {
            "type": "fadeIn",
            "duration": 500,
            "delay": 0,
            "easing": "ease",
        }
        assert data["layouts"][0]["global"] is True
        assert data["pageSettings"] == {"combineCssFiles": False, "inlineCriticalCss": True}

    @pytest.mark.unit
    def test_optional_registries_omitted(self):
        """Absent registries are left out of the JSON encoding."""
        data = BuilderExport().to_dict()
        assert data == {"sections": [], "modules": [], "layouts": []}
