"""Tests for box model and box shadow parsing."""

import pytest

from builder_export.extract.box import (
    extract_box_model,
    extract_box_shadow,
    format_dimension,
    format_dimension_set,
    parse_box_shadow,
    parse_dimension,
    parse_shorthand_dimension,
)


class TestDimensions:
    """Tests for single-length parsing."""

    @pytest.mark.unit
    def test_units(self):
        """Units are kept; unitless numbers are pixels."""
        assert parse_dimension("12px").unit == "px"
        assert parse_dimension("2").unit == "px"
        assert parse_dimension("50%").is_responsive is True
        assert parse_dimension("-1.5em").value == -1.5

    @pytest.mark.unit
    def test_keywords(self):
        """auto/inherit/initial parse as keyword dimensions."""
        assert parse_dimension("auto").unit == "auto"
        assert format_dimension(parse_dimension("auto")) == "auto"

    @pytest.mark.unit
    def test_unreadable(self):
        """Unreadable values parse to None."""
        assert parse_dimension("calc(100% - 10px)") is None
        assert parse_dimension("") is None
        assert parse_dimension(None) is None

    @pytest.mark.unit
    def test_format(self):
        """Whole numbers format without a decimal point."""
        assert format_dimension(parse_dimension("10.0px")) == "10px"
        assert format_dimension(parse_dimension("0.5rem")) == "0.5rem"


class TestShorthand:
    """Tests for 1-4 value shorthands."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("10px", "10px|10px|10px|10px"),
            ("10px 20px", "10px|20px|10px|20px"),
            ("10px 20px 30px", "10px|20px|30px|20px"),
            ("1px 2px 3px 4px", "1px|2px|3px|4px"),
        ],
    )
    def test_positional_expansion(self, value, expected):
        """CSS shorthand expands to top|right|bottom|left."""
        assert format_dimension_set(parse_shorthand_dimension(value)) == expected

    @pytest.mark.unit
    def test_malformed_part_invalidates(self):
        """One unreadable part drops the whole shorthand."""
        assert parse_shorthand_dimension("10px bogus") is None
        assert parse_shorthand_dimension("1px 2px 3px 4px 5px") is None


class TestBoxModel:
    """Tests for extract_box_model."""

    @pytest.mark.unit
    def test_shorthand_wins(self):
        """Shorthands take precedence over per-side longhands."""
        box = extract_box_model({"padding": "4px", "paddingTop": "99px"})
        assert format_dimension_set(box.padding) == "4px|4px|4px|4px"

    @pytest.mark.unit
    def test_longhands(self):
        """Per-side longhands fill only the sides present."""
        box = extract_box_model({"marginTop": "8px", "marginLeft": "auto"})
        assert format_dimension_set(box.margin) == "8px|||auto"

    @pytest.mark.unit
    def test_border_and_size(self):
        """Border widths and sizes are parsed."""
        box = extract_box_model({"borderWidth": "1px", "maxWidth": "1200px"})
        assert box.border.top.value == 1
        assert box.max_width.value == 1200

    @pytest.mark.unit
    def test_empty(self):
        """No readable box property yields None."""
        assert extract_box_model({"color": "red"}) is None
        assert extract_box_model({"padding": "oops"}) is None
        assert extract_box_model({}) is None


class TestBoxShadow:
    """Tests for box-shadow parsing."""

    @pytest.mark.unit
    def test_full_shadow(self):
        """Offsets, blur, spread and rgba color are read."""
        shadow = parse_box_shadow("0 4px 6px -1px rgba(0, 0, 0, 0.1)")
        assert format_dimension(shadow.horizontal) == "0px"
        assert format_dimension(shadow.vertical) == "4px"
        assert format_dimension(shadow.blur) == "6px"
        assert format_dimension(shadow.spread) == "-1px"
        assert shadow.color == "rgba(0, 0, 0, 0.1)"
        assert shadow.inset is False

    @pytest.mark.unit
    def test_color_first_and_inset(self):
        """Leading colors and the inset keyword are recognized."""
        shadow = parse_box_shadow("inset #333 2px 2px")
        assert shadow.inset is True
        assert shadow.color == "#333"
        assert shadow.blur is None

    @pytest.mark.unit
    def test_first_layer_only(self):
        """Only the first comma-separated layer is read."""
        shadow = parse_box_shadow("1px 1px red, 5px 5px blue")
        assert shadow.color == "red"
        assert shadow.horizontal.value == 1

    @pytest.mark.unit
    def test_default_color(self):
        """A shadow without a color gets the default color."""
        assert parse_box_shadow("2px 2px 4px").color == "rgba(0,0,0,0.3)"

    @pytest.mark.unit
    def test_unreadable(self):
        """none and malformed shadows yield None."""
        assert parse_box_shadow("none") is None
        assert parse_box_shadow("2px") is None
        assert parse_box_shadow("calc(1px) 2px") is None
        assert extract_box_shadow({"color": "red"}) is None
