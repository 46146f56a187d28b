"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Destination fixtures
- Sample capture inputs shared by unit and integration tests
"""

import pytest
from dotenv import load_dotenv

from builder_export.component import ColorPalette, TypographySystem
from builder_export.destinations import Destination, get_destination

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Destinations
# =============================================================================


@pytest.fixture
def divi() -> Destination:
    """A fresh Divi destination."""
    return get_destination("divi")


# =============================================================================
# Capture Inputs
# =============================================================================


@pytest.fixture
def hero_section_html() -> str:
    """A hero section holding one row with two half-width columns."""
    return (
        '<section id="hero" class="hero">'
        '<div class="row"><div class="col-6">A</div><div class="col-6">B</div></div>'
        "</section>"
    )


@pytest.fixture
def sample_palette() -> ColorPalette:
    """A palette with two primary colors, one neutral and one semantic color."""
    return ColorPalette.model_validate(
        {
            "primary": [{"hex": "#0066cc", "name": "Brand Blue"}, {"hex": "#003366"}],
            "neutral": [{"hex": "#ffffff"}],
            "semantic": {"error": {"hex": "#dc2626"}},
        }
    )


@pytest.fixture
def sample_typography() -> TypographySystem:
    """A typography system with body and heading families."""
    return TypographySystem.model_validate(
        {
            "fontFamilies": [
                {"name": "Inter", "contexts": ["body"]},
                {"name": "Playfair Display", "contexts": ["heading"]},
            ],
            "typeScale": {
                "base": 16,
                "sizes": [{"name": "base", "px": 16}, {"name": "2xl", "px": 32}],
            },
            "textStyles": {"h2": {"fontFamily": "inherit", "fontSize": "32px"}},
            "globalSettings": {"baseFontFamily": "Inter", "baseFontSize": 16},
        }
    )
