"""Target exporter.

Composes the pipeline for one export call::

    components -> segment -> map -> presets / colors / fonts / layouts
               -> validate -> optimize -> JSON + markup

Every call builds its own document and destination instance; nothing is
shared between calls.
"""

from collections.abc import Iterable

from builder_export.component import (
    CapturedPage,
    ColorPalette,
    ComponentInfo,
    ComponentLibrary,
    TemplatePart,
    TemplateParts,
    TypographySystem,
    parse_html_components,
)
from builder_export.config import ExportOptions
from builder_export.core import get_logger
from builder_export.destinations import Destination, get_destination
from builder_export.document import (
    BuilderExport,
    Column,
    GlobalPreset,
    Layout,
    Module,
    PageSettings,
    Row,
    Section,
    clean_attributes,
)
from builder_export.mapper import map_component
from builder_export.optimize import optimize_export
from builder_export.output import ExportOutput, format_export_tree, render_markup
from builder_export.segment import SectionUnit, segment
from builder_export.tokens import DesignTokenIndex, build_token_index
from builder_export.validation import validate_export

logger = get_logger("exporter")

LIBRARY_MIN_SCORE = 50
GLOBAL_MIN_SCORE = 80
TEMPLATE_PART_MIN_CONFIDENCE = 60

HEADER_LAYOUT_ID = 9999
FOOTER_LAYOUT_ID = 9998

CONVERTED_LAYOUT_TITLE = "Converted Layout"
CONVERTED_LAYOUT_CATEGORY = "Converted"


# =============================================================================
# Section tree
# =============================================================================


def build_sections(
    units: Iterable[SectionUnit],
    destination: Destination,
    index: DesignTokenIndex | None = None,
) -> list[Section]:
    """Turn segmented units into the destination's section tree.

    Args:
        units: Segmented sections.
        destination: Target destination.
        index: Optional design token index.

    Returns:
        Sections with rows, columns and mapped modules.
    """
    sections: list[Section] = []
    for unit in units:
        rows = [
            Row(
                attrs=destination.row_attributes(row),
                synthesized=row.synthesized,
                content=[
                    Column(
                        attrs=destination.column_attributes(column),
                        synthesized=column.synthesized,
                        content=[
                            map_component(component, destination, index)
                            for component in column.components
                        ],
                    )
                    for column in row.columns
                ],
            )
            for row in unit.rows
        ]
        sections.append(
            Section(
                attrs=destination.section_attributes(unit),
                synthesized=unit.synthesized,
                content=rows,
            )
        )
    return sections


def convert_html(
    html: str,
    destination: Destination,
    index: DesignTokenIndex | None = None,
) -> str:
    """Convert an HTML fragment straight to optimized destination markup."""
    document = BuilderExport(
        sections=build_sections(segment(parse_html_components(html)), destination, index)
    )
    optimize_export(document, destination)
    return render_markup(document.sections, destination)


# =============================================================================
# Theme registries
# =============================================================================


def build_global_presets(modules: Iterable[Module]) -> list[GlobalPreset]:
    """Build one preset per module type from the attributes all its instances share.

    A key survives only when every instance of the type carries it with an
    identical value. Types with a single instance, or whose instances share
    nothing, get no preset.

    Example:
        >>> presets = build_global_presets(document.modules)
        >>> presets[0].module_type, presets[0].settings
        ('et_pb_button', {'button_bg_color': '#fff', 'url_new_window': 'off'})
    """
    groups: dict[str, list[dict]] = {}
    for module in modules:
        groups.setdefault(module.type, []).append(clean_attributes(module.attrs))

    presets: list[GlobalPreset] = []
    for module_type, attribute_maps in groups.items():
        if len(attribute_maps) < 2:
            continue
        first, *others = attribute_maps
        shared = {
            key: value
            for key, value in first.items()
            if all(key in other and other[key] == value for other in others)
        }
        if not shared:
            continue
        presets.append(
            GlobalPreset(
                id=f"preset_{len(presets) + 1}",
                title=f"{module_type} Preset",
                module_type=module_type,
                settings=shared,
            )
        )
    return presets


def build_library_layouts(
    library: ComponentLibrary,
    destination: Destination,
    index: DesignTokenIndex | None = None,
) -> list[Layout]:
    """Convert reusable library templates into layouts.

    Templates scoring at least 50 become layouts; 80 and above are global.
    """
    layouts: list[Layout] = []
    for template in library.templates:
        if template.reusability_score < LIBRARY_MIN_SCORE:
            continue
        layouts.append(
            Layout(
                id=len(layouts) + 1,
                title=template.name,
                content=convert_html(template.html, destination, index),
                categories=[destination.layout_category(template.category)],
                is_global=template.reusability_score >= GLOBAL_MIN_SCORE,
            )
        )
    return layouts


def build_template_part(
    part: TemplatePart | None,
    layout_id: int,
    category: str,
    destination: Destination,
    index: DesignTokenIndex | None = None,
) -> Layout | None:
    """Convert a header or footer template part with enough confidence."""
    if part is None or part.confidence < TEMPLATE_PART_MIN_CONFIDENCE:
        return None
    return Layout(
        id=layout_id,
        title=part.name,
        content=convert_html(part.html, destination, index),
        categories=[category],
        is_global=True,
    )


def build_page_settings(options: ExportOptions) -> PageSettings | None:
    """Page CSS delivery settings; critical-CSS inlining wins over combination."""
    combine, inline = options.combine_css_files, options.inline_critical_css
    if combine and inline:
        logger.debug("Critical CSS inlining requested; dropping CSS file combination")
        combine = False
    if not (combine or inline):
        return None
    return PageSettings(combine_css_files=combine, inline_critical_css=inline)


# =============================================================================
# Pipeline
# =============================================================================


def export(
    components: list[ComponentInfo] | None,
    options: ExportOptions | None = None,
    *,
    palette: ColorPalette | None = None,
    typography: TypographySystem | None = None,
    library: ComponentLibrary | None = None,
    template_parts: TemplateParts | None = None,
) -> ExportOutput:
    """Export a component forest to the configured destination.

    Args:
        components: Top-level components in document order.
        options: Export flags; defaults to ``ExportOptions()``.
        palette: Optional color palette for token links and global colors.
        typography: Optional typography system for font links and settings.
        library: Optional component library; its templates always become
            layouts. Without one, ``options.export_layouts`` emits the
            converted page as a single layout.
        template_parts: Optional header/footer parts.

    Returns:
        ExportOutput with the document and both encodings.

    Raises:
        ValueError: If no component tree is given.
        KeyError: If the destination is unknown.
    """
    if components is None:
        raise ValueError("component tree is required")
    options = options or ExportOptions()
    destination = get_destination(options.destination)
    index = build_token_index(palette, typography)

    document = BuilderExport(
        sections=build_sections(segment(components), destination, index)
    )
    document.refresh_modules()

    if options.create_global_presets:
        document.global_presets = build_global_presets(document.modules) or None
    if palette is not None:
        document.global_colors = destination.global_colors(index) or None
    if typography is not None:
        document.font_settings = destination.font_settings(typography)
    if library is not None:
        document.layouts = build_library_layouts(library, destination, index)
    if template_parts is not None:
        document.header = build_template_part(
            template_parts.header, HEADER_LAYOUT_ID, "Header", destination, index
        )
        document.footer = build_template_part(
            template_parts.footer, FOOTER_LAYOUT_ID, "Footer", destination, index
        )
    document.page_settings = build_page_settings(options)

    report = validate_export(document, destination) if options.validate_export else None
    if options.optimize_export:
        optimize_export(document, destination)
    document.refresh_modules()

    markup = render_markup(document.sections, destination)
    if library is None and options.export_layouts:
        document.layouts = [
            Layout(
                id=1,
                title=CONVERTED_LAYOUT_TITLE,
                content=markup,
                categories=[CONVERTED_LAYOUT_CATEGORY],
            )
        ]

    logger.info(
        "Exported %d sections, %d modules to %s",
        len(document.sections),
        len(document.modules),
        destination.name,
    )
    return ExportOutput(
        document=document,
        json=document.to_json(),
        markup=markup,
        tree=format_export_tree(document, destination),
        report=report,
        destination=destination.name,
    )


def export_page(page: CapturedPage, options: ExportOptions | None = None) -> ExportOutput:
    """Export a captured page with all its design inputs.

    Example:
        >>> page = CapturedPage(components=parse_html_components("<p>Hello</p>"))
        >>> export_page(page).document.modules[0].content
        'Hello'
    """
    return export(
        page.components,
        options,
        palette=page.color_palette,
        typography=page.typography_system,
        library=page.component_library,
        template_parts=page.template_parts,
    )


__all__ = [
    "build_global_presets",
    "build_library_layouts",
    "build_page_settings",
    "build_sections",
    "build_template_part",
    "convert_html",
    "export",
    "export_page",
]
