"""Component-to-module mapper.

Resolves each content component to a destination module type and composes
its attribute map. Attribute sources are layered in a fixed order, later
layers overriding earlier ones:

    identity -> features -> design tokens -> design -> module builder

after which the module spec's defaults fill keys that are still unset.
The extracted features are also attached to the module as typed payloads.
"""

from builder_export.component import ComponentInfo
from builder_export.core import get_logger
from builder_export.destinations import Destination, ModuleFeatures
from builder_export.document import Module, is_blank
from builder_export.extract import (
    detect_dynamic_content,
    extract_box_model,
    extract_box_shadow,
    extract_entrance_animation,
    extract_hover_effects,
    extract_motion_effects,
    extract_responsive_settings,
    generate_custom_css,
)
from builder_export.tokens import DesignTokenIndex, link_design_tokens

logger = get_logger("mapper")

# Tag -> abstract component type
TAG_TYPES: dict[str, str] = {
    "img": "image",
    "picture": "image",
    "video": "video",
    "audio": "audio",
    "button": "button",
    "a": "button",
    "form": "contact-form",
    "hr": "divider",
    "pre": "code",
    "nav": "menu",
    "p": "text",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
}

# Class substring -> abstract component type, checked in order
CLASS_TYPES: tuple[tuple[str, str], ...] = (
    ("blurb", "blurb"),
    ("testimonial", "testimonial"),
    ("pricing", "pricing-table"),
    ("cta", "call-to-action"),
)


def resolve_module_type(component: ComponentInfo, destination: Destination) -> str:
    """Resolve the destination module type of a content component.

    Tries the explicit component type, then the tag, then class hints, and
    falls back to the destination's default module.

    Example:
        >>> resolve_module_type(ComponentInfo(tag_name="img"), get_destination("divi"))
        'et_pb_image'
    """
    module_map = destination.module_map

    component_type = (component.component_type or "").lower()
    if component_type in module_map:
        return module_map[component_type]

    tag_type = TAG_TYPES.get(component.tag)
    if tag_type in module_map:
        return module_map[tag_type]

    classes = (component.class_name or "").lower()
    for hint, hinted_type in CLASS_TYPES:
        if hint in classes and hinted_type in module_map:
            return module_map[hinted_type]

    logger.debug(
        "No module type for <%s class=%r>, using %s",
        component.tag,
        component.class_name,
        destination.default_module,
    )
    return destination.default_module


def extract_features(component: ComponentInfo) -> ModuleFeatures:
    """Run every feature extractor over one component."""
    return ModuleFeatures(
        responsive=extract_responsive_settings(component),
        hover=extract_hover_effects(component),
        animation=extract_entrance_animation(component),
        motion=extract_motion_effects(component),
        custom_css=generate_custom_css(component),
        dynamic_content=detect_dynamic_content(component),
        box_model=extract_box_model(component.styles),
        box_shadow=extract_box_shadow(component.styles),
    )


def map_component(
    component: ComponentInfo,
    destination: Destination,
    index: DesignTokenIndex | None = None,
) -> Module:
    """Map one content component to a destination module.

    Args:
        component: Content component.
        destination: Target destination.
        index: Optional design token index for global color/font links.

    Returns:
        Module with attributes and feature payloads set.
    """
    module_type = resolve_module_type(component, destination)
    spec = destination.module_spec(module_type)
    features = extract_features(component)
    links = link_design_tokens(component, index or DesignTokenIndex())

    attrs = destination.identity_attributes(component)
    attrs.update(destination.feature_attributes(features))
    if links:
        attrs.update(destination.token_attributes(links))
    attrs.update(destination.design_attributes(component))
    if spec.build is not None:
        attrs.update(spec.build(component))
    for key, value in spec.defaults.items():
        if is_blank(attrs.get(key)):
            attrs[key] = value

    return Module(
        type=module_type,
        attrs=attrs,
        content=spec.content(component) if spec.content is not None else "",
        responsive_settings=features.responsive,
        hover_effects=features.hover,
        entrance_animation=features.animation,
        motion_effects=features.motion,
        custom_css=features.custom_css or None,
        dynamic_content=features.dynamic_content,
        box_model=features.box_model,
        box_shadow=features.box_shadow,
        color_tokens=links.colors or None,
        font_tokens=links.fonts or None,
        size_tokens=links.sizes or None,
    )


__all__ = [
    "CLASS_TYPES",
    "TAG_TYPES",
    "extract_features",
    "map_component",
    "resolve_module_type",
]
