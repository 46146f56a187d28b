"""Environment-backed settings for builder-export.

Every setting is an `EnvVar` member carrying its variable name, default and
type. `get_environment()` resolves a member as override, then environment,
then default.

The pipeline itself never reads the environment. Export flags travel in an
`ExportOptions` value built once per call (usually by the CLI through
`ExportOptions.from_environment()`), so two exports never share settings.

Example:
    >>> from builder_export.config import EnvVar, ExportOptions, get_environment
    >>>
    >>> get_environment(EnvVar.EXPORT_DESTINATION)
    'divi'
    >>> ExportOptions.from_environment(create_global_presets=True).create_global_presets
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

# =============================================================================
# Environment Variable Table
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """One environment variable.

    Attributes:
        name: Variable name, identical to the `EnvVar` member name.
        default: Value used when the variable is unset or unreadable.
        var_type: `str` or `bool`.
        description: Shown by `--help` style listings.
        category: export, performance or logging.
        option: `ExportOptions` field fed by this variable, if any.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "export"
    option: str | None = None


class EnvVar(Enum):
    """Settings read from the environment (or a `.env` file via the CLI)."""

    # -------------------------------------------------------------------------
    # Export Pipeline
    # -------------------------------------------------------------------------
    EXPORT_DESTINATION = EnvConfig(
        name="EXPORT_DESTINATION",
        option="destination",
        default="divi",
        var_type=str,
        description="Destination builder to export to",
        category="export",
    )
    EXPORT_LAYOUTS = EnvConfig(
        name="EXPORT_LAYOUTS",
        option="export_layouts",
        default=False,
        var_type=bool,
        description="Emit reusable layouts alongside the page",
        category="export",
    )
    EXPORT_GLOBAL_PRESETS = EnvConfig(
        name="EXPORT_GLOBAL_PRESETS",
        option="create_global_presets",
        default=False,
        var_type=bool,
        description="Derive global presets shared by modules of one type",
        category="export",
    )
    EXPORT_VALIDATE = EnvConfig(
        name="EXPORT_VALIDATE",
        option="validate_export",
        default=True,
        var_type=bool,
        description="Run the consistency validator over the exported document",
        category="export",
    )
    EXPORT_OPTIMIZE = EnvConfig(
        name="EXPORT_OPTIMIZE",
        option="optimize_export",
        default=True,
        var_type=bool,
        description="Prune empty synthesized structure before serialization",
        category="export",
    )

    # -------------------------------------------------------------------------
    # Performance Settings
    # -------------------------------------------------------------------------
    EXPORT_COMBINE_CSS = EnvConfig(
        name="EXPORT_COMBINE_CSS",
        option="combine_css_files",
        default=False,
        var_type=bool,
        description="Request CSS file combination on the destination page",
        category="performance",
    )
    EXPORT_CRITICAL_CSS = EnvConfig(
        name="EXPORT_CRITICAL_CSS",
        option="inline_critical_css",
        default=False,
        var_type=bool,
        description="Request critical CSS inlining on the destination page",
        category="performance",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    EXPORT_LOG_LEVEL = EnvConfig(
        name="EXPORT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )


# =============================================================================
# Value Conversion
# =============================================================================

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _to_bool(raw: str) -> bool | None:
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    return None


def _read(config: EnvConfig) -> Any:
    raw = os.environ.get(config.name)
    if raw is None:
        return config.default
    if config.var_type is bool:
        flag = _to_bool(raw)
        return config.default if flag is None else flag
    return raw.strip() or config.default


# =============================================================================
# Lookup
# =============================================================================


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Resolve one setting.

    A non-None `override` is returned as is. Otherwise the environment value
    is converted to the member's type; unset, blank or unreadable values
    give the default.

    Example:
        >>> get_environment(EnvVar.EXPORT_VALIDATE)
        True
        >>> get_environment(EnvVar.EXPORT_DESTINATION, override="divi")
        'divi'
    """
    if override is not None:
        return override
    return _read(env_var.value)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """Members in declaration order, optionally restricted to one category."""
    return [var for var in EnvVar if category is None or var.value.category == category]


# =============================================================================
# Export Options
# =============================================================================


@dataclass(frozen=True)
class ExportOptions:
    """Flags controlling a single export call.

    Attributes:
        destination: Name of the destination table to export with.
        export_layouts: Emit a reusable layout of the converted page.
        create_global_presets: Derive shared presets per module type.
        validate_export: Run the validator (findings are logged, never fatal).
        optimize_export: Prune empty synthesized structure.
        combine_css_files: Request CSS file combination on the page.
        inline_critical_css: Request critical CSS inlining on the page.
    """

    destination: str = "divi"
    export_layouts: bool = False
    create_global_presets: bool = False
    validate_export: bool = True
    optimize_export: bool = True
    combine_css_files: bool = False
    inline_critical_css: bool = False

    @classmethod
    def from_environment(cls, **overrides: Any) -> ExportOptions:
        """Build options from the environment.

        Non-None keyword overrides win over the environment. Unknown
        keywords raise TypeError, as the constructor would.
        """
        unknown = set(overrides) - {f.name for f in fields(cls)}
        if unknown:
            raise TypeError(f"Unknown export options: {', '.join(sorted(unknown))}")

        values = {
            var.value.option: get_environment(var, overrides.get(var.value.option))
            for var in EnvVar
            if var.value.option is not None
        }
        return cls(**values)


__all__ = [
    "EnvConfig",
    "EnvVar",
    "ExportOptions",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
]
