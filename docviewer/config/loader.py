"""Load viewer configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML

from docviewer.exceptions import ConfigError

from .helpers import (
    _optional_str,
    _require_bool,
    _require_str,
    _section,
    _string_mapping,
    _string_tuple,
)
from .models import (
    DirectiveConfig,
    IdentifierConfig,
    RenderConfig,
    StylingConfig,
    ViewerConfig,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_viewer_config(path: Path) -> ViewerConfig:
    """Load the YAML configuration controlling merging and rendering.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``docviewer.yaml``).

    Returns
    -------
    ViewerConfig
        Parsed configuration; keys missing from the file keep their defaults.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a section or value has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docviewer.config import load_viewer_config
    >>> config = load_viewer_config(Path("docviewer.yaml"))  # doctest: +SKIP
    >>> config.directives.target  # doctest: +SKIP
    'docviewer'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    return build_viewer_config(loaded)


def build_viewer_config(raw: typ.Mapping[str, typ.Any]) -> ViewerConfig:
    """Build a :class:`ViewerConfig` from an already parsed mapping."""
    return ViewerConfig(
        directives=_build_directive_config(_section(raw, "directives")),
        styling=_build_styling_config(_section(raw, "styling")),
        rendering=_build_render_config(_section(raw, "rendering")),
        identifiers=_build_identifier_config(_section(raw, "identifiers")),
    )


def _build_directive_config(payload: typ.Mapping[str, typ.Any]) -> DirectiveConfig:
    base = DirectiveConfig()
    return DirectiveConfig(
        target=_require_str(payload, "target", base.target),
        strict=_require_bool(payload, "strict", base.strict),
    )


def _build_styling_config(payload: typ.Mapping[str, typ.Any]) -> StylingConfig:
    base = StylingConfig()
    return StylingConfig(
        enabled=_require_bool(payload, "enabled", base.enabled),
        list_classes=_string_mapping(payload, "list_classes", base.list_classes),
    )


def _build_render_config(payload: typ.Mapping[str, typ.Any]) -> RenderConfig:
    base = RenderConfig()
    pod_link_template = _require_str(
        payload, "pod_link_template", base.pod_link_template
    )
    if "{target}" not in pod_link_template:
        msg = "rendering.pod_link_template must contain a '{target}' placeholder."
        raise ConfigError(msg)
    return RenderConfig(
        anchor_prefix=_require_str(payload, "anchor_prefix", base.anchor_prefix),
        pod_link_template=pod_link_template,
        markers=_string_mapping(payload, "markers", base.markers),
        route_methods=_string_tuple(payload, "route_methods", base.route_methods),
        sidebar_selector=_require_str(
            payload, "sidebar_selector", base.sidebar_selector
        ),
        verbatim_language=_optional_str(payload.get("verbatim_language")),
        pygments_style=_require_str(payload, "pygments_style", base.pygments_style),
    )


def _build_identifier_config(payload: typ.Mapping[str, typ.Any]) -> IdentifierConfig:
    base = IdentifierConfig()
    return IdentifierConfig(
        fallback_prefix=_require_str(payload, "fallback_prefix", base.fallback_prefix)
    )


__all__ = ["build_viewer_config", "load_viewer_config"]
