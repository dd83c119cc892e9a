"""Typed dataclasses describing docviewer configuration."""

from __future__ import annotations

import dataclasses as dc

from docviewer.exceptions import ConfigError
from docviewer.styling import DEFAULT_LIST_CLASSES

DEFAULT_MARKERS: dict[str, str] = {
    "FIXME": "label-important",
    "TODO": "label-warning",
}
DEFAULT_ROUTE_METHODS: tuple[str, ...] = (
    "ANY",
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
)


@dc.dataclass(slots=True)
class DirectiveConfig:
    """How merge directives are recognised and enforced."""

    target: str = "docviewer"
    strict: bool = True


@dc.dataclass(slots=True)
class StylingConfig:
    """CSS classes applied to parameter lists after merging."""

    enabled: bool = True
    list_classes: dict[str, str] = dc.field(
        default_factory=lambda: dict(DEFAULT_LIST_CLASSES)
    )


@dc.dataclass(slots=True)
class RenderConfig:
    """Options for HTML rendering and the navigation index."""

    anchor_prefix: str = "#!/"
    pod_link_template: str = "https://metacpan.org/module/{target}"
    markers: dict[str, str] = dc.field(default_factory=lambda: dict(DEFAULT_MARKERS))
    route_methods: tuple[str, ...] = DEFAULT_ROUTE_METHODS
    sidebar_selector: str = "#sidebar"
    verbatim_language: str | None = None
    pygments_style: str = "monokai"


@dc.dataclass(slots=True)
class IdentifierConfig:
    """Identifier allocation settings."""

    fallback_prefix: str = "pod"

    def __post_init__(self) -> None:
        prefix = self.fallback_prefix
        if not prefix or not prefix[0].isascii() or not prefix[0].isalpha():
            msg = f"fallback_prefix must start with an ASCII letter, got {prefix!r}."
            raise ConfigError(msg)


@dc.dataclass(slots=True)
class ViewerConfig:
    """Complete configuration for processing and rendering doc trees."""

    directives: DirectiveConfig = dc.field(default_factory=DirectiveConfig)
    styling: StylingConfig = dc.field(default_factory=StylingConfig)
    rendering: RenderConfig = dc.field(default_factory=RenderConfig)
    identifiers: IdentifierConfig = dc.field(default_factory=IdentifierConfig)


__all__ = [
    "DEFAULT_MARKERS",
    "DEFAULT_ROUTE_METHODS",
    "ConfigError",
    "DirectiveConfig",
    "IdentifierConfig",
    "RenderConfig",
    "StylingConfig",
    "ViewerConfig",
]
