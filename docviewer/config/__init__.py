"""Load and validate docviewer configuration.

This subpackage parses an optional ``docviewer.yaml`` file into strongly typed
dataclasses (:class:`ViewerConfig` and its sections) consumed by
:class:`~docviewer.document.DocTree`. The primary entry point is
:func:`load_viewer_config`; constructing :class:`ViewerConfig` with no
arguments yields the defaults.

Examples
--------
>>> from docviewer.config import ViewerConfig
>>> ViewerConfig().rendering.anchor_prefix
'#!/'
"""

from .loader import build_viewer_config, load_viewer_config
from .models import (
    ConfigError,
    DirectiveConfig,
    IdentifierConfig,
    RenderConfig,
    StylingConfig,
    ViewerConfig,
)

__all__ = [
    "ConfigError",
    "DirectiveConfig",
    "IdentifierConfig",
    "RenderConfig",
    "StylingConfig",
    "ViewerConfig",
    "build_viewer_config",
    "load_viewer_config",
]
