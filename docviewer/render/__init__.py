"""HTML rendering of processed doc trees and their navigation index."""

from .html import HtmlRenderer, beginning_tag, route_pattern
from .index import IndentedLines, NavigationIndexBuilder, route_anchor

__all__ = [
    "HtmlRenderer",
    "IndentedLines",
    "NavigationIndexBuilder",
    "beginning_tag",
    "route_anchor",
    "route_pattern",
]
