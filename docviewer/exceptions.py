"""Exception hierarchy raised while transforming and rendering doc trees."""

from __future__ import annotations

import collections.abc as cabc


class DocViewerError(Exception):
    """Base class for every error raised by docviewer."""


class StructureError(DocViewerError):
    """Raised when a tree node violates the parser input contract.

    Attributes
    ----------
    kind : str | None
        Element name of the offending node, if it was an element.
    trail : tuple[str, ...]
        Names of the enclosing elements, outermost first.
    section : str | None
        Level-3 section being rendered when the error occurred, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        trail: cabc.Sequence[str] = (),
        section: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.trail = tuple(trail)
        self.section = section

    def __str__(self) -> str:
        parts = [self.message]
        if self.trail:
            parts.append(f"at {' > '.join(self.trail)}")
        if self.section:
            parts.append(f"in section {self.section!r}")
        return " ".join(parts)


class MergeTargetNotFoundError(DocViewerError, LookupError):
    """Raised when a merge directive names a section with no parameter list."""

    def __init__(self, reference: str, kind: str, section: str | None) -> None:
        msg = (
            f"{kind.lower()}-from directive in section {section!r} refers to "
            f"{reference!r}, which has no {kind} definition list."
        )
        super().__init__(msg)
        self.reference = reference
        self.kind = kind
        self.section = section


class DirectiveError(DocViewerError):
    """Raised when a merge directive cannot be applied where it appears."""


class ConfigError(DocViewerError, ValueError):
    """Raised when the viewer configuration is invalid or incomplete."""


__all__ = [
    "ConfigError",
    "DirectiveError",
    "DocViewerError",
    "MergeTargetNotFoundError",
    "StructureError",
]
