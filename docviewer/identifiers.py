r"""Generate URL- and selector-safe anchor identifiers.

Colons and periods are valid in HTML ids but awkward in jQuery selectors, so
identifiers are restricted to ``[A-Za-z0-9_-]`` and always start with a letter.
Each :class:`IdentifierAllocator` owns the registry of identifiers it has
issued; unique allocations never repeat within that registry.

Example
-------
>>> from docviewer.identifiers import IdentifierAllocator
>>> allocator = IdentifierAllocator()
>>> allocator.allocate("Widgets")
'widgets'
>>> allocator.allocate("Widgets")
'widgets0'
>>> allocator.allocate("GET /widgets/:id", unique=False)
'get-widgets-id'
"""

from __future__ import annotations

import collections.abc as cabc
import itertools
import re

_MARKUP = re.compile(r"<[^>]+>")
_ENTITY = re.compile(r"&[^;]+;")
_ASCII_LETTER = re.compile(r"[a-zA-Z]")
_LEADING_NON_LETTERS = re.compile(r"^[^a-zA-Z]+")
_INVALID_RUN = re.compile(r"[^-a-zA-Z0-9_]+")


class IdentifierAllocator:
    """Issue anchor identifiers, tracking the unique ones already handed out."""

    def __init__(
        self, seed: cabc.Iterable[str] = (), *, fallback_prefix: str = "pod"
    ) -> None:
        """Initialize the allocator.

        Parameters
        ----------
        seed : Iterable[str], optional
            Identifiers already in use on the same page (for example the
            ``issued`` set of a sibling document's allocator).
        fallback_prefix : str, optional
            Letters prepended to text that contains no ASCII letters at all.
        """
        self._issued: set[str] = set(seed)
        self.fallback_prefix = fallback_prefix

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._issued

    def __len__(self) -> int:
        return len(self._issued)

    @property
    def issued(self) -> frozenset[str]:
        """Return a snapshot of every identifier reserved so far."""
        return frozenset(self._issued)

    def normalize(self, text: str) -> str:
        """Return ``text`` reduced to a valid, possibly non-unique identifier."""
        identifier = _MARKUP.sub("", text.lower())
        identifier = _ENTITY.sub("", identifier).strip()
        if not _ASCII_LETTER.search(identifier):
            identifier = f"{self.fallback_prefix}{identifier}"
        identifier = _LEADING_NON_LETTERS.sub("", identifier)
        return _INVALID_RUN.sub("-", identifier)

    def allocate(self, text: str, *, unique: bool = True) -> str:
        """Return an identifier for ``text``.

        Parameters
        ----------
        text : str
            Source text; may contain HTML tags and entities.
        unique : bool, optional
            When ``True`` (the default) the identifier is guaranteed unused in
            this allocator and is reserved. When ``False`` the normalized text
            is returned as-is, which is what cross-references need so they
            match the target's bare identifier.

        Returns
        -------
        str
            An identifier matching ``^[a-zA-Z][-a-zA-Z0-9_]*$``.
        """
        identifier = self.normalize(text)
        if not unique:
            return identifier
        candidate = identifier
        counter = itertools.count()
        while candidate in self._issued:
            candidate = f"{identifier}{next(counter)}"
        self._issued.add(candidate)
        return candidate


__all__ = ["IdentifierAllocator"]
