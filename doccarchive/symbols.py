"""Insertion-ordered symbol collections keyed by symbol identity."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .links import comparison_key, external_link
from .models import IdentifierURL


class SymbolSet:
    """A set of identifier URLs that remembers discovery order.

    Membership uses :func:`comparison_key`; adding a URL whose key is already
    present keeps the first occurrence.
    """

    def __init__(self, urls: Optional[Iterable[IdentifierURL]] = None) -> None:
        self._items: Dict[IdentifierURL, IdentifierURL] = {}
        if urls is not None:
            for url in urls:
                self.add(url)

    def add(self, url: IdentifierURL) -> None:
        self._items.setdefault(comparison_key(url), url)

    def difference(self, other: Iterable[IdentifierURL]) -> "SymbolSet":
        """Return the symbols of this set whose key does not occur in ``other``."""
        other_keys = {comparison_key(url) for url in other}
        return SymbolSet(url for key, url in self._items.items() if key not in other_keys)

    def external_links(self) -> List[str]:
        """Return the ``doc:`` link of each symbol, without repeats, in set order."""
        links: Dict[str, None] = {}
        for url in self:
            links.setdefault(external_link(url), None)
        return list(links)

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, IdentifierURL):
            return False
        return comparison_key(url) in self._items

    def __iter__(self) -> Iterator[IdentifierURL]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolSet):
            return self._items.keys() == other._items.keys()
        return NotImplemented

    def __repr__(self) -> str:
        return f"SymbolSet({[url.absolute_string for url in self]!r})"


__all__ = ["SymbolSet"]
