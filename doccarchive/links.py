"""Identity and external link helpers for identifier URLs."""

from __future__ import annotations

from typing import Union

from .models import DOCUMENTATION_MARKER, IdentifierURL

EXTERNAL_LINK_PREFIX = "doc:"


def comparison_key(url: IdentifierURL) -> IdentifierURL:
    """Return the value that decides whether two symbols are the same symbol.

    Shared by diffing and merging so both agree on symbol identity. The URL is
    already a structural value, so it serves as its own key.
    """
    return url


def external_link(url: Union[IdentifierURL, str]) -> str:
    """Rewrite an identifier URL into a ``doc:`` link usable outside its archive.

    Everything before the first ``documentation`` path segment is dropped and
    every remaining segment is followed by ``/``. URLs without that segment are
    returned as their absolute string.
    """
    if isinstance(url, str):
        url = IdentifierURL.parse(url)

    components = url.path_components
    try:
        start = components.index(DOCUMENTATION_MARKER)
    except ValueError:
        return url.absolute_string
    return EXTERNAL_LINK_PREFIX + "".join(f"{segment}/" for segment in components[start:])


__all__ = ["EXTERNAL_LINK_PREFIX", "comparison_key", "external_link"]
