"""Core data models shared across doccarchive components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import unquote, urlsplit, urlunsplit

DOCUMENTATION_MARKER = "documentation"

# urlsplit silently removes these, so they are rejected instead.
_UNSAFE_CHARACTERS = frozenset("\t\r\n")


@dataclass(frozen=True)
class IdentifierURL:
    """Canonical address of a documented symbol inside an archive's namespace."""

    scheme: str
    host: str
    path: str
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, text: str) -> "IdentifierURL":
        """Parse an absolute URL string without normalizing it.

        Raises ``ValueError`` when the text has no scheme or holds whitespace
        that ``urlsplit`` would discard. The scheme keeps its original case.
        """
        if text != text.strip() or _UNSAFE_CHARACTERS.intersection(text):
            raise ValueError(f"Identifier URL contains whitespace: {text!r}")
        parts = urlsplit(text)
        if not parts.scheme:
            raise ValueError(f"Identifier URL has no scheme: {text!r}")
        return cls(
            scheme=text[: len(parts.scheme)],
            host=parts.netloc,
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    @property
    def path_components(self) -> List[str]:
        """Percent-decoded, non-empty path segments."""
        return [unquote(segment) for segment in self.path.split("/") if segment]

    @property
    def absolute_string(self) -> str:
        return urlunsplit((self.scheme, self.host, self.path, self.query, self.fragment))

    def __str__(self) -> str:
        return self.absolute_string


@dataclass
class MergeRequest:
    """Validated inputs for combining documentation archives."""

    archives: List[Path]
    landing_page_catalog: Optional[Path]
    output: Path


@dataclass
class MergeOutcome:
    """Summary of a completed merge."""

    output: Path
    symbol_count: int
    collisions: Dict[str, List[str]] = field(default_factory=dict)
    conflicts: Dict[str, List[str]] = field(default_factory=dict)
