"""Symbol-level comparison of two documentation archives."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .config import DEFAULT_PLACEHOLDER_NAME
from .indexer import PathLike, SymbolIndexer, find_framework_name
from .logging import get_logger
from .models import IdentifierURL
from .symbols import SymbolSet


@dataclass(frozen=True)
class DiffResult:
    """Symbols added to and removed from the newer archive."""

    additions: SymbolSet
    removals: SymbolSet

    @property
    def addition_links(self) -> List[str]:
        return self.additions.external_links()

    @property
    def removal_links(self) -> List[str]:
        return self.removals.external_links()

    @property
    def is_empty(self) -> bool:
        return not self.additions and not self.removals


def diff(old: Iterable[IdentifierURL], new: Iterable[IdentifierURL]) -> DiffResult:
    """Return ``new - old`` as additions and ``old - new`` as removals."""
    old_set = old if isinstance(old, SymbolSet) else SymbolSet(old)
    new_set = new if isinstance(new, SymbolSet) else SymbolSet(new)
    return DiffResult(
        additions=new_set.difference(old_set),
        removals=old_set.difference(new_set),
    )


@dataclass(frozen=True)
class ArchiveComparison:
    """Outcome of comparing two archives on disk."""

    initial: Path
    newer: Path
    framework_name: str
    result: DiffResult


class ArchiveDiffer:
    """Indexes two archives and computes their symbol differences."""

    def __init__(
        self,
        indexer: SymbolIndexer | None = None,
        *,
        placeholder_name: str = DEFAULT_PLACEHOLDER_NAME,
    ) -> None:
        self.indexer = indexer or SymbolIndexer()
        self.placeholder_name = placeholder_name
        self.logger = get_logger("differ")

    def compare(self, initial: PathLike, newer: PathLike) -> ArchiveComparison:
        initial_path = Path(initial)
        newer_path = Path(newer)

        initial_symbols = self.indexer.collect(initial_path)
        newer_symbols = self.indexer.collect(newer_path)
        self._log_symbols("Initial archive", initial_symbols)
        self._log_symbols("Newer archive", newer_symbols)

        result = diff(initial_symbols, newer_symbols)
        self._log_symbols("Additions to newer archive", result.additions)
        self._log_symbols("Removals from initial archive", result.removals)
        self.logger.info(
            "Found %d additions and %d removals between %s and %s",
            len(result.additions),
            len(result.removals),
            initial_path.name,
            newer_path.name,
        )

        return ArchiveComparison(
            initial=initial_path,
            newer=newer_path,
            framework_name=self.resolve_framework_name(initial_path, newer_path),
            result=result,
        )

    def resolve_framework_name(self, initial: Path, newer: Path) -> str:
        """Try the initial archive, then the newer one, then the placeholder."""
        for archive in (initial, newer):
            name = find_framework_name(archive, self.indexer.manifest_suffix)
            if name:
                return name
        self.logger.warning(
            "No framework name found in %s or %s; using %s",
            initial,
            newer,
            self.placeholder_name,
        )
        return self.placeholder_name

    def _log_symbols(self, label: str, symbols: SymbolSet) -> None:
        self.logger.debug("%s (%d symbols):", label, len(symbols))
        for url in symbols:
            self.logger.debug("  %s", url)


__all__ = ["ArchiveComparison", "ArchiveDiffer", "DiffResult", "diff"]
