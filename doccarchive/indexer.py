"""Archive traversal, symbol discovery and framework name resolution."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from .logging import get_logger
from .manifest import decode_manifest
from .models import DOCUMENTATION_MARKER, IdentifierURL
from .symbols import SymbolSet

DEFAULT_MANIFEST_SUFFIX = ".json"

PathLike = Union[str, "os.PathLike[str]"]


def _can_enumerate(root: Path) -> bool:
    return root.is_dir() and os.access(root, os.R_OK | os.X_OK)


def iter_archive_entries(root: PathLike) -> Iterator[Path]:
    """Yield every non-hidden file and directory below ``root`` in pre-order.

    Entries come back in the order the file system lists them. Roots that
    cannot be enumerated yield nothing; errors below the root propagate.
    """
    root_path = Path(root)
    if not _can_enumerate(root_path):
        return
    yield from _walk(root_path)


def _walk(directory: Path) -> Iterator[Path]:
    with os.scandir(directory) as scanner:
        entries = [entry for entry in scanner if not entry.name.startswith(".")]
    for entry in entries:
        path = Path(entry.path)
        yield path
        if entry.is_dir(follow_symlinks=False):
            yield from _walk(path)


def _read_manifest_bytes(path: Path) -> bytes:
    return path.read_bytes()


class SymbolIndexer:
    """Discovers the identifier URL of every symbol manifest in an archive."""

    def __init__(self, manifest_suffix: str = DEFAULT_MANIFEST_SUFFIX) -> None:
        self.manifest_suffix = manifest_suffix
        self.logger = get_logger("indexer")

    def iter_symbol_manifests(self, root: PathLike) -> Iterator[Tuple[Path, IdentifierURL]]:
        """Lazily yield ``(manifest path, identifier URL)`` pairs under ``root``."""
        for path in iter_archive_entries(root):
            if not path.name.endswith(self.manifest_suffix) or path.is_dir():
                continue
            # Read errors are fatal for the walk.
            data = _read_manifest_bytes(path)
            result = decode_manifest(data)
            if not result.ok:
                self.logger.debug("Skipping %s: %s", path, result.error)
                continue
            yield path, result.manifest.identifier_url  # type: ignore[union-attr]

    def iter_symbol_urls(self, root: PathLike) -> Iterator[IdentifierURL]:
        """Lazily yield one identifier URL per decodable manifest under ``root``."""
        for _, url in self.iter_symbol_manifests(root):
            yield url

    def collect(self, root: PathLike) -> SymbolSet:
        """Return every symbol of the archive as an insertion-ordered set."""
        symbols = SymbolSet(self.iter_symbol_urls(root))
        self.logger.debug("Indexed %d symbols in %s", len(symbols), root)
        return symbols


def find_framework_name(
    root: PathLike, manifest_suffix: str = DEFAULT_MANIFEST_SUFFIX
) -> Optional[str]:
    """Return the path component after the first ``documentation`` component.

    The first matching entry in traversal order wins, so archives documenting
    several modules resolve to whichever the file system lists first.
    """
    root_path = Path(root)
    for path in iter_archive_entries(root_path):
        components = path.relative_to(root_path).parts
        for index, component in enumerate(components[:-1]):
            if component != DOCUMENTATION_MARKER:
                continue
            name = components[index + 1]
            # A manifest listed next to its directory resolves to the file stem.
            if manifest_suffix and name.endswith(manifest_suffix) and len(name) > len(manifest_suffix):
                name = name[: -len(manifest_suffix)]
            return name
    return None


__all__ = [
    "DEFAULT_MANIFEST_SUFFIX",
    "SymbolIndexer",
    "find_framework_name",
    "iter_archive_entries",
]
