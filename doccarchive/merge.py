"""Combining several documentation archives into one archive."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .config import DEFAULT_MERGE_OUTPUT_NAME
from .indexer import SymbolIndexer, find_framework_name, iter_archive_entries
from .links import comparison_key
from .logging import get_logger
from .models import IdentifierURL, MergeOutcome, MergeRequest

ARCHIVE_PATH_EXTENSION = "doccarchive"
CATALOG_PATH_EXTENSION = "docc"
COMBINED_INDEX_FILENAME = "combined-index.json"
DEFAULT_LANDING_TITLE = "Documentation"


class MergeValidationError(ValueError):
    """Raised when merge inputs are rejected before any file is written."""


def validate_merge_request(
    archives: Sequence[Path | str],
    landing_page_catalog: Path | str | None = None,
    output: Path | str | None = None,
    *,
    cwd: Path | None = None,
    default_output_name: str = DEFAULT_MERGE_OUTPUT_NAME,
) -> MergeRequest:
    """Check merge inputs and resolve the output location."""
    if not archives:
        raise MergeValidationError("Require at least one documentation archive to merge.")

    archive_paths = [Path(archive) for archive in archives]
    for archive in archive_paths:
        _check_directory(archive, ARCHIVE_PATH_EXTENSION, "archive")

    catalog_path = Path(landing_page_catalog) if landing_page_catalog else None
    if catalog_path is not None:
        _check_directory(catalog_path, CATALOG_PATH_EXTENSION, "catalog")

    if output is not None:
        output_path = Path(output)
        parent = output_path.parent
        if not parent.is_dir():
            raise MergeValidationError(
                f"Missing intermediate directory at '{parent}' for output path"
            )
    else:
        output_path = (cwd or Path.cwd()) / default_output_name

    return MergeRequest(
        archives=archive_paths,
        landing_page_catalog=catalog_path,
        output=output_path,
    )


def _check_directory(path: Path, extension: str, label: str) -> None:
    actual = path.suffix[1:]
    if not actual:
        raise MergeValidationError(
            f"Missing '{extension}' path extension for {label} '{path}'"
        )
    if actual.lower() != extension:
        raise MergeValidationError(
            f"Path extension '{actual}' is not '{extension}' for {label} '{path}'"
        )
    if not path.is_dir():
        raise MergeValidationError(f"No directory exists at '{path}'")


class MergeAction:
    """Copies archives into one output tree and writes a combined index.

    Symbols are matched across archives with :func:`comparison_key`. When two
    archives declare the same symbol the earlier archive keeps it and the
    later manifest is left out of the combined output. Archives are told apart
    by position, so inputs sharing a directory name still collide.

    A manifest whose file would land on a path an earlier archive already
    fills is a conflict: it is neither copied nor counted.
    """

    def __init__(self, request: MergeRequest, indexer: SymbolIndexer | None = None) -> None:
        self.request = request
        self.indexer = indexer or SymbolIndexer()
        self.logger = get_logger("merge")

    def perform(self) -> MergeOutcome:
        request = self.request
        self.logger.info(
            "Merging %d archive(s) into %s", len(request.archives), request.output
        )

        owners: Dict[IdentifierURL, int] = {}
        occupied: Dict[Path, int] = {}
        collisions: Dict[str, List[str]] = {}
        conflicts: Dict[str, List[str]] = {}
        copy_plans: List[List[Path]] = []
        archive_entries: List[Dict[str, object]] = []

        # Index everything before writing so read errors leave the output untouched.
        for index, archive in enumerate(request.archives):
            symbols, excluded = self._claim_symbols(
                index, owners, occupied, collisions, conflicts
            )
            copy_plans.append(self._plan_copy(index, occupied, excluded))
            archive_entries.append(
                {
                    "name": archive.name,
                    "framework": find_framework_name(archive, self.indexer.manifest_suffix),
                    "symbols": [url.absolute_string for url in symbols],
                }
            )

        landing_title, landing_abstract = self._landing_page(request.landing_page_catalog)

        request.output.mkdir(exist_ok=True)
        for archive, plan in zip(request.archives, copy_plans):
            self._copy_archive(archive, request.output, plan)

        index_payload = {
            "title": landing_title,
            "abstract": landing_abstract,
            "archives": archive_entries,
        }
        (request.output / COMBINED_INDEX_FILENAME).write_text(
            json.dumps(index_payload, indent=2, sort_keys=True), encoding="utf-8"
        )

        outcome = MergeOutcome(
            output=request.output,
            symbol_count=len(owners),
            collisions=collisions,
            conflicts=conflicts,
        )
        self.logger.info(
            "Merged %d symbols with %d collision(s) and %d path conflict(s)",
            outcome.symbol_count,
            len(collisions),
            len(conflicts),
        )
        return outcome

    # ------------------------------------------------------------------
    # Internals

    def _claim_symbols(
        self,
        index: int,
        owners: Dict[IdentifierURL, int],
        occupied: Dict[Path, int],
        collisions: Dict[str, List[str]],
        conflicts: Dict[str, List[str]],
    ) -> Tuple[List[IdentifierURL], Set[Path]]:
        archives = self.request.archives
        archive = archives[index]
        claimed: List[IdentifierURL] = []
        excluded: Set[Path] = set()
        reported: Set[IdentifierURL] = set()
        for path, url in self.indexer.iter_symbol_manifests(archive):
            relative = path.relative_to(archive)
            key = comparison_key(url)
            owner = owners.get(key)
            if owner == index:
                continue
            if owner is not None:
                excluded.add(relative)
                if key in reported:
                    continue
                reported.add(key)
                collisions.setdefault(url.absolute_string, [archives[owner].name]).append(
                    archive.name
                )
                self.logger.warning(
                    "Symbol %s from %s already provided by %s; keeping the first",
                    url,
                    archive,
                    archives[owner],
                )
                continue
            holder = occupied.get(relative)
            if holder is not None:
                excluded.add(relative)
                conflicts.setdefault(relative.as_posix(), [archives[holder].name]).append(
                    archive.name
                )
                self.logger.warning(
                    "Symbol %s from %s would replace %s from %s; leaving it out",
                    url,
                    archive,
                    relative,
                    archives[holder],
                )
                continue
            owners[key] = index
            claimed.append(url)
        return claimed, excluded

    def _plan_copy(self, index: int, occupied: Dict[Path, int], excluded: Set[Path]) -> List[Path]:
        """Reserve this archive's free paths and return them in walk order."""
        archive = self.request.archives[index]
        plan: List[Path] = []
        for path in iter_archive_entries(archive):
            relative = path.relative_to(archive)
            if relative in excluded:
                continue
            if path.is_dir():
                plan.append(relative)
                continue
            holder = occupied.setdefault(relative, index)
            if holder != index:
                self.logger.debug(
                    "Keeping %s from %s; skipping copy from %s",
                    relative,
                    self.request.archives[holder].name,
                    archive.name,
                )
                continue
            plan.append(relative)
        return plan

    def _copy_archive(self, archive: Path, output: Path, plan: List[Path]) -> None:
        for relative in plan:
            source = archive / relative
            target = output / relative
            if source.is_dir():
                target.mkdir(exist_ok=True)
                continue
            if target.exists():
                self.logger.debug("Keeping existing %s in %s", relative, output)
                continue
            shutil.copy2(source, target)

    def _landing_page(self, catalog: Optional[Path]) -> Tuple[str, Optional[str]]:
        if catalog is None:
            return DEFAULT_LANDING_TITLE, None
        for article in sorted(catalog.rglob("*.md")):
            try:
                text = article.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                self.logger.warning("Skipping undecodable article %s: %s", article, exc)
                continue
            title: Optional[str] = None
            directive_depth = 0
            for line in text.splitlines():
                stripped = line.strip()
                if title is None:
                    if stripped.startswith("# "):
                        title = stripped[2:].strip()
                    continue
                # Skip directive blocks such as @Metadata { ... }.
                if directive_depth or stripped.startswith("@"):
                    directive_depth = max(
                        directive_depth + stripped.count("{") - stripped.count("}"), 0
                    )
                    continue
                if stripped and not stripped.startswith("#"):
                    return title, stripped
            if title:
                return title, None
        return DEFAULT_LANDING_TITLE, None


def merge_archives(
    archives: Sequence[Path | str],
    landing_page_catalog: Path | str | None = None,
    output: Path | str | None = None,
    *,
    cwd: Path | None = None,
    indexer: SymbolIndexer | None = None,
) -> MergeOutcome:
    """Validate the inputs and perform the merge."""
    request = validate_merge_request(archives, landing_page_catalog, output, cwd=cwd)
    return MergeAction(request, indexer=indexer).perform()


__all__ = [
    "ARCHIVE_PATH_EXTENSION",
    "CATALOG_PATH_EXTENSION",
    "COMBINED_INDEX_FILENAME",
    "MergeAction",
    "MergeValidationError",
    "merge_archives",
    "validate_merge_request",
]
