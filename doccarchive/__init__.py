"""Symbol-level diffing and merging of generated documentation archives."""

from .differ import ArchiveComparison, ArchiveDiffer, DiffResult, diff
from .indexer import SymbolIndexer, find_framework_name, iter_archive_entries
from .links import comparison_key, external_link
from .merge import MergeAction, MergeValidationError, merge_archives, validate_merge_request
from .models import IdentifierURL, MergeOutcome, MergeRequest
from .symbols import SymbolSet

__all__ = [
    "ArchiveComparison",
    "ArchiveDiffer",
    "DiffResult",
    "IdentifierURL",
    "MergeAction",
    "MergeOutcome",
    "MergeRequest",
    "MergeValidationError",
    "SymbolIndexer",
    "SymbolSet",
    "comparison_key",
    "diff",
    "external_link",
    "find_framework_name",
    "iter_archive_entries",
    "merge_archives",
    "validate_merge_request",
]
