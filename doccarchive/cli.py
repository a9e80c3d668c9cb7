"""CLI entrypoints for doccarchive commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .changelog import ChangeLogWriter
from .config import ConfigError, load_config
from .differ import ArchiveDiffer
from .indexer import SymbolIndexer
from .logging import configure_logging
from .merge import MergeAction, MergeValidationError, validate_merge_request


_LOGGING_FLAGS = (
    (("-v", "--verbose"), "List every indexed symbol and skipped manifest."),
    (("-q", "--quiet"), "Only report warnings and errors."),
)


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands suppress defaults so flags given before the command survive.
    default: object = argparse.SUPPRESS if suppress_default else False
    for flags, help_text in _LOGGING_FLAGS:
        parser.add_argument(*flags, action="store_true", default=default, help=help_text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doccarchive",
        description="Compare and combine generated documentation archives.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparsers.add_parser(
        "diff",
        help="Produce a change log of symbols added and removed between two archives.",
    )
    _add_logging_options(diff_parser, suppress_default=True)
    diff_parser.add_argument(
        "initial",
        metavar="initialDocCArchive",
        help="The path to the initial documentation archive to be compared.",
    )
    diff_parser.add_argument(
        "newer",
        metavar="newerDocCArchive",
        help="The path to the newer documentation archive to be compared.",
    )
    diff_parser.add_argument(
        "--initial-version",
        default=None,
        help="Version label of the initial archive used in the change log.",
    )
    diff_parser.add_argument(
        "--newer-version",
        default=None,
        help="Version label of the newer archive used in the change log.",
    )
    diff_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the change log instead of writing it.",
    )

    merge_parser = subparsers.add_parser(
        "merge",
        help="Merge a list of documentation archives into a combined archive.",
    )
    _add_logging_options(merge_parser, suppress_default=True)
    merge_parser.add_argument(
        "archives",
        nargs="+",
        metavar="archive-path",
        help="Paths to '.doccarchive' directories to combine into a combined archive.",
    )
    merge_parser.add_argument(
        "--landing-page-catalog",
        metavar="catalog-path",
        default=None,
        help="Path to a '.docc' catalog directory with content for the landing page.",
    )
    merge_parser.add_argument(
        "-o",
        "--output-path",
        default=None,
        help="The location where the combined documentation archive is written.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for doccarchive commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    try:
        config = load_config(Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    indexer = SymbolIndexer(manifest_suffix=config.indexer.manifest_suffix)

    if args.command == "diff":
        differ = ArchiveDiffer(indexer, placeholder_name=config.changelog.placeholder_name)
        writer = ChangeLogWriter()
        initial_version = args.initial_version or config.changelog.initial_version
        newer_version = args.newer_version or config.changelog.newer_version
        try:
            comparison = differ.compare(args.initial, args.newer)
            if args.dry_run:
                print(
                    writer.render(
                        comparison,
                        initial_version=initial_version,
                        newer_version=newer_version,
                    ),
                    end="",
                )
                return
            changelog_path = writer.write(
                comparison,
                output_dir=config.changelog.output_dir,
                initial_version=initial_version,
                newer_version=newer_version,
            )
        except OSError as exc:
            parser.exit(1, f"doccarchive diff failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Change log created at {_relativize(changelog_path)}")
    elif args.command == "merge":
        try:
            request = validate_merge_request(
                args.archives,
                args.landing_page_catalog,
                args.output_path,
                default_output_name=config.merge.default_output_name,
            )
        except MergeValidationError as exc:
            parser.exit(1, f"{exc}\n")
        try:
            outcome = MergeAction(request, indexer=indexer).perform()
        except (OSError, ValueError) as exc:
            parser.exit(1, f"doccarchive merge failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Combined archive created at {_relativize(outcome.output)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
