#!/usr/bin/env python
"""
Command line interface for the documentation checker.

Usage:
    checkdoc --root docs/ verify
    checkdoc --no-use-git-root --root . catlinks -o links.txt
    python -m checkdoc.cli verify
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Set

from .config import CheckdocConfig, DEFAULT_CONFIG
from .errors import CheckdocError
from .graph_builder import build_link_graph_nodes
from .resolver import build_path_set, ensure_directories_end_with_slash
from .sources import find_repository_root
from .validate import build_report, validate_reports

logger = logging.getLogger(__name__)

# Suffixes of link targets that are documentation themselves
DOC_SUFFIXES = ('.md', '/', 'README', 'CHANGELOG')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checkdoc",
        description="A markdown documentation validator intended to enforce a healthy "
                    "documentation in settings such as a fat repo.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-r", "--root",
        type=Path,
        default=Path("."),
        help="Path to the root of the markdown documentation hierarchy to validate"
    )
    parser.add_argument(
        "-g", "--use-git-root",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="From the given root, fall back to the repository's root. "
             "Fails if --root is not inside a git repository."
    )
    parser.add_argument(
        "--respect-git-ignore",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Check all potential documents against the repository's gitignore files "
             "(default: from configuration, enabled)"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="JSON configuration file (base_names, extensions, implicit_indexes, ...)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Detailed output"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only report problems and suppress progress bars"
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    subparsers.add_parser(
        "verify",
        help="Runs sanity checks on the documentation",
        description="Check the markdown documentation found in a directory hierarchy for "
                    "orphan documents (not linked to from anywhere) and broken local links."
    )

    catlinks_parser = subparsers.add_parser(
        "catlinks",
        help="Dumps internal links found in the documentation files",
        description="Dump local links found in documentation files that point to "
                    "non-documentation files. HTTP, FTP or mail links are not included."
    )
    catlinks_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="File to write the output to. Writes to stdout if not set."
    )
    return parser


def resolve_tree_root(root: Path, use_git_root: bool) -> str:
    """
    Returns the absolute tree root to check.

    With use_git_root, the root of the git repository containing root is used
    instead of root itself.
    """
    abs_root = os.path.abspath(root)
    if use_git_root:
        return find_repository_root(abs_root)
    return abs_root


def verify_tree(tree_root: str, config: CheckdocConfig, show_progress: bool = False) -> bool:
    """Build the link graph of tree_root and validate it. Returns True if valid."""
    logger.info(f"Considering basenames {config.base_names} and extensions {config.extensions}")
    nodes = build_link_graph_nodes(
        tree_root,
        config.base_names,
        config.extensions,
        config.respect_gitignore,
        show_progress=show_progress,
    )
    logger.debug(f"Found {len(nodes)} nodes at:")
    for node in nodes:
        logger.debug(f"\t{node.relative_path}")

    reports = build_report(tree_root, nodes, config.implicit_indexes, exempt=config.root_document)
    if not validate_reports(reports, exempt=config.root_document):
        logger.error(f"Verify failed on tree root {tree_root}")
        return False
    logger.info(f"Validated doc tree root {tree_root}")
    return True


def is_doc_path(path: str) -> bool:
    """True for targets that are documents or directories (implicitly documents)."""
    return path.endswith(DOC_SUFFIXES)


def collect_local_links(tree_root: str, config: CheckdocConfig, show_progress: bool = False) -> List[str]:
    """
    Returns the local link targets that are not documentation, sorted.

    Directories are reported with a trailing '/' and then discarded, as a
    link to a directory implicitly points to its README.
    """
    nodes = build_link_graph_nodes(
        tree_root,
        config.base_names,
        config.extensions,
        config.respect_gitignore,
        show_progress=show_progress,
    )
    local_paths: Set[str] = ensure_directories_end_with_slash(tree_root, build_path_set(nodes))
    return sorted(path for path in local_paths if not is_doc_path(path))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(levelname)s: %(message)s'
    )

    try:
        config = CheckdocConfig.load(args.config) if args.config else DEFAULT_CONFIG
        if args.respect_git_ignore is not None:
            config = CheckdocConfig.from_dict(
                {**config.to_dict(), 'respect_gitignore': args.respect_git_ignore}
            )

        tree_root = resolve_tree_root(args.root, args.use_git_root)
        show_progress = not args.quiet

        if args.command == "verify":
            logger.info(f"Running verify on tree root {tree_root}")
            return 0 if verify_tree(tree_root, config, show_progress=show_progress) else 1

        # catlinks
        paths = collect_local_links(tree_root, config, show_progress=False)
        if args.output is None:
            for path in paths:
                print(path)
        else:
            with open(args.output, 'w', encoding='utf-8') as f:
                for path in paths:
                    f.write(path + '\n')
        return 0

    except (CheckdocError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
