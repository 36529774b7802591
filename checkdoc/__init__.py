"""
Documentation link checker.

This package builds a link graph from a tree of markdown documents and
reports orphan documents and dead local links.
"""

from .protocols import LinkGraphNode, NodeReport, IgnoreMatcher, LinkExtractor
from .errors import (
    CheckdocError,
    ConfigurationError,
    IgnoreMatcherUnavailable,
    PathEscapesRoot,
    ParseFailure,
)
from .config import CheckdocConfig, DEFAULT_CONFIG
from .sources import find_matching_files, discover_documents, GitIgnoreMatcher, find_repository_root
from .link_extractors import MarkdownLinkExtractor, filter_local_links, read_document
from .normalization import normalize_links_to_root, sanitize_root
from .graph_builder import GraphBuilder, build_link_graph_nodes
from .resolver import (
    build_path_set,
    resolve_implicit_paths,
    check_for_non_existing_paths,
    ensure_directories_end_with_slash,
)
from .validate import build_orphan_report, build_dead_link_report, build_report, validate_reports

__version__ = "0.1.0"

__all__ = [
    # Data model and protocols
    "LinkGraphNode",
    "NodeReport",
    "IgnoreMatcher",
    "LinkExtractor",
    # Errors
    "CheckdocError",
    "ConfigurationError",
    "IgnoreMatcherUnavailable",
    "PathEscapesRoot",
    "ParseFailure",
    # Configuration
    "CheckdocConfig",
    "DEFAULT_CONFIG",
    # Discovery
    "find_matching_files",
    "discover_documents",
    "GitIgnoreMatcher",
    "find_repository_root",
    # Extraction and normalization
    "MarkdownLinkExtractor",
    "filter_local_links",
    "read_document",
    "normalize_links_to_root",
    "sanitize_root",
    # Graph
    "GraphBuilder",
    "build_link_graph_nodes",
    # Resolution
    "build_path_set",
    "resolve_implicit_paths",
    "check_for_non_existing_paths",
    "ensure_directories_end_with_slash",
    # Validation
    "build_orphan_report",
    "build_dead_link_report",
    "build_report",
    "validate_reports",
]
