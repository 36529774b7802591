"""
Core link-graph building logic using pluggable components.
"""
import logging
import os
from typing import Iterable, List, Optional

from tqdm import tqdm

from .errors import ParseFailure
from .link_extractors import MarkdownLinkExtractor, filter_local_links, read_document
from .normalization import normalize_links_to_root, sanitize_root
from .protocols import IgnoreMatcher, LinkExtractor, LinkGraphNode
from .sources import discover_documents

logger = logging.getLogger(__name__)


class GraphBuilder:
    """
    Builds link graph nodes from documentation files.

    For every file, in the given order:
    1. Read and parse the document
    2. Extract all link destinations
    3. Keep the local ones
    4. Normalize them relative to the tree root

    Nodes are neither sorted nor deduplicated. Any unreadable document or
    link leaving the tree aborts the whole build.
    """

    def __init__(
        self,
        tree_root: str,
        link_extractor: Optional[LinkExtractor] = None,
        show_progress: bool = False,
    ):
        """
        Args:
            tree_root: Absolute root of the documentation tree
            link_extractor: Parses documents and extracts links (markdown by default)
            show_progress: Show progress bars via tqdm
        """
        self.tree_root = sanitize_root(tree_root)
        self.link_extractor = link_extractor or MarkdownLinkExtractor()
        self.show_progress = show_progress

    def build_node(self, abs_path: str) -> LinkGraphNode:
        """
        Build the node for a single document.

        Raises:
            ParseFailure: If the path is relative or the file can't be read/parsed
            PathEscapesRoot: If one of its links points outside of the tree root
        """
        if not os.path.isabs(abs_path):
            raise ParseFailure(f"will not parse a relative path: {abs_path}", path=abs_path)

        document = read_document(abs_path, self.link_extractor)
        relative_path = abs_path
        if abs_path.startswith(self.tree_root):
            relative_path = abs_path[len(self.tree_root):]

        local_links = filter_local_links(self.link_extractor.extract_links(document))
        normalized = normalize_links_to_root(self.tree_root, relative_path, local_links)

        return LinkGraphNode(
            relative_path=relative_path,
            document=document,
            links=tuple(normalized),
        )

    def build_graph(self, abs_paths: Iterable[str]) -> List[LinkGraphNode]:
        """
        Build one node per path.

        Args:
            abs_paths: Absolute paths of documents, already filtered

        Returns:
            Nodes in the same order as abs_paths
        """
        abs_paths = list(abs_paths)
        logger.info(f"Building link graph from {len(abs_paths)} documents...")

        nodes = [
            self.build_node(path)
            for path in tqdm(
                abs_paths,
                disable=not self.show_progress,
                desc="Extracting links",
                unit="docs",
            )
        ]

        total_links = sum(len(n.links) for n in nodes)
        logger.info(f"Graph complete: {len(nodes)} nodes, {total_links} local links")
        return nodes


def build_link_graph_nodes(
    tree_root: str,
    base_names: Iterable[str],
    extensions: Iterable[str],
    respect_gitignore: bool,
    link_extractor: Optional[LinkExtractor] = None,
    matcher: Optional[IgnoreMatcher] = None,
    show_progress: bool = False,
) -> List[LinkGraphNode]:
    """
    Discover documents under tree_root and build their link graph nodes.

    Documents are searched for by basename and by extension; both can be
    combined, e.g. {README, CHANGELOG} and ".md". Every document gets a node,
    but its links may point to files without a node, or to nothing at all.

    Args:
        tree_root: Absolute path of the documentation root
        base_names: Exact file names to look for
        extensions: Extensions to look for, each starting with '.'
        respect_gitignore: Drop files matched by the repository's gitignore
        link_extractor: Parses documents and extracts links (markdown by default)
        matcher: Ignore matcher overriding the default GitIgnoreMatcher
        show_progress: Show progress bars via tqdm

    Returns:
        List of nodes in discovery order

    Raises:
        ConfigurationError: On invalid discovery criteria or relative tree_root
        IgnoreMatcherUnavailable: If gitignore filtering can't be set up
        ParseFailure: If a document can't be read or parsed
        PathEscapesRoot: If a link points outside of tree_root
    """
    paths = discover_documents(
        tree_root,
        base_names,
        extensions,
        respect_gitignore,
        matcher=matcher,
    )
    builder = GraphBuilder(tree_root, link_extractor=link_extractor, show_progress=show_progress)
    return builder.build_graph(paths)
