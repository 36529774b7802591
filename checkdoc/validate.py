"""
Orphan and dead-link validation over a link graph.

Currently this checks that:
- there are no orphan documents (without inbound links), except for an
  optional exempt root document
- local links point to existing things: files, directories or the implicit
  index files of directories
"""
import logging
from typing import Dict, Iterable, List, Optional, Set

from .protocols import LinkGraphNode, NodeReport
from .resolver import build_path_set, resolve_implicit_paths

logger = logging.getLogger(__name__)


def build_orphan_report(
    resolved_path_set: Set[str],
    nodes: Iterable[LinkGraphNode],
    exempt: Optional[str] = None,
) -> Dict[str, bool]:
    """
    Tell for every node whether anything links to it.

    A node linking to itself is not detected as orphan.

    Args:
        resolved_path_set: Existing link targets, after implicit resolution
        nodes: Graph nodes
        exempt: Relative path never flagged as orphan

    Returns:
        Mapping of node relative path to orphan flag
    """
    return {
        node.relative_path: (
            node.relative_path not in resolved_path_set
            and node.relative_path != exempt
        )
        for node in nodes
    }


def build_dead_link_report(
    resolved_path_set: Set[str],
    nodes: Iterable[LinkGraphNode],
) -> Dict[str, List[str]]:
    """
    List the dead links of every node.

    resolved_path_set must contain every existing link target, so that any
    link missing from it is dead. Link order is preserved.
    """
    return {
        node.relative_path: [link for link in node.links if link not in resolved_path_set]
        for node in nodes
    }


def build_report(
    tree_root: str,
    nodes: List[LinkGraphNode],
    implicit_indexes: List[str],
    exempt: Optional[str] = None,
) -> Dict[str, NodeReport]:
    """
    Build a NodeReport for every node.

    Args:
        tree_root: Absolute root of the documentation tree
        nodes: Graph nodes built from tree_root
        implicit_indexes: Index file names satisfying a directory link
        exempt: Relative path never flagged as orphan

    Returns:
        Reports keyed by node relative path
    """
    raw_path_set = build_path_set(nodes)
    resolved = resolve_implicit_paths(tree_root, implicit_indexes, raw_path_set)
    logger.debug(f"{len(raw_path_set)} distinct link targets, {len(resolved)} after resolution")

    dead_links = build_dead_link_report(resolved, nodes)
    orphans = build_orphan_report(resolved, nodes, exempt=exempt)

    return {
        node.relative_path: NodeReport(
            node=node,
            dead_links=dead_links[node.relative_path],
            is_orphan=orphans[node.relative_path],
        )
        for node in nodes
    }


def validate_reports(reports: Dict[str, NodeReport], exempt: Optional[str] = None) -> bool:
    """
    Check reports for orphans and dead links, logging what is found.

    Returns:
        True if no issues were found
    """
    logger.info("Checking for orphaned documents...")
    orphans = sorted(
        path for path, report in reports.items()
        if report.is_orphan and path != exempt
    )
    _log_orphans(orphans)

    logger.info("Checking for dead links...")
    with_dead_links = [
        reports[path] for path in sorted(reports)
        if reports[path].dead_links
    ]
    _log_dead_links(with_dead_links)

    return not orphans and not with_dead_links


def _log_orphans(orphans: List[str]) -> None:
    if not orphans:
        logger.info("No orphans found.")
        return
    logger.error("Located some orphan documents:")
    for orphan in orphans:
        logger.error(f"\t{orphan}")


def _log_dead_links(with_dead_links: List[NodeReport]) -> None:
    if not with_dead_links:
        logger.info("No dead links found.")
        return
    logger.error("Located some files with dead links:")
    for report in with_dead_links:
        logger.error(f"\t{report.node.relative_path}")
        for dead_link in report.dead_links:
            logger.error(f"\t\t{dead_link}")
