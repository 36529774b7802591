"""
Resolution of link targets against the file system.

Links are first gathered into a raw path set (what was referenced), which is
then resolved into the set of targets that actually exist once directory
links are expanded to their implicit index files. The two stages are kept
separate so each can be inspected on its own.
"""
import logging
import os
from typing import Iterable, List, Set

from .protocols import LinkGraphNode

logger = logging.getLogger(__name__)


def build_path_set(nodes: Iterable[LinkGraphNode]) -> Set[str]:
    """Returns the set of all link targets found in nodes."""
    path_set: Set[str] = set()
    for node in nodes:
        path_set.update(node.links)
    return path_set


def check_for_non_existing_paths(tree_root: str, path_set: Iterable[str]) -> List[str]:
    """Returns the paths of path_set that do not exist below tree_root, sorted."""
    return sorted(
        path for path in path_set
        if not os.path.exists(os.path.join(tree_root, path))
    )


def resolve_implicit_paths(
    tree_root: str,
    implicit_indexes: List[str],
    path_set: Iterable[str],
) -> Set[str]:
    """
    Resolve a raw path set into the set of existing link targets.

    For every path:
    - Paths that don't exist are dropped.
    - Directories are kept. Each implicit index present inside the directory
      as a file is added as well; all of them, not only the first one.
    - Files are kept.

    Args:
        tree_root: Absolute root of the documentation tree
        implicit_indexes: Index file names to look for in linked directories
        path_set: Root-relative link targets

    Returns:
        Root-relative paths considered to exist for validation purposes
    """
    resolved: Set[str] = set()
    for path in path_set:
        abs_path = os.path.join(tree_root, path)
        if not os.path.exists(abs_path):
            logger.debug(f"Link target does not exist: {path}")
            continue

        if os.path.isdir(abs_path):
            for index in implicit_indexes:
                abs_index_path = os.path.join(abs_path, index)
                if not os.path.exists(abs_index_path) or os.path.isdir(abs_index_path):
                    continue
                resolved.add(f"{path}/{index}")

        # Links to existing directories are valid even without an index file.
        resolved.add(path)
    return resolved


def ensure_directories_end_with_slash(tree_root: str, path_set: Iterable[str]) -> Set[str]:
    """Returns a copy of path_set where existing directories end with '/'."""
    processed: Set[str] = set()
    for path in path_set:
        if os.path.isdir(os.path.join(tree_root, path)) and not path.endswith('/'):
            processed.add(path + '/')
        else:
            processed.add(path)
    return processed
