"""
Normalization of local links into root-relative paths.

Core Purpose:
    Every local link found in a document is rewritten into a single canonical
    form so that links written differently but pointing to the same file
    compare equal:
    - Relative to the tree root (no leading separator)
    - Forward-slash separated
    - Free of '.' and '..' segments

The normalization algorithm, per link:
    1. Drop the anchor (everything from the first literal '#'), then
       percent-decode what is left, so "c%23sharp.md" names "c#sharp.md"
    2. Resolve against the tree root if the link starts with '/', otherwise
       against the directory containing the document
    3. Collapse '.' and '..' segments
    4. Refuse anything that ends up outside of the tree root
    5. Strip the tree root prefix

A link such as "/from/project-root" in "relative/file" therefore becomes
"from/project-root": links starting with '/' always refer to the tree root.
"""
import os
import posixpath
from typing import List
from urllib.parse import unquote

from .errors import PathEscapesRoot


def sanitize_root(tree_root: str) -> str:
    """Returns tree_root with exactly one trailing separator."""
    return tree_root.rstrip(os.sep) + os.sep


def strip_anchor(link: str) -> str:
    """Returns link without its '#fragment' part, if any."""
    return link.split('#', 1)[0]


def normalize_link(tree_root: str, file_path: str, link: str) -> str:
    """
    Normalize a single local link found in file_path.

    Args:
        tree_root: Absolute tree root, ending with a separator
        file_path: Root-relative path of the document containing the link
        link: Local link destination as written in the document

    Returns:
        Root-relative path the link points to

    Raises:
        PathEscapesRoot: If the link resolves outside of tree_root
    """
    target = unquote(strip_anchor(link))

    if target.startswith('/'):
        # Found a reference starting with "/", where "/" refers to the project root.
        project_absolute = os.path.join(tree_root, target.lstrip('/'))
    else:
        doc_dir = os.path.dirname(os.path.join(tree_root, file_path))
        project_absolute = os.path.join(doc_dir, target)

    absolute_normalized = os.path.normpath(project_absolute)
    if not absolute_normalized.startswith(tree_root):
        raise PathEscapesRoot(link, tree_root, file_path)

    relative = absolute_normalized[len(tree_root):]
    return relative.replace(os.sep, posixpath.sep)


def normalize_links_to_root(tree_root: str, file_path: str, links: List[str]) -> List[str]:
    """
    Normalize all local links of a document relative to the tree root.

    Args:
        tree_root: Absolute tree root; a trailing separator is added if missing
        file_path: Root-relative path of the document the links come from
        links: Filtered local link destinations, in document order

    Returns:
        Root-relative targets, in the same order as links

    Raises:
        PathEscapesRoot: If any link resolves outside of the tree root. No
            partial result is returned in that case.
    """
    tree_root = sanitize_root(tree_root)
    return [normalize_link(tree_root, file_path, link) for link in links]
