"""
Discovery of documentation files within a directory tree.

- find_matching_files: Walk the tree for exact basenames and extensions
- GitIgnoreMatcher: Ignore rules of the git repository containing the tree
- discover_documents: Matching files, optionally minus gitignored ones
"""
import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

import git

from .config import check_discovery_criteria
from .errors import ConfigurationError, IgnoreMatcherUnavailable
from .protocols import IgnoreMatcher

logger = logging.getLogger(__name__)

# Paths per `git check-ignore` call, bounded by the command line length
CHECK_IGNORE_BATCH_SIZE = 500


def _walk(directory: Path) -> Iterator[Path]:
    """
    Yield every non-directory entry below directory.

    Entries are visited in lexical order, descending into each subdirectory
    at the position of its name. Symlinked directories are not followed.
    """
    for entry in sorted(directory.iterdir()):
        if entry.is_dir() and not entry.is_symlink():
            yield from _walk(entry)
        else:
            yield entry


def search_by_file_name(root: Path, base_name: str) -> List[str]:
    """Returns absolute paths of all files below root named exactly base_name."""
    return [str(path) for path in _walk(root) if path.name == base_name]


def search_by_extension(root: Path, ext: str) -> List[str]:
    """Returns absolute paths of all files below root with the extension ext (dot included)."""
    return [str(path) for path in _walk(root) if path.suffix == ext]


def find_matching_files(
    tree_root: str,
    base_names: Iterable[str],
    extensions: Iterable[str],
) -> List[str]:
    """
    Collect files matching any of the basenames or extensions.

    Each criterion is searched independently and the results are concatenated
    in criteria order (basenames first). A file matching several criteria is
    therefore returned several times.

    Args:
        tree_root: Absolute path of the directory to explore
        base_names: Exact file names to look for
        extensions: Extensions to look for, each starting with '.'

    Returns:
        Absolute paths of matching files

    Raises:
        ConfigurationError: If tree_root is not absolute or not a directory
    """
    base_names = list(base_names)
    extensions = list(extensions)

    if not os.path.isabs(tree_root):
        raise ConfigurationError(f"tree_root must be absolute, was: {tree_root}")
    root = Path(tree_root)
    if not root.is_dir():
        raise ConfigurationError(f"tree_root is not a directory: {tree_root}")

    collected: List[str] = []
    for base_name in base_names:
        collected.extend(search_by_file_name(root, base_name))
    for ext in extensions:
        collected.extend(search_by_extension(root, ext))
    return collected


class GitIgnoreMatcher(IgnoreMatcher):
    """
    Matches paths against the ignore rules of a git working tree.

    Backed by GitPython, which defers to `git check-ignore` so that nested
    .gitignore files, .git/info/exclude and global excludes all apply.
    """

    def __init__(self, tree_root: str):
        """
        Args:
            tree_root: Any directory inside a git working tree

        Raises:
            IgnoreMatcherUnavailable: If tree_root is not inside a git repository
        """
        try:
            self.repo = git.Repo(tree_root, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            raise IgnoreMatcherUnavailable(
                "failed to build up a gitignore from a git repository. "
                f"Is tree_root inside a git repository? It was: {tree_root} - {e!r}"
            ) from e

    def match(self, path: str) -> bool:
        return path in self.match_many([path])

    def match_many(self, paths: List[str]) -> Set[str]:
        """
        Returns the subset of paths matched by an ignore rule.

        Paths are checked in batches of CHECK_IGNORE_BATCH_SIZE, one
        `git check-ignore` call per batch.
        """
        ignored: Set[str] = set()
        for start in range(0, len(paths), CHECK_IGNORE_BATCH_SIZE):
            batch = paths[start:start + CHECK_IGNORE_BATCH_SIZE]
            try:
                output = self.repo.git.check_ignore('-z', *batch)
            except git.GitCommandError as e:
                # Exit status 1: none of the paths is ignored
                if e.status == 1:
                    continue
                raise IgnoreMatcherUnavailable(f"git check-ignore failed: {e}") from e
            ignored.update(p for p in output.split('\0') if p)
        return ignored


def filter_ignored(paths: List[str], matcher: IgnoreMatcher) -> List[str]:
    """
    Returns paths not flagged by matcher, order preserved.

    Matchers providing match_many() are asked once for all paths.
    """
    match_many = getattr(matcher, 'match_many', None)
    if match_many is not None:
        ignored = set(match_many(paths))
    else:
        ignored = {path for path in paths if matcher.match(path)}

    kept = []
    for path in paths:
        if path in ignored:
            logger.debug(f"Ignoring {path}")
            continue
        kept.append(path)
    return kept


def discover_documents(
    tree_root: str,
    base_names: Iterable[str],
    extensions: Iterable[str],
    respect_gitignore: bool,
    matcher: Optional[IgnoreMatcher] = None,
) -> List[str]:
    """
    Find documentation files below tree_root.

    Args:
        tree_root: Absolute path of the documentation root
        base_names: Exact file names to look for
        extensions: Extensions to look for, each starting with '.'
        respect_gitignore: Drop files matched by ignore rules
        matcher: Ignore matcher to use; a GitIgnoreMatcher on tree_root by default

    Returns:
        Absolute paths of the documents, in discovery order
    """
    base_names = list(base_names)
    extensions = list(extensions)
    check_discovery_criteria(base_names, extensions)
    if not os.path.isabs(tree_root):
        raise ConfigurationError(f"tree_root must be absolute, was: {tree_root}")

    results = find_matching_files(tree_root, base_names, extensions)
    logger.debug(f"Found {len(results)} candidate files for basenames {base_names} and extensions {extensions}")

    if not respect_gitignore:
        return results

    if matcher is None:
        matcher = GitIgnoreMatcher(tree_root)
    filtered = filter_ignored(results, matcher)
    logger.debug(f"{len(results) - len(filtered)} files dropped by ignore rules")
    return filtered


def find_repository_root(path: str) -> str:
    """
    Returns the working tree root of the git repository containing path.

    Raises:
        ConfigurationError: If path is not inside a git working tree
    """
    try:
        repo = git.Repo(path, search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
        raise ConfigurationError(f"Failed to find git repo root from path {path}: {e!r}") from e
    if repo.working_tree_dir is None:
        raise ConfigurationError(f"Git repository at {path} has no working tree")
    return str(repo.working_tree_dir)
