"""
Exceptions raised by the link-graph engine.

Structural problems (bad configuration, unreadable documents, links leaving
the tree) are raised as exceptions. Orphans and dead links are not errors:
they are reported through NodeReport objects.
"""
from typing import Optional


class CheckdocError(Exception):
    """Base class for every error raised by checkdoc."""


class ConfigurationError(CheckdocError, ValueError):
    """Invalid discovery input or configuration, detected before any I/O."""


class IgnoreMatcherUnavailable(CheckdocError):
    """Ignore filtering was requested but the root is not a git repository."""


class PathEscapesRoot(CheckdocError, ValueError):
    """A link resolves to a location outside of the tree root."""

    def __init__(self, link: str, tree_root: str, file_path: str):
        self.link = link
        self.tree_root = tree_root
        self.file_path = file_path
        super().__init__(
            f"relative link {link} points outside of the tree root {tree_root} for file {file_path}"
        )


class ParseFailure(CheckdocError):
    """A discovered document could not be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
