"""
Core data model and the narrow interfaces the engine depends on.
"""
from dataclasses import dataclass, field
from typing import Any, List, Protocol, Tuple


@dataclass(frozen=True)
class LinkGraphNode:
    """A documentation file and the local links it contains."""
    relative_path: str               # Path of the file from the tree root
    document: Any = field(repr=False, compare=False)  # Parsed syntax tree, owned by this node
    links: Tuple[str, ...] = ()      # Normalized root-relative link targets, in source order


@dataclass
class NodeReport:
    """Quality findings for a single node."""
    node: LinkGraphNode
    dead_links: List[str]
    is_orphan: bool


class IgnoreMatcher(Protocol):
    """Decides whether a path is excluded by ignore rules."""

    def match(self, path: str) -> bool:
        """Returns True if the absolute path matches an ignore rule."""
        ...


class LinkExtractor(Protocol):
    """Parse documents and pull raw link destinations out of them."""

    def parse(self, content: bytes) -> Any:
        """Returns a parsed document for the given raw bytes."""
        ...

    def extract_links(self, document: Any) -> List[str]:
        """Returns every link destination of the document, in document order."""
        ...
