"""
Configuration for a documentation check run.

The same settings drive file discovery (which documents become nodes),
implicit-path resolution (which index files satisfy a directory link) and
validation (which document may legitimately have no inbound links).
"""
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import List, Optional
import json
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def check_discovery_criteria(base_names: List[str], extensions: List[str]) -> None:
    """
    Validate basenames and extensions used to discover documents.

    Raises:
        ConfigurationError: If both are empty, a basename is empty, or an
            extension does not start with a dot.
    """
    if not base_names and not extensions:
        raise ConfigurationError("need to specify at least one base name or extension")
    for base_name in base_names:
        if not base_name:
            raise ConfigurationError("base name cannot be empty")
    for ext in extensions:
        if not ext:
            raise ConfigurationError("extension cannot be empty")
        if not ext.startswith('.'):
            raise ConfigurationError(f"extension must start with a dot (.): {ext}")


@dataclass
class CheckdocConfig:
    """
    Settings for discovering, resolving and validating documentation.

    Attributes:
        base_names: Exact file names to treat as documents (e.g. 'README')
        extensions: File extensions to treat as documents, dot included
        implicit_indexes: File names looked up inside a linked directory
        root_document: Relative path never reported as orphan, or None
        respect_gitignore: Drop documents matched by the repository's gitignore
    """

    base_names: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: ['.md'])
    implicit_indexes: List[str] = field(default_factory=lambda: ['README.md'])
    root_document: Optional[str] = 'README.md'
    respect_gitignore: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        for name in ('base_names', 'extensions', 'implicit_indexes'):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigurationError(f"{name} must be a list of strings, got {value!r}")
        if self.root_document is not None and not isinstance(self.root_document, str):
            raise ConfigurationError(
                f"root_document must be a string or None, got {self.root_document!r}"
            )
        if not isinstance(self.respect_gitignore, bool):
            raise ConfigurationError(
                f"respect_gitignore must be a boolean, got {self.respect_gitignore!r}"
            )

        check_discovery_criteria(self.base_names, self.extensions)

        for index in self.implicit_indexes:
            if not index or '/' in index:
                raise ConfigurationError(
                    f"implicit index must be a plain file name, got {index!r}"
                )

        if self.root_document is not None and (
            not self.root_document or self.root_document.startswith('/')
        ):
            raise ConfigurationError(
                f"root_document must be a relative path, got {self.root_document!r}"
            )

        if not self.implicit_indexes:
            logger.warning(
                "No implicit indexes configured: links to directories will only "
                "satisfy the directory itself."
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'CheckdocConfig':
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {sorted(unknown)}. "
                f"Known keys: {sorted(known)}"
            )
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'CheckdocConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        return cls.from_dict(data)


# Markdown files by extension, directory links satisfied by a README.md
DEFAULT_CONFIG = CheckdocConfig()
