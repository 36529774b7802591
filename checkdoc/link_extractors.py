"""
Link extraction from markdown documents.

- MarkdownLinkExtractor: Parses markdown and collects link destinations
- filter_local_links: Keeps only links pointing into the local file system
- read_document: Reads a file and parses it
"""
import re
from pathlib import Path
from typing import Any, List

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .errors import ParseFailure
from .protocols import LinkExtractor

URL_PREFIX_PATTERN = re.compile(r'://')
MAILTO_PATTERN = re.compile(r'^mailto:')
SAME_FILE_ANCHOR_PATTERN = re.compile(r'^#')


class MarkdownLinkExtractor(LinkExtractor):
    """
    Extracts link destinations from CommonMark documents.

    Handles inline links, reference links and autolinks (<https://...>).
    Image destinations are not links and are skipped.
    """

    def __init__(self):
        self.md = MarkdownIt('commonmark')

    def parse(self, content: bytes) -> SyntaxTreeNode:
        """
        Parse raw document bytes into a syntax tree.

        Raises:
            ParseFailure: If the content is not valid UTF-8
        """
        try:
            text = content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseFailure(f"failed to decode markdown content: {e}") from e
        return SyntaxTreeNode(self.md.parse(text))

    def extract_links(self, document: SyntaxTreeNode) -> List[str]:
        """
        Collect every link destination, in document order.

        Destinations are returned as markdown-it normalizes them, that is
        percent-encoded. They are decoded once the anchor is dropped.
        """
        return [
            node.attrs.get('href', '')
            for node in document.walk()
            if node.type == 'link'
        ]


def is_local_link(destination: str) -> bool:
    """False for URLs with a scheme, mail links and same-document anchors."""
    return not (
        URL_PREFIX_PATTERN.search(destination)
        or MAILTO_PATTERN.match(destination)
        or SAME_FILE_ANCHOR_PATTERN.match(destination)
    )


def filter_local_links(destinations: List[str]) -> List[str]:
    """
    Keep links that point to the local file system.

    Links like "/absolute-link", "../sibling-dir/something" or "sub-dir/x" are
    kept. A link to another file with an anchor ("file.md#section") is kept as
    is; the anchor is dropped during normalization.
    """
    return [d for d in destinations if is_local_link(d)]


def read_document(path: str, link_extractor: LinkExtractor) -> Any:
    """
    Read the file at path and parse it with link_extractor.

    Raises:
        ParseFailure: If the file can't be read or parsed
    """
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise ParseFailure(f"failed to read markdown file {path}: {e}", path=path) from e
    try:
        return link_extractor.parse(content)
    except ParseFailure as e:
        raise ParseFailure(f"failed to parse markdown file {path}: {e}", path=path) from e
