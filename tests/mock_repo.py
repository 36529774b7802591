"""
Mock documentation trees for tests.

make_mock_repo() lays out the following tree below a base directory:

    test-data/
        .gitignore                      ignores sub-dir-a/
        README.md                       -> some-md-file.md, sub-dir-a/README, /sub-dir-b
        some-md-file.md                 (anchor and external links only)
        sub-dir-a/
            CHANGELOG.md                -> nested-sub-dir-a, dead-end, nested-sub-dir-b, ../sub-dir-b
            README                      -> nested-sub-dir-a/, not-here
            nested-sub-dir-a/
                README.md               -> some-other-md-file.md
                some-other-md-file.md   (external link only)
            nested-sub-dir-b/
                notes.txt
        sub-dir-b/
            README.md                   -> ../sub-dir-a/README
"""
from pathlib import Path
from typing import Dict

import git

MOCK_FILES: Dict[str, str] = {
    ".gitignore": "sub-dir-a/\n",
    "README.md": (
        "# Mock repository\n"
        "\n"
        "Start with [some file](some-md-file.md), then have a look at\n"
        "[sub-dir-a](sub-dir-a/README) and [the docs of b](/sub-dir-b).\n"
        "\n"
        "See [the website](https://example.com) or [write to us](mailto:docs@example.com).\n"
    ),
    "some-md-file.md": (
        "# Some file\n"
        "\n"
        "[Back to the top](#some-file) and [an external link](https://example.org).\n"
    ),
    "sub-dir-a/CHANGELOG.md": (
        "# Changelog\n"
        "\n"
        "- [nested a](nested-sub-dir-a)\n"
        "- [dead end](./dead-end)\n"
        "- [nested b](nested-sub-dir-b#intro)\n"
        "- [sibling](../sub-dir-b)\n"
    ),
    "sub-dir-a/README": (
        "Sub directory A.\n"
        "\n"
        "The [nested docs](nested-sub-dir-a/) and a [missing page](not-here).\n"
    ),
    "sub-dir-a/nested-sub-dir-a/README.md": (
        "# Nested A\n"
        "\n"
        "More in [another file](some-other-md-file.md#details).\n"
    ),
    "sub-dir-a/nested-sub-dir-a/some-other-md-file.md": (
        "# Details\n"
        "\n"
        "Nothing local here, only <https://example.net>.\n"
    ),
    "sub-dir-a/nested-sub-dir-b/notes.txt": "plain text, not documentation\n",
    "sub-dir-b/README.md": (
        "# Sub directory B\n"
        "\n"
        "Go back to [sub-dir-a](../sub-dir-a/README).\n"
    ),
}


def write_tree(root: Path, files: Dict[str, str]) -> Path:
    """Write files (relative path -> content) below root and return root."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def make_mock_repo(base_dir: Path) -> Path:
    """Create the mock tree below base_dir and return the path of test-data/."""
    return write_tree(Path(base_dir) / "test-data", MOCK_FILES)


def init_git_repo(path: Path) -> git.Repo:
    """Turn path into a git working tree."""
    return git.Repo.init(path)
