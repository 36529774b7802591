"""
Integration tests for the graph builder.
"""
import dataclasses
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from typing import List

from checkdoc.errors import ConfigurationError, ParseFailure, PathEscapesRoot
from checkdoc.graph_builder import GraphBuilder, build_link_graph_nodes
from checkdoc.protocols import LinkGraphNode
from mock_repo import make_mock_repo, write_tree


class LineLinkExtractor:
    """Treats every non-empty line as a link destination."""

    def parse(self, content: bytes) -> List[str]:
        return content.decode("utf-8").splitlines()

    def extract_links(self, document: List[str]) -> List[str]:
        return [line for line in document if line]


class TestGraphBuilder(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.temp_path = Path(self.temp_dir)
        write_tree(self.temp_path, {
            "README.md": "See [the changelog](sub/CHANGELOG.md) and [home](https://example.com).\n",
            "sub/CHANGELOG.md": "Points to [missing](missing) and [top](/README.md#intro).\n",
        })
        self.root = str(self.temp_path)

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_build_graph(self):
        """Test that one node per path is built, in order, with normalized links."""
        builder = GraphBuilder(self.root)
        nodes = builder.build_graph([
            os.path.join(self.root, "README.md"),
            os.path.join(self.root, "sub", "CHANGELOG.md"),
        ])

        self.assertEqual([n.relative_path for n in nodes], ["README.md", "sub/CHANGELOG.md"])
        self.assertEqual(nodes[0].links, ("sub/CHANGELOG.md",))
        self.assertEqual(nodes[1].links, ("sub/missing", "README.md"))
        for node in nodes:
            self.assertIsInstance(node, LinkGraphNode)
            self.assertIsNotNone(node.document)

    def test_nodes_are_frozen(self):
        node = GraphBuilder(self.root).build_node(os.path.join(self.root, "README.md"))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            node.links = ()

    def test_duplicate_paths_are_kept(self):
        path = os.path.join(self.root, "README.md")
        nodes = GraphBuilder(self.root).build_graph([path, path])
        self.assertEqual(len(nodes), 2)

    def test_progress_bar(self):
        nodes = GraphBuilder(self.root, show_progress=True).build_graph(
            [os.path.join(self.root, "README.md")]
        )
        self.assertEqual(len(nodes), 1)

    def test_relative_path_rejected(self):
        with self.assertRaises(ParseFailure):
            GraphBuilder(self.root).build_graph(["README.md"])

    def test_unreadable_file_aborts(self):
        """Test that a single undecodable document fails the whole build."""
        (self.temp_path / "broken.md").write_bytes(b"\xff\xfe\xfd")
        with self.assertRaises(ParseFailure):
            GraphBuilder(self.root).build_graph([
                os.path.join(self.root, "README.md"),
                os.path.join(self.root, "broken.md"),
            ])

    def test_escaping_link_aborts(self):
        (self.temp_path / "escape.md").write_text("[out](../../outside.md)\n")
        with self.assertRaises(PathEscapesRoot):
            GraphBuilder(self.root).build_graph([os.path.join(self.root, "escape.md")])

    def test_custom_link_extractor(self):
        """Test that any LinkExtractor implementation can be plugged in."""
        write_tree(self.temp_path, {"dir/links.txt": "../a/b\n./d\n"})
        builder = GraphBuilder(self.root, link_extractor=LineLinkExtractor())
        nodes = builder.build_graph([os.path.join(self.root, "dir", "links.txt")])
        self.assertEqual(nodes[0].links, ("a/b", "dir/d"))
        self.assertEqual(nodes[0].document, ["../a/b", "./d"])


class TestBuildLinkGraphNodes(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.test_dir = str(make_mock_repo(Path(self.temp_dir)))

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_failures(self):
        with self.assertRaises(ConfigurationError):
            build_link_graph_nodes("/abs/path", [], [], False)
        with self.assertRaises(ConfigurationError):
            build_link_graph_nodes("rel/path", ["README"], [], False)

    def test_single_node(self):
        nodes = build_link_graph_nodes(self.test_dir, ["CHANGELOG.md"], [], False)
        self.assertEqual(len(nodes), 1)
        self.assertEqual(nodes[0].relative_path, "sub-dir-a/CHANGELOG.md")
        self.assertEqual(nodes[0].links, (
            "sub-dir-a/nested-sub-dir-a",
            "sub-dir-a/dead-end",
            "sub-dir-a/nested-sub-dir-b",
            "sub-dir-b",
        ))

    def test_all_nodes(self):
        nodes = build_link_graph_nodes(self.test_dir, ["README", "CHANGELOG"], [".md"], False)
        self.assertEqual([n.relative_path for n in nodes], [
            "sub-dir-a/README",
            "README.md",
            "some-md-file.md",
            "sub-dir-a/CHANGELOG.md",
            "sub-dir-a/nested-sub-dir-a/README.md",
            "sub-dir-a/nested-sub-dir-a/some-other-md-file.md",
            "sub-dir-b/README.md",
        ])
        by_path = {n.relative_path: n for n in nodes}
        self.assertEqual(by_path["README.md"].links, ("some-md-file.md", "sub-dir-a/README", "sub-dir-b"))
        self.assertEqual(by_path["some-md-file.md"].links, ())

    def test_nested_root(self):
        """Test that a subdirectory can be used as tree root on its own."""
        root = os.path.join(self.test_dir, "sub-dir-a", "nested-sub-dir-a")
        nodes = build_link_graph_nodes(root, [], [".md"], False)
        self.assertEqual([n.relative_path for n in nodes], ["README.md", "some-other-md-file.md"])
        self.assertEqual(nodes[0].links, ("some-other-md-file.md",))

    def test_escaping_link_from_subtree(self):
        """Test that links leaving a subtree root abort the build."""
        root = os.path.join(self.test_dir, "sub-dir-b")
        with self.assertRaises(PathEscapesRoot):
            build_link_graph_nodes(root, [], [".md"], False)


if __name__ == '__main__':
    unittest.main()
