import unittest

from gdrivefs.util.paths import (
    child_path,
    get_name,
    get_parent_path,
    join_paths,
    normalize_path,
)


class TestUtilPaths(unittest.TestCase):
    def test_normalize_path(self) -> None:
        self.assertEqual(normalize_path(""), "/")
        self.assertEqual(normalize_path("."), "/")
        self.assertEqual(normalize_path("a/b/"), "/a/b")
        self.assertEqual(normalize_path("//a//b"), "/a/b")
        self.assertEqual(normalize_path("/a/./b/../c"), "/a/c")

    def test_parent_and_name(self) -> None:
        self.assertEqual(get_parent_path("/a/b/c.txt"), "/a/b")
        self.assertEqual(get_parent_path("/a"), "/")
        self.assertEqual(get_parent_path("/"), "/")
        self.assertEqual(get_name("/a/b/c.txt"), "c.txt")
        self.assertEqual(get_name("/"), "")

    def test_join_paths(self) -> None:
        self.assertEqual(join_paths("repo", "/"), "/repo")
        self.assertEqual(join_paths("repo", "/a/b"), "/repo/a/b")
        self.assertEqual(join_paths("/x/y/", "", "z"), "/x/y/z")
        self.assertEqual(join_paths(), "/")

    def test_child_path(self) -> None:
        self.assertEqual(child_path("/", "a"), "/a")
        self.assertEqual(child_path("/a", "b"), "/a/b")


if __name__ == "__main__":
    unittest.main()
