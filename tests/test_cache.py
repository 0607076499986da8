import json
import os
import tempfile
import unittest

from llm_term.cache import PromptCache


class TestPromptCache(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "cache.json")

    def tearDown(self):
        self.tmp.cleanup()

    def _read_file(self):
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def test_missing_file_is_empty(self):
        cache = PromptCache.load(self.path)
        self.assertEqual(len(cache), 0)
        self.assertFalse(os.path.exists(self.path))

    def test_unreadable_file_is_empty(self):
        with open(self.path, "w") as f:
            f.write("[1, 2")
        self.assertEqual(len(PromptCache.load(self.path)), 0)

    def test_non_object_file_is_empty(self):
        with open(self.path, "w") as f:
            json.dump(["ls"], f)
        self.assertEqual(len(PromptCache.load(self.path)), 0)

    def test_non_string_commands_are_skipped(self):
        with open(self.path, "w") as f:
            json.dump({"list files": None, "n": 3, "disk usage": "df -h"}, f)

        cache = PromptCache.load(self.path)

        self.assertEqual(cache.to_dict(), {"disk usage": "df -h"})
        self.assertIsNone(cache.get("list files"))
        self.assertIsNone(cache.get("n"))

    def test_insert_persists_and_reloads(self):
        cache = PromptCache.load(self.path)
        cache.insert("list files", "ls -la")

        self.assertEqual(self._read_file(), {"list files": "ls -la"})
        self.assertEqual(PromptCache.load(self.path).get("list files"), "ls -la")

    def test_file_is_pretty_printed(self):
        PromptCache(self.path).insert("list files", "ls -la")
        with open(self.path) as f:
            self.assertEqual(f.read(), '{\n  "list files": "ls -la"\n}')

    def test_keys_are_not_normalized(self):
        cache = PromptCache(self.path)
        cache.insert("build it", "make")
        self.assertIsNone(cache.get("Build it"))
        self.assertIsNone(cache.get("build it "))
        self.assertNotIn("Build it", cache)

    def test_remove_only_touches_one_key(self):
        cache = PromptCache(self.path, {"a": "1", "b": "2", "c": "3"})
        self.assertTrue(cache.remove("b"))

        self.assertEqual(cache.to_dict(), {"a": "1", "c": "3"})
        self.assertEqual(self._read_file(), {"a": "1", "c": "3"})

    def test_remove_missing_key(self):
        cache = PromptCache(self.path, {"a": "1"})
        self.assertFalse(cache.remove("zzz"))
        self.assertFalse(os.path.exists(self.path))

    def test_unicode_round_trip(self):
        cache = PromptCache(self.path)
        cache.insert("liste les fichiers é", "ls -la 'été'")
        self.assertEqual(PromptCache.load(self.path).get("liste les fichiers é"), "ls -la 'été'")


if __name__ == "__main__":
    unittest.main()
