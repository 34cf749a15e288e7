"""Unit tests for KeyValueStorage implementations."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from adapter.fake.storage import InMemoryStorage
from adapter.storage.file_storage import FileStorage
from adapter.storage.redis_storage import KEY_PREFIX, RedisStorage
from adapter.storage.scoped import ScopedStorage
from port.storage import StorageError


class TestFileStorage(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "store.json"

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_reads_empty(self):
        self.assertIsNone(FileStorage(self.path).get("k"))

    def test_set_persists_across_instances(self):
        FileStorage(self.path).set("my_words_v1", "[]")
        self.assertEqual(FileStorage(self.path).get("my_words_v1"), "[]")

    def test_remove(self):
        storage = FileStorage(self.path)
        storage.set("a", "1")
        storage.set("b", "2")
        storage.remove("a")
        storage.remove("missing")
        reloaded = FileStorage(self.path)
        self.assertIsNone(reloaded.get("a"))
        self.assertEqual(reloaded.get("b"), "2")

    def test_corrupt_file_reads_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")
        storage = FileStorage(self.path)
        self.assertIsNone(storage.get("k"))
        storage.set("k", "v")
        self.assertEqual(FileStorage(self.path).get("k"), "v")

    def test_non_object_file_reads_empty(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2]")
        self.assertIsNone(FileStorage(self.path).get("0"))

    def test_write_failure_raises_storage_error(self):
        storage = FileStorage(self.path)
        with patch("adapter.storage.file_storage.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(StorageError):
                storage.set("k", "v")
        self.assertIsNone(storage.get("k"))


class TestScopedStorage(unittest.TestCase):

    def test_clients_do_not_share_keys(self):
        shared = InMemoryStorage()
        alice = ScopedStorage(shared, "alice")
        bob = ScopedStorage(shared, "bob")

        alice.set("usage_ledger_v1", "a")
        bob.set("usage_ledger_v1", "b")

        self.assertEqual(alice.get("usage_ledger_v1"), "a")
        self.assertEqual(bob.get("usage_ledger_v1"), "b")
        self.assertEqual(shared.store["client:alice:usage_ledger_v1"], "a")

        alice.remove("usage_ledger_v1")
        self.assertIsNone(alice.get("usage_ledger_v1"))
        self.assertEqual(bob.get("usage_ledger_v1"), "b")


class TestRedisStorage(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.storage = RedisStorage("redis://localhost:6379", client=self.client)

    def test_get_uses_prefixed_key(self):
        self.client.get.return_value = "v"
        self.assertEqual(self.storage.get("k"), "v")
        self.client.get.assert_called_once_with(KEY_PREFIX + "k")

    def test_set_and_remove(self):
        self.storage.set("k", "v")
        self.storage.remove("k")
        self.client.set.assert_called_once_with(KEY_PREFIX + "k", "v")
        self.client.delete.assert_called_once_with(KEY_PREFIX + "k")

    def test_get_error_reads_as_none(self):
        self.client.get.side_effect = RedisConnectionError("gone")
        self.assertIsNone(self.storage.get("k"))

    def test_set_error_raises_storage_error(self):
        self.client.set.side_effect = RedisConnectionError("gone")
        with self.assertRaises(StorageError):
            self.storage.set("k", "v")

    def test_unconfigured_url(self):
        storage = RedisStorage("")
        self.assertIsNone(storage.get("k"))
        self.assertFalse(storage.ping())
        with self.assertRaises(StorageError):
            storage.set("k", "v")

    @patch("adapter.storage.redis_storage.redis.from_url")
    def test_initial_connection_failure_is_not_retried(self, mock_from_url):
        mock_from_url.return_value.ping.side_effect = RedisConnectionError("refused")
        storage = RedisStorage("redis://nowhere:6379")

        self.assertIsNone(storage.get("k"))
        self.assertIsNone(storage.get("k"))
        self.assertEqual(mock_from_url.call_count, 1)


if __name__ == '__main__':
    unittest.main()
