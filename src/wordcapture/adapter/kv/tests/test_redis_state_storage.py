"""Tests for the Redis state storage with a mocked client."""

import unittest
from unittest.mock import MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from wordcapture.adapter.kv.redis_state_storage import RedisStateStorage
from wordcapture.domain.model.errors import PersistenceError


class TestRedisStateStorage(unittest.TestCase):

    def setUp(self):
        """Set up a mocked redis client behind redis.from_url."""
        self.mock_redis = MagicMock()
        patcher = patch('wordcapture.adapter.kv.redis_state_storage.redis.from_url', return_value=self.mock_redis)
        self.mock_from_url = patcher.start()
        self.addCleanup(patcher.stop)
        self.storage = RedisStateStorage(url="redis://localhost:6379/0", key_prefix="test:")

    def test_write_uses_single_set(self):
        """Test a write is one SET on the prefixed key."""
        self.storage.write("word_lists", "[]")
        self.mock_redis.set.assert_called_once_with("test:word_lists", "[]")

    def test_read(self):
        """Test a read returns the stored string."""
        self.mock_redis.get.return_value = '{"id": "d-1"}'
        self.assertEqual(self.storage.read("current_draft"), '{"id": "d-1"}')
        self.mock_redis.get.assert_called_once_with("test:current_draft")

    def test_read_missing_key(self):
        """Test a missing key reads as None."""
        self.mock_redis.get.return_value = None
        self.assertIsNone(self.storage.read("current_draft"))

    def test_remove(self):
        """Test remove deletes the prefixed key."""
        self.storage.remove("current_draft")
        self.mock_redis.delete.assert_called_once_with("test:current_draft")

    def test_write_error_raises_persistence_error(self):
        """Test a RedisError surfaces as PersistenceError."""
        self.mock_redis.set.side_effect = RedisConnectionError("gone")
        with self.assertRaises(PersistenceError):
            self.storage.write("word_lists", "[]")

    def test_client_is_cached(self):
        """Test the client is created once and reused."""
        self.storage.read("a")
        self.storage.read("b")
        self.mock_from_url.assert_called_once()

    def test_unconfigured_url(self):
        """Test an empty REDIS_URL means no client and a failed ping."""
        storage = RedisStateStorage(url="")
        self.assertFalse(storage.ping())
        with self.assertRaises(PersistenceError):
            storage.read("word_lists")

    def test_initial_connection_failure(self):
        """Test a failed first ping leaves the storage unavailable."""
        self.mock_redis.ping.side_effect = RedisConnectionError("refused")
        self.assertFalse(self.storage.ping())
        with self.assertRaises(PersistenceError):
            self.storage.write("word_lists", "[]")


if __name__ == '__main__':
    unittest.main()
