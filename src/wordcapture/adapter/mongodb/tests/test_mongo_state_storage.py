"""Tests for the MongoDB state storage with a mocked database."""

import unittest
from unittest.mock import MagicMock

from pymongo.errors import PyMongoError

from wordcapture.adapter.mongodb.connection import STATE_COLLECTION_NAME
from wordcapture.adapter.mongodb.state_storage import MongoStateStorage
from wordcapture.domain.model.errors import PersistenceError


class TestMongoStateStorage(unittest.TestCase):

    def setUp(self):
        """Set up storage over a mocked database."""
        self.collection = MagicMock()
        self.db = MagicMock()
        self.db.__getitem__.return_value = self.collection
        self.storage = MongoStateStorage(self.db)

    def test_uses_state_collection(self):
        """Test state lives in the app_state collection."""
        self.db.__getitem__.assert_called_with(STATE_COLLECTION_NAME)

    def test_read(self):
        """Test a read returns the stored payload."""
        self.collection.find_one.return_value = {'_id': 'word_lists', 'payload': '[]'}
        self.assertEqual(self.storage.read('word_lists'), '[]')
        self.collection.find_one.assert_called_once_with({'_id': 'word_lists'})

    def test_read_missing(self):
        """Test a missing document reads as None."""
        self.collection.find_one.return_value = None
        self.assertIsNone(self.storage.read('current_draft'))

    def test_write_upserts_whole_document(self):
        """Test a write replaces the whole document with upsert."""
        self.storage.write('current_draft', '{"id": "d-1"}')

        args, kwargs = self.collection.replace_one.call_args
        self.assertEqual(args[0], {'_id': 'current_draft'})
        self.assertEqual(args[1]['payload'], '{"id": "d-1"}')
        self.assertTrue(kwargs['upsert'])

    def test_remove(self):
        """Test remove deletes the document by key."""
        self.storage.remove('current_draft')
        self.collection.delete_one.assert_called_once_with({'_id': 'current_draft'})

    def test_errors_become_persistence_errors(self):
        """Test driver errors surface as PersistenceError."""
        self.collection.replace_one.side_effect = PyMongoError("write failed")
        self.collection.find_one.side_effect = PyMongoError("read failed")
        with self.assertRaises(PersistenceError):
            self.storage.write('word_lists', '[]')
        with self.assertRaises(PersistenceError):
            self.storage.read('word_lists')

    def test_ping(self):
        """Test ping asks the server for a ping."""
        self.assertTrue(self.storage.ping())
        self.db.client.admin.command.side_effect = PyMongoError("down")
        self.assertFalse(self.storage.ping())


if __name__ == '__main__':
    unittest.main()
