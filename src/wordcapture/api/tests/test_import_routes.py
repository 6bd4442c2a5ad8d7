"""Unit tests for bulk import routes."""

import json
import unittest

from fastapi.testclient import TestClient

from wordcapture.adapter.fake.dictionary import FakeDictionaryAdapter
from wordcapture.adapter.fake.state_storage import FakeStateStorage
from wordcapture.api.dependencies import get_collection_store, get_dictionary_port
from wordcapture.api.main import app
from wordcapture.services.collection_store import CollectionStore

TEXT = "cat 猫\ndog: 狗\nxyzzy\ncat again"


class TestImportRoutes(unittest.TestCase):

    def setUp(self):
        """Set up the app with an in-memory store and a fake dictionary."""
        self.client = TestClient(app)
        self.store = CollectionStore(FakeStateStorage())
        self.dictionary = FakeDictionaryAdapter({"cat": "feline", "dog": "canine"})
        app.dependency_overrides[get_collection_store] = lambda: self.store
        app.dependency_overrides[get_dictionary_port] = lambda: self.dictionary

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_preview(self):
        """Test preview counts, filters and does not persist."""
        response = self.client.post("/imports/preview", json={"text": TEXT})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["candidate_count"], 3)
        self.assertEqual(data["rejected_count"], 1)
        self.assertTrue(data["completed"])
        self.assertEqual(
            [(e["headword"], e["annotation"]) for e in data["entries"]],
            [("cat", "猫"), ("dog", "狗")],
        )
        self.assertEqual(self.store.collections, [])

    def test_stream(self):
        """Test the NDJSON stream has one ordered line per candidate."""
        response = self.client.post("/imports/stream", json={"text": TEXT})

        self.assertEqual(response.status_code, 200)
        events = [json.loads(line) for line in response.text.splitlines() if line]
        self.assertEqual([e["headword"] for e in events], ["cat", "dog", "xyzzy"])
        self.assertEqual([e["progress"] for e in events], [1 / 3, 2 / 3, 1.0])
        self.assertIsNone(events[2]["entry"])
        self.assertEqual(events[0]["entry"]["annotation"], "猫")

    def test_commit(self):
        """Test committing previewed entries saves a new list."""
        entries = self.client.post("/imports/preview", json={"text": TEXT}).json()["entries"]

        response = self.client.post("/imports", json={"title": "Pets", "entries": entries})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Pets")
        self.assertEqual(self.store.find_collection_containing("dog"), "Pets")

    def test_commit_nothing(self):
        """Test committing no entries is 400."""
        response = self.client.post("/imports", json={"entries": []})
        self.assertEqual(response.status_code, 400)

    def test_commit_rejects_bad_headword(self):
        """Test an entry with a malformed headword is 422."""
        entry = {"id": "e-1", "headword": "two words", "created_at": "2025-09-01T00:00:00+00:00"}
        response = self.client.post("/imports", json={"entries": [entry]})
        self.assertEqual(response.status_code, 422)


if __name__ == '__main__':
    unittest.main()
