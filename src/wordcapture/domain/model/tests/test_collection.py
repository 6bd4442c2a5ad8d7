"""Unit tests for Entry and Collection domain models."""

import unittest
from datetime import datetime, timezone

from wordcapture.domain.model.collection import Collection, default_title
from wordcapture.domain.model.entry import Entry, LookupResult, is_valid_headword
from wordcapture.domain.model.errors import DuplicateWordError, InvalidWordError, NotFoundError


class TestHeadwordGrammar(unittest.TestCase):

    def test_valid_words(self):
        """Test letters with inner apostrophes and hyphens are accepted."""
        for word in ("a", "cat", "don't", "well-known", "Apple"):
            self.assertTrue(is_valid_headword(word), word)

    def test_invalid_words(self):
        """Test digits, leading punctuation, spaces and CJK text are rejected."""
        for word in ("", "1st", "-dash", "two words", "猫", "cat!"):
            self.assertFalse(is_valid_headword(word), word)


class TestEntry(unittest.TestCase):

    def test_create_normalizes_headword(self):
        """Test create() trims and lowercases, and assigns id and UTC timestamp."""
        entry = Entry.create("  Apple ")
        self.assertEqual(entry.headword, "apple")
        self.assertTrue(entry.id)
        self.assertIsNotNone(entry.created_at.tzinfo)

    def test_rejects_invalid_headword(self):
        """Test a multi-word headword raises InvalidWordError."""
        with self.assertRaises(InvalidWordError):
            Entry.create("not a word")

    def test_rejects_uppercase_headword(self):
        """Test the constructor requires an already lowercased headword."""
        with self.assertRaises(InvalidWordError):
            Entry(id="e-1", headword="Apple")

    def test_matches_ignores_case_and_whitespace(self):
        """Test matches() compares against the normalized headword."""
        entry = Entry.create("cat")
        self.assertTrue(entry.matches(" CAT "))
        self.assertFalse(entry.matches("cats"))

    def test_from_lookup_copies_fields(self):
        """Test from_lookup() carries every lookup field plus the annotation."""
        result = LookupResult(
            word="cat", phonetic="kæt", definition="a small feline",
            audio_url="https://audio/cat.mp3", valid=True,
        )
        entry = Entry.from_lookup(result, annotation="猫")
        self.assertEqual(entry.headword, "cat")
        self.assertEqual(entry.phonetic, "kæt")
        self.assertEqual(entry.definition, "a small feline")
        self.assertEqual(entry.audio_url, "https://audio/cat.mp3")
        self.assertEqual(entry.annotation, "猫")

    def test_dict_round_trip_keeps_every_field(self):
        """Test to_dict/from_dict preserves all fields including microseconds."""
        entry = Entry(
            id="e-1", headword="cat", definition="feline", annotation="猫",
            phonetic="kæt", audio_url="https://a/cat.mp3",
            created_at=datetime(2025, 9, 1, 8, 30, 15, 123456, tzinfo=timezone.utc),
        )
        self.assertEqual(Entry.from_dict(entry.to_dict()), entry)

    def test_from_dict_missing_field_raises(self):
        """Test a record without created_at raises KeyError."""
        with self.assertRaises(KeyError):
            Entry.from_dict({"id": "e-1", "headword": "cat"})

    def test_from_dict_null_optional_field_is_blank(self):
        """Test null optional text fields decode as empty strings."""
        entry = Entry.from_dict({
            "id": "e-1", "headword": "cat", "definition": None,
            "created_at": "2025-09-01T00:00:00+00:00",
        })
        self.assertEqual(entry.definition, "")

    def test_from_dict_rejects_non_string_fields(self):
        """Test numeric text fields and timestamps raise TypeError."""
        base = {"id": "e-1", "headword": "cat", "created_at": "2025-09-01T00:00:00+00:00"}
        for bad in ({"annotation": 3}, {"phonetic": ["x"]}, {"created_at": 0}):
            with self.assertRaises(TypeError, msg=bad):
                Entry.from_dict(dict(base, **bad))
        with self.assertRaises(TypeError):
            Entry.from_dict(["not", "a", "dict"])


class TestCollection(unittest.TestCase):

    def setUp(self):
        """Create two entries shared by the tests."""
        self.cat = Entry.create("cat", annotation="猫")
        self.dog = Entry.create("dog")

    def test_default_title_from_date(self):
        """Test the default title is the local month and day."""
        self.assertEqual(default_title(datetime(2025, 9, 1, 12, 0)), "9月1日 单词表")

    def test_new_collection_gets_default_title(self):
        """Test a blank title is replaced by the date-derived one."""
        collection = Collection.new()
        self.assertEqual(collection.title, default_title(collection.created_at))

    def test_explicit_title_kept(self):
        """Test a non-blank title is left alone."""
        self.assertEqual(Collection.new(title="Week 1").title, "Week 1")

    def test_with_entry_appends_in_order(self):
        """Test entries keep insertion order."""
        collection = Collection.new().with_entry(self.cat).with_entry(self.dog)
        self.assertEqual([e.headword for e in collection.entries], ["cat", "dog"])

    def test_with_entry_is_a_copy(self):
        """Test with_entry() leaves the original collection unchanged."""
        original = Collection.new()
        original.with_entry(self.cat)
        self.assertTrue(original.is_empty)

    def test_with_entry_rejects_duplicate_headword(self):
        """Test a duplicate headword raises with the collection's title."""
        collection = Collection.new(title="Mine").with_entry(self.cat)
        with self.assertRaises(DuplicateWordError) as ctx:
            collection.with_entry(Entry.create("CAT"))
        self.assertEqual(ctx.exception.title, "Mine")

    def test_constructor_rejects_duplicate_headwords(self):
        """Test the uniqueness invariant holds at construction too."""
        with self.assertRaises(DuplicateWordError):
            Collection.new(entries=[self.cat, Entry.create("cat")])

    def test_contains_is_case_insensitive(self):
        """Test contains() ignores case."""
        collection = Collection.new(entries=[self.cat])
        self.assertTrue(collection.contains("Cat"))
        self.assertFalse(collection.contains("dog"))

    def test_with_annotation(self):
        """Test only the targeted entry's annotation changes."""
        collection = Collection.new(entries=[self.cat, self.dog])
        updated = collection.with_annotation(self.dog.id, "狗")
        self.assertEqual(updated.find_entry(self.dog.id).annotation, "狗")
        self.assertEqual(updated.find_entry(self.cat.id).annotation, "猫")

    def test_without_entry(self):
        """Test without_entry() drops exactly one entry."""
        collection = Collection.new(entries=[self.cat, self.dog])
        self.assertEqual(collection.without_entry(self.cat.id).entries, (self.dog,))

    def test_unknown_entry_raises_not_found(self):
        """Test edits addressed to a missing entry id raise NotFoundError."""
        collection = Collection.new(entries=[self.cat])
        with self.assertRaises(NotFoundError):
            collection.without_entry("missing")
        with self.assertRaises(NotFoundError):
            collection.with_annotation("missing", "x")

    def test_dict_round_trip(self):
        """Test to_dict/from_dict returns an equal collection."""
        collection = Collection.new(title="9月1日 单词表", entries=[self.cat, self.dog])
        self.assertEqual(Collection.from_dict(collection.to_dict()), collection)

    def test_from_dict_null_title_gets_default(self):
        """Test a null stored title falls back to the date-derived title."""
        data = dict(Collection.new(title="x", entries=[self.cat]).to_dict(), title=None)
        collection = Collection.from_dict(data)
        self.assertEqual(collection.title, default_title(collection.created_at))

    def test_from_dict_rejects_non_string_title(self):
        """Test a numeric stored title raises TypeError instead of AttributeError."""
        data = dict(Collection.new(entries=[self.cat]).to_dict(), title=5)
        with self.assertRaises(TypeError):
            Collection.from_dict(data)

    def test_formatted_date(self):
        """Test the full local date label."""
        collection = Collection(id="c-1", created_at=datetime(2025, 9, 1, 12, 0).astimezone())
        self.assertEqual(collection.formatted_date, "2025年9月1日")


if __name__ == '__main__':
    unittest.main()
