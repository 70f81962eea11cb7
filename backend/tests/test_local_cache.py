import unittest

from backend.local_cache import InMemoryLocalCache, SqlLocalCache


class SqlLocalCacheTests(unittest.TestCase):
    def setUp(self):
        self.cache = SqlLocalCache("sqlite+pysqlite:///:memory:")

    def test_set_get_overwrite(self):
        self.assertIsNone(self.cache.get_item("contacts"))
        self.cache.set_item("contacts", "[]")
        self.cache.set_item("contacts", '[{"id": "c1"}]')
        self.assertEqual(self.cache.get_item("contacts"), '[{"id": "c1"}]')

    def test_remove_and_keys(self):
        self.cache.set_item("contacts", "[]")
        self.cache.set_item("currentUser", "{}")
        self.assertEqual(sorted(self.cache.keys()), ["contacts", "currentUser"])

        self.cache.remove_item("contacts")
        self.cache.remove_item("never-set")
        self.assertEqual(self.cache.keys(), ["currentUser"])

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlLocalCache("")


class InMemoryLocalCacheTests(unittest.TestCase):
    def test_round_trip_and_reset(self):
        cache = InMemoryLocalCache()
        cache.set_item("tasks", "[]")
        self.assertEqual(cache.get_item("tasks"), "[]")
        self.assertEqual(cache.keys(), ["tasks"])
        cache.reset()
        self.assertIsNone(cache.get_item("tasks"))


if __name__ == "__main__":
    unittest.main()
