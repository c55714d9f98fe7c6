import tempfile
import unittest

from ipqs_client.cache import (
    KEY_PREFIX,
    MemoryCache,
    SqliteCache,
    make_cache_key,
    params_digest,
    parse_ttl,
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestMemoryCache(unittest.TestCase):
    def test_set_get(self):
        c = MemoryCache()
        c.set("k", {"a": 1}, 60)
        self.assertEqual(c.get("k"), {"a": 1})

    def test_missing_key(self):
        self.assertIsNone(MemoryCache().get("nope"))

    def test_entry_expires(self):
        clock = FakeClock()
        c = MemoryCache(clock=clock)
        c.set("k", {"a": 1}, 60)
        clock.now += 59
        self.assertEqual(c.get("k"), {"a": 1})
        clock.now += 1
        self.assertIsNone(c.get("k"))

    def test_delete(self):
        c = MemoryCache()
        c.set("k", 1, 60)
        self.assertTrue(c.delete("k"))
        self.assertFalse(c.delete("k"))
        self.assertIsNone(c.get("k"))

    def test_delete_by_prefix(self):
        c = MemoryCache()
        c.set("ipqs_a", 1, 60)
        c.set("ipqs_b", 2, 60)
        c.set("other", 3, 60)
        self.assertEqual(c.delete_by_prefix("ipqs_"), 2)
        self.assertIsNone(c.get("ipqs_a"))
        self.assertEqual(c.get("other"), 3)


class TestSqliteCache(unittest.TestCase):
    def test_set_get(self):
        with tempfile.TemporaryDirectory() as d:
            c = SqliteCache(f"{d}/cache.sqlite")
            c.set("k", {"a": 1, "b": [1, 2]}, 60)
            self.assertEqual(c.get("k"), {"a": 1, "b": [1, 2]})

    def test_persists_across_instances(self):
        with tempfile.TemporaryDirectory() as d:
            path = f"{d}/nested/cache.sqlite"
            SqliteCache(path).set("k", {"a": 1}, 60)
            self.assertEqual(SqliteCache(path).get("k"), {"a": 1})

    def test_overwrite(self):
        with tempfile.TemporaryDirectory() as d:
            c = SqliteCache(f"{d}/cache.sqlite")
            c.set("k", {"a": 1}, 60)
            c.set("k", {"a": 2}, 60)
            self.assertEqual(c.get("k"), {"a": 2})

    def test_entry_expires(self):
        with tempfile.TemporaryDirectory() as d:
            clock = FakeClock()
            c = SqliteCache(f"{d}/cache.sqlite", clock=clock)
            c.set("k", {"a": 1}, 10)
            clock.now += 10
            self.assertIsNone(c.get("k"))

    def test_delete_by_prefix_treats_underscore_literally(self):
        with tempfile.TemporaryDirectory() as d:
            c = SqliteCache(f"{d}/cache.sqlite")
            c.set("ipqs_a", 1, 60)
            c.set("ipqsXb", 2, 60)
            self.assertEqual(c.delete_by_prefix("ipqs_"), 1)
            self.assertEqual(c.get("ipqsXb"), 2)

    def test_delete(self):
        with tempfile.TemporaryDirectory() as d:
            c = SqliteCache(f"{d}/cache.sqlite")
            c.set("k", 1, 60)
            self.assertTrue(c.delete("k"))
            self.assertFalse(c.delete("k"))


class TestKeys(unittest.TestCase):
    def test_cache_key_prefixed_and_stable(self):
        k1 = make_cache_key("ip_8.8.8.8", "secret")
        k2 = make_cache_key("ip_8.8.8.8", "secret")
        self.assertEqual(k1, k2)
        self.assertTrue(k1.startswith(KEY_PREFIX))
        self.assertNotIn("secret", k1)

    def test_cache_key_depends_on_api_key(self):
        self.assertNotEqual(
            make_cache_key("ip_8.8.8.8", "key-a"),
            make_cache_key("ip_8.8.8.8", "key-b"),
        )

    def test_params_digest_ignores_order(self):
        self.assertEqual(params_digest({"a": 1, "b": 2}), params_digest({"b": 2, "a": 1}))
        self.assertNotEqual(params_digest({"a": 1}), params_digest({"a": 2}))
        self.assertEqual(params_digest(None), params_digest({}))

    def test_parse_ttl(self):
        self.assertEqual(parse_ttl("3600"), 3600)
        self.assertEqual(parse_ttl("10m"), 600)
        self.assertEqual(parse_ttl("24h"), 86400)
        self.assertEqual(parse_ttl("7d"), 604800)
        with self.assertRaises(ValueError):
            parse_ttl("5w")


if __name__ == "__main__":
    unittest.main()
