"""
Tests for SessionCache.
"""

import json

import pytest

from licensedesk.client import SessionCache


class TestSessionCache:
    def test_missing_key(self):
        assert SessionCache().get_item("nope") is None
        assert SessionCache().get_json("nope") is None

    def test_json_round_trip(self):
        cache = SessionCache()
        cache.set_json("schools", [{"code": "ABC123"}])

        assert cache.get_item("schools") == '[{"code": "ABC123"}]'
        assert cache.get_json("schools") == [{"code": "ABC123"}]
        assert cache.get_item("missing") is None

    def test_corrupt_entry_raises(self):
        cache = SessionCache()
        cache.set_item("schools", "{broken")

        with pytest.raises(json.JSONDecodeError):
            cache.get_json("schools")

    def test_remove_and_clear(self):
        cache = SessionCache()
        cache.set_item("a", "1")
        cache.set_item("b", "2")

        cache.remove_item("a")
        cache.remove_item("missing")
        assert cache.get_item("a") is None
        assert cache.get_item("b") == "2"

        cache.clear()
        assert cache.get_item("b") is None
