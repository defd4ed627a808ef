"""Tests for the in-memory code store."""

import logging
import random
import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from shortlink.core.exceptions import InvalidURLError, ShortCodeNotFoundError
from shortlink.services.code_store import ALPHABET, CodeStore

CODE_RE = re.compile(r"^[a-zA-Z0-9]{8}$")


class TestAlphabet:

    def test_alphabet_is_base62(self):
        assert len(ALPHABET) == 62
        assert len(set(ALPHABET)) == 62
        assert set(ALPHABET) == set(
            "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
        )


class TestCreate:

    def test_code_format(self, store):
        for i in range(200):
            code = store.create(f"https://example.com/{i}")
            assert CODE_RE.match(code), code

    def test_codes_are_unique(self, store):
        codes = [store.create(f"https://example.com/{i}") for i in range(1000)]
        assert len(set(codes)) == len(codes)
        assert len(store) == 1000

    def test_same_url_twice_gets_two_codes(self, store):
        first = store.create("https://example.com")
        second = store.create("https://example.com")
        assert first != second
        assert store.resolve(first) == store.resolve(second) == "https://example.com"

    def test_invalid_url_is_rejected_and_not_stored(self, store):
        with pytest.raises(InvalidURLError):
            store.create("not a url")
        assert len(store) == 0

    def test_default_random_source(self):
        store = CodeStore()
        assert isinstance(store._rng, random.SystemRandom)
        assert CODE_RE.match(store.create("https://example.com"))

    def test_seeded_source_is_deterministic(self):
        first = CodeStore(rng=random.Random(42)).create("https://example.com")
        second = CodeStore(rng=random.Random(42)).create("https://example.com")
        assert first == second


class TestCollisions:

    def test_collision_retries_with_new_draw(self, scripted_random, caplog):
        rng = scripted_random(["aaaaaaaa", "aaaaaaaa", "bbbbbbbb"])
        store = CodeStore(rng=rng)

        assert store.create("https://a.example.com") == "aaaaaaaa"
        with caplog.at_level(logging.WARNING, logger="url_shortener"):
            assert store.create("https://b.example.com") == "bbbbbbbb"

        assert "code_collision code=aaaaaaaa" in caplog.text
        assert store.resolve("aaaaaaaa") == "https://a.example.com"
        assert store.resolve("bbbbbbbb") == "https://b.example.com"
        assert store.get_stats() == {"mappings": 2, "total_collisions": 1}

    def test_repeated_collisions(self, scripted_random):
        rng = scripted_random(["Code0001", "Code0001", "Code0001", "Code0001", "Code0002"])
        store = CodeStore(rng=rng)

        assert store.create("https://a.example.com") == "Code0001"
        assert store.create("https://b.example.com") == "Code0002"
        assert store.get_stats()["total_collisions"] == 3

    def test_existing_mapping_is_never_reassigned(self, scripted_random):
        rng = scripted_random(["zzzzzzzz", "zzzzzzzz", "yyyyyyyy"])
        store = CodeStore(rng=rng)

        store.create("https://first.example.com")
        store.create("https://second.example.com")
        assert store.resolve("zzzzzzzz") == "https://first.example.com"


class TestResolve:

    def test_resolve_returns_target(self, store):
        code = store.create("https://example.com/path?q=1")
        assert store.resolve(code) == "https://example.com/path?q=1"

    def test_resolve_is_repeatable(self, store):
        code = store.create("https://example.com")
        assert {store.resolve(code) for _ in range(10)} == {"https://example.com"}

    def test_unknown_code(self, store):
        with pytest.raises(ShortCodeNotFoundError) as exc_info:
            store.resolve("abcdefgh")
        assert exc_info.value.short_code == "abcdefgh"

    def test_unknown_code_in_populated_store(self, store):
        store.create("https://example.com")
        with pytest.raises(ShortCodeNotFoundError):
            store.resolve("doesnotexist")


class TestConcurrency:

    def test_concurrent_creates_are_distinct_and_resolvable(self):
        store = CodeStore()
        urls = [f"https://example.com/{i}" for i in range(2000)]

        with ThreadPoolExecutor(max_workers=32) as pool:
            codes = list(pool.map(store.create, urls))

        assert len(set(codes)) == len(urls)
        assert len(store) == len(urls)
        for code, url in zip(codes, urls):
            assert store.resolve(code) == url

    def test_concurrent_creates_with_forced_collisions(self):
        # A two-letter alphabet makes collisions frequent
        class NarrowRandom:
            def __init__(self):
                self._rng = random.Random(7)

            def choice(self, seq):
                return self._rng.choice("ab")

        store = CodeStore(rng=NarrowRandom())
        urls = [f"https://example.com/{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            codes = list(pool.map(store.create, urls))

        assert len(set(codes)) == 200
        for code, url in zip(codes, urls):
            assert store.resolve(code) == url

    def test_concurrent_reads_and_writes(self, store):
        seeded = {store.create(f"https://seed.example.com/{i}"): f"https://seed.example.com/{i}"
                  for i in range(50)}

        def work(i):
            if i % 2:
                return store.create(f"https://example.com/{i}")
            code = list(seeded)[i % len(seeded)]
            assert store.resolve(code) == seeded[code]
            return None

        with ThreadPoolExecutor(max_workers=16) as pool:
            created = [c for c in pool.map(work, range(500)) if c is not None]

        assert len(set(created)) == 250
        assert len(store) == 300
