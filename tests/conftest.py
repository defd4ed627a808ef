"""Shared fixtures for the URL shortener tests."""

import random
from typing import Iterable, Iterator, Sequence

import pytest
from fastapi.testclient import TestClient

from shortlink.main import create_app
from shortlink.services.code_store import CodeStore


class ScriptedRandom:
    """
    Random source replaying a fixed list of codes.

    Each code is spelled out one character per choice() call, so the store
    sees exactly the candidates listed, in order.
    """

    def __init__(self, codes: Iterable[str]):
        self._chars: Iterator[str] = iter("".join(codes))

    def choice(self, seq: Sequence[str]) -> str:
        char = next(self._chars)
        assert char in seq
        return char


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def store() -> CodeStore:
    """Store with a seeded random source."""
    return CodeStore(rng=random.Random(1234))


@pytest.fixture
def app(store):
    return create_app(code_store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
