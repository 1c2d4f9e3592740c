"""Shared fixtures: spy-counting session store and cookie jar."""
from collections import Counter
from typing import Any, Optional

import pytest

from navigator_edgesession import EdgeSession, Signature
from navigator_edgesession.exceptions import StoreError
from navigator_edgesession.result import Err, Ok

SECRET = "secret"


class MockSessionStore:
    """Dict store without ``take_and_delete``; counts every call."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.data: dict[str, Any] = {}
        self.calls: Counter = Counter()
        self.expires: dict[str, Optional[int]] = {}

    def _result(self, value: Any = None):
        if self.fail:
            return Err(StoreError("mock error"))
        return Ok(value)

    async def get(self, key: str):
        self.calls["get"] += 1
        return self._result(self.data.get(key))

    async def set(self, key: str, value: Any, expires_in: Optional[int] = None):
        self.calls["set"] += 1
        if not self.fail:
            self.data[key] = value
            self.expires[key] = expires_in
        return self._result()

    async def delete(self, key: str):
        self.calls["delete"] += 1
        if not self.fail:
            self.data.pop(key, None)
        return self._result()

    async def delete_all(self, prefix: str):
        self.calls["delete_all"] += 1
        if not self.fail:
            for key in [k for k in self.data if k.startswith(prefix)]:
                del self.data[key]
        return self._result()


class MockCookies:
    """Cookie jar sharing one dict between request and response sides."""

    def __init__(self, jar: dict) -> None:
        self.jar = jar
        self.calls: Counter = Counter()
        self.last_set: dict = {}

    def get(self, name: str) -> Optional[str]:
        self.calls["get"] += 1
        return self.jar.get(name)

    def set(self, name: str, value: str, **attrs) -> None:
        self.calls["set"] += 1
        self.last_set = {"name": name, "value": value, **attrs}
        self.jar[name] = value

    def delete(self, name: str) -> None:
        self.calls["delete"] += 1
        self.jar.pop(name, None)


@pytest.fixture
def signature():
    return Signature(SECRET)


@pytest.fixture
def store():
    return MockSessionStore()


@pytest.fixture
def failing_store():
    return MockSessionStore(fail=True)


@pytest.fixture
def cookie_jar():
    return {}


@pytest.fixture
def cookies(cookie_jar):
    return MockCookies(cookie_jar)


@pytest.fixture
def request_cookies(cookie_jar):
    """Read side of the same jar, as seen by a later request."""
    return MockCookies(cookie_jar)


@pytest.fixture
def session(signature, store):
    return EdgeSession(signature, store)
