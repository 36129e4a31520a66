# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Shared fixtures for cache tests: a fake diskcache client and a fixed clock."""

from __future__ import annotations

import warnings
from datetime import UTC, datetime
from typing import Any

import pytest

from cachepool.cache.adapters.disk import DiskCacheDriver
from cachepool.config.properties.cache import CacheProperties

NOW = 1_700_000_000.0


class FakeClock:
    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def at(self, offset: float) -> datetime:
        return datetime.fromtimestamp(self.now + offset, tz=UTC)


class FakeDiskCache:
    """Minimal stub matching the diskcache.Cache primitives, recording every call.

    Expiration is recorded but not enforced, so tests see exactly what the
    driver asked the store to do.
    """

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.calls: list[tuple] = []
        self.set_result = True
        self.clear_warning: str | None = None
        self.clear_error: Exception | None = None

    def set(self, key: str, value: Any, expire: float | None = None) -> bool:
        self.calls.append(("set", key, value, expire))
        if self.set_result:
            self.data[key] = value
        return self.set_result

    def get(self, key: str, default: Any = None) -> Any:
        self.calls.append(("get", key))
        return self.data.get(key, default)

    def delete(self, key: str) -> bool:
        self.calls.append(("delete", key))
        return self.data.pop(key, None) is not None

    def clear(self) -> int:
        self.calls.append(("clear",))
        if self.clear_warning is not None:
            warnings.warn(self.clear_warning, RuntimeWarning, stacklevel=2)
        if self.clear_error is not None:
            raise self.clear_error
        count = len(self.data)
        self.data.clear()
        return count

    def expire_of(self, key: str) -> float | None:
        sets = [call for call in self.calls if call[0] == "set" and call[1] == key]
        return sets[-1][3]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_store() -> FakeDiskCache:
    return FakeDiskCache()


@pytest.fixture
def disk_driver(fake_store: FakeDiskCache, clock: FakeClock) -> DiskCacheDriver:
    return DiskCacheDriver(CacheProperties(), clock=clock, client=fake_store)
