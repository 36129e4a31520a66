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
"""In-process memory driver."""

from __future__ import annotations

from typing import Any

from cachepool.cache.item import CacheItem
from cachepool.cache.pool import CachePool
from cachepool.cache.types import ClearResult, DriverStatistic


class MemoryCacheItem(CacheItem):
    """Cache item native to :class:`MemoryDriver`."""

    driver_name = "memory"


class MemoryDriver(CachePool[MemoryCacheItem]):
    """In-memory driver with TTL support.

    Suitable for development, testing, and single-process applications.
    Also serves as the default fallback of CacheManager.
    """

    driver_name = "memory"
    item_class = MemoryCacheItem

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._store: dict[str, tuple[Any, float | None]] = {}

    def _live_keys(self) -> list[str]:
        now = self._clock()
        return [k for k, (_, expires_at) in self._store.items() if expires_at is None or expires_at > now]

    def check_availability(self) -> bool:
        return True

    def connect(self) -> bool:
        return True

    def read(self, item: MemoryCacheItem) -> Any | None:
        native = self.ensure_native(item)
        entry = self._store.get(native.key)
        if entry is None:
            return None

        payload, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._store[native.key]
            return None

        return payload

    def write(self, item: MemoryCacheItem) -> bool:
        native = self.ensure_native(item)
        ttl = self.remaining_ttl(native)
        expires_at = None if ttl is None else self._clock() + ttl
        self._store[native.key] = (self.driver_pre_wrap(native), expires_at)
        return True

    def delete(self, item: MemoryCacheItem) -> bool:
        native = self.ensure_native(item)
        return self._store.pop(native.key, None) is not None

    def clear_all(self) -> ClearResult:
        self._store.clear()
        return ClearResult(success=True)

    def get_help(self) -> str:
        return "This driver keeps items in process memory and has no prerequisites."

    def get_statistics(self) -> DriverStatistic:
        live = self._live_keys()
        return DriverStatistic(
            info=f"[Memory] {len(live)} live entries",
            size=len(live),
            data=", ".join(self._item_instances),
            raw_data=live,
        )
