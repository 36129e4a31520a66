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
"""Disk cache driver backed by the ``diskcache`` package."""

from __future__ import annotations

import warnings
from collections.abc import Callable
from typing import Any

from cachepool.cache.item import CacheItem
from cachepool.cache.pool import CachePool
from cachepool.cache.ports.outbound import KeyValueStore
from cachepool.cache.types import ClearResult, DriverStatistic
from cachepool.config.auto import AutoConfiguration
from cachepool.config.properties.cache import CacheProperties

_NOT_FOUND = object()


class DiskCacheItem(CacheItem):
    """Cache item native to :class:`DiskCacheDriver`."""

    driver_name = "diskcache"


class DiskCacheDriver(CachePool[DiskCacheItem]):
    """Cache pool storing items in a ``diskcache.Cache`` directory.

    The store is used through four primitives only: ``set``, ``get``,
    ``delete`` and ``clear``. A ``client`` with the same shape may be
    injected; otherwise a ``diskcache.Cache`` is opened on first use at
    ``properties.path`` (a temporary directory when unset).
    """

    driver_name = "diskcache"
    item_class = DiskCacheItem

    def __init__(
        self,
        properties: CacheProperties | None = None,
        instance_id: str | None = None,
        clock: Callable[[], float] | None = None,
        client: KeyValueStore | None = None,
    ) -> None:
        super().__init__(properties, instance_id, clock)
        self._client = client

    @property
    def client(self) -> KeyValueStore:
        if self._client is None:
            import diskcache

            self._client = diskcache.Cache(directory=self._properties.path)
        return self._client

    def check_availability(self) -> bool:
        return AutoConfiguration.has_callable("diskcache", "Cache.set")

    def connect(self) -> bool:
        return True

    def read(self, item: DiskCacheItem) -> Any | None:
        native = self.ensure_native(item)
        data = self.client.get(native.key, default=_NOT_FOUND)
        if data is _NOT_FOUND:
            return None
        return data

    def write(self, item: DiskCacheItem) -> bool:
        native = self.ensure_native(item)
        return bool(
            self.client.set(native.key, self.driver_pre_wrap(native), expire=self.remaining_ttl(native))
        )

    def delete(self, item: DiskCacheItem) -> bool:
        native = self.ensure_native(item)
        return bool(self.client.delete(native.key))

    def clear_all(self) -> ClearResult:
        if self._client is None and not self.check_availability():
            return ClearResult(success=False, attempted=False, detail="diskcache is not installed")

        from diskcache import Timeout

        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            try:
                removed = self.client.clear()
            except Timeout as exc:
                return ClearResult(success=False, detail=f"diskcache clear timed out: {exc}")
        # diskcache reports the number of removed entries; any count is a completed clear.
        success = removed if isinstance(removed, bool) else True
        return ClearResult(success=success)

    def get_help(self) -> str:
        return (
            "This driver relies on the diskcache package (Python 3.12+), "
            "see: https://grantjenks.com/docs/diskcache/ . "
            "Install it with: pip install diskcache"
        )

    def get_statistics(self) -> DriverStatistic:
        return DriverStatistic(
            info="[DiskCache] A void info string",
            size=0,
            data=", ".join(self._item_instances),
            raw_data=False,
        )
