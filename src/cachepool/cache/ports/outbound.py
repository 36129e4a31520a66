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
"""Cache driver contract and the key/value store primitives drivers wrap."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cachepool.cache.item import CacheItem
    from cachepool.cache.types import ClearResult, DriverStatistic


@runtime_checkable
class CacheDriver(Protocol):
    """Operations a backend must implement to plug into a cache pool.

    ``read`` returns None for a miss. Only a foreign item passed to
    ``read``/``write``/``delete`` raises; every other failure is reported
    through the boolean or ``ClearResult`` return value.
    """

    def check_availability(self) -> bool: ...

    def connect(self) -> bool: ...

    def read(self, item: CacheItem) -> Any | None: ...

    def write(self, item: CacheItem) -> bool: ...

    def delete(self, item: CacheItem) -> bool: ...

    def clear_all(self) -> ClearResult: ...

    def get_help(self) -> str: ...

    def get_statistics(self) -> DriverStatistic: ...


@runtime_checkable
class KeyValueStore(Protocol):
    """Primitive operations of an external key/value store.

    Shaped after ``diskcache.Cache``: ``get`` returns *default* when the key
    is absent, ``expire`` is in seconds and ``None`` means no expiry.
    """

    def set(self, key: str, value: Any, expire: float | None = None) -> bool: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def delete(self, key: str) -> bool: ...

    def clear(self) -> int: ...
