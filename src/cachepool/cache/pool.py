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
"""Cache pool base shared by every driver.

The pool owns the item lifecycle: it hands out items, tracks the instances
it handed out, wraps values before they reach a driver and unwraps payloads
coming back. Concrete drivers subclass :class:`CachePool` and implement the
driver contract (``check_availability`` .. ``get_statistics``) against their
backing store.
"""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any, ClassVar, Generic, TypeVar

import structlog

from cachepool.cache.item import CacheItem, validate_key
from cachepool.cache.types import ClearResult, DriverStatistic
from cachepool.config.properties.cache import CacheProperties
from cachepool.kernel.exceptions import CacheTypeConfusionException

logger = structlog.get_logger("cachepool.cache.pool")

ItemT = TypeVar("ItemT", bound=CacheItem)

# Keys of the wrapped payload handed to drivers.
DATA_INDEX = "d"
EXPIRATION_INDEX = "e"
CREATION_INDEX = "c"
MODIFICATION_INDEX = "m"


class CachePool(ABC, Generic[ItemT]):
    """Abstract pool base: PSR-6 style item API on top of a driver contract."""

    driver_name: ClassVar[str]
    item_class: ClassVar[type[CacheItem]]

    def __init__(
        self,
        properties: CacheProperties | None = None,
        instance_id: str | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._properties = properties or CacheProperties()
        self._instance_id = instance_id or self.driver_name
        self._clock = clock or time.time
        self._item_instances: dict[str, ItemT] = {}
        self._deferred: dict[str, ItemT] = {}

    @property
    def properties(self) -> CacheProperties:
        return self._properties

    @property
    def instance_id(self) -> str:
        return self._instance_id

    @property
    def item_instances(self) -> Mapping[str, ItemT]:
        """Read-only view of the items this pool has handed out."""
        return MappingProxyType(self._item_instances)

    # ------------------------------------------------------------------
    # Driver contract
    # ------------------------------------------------------------------

    @abstractmethod
    def check_availability(self) -> bool:
        """Whether the backing store can be used in this runtime. Never raises."""

    @abstractmethod
    def connect(self) -> bool: ...

    @abstractmethod
    def read(self, item: ItemT) -> Any | None:
        """Return the raw stored payload for *item*, or None on a miss."""

    @abstractmethod
    def write(self, item: ItemT) -> bool: ...

    @abstractmethod
    def delete(self, item: ItemT) -> bool: ...

    @abstractmethod
    def clear_all(self) -> ClearResult: ...

    @abstractmethod
    def get_help(self) -> str: ...

    @abstractmethod
    def get_statistics(self) -> DriverStatistic: ...

    # ------------------------------------------------------------------
    # Helpers for drivers
    # ------------------------------------------------------------------

    def ensure_native(self, item: CacheItem) -> ItemT:
        """Return *item* if it is this driver's item type, else raise."""
        if not isinstance(item, self.item_class):
            raise CacheTypeConfusionException(
                "Cross-driver type confusion detected",
                context={
                    "driver": self.driver_name,
                    "expected": self.item_class.__name__,
                    "received": type(item).__name__,
                },
            )
        return item  # type: ignore[return-value]

    def remaining_ttl(self, item: CacheItem) -> int | None:
        """Seconds until *item* expires, clamped to 0; None when it never expires."""
        if item.expiration is None:
            return None
        # Partial seconds round up so a live item is never stored already expired.
        ttl = math.ceil(item.expiration.timestamp() - self._clock())
        return ttl if ttl > 0 else 0

    def driver_pre_wrap(self, item: CacheItem) -> dict[str, Any]:
        """Build the payload a driver stores for *item*."""
        expiration = item.expiration
        wrapper: dict[str, Any] = {
            DATA_INDEX: item.value,
            EXPIRATION_INDEX: expiration.timestamp() if expiration is not None else None,
        }
        if self._properties.item_detailed_date:
            now = self._clock()
            created = item.creation_date.timestamp() if item.creation_date else now
            wrapper[CREATION_INDEX] = created
            wrapper[MODIFICATION_INDEX] = now
        return wrapper

    @staticmethod
    def driver_unwrap_data(payload: Mapping[str, Any]) -> Any:
        return payload[DATA_INDEX]

    @staticmethod
    def driver_unwrap_edate(payload: Mapping[str, Any]) -> datetime | None:
        timestamp = payload.get(EXPIRATION_INDEX)
        if timestamp is None:
            return None
        return datetime.fromtimestamp(timestamp, tz=UTC)

    @staticmethod
    def _is_wrapped(payload: Any) -> bool:
        return isinstance(payload, Mapping) and DATA_INDEX in payload and EXPIRATION_INDEX in payload

    # ------------------------------------------------------------------
    # Item API
    # ------------------------------------------------------------------

    def _new_item(self, key: str) -> ItemT:
        item: ItemT = self.item_class(key, clock=self._clock)  # type: ignore[assignment]
        default_ttl = self._properties.default_ttl
        item.expires_after(default_ttl if default_ttl > 0 else None)
        return item

    def get_item(self, key: str) -> ItemT:
        """Return the item for *key*; a miss is an item whose ``is_hit()`` is False."""
        validate_key(key)
        tracked = self._item_instances.get(key)
        if tracked is not None:
            if not tracked.is_expired():
                return tracked
            del self._item_instances[key]
            if tracked.is_hit():
                logger.debug("cache_item_expired", driver=self.driver_name, key=key)
                self.delete(tracked)
                item = self._new_item(key)
                self._item_instances[key] = item
                return item

        item = self._new_item(key)
        payload = self.read(item)
        if payload is None:
            logger.debug("cache_miss", driver=self.driver_name, key=key)
        elif not self._is_wrapped(payload):
            logger.debug("cache_payload_unrecognised", driver=self.driver_name, key=key)
        else:
            item.set(self.driver_unwrap_data(payload))
            item.expires_at(self.driver_unwrap_edate(payload))
            if CREATION_INDEX in payload:
                item.creation_date = datetime.fromtimestamp(payload[CREATION_INDEX], tz=UTC)
                item.modification_date = datetime.fromtimestamp(payload[MODIFICATION_INDEX], tz=UTC)

            if item.is_expired():
                logger.debug("cache_item_expired", driver=self.driver_name, key=key)
                self.delete(item)
                item = self._new_item(key)
            else:
                item.set_hit(True)

        self._item_instances[key] = item
        return item

    def get_items(self, keys: Iterable[str]) -> dict[str, ItemT]:
        return {key: self.get_item(key) for key in keys}

    def has_item(self, key: str) -> bool:
        return self.get_item(key).is_hit()

    def save(self, item: CacheItem) -> bool:
        """Persist *item* through the driver. Returns the store's result."""
        native = self.ensure_native(item)
        if self._properties.item_detailed_date:
            now = datetime.fromtimestamp(self._clock(), tz=UTC)
            if native.creation_date is None:
                native.creation_date = now
            native.modification_date = now

        saved = self.write(native)
        if saved:
            native.set_hit(True)
            self._item_instances[native.key] = native
            logger.debug("cache_item_saved", driver=self.driver_name, key=native.key)
        else:
            logger.debug("cache_item_save_failed", driver=self.driver_name, key=native.key)
        return saved

    def save_deferred(self, item: CacheItem) -> bool:
        native = self.ensure_native(item)
        self._deferred[native.key] = native
        return True

    def commit(self) -> bool:
        """Save every deferred item; True only if all of them were stored."""
        results = [self.save(item) for item in self._deferred.values()]
        self._deferred.clear()
        return all(results)

    def delete_item(self, key: str) -> bool:
        item = self.get_item(key)
        if item.is_hit() and self.delete(item):
            item.set_hit(False)
            self._item_instances.pop(key, None)
            self._deferred.pop(key, None)
            logger.debug("cache_item_deleted", driver=self.driver_name, key=key)
            return True
        return False

    def delete_items(self, keys: Iterable[str]) -> bool:
        results = [self.delete_item(key) for key in keys]
        return all(results)

    def clear(self) -> ClearResult:
        """Clear the whole store and forget every tracked item."""
        result = self.clear_all()
        self._item_instances.clear()
        self._deferred.clear()
        if not result.success:
            logger.warning(
                "cache_clear_failed",
                driver=self.driver_name,
                attempted=result.attempted,
                detail=result.detail,
            )
        return result

    def detach_item(self, item: CacheItem) -> None:
        if self._item_instances.get(item.key) is item:
            del self._item_instances[item.key]

    def detach_all_items(self) -> None:
        self._item_instances.clear()
