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
"""Cache items handed out by pools.

Every driver declares its own ``CacheItem`` subclass. A driver only accepts
items of its own subclass, so an item fetched from one pool cannot be
written through another pool's driver by accident.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

from cachepool.kernel.exceptions import CacheInvalidArgumentException

RESERVED_KEY_CHARACTERS = frozenset("{}()/\\@:")


def validate_key(key: Any) -> str:
    """Return *key* unchanged or raise ``CacheInvalidArgumentException``."""
    if not isinstance(key, str):
        raise CacheInvalidArgumentException(
            f"Cache key must be a string, got {type(key).__name__}",
            context={"key": repr(key)},
        )
    if not key:
        raise CacheInvalidArgumentException("Cache key cannot be empty")
    reserved = sorted(RESERVED_KEY_CHARACTERS.intersection(key))
    if reserved:
        raise CacheInvalidArgumentException(
            f"Cache key '{key}' contains reserved characters: {''.join(reserved)}",
            context={"key": key, "reserved": reserved},
        )
    return key


class CacheItem:
    """A key, its value, and an optional absolute expiration.

    ``expiration`` of ``None`` means the item never expires.
    """

    driver_name: ClassVar[str] = "abstract"

    def __init__(self, key: str, clock: Callable[[], float] | None = None) -> None:
        self._key = validate_key(key)
        self._clock = clock or time.time
        self._value: Any = None
        self._hit = False
        self._expiration: datetime | None = None
        self.creation_date: datetime | None = None
        self.modification_date: datetime | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self._key!r}, hit={self._hit}, expiration={self._expiration!r})"

    @property
    def key(self) -> str:
        return self._key

    def get_key(self) -> str:
        return self._key

    @property
    def value(self) -> Any:
        """The value as set, regardless of hit status."""
        return self._value

    def get(self) -> Any:
        """Return the value, or None when the item is a miss."""
        return self._value if self._hit else None

    def set(self, value: Any) -> CacheItem:
        self._value = value
        return self

    def is_hit(self) -> bool:
        return self._hit

    def set_hit(self, hit: bool) -> CacheItem:
        self._hit = hit
        return self

    @property
    def expiration(self) -> datetime | None:
        return self._expiration

    def expires_at(self, expiration: datetime | None) -> CacheItem:
        """Set an absolute expiration; naive datetimes are read as UTC."""
        if expiration is not None and not isinstance(expiration, datetime):
            raise CacheInvalidArgumentException(
                f"Expiration must be a datetime or None, got {type(expiration).__name__}"
            )
        if expiration is not None and expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=UTC)
        self._expiration = expiration
        return self

    def expires_after(self, ttl: int | float | timedelta | None) -> CacheItem:
        """Set the expiration relative to now. ``None`` clears it."""
        if ttl is None:
            self._expiration = None
            return self
        if isinstance(ttl, timedelta):
            seconds = ttl.total_seconds()
        elif isinstance(ttl, (int, float)) and not isinstance(ttl, bool):
            seconds = float(ttl)
        else:
            raise CacheInvalidArgumentException(
                f"TTL must be seconds, a timedelta or None, got {type(ttl).__name__}"
            )
        self._expiration = datetime.fromtimestamp(self._clock() + seconds, tz=UTC)
        return self

    def is_expired(self) -> bool:
        if self._expiration is None:
            return False
        return self._expiration.timestamp() <= self._clock()

    def get_ttl(self) -> int | None:
        """Seconds left before expiration, rounded up and never negative; None if it never expires."""
        if self._expiration is None:
            return None
        return max(math.ceil(self._expiration.timestamp() - self._clock()), 0)
