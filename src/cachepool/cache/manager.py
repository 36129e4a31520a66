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
"""Cache manager: driver registry with availability checks and fallback."""

from __future__ import annotations

import structlog

from cachepool.cache.adapters.disk import DiskCacheDriver
from cachepool.cache.adapters.memory import MemoryDriver
from cachepool.cache.pool import CachePool
from cachepool.config.auto import AutoConfiguration
from cachepool.config.properties.cache import CacheProperties
from cachepool.core.config import Config
from cachepool.kernel.exceptions import (
    CacheDriverCheckException,
    CacheDriverConnectException,
    CacheDriverNotFoundException,
    CacheInvalidArgumentException,
)

logger = structlog.get_logger("cachepool.cache")

AUTO = "auto"


class CacheManager:
    """Builds, checks and reuses cache pools by driver name.

    A requested driver whose backing store is unavailable is replaced by
    the configured fallback driver. Without a fallback the request fails
    with ``CacheDriverCheckException``.
    """

    def __init__(self) -> None:
        self._drivers: dict[str, type[CachePool]] = {
            DiskCacheDriver.driver_name: DiskCacheDriver,
            MemoryDriver.driver_name: MemoryDriver,
        }
        self._instances: dict[str, CachePool] = {}

    @classmethod
    def from_config(cls, config: Config) -> tuple[CacheManager, CachePool]:
        """Create a manager and the pool described by ``cachepool.cache.*``."""
        properties = config.bind(CacheProperties)
        manager = cls()
        return manager, manager.get_instance(properties.driver, properties)

    @property
    def drivers(self) -> dict[str, type[CachePool]]:
        return dict(self._drivers)

    def register_driver(self, name: str, driver_cls: type[CachePool]) -> None:
        if not (isinstance(driver_cls, type) and issubclass(driver_cls, CachePool)):
            raise CacheInvalidArgumentException(
                f"Driver '{name}' must be a CachePool subclass",
                context={"driver": name},
            )
        self._drivers[name] = driver_cls
        logger.info("cache_driver_registered", driver=name, cls=driver_cls.__name__)

    def driver_class(self, name: str) -> type[CachePool]:
        try:
            return self._drivers[name]
        except KeyError:
            raise CacheDriverNotFoundException(
                f"Cache driver '{name}' is not registered",
                context={"driver": name, "registered": sorted(self._drivers)},
            ) from None

    def get_instance(
        self,
        driver: str = AUTO,
        properties: CacheProperties | None = None,
        instance_id: str | None = None,
    ) -> CachePool:
        """Return a ready pool for *driver*, building it on first request."""
        properties = properties or CacheProperties()
        name = AutoConfiguration.detect_cache_provider() if driver == AUTO else driver
        key = instance_id or f"{name}:{hash(properties)}"

        existing = self._instances.get(key)
        if existing is not None:
            return existing

        pool = self._build(name, properties, key)
        if not pool.check_availability():
            fallback = properties.fallback
            if not fallback or fallback == name:
                raise CacheDriverCheckException(
                    f"Cache driver '{name}' is not available in this runtime",
                    context={"driver": name, "help": pool.get_help()},
                )
            logger.warning("driver_fallback", driver=name, fallback=fallback)
            pool = self._build(fallback, properties, key)
            if not pool.check_availability():
                raise CacheDriverCheckException(
                    f"Fallback cache driver '{fallback}' is not available in this runtime",
                    context={"driver": fallback, "help": pool.get_help()},
                )

        if not pool.connect():
            raise CacheDriverConnectException(
                f"Cache driver '{pool.driver_name}' failed to connect",
                context={"driver": pool.driver_name},
            )

        self._instances[key] = pool
        logger.info("cache_pool_ready", driver=pool.driver_name, instance_id=key)
        return pool

    def _build(self, name: str, properties: CacheProperties, instance_id: str) -> CachePool:
        return self.driver_class(name)(properties, instance_id)

    def get_instances(self) -> dict[str, CachePool]:
        return dict(self._instances)

    def clear_instances(self) -> None:
        """Forget every pool this manager built; stores are left untouched."""
        for pool in self._instances.values():
            pool.detach_all_items()
        self._instances.clear()
