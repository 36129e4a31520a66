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
"""Tests for CacheManager driver lookup, availability gating and fallback."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from cachepool.cache.adapters.disk import DiskCacheDriver
from cachepool.cache.adapters.memory import MemoryDriver
from cachepool.cache.manager import CacheManager
from cachepool.config.auto import AutoConfiguration
from cachepool.config.properties.cache import CacheProperties
from cachepool.core.config import Config
from cachepool.kernel.exceptions import (
    CacheDriverCheckException,
    CacheDriverConnectException,
    CacheDriverNotFoundException,
    CacheInvalidArgumentException,
    CacheTypeConfusionException,
)


class UnavailableDriver(MemoryDriver):
    driver_name = "unavailable"

    def check_availability(self) -> bool:
        return False


class OfflineDriver(MemoryDriver):
    driver_name = "offline"

    def connect(self) -> bool:
        return False


class TestGetInstance:
    def test_builds_requested_driver(self):
        pool = CacheManager().get_instance("memory")
        assert isinstance(pool, MemoryDriver)

    def test_builds_diskcache_driver(self):
        pool = CacheManager().get_instance("diskcache")
        assert isinstance(pool, DiskCacheDriver)

    def test_reuses_instances(self):
        manager = CacheManager()
        properties = CacheProperties()
        assert manager.get_instance("memory", properties) is manager.get_instance("memory", properties)

    def test_instance_id_separates_pools(self):
        manager = CacheManager()
        first = manager.get_instance("memory", instance_id="one")
        second = manager.get_instance("memory", instance_id="two")
        assert first is not second
        assert set(manager.get_instances()) == {"one", "two"}

    def test_unknown_driver(self):
        with pytest.raises(CacheDriverNotFoundException) as exc_info:
            CacheManager().get_instance("nope")
        assert "memory" in exc_info.value.context["registered"]

    def test_auto_uses_detected_provider(self):
        with patch.object(AutoConfiguration, "detect_cache_provider", return_value="memory"):
            pool = CacheManager().get_instance("auto")
        assert isinstance(pool, MemoryDriver)


class TestAvailabilityGating:
    def test_falls_back_when_driver_unavailable(self):
        with patch.object(AutoConfiguration, "has_callable", return_value=False):
            pool = CacheManager().get_instance("diskcache", CacheProperties(fallback="memory"))
        assert isinstance(pool, MemoryDriver)

    def test_raises_without_fallback(self):
        with patch.object(AutoConfiguration, "has_callable", return_value=False):
            with pytest.raises(CacheDriverCheckException) as exc_info:
                CacheManager().get_instance("diskcache", CacheProperties(fallback=None))
        assert exc_info.value.context["driver"] == "diskcache"
        assert "diskcache" in exc_info.value.context["help"]

    def test_raises_when_fallback_also_unavailable(self):
        manager = CacheManager()
        manager.register_driver("unavailable", UnavailableDriver)
        with patch.object(AutoConfiguration, "has_callable", return_value=False):
            with pytest.raises(CacheDriverCheckException):
                manager.get_instance("diskcache", CacheProperties(fallback="unavailable"))

    def test_connect_failure(self):
        manager = CacheManager()
        manager.register_driver("offline", OfflineDriver)
        with pytest.raises(CacheDriverConnectException):
            manager.get_instance("offline")


class TestRegistry:
    def test_register_custom_driver(self):
        manager = CacheManager()
        manager.register_driver("offline", OfflineDriver)
        assert manager.driver_class("offline") is OfflineDriver
        assert "offline" in manager.drivers

    def test_register_rejects_non_pool(self):
        with pytest.raises(CacheInvalidArgumentException):
            CacheManager().register_driver("bad", dict)  # type: ignore[arg-type]

    def test_clear_instances(self):
        manager = CacheManager()
        pool = manager.get_instance("memory")
        pool.get_item("a")
        manager.clear_instances()
        assert manager.get_instances() == {}
        assert dict(pool.item_instances) == {}


class TestCrossDriverItems:
    def test_item_from_other_pool_is_rejected(self, fake_store):
        manager = CacheManager()
        memory = manager.get_instance("memory")
        disk = DiskCacheDriver(client=fake_store)

        foreign = memory.get_item("a")
        with pytest.raises(CacheTypeConfusionException):
            disk.delete(foreign)
        with pytest.raises(CacheTypeConfusionException):
            disk.save(foreign)
        assert fake_store.calls == []


class TestFromConfig:
    def test_builds_pool_from_config(self):
        config = Config({"cachepool": {"cache": {"driver": "memory", "default_ttl": 60}}})
        manager, pool = CacheManager.from_config(config)
        assert isinstance(pool, MemoryDriver)
        assert pool.properties.default_ttl == 60
        assert list(manager.get_instances().values()) == [pool]
