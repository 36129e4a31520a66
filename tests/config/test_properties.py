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
"""Tests for CacheProperties binding."""

import pytest

from cachepool.config.properties.cache import CacheProperties
from cachepool.core.config import Config
from cachepool.kernel.exceptions import CacheInvalidConfigurationException


class TestCacheProperties:
    def test_defaults(self):
        props = CacheProperties()
        assert props.driver == "auto"
        assert props.fallback == "memory"
        assert props.default_ttl == 900
        assert props.path is None
        assert props.item_detailed_date is False

    def test_bind_from_config(self):
        config = Config({"cachepool": {"cache": {"driver": "diskcache", "path": "/tmp/x", "default_ttl": 30}}})
        props = config.bind(CacheProperties)
        assert props.driver == "diskcache"
        assert props.path == "/tmp/x"
        assert props.default_ttl == 30

    def test_bind_from_library_defaults(self):
        props = Config.from_file(None).bind(CacheProperties)
        assert props == CacheProperties()

    def test_env_override_is_coerced(self, monkeypatch):
        monkeypatch.setenv("CACHEPOOL_CACHE_DEFAULT_TTL", "60")
        monkeypatch.setenv("CACHEPOOL_CACHE_ITEM_DETAILED_DATE", "true")
        props = Config({}).bind(CacheProperties)
        assert props.default_ttl == 60
        assert props.item_detailed_date is True

    def test_negative_ttl_fails_fast(self):
        config = Config({"cachepool": {"cache": {"default_ttl": -1}}})
        with pytest.raises(CacheInvalidConfigurationException) as exc_info:
            config.bind(CacheProperties)
        assert exc_info.value.context["prefix"] == "cachepool.cache"

    def test_properties_are_hashable(self):
        assert hash(CacheProperties()) == hash(CacheProperties())
