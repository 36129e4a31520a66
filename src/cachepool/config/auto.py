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
"""Provider detection by checking importable packages."""

from __future__ import annotations

import importlib
from typing import Any

import structlog

logger = structlog.get_logger("cachepool.config.auto")


class AutoConfiguration:
    """Detect available cache store providers in the running interpreter."""

    @staticmethod
    def is_available(module_name: str) -> bool:
        """Check if a Python package is importable."""
        try:
            importlib.import_module(module_name)
            return True
        except ImportError:
            return False

    @staticmethod
    def has_callable(module_name: str, attribute: str) -> bool:
        """Check that ``module_name`` exposes a callable at dotted ``attribute``.

        Returns False (never raises) when the module is missing or any part
        of the attribute path does not resolve.
        """
        if not AutoConfiguration.is_available(module_name):
            return False
        target: Any = importlib.import_module(module_name)
        for part in attribute.split("."):
            target = getattr(target, part, None)
            if target is None:
                return False
        return callable(target)

    @staticmethod
    def detect_cache_provider() -> str:
        """Detect the best available cache driver."""
        if AutoConfiguration.has_callable("diskcache", "Cache.set"):
            provider = "diskcache"
        else:
            provider = "memory"
        logger.debug("cache_provider_detected", provider=provider)
        return provider
