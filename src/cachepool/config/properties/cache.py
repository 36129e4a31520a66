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
"""Cache pool configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cachepool.core.config import config_properties


@config_properties(prefix="cachepool.cache")
class CacheProperties(BaseModel):
    """Configuration for cache pools and drivers (cachepool.cache.*)."""

    model_config = ConfigDict(frozen=True)

    driver: str = "auto"
    fallback: str | None = "memory"
    default_ttl: int = Field(default=900, ge=0)
    path: str | None = None
    item_detailed_date: bool = False
