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
"""Value objects returned by cache drivers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DriverStatistic:
    """Snapshot of a driver's statistics, built on demand.

    Attributes:
        info: Free-text description supplied by the driver.
        size: Size reported by the driver (0 when the store offers no introspection).
        data: Comma-joined keys of the item instances tracked by the pool.
        raw_data: Driver-specific raw payload, or ``False`` when there is none.
    """

    info: str = ""
    size: int = 0
    data: str = ""
    raw_data: Any = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "info": self.info,
            "size": self.size,
            "data": self.data,
            "raw_data": self.raw_data,
        }


@dataclass(frozen=True)
class ClearResult:
    """Best-effort outcome of clearing a whole store.

    ``attempted`` is False only when the driver had no store to call, such
    as a disk driver whose backing package is not installed. ``success`` is
    whatever the store's clear primitive reported; ``detail`` carries the
    absorbed failure, if any.
    """

    success: bool
    attempted: bool = True
    detail: str | None = None

    def __bool__(self) -> bool:
        return self.success
