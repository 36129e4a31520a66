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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from cachepool.cache.types import DriverStatistic

CACHEPOOL_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "cachepool": "bold magenta",
    "dim": "dim",
})

console = Console(theme=CACHEPOOL_THEME)


def print_banner() -> None:
    from cachepool import __version__

    console.print(f"[cachepool]cachepool[/cachepool] [dim](v{__version__})[/dim]")
    console.print("  [dim]Copyright 2026 Firefly Software Solutions Inc. | Apache 2.0 License[/dim]\n")


def print_statistics(driver_name: str, stats: DriverStatistic) -> None:
    """Print a driver statistics snapshot as a two-column table."""
    table = Table(title=f"[cachepool]{driver_name}[/cachepool] statistics", show_header=False, border_style="dim")
    table.add_column("Field", style="info")
    table.add_column("Value")
    table.add_row("info", escape(stats.info))
    table.add_row("size", str(stats.size))
    table.add_row("data", escape(stats.data) if stats.data else "[dim](no tracked items)[/dim]")
    table.add_row("raw_data", escape(repr(stats.raw_data)))
    console.print(table)
