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
"""Click commands that report on registered drivers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from rich.markup import escape
from rich.table import Table

from cachepool.cli.console import console, print_statistics
from cachepool.kernel.exceptions import CacheDriverNotFoundException

if TYPE_CHECKING:
    from cachepool.cli.main import CachePoolContext


@click.command()
@click.pass_obj
def drivers_command(obj: CachePoolContext) -> None:
    """List registered drivers and whether their store is available."""
    table = Table(title="Cache Drivers", border_style="dim")
    table.add_column("Driver", style="info")
    table.add_column("Class")
    table.add_column("Status")

    properties = obj.properties
    for name, driver_cls in sorted(obj.manager.drivers.items()):
        available = driver_cls(properties).check_availability()
        status = "[success]available[/success]" if available else "[dim]unavailable[/dim]"
        table.add_row(name, driver_cls.__name__, status)

    console.print(table)


@click.command()
@click.argument("driver")
@click.pass_obj
def help_command(obj: CachePoolContext, driver: str) -> None:
    """Show the prerequisites of DRIVER."""
    try:
        driver_cls = obj.manager.driver_class(driver)
    except CacheDriverNotFoundException as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(escape(driver_cls(obj.properties).get_help()))


@click.command()
@click.pass_obj
def stats_command(obj: CachePoolContext) -> None:
    """Show statistics of the configured pool."""
    pool = obj.pool
    print_statistics(pool.driver_name, pool.get_statistics())
