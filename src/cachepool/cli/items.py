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
"""Click commands operating on single items and on the whole store."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click
from rich.markup import escape

from cachepool.cli.console import console
from cachepool.kernel.exceptions import CacheInvalidArgumentException

if TYPE_CHECKING:
    from cachepool.cli.main import CachePoolContext


@click.command()
@click.argument("key")
@click.pass_obj
def get_command(obj: CachePoolContext, key: str) -> None:
    """Print the value stored under KEY; exits with 1 on a miss."""
    try:
        item = obj.pool.get_item(key)
    except CacheInvalidArgumentException as exc:
        raise click.BadParameter(str(exc), param_hint="KEY") from exc

    if not item.is_hit():
        console.print(f"[dim]miss:[/dim] {escape(key)}")
        raise SystemExit(1)

    value = item.get()
    click.echo(value if isinstance(value, str) else json.dumps(value))


@click.command()
@click.argument("key")
@click.argument("value")
@click.option("--ttl", type=int, default=None, help="Seconds to live (default: cachepool.cache.default_ttl).")
@click.option("--json", "as_json", is_flag=True, help="Parse VALUE as JSON.")
@click.pass_obj
def set_command(obj: CachePoolContext, key: str, value: str, ttl: int | None, as_json: bool) -> None:
    """Store VALUE under KEY."""
    if as_json:
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"not valid JSON: {exc}", param_hint="VALUE") from exc
    else:
        parsed = value

    pool = obj.pool
    try:
        item = pool.get_item(key)
    except CacheInvalidArgumentException as exc:
        raise click.BadParameter(str(exc), param_hint="KEY") from exc

    item.set(parsed)
    if ttl is not None:
        item.expires_after(ttl)

    if not pool.save(item):
        console.print("[error]ERROR[/error] store rejected the write")
        raise SystemExit(2)
    console.print("[success]OK[/success]")


@click.command()
@click.argument("key")
@click.pass_obj
def delete_command(obj: CachePoolContext, key: str) -> None:
    """Delete KEY; exits with 1 when nothing was deleted."""
    try:
        deleted = obj.pool.delete_item(key)
    except CacheInvalidArgumentException as exc:
        raise click.BadParameter(str(exc), param_hint="KEY") from exc

    if not deleted:
        console.print(f"[dim]not found:[/dim] {escape(key)}")
        raise SystemExit(1)
    console.print("[success]OK[/success]")


@click.command()
@click.pass_obj
def clear_command(obj: CachePoolContext) -> None:
    """Remove every entry from the configured store."""
    result = obj.pool.clear()
    if not result:
        console.print(f"[warning]clear incomplete[/warning] {escape(result.detail or '')}")
        raise SystemExit(2)
    console.print("[success]OK[/success]")
