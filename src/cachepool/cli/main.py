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
"""cachepool CLI — inspect drivers and operate on a configured pool."""

from __future__ import annotations

from pathlib import Path

import click

from cachepool.cache.manager import CacheManager
from cachepool.cache.pool import CachePool
from cachepool.cli.console import print_banner
from cachepool.config.properties.cache import CacheProperties
from cachepool.core.config import Config
from cachepool.kernel.exceptions import CachePoolException
from cachepool.logging.port import LoggingPort
from cachepool.logging.structlog_adapter import StructlogAdapter


class CachePoolContext:
    """Per-invocation state: the loaded config and a lazily built pool."""

    def __init__(self, config: Config, driver: str | None) -> None:
        self.config = config
        self.manager = CacheManager()
        self._driver = driver
        self._pool: CachePool | None = None

    @property
    def properties(self) -> CacheProperties:
        return self.config.bind(CacheProperties)

    @property
    def pool(self) -> CachePool:
        if self._pool is None:
            properties = self.properties
            try:
                self._pool = self.manager.get_instance(self._driver or properties.driver, properties)
            except CachePoolException as exc:
                raise click.ClickException(str(exc)) from exc
        return self._pool


def configure_logging(config: Config, port: LoggingPort | None = None) -> LoggingPort:
    """Configure *port* (structlog by default) from the cachepool.logging section."""
    logging_port: LoggingPort = port if port is not None else StructlogAdapter()
    logging_port.configure(config)
    return logging_port


class CachePoolCLI(click.Group):
    """Click group that shows the cachepool banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=CachePoolCLI)
@click.version_option(package_name="cachepool")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default="cachepool.yaml",
    show_default=True,
    help="YAML or TOML configuration file (ignored when missing).",
)
@click.option("--driver", default=None, help="Driver name, overrides cachepool.cache.driver.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, driver: str | None) -> None:
    """cachepool — pluggable cache pools over key/value stores."""
    config = Config.from_file(config_path)
    configure_logging(config)
    ctx.obj = CachePoolContext(config, driver)


from cachepool.cli.info import drivers_command, help_command, stats_command  # noqa: E402
from cachepool.cli.items import clear_command, delete_command, get_command, set_command  # noqa: E402

cli.add_command(drivers_command, name="drivers")
cli.add_command(help_command, name="help")
cli.add_command(stats_command, name="stats")
cli.add_command(get_command, name="get")
cli.add_command(set_command, name="set")
cli.add_command(delete_command, name="delete")
cli.add_command(clear_command, name="clear")
