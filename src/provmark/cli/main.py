# topmark:header:start
#
#   project      : ProvMark
#   file         : main.py
#   file_relpath : src/provmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ProvMark Click CLI.

Group-level options (verbosity, color, configuration, strategy) are resolved
once and placed into ``ctx.obj``; subcommands read them through the helpers in
`provmark.cli.cmd_common`.
"""

from __future__ import annotations

from pathlib import Path

import click

from provmark.backends import register_all_backends
from provmark.cli.commands.config import config_command
from provmark.cli.commands.embed import embed_command
from provmark.cli.commands.read import read_command
from provmark.cli.commands.regions import regions_command
from provmark.cli.commands.strip import strip_command
from provmark.cli.commands.version import version_command
from provmark.cli.console import ClickConsole
from provmark.cli.errors import translate_errors
from provmark.cli.options import common_verbose_options, resolve_verbosity
from provmark.config.logging import get_logger, resolve_env_log_level, setup_logging
from provmark.config.model import load_config
from provmark.core.types import Strategy

logger = get_logger(__name__)

register_all_backends()


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
    strategy: str | None,
    encoding: str | None,
) -> None:
    """Initialize shared state (verbosity, color, configuration) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed.
        config_path (Path | None): Explicit config file.
        strategy (str | None): Strategy override.
        encoding (str | None): Encoding override.
    """
    ctx.ensure_object(dict)

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    enable_color: bool = not no_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(
        enable_color=enable_color, verbosity=ctx.obj["verbosity_level"]
    )

    # Internal logging is configured from the environment only.
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env, color=enable_color)

    with translate_errors():
        ctx.obj["config"] = load_config(config_path, strategy=strategy, encoding=encoding)
    logger.debug("Effective configuration: %s", ctx.obj["config"])


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="ProvMark CLI: embed, read and strip C2PA manifests in HTML documents.",
)
@common_verbose_options
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read configuration from this TOML file (disables discovery).",
)
@click.option(
    "-s",
    "--strategy",
    type=click.Choice([s.value for s in Strategy], case_sensitive=False),
    default=None,
    help="Embedding strategy (overrides configuration).",
)
@click.option(
    "--encoding",
    default=None,
    help="Text encoding of HTML documents (overrides configuration).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_path: Path | None,
    strategy: str | None,
    encoding: str | None,
) -> None:
    """Entry point for the ProvMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_path=config_path,
        strategy=strategy,
        encoding=encoding,
    )

    if ctx.invoked_subcommand is None:
        console: ClickConsole = ctx.obj["console"]
        console.print("Hint: use 'provmark embed PATH --manifest FILE' to embed a manifest.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(read_command)

cli.add_command(embed_command)

cli.add_command(strip_command)

cli.add_command(regions_command)

if __name__ == "__main__":
    cli()
