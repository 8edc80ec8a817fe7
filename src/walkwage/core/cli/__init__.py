"""walkwage CLI — entry point for log, off, delete, stats and user commands."""

import click

from walkwage import __version__
from walkwage.core.utils.logging import LOG_LEVELS


@click.group()
@click.version_option(version=__version__, package_name="walkwage")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML/JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Where walk logs are stored.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Overrides logging.level from the config.",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, log_level: str | None) -> None:
    """walkwage — earn for your walks, pay for the days you skip."""
    from .common import domain_errors, load_config, setup_cli_logging

    with domain_errors():
        config = load_config(config_file, data_dir)
        setup_cli_logging(config, log_level)
    ctx.obj = config


# Register subcommands
from .log_cmd import delete, log, off
from .stats_cmd import stats
from .user_cmd import user

main.add_command(log)
main.add_command(off)
main.add_command(delete)
main.add_command(stats)
main.add_command(user)
