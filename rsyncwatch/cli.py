"""
rsyncwatch CLI entry point
"""

import sys
import asyncio
import click

from rsyncwatch import __version__
from rsyncwatch.config.parser import ConfigParser
from rsyncwatch.exceptions import ConfigError, EventSourceError
from rsyncwatch.utils.logger import setup_logging


def _usage_error(message: str):
    ctx = click.get_current_context()
    click.echo(ctx.get_usage(), err=True)
    click.echo(f"Try '{ctx.command_path} -h' for help.\n", err=True)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('paths', nargs=-1, metavar='SOURCE DESTINATION')
@click.option(
    '-c', '--checksum',
    is_flag=True,
    help='Compare files by checksum instead of size and modification time'
)
@click.option(
    '-l', '--log-level',
    default='INFO',
    type=click.Choice(['DEBUG', 'INFO', 'WARN', 'ERROR'], case_sensitive=False),
    help='Log level [default: INFO]'
)
@click.option(
    '--log-format',
    default='text',
    type=click.Choice(['text', 'json'], case_sensitive=False),
    help='Log format [default: text]'
)
@click.option(
    '--poll',
    is_flag=True,
    help='Poll the source tree instead of using native notifications'
)
@click.option(
    '--poll-interval',
    default=1.0,
    type=float,
    help='Seconds between scans in polling mode [default: 1.0]'
)
@click.option(
    '--progress',
    is_flag=True,
    help='Show rsync transfer progress'
)
@click.option(
    '-e', '--exclude',
    type=str,
    metavar='PATTERN',
    help='Ignore changes to paths matching this regular expression'
)
@click.option(
    '-z', '--compress',
    is_flag=True,
    help='Compress file data during transfer'
)
@click.option(
    '--delete',
    is_flag=True,
    help='Remove destination entries missing from the source during the initial sync'
)
@click.version_option(version=__version__, prog_name='rsyncwatch')
def main(
    paths,
    checksum: bool,
    log_level: str,
    log_format: str,
    poll: bool,
    poll_interval: float,
    progress: bool,
    exclude: str,
    compress: bool,
    delete: bool
):
    """
    Mirror SOURCE into DESTINATION, then keep it in sync as files change.

    DESTINATION may be any rsync destination, including host:path.

    Examples:

    \b
    # mirror a local tree
    rsyncwatch ~/project /mnt/backup/project

    \b
    # remote destination, checksum comparison, skip VCS metadata
    rsyncwatch -c -e '/\\.git/' ~/project user@host:/srv/project
    """
    try:
        config = ConfigParser().parse(
            paths,
            checksum=checksum,
            progress=progress,
            compress=compress,
            delete=delete,
            exclude=exclude,
            poll=poll,
            poll_interval=poll_interval,
            log_level=log_level,
            log_format=log_format.lower(),
        )
    except ConfigError as e:
        _usage_error(str(e))

    logger = setup_logging(config.logging.level, config.logging.format)
    logger.info(
        "rsyncwatch starting",
        version=__version__,
        source=config.watch.source_root,
        destination=config.watch.dest_root
    )

    from rsyncwatch.core.engine import RsyncWatchEngine
    engine = RsyncWatchEngine(config, logger=logger)

    try:
        asyncio.run(engine.start())
    except KeyboardInterrupt:
        logger.info("Received shutdown signal, stopping...", stats=engine.get_stats())
    except EventSourceError as e:
        logger.error("Event subscription failed", error=str(e))
        sys.exit(1)


if __name__ == '__main__':
    main()
