#!/usr/bin/env python3
"""
Apache status collector for Cacti.

Fetches server-status?auto from a remote host over ssh and prints the
requested metrics as space-separated code:value tokens on stdout.

Usage:
    python cli.py --host web1 --items a0,a1,a3
    python cli.py --host web1 --port 2222 --items a5,a6,a7,a8 --url /status
    python cli.py --host web1 --items a0 --nocache

Item codes:
    a0 Requests               a8 Sending_reply
    a1 Bytes_sent             a9 Keepalive
    a2 Idle_workers           aa DNS_lookup
    a3 Busy_workers           ab Closing_connection
    a4 CPU_Load               ac Logging
    a5 Waiting_for_connection ad Gracefully_finishing
    a6 Starting_up            ae Idle_cleanup
    a7 Reading_request        af Open_slot
"""

import sys
from pathlib import Path

import click
import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from sshstats.collector.options import usage
from sshstats.collector.service import collect
from sshstats.core.config import get_app_config
from sshstats.core.exceptions import CacheError, ConfigurationError, UsageError
from sshstats.core.logging import get_logger, setup_logging


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("argv", nargs=-1, type=click.UNPROCESSED)
def main(argv: tuple[str, ...]) -> None:
    """
    Collect Apache status metrics from a remote host for Cacti.

    Options are parsed by the collector itself rather than by click:
    Cacti may pass --port with no value, and any --noX flag is a
    valueless boolean.
    """
    try:
        app_config = get_app_config()
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    config = app_config.collector
    setup_logging(level="DEBUG" if config.debug else None, config=app_config.logging)

    structlog.contextvars.bind_contextvars(source="cli")

    logger = get_logger(__name__)
    logger.debug("Collector invoked", argv=list(argv))

    try:
        output = collect(list(argv), config)
    except UsageError as e:
        click.echo(usage(e.message), err=True)
        sys.exit(1)
    except CacheError as e:
        logger.error("Cache failure", error=e.message, path=e.path)
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        sys.exit(1)

    click.echo(output, nl=False)


if __name__ == "__main__":
    main()
