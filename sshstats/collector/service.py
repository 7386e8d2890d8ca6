"""
Collector Service.

ss_get_by_ssh() is the collector routine: cache check, remote fetch,
parse, format, cache write. It takes already validated Options and never
exits the process, so it can be called directly as a library function
(the equivalent of Cacti's script server calling into the script).

collect() is the whole command-line pipeline on top of it: parse argv,
validate, collect, then keep only the requested items.
"""

import structlog

from sshstats.collector.apache import parse_apache_status
from sshstats.collector.cache import ResultCache
from sshstats.collector.options import Options, parse_cmdline, validate_options
from sshstats.collector.output import filter_items, format_metrics
from sshstats.collector.runner import CommandRunner, SubprocessRunner, fetch_status
from sshstats.core.config_schema import CollectorSchema
from sshstats.core.logging import get_logger

logger = get_logger(__name__)


def get_stats_apache(config: CollectorSchema, options: Options, runner: CommandRunner) -> str:
    """Fetch, parse and format the Apache status of one host as the full 16-token line."""
    text = fetch_status(config, options, runner)
    return format_metrics(parse_apache_status(text))


def ss_get_by_ssh(
    options: Options,
    config: CollectorSchema,
    runner: CommandRunner | None = None,
    cache: ResultCache | None = None,
) -> str:
    """
    Return the full, unfiltered metric line for a host.

    Args:
        options: Validated per-run options
        config: Collector settings
        runner: Command runner for the ssh call. Defaults to a SubprocessRunner
            using the configured command timeout.
        cache: Result cache. Defaults to one built from the configured cache
            directory and poll interval.

    Returns:
        Space-separated 'code:value' tokens for all sixteen metrics

    Raises:
        CacheError: If caching is enabled and the cache file cannot be used.
    """
    if runner is None:
        runner = SubprocessRunner(timeout=config.apache.command_timeout)
    if cache is None:
        cache = ResultCache(config.cache.dir, config.cache.poll_time)

    def compute() -> str:
        return get_stats_apache(config, options, runner)

    with structlog.contextvars.bound_contextvars(host=options.host):
        if options.nocache or not cache.enabled:
            return compute()
        return cache.get_or_refresh(options.host, compute)


def collect(
    argv: list[str],
    config: CollectorSchema,
    runner: CommandRunner | None = None,
    cache: ResultCache | None = None,
) -> str:
    """
    Run the command-line pipeline and return the filtered output.

    Raises:
        UsageError: If argv is malformed or fails validation.
        CacheError: If caching is enabled and the cache file cannot be used.
    """
    options = validate_options(parse_cmdline(argv))
    logger.debug("Options validated", host=options.host, items=options.items)

    result = ss_get_by_ssh(options, config, runner=runner, cache=cache)
    return filter_items(result, options.wanted_items)
