"""
Output Formatting.

Metric names are shortened to two-character codes so the whole line fits
in the 1024 bytes Cactid and Spine read from a script. The table order
and the codes are what the Cacti data input method expects; changing
either breaks existing graphs.
"""

from decimal import Decimal

from sshstats.collector.apache import MetricSet

CODE_TABLE: tuple[tuple[str, str], ...] = (
    ("Requests", "a0"),
    ("Bytes_sent", "a1"),
    ("Idle_workers", "a2"),
    ("Busy_workers", "a3"),
    ("CPU_Load", "a4"),
    ("Waiting_for_connection", "a5"),
    ("Starting_up", "a6"),
    ("Reading_request", "a7"),
    ("Sending_reply", "a8"),
    ("Keepalive", "a9"),
    ("DNS_lookup", "aa"),
    ("Closing_connection", "ab"),
    ("Logging", "ac"),
    ("Gracefully_finishing", "ad"),
    ("Idle_cleanup", "ae"),
    ("Open_slot", "af"),
)


def _format_value(value: int | Decimal) -> str:
    # Fixed-point, never exponent notation.
    if isinstance(value, Decimal):
        return f"{value:f}"
    return str(value)


def format_metrics(metrics: MetricSet) -> str:
    """Serialize every metric as 'code:value', space-separated, in code table order."""
    return " ".join(f"{code}:{_format_value(getattr(metrics, name))}" for name, code in CODE_TABLE)


def filter_items(line: str, items: str | list[str]) -> str:
    """
    Keep only the tokens whose code was requested.

    Args:
        line: Space-separated 'code:value' tokens
        items: Comma-separated codes, or an already split list of codes

    Returns:
        The matching tokens in line order, space-separated
    """
    if isinstance(items, str):
        items = items.split(",")
    wanted = {item.strip() for item in items if item.strip()}
    return " ".join(token for token in line.split(" ") if token[:2] in wanted)
