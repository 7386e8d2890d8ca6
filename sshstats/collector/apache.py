"""
Apache Status Parser.

Parses the plain-text page served by mod_status at server-status?auto:

    Total Accesses: 12345
    Total kBytes: 6789
    CPULoad: .0123
    BusyWorkers: 7
    IdleWorkers: 3
    Scoreboard: _W_K.....

into a MetricSet of sixteen counters. Missing lines leave their counters
at zero, so an empty or garbled response yields an all-zero MetricSet
rather than an error.
"""

from collections import Counter
from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from sshstats.core.logging import get_logger

logger = get_logger(__name__)

Number = NonNegativeInt | Annotated[Decimal, Field(ge=0, allow_inf_nan=False)]

# Status page label -> metric name
STATUS_LABELS = {
    "Total Accesses": "Requests",
    "Total kBytes": "Bytes_sent",
    "CPULoad": "CPU_Load",
    "BusyWorkers": "Busy_workers",
    "IdleWorkers": "Idle_workers",
}

# Scoreboard character -> metric name
SCOREBOARD = {
    "_": "Waiting_for_connection",
    "S": "Starting_up",
    "R": "Reading_request",
    "W": "Sending_reply",
    "K": "Keepalive",
    "D": "DNS_lookup",
    "C": "Closing_connection",
    "L": "Logging",
    "G": "Gracefully_finishing",
    "I": "Idle_cleanup",
    ".": "Open_slot",
}

SCOREBOARD_LABEL = "Scoreboard"


class MetricSet(BaseModel):
    """The sixteen Apache metrics. Every field is always present; unknown names are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    Requests: Number = 0
    Bytes_sent: Number = 0
    Idle_workers: Number = 0
    Busy_workers: Number = 0
    CPU_Load: Number = 0
    Waiting_for_connection: NonNegativeInt = 0
    Starting_up: NonNegativeInt = 0
    Reading_request: NonNegativeInt = 0
    Sending_reply: NonNegativeInt = 0
    Keepalive: NonNegativeInt = 0
    DNS_lookup: NonNegativeInt = 0
    Closing_connection: NonNegativeInt = 0
    Logging: NonNegativeInt = 0
    Gracefully_finishing: NonNegativeInt = 0
    Idle_cleanup: NonNegativeInt = 0
    Open_slot: NonNegativeInt = 0


def to_number(raw: str) -> int | Decimal:
    """
    Convert a status value to a number.

    Values in exponential notation are tiny CPU loads indistinguishable
    from zero and become 0. Anything else that is not a finite,
    non-negative number also becomes 0.
    """
    text = raw.strip()
    if "e" in text.lower():
        return 0
    if text.isascii() and text.isdigit():
        return int(text)
    try:
        value = Decimal(text)
    except InvalidOperation:
        return 0
    if not value.is_finite() or value < 0:
        return 0
    return value


def tally_scoreboard(scoreboard: str) -> Counter:
    """Count workers per state. Characters outside the scoreboard table are skipped."""
    counts: Counter = Counter()
    for char in scoreboard:
        metric = SCOREBOARD.get(char)
        if metric is None:
            logger.debug("Unknown scoreboard character", char=char)
            continue
        counts[metric] += 1
    return counts


def parse_apache_status(text: str) -> MetricSet:
    """
    Parse server-status?auto output into a MetricSet.

    Args:
        text: Raw page text, possibly empty

    Returns:
        MetricSet with every metric populated, 0 where the page had no value
    """
    values: dict[str, int | Decimal] = {}
    for line in text.splitlines():
        label, sep, value = line.rstrip("\r").partition(": ")
        if not sep:
            continue
        if label in STATUS_LABELS:
            values[STATUS_LABELS[label]] = to_number(value)
        elif label == SCOREBOARD_LABEL:
            values.update(tally_scoreboard(value.strip()))
    return MetricSet(**values)
