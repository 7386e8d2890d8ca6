"""
Command-Line Options.

Cacti invokes the collector as:

    ss-get-by-ssh --host <host> [--port <port>] --items <code,...> [--url </path>] [--nocache]

Parsing is not getopt-style: Cacti may pass --port with no
value at all, and any --noX flag is a valueless boolean. Parsing and
validation are separate steps so the raw mapping can be inspected on its
own; validation produces the immutable Options record used downstream.
"""

from pydantic import BaseModel, ConfigDict

from sshstats.core.exceptions import UsageError

KNOWN_OPTIONS = ("host", "port", "items", "url", "nocache")
REQUIRED_OPTIONS = ("host", "items")

# Cacti passes this flag without a value when the data input field is empty.
VALUELESS_TOLERATED = "--port"

USAGE = """\
Usage: ss-get-by-ssh --host <host> --items <item,...> [OPTION]

   --host      Hostname to connect to
   --port      Port to connect to
   --items     Comma-separated list of the items whose data you want
   --url       The url, such as /server-status, where Apache status lives
   --nocache   Do not cache results in a file
"""


class Options(BaseModel):
    """Validated per-run options. Read-only after construction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str
    items: str
    port: int | None = None
    url: str | None = None
    nocache: bool = False

    @property
    def wanted_items(self) -> list[str]:
        """Requested item codes, in the order given."""
        return [item.strip() for item in self.items.split(",") if item.strip()]


def usage(message: str) -> str:
    """Build the usage text shown for a usage error."""
    return f"{message}\n{USAGE}"


def parse_cmdline(args: list[str]) -> dict[str, str | int]:
    """
    Parse --arg value --arg value into a mapping of arg to value.

    Args:
        args: argv tokens with the program name already stripped

    Returns:
        Mapping of option name (without leading dashes) to its value;
        --noX flags map X's full name, e.g. 'nocache', to 1.

    Raises:
        UsageError: If a flag is missing its value (a valueless --port is
            tolerated only when another flag follows it),
            or a value appears with no flag before it.
    """
    result: dict[str, str | int] = {}
    cur_arg = ""
    for val in args:
        if val.startswith("--"):
            if val.startswith("--no"):
                result[val[2:]] = 1
                cur_arg = ""
            elif cur_arg:
                if cur_arg != VALUELESS_TOLERATED:
                    raise UsageError(f"Missing argument to {cur_arg}")
                cur_arg = val
            else:
                cur_arg = val
        elif cur_arg:
            result[cur_arg[2:]] = val
            cur_arg = ""
        else:
            raise UsageError(f"Unexpected argument {val}")

    if cur_arg:
        raise UsageError(f"Missing argument to {cur_arg}")
    return result


def validate_options(raw: dict[str, str | int]) -> Options:
    """
    Validate a parsed option mapping.

    Raises:
        UsageError: On a missing required option, an unknown option,
            or a --port that is not a positive integer.
    """
    for option in REQUIRED_OPTIONS:
        if not raw.get(option):
            raise UsageError(f"Required option --{option} is missing")

    for key in raw:
        if key not in KNOWN_OPTIONS:
            raise UsageError(f"Unknown option --{key}")

    port = raw.get("port")
    if port is not None:
        port_text = str(port)
        if not (port_text.isascii() and port_text.isdigit()) or int(port_text) == 0:
            raise UsageError(f"Invalid value for --port: {port_text}")
        port = int(port_text)

    return Options(
        host=str(raw["host"]),
        items=str(raw["items"]),
        port=port,
        url=str(raw["url"]) if raw.get("url") else None,
        nocache="nocache" in raw,
    )
