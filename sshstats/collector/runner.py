"""
Remote Fetch Executor.

The status page is fetched by running wget on the monitored host itself
through ssh, so the collector needs neither an HTTP client nor network
access to the Apache port:

    ssh cacti@web1 -p 22 -i /var/www/cacti/.ssh/id_rsa \\
        wget -U Cacti/1.0 -q -O - -T 5 'http://localhost/server-status?auto'

Command execution goes through the CommandRunner protocol so tests can
substitute a fake for ssh.
"""

import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from sshstats.collector.options import Options
from sshstats.core.config_schema import CollectorSchema
from sshstats.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command execution."""

    ok: bool
    output: str
    returncode: int | None = None


class CommandRunner(Protocol):
    """Runs a command and reports its outcome. Implementations never raise for command failure."""

    def run(self, args: list[str]) -> CommandResult:
        ...


class SubprocessRunner:
    """CommandRunner that spawns a local process and captures its stdout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout

    def run(self, args: list[str]) -> CommandResult:
        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning("Command timed out", command=args[0], timeout=self.timeout)
            output = e.stdout or ""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            return CommandResult(ok=False, output=output)
        except OSError as e:
            logger.warning("Command could not be started", command=args[0], error=str(e))
            return CommandResult(ok=False, output="")

        if result.returncode != 0:
            logger.warning(
                "Command failed",
                command=args[0],
                exit_code=result.returncode,
                stderr=result.stderr.strip(),
            )
        return CommandResult(
            ok=result.returncode == 0,
            output=result.stdout,
            returncode=result.returncode,
        )


def build_status_url(config: CollectorSchema, options: Options) -> str:
    """URL of the status page as seen from the monitored host."""
    url = options.url or config.apache.url
    return f"http://localhost{url}?auto"


def build_ssh_command(config: CollectorSchema, options: Options) -> list[str]:
    """
    Build the ssh invocation that prints the remote status page on stdout.

    The remote part is a single shell-quoted string because ssh hands it
    to the remote user's shell.
    """
    port = options.port if options.port is not None else config.ssh.port
    cmd = ["ssh", f"{config.ssh.user}@{options.host}", "-p", str(port)]
    if config.ssh.identity:
        cmd += ["-i", config.ssh.identity]

    remote = [
        "wget",
        "-U", config.apache.user_agent,
        "-q",
        "-O", "-",
        "-T", str(config.apache.fetch_timeout),
        build_status_url(config, options),
    ]
    cmd.append(shlex.join(remote))
    return cmd


def fetch_status(config: CollectorSchema, options: Options, runner: CommandRunner) -> str:
    """
    Fetch the raw server-status?auto text.

    A failed fetch is not an error: whatever output was captured (often
    nothing) is returned and the parser reports zeros for missing lines.
    """
    cmd = build_ssh_command(config, options)
    logger.debug("Fetching status", command=shlex.join(cmd))

    result = runner.run(cmd)
    if not result.ok:
        logger.warning("Status fetch failed", host=options.host, exit_code=result.returncode)
    elif not result.output.strip():
        logger.warning("Status fetch returned no data", host=options.host)
    return result.output
