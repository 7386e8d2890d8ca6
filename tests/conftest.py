"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Configuration isolation:
    Every test runs with SSHSTATS_CONFIG_DIR pointing at an empty temporary
    directory, so built-in defaults apply unless a test writes its own YAML
    files there. The lru_cache'd loaders are cleared before and after.

Remote access:
    No test ever runs ssh. FakeRunner records the commands it is given and
    returns a canned server-status page.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from sshstats.collector.runner import CommandResult
from sshstats.core.config import get_app_config, get_settings
from sshstats.core.config_schema import CollectorSchema


SAMPLE_STATUS = """\
Total Accesses: 500
Total kBytes: 2048
CPULoad: .0123
Uptime: 86400
ReqPerSec: .00578704
BytesPerSec: 24.2726
BytesPerReq: 4194.3
BusyWorkers: 7
IdleWorkers: 3
Scoreboard: _SRWKDCLGI..
"""


class FakeRunner:
    """CommandRunner that records calls and returns a fixed result."""

    def __init__(self, output: str = "", ok: bool = True, returncode: int | None = 0) -> None:
        self.output = output
        self.ok = ok
        self.returncode = returncode
        self.calls: list[list[str]] = []

    def run(self, args: list[str]) -> CommandResult:
        self.calls.append(list(args))
        return CommandResult(ok=self.ok, output=self.output, returncode=self.returncode)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    """Empty settings directory; tests may write collector.yaml/logging.yaml into it."""
    path = tmp_path / "settings"
    path.mkdir()
    return path


@pytest.fixture(autouse=True)
def _isolated_config(settings_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point configuration discovery at an empty directory and reset caches."""
    monkeypatch.setenv("SSHSTATS_CONFIG_DIR", str(settings_dir))
    monkeypatch.delenv("SSHSTATS_DEBUG", raising=False)
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture
def collector_config() -> CollectorSchema:
    """Collector settings with built-in defaults."""
    return CollectorSchema()


@pytest.fixture
def cached_config(tmp_path: Path) -> CollectorSchema:
    """Collector settings with caching enabled in a temporary directory."""
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    return CollectorSchema(cache={"dir": str(cache_dir), "poll_time": 300})


# =============================================================================
# Remote Access Fixtures
# =============================================================================


@pytest.fixture
def sample_status() -> str:
    """A representative server-status?auto page."""
    return SAMPLE_STATUS


@pytest.fixture
def fake_runner(sample_status: str) -> FakeRunner:
    """FakeRunner returning the sample status page."""
    return FakeRunner(output=sample_status)


@pytest.fixture
def fake_runner_factory() -> type[FakeRunner]:
    """Provide the FakeRunner class for tests that need custom output."""
    return FakeRunner
