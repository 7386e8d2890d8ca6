"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has unknown fields or wrong types, a clear ValidationError is raised at
startup instead of a cryptic KeyError deep in the collector.

Unlike a server deployment, every field has a built-in default: the
collector is dropped into a Cacti scripts directory and must run even
when no settings file is present.

Each top-level class corresponds to one file in config/settings/:
    CollectorSchema  → collector.yaml
    LoggingSchema    → logging.yaml

All models are frozen. Configuration is built once at startup and
passed explicitly; nothing mutates it afterwards.
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid", frozen=True)


# =============================================================================
# collector.yaml
# =============================================================================


class SshSchema(_StrictBase):
    user: str = "cacti"
    port: int = Field(default=22, gt=0)
    identity: str = "/var/www/cacti/.ssh/id_rsa"


class CacheSchema(_StrictBase):
    dir: str = ""
    poll_time: int = Field(default=300, gt=0)


class ApacheSchema(_StrictBase):
    url: str = "/server-status"
    user_agent: str = "Cacti/1.0"
    fetch_timeout: int = Field(default=5, gt=0)
    command_timeout: float = Field(default=30.0, gt=0)


class CollectorSchema(_StrictBase):
    ssh: SshSchema = SshSchema()
    cache: CacheSchema = CacheSchema()
    apache: ApacheSchema = ApacheSchema()
    debug: bool = False


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool = True


class FileHandlerSchema(_StrictBase):
    enabled: bool = False
    path: str = "logs/collector.jsonl"
    max_bytes: int = 10485760
    backup_count: int = 5


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema = ConsoleHandlerSchema()
    file: FileHandlerSchema = FileHandlerSchema()


class LoggingSchema(_StrictBase):
    level: str = "WARNING"
    format: str = "console"
    handlers: HandlersSchema = HandlersSchema()
