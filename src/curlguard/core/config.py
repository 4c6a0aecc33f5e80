"""
Configuration management.

Loads settings from environment variables and .env file.
Prefix: CURLGUARD_

Only the hosting surfaces (CLI, tool wrapper) read these; the probe
pipeline itself receives an immutable ProbeLimits.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from curlguard.probe.policy import DEFAULT_LIMITS, ProbeLimits


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CURLGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Storage
    data_dir: Path = Field(default=Path("data"), description="Log and state directory")
    log_name: str = Field(default="curlguard.log", description="Log file name")

    # Execution
    timeout_seconds: float = Field(
        default=DEFAULT_LIMITS.timeout_seconds,
        gt=0,
        description="Wall-clock limit for one curl run",
    )
    max_output_bytes: int = Field(
        default=DEFAULT_LIMITS.max_output_bytes,
        gt=0,
        description="Combined stdout+stderr cap",
    )
    max_concurrent_requests: int = Field(
        default=4, ge=1, description="Concurrent probes allowed through the tool wrapper"
    )
    include_raw_stderr: bool = Field(
        default=False, description="Attach the raw diagnostic stream to responses"
    )

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.log_name

    def probe_limits(self) -> ProbeLimits:
        """Build the immutable limits used by the pipeline."""
        return DEFAULT_LIMITS.replace(
            timeout_seconds=self.timeout_seconds,
            max_output_bytes=self.max_output_bytes,
        )


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
