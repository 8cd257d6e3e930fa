"""Pydantic models for clipkeep configuration validation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AnalysisConfig(BaseModel):
    """Configuration for the HTML-vs-text analysis.

    Frozen after construction so one instance can be shared by every
    analysis call (and across threads) without locking.

    Example in config.json:
        "analysis": {
            "analysis_timeout_ms": 150,
            "log_analysis_details": true
        }
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    similarity_threshold: float = Field(
        default=0.95,
        ge=0.0,
        le=1.0,
        description="Similarity threshold (informational, not enforced directly)",
    )
    analysis_timeout_ms: int = Field(
        default=200,
        ge=1,
        le=60_000,
        description="Time budget for one budgeted analysis, in milliseconds",
    )
    max_content_size: int = Field(
        default=1024 * 1024,  # 1 MiB
        ge=1,
        description="Largest payload (bytes) eligible for budgeted analysis",
    )
    enable_app_detection: bool = Field(
        default=True,
        description="Detect the producing application from HTML markup",
    )
    enable_redundancy_scoring: bool = Field(
        default=True,
        description="Score vendor/chat markup indicators toward redundancy",
    )
    enable_office_tiers: bool = Field(
        default=False,
        description="Classify Office markup into redundancy tiers for the decision",
    )
    log_analysis_details: bool = Field(
        default=False,
        description="Log per-analysis details at INFO instead of DEBUG",
    )


class StorageConfig(BaseModel):
    """Configuration for the clipboard history database."""

    model_config = ConfigDict(extra="forbid")

    db_path: str | None = None
    """SQLite database path. None = ~/.clipkeep/clipboard_history.db."""


class CaptureConfig(BaseModel):
    """Configuration for the capture cycle."""

    model_config = ConfigDict(extra="forbid")

    preview_chars: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Maximum characters kept in a text preview",
    )


class LoggingConfig(BaseModel):
    """Configuration for log handlers installed by configure_logging()."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = "INFO"
    """Level for the rotating log file."""

    console_level: LogLevel = "WARNING"
    """Level for stderr output."""

    log_dir: str | None = None
    """Directory for clipkeep.log. None = ~/.clipkeep/logs."""


class Config(BaseModel):
    """Root configuration model.

    Example config.json:
        {
            "analysis": {"analysis_timeout_ms": 200, "enable_office_tiers": true},
            "storage": {"db_path": "~/clipboard.db"},
            "capture": {"preview_chars": 80},
            "logging": {"level": "DEBUG"}
        }
    """

    model_config = ConfigDict(extra="forbid")

    analysis: AnalysisConfig = AnalysisConfig()
    storage: StorageConfig = StorageConfig()
    capture: CaptureConfig = CaptureConfig()
    logging: LoggingConfig = LoggingConfig()
