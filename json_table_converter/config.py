"""Runtime settings for the JSON table converter."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ConverterConfig:
    """Converter settings.

    Reads from environment variables with the JTC_ prefix, or accepts
    explicit values.
    """

    delimiter: str = ","
    default_table_name: str = "my_table"
    output_dir: str = field(default_factory=tempfile.gettempdir)

    # On-screen preview only; exports are never truncated
    preview_rows: int = 20
    preview_chars: int = 50

    log_level: str = "INFO"

    def __post_init__(self):
        if len(self.delimiter) != 1 or self.delimiter in ('"', "\n", "\r"):
            raise ValueError(f"Invalid delimiter {self.delimiter!r}: expected one character other than quote or newline.")

    @classmethod
    def from_env(cls) -> ConverterConfig:
        """Load configuration from environment variables."""
        return cls(
            delimiter=os.getenv("JTC_DELIMITER", ","),
            default_table_name=os.getenv("JTC_TABLE_NAME", "my_table"),
            output_dir=os.getenv("JTC_OUTPUT_DIR", "") or tempfile.gettempdir(),
            preview_rows=int(os.getenv("JTC_PREVIEW_ROWS", "20")),
            preview_chars=int(os.getenv("JTC_PREVIEW_CHARS", "50")),
            log_level=os.getenv("JTC_LOG_LEVEL", "INFO").upper(),
        )


_config: Optional[ConverterConfig] = None


def get_config() -> ConverterConfig:
    """Get or create the singleton configuration."""
    global _config
    if _config is None:
        _config = ConverterConfig.from_env()
    return _config


def set_config(config: ConverterConfig) -> None:
    """Override the global configuration."""
    global _config
    _config = config
