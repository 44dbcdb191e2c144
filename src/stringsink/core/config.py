# src/stringsink/core/config.py
"""
Configuration schema and loading for stringsink.

Pydantic models validate every value; Dynaconf merges a YAML file with
STRINGSINK_* environment variables. All models are frozen.
"""

import codecs
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from stringsink.core.buffer import DEFAULT_MAX_CAPACITY


class SinkSettings(BaseModel):
    """Construction parameters for StringSink.

    Encoding and error handler are explicit settings rather than ambient
    interpreter state, so two sinks in one process can disagree safely.

    Example YAML:
        sink:
          initial_capacity: 65536
          max_capacity: 1073741824
          encoding: utf-8
          errors: surrogateescape
    """

    model_config = {"frozen": True}

    initial_capacity: int = Field(
        default=0,
        ge=0,
        description="Bytes allocated when the sink is created",
    )
    max_capacity: int = Field(
        default=DEFAULT_MAX_CAPACITY,
        ge=1,
        le=sys.maxsize,
        description="Size ceiling; growth beyond it raises AllocationError",
    )
    encoding: str = Field(
        default="utf-8",
        description="Codec for text arguments and string() (must be ASCII compatible)",
    )
    errors: str = Field(
        default="surrogateescape",
        description="Codec error handler used for encoding and decoding",
    )

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Encoding must be a known, ASCII-compatible codec."""
        try:
            name = codecs.lookup(v).name
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        if "\n".encode(name) != b"\n":
            raise ValueError(f"encoding {name!r} is not ASCII compatible")
        return name

    @field_validator("errors")
    @classmethod
    def validate_errors(cls, v: str) -> str:
        """Error handler must be registered with the codecs module."""
        try:
            codecs.lookup_error(v)
        except LookupError as e:
            raise ValueError(f"unknown error handler: {v}") from e
        return v

    @model_validator(mode="after")
    def validate_capacity_range(self) -> "SinkSettings":
        """initial_capacity cannot exceed max_capacity."""
        if self.initial_capacity > self.max_capacity:
            raise ValueError(f"initial_capacity ({self.initial_capacity}) exceeds max_capacity ({self.max_capacity})")
        return self


class BenchSettings(BaseModel):
    """Benchmark harness configuration.

    Example YAML:
        bench:
          scale: 0.1
          seed: 42
          suites: [putc, write_big]
    """

    model_config = {"frozen": True}

    scale: float = Field(
        default=1.0,
        gt=0,
        le=1.0,
        description="Fraction of each suite's full iteration count to run",
    )
    seed: int = Field(
        default=0,
        description="Seed for suites that draw random values",
    )
    suites: tuple[str, ...] = Field(
        default=(),
        description="Suites to run; empty means all",
    )

    @field_validator("suites")
    @classmethod
    def validate_suites(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Every named suite must exist."""
        from stringsink.bench import SUITES

        unknown = [name for name in v if name not in SUITES]
        if unknown:
            raise ValueError(f"unknown benchmark suites: {', '.join(unknown)} (available: {', '.join(SUITES)})")
        return v


class StringSinkSettings(BaseModel):
    """Top-level settings document."""

    model_config = {"frozen": True}

    sink: SinkSettings = Field(default_factory=SinkSettings)
    bench: BenchSettings = Field(default_factory=BenchSettings)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Root log level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.upper()
        return v


def load_settings(config_path: Path) -> StringSinkSettings:
    """Build StringSinkSettings from a YAML file and STRINGSINK_* variables.

    Environment variables beat the file, and the file beats model defaults.
    Nested keys use a double underscore: STRINGSINK_SINK__ENCODING=latin-1
    sets sink.encoding.

    Raises:
        FileNotFoundError: If config_path does not exist
        ValidationError: If the merged values fail validation
    """
    from dynaconf import Dynaconf

    # Dynaconf treats a missing settings file as empty
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    merged = Dynaconf(
        envvar_prefix="STRINGSINK",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    ).as_dict()

    loader_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    return StringSinkSettings(**{key.lower(): _lower_keys(value) for key, value in merged.items() if key not in loader_keys})


def _lower_keys(value: Any) -> Any:
    # Dynaconf upper-cases keys that arrive through environment variables
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
