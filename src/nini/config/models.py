"""Pydantic models for Nini configuration errors."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class ConfigFormatError(BaseModel):
    """Document is well-formed XML but not a valid configuration tree."""

    model_config = ConfigDict(extra="forbid")

    path: Path | None = None
    element: str | None = None
    message: str


class ConfigPreconditionError(BaseModel):
    """Operation needs a bound file path and none is set."""

    model_config = ConfigDict(extra="forbid")

    operation: str
    message: str


class ConfigXmlError(BaseModel):
    """XML parsing error in configuration source."""

    model_config = ConfigDict(extra="forbid")

    path: Path | None = None
    line: int | None = None
    column: int | None = None
    message: str


class ConfigNotFoundError(BaseModel):
    """Configuration file not found at expected location."""

    model_config = ConfigDict(extra="forbid")

    expected_path: Path
    message: str


type ConfigError = ConfigFormatError | ConfigPreconditionError | ConfigXmlError | ConfigNotFoundError
